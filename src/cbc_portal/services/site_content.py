"""Editable site content: features, leadership team, partners, milestones, stats and copy.

Public readers list active rows in display order and localize them for the
reader's language. Admin managers list every row, drafts included, and keep
their local list in step with each create, update and delete.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel

from cbc_portal.schemas.common import MutationResult, Page
from cbc_portal.schemas.site_content import (
    PARTNER_TIER_RANK,
    BilingualModel,
    Feature,
    Milestone,
    Partner,
    SiteContent,
    SiteContentInput,
    SiteStat,
    TeamProfile,
)
from cbc_portal.services.query import Row, TableQuery
from cbc_portal.services.store import EntityStore, Snapshot
from cbc_portal.services.table_client import NO_ROWS, TableError
from cbc_portal.utils.text import blank_to_none

logger = logging.getLogger(__name__)

ContentT = TypeVar("ContentT", bound=BilingualModel)

FEATURE_REQUIRED_MESSAGE = "Title and description are required"
TEAM_MEMBER_REQUIRED_MESSAGE = "Name and role are required"
PARTNER_REQUIRED_MESSAGE = "Partner name is required"
MILESTONE_REQUIRED_MESSAGE = "Title and date are required"
STAT_REQUIRED_MESSAGE = "Stat label is required"
CONTENT_KEY_REQUIRED_MESSAGE = "Content key is required"
CONTENT_NOT_FOUND_MESSAGE = "Content not found"
CONTENT_SAVE_FAILED_MESSAGE = "Failed to save content"
CONTENT_DELETE_FAILED_MESSAGE = "Failed to delete content"


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip() or None
    return value


class ContentStore(EntityStore[ContentT]):
    """Rows of one content table in display order."""

    display_order: ClassVar[tuple[str, ...]] = ("sort_order",)
    active_only: ClassVar[bool] = False

    def sort_key(self, item: ContentT) -> tuple[Any, ...]:
        return tuple(getattr(item, column) for column in self.display_order)

    def arrange(self, items: list[ContentT]) -> list[ContentT]:
        return sorted(items, key=self.sort_key)

    def display_query(self) -> TableQuery:
        query = self.query()
        if self.active_only:
            query = query.eq("is_active", True)
        for column in self.display_order:
            query = query.order_by(column)
        return query

    async def load_content(self) -> Page[ContentT]:
        """Load the whole table; content lists are short and never paged."""

        async def loader() -> Snapshot[ContentT]:
            result = await self.fetch(self.display_query())
            items = self.arrange(self.parse(result.rows))
            return Snapshot(items=items, total_count=len(items), degraded=result.degraded)

        await self.run_load(loader)
        return self.current_page()

    async def refetch(self) -> Page[ContentT]:
        return await self.load_content()

    def localized(self, locale: str) -> Page[ContentT]:
        page = self.current_page()
        return page.model_copy(update={"items": [item.localize(locale) for item in page.items]})


class ContentEditor(ContentStore[ContentT]):
    """Content table whose rows admins can edit in place."""

    label: ClassVar[str] = "item"
    required: ClassVar[tuple[str, ...]] = ()
    required_message: ClassVar[str] = ""

    @property
    def not_found_message(self) -> str:
        return f"{self.label.capitalize()} not found"

    def missing_required(self, values: Mapping[str, Any], *, partial: bool = False) -> bool:
        for column in self.required:
            if partial and column not in values:
                continue
            if _clean(values.get(column)) is None:
                return True
        return False

    def _patch(self, changes: BaseModel) -> dict[str, Any]:
        # null only clears columns that are nullable on the row model
        fields = self.model.model_fields
        patch = {}
        for key, value in changes.model_dump(exclude_unset=True).items():
            value = _clean(value)
            if value is None and fields[key].default is not None:
                continue
            patch[key] = value
        return patch

    async def update(self, item_id: str, changes: BaseModel) -> MutationResult[ContentT]:
        if self.missing_required(changes.model_dump(exclude_unset=True), partial=True):
            return MutationResult.fail(self.required_message)
        patch = self._patch(changes)
        try:
            if patch:
                rows = await self.source.backend.update(
                    self.table, patch, self.query().eq("id", item_id).filters
                )
            else:
                rows = (await self.source.backend.select(self.query().eq("id", item_id))).rows
        except TableError as exc:
            return self.fail(f"Failed to update {self.label}", exc)
        if not rows:
            return MutationResult.fail(self.not_found_message)

        item = self.model.model_validate(rows[0])
        if self.cache.patch(item_id, item.model_dump()) is not None:
            self.cache.replace(self.arrange(self.data))
        logger.info("Updated %s %s", self.label, item_id)
        return MutationResult.ok(item)


class ContentManager(ContentEditor[ContentT]):
    """Content table with admin create, update and delete."""

    async def create(self, payload: BaseModel) -> MutationResult[ContentT]:
        row = {key: _clean(value) for key, value in payload.model_dump().items()}
        if self.missing_required(row):
            return MutationResult.fail(self.required_message)
        try:
            stored = await self.source.backend.insert(self.table, row)
        except TableError as exc:
            return self.fail(f"Failed to create {self.label}", exc)

        item = self.model.model_validate(stored)
        self.cache.insert(item, at_start=False)
        self.cache.replace(self.arrange(self.data))
        self.total_count += 1
        logger.info("Created %s %s", self.label, item.id)
        return MutationResult.ok(item)

    async def delete(self, item_id: str) -> MutationResult[ContentT]:
        try:
            rows = await self.source.backend.delete(self.table, self.query().eq("id", item_id).filters)
        except TableError as exc:
            return self.fail(f"Failed to delete {self.label}", exc)
        if not rows:
            return MutationResult.fail(self.not_found_message)
        if self.cache.remove(item_id) is not None:
            self.total_count = max(0, self.total_count - 1)
        logger.info("Deleted %s %s", self.label, item_id)
        return MutationResult.ok(self.model.model_validate(rows[0]))


class FeatureList(ContentStore[Feature]):
    table = "features"
    model = Feature
    load_error_message = "Failed to load features"
    active_only = True


class FeatureManager(ContentManager[Feature]):
    table = "features"
    model = Feature
    load_error_message = "Failed to load features"
    label = "feature"
    required = ("title_en", "description_en")
    required_message = FEATURE_REQUIRED_MESSAGE


class TeamDirectory(ContentStore[TeamProfile]):
    table = "team_members"
    model = TeamProfile
    load_error_message = "Failed to load team members"
    active_only = True


class TeamManager(ContentManager[TeamProfile]):
    table = "team_members"
    model = TeamProfile
    load_error_message = "Failed to load team members"
    label = "team member"
    required = ("name", "role_en")
    required_message = TEAM_MEMBER_REQUIRED_MESSAGE


class PartnerOrdering:
    """Highest tier first, then ``sort_order`` within a tier."""

    display_order: ClassVar[tuple[str, ...]] = ("tier", "sort_order")

    def sort_key(self, item: Partner) -> tuple[Any, ...]:
        return PARTNER_TIER_RANK.get(item.tier, len(PARTNER_TIER_RANK)), item.sort_order


class PartnerList(PartnerOrdering, ContentStore[Partner]):
    table = "partners"
    model = Partner
    load_error_message = "Failed to load partners"
    active_only = True


class PartnerManager(PartnerOrdering, ContentManager[Partner]):
    table = "partners"
    model = Partner
    load_error_message = "Failed to load partners"
    label = "partner"
    required = ("name",)
    required_message = PARTNER_REQUIRED_MESSAGE


class MilestoneTimeline(ContentStore[Milestone]):
    table = "milestones"
    model = Milestone
    load_error_message = "Failed to load milestones"
    display_order = ("date",)
    active_only = True


class MilestoneManager(ContentManager[Milestone]):
    table = "milestones"
    model = Milestone
    load_error_message = "Failed to load milestones"
    display_order = ("date",)
    label = "milestone"
    required = ("title_en", "date")
    required_message = MILESTONE_REQUIRED_MESSAGE


class SiteStatBoard(ContentStore[SiteStat]):
    table = "site_stats"
    model = SiteStat
    load_error_message = "Failed to load stats"
    active_only = True


class SiteStatManager(ContentEditor[SiteStat]):
    """Headline counters; admins edit values and labels but never add or remove them."""

    table = "site_stats"
    model = SiteStat
    load_error_message = "Failed to load stats"
    label = "stat"
    required = ("label_en",)
    required_message = STAT_REQUIRED_MESSAGE


class SiteCopy(EntityStore[SiteContent]):
    """Translated page copy looked up by key."""

    table = "site_content"
    model = SiteContent
    load_error_message = "Failed to load site content"

    category: str | None = None

    async def load_category(self, category: str | None = None) -> Page[SiteContent]:
        self.category = category
        query = self.query() if category is None else self.query().eq("category", category)

        async def loader() -> Snapshot[SiteContent]:
            result = await self.fetch(query.order_by("key"))
            items = self.parse(result.rows)
            return Snapshot(items=items, total_count=len(items), degraded=result.degraded)

        await self.run_load(loader)
        return self.current_page()

    async def refetch(self) -> Page[SiteContent]:
        return await self.load_category(self.category)

    def text(self, key: str, locale: str, fallback: str | None = None) -> str:
        """Copy for ``key`` in ``locale``, else English, else ``fallback``, else the key."""
        values = {(item.key, item.language): item.value for item in self.data}
        return values.get((key, locale)) or values.get((key, "en")) or fallback or key

    def texts(self, locale: str) -> dict[str, str]:
        return {key: self.text(key, locale) for key in sorted({item.key for item in self.data})}


class SiteCopyManager(EntityStore[SiteContent]):
    """Every copy entry, grouped by category then key, with save and delete."""

    table = "site_content"
    model = SiteContent
    load_error_message = "Failed to load site content"

    @staticmethod
    def _sort_key(item: SiteContent) -> tuple[str, str, str]:
        return item.category or "", item.key, item.language

    async def load_all(self) -> Page[SiteContent]:
        async def loader() -> Snapshot[SiteContent]:
            result = await self.fetch(self.query().order_by("category").order_by("key"))
            items = sorted(self.parse(result.rows), key=self._sort_key)
            return Snapshot(items=items, total_count=len(items), degraded=result.degraded)

        await self.run_load(loader)
        return self.current_page()

    async def refetch(self) -> Page[SiteContent]:
        return await self.load_all()

    async def _save(self, row: Row) -> tuple[Row, bool]:
        try:
            return await self.source.backend.insert(self.table, row), True
        except TableError as exc:
            if not exc.is_conflict:
                raise
        rows = await self.source.backend.update(
            self.table,
            {"value": row["value"], "category": row["category"]},
            self.query().eq("key", row["key"]).eq("language", row["language"]).filters,
        )
        if not rows:
            raise TableError(CONTENT_NOT_FOUND_MESSAGE, code=NO_ROWS, status=404)
        return rows[0], False

    async def upsert(self, payload: SiteContentInput) -> MutationResult[SiteContent]:
        """Save the copy for ``key`` in one language, replacing any existing entry."""
        key = payload.key.strip()
        if not key:
            return MutationResult.fail(CONTENT_KEY_REQUIRED_MESSAGE)
        row = {
            "key": key,
            "language": payload.language,
            "value": payload.value,
            "category": blank_to_none(payload.category),
        }
        try:
            stored, created = await self._save(row)
        except TableError as exc:
            return self.fail(CONTENT_SAVE_FAILED_MESSAGE, exc)

        item = SiteContent.model_validate(stored)
        self.cache.insert(item, at_start=False)
        self.cache.replace(sorted(self.data, key=self._sort_key))
        if created:
            self.total_count += 1
        logger.info("Saved site content %s (%s)", key, payload.language)
        return MutationResult.ok(item)

    async def delete(self, content_id: str) -> MutationResult[SiteContent]:
        try:
            rows = await self.source.backend.delete(self.table, self.query().eq("id", content_id).filters)
        except TableError as exc:
            return self.fail(CONTENT_DELETE_FAILED_MESSAGE, exc)
        if not rows:
            return MutationResult.fail(CONTENT_NOT_FOUND_MESSAGE)
        if self.cache.remove(content_id) is not None:
            self.total_count = max(0, self.total_count - 1)
        return MutationResult.ok(SiteContent.model_validate(rows[0]))
