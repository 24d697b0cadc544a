"""Back-office stores for club admins and leads."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from cbc_portal.core.settings import settings
from cbc_portal.schemas.common import AdminStats, MutationResult
from cbc_portal.schemas.event import Event, EventInput, EventUpdate
from cbc_portal.schemas.member import Member, MemberRole, MemberStatus
from cbc_portal.schemas.project import Project
from cbc_portal.services.events import EVENT_NOT_FOUND_MESSAGE, validate_schedule
from cbc_portal.services.query import TableQuery
from cbc_portal.services.store import EntityStore, Snapshot, count_rows
from cbc_portal.services.table_client import TableError
from cbc_portal.utils.text import blank_to_none

logger = logging.getLogger(__name__)

STATS_LOAD_FAILED_MESSAGE = "Failed to load dashboard data"
MEMBER_NOT_FOUND_MESSAGE = "Member not found"
STATUS_UPDATE_FAILED_MESSAGE = "Failed to update member status"
ROLE_UPDATE_FAILED_MESSAGE = "Failed to update member role"
BULK_UPDATE_FAILED_MESSAGE = "Failed to update members"
EVENT_TITLE_REQUIRED_MESSAGE = "Event title is required"
EVENT_DATE_REQUIRED_MESSAGE = "Event date is required"
EVENT_CREATE_FAILED_MESSAGE = "Failed to create event"
EVENT_UPDATE_FAILED_MESSAGE = "Failed to update event"
EVENT_DELETE_FAILED_MESSAGE = "Failed to delete event"
PROJECT_NOT_FOUND_MESSAGE = "Project not found"
PROJECT_UPDATE_FAILED_MESSAGE = "Failed to update project"
PROJECT_DELETE_FAILED_MESSAGE = "Failed to delete project"


class AdminOverview(EntityStore[Member]):
    """Summary counters plus the most recent pending applications.

    ``data`` holds the pending-application preview.
    """

    table = "members"
    model = Member
    load_error_message = STATS_LOAD_FAILED_MESSAGE

    def __init__(self, *args: Any, preview_limit: int | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.preview_limit = preview_limit or settings.pending_preview_limit
        self.stats = AdminStats()

    async def load_stats(self) -> AdminStats:
        """Count members, events, projects and subscribers concurrently."""
        members = TableQuery("members")
        new_stats: dict[str, int] = {}

        async def loader() -> Snapshot[Member]:
            counts = await asyncio.gather(
                count_rows(self.source, members),
                count_rows(self.source, members.eq("status", "pending")),
                count_rows(self.source, members.eq("status", "approved")),
                count_rows(self.source, TableQuery("events").where("date", "gte", self.clock())),
                count_rows(self.source, TableQuery("projects")),
                count_rows(self.source, TableQuery("subscribers")),
            )
            new_stats.update(zip(AdminStats.model_fields, counts, strict=True))
            recent = await self.fetch(
                members.eq("status", "pending")
                .order_by("created_at", descending=True)
                .paginate(1, self.preview_limit)
            )
            items = self.parse(recent.rows)
            return Snapshot(items=items, total_count=new_stats["pending_members"], degraded=recent.degraded)

        if await self.run_load(loader):
            self.stats = AdminStats(**new_stats)
        return self.stats


class AdminMemberDirectory(EntityStore[Member]):
    """Searchable, filterable member list with status and role changes."""

    table = "members"
    model = Member
    load_error_message = "Failed to load members"
    search_columns = ("full_name", "email")

    async def _set(self, member_id: str, changes: dict[str, Any], failure: str) -> MutationResult[Member]:
        try:
            rows = await self.source.backend.update(
                self.table, changes, self.query().eq("id", member_id).filters
            )
        except TableError as exc:
            return self.fail(failure, exc)
        if not rows:
            return MutationResult.fail(MEMBER_NOT_FOUND_MESSAGE)
        member = Member.model_validate(rows[0])
        self.cache.patch(member_id, changes)
        return MutationResult.ok(member)

    async def update_status(self, member_id: str, status: MemberStatus) -> MutationResult[Member]:
        result = await self._set(member_id, {"status": status}, STATUS_UPDATE_FAILED_MESSAGE)
        if result.success:
            logger.info("Member %s status set to %s", member_id, status)
        return result

    async def update_role(self, member_id: str, role: MemberRole) -> MutationResult[Member]:
        result = await self._set(member_id, {"role": role}, ROLE_UPDATE_FAILED_MESSAGE)
        if result.success:
            logger.info("Member %s role set to %s", member_id, role)
        return result

    async def bulk_update_status(
        self, member_ids: Iterable[str], status: MemberStatus
    ) -> MutationResult[list[Member]]:
        """Apply ``status`` to every id in one update.

        Rows that were updated are patched locally even when some ids were
        not; any shortfall is reported as one aggregate error.
        """
        requested = list(dict.fromkeys(member_ids))
        if not requested:
            return MutationResult.ok([])
        try:
            rows = await self.source.backend.update(
                self.table, {"status": status}, self.query().in_("id", requested).filters
            )
        except TableError as exc:
            return self.fail(BULK_UPDATE_FAILED_MESSAGE, exc)

        updated = [Member.model_validate(row) for row in rows]
        for member in updated:
            self.cache.patch(member.id, {"status": status})

        missing = [member_id for member_id in requested if member_id not in {m.id for m in updated}]
        if missing:
            logger.warning("Bulk status update skipped %d of %d members", len(missing), len(requested))
            return MutationResult(
                success=False,
                error=(
                    f"{BULK_UPDATE_FAILED_MESSAGE}: {len(missing)} of {len(requested)} "
                    f"could not be updated ({', '.join(missing)})"
                ),
                entity=updated,
            )
        logger.info("Bulk status update set %d members to %s", len(updated), status)
        return MutationResult.ok(updated)


class AdminEventManager(EntityStore[Event]):
    """All events, drafts included, newest first, with create/update/delete."""

    table = "events"
    model = Event
    load_error_message = "Failed to load events"
    search_columns = ("title", "location")
    order_column = "date"

    def _resort(self) -> None:
        self.cache.replace(sorted(self.data, key=lambda event: event.date, reverse=True))

    async def create(self, payload: EventInput) -> MutationResult[Event]:
        title = payload.title.strip()
        if not title:
            return MutationResult.fail(EVENT_TITLE_REQUIRED_MESSAGE)
        if payload.date is None:
            return MutationResult.fail(EVENT_DATE_REQUIRED_MESSAGE)
        problem = validate_schedule(payload.date, payload.end_date)
        if problem:
            return MutationResult.fail(problem)

        row = payload.model_dump()
        row.update(
            title=title,
            description=blank_to_none(payload.description),
            location=blank_to_none(payload.location),
            image_url=blank_to_none(payload.image_url),
        )
        try:
            stored = await self.source.backend.insert(self.table, row)
        except TableError as exc:
            return self.fail(EVENT_CREATE_FAILED_MESSAGE, exc)

        event = Event.model_validate(stored)
        self.cache.insert(event)
        self._resort()
        self.total_count += 1
        logger.info("Created event %s (%s)", event.id, event.title)
        return MutationResult.ok(event)

    async def _current(self, event_id: str) -> Event | None:
        cached = self.cache.get(event_id)
        if cached is not None:
            return cached
        result = await self.source.backend.select(self.query().eq("id", event_id))
        return Event.model_validate(result.rows[0]) if result.rows else None

    async def update(self, event_id: str, changes: EventUpdate) -> MutationResult[Event]:
        patch = changes.model_dump(exclude_unset=True)
        if "title" in patch and not (patch["title"] or "").strip():
            return MutationResult.fail(EVENT_TITLE_REQUIRED_MESSAGE)
        if "date" in patch and patch["date"] is None:
            return MutationResult.fail(EVENT_DATE_REQUIRED_MESSAGE)

        try:
            if "date" in patch or "end_date" in patch:
                current = await self._current(event_id)
                if current is None:
                    return MutationResult.fail(EVENT_NOT_FOUND_MESSAGE)
                problem = validate_schedule(
                    patch.get("date", current.date), patch.get("end_date", current.end_date)
                )
                if problem:
                    return MutationResult.fail(problem)
            rows = await self.source.backend.update(
                self.table, patch, self.query().eq("id", event_id).filters
            )
        except TableError as exc:
            return self.fail(EVENT_UPDATE_FAILED_MESSAGE, exc)
        if not rows:
            return MutationResult.fail(EVENT_NOT_FOUND_MESSAGE)

        event = Event.model_validate(rows[0])
        self.cache.patch(event_id, event.model_dump())
        self._resort()
        return MutationResult.ok(event)

    async def delete(self, event_id: str) -> MutationResult[Event]:
        try:
            rows = await self.source.backend.delete(self.table, self.query().eq("id", event_id).filters)
        except TableError as exc:
            return self.fail(EVENT_DELETE_FAILED_MESSAGE, exc)
        if not rows:
            return MutationResult.fail(EVENT_NOT_FOUND_MESSAGE)
        if self.cache.remove(event_id) is not None:
            self.total_count = max(0, self.total_count - 1)
        logger.info("Deleted event %s", event_id)
        return MutationResult.ok(Event.model_validate(rows[0]))


class AdminProjectManager(EntityStore[Project]):
    """All projects with featured toggle and deletion."""

    table = "projects"
    model = Project
    load_error_message = "Failed to load projects"
    search_columns = ("title", "description")

    async def toggle_featured(self, project_id: str, is_featured: bool) -> MutationResult[Project]:
        try:
            rows = await self.source.backend.update(
                self.table, {"is_featured": is_featured}, self.query().eq("id", project_id).filters
            )
        except TableError as exc:
            return self.fail(PROJECT_UPDATE_FAILED_MESSAGE, exc)
        if not rows:
            return MutationResult.fail(PROJECT_NOT_FOUND_MESSAGE)
        self.cache.patch(project_id, {"is_featured": is_featured})
        return MutationResult.ok(Project.model_validate(rows[0]))

    async def delete(self, project_id: str) -> MutationResult[Project]:
        try:
            rows = await self.source.backend.delete(self.table, self.query().eq("id", project_id).filters)
        except TableError as exc:
            return self.fail(PROJECT_DELETE_FAILED_MESSAGE, exc)
        if not rows:
            return MutationResult.fail(PROJECT_NOT_FOUND_MESSAGE)
        if self.cache.remove(project_id) is not None:
            self.total_count = max(0, self.total_count - 1)
        return MutationResult.ok(Project.model_validate(rows[0]))
