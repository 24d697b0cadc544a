"""Project showcase and member-owned projects."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cbc_portal.schemas.common import DetailResult, ListCriteria, MutationResult, Page
from cbc_portal.schemas.project import Project, ProjectInput, ProjectWithTeam, TeamMember
from cbc_portal.services.backend import DataSource
from cbc_portal.services.query import TableQuery
from cbc_portal.services.store import EntityStore, Snapshot, fetch_rows
from cbc_portal.services.table_client import TableError
from cbc_portal.utils.text import blank_to_none, initials

logger = logging.getLogger(__name__)

PROJECTS_LOAD_FAILED_MESSAGE = "Failed to load projects. Please try again."
PROJECT_NOT_FOUND_MESSAGE = "Project not found"
LOGIN_REQUIRED_CREATE_MESSAGE = "You must be logged in to create a project"
LOGIN_REQUIRED_DELETE_MESSAGE = "You must be logged in to delete a project"
TITLE_REQUIRED_MESSAGE = "Project title is required"
CREATE_FAILED_MESSAGE = "Failed to create project. Please try again."
DELETE_FAILED_MESSAGE = "Failed to delete project. Please try again."
NOT_OWNER_MESSAGE = "Only the project owner can delete this project."

PROJECT_SEARCH_COLUMNS = ("title", "description")


def showcase_query() -> TableQuery:
    """Featured projects first, newest first within each group."""
    return (
        TableQuery("projects")
        .order_by("is_featured", descending=True)
        .order_by("created_at", descending=True)
    )


async def attach_teams(source: DataSource, projects: Sequence[Project]) -> list[ProjectWithTeam]:
    """Join each project with its contributors' names, owners first."""
    if not projects:
        return []
    links = await fetch_rows(
        source, TableQuery("project_members").in_("project_id", [p.id for p in projects])
    )
    member_ids = sorted({row["member_id"] for row in links.rows})
    names: dict[str, str] = {}
    if member_ids:
        members = await fetch_rows(source, TableQuery("members").in_("id", member_ids))
        names = {row["id"]: row["full_name"] for row in members.rows}

    teams: dict[str, list[tuple[bool, TeamMember]]] = {}
    for row in links.rows:
        name = names.get(row["member_id"])
        if name is None:
            continue
        entry = TeamMember(initials=initials(name), name=name)
        teams.setdefault(row["project_id"], []).append((row.get("role") != "owner", entry))

    enriched = []
    for project in projects:
        team = [entry for _, entry in sorted(teams.get(project.id, []), key=lambda pair: pair[0])]
        enriched.append(ProjectWithTeam(**project.model_dump(exclude={"team"}), team=team))
    return enriched


class ProjectShowcase(EntityStore[ProjectWithTeam]):
    """Public project showcase with category filter."""

    table = "projects"
    model = ProjectWithTeam
    load_error_message = PROJECTS_LOAD_FAILED_MESSAGE

    async def _with_teams(self, items: list[ProjectWithTeam]) -> list[ProjectWithTeam]:
        return await attach_teams(self.source, items)

    async def load(self, criteria: ListCriteria | None = None) -> Page[ProjectWithTeam]:
        criteria = criteria or ListCriteria(page_size=self.page_size)
        query = self.filtered(showcase_query(), criteria)
        query = query.matching(criteria.search, *PROJECT_SEARCH_COLUMNS)
        return await self.load_query(query, criteria, enrich=self._with_teams)


class ProjectDetail:
    """Single project lookup with its team."""

    def __init__(self, source: DataSource) -> None:
        self.source = source

    async def get(self, project_id: str) -> DetailResult[ProjectWithTeam]:
        try:
            result = await fetch_rows(self.source, TableQuery("projects").eq("id", project_id).one())
            project = Project.model_validate(result.rows[0])
            [with_team] = await attach_teams(self.source, [project])
        except TableError as exc:
            if exc.is_not_found:
                return DetailResult(not_found=True, error=PROJECT_NOT_FOUND_MESSAGE)
            logger.error("Error fetching project %s: %s", project_id, exc, exc_info=True)
            return DetailResult(error="Failed to load project details.")
        return DetailResult(entity=with_team)


class MemberProjects(EntityStore[Project]):
    """Projects a member belongs to, with create and delete."""

    table = "projects"
    model = Project
    load_error_message = "Failed to load projects"

    member_id: str | None = None

    async def load_for(self, member_id: str) -> Page[Project]:
        self.member_id = member_id

        async def loader() -> Snapshot[Project]:
            links = await self.fetch(TableQuery("project_members").eq("member_id", member_id))
            project_ids = [row["project_id"] for row in links.rows]
            if not project_ids:
                return Snapshot(degraded=links.degraded)
            found = await self.fetch(
                self.query().in_("id", project_ids).order_by("created_at", descending=True)
            )
            items = self.parse(found.rows)
            return Snapshot(
                items=items, total_count=len(items), degraded=links.degraded or found.degraded
            )

        await self.run_load(loader)
        return self.current_page()

    async def refetch(self) -> Page[Project]:
        if self.member_id is None:
            return self.current_page()
        return await self.load_for(self.member_id)

    async def create(self, member_id: str | None, payload: ProjectInput) -> MutationResult[Project]:
        """Create a project and register ``member_id`` as its owner.

        The project row is removed again if the owner membership cannot be
        recorded.
        """
        if not member_id:
            return MutationResult.fail(LOGIN_REQUIRED_CREATE_MESSAGE)
        title = payload.title.strip()
        if not title:
            return MutationResult.fail(TITLE_REQUIRED_MESSAGE)

        row = {
            "title": title,
            "description": blank_to_none(payload.description),
            "category": blank_to_none(payload.category),
            "github_url": blank_to_none(payload.github_url),
            "demo_url": blank_to_none(payload.demo_url),
            "tech_stack": payload.tech_stack or None,
            "image_url": blank_to_none(payload.image_url),
            "is_featured": False,
        }
        try:
            stored = await self.source.backend.insert(self.table, row)
        except TableError as exc:
            return self.fail(CREATE_FAILED_MESSAGE, exc)
        project = Project.model_validate(stored)

        try:
            await self.source.backend.insert(
                "project_members",
                {"project_id": project.id, "member_id": member_id, "role": "owner"},
            )
        except TableError as exc:
            logger.warning("Owner membership for project %s failed; rolling back", project.id)
            try:
                await self.source.backend.delete(self.table, self.query().eq("id", project.id).filters)
            except TableError as rollback_exc:
                logger.error(
                    "Rollback of project %s failed: %s", project.id, rollback_exc, exc_info=True
                )
            return self.fail(CREATE_FAILED_MESSAGE, exc)

        self.cache.insert(project)
        self.total_count += 1
        logger.info("Member %s created project %s", member_id, project.id)
        return MutationResult.ok(project)

    async def delete(self, member_id: str | None, project_id: str) -> MutationResult[Project]:
        """Delete a project owned by ``member_id``; team links go with it."""
        if not member_id:
            return MutationResult.fail(LOGIN_REQUIRED_DELETE_MESSAGE)
        try:
            links = await self.source.backend.select(
                TableQuery("project_members")
                .eq("project_id", project_id)
                .eq("member_id", member_id)
            )
            if not links.rows:
                return MutationResult.fail(PROJECT_NOT_FOUND_MESSAGE)
            if links.rows[0].get("role") != "owner":
                logger.warning(
                    "Member %s tried to delete project %s without owning it", member_id, project_id
                )
                return MutationResult.fail(NOT_OWNER_MESSAGE)
            rows = await self.source.backend.delete(
                self.table, self.query().eq("id", project_id).filters
            )
        except TableError as exc:
            return self.fail(DELETE_FAILED_MESSAGE, exc)

        removed = self.cache.remove(project_id)
        if removed is not None:
            self.total_count = max(0, self.total_count - 1)
        if not rows and removed is None:
            return MutationResult.fail(PROJECT_NOT_FOUND_MESSAGE)
        logger.info("Member %s deleted project %s", member_id, project_id)
        return MutationResult.ok(Project.model_validate(rows[0]) if rows else removed)
