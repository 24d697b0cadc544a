"""A signed-in member's own dashboard."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from cbc_portal.schemas.common import DashboardStats
from cbc_portal.schemas.event import Event
from cbc_portal.schemas.member import Member
from cbc_portal.schemas.project import Project
from cbc_portal.services.query import TableQuery
from cbc_portal.services.store import EntityStore, Snapshot, count_rows
from cbc_portal.utils.time import month_year

logger = logging.getLogger(__name__)


class MemberDashboard(EntityStore[Event]):
    """Upcoming registered events, projects and activity counters.

    ``data`` holds the upcoming events, soonest first.
    """

    table = "events"
    model = Event
    load_error_message = "Failed to load dashboard data"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.projects: list[Project] = []
        self.stats = DashboardStats()

    async def _upcoming(self, member_id: str) -> tuple[list[Event], bool]:
        rsvps = await self.fetch(
            TableQuery("event_rsvps").eq("member_id", member_id).eq("status", "registered")
        )
        event_ids = [row["event_id"] for row in rsvps.rows]
        if not event_ids:
            return [], rsvps.degraded
        found = await self.fetch(
            self.query().in_("id", event_ids).where("date", "gte", self.clock()).order_by("date")
        )
        return self.parse(found.rows), rsvps.degraded or found.degraded

    async def _projects(self, member_id: str) -> tuple[list[Project], bool]:
        links = await self.fetch(TableQuery("project_members").eq("member_id", member_id))
        project_ids = [row["project_id"] for row in links.rows]
        if not project_ids:
            return [], links.degraded
        found = await self.fetch(
            TableQuery("projects").in_("id", project_ids).order_by("created_at", descending=True)
        )
        return [Project.model_validate(row) for row in found.rows], links.degraded or found.degraded

    async def load_for(self, member: Member) -> DashboardStats:
        """Load everything the dashboard overview shows for ``member``."""
        loaded: dict[str, Any] = {}

        async def loader() -> Snapshot[Event]:
            (events, events_degraded), (projects, projects_degraded), attended = await asyncio.gather(
                self._upcoming(member.id),
                self._projects(member.id),
                count_rows(
                    self.source,
                    TableQuery("event_rsvps").eq("member_id", member.id).eq("status", "attended"),
                ),
            )
            loaded["projects"] = projects
            loaded["attended"] = attended
            return Snapshot(
                items=events,
                total_count=len(events),
                degraded=events_degraded or projects_degraded,
            )

        if await self.run_load(loader):
            self.projects = loaded["projects"]
            self.stats = DashboardStats(
                events_attended=loaded["attended"],
                projects_count=len(self.projects),
                member_since=month_year(member.joined_at),
            )
            logger.debug("Dashboard loaded for member %s", member.id)
        return self.stats
