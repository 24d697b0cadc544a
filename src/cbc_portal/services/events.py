"""Event listings, event details and RSVP management."""

from __future__ import annotations

import logging
from datetime import datetime

from cbc_portal.schemas.common import DetailResult, ListCriteria, MutationResult, Page
from cbc_portal.schemas.event import Event, EventRSVP, MemberEventRSVP, Timeframe
from cbc_portal.services.backend import DataSource
from cbc_portal.services.query import TableQuery
from cbc_portal.services.store import EntityStore, Snapshot, fetch_rows
from cbc_portal.services.table_client import TableError
from cbc_portal.utils.time import parse_timestamp

logger = logging.getLogger(__name__)

EVENTS_LOAD_FAILED_MESSAGE = "Failed to load events. Please try again."
EVENT_NOT_FOUND_MESSAGE = "Event not found"
ALREADY_REGISTERED_MESSAGE = "You have already registered for this event."
REGISTER_FAILED_MESSAGE = "Failed to register. Please try again."
EVENT_FULL_MESSAGE = "This event is full."
RSVP_NOT_FOUND_MESSAGE = "You are not registered for this event."
CANCEL_FAILED_MESSAGE = "Failed to cancel registration. Please try again."
END_BEFORE_START_MESSAGE = "End date cannot be before the start date."

EVENT_SEARCH_COLUMNS = ("title", "description", "location")


def validate_schedule(start: datetime | None, end: datetime | None) -> str | None:
    """Return an error message when the end timestamp precedes the start."""
    if start is None or end is None:
        return None
    start_at, end_at = parse_timestamp(start), parse_timestamp(end)
    if start_at and end_at and end_at < start_at:
        return END_BEFORE_START_MESSAGE
    return None


def timeframe_query(query: TableQuery, timeframe: Timeframe, now: datetime) -> TableQuery:
    """Restrict ``query`` to upcoming or past events and order it for display."""
    if timeframe == "upcoming":
        return query.where("date", "gte", now).order_by("date")
    if timeframe == "past":
        return query.where("date", "lt", now).order_by("date", descending=True)
    return query.order_by("date")


class EventCatalog(EntityStore[Event]):
    """Published events for the public events page."""

    table = "events"
    model = Event
    load_error_message = EVENTS_LOAD_FAILED_MESSAGE

    def __init__(self, source: DataSource, *, timeframe: Timeframe = "upcoming", **kwargs) -> None:
        super().__init__(source, **kwargs)
        self.timeframe: Timeframe = timeframe

    async def load(
        self, criteria: ListCriteria | None = None, *, timeframe: Timeframe | None = None
    ) -> Page[Event]:
        if timeframe is not None:
            self.timeframe = timeframe
        criteria = criteria or ListCriteria(page_size=self.page_size)
        query = self.filtered(self.query().eq("is_published", True), criteria)
        query = query.matching(criteria.search, *EVENT_SEARCH_COLUMNS)
        query = timeframe_query(query, self.timeframe, self.clock())
        return await self.load_query(query, criteria)


class EventDetail:
    """Single event lookup."""

    def __init__(self, source: DataSource) -> None:
        self.source = source
        self.event: Event | None = None
        self.error: str | None = None

    async def get(self, event_id: str, *, include_unpublished: bool = False) -> DetailResult[Event]:
        query = TableQuery("events").eq("id", event_id)
        if not include_unpublished:
            query = query.eq("is_published", True)
        try:
            result = await fetch_rows(self.source, query.one())
        except TableError as exc:
            self.event = None
            if exc.is_not_found:
                self.error = EVENT_NOT_FOUND_MESSAGE
                return DetailResult(not_found=True, error=self.error)
            logger.error("Error fetching event %s: %s", event_id, exc, exc_info=True)
            self.error = "Failed to load event details."
            return DetailResult(error=self.error)

        self.event = Event.model_validate(result.rows[0])
        self.error = None
        return DetailResult(entity=self.event)


class RSVPService:
    """Registration and cancellation of a member's attendance."""

    table = "event_rsvps"

    def __init__(self, source: DataSource) -> None:
        self.source = source
        self.is_loading = False

    def _pair(self, event_id: str, member_id: str) -> TableQuery:
        return TableQuery(self.table).eq("event_id", event_id).eq("member_id", member_id)

    async def seats_taken(self, event_id: str) -> int:
        """Count RSVPs that still hold a seat."""
        query = TableQuery(self.table).eq("event_id", event_id).where("status", "neq", "cancelled")
        result = await self.source.backend.select(query.counted().paginate(1, 1))
        return result.count or 0

    async def rsvp(self, event_id: str, member_id: str) -> MutationResult[EventRSVP]:
        """Register ``member_id`` for ``event_id``.

        A second registration is reported as already registered; a previously
        cancelled RSVP is switched back to ``registered``.
        """
        self.is_loading = True
        try:
            return await self._register(event_id, member_id)
        except TableError as exc:
            logger.error("Error RSVPing to event %s: %s", event_id, exc, exc_info=True)
            return MutationResult.fail(REGISTER_FAILED_MESSAGE)
        finally:
            self.is_loading = False

    async def _register(self, event_id: str, member_id: str) -> MutationResult[EventRSVP]:
        detail = await EventDetail(self.source).get(event_id)
        if detail.entity is None:
            return MutationResult.fail(detail.error or EVENT_NOT_FOUND_MESSAGE)
        event = detail.entity

        if event.max_attendees is not None and await self.seats_taken(event_id) >= event.max_attendees:
            existing = await self._existing(event_id, member_id)
            if existing is not None and existing.status != "cancelled":
                return MutationResult.fail(ALREADY_REGISTERED_MESSAGE)
            return MutationResult.fail(EVENT_FULL_MESSAGE)

        try:
            stored = await self.source.backend.insert(
                self.table,
                {"event_id": event_id, "member_id": member_id, "status": "registered"},
            )
        except TableError as exc:
            if not exc.is_conflict:
                raise
            existing = await self._existing(event_id, member_id)
            if existing is None or existing.status != "cancelled":
                return MutationResult.fail(ALREADY_REGISTERED_MESSAGE)
            rows = await self.source.backend.update(
                self.table, {"status": "registered"}, self._pair(event_id, member_id).filters
            )
            logger.info("Member %s re-registered for event %s", member_id, event_id)
            return MutationResult.ok(EventRSVP.model_validate(rows[0]))

        logger.info("Member %s registered for event %s", member_id, event_id)
        return MutationResult.ok(EventRSVP.model_validate(stored))

    async def _existing(self, event_id: str, member_id: str) -> EventRSVP | None:
        result = await self.source.backend.select(self._pair(event_id, member_id))
        return EventRSVP.model_validate(result.rows[0]) if result.rows else None

    async def cancel(self, event_id: str, member_id: str) -> MutationResult[EventRSVP]:
        try:
            rows = await self.source.backend.update(
                self.table, {"status": "cancelled"}, self._pair(event_id, member_id).filters
            )
        except TableError as exc:
            logger.error("Error cancelling RSVP for event %s: %s", event_id, exc, exc_info=True)
            return MutationResult.fail(CANCEL_FAILED_MESSAGE)
        if not rows:
            return MutationResult.fail(RSVP_NOT_FOUND_MESSAGE)
        return MutationResult.ok(EventRSVP.model_validate(rows[0]))


class MemberEvents(EntityStore[MemberEventRSVP]):
    """A member's own RSVPs joined with their events."""

    table = "event_rsvps"
    model = MemberEventRSVP
    load_error_message = "Failed to load events"

    member_id: str | None = None
    timeframe: Timeframe = "upcoming"

    async def load_for(self, member_id: str, timeframe: Timeframe = "upcoming") -> Page[MemberEventRSVP]:
        """Load RSVPs of ``member_id`` whose event is upcoming or past."""
        self.member_id = member_id
        self.timeframe = timeframe

        async def loader() -> Snapshot[MemberEventRSVP]:
            rsvps = await self.fetch(self.query().eq("member_id", member_id))
            event_ids = [row["event_id"] for row in rsvps.rows]
            events: dict[str, Event] = {}
            degraded = rsvps.degraded
            if event_ids:
                found = await self.fetch(TableQuery("events").in_("id", event_ids))
                events = {row["id"]: Event.model_validate(row) for row in found.rows}
                degraded = degraded or found.degraded

            now = self.clock()
            items = []
            for row in rsvps.rows:
                event = events.get(row["event_id"])
                if event is None:
                    continue
                upcoming = event.date >= now
                if timeframe == "upcoming" and not upcoming:
                    continue
                if timeframe == "past" and upcoming:
                    continue
                items.append(MemberEventRSVP(
                    id=row["id"], event=event, status=row["status"], created_at=row["created_at"]
                ))
            items.sort(key=lambda item: item.event.date, reverse=timeframe == "past")
            return Snapshot(items=items, total_count=len(items), degraded=degraded)

        await self.run_load(loader)
        return self.current_page()

    async def refetch(self) -> Page[MemberEventRSVP]:
        if self.member_id is None:
            return self.current_page()
        return await self.load_for(self.member_id, self.timeframe)
