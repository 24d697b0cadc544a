import asyncio

import pytest

from cbc_portal.data import DEMO_USER_ID
from cbc_portal.schemas.common import ListCriteria
from cbc_portal.services.dashboard import MemberDashboard
from cbc_portal.services.events import (
    ALREADY_REGISTERED_MESSAGE,
    EVENT_FULL_MESSAGE,
    EVENT_NOT_FOUND_MESSAGE,
    RSVP_NOT_FOUND_MESSAGE,
    EventCatalog,
    EventDetail,
    MemberEvents,
    RSVPService,
)
from cbc_portal.services.members import ProfileService
from cbc_portal.services.query import TableQuery
from cbc_portal.services.store import Snapshot


def _ids(page) -> list[str]:
    return [item.id for item in page.items]


@pytest.mark.asyncio
async def test_upcoming_lists_published_events_soonest_first(source, clock) -> None:
    page = await EventCatalog(source, clock=clock).load()

    assert _ids(page) == ["3", "4", "5"]
    assert page.total_count == 3
    assert page.error is None


@pytest.mark.asyncio
async def test_past_lists_most_recent_first(source, clock) -> None:
    page = await EventCatalog(source, clock=clock).load(timeframe="past")

    assert _ids(page) == ["2", "1", "6"]


@pytest.mark.asyncio
async def test_pages_beyond_the_end_are_empty(source, clock) -> None:
    catalog = EventCatalog(source, clock=clock, timeframe="all")

    second = await catalog.load(ListCriteria(page=2, page_size=4))
    third = await catalog.load(ListCriteria(page=3, page_size=4))

    assert len(second.items) == 2
    assert third.items == []
    assert third.total_count == 6


@pytest.mark.asyncio
async def test_type_filter_and_search(source, clock) -> None:
    catalog = EventCatalog(source, clock=clock, timeframe="all")

    workshops = await catalog.load(ListCriteria(filters={"event_type": "workshop"}))
    everything = await catalog.load(ListCriteria(filters={"event_type": "all"}))
    searched = await catalog.load(ListCriteria(search="main hall"))

    assert _ids(workshops) == ["1", "2"]
    assert everything.total_count == 6
    assert _ids(searched) == ["4"]


@pytest.mark.asyncio
async def test_detail_hides_unpublished_events(source) -> None:
    detail = EventDetail(source)

    hidden = await detail.get("7")
    shown = await detail.get("7", include_unpublished=True)

    assert hidden.not_found
    assert hidden.error == EVENT_NOT_FOUND_MESSAGE
    assert shown.entity.title == "Leads Planning Session"


@pytest.mark.asyncio
async def test_rsvp_twice_is_reported_as_already_registered(source) -> None:
    rsvps = RSVPService(source)

    first = await rsvps.rsvp("3", "5")
    second = await rsvps.rsvp("3", "5")

    assert first.success
    assert first.entity.status == "registered"
    assert not second.success
    assert second.error == ALREADY_REGISTERED_MESSAGE


@pytest.mark.asyncio
async def test_cancelled_rsvp_can_register_again(source, fixtures) -> None:
    rsvps = RSVPService(source)
    await rsvps.rsvp("3", "5")

    cancelled = await rsvps.cancel("3", "5")
    again = await rsvps.rsvp("3", "5")

    assert cancelled.entity.status == "cancelled"
    assert again.success
    assert again.entity.status == "registered"
    pair = [r for r in fixtures.rows("event_rsvps") if r["event_id"] == "3" and r["member_id"] == "5"]
    assert len(pair) == 1


@pytest.mark.asyncio
async def test_cancel_without_registration(source) -> None:
    result = await RSVPService(source).cancel("3", "2")

    assert result.error == RSVP_NOT_FOUND_MESSAGE


@pytest.mark.asyncio
async def test_full_event_rejects_new_registrations(source, fixtures) -> None:
    await fixtures.update("events", {"max_attendees": 1}, TableQuery("events").eq("id", "3").filters)
    rsvps = RSVPService(source)

    assert (await rsvps.rsvp("3", "5")).success
    assert (await rsvps.rsvp("3", "2")).error == EVENT_FULL_MESSAGE
    assert (await rsvps.rsvp("3", "5")).error == ALREADY_REGISTERED_MESSAGE

    await rsvps.cancel("3", "5")
    assert await rsvps.seats_taken("3") == 0
    assert (await rsvps.rsvp("3", "2")).success


@pytest.mark.asyncio
async def test_rsvp_for_unknown_event(source) -> None:
    result = await RSVPService(source).rsvp("missing", "5")

    assert result.error == EVENT_NOT_FOUND_MESSAGE


@pytest.mark.asyncio
async def test_member_events_split_by_timeframe(source, clock) -> None:
    store = MemberEvents(source, clock=clock)

    upcoming = await store.load_for(DEMO_USER_ID)
    past = await store.load_for(DEMO_USER_ID, "past")

    assert [item.event.id for item in upcoming.items] == ["4", "5"]
    assert [item.event.id for item in past.items] == ["1", "6"]
    assert {item.status for item in past.items} == {"attended"}


@pytest.mark.asyncio
async def test_member_events_refetch_reuses_last_request(source, clock) -> None:
    store = MemberEvents(source, clock=clock)
    await store.load_for(DEMO_USER_ID, "past")
    await RSVPService(source).cancel("1", DEMO_USER_ID)

    page = await store.refetch()

    assert [item.status for item in page.items] == ["cancelled", "attended"]


@pytest.mark.asyncio
async def test_superseded_load_never_writes_state(source, clock) -> None:
    store = EventCatalog(source, clock=clock)
    release = asyncio.Event()

    async def stale() -> Snapshot:
        await release.wait()
        return Snapshot(items=[], total_count=99)

    async def fresh() -> Snapshot:
        return Snapshot(items=[], total_count=1)

    first = asyncio.create_task(store.run_load(stale))
    await asyncio.sleep(0)
    applied = await store.run_load(fresh)
    release.set()

    assert applied is True
    assert await first is False
    assert store.total_count == 1
    assert store.is_loading is False


@pytest.mark.asyncio
async def test_newer_catalog_load_wins_over_slow_one(source, fixtures, clock, mocker) -> None:
    real_select = fixtures.select
    stalled = asyncio.Event()
    release = asyncio.Event()

    async def select(query):
        if query.table == "events" and query.search is None:
            stalled.set()
            await release.wait()
        return await real_select(query)

    mocker.patch.object(fixtures, "select", side_effect=select)
    catalog = EventCatalog(source, clock=clock)

    slow = asyncio.create_task(catalog.load(ListCriteria()))
    await stalled.wait()
    page = await catalog.load(ListCriteria(search="Hackathon"))
    release.set()
    stale_page = await slow

    assert _ids(page) == ["4"]
    assert [e.id for e in catalog.data] == ["4"]
    assert catalog.total_count == 1
    assert stale_page.total_count == 1
    assert catalog.is_loading is False


@pytest.mark.asyncio
async def test_event_starting_now_counts_as_upcoming_everywhere(source, fixtures, clock) -> None:
    event = await fixtures.insert(
        "events", {"title": "Live Now", "date": clock(), "is_published": True}
    )
    await fixtures.insert(
        "event_rsvps", {"event_id": event["id"], "member_id": DEMO_USER_ID, "status": "registered"}
    )
    member = (await ProfileService(source).get(DEMO_USER_ID)).entity

    catalog = await EventCatalog(source, clock=clock).load()
    mine = await MemberEvents(source, clock=clock).load_for(DEMO_USER_ID)
    past = await MemberEvents(source, clock=clock).load_for(DEMO_USER_ID, "past")
    dashboard = MemberDashboard(source, clock=clock)
    await dashboard.load_for(member)

    assert _ids(catalog)[0] == event["id"]
    assert mine.items[0].event.id == event["id"]
    assert event["id"] not in [item.event.id for item in past.items]
    assert dashboard.data[0].id == event["id"]
