# tests/test_fixture_store.py
import pytest

from cbc_portal.data import DEMO_USER_ID
from cbc_portal.services.fixture_store import FixtureTableBackend
from cbc_portal.services.query import TableQuery
from cbc_portal.services.table_client import TableError


@pytest.mark.asyncio
async def test_insert_fills_id_and_timestamps(fixtures: FixtureTableBackend, clock) -> None:
    stored = await fixtures.insert("subscribers", {"email": "new@ur.ac.rw"})

    assert stored["id"]
    assert stored["subscribed_at"] == clock().isoformat()
    assert any(row["email"] == "new@ur.ac.rw" for row in fixtures.rows("subscribers"))


@pytest.mark.asyncio
async def test_unique_violation_reports_conflict_code(fixtures: FixtureTableBackend) -> None:
    with pytest.raises(TableError) as exc_info:
        await fixtures.insert("members", {"email": "kaio@ur.ac.rw", "full_name": "Copy"})

    assert exc_info.value.code == "23505"
    assert exc_info.value.is_conflict


@pytest.mark.asyncio
async def test_single_row_read_without_match_is_not_found(fixtures: FixtureTableBackend) -> None:
    with pytest.raises(TableError) as exc_info:
        await fixtures.select(TableQuery("articles").eq("slug", "does-not-exist").one())

    assert exc_info.value.is_not_found
    assert exc_info.value.status == 406


@pytest.mark.asyncio
async def test_update_returns_changed_rows(fixtures: FixtureTableBackend) -> None:
    rows = await fixtures.update(
        "members", {"status": "approved"}, TableQuery("members").eq("status", "pending").filters
    )

    assert sorted(row["id"] for row in rows) == ["3", "4"]
    pending = await fixtures.select(TableQuery("members").eq("status", "pending"))
    assert pending.rows == []


@pytest.mark.asyncio
async def test_article_update_touches_updated_at(fixtures: FixtureTableBackend, clock) -> None:
    [row] = await fixtures.update("articles", {"title": "Renamed"}, TableQuery("articles").eq("id", "1").filters)

    assert row["updated_at"] == clock().isoformat()
    assert row["slug"] == "getting-started-with-claude-api"


@pytest.mark.asyncio
async def test_update_cannot_create_duplicate_keys(fixtures: FixtureTableBackend) -> None:
    with pytest.raises(TableError):
        await fixtures.update(
            "articles",
            {"slug": "getting-started-with-claude-api"},
            TableQuery("articles").eq("id", "2").filters,
        )


@pytest.mark.asyncio
async def test_deleting_member_cascades_to_dependents(fixtures: FixtureTableBackend) -> None:
    removed = await fixtures.delete("members", TableQuery("members").eq("id", DEMO_USER_ID).filters)

    assert [row["id"] for row in removed] == [DEMO_USER_ID]
    assert not [r for r in fixtures.rows("event_rsvps") if r["member_id"] == DEMO_USER_ID]
    assert not [r for r in fixtures.rows("project_members") if r["member_id"] == DEMO_USER_ID]
    assert not [r for r in fixtures.rows("articles") if r["author_id"] == DEMO_USER_ID]
    assert len(fixtures.rows("members")) == 5


@pytest.mark.asyncio
async def test_delete_without_match_returns_nothing(fixtures: FixtureTableBackend) -> None:
    assert await fixtures.delete("events", TableQuery("events").eq("id", "missing").filters) == []
    assert len(fixtures.rows("events")) == 7


def test_stores_do_not_share_seed_rows() -> None:
    first, second = FixtureTableBackend(), FixtureTableBackend()

    first._tables["members"].clear()

    assert len(second.rows("members")) == 6
