# tests/test_table_client.py
from datetime import UTC, datetime

import httpx
import pytest

from cbc_portal.services.backend import DataSource, build_data_source
from cbc_portal.services.fixture_store import FixtureTableBackend
from cbc_portal.services.query import TableQuery
from cbc_portal.services.store import fetch_rows
from cbc_portal.services.table_client import (
    BackendNotConfiguredError,
    RemoteTableClient,
    TableClientConfig,
    TableError,
    TableTransportError,
    encode_filter,
    encode_query,
)

CONFIG = TableClientConfig(rest_url="https://db.test/rest/v1", anon_key="anon-key", timeout_seconds=1.0)


def _client(handler, **kwargs) -> RemoteTableClient:
    return RemoteTableClient(CONFIG, transport=httpx.MockTransport(handler), **kwargs)


def test_encode_query_builds_postgrest_params() -> None:
    now = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
    query = (
        TableQuery("events")
        .eq("is_published", True)
        .where("date", "gte", now)
        .matching("ai", "title", "description")
        .order_by("date")
        .paginate(2, 5)
    )

    assert encode_query(query) == [
        ("select", "*"),
        ("is_published", "eq.true"),
        ("date", "gte.2026-03-01T12:00:00+00:00"),
        ("or", "(title.ilike.*ai*,description.ilike.*ai*)"),
        ("order", "date.asc.nullslast"),
        ("offset", "5"),
        ("limit", "5"),
    ]


def test_encode_filter_handles_lists_and_null() -> None:
    assert encode_filter(TableQuery("t").in_("id", ["1", "2"]).filters[0]) == ("id", 'in.("1","2")')
    assert encode_filter(TableQuery("t").eq("end_date", None).filters[0]) == ("end_date", "is.null")


@pytest.mark.asyncio
async def test_select_sends_keys_and_parses_exact_count() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(206, json=[{"id": "1"}, {"id": "2"}], headers={"content-range": "0-1/7"})

    client = _client(handler)
    result = await client.select(TableQuery("events").counted().paginate(1, 2))
    await client.close()

    assert [row["id"] for row in result.rows] == ["1", "2"]
    assert result.count == 7
    request = seen[0]
    assert request.url.path == "/rest/v1/events"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["authorization"] == "Bearer anon-key"
    assert request.headers["prefer"] == "count=exact"


@pytest.mark.asyncio
async def test_bound_access_token_replaces_anon_key() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    client = _client(handler)
    client.bind_access_token(lambda: "user-token")
    await client.select(TableQuery("members"))

    assert seen[0].headers["authorization"] == "Bearer user-token"


@pytest.mark.asyncio
async def test_range_past_the_end_is_an_empty_page() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(416, json={"code": "PGRST103"}, headers={"content-range": "*/7"})

    result = await _client(handler).select(TableQuery("events").counted().paginate(5, 10))

    assert result.rows == []
    assert result.count == 7


@pytest.mark.asyncio
async def test_error_payload_becomes_table_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"code": "23505", "message": "duplicate key"})

    with pytest.raises(TableError) as exc_info:
        await _client(handler).insert("subscribers", {"email": "a@b.co"})

    assert exc_info.value.is_conflict
    assert exc_info.value.message == "duplicate key"


@pytest.mark.asyncio
async def test_server_errors_are_transport_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    with pytest.raises(TableTransportError):
        await _client(handler).select(TableQuery("events"))


@pytest.mark.asyncio
async def test_writes_ask_for_representation_and_serialize_datetimes() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": "1", "title": "New"}])

    rows = await _client(handler).update(
        "articles",
        {"title": "New", "updated_at": datetime(2026, 3, 1, tzinfo=UTC)},
        TableQuery("articles").eq("id", "1").filters,
    )

    assert rows == [{"id": "1", "title": "New"}]
    request = seen[0]
    assert request.method == "PATCH"
    assert request.url.params["id"] == "eq.1"
    assert request.headers["prefer"] == "return=representation"
    assert b'"updated_at":"2026-03-01T00:00:00+00:00"' in request.content.replace(b" ", b"")


@pytest.mark.asyncio
async def test_unconfigured_client_refuses_requests() -> None:
    client = RemoteTableClient(TableClientConfig(rest_url=None, anon_key=None, timeout_seconds=1.0))

    with pytest.raises(BackendNotConfiguredError):
        await client.select(TableQuery("events"))


def test_missing_configuration_selects_fixture_store() -> None:
    source = build_data_source(TableClientConfig(rest_url=None, anon_key="k", timeout_seconds=1.0))

    assert not source.configured
    assert source.backend is source.fixtures


def test_configuration_selects_remote_client() -> None:
    source = build_data_source(CONFIG)

    assert source.configured
    assert isinstance(source.backend, RemoteTableClient)


@pytest.mark.asyncio
async def test_failed_remote_read_degrades_to_fixtures() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    source = DataSource(backend=_client(handler), fixtures=FixtureTableBackend())

    result = await fetch_rows(source, TableQuery("events").eq("id", "1"))

    assert result.degraded
    assert result.rows[0]["title"] == "Introduction to Claude AI"


@pytest.mark.asyncio
async def test_missing_single_row_is_not_degraded() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(406, json={"code": "PGRST116", "message": "no rows"})

    source = DataSource(backend=_client(handler), fixtures=FixtureTableBackend())

    with pytest.raises(TableError) as exc_info:
        await fetch_rows(source, TableQuery("articles").eq("slug", "getting-started-with-claude-api").one())

    assert exc_info.value.is_not_found
