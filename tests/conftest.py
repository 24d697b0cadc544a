# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import UTC, datetime

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cbc_portal.main import app as fastapi_app
from cbc_portal.portal import Portal, build_portal
from cbc_portal.services.auth_provider import FixtureAuthProvider
from cbc_portal.services.backend import DataSource
from cbc_portal.services.fixture_store import FixtureTableBackend
from cbc_portal.services.locale import LocalePreference

# Between the February and the March/April fixture events
NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def clock() -> Callable[[], datetime]:
    return lambda: NOW


@pytest.fixture()
def fixtures(clock: Callable[[], datetime]) -> FixtureTableBackend:
    return FixtureTableBackend(clock=clock)


@pytest.fixture()
def source(fixtures: FixtureTableBackend) -> DataSource:
    return DataSource.offline(fixtures)


@pytest.fixture()
def locale(tmp_path) -> LocalePreference:
    return LocalePreference(tmp_path / "preferences.json", default="en")


def _portal(source: DataSource, locale: LocalePreference, clock, *, signed_in: bool) -> Portal:
    return build_portal(
        source=source,
        auth_provider=FixtureAuthProvider(signed_in=signed_in),
        locale=locale,
        clock=clock,
    )


@pytest.fixture()
def portal(source: DataSource, locale: LocalePreference, clock) -> Portal:
    return _portal(source, locale, clock, signed_in=True)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


def _serve(app: FastAPI, portal: Portal) -> Iterator[TestClient]:
    app.state.portal = portal
    try:
        with TestClient(app, base_url="http://test") as test_client:
            yield test_client
    finally:
        del app.state.portal


@pytest.fixture()
def client(app: FastAPI, portal: Portal) -> Iterator[TestClient]:
    """Client whose portal starts signed in as the demo admin."""
    yield from _serve(app, portal)


@pytest.fixture()
def anonymous_client(
    app: FastAPI, source: DataSource, locale: LocalePreference, clock
) -> Iterator[TestClient]:
    yield from _serve(app, _portal(source, locale, clock, signed_in=False))
