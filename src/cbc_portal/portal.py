# src/cbc_portal/portal.py
"""Composition root wiring the data source, identity and preferences."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeVar

from cbc_portal.core.settings import settings
from cbc_portal.services.auth_provider import (
    AuthProvider,
    FixtureAuthProvider,
    RemoteAuthProvider,
)
from cbc_portal.services.backend import DataSource, build_data_source
from cbc_portal.services.identity import IdentityContext
from cbc_portal.services.locale import LocalePreference
from cbc_portal.services.members import ProfileService
from cbc_portal.services.store import EntityStore
from cbc_portal.services.table_client import RemoteTableClient
from cbc_portal.utils.time import utcnow

logger = logging.getLogger(__name__)

StoreT = TypeVar("StoreT", bound=EntityStore[Any])


@dataclass
class Portal:
    """Everything a page needs, built once at startup."""

    source: DataSource
    identity: IdentityContext
    locale: LocalePreference
    page_size: int = field(default_factory=lambda: settings.default_page_size)
    clock: Callable[[], datetime] = utcnow

    def store(self, store_cls: type[StoreT], **kwargs: Any) -> StoreT:
        """Create a fresh store bound to the portal's data source."""
        kwargs.setdefault("page_size", self.page_size)
        kwargs.setdefault("clock", self.clock)
        return store_cls(self.source, **kwargs)

    async def start(self) -> None:
        self.locale.load()
        await self.identity.restore()

    async def close(self) -> None:
        for resource in (self.source.backend, self.identity.provider):
            close = getattr(resource, "close", None)
            if close is not None:
                await close()


def build_portal(
    *,
    source: DataSource | None = None,
    auth_provider: AuthProvider | None = None,
    locale: LocalePreference | None = None,
    clock: Callable[[], datetime] = utcnow,
) -> Portal:
    """Wire the portal from settings; fixtures stand in for a missing backend."""

    source = source or build_data_source()
    if auth_provider is None:
        auth_provider = RemoteAuthProvider() if source.configured else FixtureAuthProvider()

    identity = IdentityContext(auth_provider, ProfileService(source))
    if isinstance(source.backend, RemoteTableClient):
        source.backend.bind_access_token(identity.access_token)

    logger.info(
        "Portal ready (%s backend)", "hosted" if source.configured else "fixture"
    )
    return Portal(
        source=source,
        identity=identity,
        locale=locale or LocalePreference(),
        clock=clock,
    )
