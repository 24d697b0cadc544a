"""Selection of the table backend used by every store."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cbc_portal.services.fixture_store import FixtureTableBackend
from cbc_portal.services.table_client import (
    RemoteTableClient,
    TableBackend,
    TableClientConfig,
    load_table_config,
)

logger = logging.getLogger(__name__)


@dataclass
class DataSource:
    """The backend chosen at startup plus the fixtures used as read fallback.

    When no remote backend is configured ``backend`` *is* ``fixtures``.
    """

    backend: TableBackend
    fixtures: FixtureTableBackend

    @property
    def configured(self) -> bool:
        """Return True when reads and writes go to the hosted backend."""
        return self.backend is not self.fixtures

    @classmethod
    def offline(cls, fixtures: FixtureTableBackend | None = None) -> DataSource:
        """Build a data source that only ever talks to the fixture store."""
        store = fixtures or FixtureTableBackend()
        return cls(backend=store, fixtures=store)


def build_data_source(
    config: TableClientConfig | None = None,
    *,
    fixtures: FixtureTableBackend | None = None,
) -> DataSource:
    """Choose the backend once from configuration."""

    config = config or load_table_config()
    fixtures = fixtures or FixtureTableBackend()
    if not config.configured:
        logger.warning(
            "Backend URL or anon key missing; serving every store from fixture data"
        )
        return DataSource.offline(fixtures)

    logger.info("Using hosted table backend at %s", config.rest_url)
    return DataSource(backend=RemoteTableClient(config), fixtures=fixtures)
