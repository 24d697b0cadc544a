# src/cbc_portal/services/__init__.py
"""Data access and identity services for the club portal."""

from .backend import DataSource, build_data_source
from .fixture_store import FixtureTableBackend
from .identity import IdentityContext
from .locale import LocalePreference
from .store import EntityStore
from .table_client import RemoteTableClient, TableError

__all__ = [
    "DataSource",
    "build_data_source",
    "FixtureTableBackend",
    "RemoteTableClient",
    "TableError",
    "EntityStore",
    "IdentityContext",
    "LocalePreference",
]
