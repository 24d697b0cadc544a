"""In-memory table backend used when no hosted backend is configured.

The fixture store answers the same :class:`TableQuery` descriptions as the
remote client and reports failures with the same ``TableError`` codes, so
stores never need to know which backend they are talking to. Mutations live
for the lifetime of the process only.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime
from typing import Any

from cbc_portal.data.fixtures import seed_tables
from cbc_portal.services.query import Filter, QueryResult, Row, TableQuery, evaluate
from cbc_portal.services.table_client import NO_ROWS, UNIQUE_VIOLATION, TableError
from cbc_portal.utils.time import utcnow

logger = logging.getLogger(__name__)

# Column sets that must be unique per table
UNIQUE_KEYS: dict[str, tuple[tuple[str, ...], ...]] = {
    "members": (("id",), ("email",)),
    "events": (("id",),),
    "event_rsvps": (("id",), ("event_id", "member_id")),
    "projects": (("id",),),
    "project_members": (("project_id", "member_id"),),
    "articles": (("id",), ("slug",)),
    "subscribers": (("id",), ("email",)),
    "features": (("id",),),
    "team_members": (("id",),),
    "partners": (("id",),),
    "milestones": (("id",),),
    "site_stats": (("id",), ("key",)),
    "site_content": (("id",), ("key", "language")),
}

# table -> [(child table, foreign key column)] removed with the parent row
CASCADES: dict[str, tuple[tuple[str, str], ...]] = {
    "members": (
        ("event_rsvps", "member_id"),
        ("project_members", "member_id"),
        ("articles", "author_id"),
    ),
    "events": (("event_rsvps", "event_id"),),
    "projects": (("project_members", "project_id"),),
}

# Timestamp columns filled on insert when the caller leaves them out
_INSERT_TIMESTAMPS: dict[str, tuple[str, ...]] = {
    "members": ("created_at", "joined_at"),
    "events": ("created_at",),
    "event_rsvps": ("created_at",),
    "projects": ("created_at",),
    "articles": ("created_at", "updated_at"),
    "subscribers": ("subscribed_at",),
    "features": ("created_at", "updated_at"),
    "team_members": ("created_at", "updated_at"),
    "partners": ("created_at", "updated_at"),
    "milestones": ("created_at", "updated_at"),
    "site_stats": ("updated_at",),
    "site_content": ("updated_at",),
}

# Tables whose updated_at column tracks every change
_UPDATE_TIMESTAMPS = frozenset(
    {"articles", "features", "team_members", "partners", "milestones", "site_stats", "site_content"}
)

# Tables keyed by a generated id
_ID_TABLES = frozenset({
    "members", "events", "event_rsvps", "projects", "articles", "subscribers",
    "features", "team_members", "partners", "milestones", "site_stats", "site_content",
})


def _stored(value: Any) -> Any:
    return value.isoformat() if isinstance(value, date) else value


class FixtureTableBackend:
    """Table backend over process-local seed rows."""

    def __init__(
        self,
        tables: Mapping[str, list[Row]] | None = None,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._tables: dict[str, list[Row]] = (
            {name: [dict(row) for row in rows] for name, rows in tables.items()}
            if tables is not None
            else seed_tables()
        )
        self._clock = clock

    @property
    def configured(self) -> bool:
        return True

    def rows(self, table: str) -> list[Row]:
        """Return a snapshot of every row in ``table``."""
        return [dict(row) for row in self._tables.get(table, [])]

    def _table(self, table: str) -> list[Row]:
        return self._tables.setdefault(table, [])

    def _check_unique(self, table: str, candidate: Mapping[str, Any], *, skip: Row | None = None) -> None:
        for columns in UNIQUE_KEYS.get(table, ()):
            if any(candidate.get(column) is None for column in columns):
                continue
            key = tuple(candidate[column] for column in columns)
            for row in self._table(table):
                if row is skip:
                    continue
                if tuple(row.get(column) for column in columns) == key:
                    constraint = f"{table}_{'_'.join(columns)}_key"
                    raise TableError(
                        f'duplicate key value violates unique constraint "{constraint}"',
                        code=UNIQUE_VIOLATION,
                        status=409,
                    )

    async def select(self, query: TableQuery) -> QueryResult:
        result = evaluate(query, self._table(query.table))
        if query.single:
            if not result.rows:
                raise TableError(
                    "JSON object requested, multiple (or no) rows returned",
                    code=NO_ROWS,
                    status=406,
                )
            result.rows = result.rows[:1]
        return result

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        stored = {key: _stored(value) for key, value in row.items()}
        if table in _ID_TABLES and not stored.get("id"):
            stored["id"] = str(uuid.uuid4())
        now = self._clock().isoformat()
        for column in _INSERT_TIMESTAMPS.get(table, ()):
            stored.setdefault(column, now)

        self._check_unique(table, stored)
        self._table(table).append(stored)
        logger.debug("Fixture insert into %s: %s", table, stored.get("id"))
        return dict(stored)

    async def update(
        self, table: str, patch: Mapping[str, Any], filters: Iterable[Filter]
    ) -> list[Row]:
        filters = tuple(filters)
        changes = {key: _stored(value) for key, value in patch.items()}
        if table in _UPDATE_TIMESTAMPS and "updated_at" not in changes:
            changes["updated_at"] = self._clock().isoformat()

        targets = [row for row in self._table(table) if all(f.matches(row) for f in filters)]
        for row in targets:
            self._check_unique(table, {**row, **changes}, skip=row)

        updated: list[Row] = []
        for row in targets:
            row.update(changes)
            updated.append(dict(row))
        return updated

    async def delete(self, table: str, filters: Iterable[Filter]) -> list[Row]:
        filters = tuple(filters)
        rows = self._table(table)
        removed = [row for row in rows if all(f.matches(row) for f in filters)]
        if not removed:
            return []

        removed_ids = {id(row) for row in removed}
        self._tables[table] = [row for row in rows if id(row) not in removed_ids]
        for child, column in CASCADES.get(table, ()):
            parent_ids = tuple(row.get("id") for row in removed)
            await self.delete(child, [Filter(column, "in", parent_ids)])
        return [dict(row) for row in removed]
