"""Shared state and load cycle for entity stores.

Every store owns ``data``, ``total_count``, ``is_loading`` and ``error``.
Reads go to the configured backend and degrade to the fixture store when a
remote read fails. A new list load cancels the one still in flight, and a
load that has been superseded never writes state.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from cbc_portal.core.settings import settings
from cbc_portal.schemas.common import ListCriteria, MutationResult, Page
from cbc_portal.services.backend import DataSource
from cbc_portal.services.collection import CollectionCache
from cbc_portal.services.query import QueryResult, Row, TableQuery
from cbc_portal.services.table_client import TableError
from cbc_portal.utils.time import utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

LoadErrors = (TableError, ValidationError)


@dataclass
class Snapshot(Generic[T]):
    """Result of one load, applied to the store only if still current."""

    items: list[T] = field(default_factory=list)
    total_count: int = 0
    degraded: bool = False


async def fetch_rows(source: DataSource, query: TableQuery) -> QueryResult:
    """Run ``query`` against the backend, degrading to fixtures on failure.

    A missing single row is reported as such and never degraded.
    """
    try:
        return await source.backend.select(query)
    except TableError as exc:
        if not source.configured or exc.is_not_found:
            raise
        logger.warning(
            "Remote read of %s failed (%s); serving fixture data", query.table, exc.message
        )
    result = await source.fixtures.select(query)
    result.degraded = True
    return result


async def count_rows(source: DataSource, query: TableQuery) -> int:
    """Return the number of rows matching ``query`` without fetching them all."""
    result = await fetch_rows(source, query.counted().paginate(1, 1))
    return result.count or 0


class EntityStore(Generic[T]):
    """Base class for stores over one table."""

    table: ClassVar[str]
    model: ClassVar[type[BaseModel]]
    load_error_message: ClassVar[str] = "Failed to load data. Please try again."
    search_columns: ClassVar[tuple[str, ...]] = ()
    order_column: ClassVar[str] = "created_at"

    def __init__(
        self,
        source: DataSource,
        *,
        page_size: int | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.source = source
        self.page_size = page_size
        self.clock = clock
        self.cache: CollectionCache[T] = CollectionCache()
        self.total_count = 0
        self.is_loading = False
        self.error: str | None = None
        self.criteria = ListCriteria(page_size=page_size)
        self._task: asyncio.Task[Snapshot[T]] | None = None
        self._generation = 0

    @property
    def data(self) -> list[T]:
        return self.cache.items

    def query(self) -> TableQuery:
        return TableQuery(self.table)

    def parse(self, rows: Iterable[Row]) -> list[T]:
        return [self.model.model_validate(row) for row in rows]  # type: ignore[misc]

    async def fetch(self, query: TableQuery) -> QueryResult:
        return await fetch_rows(self.source, query)

    def current_page(self) -> Page[T]:
        return Page[Any](
            items=self.data,
            total_count=self.total_count,
            page=self.criteria.page,
            page_size=self.criteria.page_size,
            error=self.error,
        )

    async def run_load(self, loader: Callable[[], Awaitable[Snapshot[T]]]) -> bool:
        """Run ``loader`` as the store's only in-flight load.

        Returns True when the snapshot was applied, False when the load failed
        or was superseded by a newer one.
        """
        previous = self._task
        if previous is not None and not previous.done():
            previous.cancel()

        self._generation += 1
        generation = self._generation
        self.is_loading = True
        self.error = None

        task = asyncio.ensure_future(loader())
        self._task = task
        try:
            snapshot = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug("%s load superseded", type(self).__name__)
                return False
            self.is_loading = False
            raise
        except LoadErrors as exc:
            if generation != self._generation:
                return False
            logger.error("%s load failed: %s", type(self).__name__, exc, exc_info=True)
            self.error = self.load_error_message
            self.is_loading = False
            return False

        if generation != self._generation:
            return False

        self.cache.replace(snapshot.items)
        self.total_count = snapshot.total_count
        if snapshot.degraded:
            self.error = self.load_error_message
        self.is_loading = False
        return True

    async def load_query(
        self,
        query: TableQuery,
        criteria: ListCriteria,
        *,
        enrich: Callable[[list[T]], Awaitable[list[T]]] | None = None,
    ) -> Page[T]:
        """Load one counted page of ``query`` into the store."""
        self.criteria = criteria
        page_size = criteria.page_size or self.page_size
        paged = query.counted().paginate(criteria.page, page_size)

        async def loader() -> Snapshot[T]:
            result = await self.fetch(paged)
            items = self.parse(result.rows)
            if enrich is not None:
                items = await enrich(items)
            total = result.count if result.count is not None else len(items)
            return Snapshot(items=items, total_count=total, degraded=result.degraded)

        await self.run_load(loader)
        return self.current_page()

    async def load(self, criteria: ListCriteria | None = None) -> Page[T]:
        """List rows matching ``criteria``, newest first."""
        criteria = criteria or ListCriteria(page_size=self.page_size)
        query = self.filtered(self.query(), criteria)
        query = query.matching(criteria.search, *self.search_columns)
        query = query.order_by(self.order_column, descending=True)
        return await self.load_query(query, criteria)

    async def refetch(self) -> Page[T]:
        """Reload with the most recent criteria."""
        return await self.load(self.criteria)

    def filtered(self, query: TableQuery, criteria: ListCriteria) -> TableQuery:
        for column, value in criteria.active_filters().items():
            query = query.eq(column, value)
        return query

    def fail(self, message: str, exc: Exception | None = None) -> MutationResult[Any]:
        """Log a failed mutation and return it as a result."""
        if exc is not None:
            logger.error("%s: %s", message, exc, exc_info=True)
        return MutationResult.fail(message)

    async def close(self) -> None:
        """Cancel any load still in flight."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
