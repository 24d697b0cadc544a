"""Backend-neutral description of a table query.

A :class:`TableQuery` is built by the stores and executed either by the
remote table client (encoded as PostgREST parameters) or by the fixture store
(evaluated in-process with :func:`evaluate`). Keeping a single description
guarantees that both backends filter, order, count and paginate alike.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Literal

from cbc_portal.utils.time import parse_timestamp

Operator = Literal["eq", "neq", "gt", "gte", "lt", "lte", "in"]

Row = dict[str, Any]


@dataclass(frozen=True)
class Filter:
    """A single column predicate."""

    column: str
    op: Operator
    value: Any

    def matches(self, row: Mapping[str, Any]) -> bool:
        """Return True when ``row`` satisfies the predicate."""
        actual = row.get(self.column)
        if self.op == "in":
            candidates = [_comparable(v) for v in self.value]
            return _comparable(actual) in candidates
        left, right = _comparable(actual), _comparable(self.value)
        if self.op == "eq":
            return left == right
        if self.op == "neq":
            return left != right
        if left is None or right is None:
            return False
        try:
            if self.op == "gt":
                return left > right
            if self.op == "gte":
                return left >= right
            if self.op == "lt":
                return left < right
            if self.op == "lte":
                return left <= right
        except TypeError:
            return False
        raise ValueError(f"Unsupported operator: {self.op}")


@dataclass(frozen=True)
class Search:
    """Case-insensitive substring match OR-ed across ``columns``."""

    term: str
    columns: tuple[str, ...]

    def matches(self, row: Mapping[str, Any]) -> bool:
        needle = self.term.lower()
        return any(needle in str(row.get(column) or "").lower() for column in self.columns)


@dataclass(frozen=True)
class Ordering:
    """Sort key; ``None`` values always sort last."""

    column: str
    descending: bool = False


@dataclass(frozen=True)
class TableQuery:
    """Everything needed to read rows from one table."""

    table: str
    filters: tuple[Filter, ...] = ()
    search: Search | None = None
    order: tuple[Ordering, ...] = ()
    offset: int | None = None
    limit: int | None = None
    count: bool = False
    single: bool = False

    def where(self, column: str, op: Operator, value: Any) -> TableQuery:
        """Return a copy with an additional filter."""
        return replace(self, filters=(*self.filters, Filter(column, op, value)))

    def eq(self, column: str, value: Any) -> TableQuery:
        return self.where(column, "eq", value)

    def in_(self, column: str, values: Iterable[Any]) -> TableQuery:
        return self.where(column, "in", tuple(values))

    def matching(self, term: str, *columns: str) -> TableQuery:
        """Return a copy with a free-text search (blank terms are ignored)."""
        term = term.strip()
        if not term:
            return self
        return replace(self, search=Search(term, tuple(columns)))

    def order_by(self, column: str, *, descending: bool = False) -> TableQuery:
        return replace(self, order=(*self.order, Ordering(column, descending)))

    def paginate(self, page: int, page_size: int | None) -> TableQuery:
        """Restrict the query to a 1-based page."""
        if page_size is None:
            return self
        page = max(1, page)
        return replace(self, offset=(page - 1) * page_size, limit=page_size)

    def counted(self) -> TableQuery:
        return replace(self, count=True)

    def one(self) -> TableQuery:
        return replace(self, single=True)


@dataclass
class QueryResult:
    """Rows returned by a query and, when requested, the total match count.

    ``degraded`` marks an answer served from fixtures after a remote failure.
    """

    rows: list[Row] = field(default_factory=list)
    count: int | None = None
    degraded: bool = False


def _comparable(value: Any) -> Any:
    """Normalise timestamps so ISO strings and datetimes compare correctly."""
    if isinstance(value, datetime | str):
        parsed = parse_timestamp(value)
        if parsed is not None:
            return parsed
    return value


def _sort_rows(rows: list[Row], order: Sequence[Ordering]) -> list[Row]:
    # Stable sorts applied from the least significant key.
    for ordering in reversed(order):
        present = [row for row in rows if row.get(ordering.column) is not None]
        missing = [row for row in rows if row.get(ordering.column) is None]
        present.sort(
            key=lambda row, col=ordering.column: _comparable(row[col]),
            reverse=ordering.descending,
        )
        rows = present + missing
    return rows


def evaluate(query: TableQuery, rows: Iterable[Row]) -> QueryResult:
    """Apply ``query`` to in-memory rows.

    Filtering happens before counting and counting before pagination, so the
    count is the total number of matches regardless of the requested page.
    """
    matched = [
        dict(row)
        for row in rows
        if all(flt.matches(row) for flt in query.filters)
        and (query.search is None or query.search.matches(row))
    ]
    matched = _sort_rows(matched, query.order)
    total = len(matched)

    start = query.offset or 0
    if query.limit is not None:
        page = matched[start:start + query.limit]
    else:
        page = matched[start:]

    return QueryResult(rows=page, count=total if query.count else None)
