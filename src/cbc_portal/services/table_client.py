"""Remote table client for the hosted backend.

This module provides the RemoteTableClient class that talks to the hosted
PostgREST table API. It includes:

- A backend-neutral ``TableBackend`` protocol shared with the fixture store
- Encoding of :class:`~cbc_portal.services.query.TableQuery` into PostgREST
  query parameters
- Translation of backend error payloads into ``TableError`` with a
  machine-readable code
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Protocol

import httpx

from cbc_portal.core.settings import settings
from cbc_portal.services.query import Filter, QueryResult, Row, TableQuery

# Configure logger for this module
logger = logging.getLogger(__name__)

# Error codes surfaced by the backend
UNIQUE_VIOLATION = "23505"
NO_ROWS = "PGRST116"

HTTP_RANGE_NOT_SATISFIABLE = 416
HTTP_BAD_REQUEST = 400
HTTP_INTERNAL_SERVER_ERROR = 500


class TableError(RuntimeError):
    """Base exception raised for table-store failures.

    ``code`` carries the backend's machine-readable error code when one was
    returned (e.g. ``23505`` for a unique-constraint violation).
    """

    def __init__(self, message: str, *, code: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status

    @property
    def is_conflict(self) -> bool:
        """Return True for unique-constraint violations."""
        return self.code == UNIQUE_VIOLATION

    @property
    def is_not_found(self) -> bool:
        """Return True when a single-row read matched nothing."""
        return self.code == NO_ROWS


class TableTransportError(TableError):
    """Raised when a request could not complete (network, timeout, 5xx)."""


class BackendNotConfiguredError(TableError):
    """Raised when the remote client is used without endpoint or key."""


class TableBackend(Protocol):
    """Operations every table backend offers to the stores."""

    @property
    def configured(self) -> bool: ...

    async def select(self, query: TableQuery) -> QueryResult: ...

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row: ...

    async def update(
        self, table: str, patch: Mapping[str, Any], filters: Iterable[Filter]
    ) -> list[Row]: ...

    async def delete(self, table: str, filters: Iterable[Filter]) -> list[Row]: ...


@dataclass(frozen=True)
class TableClientConfig:
    """Immutable configuration for the remote table client."""

    rest_url: str | None
    anon_key: str | None
    timeout_seconds: float

    @property
    def configured(self) -> bool:
        return bool(self.rest_url and self.anon_key)


def load_table_config() -> TableClientConfig:
    """Build configuration object from global settings."""

    return TableClientConfig(
        rest_url=settings.rest_url if settings.backend_configured else None,
        anon_key=settings.backend_anon_key,
        timeout_seconds=float(settings.backend_http_timeout_seconds),
    )


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def encode_filter(flt: Filter) -> tuple[str, str]:
    """Encode a filter as a PostgREST ``column=op.value`` pair."""
    if flt.op == "in":
        joined = ",".join(f'"{_encode_value(v)}"' for v in flt.value)
        return flt.column, f"in.({joined})"
    if flt.op == "eq" and flt.value is None:
        return flt.column, "is.null"
    return flt.column, f"{flt.op}.{_encode_value(flt.value)}"


def encode_query(query: TableQuery) -> list[tuple[str, str]]:
    """Encode a table query into PostgREST query parameters."""
    params: list[tuple[str, str]] = [("select", "*")]
    params.extend(encode_filter(flt) for flt in query.filters)
    if query.search is not None:
        term = query.search.term.replace(",", " ").replace("(", " ").replace(")", " ")
        clauses = ",".join(f"{column}.ilike.*{term}*" for column in query.search.columns)
        params.append(("or", f"({clauses})"))
    if query.order:
        params.append((
            "order",
            ",".join(
                f"{o.column}.{'desc' if o.descending else 'asc'}.nullslast" for o in query.order
            ),
        ))
    if query.offset:
        params.append(("offset", str(query.offset)))
    if query.limit is not None:
        params.append(("limit", str(query.limit)))
    return params


def _parse_count(content_range: str | None) -> int | None:
    # Content-Range looks like "0-9/42" or "*/42"
    if not content_range or "/" not in content_range:
        return None
    total = content_range.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else None


def _jsonable(row: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: value.isoformat() if isinstance(value, date) else value
        for key, value in row.items()
    }


class RemoteTableClient:
    """HTTP client wrapper for the hosted table API."""

    def __init__(
        self,
        config: TableClientConfig | None = None,
        *,
        access_token: Callable[[], str | None] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or load_table_config()
        self._access_token = access_token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def configured(self) -> bool:
        return self.config.configured

    def bind_access_token(self, getter: Callable[[], str | None]) -> None:
        """Attach the signed-in user's token so requests run as that user."""
        self._access_token = getter

    async def _ensure_client(self) -> httpx.AsyncClient:
        if not self.configured:
            raise BackendNotConfiguredError("Table backend is not configured")

        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.config.rest_url or "",
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    transport=self._transport,
                )

        return self._client

    def _build_headers(self, *, prefer: list[str] | None = None) -> dict[str, str]:
        token = (self._access_token() if self._access_token else None) or self.config.anon_key
        headers = {
            "apikey": self.config.anon_key or "",
            "Authorization": f"Bearer {token}",
        }
        if prefer:
            headers["Prefer"] = ",".join(prefer)
        return headers

    @dataclass
    class RequestParams:
        """Parameters for HTTP requests."""
        method: str
        table: str
        params: list[tuple[str, str]] | None = None
        json_data: Any | None = None
        prefer: list[str] | None = None
        headers: dict[str, str] | None = None
        accept_statuses: tuple[int, ...] = ()

    async def _request(self, params: RequestParams) -> httpx.Response:
        client = await self._ensure_client()
        headers = self._build_headers(prefer=params.prefer)
        if params.headers:
            headers.update(params.headers)

        try:
            response = await client.request(
                params.method,
                f"/{params.table}",
                params=params.params,
                json=params.json_data,
                headers=headers,
            )
        except httpx.HTTPError as exc:
            logger.warning("Table request %s /%s failed: %s", params.method, params.table, exc)
            raise TableTransportError(f"Table request failed: {exc}") from exc

        if response.status_code >= HTTP_INTERNAL_SERVER_ERROR:
            raise TableTransportError(
                f"Table backend responded with {response.status_code}",
                status=response.status_code,
            )
        if response.status_code in params.accept_statuses:
            return response
        if response.status_code >= HTTP_BAD_REQUEST:
            raise self._error_from_response(response)

        return response

    @staticmethod
    def _error_from_response(response: httpx.Response) -> TableError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or f"Table backend responded with {response.status_code}"
        return TableError(message, code=body.get("code"), status=response.status_code)

    async def select(self, query: TableQuery) -> QueryResult:
        """Run a read query and return rows plus the exact count when asked."""

        prefer = ["count=exact"] if query.count else None
        headers = {"Accept": "application/vnd.pgrst.object+json"} if query.single else None
        response = await self._request(
            self.RequestParams(
                method="GET",
                table=query.table,
                params=encode_query(query),
                prefer=prefer,
                headers=headers,
                accept_statuses=(HTTP_RANGE_NOT_SATISFIABLE,),
            )
        )
        count = _parse_count(response.headers.get("content-range")) if query.count else None

        if response.status_code == HTTP_RANGE_NOT_SATISFIABLE:
            # Offset past the last row: an empty page, not a failure.
            return QueryResult(rows=[], count=count)

        body = response.json()
        rows = [body] if query.single else list(body or [])
        return QueryResult(rows=rows, count=count)

    async def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        """Insert one row and return it as stored."""

        response = await self._request(
            self.RequestParams(
                method="POST",
                table=table,
                json_data=_jsonable(row),
                prefer=["return=representation"],
            )
        )
        body = response.json()
        if isinstance(body, list):
            if not body:
                raise TableError("Insert returned no rows", code=NO_ROWS)
            return body[0]
        return body

    async def update(
        self, table: str, patch: Mapping[str, Any], filters: Iterable[Filter]
    ) -> list[Row]:
        """Apply ``patch`` to every row matching ``filters``; return the updated rows."""

        response = await self._request(
            self.RequestParams(
                method="PATCH",
                table=table,
                params=[encode_filter(flt) for flt in filters],
                json_data=_jsonable(patch),
                prefer=["return=representation"],
            )
        )
        return list(response.json() or [])

    async def delete(self, table: str, filters: Iterable[Filter]) -> list[Row]:
        """Delete every row matching ``filters``; return the deleted rows."""

        response = await self._request(
            self.RequestParams(
                method="DELETE",
                table=table,
                params=[encode_filter(flt) for flt in filters],
                prefer=["return=representation"],
            )
        )
        return list(response.json() or [])

    async def close(self) -> None:
        """Clean up underlying HTTP client resources."""

        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None
