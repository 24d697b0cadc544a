"""Shared Pydantic schemas for list criteria, pages and mutation results."""
from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ListCriteria(BaseModel):
    """Filter, search and pagination inputs for a list operation.

    ``filters`` holds equality filters on enumerated fields; a value of
    ``"all"`` or ``None`` means "do not filter on this field".
    """

    search: str = Field("", description="Free-text search term")
    filters: dict[str, Any] = Field(default_factory=dict)
    page: int = Field(1, ge=1, description="1-based page number")
    page_size: int | None = Field(None, ge=1, le=200, description="Rows per page")

    def active_filters(self) -> dict[str, Any]:
        """Return only the filters that actually restrict the result."""
        return {
            key: value
            for key, value in self.filters.items()
            if value is not None and value != "all" and value != "All"
        }


class Page(BaseModel, Generic[T]):
    """One page of a list result plus the total matching count."""

    items: list[T] = Field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int | None = None
    error: str | None = None


class MutationResult(BaseModel, Generic[T]):
    """Outcome of a create/update/delete; errors are returned, never raised."""

    success: bool
    error: str | None = None
    entity: T | None = None

    @classmethod
    def ok(cls, entity: T | None = None) -> MutationResult[T]:
        return cls(success=True, entity=entity)

    @classmethod
    def fail(cls, error: str) -> MutationResult[T]:
        return cls(success=False, error=error)


class DetailResult(BaseModel, Generic[T]):
    """Outcome of a detail lookup.

    ``not_found`` separates a missing row from a transport failure.
    """

    entity: T | None = None
    error: str | None = None
    not_found: bool = False


class AdminStats(BaseModel):
    """Summary counters for the admin overview."""

    total_members: int = 0
    pending_members: int = 0
    approved_members: int = 0
    upcoming_events: int = 0
    total_projects: int = 0
    total_subscribers: int = 0


class DashboardStats(BaseModel):
    """Summary counters for a member's own dashboard."""

    events_attended: int = 0
    projects_count: int = 0
    member_since: str = "N/A"
