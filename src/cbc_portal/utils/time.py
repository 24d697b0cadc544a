# src/cbc_portal/utils/time.py
"""Time utilities shared by stores and fixtures."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def parse_timestamp(value: object) -> datetime | None:
    """Return ``value`` as an aware datetime when it is one or an ISO string."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    if isinstance(value, str) and len(value) >= 10 and value[4:5] == "-":
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    return None


def month_year(value: datetime | None, default: str = "N/A") -> str:
    """Format a timestamp as ``Mon YYYY`` (e.g. ``Jan 2026``)."""
    if value is None:
        return default
    return value.strftime("%b %Y")
