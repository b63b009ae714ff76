"""
Datetime utilities.

Provides timezone-aware datetime functions.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)


def to_iso(dt: datetime | None) -> str | None:
    """
    Render datetime for JSON payloads.

    Naive values (SQLite drops tzinfo) are treated as UTC.

    Args:
        dt: Datetime or None

    Returns:
        ISO-8601 string or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.isoformat()
