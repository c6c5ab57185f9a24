"""UTC helpers for query parameter formatting.

All query timestamps are sent in UTC. Naive datetimes are treated as UTC.
"""

from __future__ import annotations

from datetime import UTC, date, datetime


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def format_timestamp_seconds(dt: datetime) -> str:
    """Format a datetime as ISO 8601 without fractional seconds.

    Output format: YYYY-MM-DDTHH:MM:SSZ (used by order and bar queries).
    """
    return ensure_utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_date(d: date) -> str:
    """Format a calendar date as YYYY-MM-DD."""
    return d.isoformat()
