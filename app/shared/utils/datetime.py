"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers at repository and API boundaries.
"""

from datetime import UTC, datetime
from typing import Any

# Sort key for records without a timestamp (they order as oldest).
EPOCH_UTC = datetime(1970, 1, 1, tzinfo=UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository and API boundaries to normalize datetimes.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def from_timestamp_ms_utc(timestamp_ms: int | float) -> datetime:
    """
    Create a UTC-aware datetime from a millisecond Unix timestamp.
    Common in JavaScript clients that write Date.now() values.

    Args:
        timestamp_ms: Unix timestamp in milliseconds

    Returns:
        UTC-aware datetime
    """
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)


def coerce_datetime(value: Any) -> datetime | None:
    """
    Convert a stored timestamp-like value to a UTC-aware datetime.

    Accepts datetimes, ISO-8601 strings, millisecond numbers, and
    {"seconds": ..., "nanoseconds": ...} maps written by older clients.
    Anything unparseable becomes None (treated as undated, never an error).

    Args:
        value: Raw value read from the document store

    Returns:
        UTC-aware datetime or None
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, (int, float)):
        try:
            return from_timestamp_ms_utc(value)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    if isinstance(value, dict) and "seconds" in value:
        try:
            seconds = float(value["seconds"]) + float(value.get("nanoseconds") or 0) / 1e9
            return datetime.fromtimestamp(seconds, tz=UTC)
        except (TypeError, ValueError, OverflowError, OSError):
            return None
    return None
