"""Shared utilities: datetime helpers."""

from app.shared.utils.datetime import (
    EPOCH_UTC,
    coerce_datetime,
    ensure_utc,
    from_timestamp_ms_utc,
)

__all__ = [
    "EPOCH_UTC",
    "coerce_datetime",
    "ensure_utc",
    "from_timestamp_ms_utc",
]
