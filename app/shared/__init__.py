"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import (
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
