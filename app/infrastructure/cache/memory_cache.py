"""In-process TTL cache for reference data (subjects).

Each entry keeps the value together with the time it was fetched; an entry
is fresh while ``clock() - fetched_at < ttl``. Expired entries are evicted
on read. The clock is injectable so tests can advance time explicitly.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Cached value with its fetch time and lifetime (seconds)."""

    value: Any
    fetched_at: float
    ttl: float | None

    def is_fresh(self, now: float) -> bool:
        if self.ttl is None:
            return True
        return now - self.fetched_at < self.ttl


class MemoryCache:
    """Dict-backed cache implementing CacheProtocol. One instance per app."""

    def __init__(
        self,
        default_ttl: float | None = 900,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._default_ttl = default_ttl
        self._clock = clock

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> Any | None:
        """Return the cached value, or None when missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache MISS: %s", key)
            return None
        if not entry.is_fresh(self._clock()):
            del self._entries[key]
            logger.debug("Cache EXPIRED: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return entry.value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value stamped with the current clock reading."""
        self._entries[key] = CacheEntry(
            value=value,
            fetched_at=self._clock(),
            ttl=ttl if ttl is not None else self._default_ttl,
        )
        logger.debug("Cache SET: %s (TTL: %ss)", key, self._entries[key].ttl)
        return True

    async def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
