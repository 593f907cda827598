"""Cache protocol for the reference-data readers (DIP)."""

from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Protocol for cache backends (in-memory or Redis). Used by cacheable readers."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value with optional TTL in seconds. Returns True if stored."""
        ...

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if removed."""
        ...
