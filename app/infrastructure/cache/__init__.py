"""Cache: in-memory and Redis backends plus cache key utilities.

Used by the subject reader for reference data. Key format is in keys.py (DRY).
"""

from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import subjects_key
from app.infrastructure.cache.memory_cache import CacheEntry, MemoryCache
from app.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheEntry",
    "CacheProtocol",
    "CacheService",
    "MemoryCache",
    "subjects_key",
]
