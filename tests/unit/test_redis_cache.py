"""CacheService behaviour against an injected async Redis client."""

from unittest.mock import AsyncMock

import redis.asyncio as redis

from app.infrastructure.cache import CacheService


def _fake_redis(store: dict[str, str] | None = None) -> AsyncMock:
    store = {} if store is None else store
    client = AsyncMock()

    async def get(key: str) -> str | None:
        return store.get(key)

    async def setex(key: str, ttl: int, value: str) -> None:
        store[key] = value

    client.get = AsyncMock(side_effect=get)
    client.setex = AsyncMock(side_effect=setex)
    client.ping = AsyncMock(return_value=True)
    return client


async def _connected(client: AsyncMock) -> CacheService:
    cache = CacheService(redis_client=client)
    await cache.connect()
    return cache


class TestCacheService:
    async def test_connect_pings_injected_client(self) -> None:
        client = _fake_redis()
        cache = await _connected(client)
        client.ping.assert_awaited_once()
        assert cache.is_available()

    async def test_set_then_get_round_trips_json(self) -> None:
        cache = await _connected(_fake_redis())
        assert await cache.set("subjects:list:*:*", [{"id": "s1"}], ttl=30) is True
        assert await cache.get("subjects:list:*:*") == [{"id": "s1"}]

    async def test_set_uses_subject_ttl_by_default(self) -> None:
        client = _fake_redis()
        cache = await _connected(client)
        await cache.set("k", "v")
        key, ttl, _ = client.setex.await_args.args
        assert key == "k"
        assert ttl == cache.settings.cache_ttl_subjects

    async def test_miss_returns_none(self) -> None:
        cache = await _connected(_fake_redis())
        assert await cache.get("absent") is None

    async def test_unavailable_cache_degrades(self) -> None:
        """A failed ping leaves the cache unavailable: get misses and set reports False."""
        client = _fake_redis()
        client.ping = AsyncMock(side_effect=redis.ConnectionError("down"))
        cache = await _connected(client)
        assert not cache.is_available()
        assert await cache.get("k") is None
        assert await cache.set("k", "v") is False
        client.setex.assert_not_awaited()
