import asyncio

import pytest

from shortener_app.cache import CacheFactory, InMemoryCache, NullCache, RedisCache
from shortener_app.config import Settings


class FakeRedis:
    """Just enough of redis.Redis for RedisCache"""

    def __init__(self, fail: bool = False):
        self.data = {}
        self.fail = fail

    def get(self, key):
        if self.fail:
            raise ConnectionError("redis down")
        return self.data.get(key)

    def setex(self, key, ttl, value):
        if self.fail:
            raise ConnectionError("redis down")
        self.data[key] = value.encode("utf-8")
        return True


class TestCacheFactory:

    def test_memory_backend(self):
        assert isinstance(CacheFactory.create(Settings(cache_backend="memory")), InMemoryCache)

    def test_null_backend(self):
        assert isinstance(CacheFactory.create(Settings(cache_backend="null")), NullCache)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            CacheFactory.create(Settings(cache_backend="memcached"))

    def test_unreachable_redis_falls_back_to_memory(self):
        settings = Settings(cache_backend="redis", redis_url="redis://127.0.0.1:1/0")

        assert isinstance(CacheFactory.create(settings), InMemoryCache)


class TestRedisCache:

    def test_round_trip(self):
        cache = RedisCache(FakeRedis())

        assert asyncio.run(cache.set("link:abc123", "https://example.com", ttl=60)) is True
        assert asyncio.run(cache.get("link:abc123")) == "https://example.com"

    def test_errors_behave_like_misses(self):
        cache = RedisCache(FakeRedis(fail=True))

        assert asyncio.run(cache.get("link:abc123")) is None
        assert asyncio.run(cache.set("link:abc123", "https://example.com")) is False


class TestNullCache:

    def test_never_stores(self):
        cache = NullCache()

        asyncio.run(cache.set("link:abc123", "https://example.com"))

        assert asyncio.run(cache.get("link:abc123")) is None
