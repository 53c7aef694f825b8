"""
Cache strategies for redirect lookups.

Short links never change their target, so cached entries are never
invalidated; they only expire (Redis) or live as long as the process (memory).
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class CacheStrategy(ABC):
    """
    Interface shared by all cache backends.

    Methods are async because the Redis backend does network I/O.
    Backends never raise: a failing cache behaves like a miss.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the cached value or None"""

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        """Store a value with a TTL in seconds"""


class RedisCache(CacheStrategy):
    """Redis-backed cache, shared by every redirect service instance."""

    def __init__(self, redis_client):
        self.redis = redis_client

    async def get(self, key: str) -> Optional[str]:
        try:
            value = self.redis.get(key)
            return value.decode("utf-8") if value else None
        except Exception as e:
            logger.warning("Redis get error for %s: %s", key, e)
            return None

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        try:
            return bool(self.redis.setex(key, ttl, value))
        except Exception as e:
            logger.warning("Redis set error for %s: %s", key, e)
            return False


class InMemoryCache(CacheStrategy):
    """
    Per-process dict cache.

    TTL is ignored: entries map immutable targets, so they never go stale.
    """

    def __init__(self):
        self._cache: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._cache.get(key)

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        self._cache[key] = value
        return True


class NullCache(CacheStrategy):
    """Cache that never stores anything (every lookup hits the database)."""

    async def get(self, key: str) -> Optional[str]:
        return None

    async def set(self, key: str, value: str, ttl: int = 3600) -> bool:
        return True
