"""
Factory for creating cache instances from settings.
"""

import logging
from enum import Enum

from shortener_app.config import Settings
from .strategies import CacheStrategy, InMemoryCache, NullCache, RedisCache

logger = logging.getLogger(__name__)


class CacheBackend(Enum):
    """Available cache backends"""
    REDIS = "redis"
    MEMORY = "memory"
    NULL = "null"


class CacheFactory:
    """Builds the cache configured for one app instance."""

    @staticmethod
    def create(settings: Settings) -> CacheStrategy:
        """
        Create the cache backend named by ``settings.cache_backend``.

        A Redis backend that cannot be reached at startup falls back to
        the in-memory cache.

        Raises:
            ValueError: If the backend name is unknown
        """
        backend = CacheBackend(settings.cache_backend)

        if backend == CacheBackend.REDIS:
            import redis

            try:
                redis_client = redis.from_url(
                    settings.redis_url,
                    decode_responses=False,
                    socket_connect_timeout=2,
                    socket_timeout=2,
                )
                redis_client.ping()
                logger.info("✅ Redis cache initialized")
                return RedisCache(redis_client)
            except Exception as e:
                logger.warning("⚠️  Redis connection failed (%s), falling back to in-memory cache", e)
                return InMemoryCache()

        if backend == CacheBackend.MEMORY:
            logger.info("✅ In-memory cache initialized")
            return InMemoryCache()

        logger.info("✅ Null cache initialized")
        return NullCache()
