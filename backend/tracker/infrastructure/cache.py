"""Cache Clients — collection-key invalidation on Redis, or a no-op stand-in.

Invariants:
    - delete() is the only data operation: nothing reads through this cache
    - Errors from Redis propagate to the caller; the mutation handler decides
      they are non-fatal
    - close() releases the connection pool and is safe to call twice

Design Decisions:
    - redis.asyncio client built lazily from URL: no connection attempt at import
    - NullCache when REDIS_URL is empty so local runs need no Redis
"""

import logging

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class RedisCache:
    """Invalidation-only cache on Redis."""

    def __init__(self, url: str):
        self._client: Redis | None = Redis.from_url(url)

    async def delete(self, key: str) -> None:
        if self._client is None:
            raise RuntimeError("Cache client is closed")
        await self._client.delete(key)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class NullCache:
    """Cache stand-in used when no Redis is configured."""

    async def delete(self, key: str) -> None:
        logger.debug("Cache disabled, skipping invalidation", extra={"cache_key": key})

    async def close(self) -> None:
        return None


def build_cache(redis_url: str) -> RedisCache | NullCache:
    if redis_url:
        logger.info("Cache: redis")
        return RedisCache(redis_url)
    logger.info("Cache: disabled (REDIS_URL not set)")
    return NullCache()
