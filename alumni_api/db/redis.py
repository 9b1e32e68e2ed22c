"""Redis client. Holds refresh-token sessions and rate limit windows."""

import logging
from typing import Optional

import redis.asyncio as aioredis

from alumni_api.config import settings

logger = logging.getLogger(__name__)

redis_client: Optional[aioredis.Redis] = None


def namespaced(key: str) -> str:
    """Prefix a key so several deployments can share one Redis database."""
    return f"{settings.REDIS_KEY_PREFIX}{key}"


async def init_redis() -> None:
    """Initialize Redis connection."""
    global redis_client

    redis_client = aioredis.from_url(
        settings.REDIS_URL,
        encoding="utf-8",
        decode_responses=True,
    )
    await redis_client.ping()
    logger.info("Connected to Redis, key prefix %r", settings.REDIS_KEY_PREFIX)


async def close_redis() -> None:
    """Close Redis connection."""
    global redis_client

    if redis_client:
        await redis_client.aclose()
    redis_client = None


def get_redis() -> aioredis.Redis:
    """Get Redis client instance."""
    if redis_client is None:
        raise RuntimeError("Redis is not initialized")
    return redis_client


async def ping_redis() -> bool:
    """Round-trip a PING, used by the health checks."""
    return await get_redis().ping()


async def cache_get(key: str) -> Optional[str]:
    """Get a cached value, or None when the key is missing or expired."""
    return await get_redis().get(namespaced(key))


async def cache_set(key: str, value: str, expire: int) -> None:
    """Store ``value`` under ``key`` for ``expire`` seconds."""
    await get_redis().setex(namespaced(key), expire, value)


async def cache_delete(key: str) -> None:
    """Remove a cached value."""
    await get_redis().delete(namespaced(key))
