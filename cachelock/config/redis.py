"""Redis async connection management.

Holds one process-wide ``redis.asyncio`` client that callers can pass as the
``store`` of a cached function.
"""

from typing import Optional

from redis.asyncio import Redis

from cachelock.logging_config import get_logger
from cachelock.settings import get_settings

logger = get_logger(name=__name__)

_client: Redis | None = None


async def init_redis(url: Optional[str] = None) -> Redis:
    """Initialize the global async Redis client and verify connectivity.

    Args:
        url: Redis connection URL; defaults to ``settings.redis_url``.
    """
    global _client
    url = url or get_settings().redis_url
    _client = Redis.from_url(url, decode_responses=True)
    await _client.ping()
    logger.info("Redis client initialized and connected: {}", url)
    return _client


def get_redis() -> Redis:
    """Get the global async Redis client. Raises if not initialized."""
    if _client is None:
        raise RuntimeError(
            "Redis client not initialized. Call init_redis() first."
        )
    return _client


async def close_redis() -> None:
    """Close the Redis client connection."""
    global _client
    if _client is not None:
        await _client.aclose()
        logger.info("Redis client closed")
    _client = None
