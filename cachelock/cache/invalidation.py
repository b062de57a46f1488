"""Cache invalidation."""

from cachelock.errors import StoreError
from cachelock.logging_config import get_logger

from .store import CacheStore

logger = get_logger(name=__name__)


async def invalidate(key: str, store: CacheStore) -> None:
    """Delete the cached entry for ``key``.

    Deleting a key that holds no entry is not an error. Lock state is left
    alone, so a recomputation already in flight may write the key again.

    Raises:
        StoreError: the delete failed.
    """
    try:
        deleted = await store.delete(key)
    except Exception as e:
        raise StoreError(f"Cache DEL failed for {key}: {e}", key=key) from e

    if deleted:
        logger.info("Invalidated cache key '{}'", key)
    else:
        logger.debug("No cache entry for '{}' to invalidate", key)
