"""Cache-aside decorator for async functions with distributed recomputation locks."""

from cachelock.cache import CacheOptions, CacheStore, cached, invalidate, wrap
from cachelock.errors import (
    CacheError,
    LockAcquisitionTimeout,
    LockError,
    StoreError,
    StoreReadError,
    StoreWriteError,
)
from cachelock.lock import LockHandle, RedisLockClient

__all__ = [
    "wrap",
    "cached",
    "invalidate",
    "CacheOptions",
    "CacheStore",
    "RedisLockClient",
    "LockHandle",
    "CacheError",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
    "LockError",
    "LockAcquisitionTimeout",
]
