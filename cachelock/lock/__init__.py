"""Distributed lock used to serialize recomputation of a cache entry."""

from .redis_lock import LockHandle, RedisLockClient

__all__ = ["RedisLockClient", "LockHandle"]
