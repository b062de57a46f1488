"""Polling distributed lock built on ``redis.asyncio.lock.Lock``.

A lock is a key set with ``SET <name> <token> NX PX <ttl>``. Waiters retry on
a fixed poll interval until the holder frees the key or its TTL lapses.
Release runs redis-py's compare-and-delete script, so a holder whose lock
already expired cannot free the next owner's lock.
"""

from __future__ import annotations

import uuid
from typing import Optional

from redis.asyncio import Redis
from redis.asyncio.lock import Lock
from redis.exceptions import LockNotOwnedError, RedisError

from cachelock.errors import LockAcquisitionTimeout, LockError
from cachelock.logging_config import get_logger

logger = get_logger(name=__name__)

DEFAULT_POLL_INTERVAL_MS = 25


class LockHandle:
    """Ownership of one acquired lock."""

    def __init__(self, lock: Lock, token: str):
        self._lock = lock
        self.name = lock.name
        self.token = token
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    async def release(self) -> bool:
        """Free the lock. Returns True if this handle still owned it.

        Safe to call more than once; later calls do nothing.

        Raises:
            LockError: the store failed while releasing.
        """
        if self._released:
            return False
        self._released = True

        try:
            await self._lock.release()
        except LockNotOwnedError:
            logger.debug("Lock {} expired or taken over before release", self.name)
            return False
        except RedisError as e:
            raise LockError(f"Failed to release lock {self.name!r}: {e}", key=self.name) from e
        logger.debug("Released lock {}", self.name)
        return True

    async def __aenter__(self) -> "LockHandle":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.release()


class RedisLockClient:
    """Acquires named locks against a shared Redis.

    Args:
        redis: Client holding the lock keys (usually the cache's own store).
        poll_interval_ms: Delay between acquisition attempts.
        acquire_timeout: Seconds to wait before raising
            :class:`LockAcquisitionTimeout`. ``None`` waits until the lock is free.
    """

    def __init__(
        self,
        redis: Redis,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        acquire_timeout: Optional[float] = None,
    ):
        if poll_interval_ms < 1:
            raise ValueError("poll_interval_ms must be >= 1")
        if acquire_timeout is not None and acquire_timeout <= 0:
            raise ValueError("acquire_timeout must be positive")
        self.redis = redis
        self.poll_interval_ms = poll_interval_ms
        self.acquire_timeout = acquire_timeout

    def _lock(self, name: str, max_hold_ms: int) -> Lock:
        return Lock(
            self.redis,
            name,
            timeout=max_hold_ms / 1000,
            sleep=self.poll_interval_ms / 1000,
            blocking_timeout=self.acquire_timeout,
            thread_local=False,
        )

    async def _acquire(self, name: str, max_hold_ms: int, blocking: bool) -> Optional[LockHandle]:
        lock = self._lock(name, max_hold_ms)
        token = uuid.uuid4().hex
        try:
            acquired = await lock.acquire(blocking=blocking, token=token)
        except RedisError as e:
            raise LockError(f"Failed to acquire lock {name!r}: {e}", key=name) from e
        if not acquired:
            return None
        return LockHandle(lock, token)

    async def try_acquire(self, name: str, max_hold_ms: int) -> Optional[LockHandle]:
        """Single acquisition attempt. Returns a handle or None if held elsewhere."""
        return await self._acquire(name, max_hold_ms, blocking=False)

    async def acquire(self, name: str, max_hold_ms: int) -> LockHandle:
        """Wait until ``name`` is acquired and return its handle.

        The lock is forcibly freed by the store after ``max_hold_ms`` even if
        the handle is never released.
        """
        handle = await self._acquire(name, max_hold_ms, blocking=True)
        if handle is None:
            raise LockAcquisitionTimeout(name, self.acquire_timeout)
        logger.debug("Acquired lock {}", name)
        return handle
