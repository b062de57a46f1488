"""Cache-aside decorator with distributed recomputation locking.

Usage:
    from cachelock.cache import cached
    from cachelock.config import get_redis

    @cached(key="reports:daily", store=get_redis(), ttl=300)
    async def build_daily_report(day: date) -> Report:
        ...

A call looks the key up first. On a miss it takes the ``<key>:lock`` lock
(unless ``lock=False``), runs the function, writes the result with ``ttl`` and
only then releases the lock and returns.
"""

from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from cachelock.errors import StoreReadError, StoreWriteError
from cachelock.lock.redis_lock import LockHandle, RedisLockClient
from cachelock.logging_config import get_logger
from cachelock.settings import get_settings

from .keys import lock_key_for
from .serialization import deserialize, serialize
from .store import CacheStore

logger = get_logger(name=__name__)

T = TypeVar("T")

DEFAULT_LOCK_TTL_MS = 60_000

_MISSING = object()


class CacheOptions(BaseModel):
    """Validated options of one cached function."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1, description="Cache key the result is stored under")
    ttl: int = Field(gt=0, description="Seconds until a written entry expires")
    lock_ttl: int = Field(
        default=DEFAULT_LOCK_TTL_MS,
        gt=0,
        description="Max milliseconds the recomputation lock may be held",
    )
    lock: bool = Field(default=True, description="Serialize recomputation across callers")

    @property
    def lock_key(self) -> str:
        return lock_key_for(self.key)


def wrap(
    func: Callable[..., Awaitable[T]],
    *,
    key: str,
    store: CacheStore,
    ttl: int,
    lock_ttl: Optional[int] = None,
    lock: bool = True,
    lock_client: Optional[RedisLockClient] = None,
) -> Callable[..., Awaitable[T]]:
    """Return a version of ``func`` whose result is cached under ``key``.

    Args:
        func: Async function to cache. Called with the caller's arguments unchanged.
        key: Cache key (fixed for every call of the returned function).
        store: Key-value store holding both the entry and its lock.
        ttl: Time-to-live of the cached entry in seconds.
        lock_ttl: Max milliseconds a recomputation lock may be held
            (defaults to ``settings.lock_ttl_ms``).
        lock: Whether concurrent misses wait on a distributed lock.
        lock_client: Lock client to use; defaults to a ``RedisLockClient``
            over ``store`` with the configured poll interval.

    Raises (from the returned function):
        StoreReadError: the lookup failed. Nothing was locked or computed.
        StoreWriteError: the result was computed but could not be cached.
            The result is discarded.
        LockError: the lock backend failed or timed out.
        Any exception raised by ``func`` itself, unchanged. Nothing is cached.
    """
    settings = get_settings()
    options = CacheOptions(
        key=key,
        ttl=ttl,
        lock_ttl=lock_ttl if lock_ttl is not None else settings.lock_ttl_ms,
        lock=lock,
    )
    locks = lock_client

    def get_lock_client() -> RedisLockClient:
        nonlocal locks
        if locks is None:
            locks = RedisLockClient(
                store,
                poll_interval_ms=settings.lock_poll_interval_ms,
                acquire_timeout=settings.lock_acquire_timeout,
            )
        return locks

    async def lookup() -> Any:
        try:
            raw = await store.get(options.key)
        except Exception as e:
            raise StoreReadError(f"Cache GET failed for {options.key}: {e}", key=options.key) from e
        if raw is None:
            return _MISSING
        try:
            return deserialize(raw)
        except Exception as e:
            raise StoreReadError(
                f"Cached value for {options.key} could not be decoded: {e}", key=options.key
            ) from e

    async def write(value: Any) -> None:
        try:
            await store.set(options.key, serialize(value), ex=options.ttl)
        except Exception as e:
            logger.warning("Cache SET failed for {}: {}", options.key, e)
            raise StoreWriteError(f"Cache SET failed for {options.key}: {e}", key=options.key) from e

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        cached_value = await lookup()
        if cached_value is not _MISSING:
            logger.debug("Cache HIT: {}", options.key)
            return cached_value

        logger.debug("Cache MISS: {}", options.key)
        handle: Optional[LockHandle] = None
        if options.lock:
            handle = await get_lock_client().acquire(options.lock_key, options.lock_ttl)
        try:
            result = await func(*args, **kwargs)
            await write(result)
        finally:
            if handle is not None:
                await _release_quietly(handle)
        return result

    wrapper.__cache_key__ = options.key
    wrapper.__cache_ttl__ = options.ttl
    wrapper.__cache_options__ = options

    return wrapper


def cached(
    *,
    key: str,
    store: CacheStore,
    ttl: int,
    lock_ttl: Optional[int] = None,
    lock: bool = True,
    lock_client: Optional[RedisLockClient] = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator form of :func:`wrap`."""
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        return wrap(
            func,
            key=key,
            store=store,
            ttl=ttl,
            lock_ttl=lock_ttl,
            lock=lock,
            lock_client=lock_client,
        )
    return decorator


async def _release_quietly(handle: LockHandle) -> None:
    # A failed release must not mask the call's own outcome; the lock TTL frees it.
    try:
        await handle.release()
    except Exception as e:
        logger.warning("Failed to release lock {}: {}", handle.name, e)
