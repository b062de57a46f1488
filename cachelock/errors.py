"""Exceptions raised by cachelock.

Failures of the wrapped function itself are not wrapped: the caller gets
back exactly the exception their function raised.
"""

from typing import Optional


class CacheError(Exception):
    """Base class for every cachelock failure."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class StoreError(CacheError):
    """A store operation failed."""


class StoreReadError(StoreError):
    """Looking up a cache entry failed; nothing was computed."""


class StoreWriteError(StoreError):
    """The result was computed but could not be cached.

    The computed value is discarded.
    """


class LockError(CacheError):
    """The lock backend failed while acquiring a lock."""


class LockAcquisitionTimeout(LockError):
    """A lock could not be acquired within the configured timeout."""

    def __init__(self, key: str, timeout: float):
        super().__init__(f"Timed out after {timeout}s waiting for lock {key!r}", key=key)
        self.timeout = timeout
