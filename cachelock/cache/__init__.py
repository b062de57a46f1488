"""Caching utilities: decorator, invalidation, and key helpers."""

from .decorator import CacheOptions, cached, wrap
from .invalidation import invalidate
from .keys import lock_key_for
from .store import CacheStore

__all__ = ["wrap", "cached", "invalidate", "CacheOptions", "CacheStore", "lock_key_for"]
