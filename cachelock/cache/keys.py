"""Cache and lock key helpers.

Convention: the lock guarding recomputation of ``<key>`` lives at ``<key>:lock``.

Examples:
    reports:daily       -> reports:daily:lock
    cache:user:42       -> cache:user:42:lock
"""

LOCK_SUFFIX = ":lock"


def lock_key_for(cache_key: str) -> str:
    """Return the lock key that serializes recomputation of ``cache_key``."""
    return f"{cache_key}{LOCK_SUFFIX}"
