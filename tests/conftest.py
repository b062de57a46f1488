"""
Shared fixtures for cachelock tests.
"""

import os

import fakeredis
import pytest

from cachelock.settings import get_settings


@pytest.fixture
def store():
    """Fresh in-memory Redis returning str values."""
    return fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def bytes_store():
    """Fresh in-memory Redis returning raw bytes, like a client without decode_responses."""
    return fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer())


@pytest.fixture
def set_calls(store):
    """Record the arguments of every SET issued against ``store``."""
    calls = []
    real_set = store.set

    async def recording_set(name, value, ex=None, px=None, nx=False, **kwargs):
        calls.append((name, value, ex, px, nx))
        return await real_set(name, value, ex=ex, px=px, nx=nx, **kwargs)

    store.set = recording_set
    return calls


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Isolate tests from the host environment and from each other."""
    for name in list(os.environ):
        if name.startswith("CACHELOCK_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
