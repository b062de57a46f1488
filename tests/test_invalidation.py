"""
Unit tests for cache invalidation.
"""

from unittest.mock import AsyncMock

import pytest

from cachelock.cache import invalidate
from cachelock.cache.serialization import serialize
from cachelock.errors import StoreError


class TestInvalidate:
    """Test cases for invalidate()."""

    @pytest.mark.asyncio
    async def test_removes_entry(self, store):
        await store.set("report", serialize({"total": 1}), ex=60)

        await invalidate("report", store)

        assert await store.get("report") is None

    @pytest.mark.asyncio
    async def test_absent_key_is_not_an_error(self, store):
        assert await invalidate("missing", store) is None

    @pytest.mark.asyncio
    async def test_leaves_lock_untouched(self, store):
        await store.set("report", serialize(1))
        await store.set("report:lock", "token", px=60_000)

        await invalidate("report", store)

        assert await store.get("report:lock") == "token"

    @pytest.mark.asyncio
    async def test_store_error_propagates(self, store):
        store.delete = AsyncMock(side_effect=ConnectionError("down"))

        with pytest.raises(StoreError) as exc_info:
            await invalidate("report", store)

        assert exc_info.value.key == "report"
        assert isinstance(exc_info.value.__cause__, ConnectionError)
