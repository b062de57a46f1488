"""
Unit tests for settings and Redis client lifecycle.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError

from cachelock.config import redis as redis_config
from cachelock.settings import get_settings


class TestSettings:
    """Test cases for environment-driven settings."""

    def test_defaults(self):
        settings = get_settings()

        assert settings.redis_url == "redis://localhost:6379/0"
        assert settings.lock_poll_interval_ms == 25
        assert settings.lock_ttl_ms == 60_000
        assert settings.lock_acquire_timeout is None

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("CACHELOCK_LOCK_POLL_INTERVAL_MS", "50")
        monkeypatch.setenv("CACHELOCK_LOCK_ACQUIRE_TIMEOUT", "2.5")

        settings = get_settings()

        assert settings.lock_poll_interval_ms == 50
        assert settings.lock_acquire_timeout == 2.5

    def test_rejects_invalid_poll_interval(self, monkeypatch):
        monkeypatch.setenv("CACHELOCK_LOCK_POLL_INTERVAL_MS", "0")

        with pytest.raises(ValidationError):
            get_settings()


class TestRedisLifecycle:
    """Test cases for the global Redis client."""

    def test_get_before_init_raises(self):
        with patch.object(redis_config, "_client", None):
            with pytest.raises(RuntimeError):
                redis_config.get_redis()

    @pytest.mark.asyncio
    async def test_init_get_close(self):
        client = MagicMock()
        client.ping = AsyncMock()
        client.aclose = AsyncMock()

        with patch.object(redis_config.Redis, "from_url", return_value=client) as from_url:
            assert await redis_config.init_redis("redis://cache:6379/1") is client
            from_url.assert_called_once_with("redis://cache:6379/1", decode_responses=True)
            client.ping.assert_awaited_once()
            assert redis_config.get_redis() is client

            await redis_config.close_redis()

        client.aclose.assert_awaited_once()
        with pytest.raises(RuntimeError):
            redis_config.get_redis()


class TestLogging:
    """Test cases for the shared loguru configuration."""

    def test_bound_logger_reaches_configured_sink(self):
        from loguru import logger

        from cachelock.logging_config import configure_logging, get_logger

        configure_logging("DEBUG")
        messages = []
        sink_id = logger.add(messages.append, level="DEBUG", format="{extra[module]} {message}")
        try:
            get_logger(name="cachelock.tests").debug("Cache HIT: {}", "k")
        finally:
            logger.remove(sink_id)

        assert messages == ["cachelock.tests Cache HIT: k\n"]
