"""Settings for cachelock.

Values are read from ``CACHELOCK_*`` environment variables or a ``.env`` file
in the working directory. Every field has a default, so a bare environment
works against a local Redis.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration shared by the decorator and the lock client."""

    model_config = SettingsConfigDict(
        env_prefix="CACHELOCK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Redis ===
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL used by init_redis()",
    )

    # === Locking ===
    lock_poll_interval_ms: int = Field(
        default=25,
        description="Delay between lock acquisition attempts",
        ge=1,
    )
    lock_ttl_ms: int = Field(
        default=60_000,
        description="Default max time a recomputation lock may be held",
        ge=1,
    )
    lock_acquire_timeout: Optional[float] = Field(
        default=None,
        description="Seconds to wait for a lock before giving up (unset waits indefinitely)",
        gt=0,
    )

    # === Logging ===
    log_level: str = Field(default="INFO", description="Loguru sink level")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
