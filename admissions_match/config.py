"""
Environment-driven settings for the recommendation engine and its worker.

Usage:
    from admissions_match.config import get_settings
    settings = get_settings()

For scoring weights and fixed constants, import from admissions_match.constants.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_BATCH_SIZE, DEFAULT_INTERVAL_MINUTES

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Settings read from the environment, falling back to a local .env file.

    Only DATABASE_URL matters for production; everything else has a
    working default.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # General
    environment: str = Field(default="development", validation_alias="ENV")
    debug: bool = Field(default=False, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Database
    database_url: str = Field(default="sqlite:///admissions_match.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")

    # Scheduler
    enable_scheduler: bool = Field(default=True, validation_alias="ENABLE_SCHEDULER")
    recommendation_interval_minutes: int = Field(
        default=DEFAULT_INTERVAL_MINUTES, ge=1, validation_alias="RECOMMENDATION_INTERVAL_MINUTES"
    )
    recommendation_batch_size: int = Field(
        default=DEFAULT_BATCH_SIZE, ge=1, validation_alias="RECOMMENDATION_BATCH_SIZE"
    )
    scheduler_misfire_grace_time: int = Field(default=300, ge=1, validation_alias="SCHEDULER_MISFIRE_GRACE_TIME")
    scheduler_jobstore_url: Optional[str] = Field(default=None, validation_alias="SCHEDULER_JOBSTORE_URL")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level and reject unknown names."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)} (got {v!r})")
        return level

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
