"""Environment-based configuration using pydantic-settings.

Provides process-wide defaults for retry policies and library logging,
validated from environment variables or a .env file.

Example:
    >>> from retrycase.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.retry.max_retries
    5
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # RETRYCASE_RETRY_MAX_RETRIES=8
    # RETRYCASE_RETRY_BACKOFF=fixed
    # RETRYCASE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import (
    Field,
    NonNegativeInt,
    PositiveFloat,
    computed_field,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

# 60µs expressed in nanoseconds, the unit every delay is measured in
DEFAULT_DELAY_NS = 60 * 1000
DEFAULT_MAX_RETRIES = 5
DEFAULT_EXPONENTIAL_BASE = 2.0


class RetrySettings(BaseSettings):
    """Default retry configuration, consumed by ``Policy.from_settings()``."""

    model_config = SettingsConfigDict(
        env_prefix="RETRYCASE_RETRY_",
        extra="ignore",
    )

    max_retries: NonNegativeInt = Field(default=DEFAULT_MAX_RETRIES, description="Retries after the first attempt")
    delay: NonNegativeInt = Field(default=DEFAULT_DELAY_NS, description="Base delay in nanoseconds")
    max_delay: NonNegativeInt | None = Field(default=None, description="Cap applied after jitter, in nanoseconds")
    backoff: Literal["fixed", "exponential"] = "exponential"
    exponential_base: PositiveFloat = Field(default=DEFAULT_EXPONENTIAL_BASE, description="Growth factor per retry")
    jitter: bool = True

    @field_validator("backoff", mode="before")
    @classmethod
    def _normalize_backoff(cls, v: str) -> str:
        """Accept any casing for the backoff name."""
        return v.lower() if isinstance(v, str) else v


class LoggingSettings(BaseSettings):
    """Logging configuration for the ``retrycase`` logger hierarchy."""

    model_config = SettingsConfigDict(
        env_prefix="RETRYCASE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "text"] = "text"
    include_timestamps: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class RetrycaseSettings(BaseSettings):
    """Root settings for retrycase.

    Loads configuration from environment variables with RETRYCASE_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        RETRYCASE_DEBUG=true
        RETRYCASE_RETRY_DELAY=1000000
        RETRYCASE_RETRY_JITTER=false
        RETRYCASE_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="RETRYCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Log every retry decision at DEBUG")

    # Nested settings (loaded with RETRYCASE_RETRY_, RETRYCASE_LOG_)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @computed_field
    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug switch."""
        return "DEBUG" if self.debug else self.logging.level


# Singleton pattern for settings
@lru_cache(maxsize=1)
def get_settings() -> RetrycaseSettings:
    """Get the global settings instance (cached).

    Returns:
        Cached RetrycaseSettings instance
    """
    return RetrycaseSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
