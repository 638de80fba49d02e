"""Configuration management using pydantic-settings.

Provides environment-based defaults for retry policies and logging.
"""

from .settings import (
    DEFAULT_DELAY_NS,
    DEFAULT_EXPONENTIAL_BASE,
    DEFAULT_MAX_RETRIES,
    LoggingSettings,
    RetrycaseSettings,
    RetrySettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "DEFAULT_DELAY_NS",
    "DEFAULT_EXPONENTIAL_BASE",
    "DEFAULT_MAX_RETRIES",
    "LoggingSettings",
    "RetrySettings",
    "RetrycaseSettings",
    "clear_settings_cache",
    "get_settings",
]
