"""Retrycase - retry policies with pluggable backoff and retry conditions.

Wraps an arbitrary fallible operation with a bounded sequence of
re-invocations separated by computed delays. Stops on success, on a
caller-defined condition, or when the retry budget runs out; the last
result is always handed back unchanged.

Quick Start:
    >>> from retrycase import Condition, Err, Ok, Policy, Result
    >>>
    >>> policy = Policy.fixed(delay=1_000_000).with_max_retries(3)   # 1ms, 3 retries
    >>>
    >>> def flaky() -> Result[str, str]:
    ...     return Ok("done") if service_up() else Err("unavailable")
    >>> policy.retry(flaky)
    Ok('done')

Plain values with a predicate:
    >>> policy.retry_if(counter.incr, Condition.func(lambda n: n < 3))
    3

Exceptions as failures:
    >>> from retrycase import try_fn
    >>> policy.retry(try_fn(requests.get, ConnectionError), url)

Inspecting the delay sequence:
    >>> list(Policy.exponential(1, 2.0).with_jitter(False).with_max_retries(4).backoffs())
    [1, 2, 4, 8]

Environment defaults (RETRYCASE_RETRY_*, RETRYCASE_LOG_*):
    >>> policy = Policy.from_settings()
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors & result values
from .foundation.errors import Err, Fallible, Ok, Result, RetryConfigError, is_fallible_type, try_fn

# Configuration
from .foundation.config import LoggingSettings, RetrycaseSettings, RetrySettings, clear_settings_cache, get_settings

# Retry
from .runtime.retry import (
    NO_RETRY,
    Backoff,
    BackoffIterator,
    Condition,
    ExponentialBackoff,
    FixedBackoff,
    OnError,
    Policy,
    Predicate,
    RandomSource,
    sleep_ns,
)

# Observability
from .runtime.observability import configure_logging

__all__ = [
    "__version__",
    # Errors
    "RetryConfigError", "Result", "Ok", "Err", "Fallible", "is_fallible_type", "try_fn",
    # Configuration
    "RetrySettings", "LoggingSettings", "RetrycaseSettings", "get_settings", "clear_settings_cache",
    # Retry
    "Policy", "NO_RETRY", "Backoff", "FixedBackoff", "ExponentialBackoff", "BackoffIterator",
    "Condition", "OnError", "Predicate", "RandomSource", "sleep_ns",
    # Observability
    "configure_logging",
]
