"""Runtime - retry execution and its observability.

Contains: retry (backoff, conditions, policy), observability (logging setup).
"""

from .observability import JsonFormatter, TextFormatter, configure_logging
from .retry import (
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

__all__ = [
    # Retry
    "Backoff", "FixedBackoff", "ExponentialBackoff", "BackoffIterator",
    "Condition", "OnError", "Predicate",
    "Policy", "NO_RETRY", "RandomSource", "sleep_ns",
    # Observability
    "configure_logging", "JsonFormatter", "TextFormatter",
]
