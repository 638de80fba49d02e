"""Retry policies for fallible operations.

Wraps any callable with a bounded retry loop: run once, and while the result
is retry-worthy, wait the next backoff delay and run again, until the
condition is satisfied or the budget is spent.

Example:
    >>> from retrycase.runtime.retry import Condition, Policy
    >>> from retrycase.foundation.errors import try_fn
    >>>
    >>> policy = Policy.exponential(delay=50_000_000, base=2.0).with_max_retries(3)
    >>>
    >>> # Retry on failure: the operation returns a Result (or raises, via try_fn)
    >>> response = policy.retry(try_fn(session.get, ConnectionError), url)
    >>>
    >>> # Retry on an arbitrary condition over plain values
    >>> ready = policy.retry_if(queue_depth, Condition.func(lambda n: n > 0))
"""

from .backoff import Backoff, BackoffIterator, ExponentialBackoff, FixedBackoff
from .condition import Condition, OnError, Predicate
from .policy import NO_RETRY, Policy, RandomSource, sleep_ns

__all__ = [
    # Backoff strategies
    "Backoff", "FixedBackoff", "ExponentialBackoff", "BackoffIterator",
    # Conditions
    "Condition", "OnError", "Predicate",
    # Policy
    "Policy", "NO_RETRY", "RandomSource", "sleep_ns",
]
