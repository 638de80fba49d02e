"""Retry policy: configuration, delay-sequence factory and execution loop.

A Policy is immutable configuration. Every execution binds its backoff to a
fresh BackoffIterator holding a private copy of the retry budget, so one
Policy value can serve any number of sequential or concurrent executions.

Optimizations:
- Frozen for immutability and hashability
- Budget copied into the iterator, never decremented on the Policy
- Collaborators (sleep, random source) injected, no module-level state
"""

from __future__ import annotations

import logging
import random
import time
from functools import wraps
from typing import Any, Callable, ParamSpec, Protocol, TypeVar, get_type_hints, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt

from retrycase.foundation.config import DEFAULT_DELAY_NS, DEFAULT_MAX_RETRIES, RetrySettings, get_settings

from .backoff import Backoff, BackoffIterator, ExponentialBackoff, FixedBackoff
from .condition import Condition

logger = logging.getLogger("retrycase.retry")

P = ParamSpec("P")
R = TypeVar("R")

_NS_PER_SECOND = 1_000_000_000


@runtime_checkable
class RandomSource(Protocol):
    """Uniform float source in [0, 1). ``random.Random`` satisfies it."""

    def random(self) -> float: ...


def sleep_ns(ns: int) -> None:
    """Block the calling thread for ``ns`` nanoseconds."""
    time.sleep(ns / _NS_PER_SECOND)


def _declared_result(operation: Callable[..., object]) -> object:
    """Return annotation of ``operation``, or None when absent or unresolvable."""
    try:
        return get_type_hints(operation).get("return")
    except (NameError, TypeError, AttributeError):
        # Forward references or non-function callables; OnError checks the first value instead
        return None


def _name(operation: Callable[..., object]) -> str:
    return getattr(operation, "__qualname__", None) or repr(operation)


class Policy(BaseModel):
    """Configurable retry policy.

    The operation always runs once; ``max_retries`` bounds the additional
    attempts. Delays are in nanoseconds: ``delay`` is scaled by the backoff
    multiplier, then by a uniform [0, 1) draw when ``jitter`` is on, then
    capped at ``max_delay``.

    Attributes:
        backoff: Multiplier growth strategy (default: ExponentialBackoff(2.0))
        jitter: Scale each delay by ``rng.random()``
        delay: Base delay in nanoseconds
        max_delay: Hard cap applied after jitter
        max_retries: Retry budget (0 = run once, never retry)
        rng: Random source for jitter, one per Policy unless supplied
        sleep: Blocking sleep taking nanoseconds
        on_retry: Optional hook called as (retry_index, result, delay_ns) before each
            sleep. retry_index is 0-based: 0 before the first retry, so it trails
            the 1-based "Retry n/max" log line by one

    Example:
        >>> policy = Policy.exponential(delay=10_000_000, base=2.0).with_max_retries(3)
        >>> result = policy.retry(fetch, "https://example.com")   # fetch returns a Result
        >>> count = policy.retry_if(poll, Condition.func(lambda n: n < 3))
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,  # Backoff / RandomSource protocols
        validate_default=True,
        extra="forbid",
        revalidate_instances="never",
    )

    backoff: Backoff = Field(default_factory=ExponentialBackoff)
    jitter: bool = True
    delay: NonNegativeInt = DEFAULT_DELAY_NS
    max_delay: NonNegativeInt | None = None
    max_retries: NonNegativeInt = DEFAULT_MAX_RETRIES
    rng: RandomSource = Field(default_factory=random.Random, exclude=True, repr=False)
    sleep: Callable[[int], None] = Field(default=sleep_ns, exclude=True, repr=False)
    on_retry: Callable[[int, Any, int], None] | None = Field(default=None, exclude=True, repr=False)

    # ─── Construction ────────────────────────────────────────────────

    @classmethod
    def fixed(cls, delay: int) -> Policy:
        """Every retry waits ``delay`` nanoseconds (before jitter/cap)."""
        return cls(backoff=FixedBackoff(), delay=delay)

    @classmethod
    def exponential(cls, delay: int, base: float) -> Policy:
        """Retries wait delay, delay*base, delay*base², ..."""
        return cls(backoff=ExponentialBackoff(base), delay=delay)

    @classmethod
    def from_settings(cls, settings: RetrySettings | None = None, **overrides: Any) -> Policy:
        """Build a Policy from RETRYCASE_RETRY_* settings; keyword overrides win."""
        s = settings or get_settings().retry
        backoff = FixedBackoff() if s.backoff == "fixed" else ExponentialBackoff(s.exponential_base)
        fields: dict[str, Any] = {
            "backoff": backoff, "jitter": s.jitter, "delay": s.delay,
            "max_delay": s.max_delay, "max_retries": s.max_retries,
        }
        return cls(**{**fields, **overrides})

    def _replace(self, **changes: Any) -> Policy:
        """Validated copy with ``changes`` applied. Collaborators are carried over."""
        return type(self)(**{**{name: getattr(self, name) for name in type(self).model_fields}, **changes})

    def with_max_retries(self, n: int) -> Policy:
        """Copy with a new retry budget; this Policy is left unchanged."""
        return self._replace(max_retries=n)

    def with_max_delay(self, cap: int | None) -> Policy:
        """Copy with a new delay cap (None removes it)."""
        return self._replace(max_delay=cap)

    def with_jitter(self, enabled: bool = True, rng: RandomSource | None = None) -> Policy:
        """Copy with jitter toggled, optionally swapping the random source."""
        return self._replace(jitter=enabled, **({"rng": rng} if rng is not None else {}))

    def backoffs(self) -> BackoffIterator:
        """Fresh sequence of the delays an execution of this policy would use."""
        return self.backoff.iterator(self)

    # ─── Execution ───────────────────────────────────────────────────

    def retry(self, operation: Callable[P, R], /, *args: P.args, **kwargs: P.kwargs) -> R:
        """Run ``operation`` and retry it while its result is a failure.

        The operation must return a Fallible value (e.g. Result). A return
        annotation that rules this out is rejected before the first call.

        Raises:
            RetryConfigError: If the operation's result cannot represent failure
        """
        return self.retry_if(operation, Condition.on_error(_declared_result(operation)), *args, **kwargs)

    def retry_if(
        self, operation: Callable[P, R], condition: Condition[R], /, *args: P.args, **kwargs: P.kwargs,
    ) -> R:
        """Run ``operation`` and retry it while ``condition`` says so.

        Stops on the first result the condition accepts or when the budget
        is spent. The last result is always returned as-is; running out of
        retries is not an error. Exceptions from the operation propagate.
        """
        iterator = self.backoffs()
        attempt = 0
        while True:
            result = operation(*args, **kwargs)
            if condition.retryable(result):
                if (delay := iterator.next()) is not None:
                    logger.debug(
                        f"[{_name(operation)}] Retry {attempt + 1}/{self.max_retries} after {delay}ns",
                        extra={"attempt": attempt + 1, "delay_ns": delay},
                    )
                    if self.on_retry:
                        self.on_retry(attempt, result, delay)
                    self.sleep(delay)
                    attempt += 1
                    continue
                logger.info(
                    f"[{_name(operation)}] Retry budget exhausted after {attempt + 1} attempt(s)",
                    extra={"attempts": attempt + 1},
                )
            return result

    def wrap(self, condition: Condition[R] | None = None) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """Decorator form of retry/retry_if.

        Without a condition the decorated function is retried on failure, and
        its return annotation is checked once at decoration time.

        Example:
            >>> @Policy.fixed(1_000_000).wrap()
            ... def fetch(url: str) -> Result[bytes, str]: ...
        """
        def decorator(fn: Callable[P, R]) -> Callable[P, R]:
            cond = condition if condition is not None else Condition.on_error(_declared_result(fn))

            @wraps(fn)
            def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                return self.retry_if(fn, cond, *args, **kwargs)
            return wrapper
        return decorator


# Singleton for run-once semantics
NO_RETRY = Policy(max_retries=0)
