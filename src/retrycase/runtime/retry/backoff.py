"""Backoff strategies and the delay sequence they drive.

A backoff only decides how the delay multiplier grows between retries:
- FixedBackoff: multiplier stays 1.0, every delay equals the base delay
- ExponentialBackoff: multiplier grows geometrically (1, b, b², ...)

Base delay, jitter, cap and retry budget live on the Policy. Binding a
backoff to a policy yields a BackoffIterator: a finite, single-use sequence
of exactly ``max_retries`` inter-attempt delays, in nanoseconds.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from retrycase.foundation.config import DEFAULT_EXPONENTIAL_BASE
from retrycase.foundation.errors import RetryConfigError

if TYPE_CHECKING:
    from .policy import Policy, RandomSource

# Longest representable delay; exponential growth saturates here
_MAX_NS = sys.maxsize


def _to_ns(value: float) -> int:
    """Truncate to whole nanoseconds, saturating instead of overflowing."""
    if math.isnan(value):  # inf * 0
        return 0
    return int(value) if value < _MAX_NS else _MAX_NS


@runtime_checkable
class Backoff(Protocol):
    """Protocol for delay-multiplier growth.

    Implementations are immutable. ``grow`` maps the multiplier used for the
    current retry to the one used for the next.
    """

    def grow(self, current: float) -> float:
        """Next multiplier after ``current`` has been used."""
        ...

    def iterator(self, policy: Policy) -> BackoffIterator:
        """Fresh delay sequence bound to ``policy``'s parameters."""
        ...


@dataclass(frozen=True, slots=True)
class FixedBackoff:
    """Constant delay between retries.

    Simple strategy for rate-limited APIs with a known cooldown.
    """

    def grow(self, current: float) -> float:
        return current

    def iterator(self, policy: Policy) -> BackoffIterator:
        return BackoffIterator(policy, self)


@dataclass(frozen=True, slots=True)
class ExponentialBackoff:
    """Exponential growth of the delay multiplier.

    Delay for retry n (0-indexed) = delay * base^n, before jitter and cap.

    Attributes:
        base: Growth factor per retry (default: 2.0)
    """

    base: float = DEFAULT_EXPONENTIAL_BASE

    def __post_init__(self) -> None:
        if isinstance(self.base, bool) or not isinstance(self.base, (int, float)):
            raise RetryConfigError(f"Exponential base must be a number, got {self.base!r}", field="base")
        if not math.isfinite(self.base) or self.base <= 0:
            raise RetryConfigError(f"Exponential base must be positive and finite, got {self.base}", field="base")

    def grow(self, current: float) -> float:
        return current * self.base

    def iterator(self, policy: Policy) -> BackoffIterator:
        return BackoffIterator(policy, self)


class BackoffIterator:
    """Finite sequence of inter-attempt delays for one execution.

    Copies the policy's parameters at creation; the retry budget it
    decrements is its own, so the spawning Policy is never touched and any
    number of iterators can run from the same Policy independently.

    ``next()`` returns the next delay or None once the budget is spent; it
    stays exhausted from then on. Standard iteration stops at the same point:

        >>> list(Policy.exponential(1, 2.0).with_jitter(False).with_max_retries(4).backoffs())
        [1, 2, 4, 8]
    """

    __slots__ = ("_remaining", "_delay", "_max_delay", "_jitter", "_rng", "_backoff", "_current")

    def __init__(self, policy: Policy, backoff: Backoff) -> None:
        self._remaining: int = policy.max_retries
        self._delay: int = policy.delay
        self._max_delay: int | None = policy.max_delay
        self._jitter: bool = policy.jitter
        self._rng: RandomSource = policy.rng
        self._backoff = backoff
        self._current = 1.0

    @property
    def remaining(self) -> int:
        """Delays left before the sequence is exhausted."""
        return self._remaining

    def next(self) -> int | None:
        """Produce the next delay in nanoseconds, or None when exhausted."""
        if self._remaining == 0:
            return None
        factor, self._current = self._current, self._backoff.grow(self._current)
        delay = _to_ns(factor * self._delay)
        if self._jitter:
            delay = _to_ns(self._rng.random() * delay)
        if self._max_delay is not None:
            delay = min(delay, self._max_delay)
        self._remaining -= 1
        return delay

    def __iter__(self) -> BackoffIterator:
        return self

    def __next__(self) -> int:
        if (delay := self.next()) is None:
            raise StopIteration
        return delay

    def __repr__(self) -> str:
        return f"BackoffIterator({type(self._backoff).__name__}, remaining={self._remaining})"
