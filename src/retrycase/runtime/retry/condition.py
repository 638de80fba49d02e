"""Retry conditions: decide whether a just-produced result deserves another attempt.

Two variants, built through the Condition factories:
- Condition.on_error(): retry while the result reports failure (Fallible.is_err())
- Condition.func(pred): retry while pred(result) is true, for any result type

Example:
    >>> Condition.on_error().retryable(Err("boom"))
    True
    >>> Condition.func(lambda n: n < 3).retryable(3)
    False
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from retrycase.foundation.errors import Fallible, RetryConfigError, is_fallible_type

T = TypeVar("T")


class Condition(ABC, Generic[T]):
    """Retry-decision predicate over an operation's result type T.

    Conditions are pure: they only look at the value they are given.
    """

    __slots__ = ()

    @abstractmethod
    def retryable(self, value: T) -> bool:
        """True if another attempt should be made after seeing ``value``."""

    @staticmethod
    def on_error(result_type: object = None) -> OnError:
        """Retry on any failed result.

        Args:
            result_type: Declared result type of the operation, if known. A
                type that cannot represent failure is rejected right here.

        Raises:
            RetryConfigError: If ``result_type`` is not Fallible
        """
        if result_type is not None and not is_fallible_type(result_type):
            raise RetryConfigError.not_fallible(result_type)
        return OnError(result_type)

    @staticmethod
    def func(predicate: Callable[[T], bool]) -> Predicate[T]:
        """Retry depending on a caller-defined predicate over the result."""
        if not callable(predicate):
            raise RetryConfigError(f"Condition predicate must be callable, got {predicate!r}", field="condition")
        return Predicate(predicate)


@dataclass(frozen=True, slots=True)
class OnError(Condition[Fallible]):
    """Retry while the result is a failure. Success is never retried."""

    result_type: object = None

    def retryable(self, value: Fallible) -> bool:
        # Undeclared result types are checked on the first value, before any retry
        if not isinstance(value, Fallible):
            raise RetryConfigError.not_fallible(value)
        return bool(value.is_err())


@dataclass(frozen=True, slots=True)
class Predicate(Condition[T]):
    """Retry while ``fn(result)`` is true. No success/failure inspection."""

    fn: Callable[[T], bool]

    def retryable(self, value: T) -> bool:
        return bool(self.fn(value))
