"""Configuration errors raised by the retry engine.

The engine itself has exactly one failure mode: being assembled wrongly.
Operation failures are never wrapped or translated; they come back to the
caller as the operation produced them.
"""

from __future__ import annotations

from typing import Self


class RetryConfigError(ValueError):
    """A retry policy or condition was built in a way that can never work.

    Raised before the retried operation runs whenever the problem is
    detectable up front (e.g. ``Condition.on_error(int)``), otherwise on the
    first result, before any retry or sleep happens.

    Attributes:
        field: Name of the offending setting, when there is one
    """

    __slots__ = ("field",)

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)

    @classmethod
    def not_fallible(cls, what: object) -> Self:
        """on_error() used with a result type that cannot represent failure."""
        if isinstance(what, type):
            name = what.__qualname__
        elif hasattr(what, "__origin__"):  # annotation such as list[int]
            name = repr(what)
        else:
            name = f"a {type(what).__qualname__} value"
        return cls(
            f"on_error conditions need a fallible result type (one with is_err()); got {name}. "
            "Use Condition.func() for plain values or wrap the operation with try_fn().",
            field="condition",
        )
