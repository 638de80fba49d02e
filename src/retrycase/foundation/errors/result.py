"""Result/Either type for operations that report failure as a value.

A retried operation signals failure either by returning an Err or by raising.
Result is the fallible-result type the retry engine understands natively:
anything implementing the Fallible protocol (an ``is_err()`` method) can be
retried with ``Condition.on_error()``.

The engine only ever asks a result whether it failed, so Result stays a
small slotted value: construction, variant checks and extraction.
"""

from __future__ import annotations

from functools import wraps
from types import UnionType
from typing import (
    Any,
    Callable,
    Generic,
    ParamSpec,
    Protocol,
    TypeVar,
    Union,
    get_args,
    get_origin,
    runtime_checkable,
)

T = TypeVar("T")
E = TypeVar("E")
P = ParamSpec("P")

# Sentinel for faster Ok/Err construction
_OK = True
_ERR = False


@runtime_checkable
class Fallible(Protocol):
    """Protocol for result values that can represent failure.

    Only types implementing this may be retried with ``Condition.on_error()``.
    Result implements it; so can any caller-defined response wrapper.
    """

    def is_err(self) -> bool: ...


class Result(Generic[T, E]):
    """Discriminated union representing success (Ok) or failure (Err).

    Examples:
        >>> Ok(42).unwrap()
        42
        >>> Err("fail").is_err()
        True
        >>> Err("fail").ok() is None
        True
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        self._value = value
        self._is_ok = is_ok

    # ─── Type Checking ───────────────────────────────────────────────

    def is_ok(self) -> bool:
        """Check if Result is Ok variant."""
        return self._is_ok

    def is_err(self) -> bool:
        """Check if Result is Err variant."""
        return not self._is_ok

    # ─── Value Extraction ──────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Ok value. Raises RuntimeError on Err."""
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap() on Err: {self._value}")

    def unwrap_err(self) -> E:
        """Extract Err value. Raises RuntimeError on Ok."""
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap_err() on Ok: {self._value}")

    def ok(self) -> T | None:
        """Some(T) if Ok, None if Err."""
        return self._value if self._is_ok else None  # type: ignore[return-value]

    def err(self) -> E | None:
        """Some(E) if Err, None if Ok."""
        return self._value if not self._is_ok else None  # type: ignore[return-value]

    # ─── Dunder Methods ──────────────────────────────────────────────────

    __bool__ = lambda self: self._is_ok  # noqa: E731
    __hash__ = lambda self: hash((self._is_ok, self._value))  # noqa: E731
    __repr__ = lambda self: f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"  # noqa: E731
    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        return self._is_ok == other._is_ok and self._value == other._value if isinstance(other, Result) else NotImplemented


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct Ok variant (success)."""
    return Result(value, _OK)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct Err variant (failure)."""
    return Result(error, _ERR)


# ═══════════════════════════════════════════════════════════════════════════════
# Adapters
# ═══════════════════════════════════════════════════════════════════════════════


def try_fn(
    fn: Callable[P, T], *catch: type[Exception],
) -> Callable[P, Result[T, Exception]]:
    """Turn a raising callable into one returning Ok(value) or Err(exception).

    The retry engine never retries exceptions: they propagate to the caller.
    Wrapping an operation with try_fn makes its exceptions retryable with
    ``Condition.on_error()``. Only ``catch`` types are captured (default:
    Exception); anything else still propagates.

    Example:
        >>> fetch = try_fn(client.get, ConnectionError, TimeoutError)
        >>> result = policy.retry(fetch, "https://example.com")
        >>> if result.is_err():
        ...     raise result.unwrap_err()
    """
    errors = catch or (Exception,)

    @wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, Exception]:
        try:
            return Ok(fn(*args, **kwargs))
        except errors as e:
            return Err(e)

    # wraps() copies fn's return annotation; the wrapper always returns a Result
    wrapper.__annotations__ = {**getattr(fn, "__annotations__", {}), "return": Result}
    return wrapper


def is_fallible_type(tp: object) -> bool:
    """Whether values annotated as ``tp`` can report failure.

    Generic aliases resolve to their origin (``Result[int, str]`` → Result).
    A union is fallible if any member is. Special forms such as Any or a
    TypeVar cannot be decided statically and count as fallible; the
    per-value check in ``Condition.on_error()`` covers them.
    """
    origin = get_origin(tp)
    if origin in (Union, UnionType):
        return any(is_fallible_type(arg) for arg in get_args(tp))
    cls = origin or tp
    if cls is Any or not isinstance(cls, type):
        return True
    return issubclass(cls, Fallible)
