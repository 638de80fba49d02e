"""Tests for retry conditions.

Validates:
- on_error retries failures only
- func defers entirely to the predicate
- Non-fallible result types are rejected as configuration errors
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import pytest

from retrycase import Condition, Err, Fallible, Ok, OnError, Predicate, Result, RetryConfigError


@dataclass
class HttpResponse:
    """Caller-defined fallible result type."""

    status: int

    def is_err(self) -> bool:
        return self.status >= 500


# ═════════════════════════════════════════════════════════════════════════════
# on_error
# ═════════════════════════════════════════════════════════════════════════════


def test_on_error_retries_failures() -> None:
    cond = Condition.on_error()
    assert isinstance(cond, OnError)
    assert cond.retryable(Err("FAIL"))
    assert not cond.retryable(Ok(None))


def test_on_error_accepts_custom_fallible() -> None:
    """Any value with is_err() works, not just Result."""
    cond = Condition.on_error(HttpResponse)
    assert isinstance(HttpResponse(200), Fallible)
    assert cond.retryable(HttpResponse(503))
    assert not cond.retryable(HttpResponse(200))


@pytest.mark.parametrize(
    "result_type",
    [Result, Result[int, str], HttpResponse, Optional[Result[int, str]], Result[int, str] | None, Any],
    ids=["result", "generic-alias", "custom", "optional", "union", "any"],
)
def test_on_error_fallible_types(result_type: object) -> None:
    """Fallible (or undecidable) declared types are accepted."""
    assert Condition.on_error(result_type).result_type is result_type


@pytest.mark.parametrize("result_type", [int, str, type(None), list[int], int | str])
def test_on_error_rejects_plain_types(result_type: object) -> None:
    """A declared type that cannot represent failure fails at construction."""
    with pytest.raises(RetryConfigError) as exc:
        Condition.on_error(result_type)
    assert exc.value.field == "condition"
    assert "fallible" in str(exc.value)


def test_on_error_rejects_plain_values() -> None:
    """Without a declared type, the first plain value is rejected."""
    with pytest.raises(RetryConfigError, match="int value"):
        Condition.on_error().retryable(0)


# ═════════════════════════════════════════════════════════════════════════════
# func
# ═════════════════════════════════════════════════════════════════════════════


def test_func_uses_predicate() -> None:
    cond = Condition.func(lambda n: n < 1)
    assert isinstance(cond, Predicate)
    assert cond.retryable(0)
    assert not cond.retryable(1)


def test_func_ignores_success_semantics() -> None:
    """Predicates see Results as plain values: Ok can be retried, Err accepted."""
    cond: Condition[Result[int, str]] = Condition.func(lambda r: r.ok() != 3)
    assert cond.retryable(Ok(2))
    assert not cond.retryable(Ok(3))
    assert cond.retryable(Err("boom"))


def test_func_coerces_to_bool() -> None:
    cond = Condition.func(lambda items: items)
    assert cond.retryable([1]) is True
    assert cond.retryable([]) is False


def test_func_requires_callable() -> None:
    with pytest.raises(RetryConfigError, match="callable"):
        Condition.func(42)  # type: ignore[arg-type]


def test_conditions_are_values() -> None:
    """Conditions compare structurally and are immutable."""
    pred = lambda n: n < 3  # noqa: E731
    assert Condition.func(pred) == Condition.func(pred)
    assert Condition.on_error() == Condition.on_error()


def test_condition_base_is_abstract() -> None:
    """Only the concrete variants decide; subclasses must implement retryable."""
    with pytest.raises(TypeError):
        Condition()  # type: ignore[abstract]

    class Incomplete(Condition[int]):
        pass

    with pytest.raises(TypeError):
        Incomplete()  # type: ignore[abstract]

    class Never(Condition[int]):
        def retryable(self, value: int) -> bool:
            return False

    assert Never().retryable(1) is False
