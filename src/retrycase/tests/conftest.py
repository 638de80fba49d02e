"""Shared fakes for retry tests: recorded sleeps and scripted randomness."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from retrycase.foundation.config import clear_settings_cache


class RecordingSleep:
    """Sleep collaborator that records requested delays instead of blocking."""

    def __init__(self) -> None:
        self.calls: list[int] = []

    def __call__(self, ns: int) -> None:
        self.calls.append(ns)


class ScriptedRandom:
    """Random source replaying fixed draws, cycling when exhausted."""

    def __init__(self, *draws: float) -> None:
        self._draws = draws or (0.5,)
        self._i = 0

    def random(self) -> float:
        value = self._draws[self._i % len(self._draws)]
        self._i += 1
        return value


@pytest.fixture
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture(autouse=True)
def clean_settings() -> Iterator[None]:
    """Reset cached settings around each test so env changes take effect."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def scripted_rng() -> type[ScriptedRandom]:
    """Factory for ScriptedRandom sources: scripted_rng(0.25, 0.75)."""
    return ScriptedRandom
