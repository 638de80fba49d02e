"""Tests for configure_logging and the retry log output."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator

import orjson
import pytest

from retrycase import LoggingSettings, Policy, configure_logging
from retrycase.foundation.errors import Err, Result


@pytest.fixture(autouse=True)
def restore_logger() -> Iterator[None]:
    log = logging.getLogger("retrycase")
    handlers, level = list(log.handlers), log.level
    yield
    log.handlers[:] = handlers
    log.setLevel(level)


def _fail() -> Result[str, str]:
    return Err("down")


def test_text_output(sleeper) -> None:
    out = io.StringIO()
    configure_logging(LoggingSettings(include_timestamps=False), level="DEBUG", output=out)
    Policy(delay=5, jitter=False, max_retries=1, sleep=sleeper).retry(_fail)

    lines = out.getvalue().splitlines()
    assert lines[0].startswith("[debug] retrycase.retry: [_fail] Retry 1/1 after 5ns")
    assert "attempt=1" in lines[0] and "delay_ns=5" in lines[0]
    assert lines[1].startswith("[info] retrycase.retry: [_fail] Retry budget exhausted after 2 attempt(s)")


def test_json_output(sleeper) -> None:
    out = io.StringIO()
    configure_logging(LoggingSettings(), level="DEBUG", format="json", output=out)
    Policy(delay=5, jitter=False, max_retries=1, sleep=sleeper).retry(_fail)

    first = orjson.loads(out.getvalue().splitlines()[0])
    assert first["level"] == "debug"
    assert first["logger"] == "retrycase.retry"
    assert first["attempt"] == 1
    assert first["delay_ns"] == 5
    assert "timestamp" in first


def test_level_filters(sleeper) -> None:
    out = io.StringIO()
    configure_logging(LoggingSettings(level="WARNING"), output=out)
    Policy(delay=5, jitter=False, max_retries=1, sleep=sleeper).retry(_fail)
    assert out.getvalue() == ""


def test_idempotent() -> None:
    log = configure_logging(LoggingSettings(), output=io.StringIO())
    configure_logging(LoggingSettings(), output=io.StringIO())
    assert sum(type(h).__name__ == "_RetrycaseHandler" for h in log.handlers) == 1


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RETRYCASE_LOG_LEVEL", "ERROR")
    assert configure_logging(output=io.StringIO()).level == logging.ERROR


def test_unknown_format() -> None:
    with pytest.raises(ValueError, match="Unknown format"):
        configure_logging(LoggingSettings(), format="xml", output=io.StringIO())  # type: ignore[arg-type]
