"""Logging setup for the ``retrycase`` logger hierarchy.

Library modules log through stdlib ``logging.getLogger("retrycase.<area>")``
and never touch the root logger. Applications that want retry decisions on
screen call ``configure_logging()`` once at startup:

    >>> from retrycase import configure_logging
    >>> configure_logging()                     # level/format from RETRYCASE_LOG_*
    >>> configure_logging(level="DEBUG", format="json")

Structured fields passed via ``extra=`` (attempt, delay_ns, ...) are appended
as key=value pairs in text mode and as JSON keys in json mode.
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal, TextIO

import orjson

if TYPE_CHECKING:
    from retrycase.foundation.config import LoggingSettings

ROOT_LOGGER = "retrycase"

# Attributes every LogRecord carries; anything else came in through extra=
_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


def _extras(record: logging.LogRecord) -> dict[str, object]:
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}


class TextFormatter(logging.Formatter):
    """Human-readable lines. Format: timestamp [level] logger: message key=value ..."""

    def __init__(self, *, timestamps: bool = True) -> None:
        super().__init__()
        self.timestamps = timestamps

    def format(self, record: logging.LogRecord) -> str:
        parts = [datetime.fromtimestamp(record.created, tz=UTC).strftime("%H:%M:%S.%f")[:-3]] if self.timestamps else []
        parts += [f"[{record.levelname.lower()}]", f"{record.name}:", record.getMessage()]
        parts += [f"{k}={v}" for k, v in sorted(_extras(record).items())]
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


class JsonFormatter(logging.Formatter):
    """JSON Lines output for log aggregation."""

    def __init__(self, *, timestamps: bool = True) -> None:
        super().__init__()
        self.timestamps = timestamps

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {"level": record.levelname.lower(), "logger": record.name, "event": record.getMessage()}
        if self.timestamps:
            payload["timestamp"] = datetime.fromtimestamp(record.created, tz=UTC).isoformat()
        payload.update(_extras(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=repr, option=orjson.OPT_NON_STR_KEYS).decode()


class _RetrycaseHandler(logging.StreamHandler):
    """Marker subclass so repeated configure_logging() calls replace, not stack."""


def configure_logging(
    settings: LoggingSettings | None = None,
    *,
    level: str | None = None,
    format: Literal["json", "text"] | None = None,  # noqa: A002 - shadows builtin but matches settings field
    output: TextIO | None = None,
) -> logging.Logger:
    """Attach a single stream handler to the ``retrycase`` logger.

    Explicit keyword arguments win over ``settings``; ``settings`` defaults
    to the cached environment settings. Safe to call repeatedly.
    """
    if settings is None:
        from retrycase.foundation.config import get_settings
        root_settings = get_settings()
        settings, default_level = root_settings.logging, root_settings.effective_log_level
    else:
        default_level = settings.level

    fmt = format or settings.format
    match fmt:
        case "text": formatter: logging.Formatter = TextFormatter(timestamps=settings.include_timestamps)
        case "json": formatter = JsonFormatter(timestamps=settings.include_timestamps)
        case _: raise ValueError(f"Unknown format: {fmt}. Use 'text' or 'json'")

    log = logging.getLogger(ROOT_LOGGER)
    for h in [h for h in log.handlers if isinstance(h, _RetrycaseHandler)]:
        log.removeHandler(h)
    handler = _RetrycaseHandler(output or sys.stderr)
    handler.setFormatter(formatter)
    log.addHandler(handler)
    log.setLevel(getattr(logging, (level or default_level).upper(), logging.WARNING))
    return log
