"""Observability: logging configuration for retry decisions."""

from .logging import JsonFormatter, TextFormatter, configure_logging

__all__ = ["JsonFormatter", "TextFormatter", "configure_logging"]
