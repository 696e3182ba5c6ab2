"""Logging and diagnostics helpers."""

from .logging import KeyValueFormatter, configure_logging

__all__ = ["KeyValueFormatter", "configure_logging"]
