"""Structured logging setup for the locator's event-style log records."""

from __future__ import annotations

import logging
import sys

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_FIELDS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class KeyValueFormatter(logging.Formatter):
    """Appends ``extra`` context to the message as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = {key: value for key, value in vars(record).items() if key not in _RECORD_FIELDS}
        if not context:
            return base
        return base + " " + " ".join(f"{key}={value}" for key, value in sorted(context.items()))


def configure_logging(level: str = "INFO") -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        KeyValueFormatter(
            fmt="%(asctime)s [%(levelname)-5s] %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    root = logging.getLogger("dungeon_locator")
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)
