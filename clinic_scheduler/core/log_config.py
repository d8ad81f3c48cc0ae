from __future__ import annotations

import logging

# extra= keys the scheduler attaches to its records
CONTEXT_KEYS: tuple[str, ...] = ("appointment_id", "date", "time", "staff_id", "count", "reason")

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


class ContextFormatter(logging.Formatter):
    """Appends known `extra` fields as `key=value` pairs after the message."""

    def __init__(self, fmt: str = LOG_FORMAT, keys: tuple[str, ...] = CONTEXT_KEYS) -> None:
        super().__init__(fmt)
        self._keys = keys

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        pairs = [
            f"{key}={getattr(record, key)}"
            for key in self._keys
            if getattr(record, key, None) not in (None, "")
        ]
        return f"{base} | {' '.join(pairs)}" if pairs else base


def configure_logging(level: str = "INFO") -> logging.Handler:
    """Route the root logger through a single ContextFormatter stream handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
    return handler
