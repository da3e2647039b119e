"""Structured Logging — order-aware log formatting for the bookstore API.

Invariants:
    - Every record carries timestamp (from the record, not format time), level,
      logger, service and message
    - Order context (order_id, book_id, status) and request context
      (error_code, path) are copied from `extra` when set
    - setup_logging replaces its own handler on repeat calls; handlers stack never

Design Decisions:
    - stdlib logging with a JSON formatter, no structlog: one process, one sink
    - Text mode appends the same context fields as key=value pairs so local
      output shows which order a line belongs to
"""

import json
import logging
from datetime import datetime, timezone

SERVICE_NAME = "bookstore-api"

ORDER_CONTEXT_KEYS = ("order_id", "book_id", "status", "error_code", "path")

# Chatty at INFO; only warnings are useful in service logs
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "uvicorn.access")


def _context_fields(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in ORDER_CONTEXT_KEYS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "message": record.getMessage(),
            **_context_fields(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable line with order context appended."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-7s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _context_fields(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the root handler. Returns it so callers can inspect or detach it."""
    global _handler
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = handler
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
