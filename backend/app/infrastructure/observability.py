"""Structured Logging — JSON and console formatters for the catalog service.

Invariants:
    - Every line carries timestamp, level, logger, emitting thread and message
    - Dispatch/cache/pagination context (player_id, pool, worker, elapsed_ms, ...)
      is surfaced when passed via `extra`; None values are dropped
    - setup_logging() is idempotent: calling it again replaces the handler it
      installed instead of stacking a second one

Design Decisions:
    - stdlib logging + JSONFormatter, no third-party logging library
    - The thread name is always emitted: it is the only place the record/
      pagination pool split is visible at runtime
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "player_id", "operation", "pool", "worker", "elapsed_ms",
    "page", "size", "sort_field", "sort_direction",
    "total_elements", "count", "found", "error_code", "queue_size", "path",
)


def _context(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in CONTEXT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable line with the context fields appended as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


class _CatalogHandler(logging.StreamHandler):
    pass


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the catalog handler on the root logger."""
    root = logging.getLogger()
    for handler in [h for h in root.handlers if isinstance(h, _CatalogHandler)]:
        root.removeHandler(handler)
    handler = _CatalogHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else ConsoleFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
