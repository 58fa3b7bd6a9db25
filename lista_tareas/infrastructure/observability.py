"""Structured Logging — JSON and text formatters for the task API.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Request and pool context (method, path, task_id, attempt, error_code...)
      surfaced when present, in both formats
    - setup_logging owns exactly one root handler: calling it again (a second
      lifespan in the same process) replaces that handler instead of adding one

Design Decisions:
    - stdlib logging with a JSONFormatter: no extra dependency
    - Text format appends the same context as key=value pairs for local runs
"""

import logging
import json
from datetime import datetime, timezone

# Context attached through `extra=` by routes, error handlers and the pool
CONTEXT_FIELDS = (
    "method", "path", "task_id", "operation",
    "error_code", "severity",
    "attempt", "max_attempts", "delay_seconds",
)

_HANDLER_NAME = "lista_tareas"


def record_context(record: logging.LogRecord) -> dict:
    """Known context fields set on a record, in CONTEXT_FIELDS order."""
    context = {}
    for key in CONTEXT_FIELDS:
        val = record.__dict__.get(key)
        if val is not None:
            context[key] = val
    return context


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for production log collection."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(record_context(record))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable line followed by the record's context as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={val}" for key, val in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the application's root log handler."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
            existing.close()

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
