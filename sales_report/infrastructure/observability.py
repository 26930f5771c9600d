"""Structured Logging — JSON formatter, text formatter and error-context helpers.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Record context (entity, record_id, field, operation, command, error_code) is surfaced
      when present, in both formats
    - error_log_extra() is the single way a SalesReportError becomes logging `extra`,
      so the HTTP handlers and command dispatch log the same keys

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan
"""

import json
import logging
from datetime import datetime, timezone

from sales_report.core.errors import ErrorSeverity, SalesReportError

EXTRA_KEYS = (
    "entity", "record_id", "field", "operation",
    "command", "error_code", "severity", "path",
)

_SEVERITY_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def record_context(record: logging.LogRecord) -> dict:
    """The EXTRA_KEYS present on a log record, in EXTRA_KEYS order."""
    return {
        key: record.__dict__[key]
        for key in EXTRA_KEYS
        if record.__dict__.get(key) is not None
    }


def error_log_extra(error: SalesReportError, **extra) -> dict:
    """Flatten an error and its ErrorContext into logging `extra` keys."""
    ctx = error.context
    values = {
        "entity": ctx.entity,
        "record_id": ctx.record_id,
        "field": ctx.field,
        "operation": ctx.operation,
        "error_code": error.code,
        "severity": error.severity.value,
    }
    values.update(extra)
    return {key: value for key, value in values.items() if value is not None}


def log_level_for(error: SalesReportError) -> int:
    return _SEVERITY_LEVELS[error.severity]


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable line with record context appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"
        return line


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
