"""Structured logging configuration.

Provides JSON-formatted logging with correlation IDs so dose
recommendations and alerts can be traced back to the request that
triggered them.
"""

import json
import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

DEFAULT_SERVICE_NAME = "insulin-safety"

# Correlation ID for the current evaluation, set by the calling request handler
correlation_id_ctx: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class JsonFormatter(logging.Formatter):
    """Formatter that outputs logs as JSON.

    Format includes:
    - timestamp: ISO 8601 format with timezone
    - level: Log level (DEBUG, INFO, WARNING)
    - service: Service name
    - message: Log message
    - correlation_id: Correlation ID for tracing, when bound
    - logger: Logger name
    - Additional fields passed to StructuredLogger
    - location: Source file, line and function for warnings
    """

    def __init__(self, service_name: str = DEFAULT_SERVICE_NAME):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "message": record.getMessage(),
            "logger": record.name,
        }

        correlation_id = correlation_id_ctx.get()
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        # Rejected inputs and high dosing risk are logged as warnings
        if record.levelno >= logging.WARNING:
            log_data["location"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter for development.

    Format: timestamp - service - level - [correlation_id] - message key=value
    """

    def __init__(self, service_name: str = DEFAULT_SERVICE_NAME):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as readable text."""
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
        correlation_id = correlation_id_ctx.get() or "-"

        base_msg = (
            f"{timestamp} - {self.service_name} - {record.levelname} - "
            f"[{correlation_id}] - {record.getMessage()}"
        )

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            pairs = " ".join(f"{key}={value}" for key, value in extra_fields.items())
            base_msg += f" {pairs}"

        return base_msg


def setup_logging(
    log_format: str = "json",
    log_level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
) -> None:
    """Configure structured logging on the root logger.

    Args:
        log_format: 'json' for structured logging, 'text' for human-readable
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        service_name: Service name to include in logs
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if log_format.lower() == "json":
        formatter: logging.Formatter = JsonFormatter(service_name=service_name)
    else:
        formatter = TextFormatter(service_name=service_name)

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation ID for the duration of the block.

    Generates one when none is given. The previous value is restored on
    exit.
    """
    value = correlation_id or uuid.uuid4().hex
    token = correlation_id_ctx.set(value)
    try:
        yield value
    finally:
        correlation_id_ctx.reset(token)


class StructuredLogger:
    """Logger wrapper that supports structured extra fields."""

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, msg: str, extra_fields: dict[str, Any] | None = None):
        record_extra = {"extra_fields": extra_fields} if extra_fields else {}
        self._logger.log(level, msg, extra=record_extra)

    def debug(self, msg: str, **extra_fields: Any) -> None:
        """Log debug message with optional extra fields."""
        self._log(logging.DEBUG, msg, extra_fields or None)

    def info(self, msg: str, **extra_fields: Any) -> None:
        """Log info message with optional extra fields."""
        self._log(logging.INFO, msg, extra_fields or None)

    def warning(self, msg: str, **extra_fields: Any) -> None:
        """Log warning message with optional extra fields."""
        self._log(logging.WARNING, msg, extra_fields or None)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name)
