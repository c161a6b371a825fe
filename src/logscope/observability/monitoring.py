"""
logscope - Logging Setup

Configures the library's own 'logscope' logger. The core only emits debug
records (scope creation, installation, skipped methods); per-call output is
produced by hooks, never by the core.
"""

import json
import logging
import sys
from datetime import UTC, datetime

from ..config import LogFormat, get_config

ROOT_LOGGER_NAME = "logscope"

DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_RESERVED_ATTRS = frozenset(
    (
        "args",
        "msg",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "name",
        "message",
        "taskName",
    )
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add any extra fields from record.__dict__
        for key, value in record.__dict__.items():
            if key not in log_data and not key.startswith("_") and key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(
    level: str | int | None = None,
    json_format: bool | None = None,
) -> logging.Logger:
    """
    Configure the 'logscope' logger.

    Args:
        level: Log level name or number (default: LOGSCOPE_LOG_LEVEL from config)
        json_format: Force JSON (True) or text (False) output
            (default: LOGSCOPE_LOG_FORMAT from config)

    Returns:
        The configured 'logscope' logger
    """
    config = get_config()

    if level is None:
        level = config.log_level.value
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    use_json = json_format if json_format is not None else config.log_format == LogFormat.JSON

    logger = logging.getLogger(ROOT_LOGGER_NAME)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if use_json else logging.Formatter(DEFAULT_LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger
