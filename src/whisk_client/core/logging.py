"""
Logging configuration for the whisk client.

The library only emits records through ``get_logger``; applications (and the
command line front end) decide where they go by calling ``setup_logging``.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Type alias for log context
LogContext = dict[str, Any]


class StructuredFormatter(logging.Formatter):
    """JSON-structured log formatter.

    Formats log records as JSON objects with consistent field names
    for parsing in log aggregation systems.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string.

        Args:
            record: The log record to format

        Returns:
            JSON-formatted log string
        """
        log_entry: LogContext = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_entry["context"] = record.context  # type: ignore

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable log formatter with colored levels."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        level = f"{color}{record.levelname}{self.RESET}"
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")

        message = record.getMessage()
        if hasattr(record, "context"):
            message += f" {record.context}"  # type: ignore
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return f"{timestamp} | {level:8} | {record.name}: {message}"


def setup_logging(level: str = "WARNING", format_type: str = "text") -> None:
    """Configure the root logger.

    Logs are written to stderr so that stdout stays free for results.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        format_type: Log format ('json' or 'text')

    Example:
        >>> setup_logging(level="DEBUG", format_type="json")
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    formatter: logging.Formatter
    if format_type == "json":
        formatter = StructuredFormatter()
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the specified name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
