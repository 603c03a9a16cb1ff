"""
wishlink/core/logging.py

Purpose: Logging configuration

- JSON lines in production, colored lines in development
- Log level from settings
- Wish/user context attached to records (phone, wish_id, code, status)
"""

import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from wishlink.core.config import Settings, settings

APP_LOGGER = "wishlink"
CONTEXT_FIELDS = ("phone", "wish_id", "code", "status")

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


def _record_context(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        field: getattr(record, field)
        for field in CONTEXT_FIELDS
        if getattr(record, field, None) is not None
    }


class StructuredFormatter(logging.Formatter):
    """
    One JSON object per line, with any wish/user context as top-level keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update(_record_context(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class DevelopmentFormatter(logging.Formatter):
    """
    Human-readable formatter for development environment.
    """

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname, RESET)
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        name = record.name[len(APP_LOGGER) + 1:] if record.name.startswith(f"{APP_LOGGER}.") else record.name

        line = f"{color}[{clock}] {record.levelname:<8}{RESET} {name}: {record.getMessage()}"

        context = _record_context(record)
        if context:
            line += " [" + " ".join(f"{k}={v}" for k, v in context.items()) + "]"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """
    Configures the root logger for the app or the standalone scheduler.

    Args:
        config: Settings to read level and environment from (global settings by default)

    Returns:
        The application logger
    """
    config = config or settings
    level = getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if config.is_production else DevelopmentFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # Quiet the driver and per-request access lines
    for noisy in ("pymongo", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger(APP_LOGGER)
    logger.info(f"Logging configured ({config.ENVIRONMENT}, {config.LOG_LEVEL})")
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Returns a logger under the "wishlink" namespace.

    Args:
        name: Logger name (usually __name__)
    """
    if name == APP_LOGGER or name.startswith(f"{APP_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER}.{name}")


class LogContext:
    """
    Attaches wish/user context to every record created inside the block.

    Usage:
        with LogContext(phone="5551234567", wish_id="..."):
            logger.info("Wish updated")

    Blocks nest; the innermost value wins for a repeated key.
    """

    def __init__(self, **fields):
        self.fields = fields
        self._previous_factory = None

    def __enter__(self):
        self._previous_factory = logging.getLogRecordFactory()
        previous = self._previous_factory
        fields = self.fields

        def record_factory(*args, **kwargs):
            record = previous(*args, **kwargs)
            for key, value in fields.items():
                setattr(record, key, value)
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        logging.setLogRecordFactory(self._previous_factory)
