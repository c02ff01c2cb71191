"""
Structured logging configuration.

JSON lines in production (one object per record, easy to ship to a log
aggregator), plain text for local development.
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict
from core.config import settings

# Loggers that are chatty at INFO and rarely useful for request debugging.
NOISY_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "google_genai": logging.WARNING,
    "urllib3": logging.WARNING,
}


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "environment": settings.ENVIRONMENT,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Callers attach structured context with extra={"extra_fields": {...}}
        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            log_data.update(extra_fields)

        return json.dumps(log_data, default=str)


def _build_formatter() -> logging.Formatter:
    if settings.LOG_FORMAT == "json" or settings.ENVIRONMENT == "production":
        return JSONFormatter()
    return logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def setup_logging() -> logging.Logger:
    """
    Configure application-wide logging.

    Safe to call more than once; the root handler is replaced, not stacked.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(_build_formatter())
    root_logger.addHandler(console_handler)

    for name, level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    return root_logger
