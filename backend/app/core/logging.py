"""Logging for the FreelanceHub API

Records go to stdout, one JSON object per line when ``LOG_FORMAT`` is
``json``. The request middleware and the exception handlers pass request
context through ``extra=``; the keys in ``REQUEST_FIELDS`` are copied onto
the JSON object when a record carries them.
"""

import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict
from backend.app.core.config import settings

REQUEST_FIELDS = ("request_id", "method", "path", "status_code", "duration_ms")

# Request lines already come from LoggingMiddleware
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


class JSONFormatter(logging.Formatter):
    """One JSON line per record, tagged with the service and environment"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": settings.APP_NAME,
            "environment": settings.ENVIRONMENT,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(
            {key: getattr(record, key) for key in REQUEST_FIELDS if hasattr(record, key)}
        )

        # UUIDs and enums in extra fields
        return json.dumps(log_data, default=str)


def setup_logging() -> None:
    """Route every logger to stdout at ``LOG_LEVEL``; safe to call twice"""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    if settings.LOG_FORMAT == "json":
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))
    root_logger.addHandler(console_handler)

    if not settings.DEBUG:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
