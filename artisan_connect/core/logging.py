"""Artisan Connect — Structured JSON Logging.

One JSON object per line on stdout. Context passed through `extra=` is
copied onto the line when its key is one of CONTEXT_FIELDS.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from artisan_connect.config import settings

CONTEXT_FIELDS = (
    "endpoint",
    "method",
    "entity_id",
    "user_id",
    "table",
    "duration_ms",
    "status_code",
)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(
            {key: getattr(record, key) for key in CONTEXT_FIELDS if hasattr(record, key)}
        )
        if record.exc_info and record.exc_info[0] is not None:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    """Named `artisan_connect.<name>` logger writing JSON to stdout."""
    logger = logging.getLogger(f"artisan_connect.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.propagate = False
    level = logging.getLevelName(settings.log_level.upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)
    return logger
