"""
Centralized structured logging.

Supports:
 - structured JSON lines on stdout (ts, level, msg, logger, extra fields)
 - per-module loggers via setup_logger(__name__)
 - log_json() for structured events carrying arbitrary fields
"""

from __future__ import annotations
import logging
import json
import datetime
import os
import sys
from typing import Any

# attributes every LogRecord carries; anything else came in via `extra=`
_RESERVED = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }

        # merge extra fields
        for k, v in record.__dict__.items():
            if k not in _RESERVED:
                payload[k] = v

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


_configured: set[str] = set()
_level: str | None = None


def setup_logger(name: str, level: str | None = None) -> logging.Logger:
    level = (level or _level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logger = logging.getLogger(name)
    logger.setLevel(level)
    _configured.add(name)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger


def apply_level(level: str) -> None:
    """Re-level every logger built by setup_logger (settings load after import)."""
    global _level
    _level = level.upper()
    for name in _configured:
        logging.getLogger(name).setLevel(_level)


def get_logger(name: str = "journal") -> logging.Logger:
    return setup_logger(name)


def log_json(lg: logging.Logger, level: str, msg: str, **fields: Any) -> None:
    """Emit one structured event.

    log_json(logger, "info", "import_committed", count=12)
    """
    method = getattr(lg, str(level).lower(), lg.info)
    method(msg, extra=fields)
