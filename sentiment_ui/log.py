"""Structured logging utilities."""
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict

import orjson

from sentiment_ui.services.config import DEFAULT_LOG_PATH


class JsonFormatter(logging.Formatter):
    """Render log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "name": record.name,
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key.startswith("_extra_"):
                payload[key[7:]] = value
        return orjson.dumps(payload, default=str).decode()


def configure_logging(log_path: Path = DEFAULT_LOG_PATH, level: str | int = logging.INFO) -> None:
    """Attach a rotating JSON file handler to the ``sentiment_ui`` logger.

    Calling it again with the same path is a no-op.
    """

    log_path = Path(log_path)
    logger = logging.getLogger("sentiment_ui")
    logger.setLevel(level)
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler) and handler.baseFilename == os.path.abspath(log_path):
            return
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=3)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
