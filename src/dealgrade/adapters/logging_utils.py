# src/dealgrade/adapters/logging_utils.py
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from .config import config

SERVICE_NAME = "dealgrade"

# Keys owned by the formatter; context cannot overwrite them
_RESERVED = ("ts", "level", "logger", "event", "service", "env")


class JsonLogFormatter(logging.Formatter):
    """
    One JSON object per line:
        {"ts": ..., "level": ..., "logger": ..., "event": ..., <context>}

    Pass structured fields with `extra={"context": {...}}`.
    """

    def __init__(self, service: str = SERVICE_NAME, env: Optional[str] = None) -> None:
        super().__init__()
        self.service = service
        self.env = env if env is not None else config.ENV

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
            "service": self.service,
            "env": self.env,
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict):
            for key, value in ctx.items():
                payload[f"ctx_{key}" if key in _RESERVED else key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel((level or config.LOG_LEVEL).upper())
    return logger
