"""Logging setup for the resultkit logger hierarchy.

Library modules log through ``logging.getLogger("resultkit.<area>")`` and never
install handlers themselves. Applications call configure_logging() once.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from .settings import LoggingSettings, get_settings

ROOT_LOGGER = "resultkit"
_HANDLER_NAME = "resultkit-handler"


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        import orjson

        payload: dict[str, object] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str).decode()


def configure_logging(settings: LoggingSettings | None = None, *, output: TextIO | None = None) -> logging.Logger:
    """Attach a single stream handler to the resultkit logger. Safe to call repeatedly."""
    settings = settings or get_settings().logging
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in [h for h in logger.handlers if h.get_name() == _HANDLER_NAME]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(output or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    match settings.format:
        case "json": handler.setFormatter(JsonLineFormatter())
        case _: handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(settings.level)
    return logger


def faults_enabled() -> bool:
    """Whether guarded combinators should log captured faults."""
    return get_settings().logging.log_faults
