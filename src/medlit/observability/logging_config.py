"""
MedLit Logging Setup

Installs a single stream handler on the ``medlit`` logger, formatted as JSON
lines or plain text according to LoggingSettings. Modules log through
``logging.getLogger(__name__)`` and never configure handlers themselves.
"""

import json
import logging
from datetime import datetime, timezone

from medlit.config import LoggingSettings, get_settings

ROOT_LOGGER = "medlit"
_HANDLER_NAME = "medlit-stream"

TEXT_FORMAT = "[%(levelname)s] %(asctime)s - %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def configure_logging(settings: LoggingSettings | None = None) -> logging.Logger:
    """
    Configure the ``medlit`` logger. Safe to call repeatedly: the handler
    installed by a previous call is replaced, not duplicated.
    """
    settings = settings or get_settings().logging
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(settings.log_level)

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if settings.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)
    return logger
