"""Logging helpers for the nutrition assistant.

`get_logger` hands out loggers that share one formatter, a stream handler and
a rotating file handler under `logs/`. The default level comes from the
`LOG_LEVEL` setting.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from core.config import get_settings

LOG_DIR = os.path.join(os.path.dirname(__file__), "..", "logs")
os.makedirs(LOG_DIR, exist_ok=True)

LOG_FILE = os.path.join(LOG_DIR, "app.log")

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)

_file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3)
_file_handler.setFormatter(_formatter)


def _default_level() -> int:
    return getattr(logging, get_settings().log_level, logging.INFO)


def get_logger(name: str = __name__, level: int = None) -> logging.Logger:
    """Return a logger wired to the shared stream and file handlers.

    Handlers are attached once per logger name, so repeated calls are safe.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level if level is not None else _default_level())
        logger.addHandler(_stream_handler)
        logger.addHandler(_file_handler)
    return logger
