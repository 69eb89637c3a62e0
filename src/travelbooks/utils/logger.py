"""Application logger."""

import logging
import sys
from typing import Optional

from travelbooks.settings import Settings

APP_LOGGER_NAME = "travelbooks"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_app_logger: Optional[logging.Logger] = None


class _ConsoleHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stderr`` is at emit time."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def get_app_logger(settings: Optional[Settings] = None) -> logging.Logger:
    """Return the shared application logger, configuring it on first use.

    Args:
        settings: Optional settings; read from the environment when omitted.

    Returns:
        logging.Logger: Logger named ``travelbooks``.
    """
    global _app_logger
    if _app_logger is not None:
        return _app_logger

    settings = settings or Settings.from_env()
    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(_resolve_level(settings.log_level))
    if not logger.handlers:
        handler = _ConsoleHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    _app_logger = logger
    return logger


__all__ = ["get_app_logger"]
