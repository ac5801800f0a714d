"""
utils/logger.py
---------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.
The root level comes from LOG_LEVEL in config.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def _resolve_level(name: str) -> int:
    """Map a level name such as 'debug' to its logging constant; INFO if unknown."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _init_logging() -> None:
    """Attach one stdout handler to the root logger, once per process."""
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.setLevel(_resolve_level(LOG_LEVEL))
    root.addHandler(handler)
    _initialized = True
    if root.level == logging.INFO and LOG_LEVEL != "INFO":
        logging.getLogger(__name__).warning(f"Unknown LOG_LEVEL '{LOG_LEVEL}', using INFO")


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A logging.Logger sharing the root handler.
    """
    _init_logging()
    return logging.getLogger(name)
