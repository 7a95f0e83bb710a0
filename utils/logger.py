"""
utils/logger.py
---------------
Logging setup shared by every layer.

Client operations run on the ``delivery-db`` worker threads, so each
record carries the thread name next to the logger name. Obtain loggers
with ``get_logger(__name__)``.
"""

import logging
import sys

from config import LOG_LEVEL

_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)-14s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"
_configured = False


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown LOG_LEVEL: {name}")
    return level


def _configure() -> None:
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT, _DATEFMT))
    root = logging.getLogger()
    root.setLevel(_level(LOG_LEVEL))
    root.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, configuring logging on first use."""
    _configure()
    return logging.getLogger(name)
