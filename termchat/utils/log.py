"""Logging setup for the optional log file."""

from __future__ import annotations

import logging
from typing import Optional

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOG_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

LOGGER_NAME = "termchat"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def init_logger(log_file: Optional[str] = None, level: str = "info") -> logging.Logger:
    """Attach a file handler to the ``termchat`` logger.

    Without *log_file* a ``NullHandler`` is installed instead so that nothing
    ever reaches the terminal through logging.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is None:
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)
        return logger

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.setLevel(LOG_LEVELS[level])
    return logger
