"""Logging setup for the playground server.

Everything under ``physics_playground`` logs through one package logger;
this module attaches its handlers.
"""
import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "physics_playground"

_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
_DATEFMT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """Send package log records to stdout and, optionally, to *log_file*.

    Calling it again replaces the handlers from the previous call, so the
    Dash reloader importing the app twice does not double every line.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(_FORMAT, datefmt=_DATEFMT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        # fresh file per server run
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("logging to %d handler(s) at %s",
                 len(handlers), logging.getLevelName(level))
