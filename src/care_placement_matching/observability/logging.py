"""Shared logging utilities for consistent matching observability.

Usage example:
    from care_placement_matching.observability.logging import get_logger

    logger = get_logger("care_placement_matching.suggest_homes")
    logger.info("Evaluated %s homes", home_count)
"""

from __future__ import annotations

import logging
import time

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
_PACKAGE_LOGGER_PREFIX = "care_placement_matching"

_level = logging.INFO


def get_logger(name: str) -> logging.Logger:
    """Return a standard logger configured for UTC timestamps.

    Args:
        name: Logger name (use a stable module-qualified name).

    Returns:
        A logger with a single stream handler and a consistent UTC format.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        formatter.converter = time.gmtime
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(_level)
        logger.propagate = False
    return logger


def set_log_level(level: int) -> None:
    """Set the level for package loggers, including ones created later."""
    global _level
    _level = level
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith(_PACKAGE_LOGGER_PREFIX) and isinstance(logger, logging.Logger):
            logger.setLevel(level)
