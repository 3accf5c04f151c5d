"""Logging configuration."""

import logging
import sys

from ..config.constants import LOG_FORMAT, LOG_DATE_FORMAT


def get_logger(name: str, level: str = 'INFO') -> logging.Logger:
    """
    Get configured logger.

    Args:
        name: Logger name, usually the module's __name__
        level: Log level name

    Returns:
        Logger with a single stdout handler
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(getattr(logging, level.upper()))
    return logger


def set_package_level(level: str) -> None:
    """Apply one log level to every logger created under this package."""
    numeric_level = getattr(logging, level.upper())
    package = __name__.split('.')[0]
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith(package) and isinstance(logger, logging.Logger):
            logger.setLevel(numeric_level)
