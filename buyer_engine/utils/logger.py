"""Centralised logger shared by every module of the engine."""
from __future__ import annotations

import sys

from loguru import logger

_DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO") -> None:
    """Replace the default sink with a stderr sink at ``level``.

    Hosts embedding the engine usually call this once at start-up with the
    ``logging.level`` value of the YAML configuration.
    """

    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=_DEFAULT_FORMAT)
    logger.debug("Logging configured at level {}", level.upper())


__all__ = ["configure_logging", "logger"]
