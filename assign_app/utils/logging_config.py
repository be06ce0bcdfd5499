"""Logging configuration helpers for the admin console."""

from __future__ import annotations

import logging
from logging import Logger


def configure_logging(level: str | int | None = None) -> Logger:
    """Configure basic logging for the application and return the package logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger = logging.getLogger("assign_app")
    logger.setLevel(level)
    return logger
