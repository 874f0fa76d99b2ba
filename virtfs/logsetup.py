"""Logging setup for the ``virtfs`` logger hierarchy."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from virtfs.config import settings


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a RichHandler to the ``virtfs`` logger and set its level.

    Falls back to ``settings.log_level`` when *level* is not given. Calling
    this more than once only updates the level.
    """
    logger = logging.getLogger("virtfs")
    logger.setLevel((level or settings.log_level).upper())
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(show_path=False, rich_tracebacks=True))
    return logger
