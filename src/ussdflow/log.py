from __future__ import annotations

"""Logging helpers shared by all ussdflow modules."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import AppSettings

ROOT_LOGGER = "ussdflow"


def getLogger(name: str) -> logging.Logger:
    """Return a logger; module names outside the package are nested under it."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(settings: AppSettings) -> logging.Logger:
    """
    Apply level and format from settings to the package logger.

    Idempotent: an existing handler installed by a previous call is reused.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(settings.logging.level)

    formatter = logging.Formatter(settings.logging.format)
    handler = next(
        (h for h in logger.handlers if getattr(h, "_ussdflow_handler", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler._ussdflow_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    handler.setFormatter(formatter)
    return logger
