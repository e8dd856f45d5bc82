"""Mini README: Application-wide logging helpers for the asset hierarchy engine.

Structure:
    * configure_root_logger - one-shot setup of the root handler and level.
    * get_logger - factory returning module loggers with baseline config.

Usage:
    Modules call ``get_logger(__name__)`` once at import time and keep the
    result in a module-level ``LOGGER``. Configuration happens exactly once
    per process so repeated imports (or the CLI re-configuring the level)
    never stack duplicate handlers.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger with a debugging friendly formatter.

    A later call only adjusts the level; the handler is installed once.
    """

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if _LOGGER_INITIALISED:
        root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
