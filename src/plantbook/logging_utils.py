"""Logging helpers for plantbook.

Modules create their own loggers with ``logging.getLogger(__name__)``. The
command line calls ``configure_logging`` to attach a single stream handler to
the ``plantbook`` package logger.
"""

import logging
import os
from typing import Optional, Union

LOG_LEVEL_ENV = "PLANTBOOK_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "plantbook-stream"


def resolve_level(level: Union[int, str, None]) -> int:
    """Turn a level name or number into a logging level.

    Unknown names fall back to WARNING.
    """
    if level is None:
        return logging.WARNING
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(level: Union[int, str, None] = None) -> logging.Logger:
    """Configure the package logger, installing its handler only once.

    Args:
        level: Level name or number; defaults to PLANTBOOK_LOG_LEVEL, then WARNING

    Returns:
        The ``plantbook`` logger
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV)

    logger = logging.getLogger("plantbook")
    logger.setLevel(resolve_level(level))

    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
    return logger


def log_level_from_env() -> Optional[str]:
    return os.environ.get(LOG_LEVEL_ENV)
