"""
Logging setup shared by the manager and the command-line interface.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name (any case) or number into a logging level."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        msg = f"unknown log level: {log_level}"
        raise ValueError(msg)
    return level


def setup_logger(logger: logging.Logger, log_level: int | str) -> None:
    """
    Route a logger to stderr at the given level.

    The first call attaches one StreamHandler; later calls only change the
    level of the logger and of the handlers already attached to it.

    Args:
        logger: The logger instance to configure
        log_level: Level number or name such as ``"debug"``
    """
    level = resolve_log_level(log_level)
    logger.setLevel(level)
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
