"""Logging setup for command-line tools.

Diagnostics go to stderr so stdout stays machine-readable JSON.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "NAMING_LOG_LEVEL"


def resolve_log_level(verbose: bool = False, default: str | int = logging.WARNING) -> int:
    """Pick the log level: ``--verbose`` beats ``$NAMING_LOG_LEVEL`` beats ``default``."""

    if verbose:
        return logging.DEBUG
    configured = os.environ.get(LOG_LEVEL_ENV)
    if configured:
        level = logging.getLevelName(configured.strip().upper())
        if isinstance(level, int):
            return level
    return default if isinstance(default, int) else logging.getLevelName(default.upper())


def setup_logging(
    level: str | int = logging.INFO,
    format_str: str = "[%(levelname)s] %(message)s",
    stream=sys.stderr,
) -> logging.Logger:
    """Configure and return the root logger with a single stream handler."""

    logger = logging.getLogger()
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_str))
    logger.addHandler(handler)

    return logger
