"""Shared helpers for the naming command-line tools."""

from tools.lib.logging_utils import resolve_log_level, setup_logging

__all__ = [
    "resolve_log_level",
    "setup_logging",
]
