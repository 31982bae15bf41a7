"""
Logging utilities for the context menu.

Provides a centralized logging configuration for the entire package.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Package root logger
_root_logger = logging.getLogger("contextmenu")

# Level restored by enable()
_level_before_disable: int = logging.NOTSET


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Configure logging for the context menu.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
        format: Custom log format string
        stream: Output stream (defaults to stderr)
        file: Optional file path to write logs

    Example:
        from contextmenu.logging import setup_logging

        setup_logging("DEBUG", file="contextmenu.log")
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    if format is None:
        format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    formatter = logging.Formatter(format)

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    _root_logger.addHandler(stream_handler)

    # File handler (optional)
    if file:
        file_handler = logging.FileHandler(file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        _root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a submodule.

    Args:
        name: Submodule name (e.g., "controller", "screen.host")

    Returns:
        Logger instance
    """
    if name.startswith("contextmenu."):
        return logging.getLogger(name)
    return logging.getLogger(f"contextmenu.{name}")


def set_level(level: str | int) -> None:
    """Set the log level for the context menu."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    _root_logger.setLevel(level)


def disable() -> None:
    """Disable all logging for the context menu, child loggers included."""
    global _level_before_disable
    if not _root_logger.disabled:
        _level_before_disable = _root_logger.level
    _root_logger.disabled = True
    _root_logger.setLevel(logging.CRITICAL + 1)


def enable() -> None:
    """Re-enable logging for the context menu."""
    if _root_logger.disabled:
        _root_logger.setLevel(_level_before_disable)
    _root_logger.disabled = False
