"""
Exception types raised by the context menu.
"""

from __future__ import annotations


class ContextMenuError(Exception):
    """Base class for all context menu errors."""


class ConfigurationError(ContextMenuError, ValueError):
    """
    Raised when a menu configuration is invalid.

    Always raised from :meth:`MenuController.open` before any window,
    buffer or highlight has been created.
    """

    def __init__(self, message: str, option: str | None = None) -> None:
        if option:
            message = f"{option}: {message}"
        super().__init__(message)
        self.option = option


class HostInteractionError(ContextMenuError):
    """Raised by a host when a window, buffer or highlight call fails."""
