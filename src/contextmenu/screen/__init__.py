"""
In-memory editor host and terminal front end.

Provides a :class:`~contextmenu.host.Host` implementation that keeps its
buffers and windows in memory, key parsing for raw terminal input, and a
differential renderer to draw it.
"""
from __future__ import annotations

from contextmenu.screen.host import ScreenHost
from contextmenu.screen.keys import Key, key_notation, parse_key
from contextmenu.screen.renderer import FrameRenderer
from contextmenu.screen.terminal import run_menu

__all__ = [
    "ScreenHost",
    "Key",
    "parse_key",
    "key_notation",
    "FrameRenderer",
    "run_menu",
]
