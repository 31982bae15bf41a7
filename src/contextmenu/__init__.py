"""
contextmenu - floating selection menus for text editors.

Renders a single-column menu as a floating window next to the cursor,
lets the user move through it with ``j``/``k`` and reports the chosen
entry, or the dismissal, to a callback.  The editor itself is reached
through the :class:`~contextmenu.host.Host` interface.

Example:
    import contextmenu
    from contextmenu.screen import ScreenHost

    host = ScreenHost(["some text"], cursor=(1, 4))
    choices = ["choice 1", "choice 2"]

    contextmenu.open(
        choices,
        host=host,
        padding_left=1,
        on_submit=lambda chosen: print("Final choice", choices[chosen - 1]),
    )
    host.feed_keys("j", "<CR>")
"""

from contextmenu.border import BorderGlyphs, BorderSpec, draw_border, resolve_glyphs
from contextmenu.config import Coordinate, MenuConfig, default_config_path
from contextmenu.controller import MenuController, controller_for, open
from contextmenu.errors import ConfigurationError, ContextMenuError, HostInteractionError
from contextmenu.host import CursorPosition, Geometry, Host
from contextmenu.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager
from contextmenu.layout import Layout, compute_layout
from contextmenu.session import MenuSession, SessionState

__version__ = "0.1.0"

__all__ = [
    # Controller
    "open",
    "MenuController",
    "controller_for",
    "MenuSession",
    "SessionState",
    # Configuration
    "MenuConfig",
    "Coordinate",
    "default_config_path",
    "KeybindingsManager",
    "DEFAULT_KEYBINDINGS",
    # Layout and borders
    "Layout",
    "compute_layout",
    "BorderGlyphs",
    "BorderSpec",
    "resolve_glyphs",
    "draw_border",
    # Host interface
    "Host",
    "Geometry",
    "CursorPosition",
    # Errors
    "ContextMenuError",
    "ConfigurationError",
    "HostInteractionError",
]
