"""
ANSI escape sequence utilities for terminal rendering.

Provides color constants, text styling, cursor control, and screen
manipulation primitives used by the screen host and renderer.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------

ESC = "\033"
CSI = f"{ESC}["
RESET = f"{CSI}0m"


class FG:
    """Standard ANSI foreground colors."""

    BLACK = f"{CSI}30m"
    RED = f"{CSI}31m"
    GREEN = f"{CSI}32m"
    YELLOW = f"{CSI}33m"
    BLUE = f"{CSI}34m"
    MAGENTA = f"{CSI}35m"
    CYAN = f"{CSI}36m"
    WHITE = f"{CSI}37m"
    BRIGHT_BLACK = f"{CSI}90m"


class BG:
    """Standard ANSI background colors."""

    BLACK = f"{CSI}40m"
    RED = f"{CSI}41m"
    GREEN = f"{CSI}42m"
    YELLOW = f"{CSI}43m"
    BLUE = f"{CSI}44m"
    MAGENTA = f"{CSI}45m"
    CYAN = f"{CSI}46m"
    WHITE = f"{CSI}47m"


# ---------------------------------------------------------------------------
# True-color (24-bit) helpers
# ---------------------------------------------------------------------------

def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    value = hex_color.lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def hex_fg(hex_color: str) -> str:
    """Foreground escape sequence for a hex color (e.g. ``'#ff8800'``)."""
    r, g, b = _hex_to_rgb(hex_color)
    return f"{CSI}38;2;{r};{g};{b}m"


def hex_bg(hex_color: str) -> str:
    """Background escape sequence for a hex color."""
    r, g, b = _hex_to_rgb(hex_color)
    return f"{CSI}48;2;{r};{g};{b}m"


# ---------------------------------------------------------------------------
# Text styling
# ---------------------------------------------------------------------------

_STYLE_CODES: dict[str, int] = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underline": 4,
    "reverse": 7,
}


def style(
    text: str,
    *,
    fg: str | None = None,
    bg: str | None = None,
    bold: bool = False,
    dim: bool = False,
    italic: bool = False,
    underline: bool = False,
    reverse: bool = False,
) -> str:
    """
    Apply ANSI styling to *text*.

    *fg* and *bg* are either ready-made sequences (``FG.RED``) or hex
    color strings (``'#ff0000'``).  The result ends with ``RESET``; when
    no styling is requested *text* is returned unchanged.
    """
    parts: list[str] = []

    if fg is not None:
        parts.append(fg if fg.startswith(ESC) else hex_fg(fg))
    if bg is not None:
        parts.append(bg if bg.startswith(ESC) else hex_bg(bg))

    attrs = {
        "bold": bold,
        "dim": dim,
        "italic": italic,
        "underline": underline,
        "reverse": reverse,
    }
    for attr_name, enabled in attrs.items():
        if enabled:
            parts.append(f"{CSI}{_STYLE_CODES[attr_name]}m")

    if not parts:
        return text
    return f"{''.join(parts)}{text}{RESET}"


# ---------------------------------------------------------------------------
# Cursor and screen control
# ---------------------------------------------------------------------------

def cursor_position(row: int, col: int) -> str:
    """Move cursor to absolute *row*, *col* (1-based)."""
    return f"{CSI}{row};{col}H"


def clear_line() -> str:
    """Erase the entire current line."""
    return f"{CSI}2K"


def clear_screen() -> str:
    """Clear the entire screen and move cursor to top-left."""
    return f"{CSI}2J{CSI}H"


def hide_cursor() -> str:
    return f"{CSI}?25l"


def show_cursor() -> str:
    return f"{CSI}?25h"


def enter_alternate_screen() -> str:
    """Switch to the alternate screen buffer (xterm private mode 1049)."""
    return f"{CSI}?1049h"


def exit_alternate_screen() -> str:
    return f"{CSI}?1049l"
