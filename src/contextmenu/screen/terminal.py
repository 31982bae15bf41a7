"""
Run a menu on a real terminal.

Draws a :class:`ScreenHost` with :class:`FrameRenderer` on the alternate
screen and feeds it key presses read in cbreak mode.  Ctrl-C moves focus
back to the main window, which the menu treats as a focus loss.
"""

from __future__ import annotations

import os
import select
import shutil
import sys
import termios
import tty
from collections.abc import Sequence
from typing import TextIO

from contextmenu.config import MenuConfig
from contextmenu.controller import MenuController
from contextmenu.keybindings import KeybindingsManager
from contextmenu.logging import get_logger
from contextmenu.screen.ansi import (
    enter_alternate_screen,
    exit_alternate_screen,
    show_cursor,
)
from contextmenu.screen.host import ScreenHost
from contextmenu.screen.keys import key_notation, parse_key
from contextmenu.screen.renderer import FrameRenderer

logger = get_logger("screen.terminal")

# Wait this long for the rest of an escape sequence
_ESCAPE_TIMEOUT = 0.05


class RawInput:
    """Context manager putting a terminal in cbreak mode and reading keys."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._saved: list | None = None

    def __enter__(self) -> RawInput:
        self._saved = termios.tcgetattr(self.fd)
        # Keep keys typed ahead of the menu
        tty.setcbreak(self.fd, termios.TCSANOW)
        return self

    def __exit__(self, *exc: object) -> None:
        if self._saved is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved)
            self._saved = None

    def _ready(self, timeout: float) -> bool:
        try:
            return bool(select.select([self.fd], [], [], timeout)[0])
        except InterruptedError:
            return False

    def read(self) -> bytes:
        """Block for one key press and return its raw bytes."""
        data = os.read(self.fd, 1)
        if data == b"\x1b":
            while len(data) < 16 and self._ready(_ESCAPE_TIMEOUT):
                data += os.read(self.fd, 1)
                if data[1:2] not in (b"[", b"O"):
                    break  # Alt+key
                if len(data) > 2 and 0x40 <= data[-1] <= 0x7E:
                    break
        elif data and data[0] >= 0xC0:
            # UTF-8 lead byte: read the continuation bytes
            extra = 1 if data[0] < 0xE0 else 2 if data[0] < 0xF0 else 3
            data += os.read(self.fd, extra)
        return data


def run_menu(
    entries: Sequence[str],
    config: MenuConfig | None = None,
    *,
    prompt: str = "",
    keybindings: KeybindingsManager | None = None,
    input_fd: int | None = None,
    output: TextIO | None = None,
    color: bool = True,
) -> int | None:
    """
    Show a menu on the terminal and wait for the user.

    The screen shows *prompt* on its first line with the cursor after it,
    and the menu opens relative to that cursor.

    Returns
    -------
    int | None
        The 1-based chosen index, or ``None`` when the menu was dismissed.
    """
    output = output or sys.stderr
    fd = sys.stdin.fileno() if input_fd is None else input_fd
    size = shutil.get_terminal_size()

    prompt_bytes = len(prompt.encode("utf-8"))
    host = ScreenHost([prompt], width=size.columns, height=size.lines, cursor=(1, prompt_bytes))
    controller = MenuController(host, keybindings)
    session = controller.open(entries, config)

    renderer = FrameRenderer(output)
    output.write(enter_alternate_screen())
    try:
        with RawInput(fd) as keyboard:
            while session.is_open:
                renderer.render(host.render(color=color), host.width, host.height)
                try:
                    key = parse_key(keyboard.read())
                except KeyboardInterrupt:
                    host.focus(host.main_window)
                    continue
                notation = key_notation(key)
                if notation and not host.feed_key(notation):
                    logger.debug("Unhandled key %s", notation)
    finally:
        output.write(exit_alternate_screen() + show_cursor())
        output.flush()

    return session.chosen
