"""
In-memory editor host.

``ScreenHost`` implements :class:`~contextmenu.host.Host` without a real
editor: it keeps numbered buffers, a main window and any number of
floating windows, and composites them into screen lines.  It is what the
terminal front end draws, and what the test-suite drives.

Coordinates follow the cursor: rows are 1-based buffer lines of the main
window, columns are 0-based display cells.  Geometry anchors name the
corner *cell* placed at ``row``/``col``.
"""

from __future__ import annotations

import itertools
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from contextmenu.border import draw_border
from contextmenu.errors import HostInteractionError
from contextmenu.host import (
    Action,
    BufferHandle,
    CursorPosition,
    Geometry,
    HighlightHandle,
    Host,
    WindowHandle,
)
from contextmenu.keybindings import KEYMAP_MODE, normalise_key
from contextmenu.logging import get_logger
from contextmenu.screen.ansi import BG, FG, style
from contextmenu.text import EOL, char_width, truncate

logger = get_logger("screen.host")

BORDER_GROUP = "FloatBorder"
FLOAT_GROUP = "NormalFloat"

DEFAULT_HIGHLIGHT_STYLES: dict[str, dict[str, Any]] = {
    "TermCursor": {"reverse": True},
    "CursorLine": {"reverse": True},
    "Visual": {"reverse": True},
    "PmenuSel": {"fg": FG.BLACK, "bg": BG.CYAN},
    BORDER_GROUP: {"dim": True},
    FLOAT_GROUP: {},
}

# Normal-mode motions understood by every window: line delta
_MOTIONS: dict[str, int] = {
    "j": 1,
    "<Down>": 1,
    "<C-n>": 1,
    "k": -1,
    "<Up>": -1,
    "<C-p>": -1,
}


@dataclass
class _Highlight:
    group: str
    row: int
    start: int
    end: int


@dataclass
class _Buffer:
    handle: BufferHandle
    lines: list[str]
    scratch: bool = False
    keymaps: dict[tuple[str, str], Action] = field(default_factory=dict)
    highlights: dict[HighlightHandle, _Highlight] = field(default_factory=dict)


@dataclass
class _Window:
    handle: WindowHandle
    buffer: BufferHandle
    geometry: Geometry | None = None
    cursor_row: int = 1
    cursor_col: int = 0
    topline: int = 1
    return_to: WindowHandle | None = None
    options: dict[str, object] = field(default_factory=dict)

    @property
    def height(self) -> int | None:
        return self.geometry.height if self.geometry else None

    def cursorline_group(self) -> str:
        mapping = {}
        for item in str(self.options.get("winhighlight", "")).split(","):
            if ":" in item:
                name, _, group = item.partition(":")
                mapping[name.strip()] = group.strip()
        return mapping.get("CursorLine", "CursorLine")


# ---------------------------------------------------------------------------
# Cell grid
# ---------------------------------------------------------------------------

class _Grid:
    """Screen cells; a wide character fills its cell plus an empty one."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.cells: list[list[tuple[str, str | None]]] = [
            [(" ", None)] * width for _ in range(height)
        ]

    def put(self, row: int, col: int, text: str, group: str | None = None) -> None:
        if not 0 <= row < self.height:
            return
        cells = self.cells[row]
        x = col
        for ch in text:
            w = char_width(ch)
            if w == 0:
                prev = x - 1
                if prev > 0 and cells[prev][0] == "":
                    prev -= 1
                if 0 <= prev < self.width:
                    cells[prev] = (cells[prev][0] + ch, cells[prev][1])
                continue
            if x + w > self.width:
                break
            if x >= 0:
                for cx in range(x, x + w):
                    self._split_wide(cells, cx)
                cells[x] = (ch, group)
                if w == 2:
                    cells[x + 1] = ("", group)
            x += w

    def restyle(self, row: int, col: int, width: int, group: str) -> None:
        if not 0 <= row < self.height:
            return
        cells = self.cells[row]
        for x in range(max(col, 0), min(col + width, self.width)):
            cells[x] = (cells[x][0], group)

    def _split_wide(self, cells: list[tuple[str, str | None]], x: int) -> None:
        ch, group = cells[x]
        if ch == "" and x > 0:
            cells[x - 1] = (" ", cells[x - 1][1])
        elif ch and char_width(ch[0]) == 2 and x + 1 < self.width:
            cells[x + 1] = (" ", cells[x + 1][1])

    def lines(self, styles: dict[str, dict[str, Any]] | None = None) -> list[str]:
        out: list[str] = []
        for cells in self.cells:
            if styles is None:
                out.append("".join(ch for ch, _ in cells).rstrip())
                continue
            end = len(cells)
            while end > 0 and cells[end - 1] == (" ", None):
                end -= 1
            parts: list[str] = []
            for group, run in itertools.groupby(cells[:end], key=lambda c: c[1]):
                text = "".join(ch for ch, _ in run)
                if group is None:
                    parts.append(text)
                else:
                    parts.append(style(text, **styles.get(group, {"bold": True})))
            out.append("".join(parts))
        return out


# ---------------------------------------------------------------------------
# Host
# ---------------------------------------------------------------------------

class ScreenHost(Host):
    """
    A complete editor host living in memory.

    Parameters
    ----------
    lines:
        Content of the main buffer.
    width, height:
        Screen size in cells.
    cursor:
        ``(1-based line, 0-based byte column)`` of the main window cursor.
    highlight_styles:
        Extra or replacement styles per highlight group, as keyword
        arguments for :func:`contextmenu.screen.ansi.style`.
    """

    native_border = True

    def __init__(
        self,
        lines: Sequence[str] | None = None,
        width: int = 80,
        height: int = 24,
        cursor: tuple[int, int] = (1, 0),
        highlight_styles: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self._styles = dict(DEFAULT_HIGHLIGHT_STYLES)
        if highlight_styles:
            self._styles.update(highlight_styles)

        self._ids = itertools.count(1)
        self._buffers: dict[BufferHandle, _Buffer] = {}
        self._windows: dict[WindowHandle, _Window] = {}
        self._focus_callbacks: list[Action] = []

        main_buffer = self._new_buffer(list(lines or []), scratch=False)
        self._main = next(self._ids)
        self._windows[self._main] = _Window(self._main, main_buffer.handle)
        self._current = self._main
        self.set_cursor(*cursor)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def main_window(self) -> WindowHandle:
        return self._main

    @property
    def main_buffer(self) -> BufferHandle:
        return self._windows[self._main].buffer

    @property
    def current_window(self) -> WindowHandle:
        return self._current

    @property
    def floating_windows(self) -> list[WindowHandle]:
        return [h for h, w in self._windows.items() if w.geometry is not None]

    def is_valid_window(self, window: WindowHandle) -> bool:
        return window in self._windows

    def is_valid_buffer(self, buffer: BufferHandle) -> bool:
        return buffer in self._buffers

    def buffer_lines(self, buffer: BufferHandle) -> list[str]:
        return list(self._buffer(buffer).lines)

    def window_buffer(self, window: WindowHandle) -> BufferHandle:
        return self._window(window).buffer

    def window_geometry(self, window: WindowHandle) -> Geometry | None:
        return self._window(window).geometry

    def window_option(self, window: WindowHandle, name: str) -> object:
        return self._window(window).options.get(name)

    def highlights(self, buffer: BufferHandle) -> list[tuple[str, int, int, int]]:
        """``(group, row, start_col, end_col)`` for every highlight in *buffer*."""
        return [
            (h.group, h.row, h.start, h.end)
            for h in self._buffer(buffer).highlights.values()
        ]

    def keymaps(self, buffer: BufferHandle, mode: str = KEYMAP_MODE) -> list[str]:
        return [key for (m, key) in self._buffer(buffer).keymaps if m == mode]

    @property
    def pending_focus_callbacks(self) -> int:
        return len(self._focus_callbacks)

    # ------------------------------------------------------------------
    # Buffers and windows
    # ------------------------------------------------------------------

    def create_scratch_buffer(self) -> BufferHandle:
        return self._new_buffer([], scratch=True).handle

    def open_floating_window(
        self,
        buffer: BufferHandle,
        geometry: Geometry,
        enter: bool = True,
    ) -> WindowHandle:
        self._buffer(buffer)
        if geometry.width < 1 or geometry.height < 1:
            raise HostInteractionError(
                f"window size must be positive, got {geometry.width}x{geometry.height}"
            )
        handle = next(self._ids)
        self._windows[handle] = _Window(handle, buffer, geometry=geometry)
        logger.debug("Opened float %s for buffer %s", handle, buffer)
        if enter:
            self._enter(handle)
        return handle

    def close_window(self, window: WindowHandle) -> None:
        if window == self._main:
            raise HostInteractionError("cannot close the main window")
        win = self._windows.pop(window, None)
        if win is None:
            return

        buffer = self._buffers.get(win.buffer)
        if buffer is not None and buffer.scratch and not any(
            w.buffer == buffer.handle for w in self._windows.values()
        ):
            del self._buffers[buffer.handle]

        if self._current == window:
            target = win.return_to
            if target is None or target not in self._windows:
                target = self._main
            self._set_current(target)

    def set_buffer_lines(self, buffer: BufferHandle, lines: Sequence[str]) -> None:
        buf = self._buffer(buffer)
        for line in lines:
            if "\n" in line:
                raise HostInteractionError("buffer lines cannot contain newlines")
        buf.lines = list(lines) or [""]
        for win in self._windows.values():
            if win.buffer == buffer:
                self._move_cursor(win, 0)

    def set_window_option(self, window: WindowHandle, name: str, value: object) -> None:
        self._window(window).options[name] = value

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def register_key_binding(
        self,
        buffer: BufferHandle,
        mode: str,
        key: str,
        action: Action,
    ) -> None:
        self._buffer(buffer).keymaps[(mode, normalise_key(key))] = action

    def register_focus_loss_notification(self, callback: Action) -> None:
        self._focus_callbacks.append(callback)

    def feed_key(self, key: str, mode: str = KEYMAP_MODE) -> bool:
        """
        Deliver a key press to the current window.

        Buffer-local keymaps take precedence over the built-in motions
        (``j``/``k``/``<Down>``/``<Up>``).  Returns ``False`` when the key
        did nothing.
        """
        key = normalise_key(key)
        win = self._windows[self._current]
        action = self._buffers[win.buffer].keymaps.get((mode, key))
        if action is not None:
            action()
            return True
        delta = _MOTIONS.get(key)
        if delta is not None:
            self._move_cursor(win, delta)
            return True
        return False

    def feed_keys(self, *keys: str) -> None:
        for key in keys:
            self.feed_key(key)

    def focus(self, window: WindowHandle) -> None:
        """Make *window* current, as if the user moved to it."""
        win = self._window(window)
        if win.geometry is not None and not win.geometry.focusable:
            raise HostInteractionError(f"window {window} is not focusable")
        self._set_current(window)

    # ------------------------------------------------------------------
    # Cursor queries
    # ------------------------------------------------------------------

    def set_cursor(self, row: int, col: int = 0, window: WindowHandle | None = None) -> None:
        win = self._window(self._current if window is None else window)
        win.cursor_row = row
        win.cursor_col = col
        self._move_cursor(win, 0)

    def get_cursor_position(self) -> CursorPosition:
        win = self._windows[self._current]
        return CursorPosition(win.cursor_row, win.cursor_col)

    def get_current_line_text(self) -> str:
        win = self._windows[self._current]
        return self._buffers[win.buffer].lines[win.cursor_row - 1]

    def get_current_line(self) -> int:
        return self._windows[self._current].cursor_row

    def get_current_buffer(self) -> BufferHandle:
        return self._windows[self._current].buffer

    # ------------------------------------------------------------------
    # Highlights
    # ------------------------------------------------------------------

    def add_highlight(
        self,
        buffer: BufferHandle,
        group: str,
        row: int,
        start_col: int,
        end_col: int,
    ) -> HighlightHandle:
        buf = self._buffer(buffer)
        if not 0 <= row < len(buf.lines):
            raise HostInteractionError(f"line {row} is out of range for buffer {buffer}")
        handle = next(self._ids)
        buf.highlights[handle] = _Highlight(group, row, start_col, end_col)
        return handle

    def clear_highlight(self, buffer: BufferHandle, handle: HighlightHandle) -> None:
        self._buffer(buffer).highlights.pop(handle, None)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, color: bool = False) -> list[str]:
        """
        Composite the main window and all floats into screen lines.

        With *color* highlight groups are drawn with ANSI styles, otherwise
        plain text is returned with trailing blanks stripped.
        """
        grid = _Grid(self.width, self.height)
        main = self._windows[self._main]
        buffer = self._buffers[main.buffer]
        for i in range(self.height):
            line_no = main.topline + i
            if line_no > len(buffer.lines):
                break
            self._draw_line(grid, i, 0, buffer, line_no, self.width)

        floats = sorted(
            (w for w in self._windows.values() if w.geometry is not None),
            key=lambda w: (w.geometry.zindex, w.handle),
        )
        for win in floats:
            self._draw_float(grid, win)

        return grid.lines(self._styles if color else None)

    def _draw_float(self, grid: _Grid, win: _Window) -> None:
        geometry = win.geometry
        top, left = self._placement(geometry)

        if geometry.border is not None and self.native_border:
            border = geometry.border
            otop, oleft = self._placement(geometry.outer())
            frame = draw_border(geometry.width, geometry.height, border.glyphs, border.title)
            for i, line in enumerate(frame):
                grid.put(otop + i, oleft, line, BORDER_GROUP)

        buffer = self._buffers[win.buffer]
        cursorline = bool(win.options.get("cursorline"))
        for i in range(geometry.height):
            row = top + i
            line_no = win.topline + i
            grid.put(row, left, " " * geometry.width, FLOAT_GROUP)
            if line_no <= len(buffer.lines):
                self._draw_line(grid, row, left, buffer, line_no, geometry.width, FLOAT_GROUP)
            if cursorline and line_no == win.cursor_row:
                grid.restyle(row, left, geometry.width, win.cursorline_group())

    def _draw_line(
        self,
        grid: _Grid,
        row: int,
        left: int,
        buffer: _Buffer,
        line_no: int,
        width: int,
        group: str | None = None,
    ) -> None:
        text = buffer.lines[line_no - 1]
        grid.put(row, left, truncate(text, width), group)
        for hl in buffer.highlights.values():
            if hl.row != line_no - 1:
                continue
            start, span = _byte_range_to_cells(text, hl.start, hl.end)
            if start < width and span:
                grid.restyle(row, left + start, min(span, width - start), hl.group)

    def _placement(self, geometry: Geometry) -> tuple[int, int]:
        """Screen ``(row, col)`` of the top-left cell of *geometry*."""
        main = self._windows[self._main]
        row, col = geometry.row, geometry.col
        if geometry.relative_to == "cursor":
            current = self._windows[self._current]
            row += current.cursor_row
            col += current.cursor_col
        top = row - main.topline
        if geometry.anchor.startswith("bot"):
            top -= geometry.height - 1
        if geometry.anchor.endswith("right"):
            col -= geometry.width - 1
        return top, col

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _new_buffer(self, lines: list[str], scratch: bool) -> _Buffer:
        buffer = _Buffer(next(self._ids), lines or [""], scratch=scratch)
        self._buffers[buffer.handle] = buffer
        return buffer

    def _buffer(self, buffer: BufferHandle) -> _Buffer:
        try:
            return self._buffers[buffer]
        except KeyError:
            raise HostInteractionError(f"invalid buffer {buffer}") from None

    def _window(self, window: WindowHandle) -> _Window:
        try:
            return self._windows[window]
        except KeyError:
            raise HostInteractionError(f"invalid window {window}") from None

    def _enter(self, window: WindowHandle) -> None:
        self._windows[window].return_to = self._current
        self._set_current(window)

    def _set_current(self, window: WindowHandle) -> None:
        if window == self._current:
            return
        self._current = window
        callbacks, self._focus_callbacks = self._focus_callbacks, []
        for callback in callbacks:
            callback()

    def _move_cursor(self, win: _Window, delta: int) -> None:
        count = len(self._buffers[win.buffer].lines)
        win.cursor_row = max(1, min(win.cursor_row + delta, count))
        height = win.height
        if height is None:
            return
        if win.cursor_row < win.topline:
            win.topline = win.cursor_row
        elif win.cursor_row >= win.topline + height:
            win.topline = win.cursor_row - height + 1


def _byte_range_to_cells(text: str, start: int, end: int) -> tuple[int, int]:
    """Map the byte range ``[start, end)`` of *text* to ``(first cell, cell count)``."""
    if end == EOL:
        end = len(text.encode("utf-8"))
    before = inside = 0
    offset = 0
    for ch in text:
        w = char_width(ch)
        if offset < start:
            before += w
        elif offset < end:
            inside += w
        offset += len(ch.encode("utf-8"))
    return before, inside
