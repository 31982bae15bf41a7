"""
Host editor capability interface.

The controller never touches a real editor directly.  Everything it needs
(scratch buffers, floating windows, keymaps, highlights and cursor queries)
goes through a :class:`Host`.  Handles are opaque integers owned by the
host; the controller only passes them back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Literal

from contextmenu.border import BorderSpec, draw_border

BufferHandle = int
WindowHandle = int
HighlightHandle = int

Action = Callable[[], None]


@dataclass(frozen=True)
class CursorPosition:
    """Cursor of the current window: 1-based line, 0-based byte column."""

    row: int
    col: int


@dataclass(frozen=True)
class Geometry:
    """
    Placement of a floating window.

    ``anchor`` names the corner cell of the window that sits at
    ``row``/``col``. Floats with a higher ``zindex`` are drawn on top.
    ``width`` and ``height`` are the inner size; a border, if any, is
    drawn outside of it.
    """

    width: int
    height: int
    row: int
    col: int
    anchor: str = "topleft"
    relative_to: Literal["editor", "cursor"] = "editor"
    style_minimal: bool = True
    border: BorderSpec | None = None
    focusable: bool = True
    zindex: int = 50

    def outer(self) -> Geometry:
        """Geometry of the area covered by the window and its border."""
        if self.border is None:
            return self
        bw = self.border.width
        row = self.row + bw if self.anchor.startswith("bot") else self.row - bw
        col = self.col + bw if self.anchor.endswith("right") else self.col - bw
        return replace(
            self,
            width=self.width + 2 * bw,
            height=self.height + 2 * bw,
            row=row,
            col=col,
            border=None,
        )


class Host(ABC):
    """
    Windowing services of the editor hosting a menu.

    Every method may raise :class:`~contextmenu.errors.HostInteractionError`
    except :meth:`close_window`, which must treat an already-closed
    handle as a no-op.
    """

    #: Whether :meth:`open_floating_window` draws ``geometry.border`` itself.
    native_border: bool = True

    # ------------------------------------------------------------------
    # Buffers and windows
    # ------------------------------------------------------------------

    @abstractmethod
    def create_scratch_buffer(self) -> BufferHandle:
        ...

    @abstractmethod
    def open_floating_window(
        self,
        buffer: BufferHandle,
        geometry: Geometry,
        enter: bool = True,
    ) -> WindowHandle:
        """Show *buffer* in a floating window, focusing it when *enter*."""
        ...

    @abstractmethod
    def close_window(self, window: WindowHandle) -> None:
        ...

    @abstractmethod
    def set_buffer_lines(self, buffer: BufferHandle, lines: Sequence[str]) -> None:
        ...

    @abstractmethod
    def set_window_option(self, window: WindowHandle, name: str, value: object) -> None:
        ...

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    @abstractmethod
    def register_key_binding(
        self,
        buffer: BufferHandle,
        mode: str,
        key: str,
        action: Action,
    ) -> None:
        ...

    @abstractmethod
    def register_focus_loss_notification(self, callback: Action) -> None:
        """Call *callback* once, the next time the current window changes."""
        ...

    # ------------------------------------------------------------------
    # Cursor queries
    # ------------------------------------------------------------------

    @abstractmethod
    def get_cursor_position(self) -> CursorPosition:
        ...

    @abstractmethod
    def get_current_line_text(self) -> str:
        ...

    @abstractmethod
    def get_current_line(self) -> int:
        """1-based line of the cursor in the current window."""
        ...

    @abstractmethod
    def get_current_buffer(self) -> BufferHandle:
        ...

    # ------------------------------------------------------------------
    # Highlights
    # ------------------------------------------------------------------

    @abstractmethod
    def add_highlight(
        self,
        buffer: BufferHandle,
        group: str,
        row: int,
        start_col: int,
        end_col: int,
    ) -> HighlightHandle:
        """
        Highlight bytes ``[start_col, end_col)`` of 0-based line *row*.

        An *end_col* of ``-1`` extends to the end of the line.
        """
        ...

    @abstractmethod
    def clear_highlight(self, buffer: BufferHandle, handle: HighlightHandle) -> None:
        ...

    # ------------------------------------------------------------------
    # Optional
    # ------------------------------------------------------------------

    def decorate_with_border(
        self,
        window: WindowHandle,
        geometry: Geometry,
    ) -> WindowHandle | None:
        """
        Draw ``geometry.border`` around *window* for hosts without native
        borders.

        The default implementation opens a second, unfocused scratch
        window holding the frame, placed behind the menu.  The returned
        handle must be closed together with *window*.
        """
        border = geometry.border
        if border is None:
            return None
        outer = geometry.outer()
        buffer = self.create_scratch_buffer()
        self.set_buffer_lines(
            buffer,
            draw_border(geometry.width, geometry.height, border.glyphs, border.title),
        )
        return self.open_floating_window(
            buffer,
            replace(outer, focusable=False, zindex=geometry.zindex - 1),
            enter=False,
        )
