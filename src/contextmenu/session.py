"""
State of one open menu.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from contextmenu.config import MenuConfig
from contextmenu.host import BufferHandle, HighlightHandle, WindowHandle
from contextmenu.layout import Layout


class SessionState(str, Enum):
    """
    Lifecycle of a menu session.

    ``OPEN`` moves to exactly one of ``SUBMITTED`` or ``CANCELLED``, which
    then moves to ``CLOSED`` once the callback has run.  Handlers only act
    on an ``OPEN`` session.
    """

    OPEN = "open"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"
    CLOSED = "closed"


@dataclass(frozen=True)
class Origin:
    """Where the caller's cursor was when the menu opened."""

    buffer: BufferHandle
    row: int  # 1-based line
    col: int  # 0-based byte offset
    line: str


@dataclass(eq=False)
class MenuSession:
    """A live menu, from :meth:`MenuController.open` until teardown."""

    entries: tuple[str, ...]
    config: MenuConfig
    layout: Layout
    origin: Origin
    state: SessionState = SessionState.OPEN

    # Host resources, cleared as they are released
    buffer: BufferHandle | None = None
    window: WindowHandle | None = None
    border_window: WindowHandle | None = None
    cursor_highlight: HighlightHandle | None = None

    chosen: int | None = field(default=None)

    @property
    def is_open(self) -> bool:
        return self.state is SessionState.OPEN

    @property
    def chosen_entry(self) -> str | None:
        """The submitted entry text, once the session has been submitted."""
        if self.chosen is None or not 1 <= self.chosen <= len(self.entries):
            return None
        return self.entries[self.chosen - 1]
