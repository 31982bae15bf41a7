"""
Context menu controller.

Opens a menu in a host editor, wires the accept/dismiss keys and the
focus-loss notification to the session, and tears everything down again.

Example:
    from contextmenu import open as open_menu

    choices = ["choice 1", "choice 2"]
    open_menu(
        choices,
        host=host,
        padding_left=1,
        on_submit=lambda index: print("Final choice", choices[index - 1]),
    )

Guarantees
----------
* At most one menu is open per host.  Opening another menu first cancels
  the current one, firing its ``on_close``.
* Each session fires at most one callback: ``on_submit(index)`` after an
  accept or ``on_close()`` after a dismiss or focus loss, never both.
* Callbacks run after the menu's windows are gone and the session has been
  unregistered, so a callback may open a new menu.
"""

from __future__ import annotations

import weakref
from collections.abc import Sequence
from typing import Any

from contextmenu.border import BorderSpec
from contextmenu.config import MenuConfig
from contextmenu.errors import ConfigurationError, HostInteractionError
from contextmenu.host import Geometry, Host
from contextmenu.keybindings import KEYMAP_MODE, KeybindingsManager
from contextmenu.layout import compute_layout, pad_entries
from contextmenu.logging import get_logger
from contextmenu.session import MenuSession, Origin, SessionState
from contextmenu.text import cursor_cell_span, display_column

logger = get_logger("controller")


class MenuController:
    """
    Owns the single open menu of one host.

    Parameters
    ----------
    host:
        The editor services used to draw the menu.
    keybindings:
        Keys for the ``submit`` and ``close`` actions.  Defaults to
        ``<CR>`` and ``<Esc>``.
    """

    def __init__(
        self,
        host: Host,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        self._host = host
        self._keybindings = keybindings or KeybindingsManager()
        self._active: MenuSession | None = None

    @property
    def host(self) -> Host:
        return self._host

    @property
    def active(self) -> MenuSession | None:
        """The open session, or ``None``."""
        return self._active

    # ------------------------------------------------------------------
    # Opening
    # ------------------------------------------------------------------

    def open(
        self,
        entries: Sequence[str],
        config: MenuConfig | None = None,
        **options: Any,
    ) -> MenuSession:
        """
        Open a menu listing *entries*.

        Keyword *options* override fields of *config*.

        Raises
        ------
        ConfigurationError
            Before anything is drawn, when the entries or options are
            invalid.
        HostInteractionError
            When the host fails to create the menu.  Whatever was created
            is released again and no session is registered.
        """
        items = _check_entries(entries)
        config = config or MenuConfig()
        if options:
            config = config.merged(**options)
        config.validate()

        if self._active is not None:
            logger.debug("Cancelling open menu before opening a new one")
            self._cancel(self._active)

        host = self._host
        cursor = host.get_cursor_position()
        line = host.get_current_line_text()
        origin = Origin(
            buffer=host.get_current_buffer(),
            row=cursor.row,
            col=cursor.col,
            line=line,
        )
        layout = compute_layout(items, config, cursor.row, display_column(line, cursor.col))
        session = MenuSession(entries=items, config=config, layout=layout, origin=origin)

        try:
            self._create(session)
        except Exception:
            logger.debug("Menu creation failed, releasing partial resources")
            self.teardown(session)
            session.state = SessionState.CLOSED
            raise

        self._active = session
        logger.debug(
            "Opened menu with %d entries (%dx%d at %d,%d)",
            len(items), layout.width, layout.height, layout.row, layout.col,
        )
        return session

    def _create(self, session: MenuSession) -> None:
        host = self._host
        config = session.config
        layout = session.layout
        origin = session.origin

        # Keep the caller's cursor visible while focus is in the menu
        span = cursor_cell_span(origin.line, origin.col)
        session.cursor_highlight = host.add_highlight(
            origin.buffer, config.cursor_group, origin.row - 1, span.start, span.end,
        )

        session.buffer = host.create_scratch_buffer()
        host.set_buffer_lines(session.buffer, pad_entries(session.entries, config))

        border = None
        if config.border_width:
            border = BorderSpec(config.glyphs, width=config.border_width, title=config.title)

        geometry = Geometry(
            width=layout.width,
            height=layout.height,
            row=layout.window_row,
            col=layout.window_col,
            anchor=layout.anchor,
            style_minimal=config.style_minimal,
            border=border,
        )
        session.window = host.open_floating_window(session.buffer, geometry, enter=True)
        if border is not None and not host.native_border:
            session.border_window = host.decorate_with_border(session.window, geometry)

        host.set_window_option(session.window, "cursorline", True)
        host.set_window_option(session.window, "winhighlight", f"CursorLine:{config.highlight_group}")

        handlers = {
            "submit": lambda: self._submit(session),
            "close": lambda: self._cancel(session),
        }
        for action, handler in handlers.items():
            for key in self._keybindings.get_keys(action):
                host.register_key_binding(session.buffer, KEYMAP_MODE, key, handler)

        # Registered last: entering the menu window must not trigger it
        host.register_focus_loss_notification(lambda: self._cancel(session))

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _submit(self, session: MenuSession) -> None:
        if not session.is_open:
            return
        index = self._host.get_current_line()
        session.chosen = index
        session.state = SessionState.SUBMITTED
        logger.debug("Submitted entry %d", index)

        self._release(session)
        try:
            if session.config.on_submit is not None:
                session.config.on_submit(index)
        finally:
            session.state = SessionState.CLOSED

    def _cancel(self, session: MenuSession) -> None:
        # Also reached from the focus loss caused by a submit's teardown
        if not session.is_open:
            return
        session.state = SessionState.CANCELLED
        logger.debug("Menu cancelled")

        self._release(session)
        try:
            if session.config.on_close is not None:
                session.config.on_close()
        finally:
            session.state = SessionState.CLOSED

    def _release(self, session: MenuSession) -> None:
        self.teardown(session)
        if self._active is session:
            self._active = None

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def teardown(self, session: MenuSession) -> None:
        """
        Release the host resources held by *session*.

        Best effort and idempotent: host failures are ignored, handles are
        forgotten once released, and no callback is ever fired from here.
        The cursor placeholder is cleared even if closing a window failed.
        """
        host = self._host

        for attr in ("window", "border_window"):
            handle = getattr(session, attr)
            if handle is None:
                continue
            setattr(session, attr, None)
            try:
                host.close_window(handle)
            except HostInteractionError as exc:
                logger.debug("Ignoring failure closing window %s: %s", handle, exc)

        session.buffer = None

        if session.cursor_highlight is not None:
            handle = session.cursor_highlight
            session.cursor_highlight = None
            try:
                host.clear_highlight(session.origin.buffer, handle)
            except HostInteractionError as exc:
                logger.debug("Ignoring failure clearing cursor highlight: %s", exc)


def _check_entries(entries: Sequence[str]) -> tuple[str, ...]:
    if isinstance(entries, str) or not isinstance(entries, Sequence):
        raise ConfigurationError("expected a sequence of strings", option="entries")
    if not entries:
        raise ConfigurationError("at least one entry is required", option="entries")
    for entry in entries:
        if not isinstance(entry, str):
            raise ConfigurationError(f"expected a string, got {entry!r}", option="entries")
        if "\n" in entry or "\r" in entry:
            raise ConfigurationError("entries cannot contain line breaks", option="entries")
    return tuple(entries)


# ---------------------------------------------------------------------------
# Per-host registry
# ---------------------------------------------------------------------------

_controllers: weakref.WeakKeyDictionary[Host, MenuController] = weakref.WeakKeyDictionary()


def controller_for(host: Host) -> MenuController:
    """Return the controller owning *host*'s menu, creating it on first use."""
    controller = _controllers.get(host)
    if controller is None:
        controller = MenuController(host)
        _controllers[host] = controller
    return controller


def open(
    entries: Sequence[str],
    config: MenuConfig | None = None,
    *,
    host: Host,
    **options: Any,
) -> MenuSession:
    """Open a menu on *host*.  See :meth:`MenuController.open`."""
    return controller_for(host).open(entries, config, **options)
