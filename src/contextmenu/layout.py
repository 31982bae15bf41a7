"""
Menu geometry.

Computes the size of the menu from its entries and the position of the
window from the caller's cursor.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from contextmenu.config import MenuConfig
from contextmenu.text import display_width


@dataclass(frozen=True)
class Layout:
    """
    Result of :func:`compute_layout`.

    ``row``/``col`` are the resolved anchor position.  The window itself
    is placed at ``window_row``/``window_col``, pushed away from the
    anchor by the border width so that the border lands on the anchor
    position instead of covering the cursor cell.
    """

    width: int
    height: int
    row: int
    col: int
    anchor: str
    border_width: int = 0

    @property
    def window_row(self) -> int:
        if self.anchor.startswith("bot"):
            return self.row - self.border_width
        return self.row + self.border_width

    @property
    def window_col(self) -> int:
        if self.anchor.endswith("right"):
            return self.col - self.border_width
        return self.col + self.border_width


def clamp(value: int, minimum: int | None, maximum: int | None) -> int:
    """
    Clamp *value* into ``[minimum, maximum]``, either bound optional.

    When both bounds are given and ``minimum > maximum`` the maximum wins.
    """
    if minimum is not None:
        value = max(value, minimum)
    if maximum is not None:
        value = min(value, maximum)
    return value


def menu_width(entries: Sequence[str], config: MenuConfig) -> int:
    width = max(
        (config.padding_left + display_width(e) + config.padding_right for e in entries),
        default=0,
    )
    return clamp(width, config.min_width, config.max_width)


def menu_height(entries: Sequence[str], config: MenuConfig) -> int:
    return clamp(len(entries), config.min_height, config.max_height)


def compute_layout(
    entries: Sequence[str],
    config: MenuConfig,
    cursor_row: int,
    cursor_col: int,
) -> Layout:
    """
    Lay out a menu for *entries*.

    Parameters
    ----------
    entries:
        Display strings in menu order.
    config:
        A validated :class:`MenuConfig`.
    cursor_row, cursor_col:
        The caller's cursor, used to resolve ``cursor±N`` positions.
        The column is a display column, not a byte offset.
    """
    return Layout(
        width=menu_width(entries, config),
        height=menu_height(entries, config),
        row=config.row_coordinate.resolve(cursor_row),
        col=config.col_coordinate.resolve(cursor_col),
        anchor=config.anchor,
        border_width=config.border_width,
    )


def pad_entries(entries: Sequence[str], config: MenuConfig) -> list[str]:
    """Prefix every entry with ``padding_left`` spaces."""
    prefix = " " * config.padding_left
    return [prefix + entry for entry in entries]
