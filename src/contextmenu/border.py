"""
Border glyph resolution and frame drawing.

A border is described by eight glyphs in a fixed order: the four edges
(top, right, bottom, left) followed by the four corners clockwise from
the top-left.  Users may give a shorter list which is expanded here.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from contextmenu.errors import ConfigurationError
from contextmenu.text import display_width, truncate

# top, right, bottom, left, topleft, topright, botright, botleft
DEFAULT_GLYPHS: tuple[str, ...] = (
    "─", "│", "─", "│",
    "╭", "╮", "╯", "╰",
)

DEFAULT_CORNER = "+"


@dataclass(frozen=True)
class BorderGlyphs:
    """Canonical eight-slot border glyph set."""

    top: str
    right: str
    bottom: str
    left: str
    topleft: str
    topright: str
    botright: str
    botleft: str

    def as_tuple(self) -> tuple[str, ...]:
        return (
            self.top, self.right, self.bottom, self.left,
            self.topleft, self.topright, self.botright, self.botleft,
        )


@dataclass(frozen=True)
class BorderSpec:
    """Everything a host needs to decorate a window with a border."""

    glyphs: BorderGlyphs
    width: int = 1
    title: str | None = None


def resolve_glyphs(glyphs: Sequence[str] | None) -> BorderGlyphs:
    """
    Expand a user-supplied glyph list to the eight-slot form.

    ==========  ==================================================
    length      meaning
    ==========  ==================================================
    0 / None    built-in rounded line-drawing set
    1           same glyph everywhere
    2           edge glyph, corner glyph
    4           top, right, bottom, left edges; corners are ``+``
    8           edges then corners, clockwise from top-left
    ==========  ==================================================

    Raises
    ------
    ConfigurationError
        For any other length, or when a glyph is not a single cell wide.
    """
    if glyphs is None:
        return BorderGlyphs(*DEFAULT_GLYPHS)
    if isinstance(glyphs, str) or not isinstance(glyphs, Sequence):
        raise ConfigurationError(
            "expected a list of glyphs", option="border_glyphs",
        )

    for glyph in glyphs:
        if not isinstance(glyph, str) or display_width(glyph) != 1:
            raise ConfigurationError(
                f"glyph {glyph!r} must be a single-cell string",
                option="border_glyphs",
            )

    count = len(glyphs)
    if count == 0:
        slots = DEFAULT_GLYPHS
    elif count == 1:
        slots = (glyphs[0],) * 8
    elif count == 2:
        slots = (glyphs[0],) * 4 + (glyphs[1],) * 4
    elif count == 4:
        slots = tuple(glyphs) + (DEFAULT_CORNER,) * 4
    elif count == 8:
        slots = tuple(glyphs)
    else:
        raise ConfigurationError(
            f"expected 1, 2, 4 or 8 glyphs, got {count}",
            option="border_glyphs",
        )
    return BorderGlyphs(*slots)


def draw_border(
    width: int,
    height: int,
    glyphs: BorderGlyphs,
    title: str | None = None,
) -> list[str]:
    """
    Draw a frame around an inner area of *width* x *height* cells.

    The interior is filled with spaces.  A *title* is centered in the top
    edge and truncated to fit.

    Returns
    -------
    list[str]
        ``height + 2`` lines, each ``width + 2`` cells wide.
    """
    top = glyphs.top * width
    if title:
        label = truncate(title, width)
        label_width = display_width(label)
        left = (width - label_width) // 2
        top = glyphs.top * left + label + glyphs.top * (width - left - label_width)

    lines = [glyphs.topleft + top + glyphs.topright]
    for _ in range(height):
        lines.append(glyphs.left + " " * width + glyphs.right)
    lines.append(glyphs.botleft + glyphs.bottom * width + glyphs.botright)
    return lines
