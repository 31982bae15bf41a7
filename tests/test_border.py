"""Tests for border glyph resolution and frame drawing."""

import pytest

from contextmenu.border import (
    DEFAULT_CORNER,
    DEFAULT_GLYPHS,
    BorderGlyphs,
    draw_border,
    resolve_glyphs,
)
from contextmenu.errors import ConfigurationError


class TestResolveGlyphs:
    """Tests for resolve_glyphs."""

    def test_none_gives_default_set(self) -> None:
        assert resolve_glyphs(None).as_tuple() == DEFAULT_GLYPHS

    def test_empty_list_gives_default_set(self) -> None:
        assert resolve_glyphs([]).as_tuple() == DEFAULT_GLYPHS

    def test_single_glyph_everywhere(self) -> None:
        assert resolve_glyphs(["*"]).as_tuple() == ("*",) * 8

    def test_two_glyphs_edges_and_corners(self) -> None:
        glyphs = resolve_glyphs(["-", "+"])

        assert (glyphs.top, glyphs.right, glyphs.bottom, glyphs.left) == ("-",) * 4
        assert (glyphs.topleft, glyphs.topright, glyphs.botright, glyphs.botleft) == ("+",) * 4

    def test_four_glyphs_get_plus_corners(self) -> None:
        glyphs = resolve_glyphs(["-", "|", "=", "!"])

        assert glyphs == BorderGlyphs(
            "-", "|", "=", "!",
            DEFAULT_CORNER, DEFAULT_CORNER, DEFAULT_CORNER, DEFAULT_CORNER,
        )

    def test_eight_glyphs_pass_through(self) -> None:
        given = ["a", "b", "c", "d", "e", "f", "g", "h"]

        glyphs = resolve_glyphs(given)

        assert glyphs.as_tuple() == tuple(given)
        assert glyphs.topleft == "e"
        assert glyphs.botleft == "h"

    def test_tuple_accepted(self) -> None:
        assert resolve_glyphs(("#",)).top == "#"

    @pytest.mark.parametrize("count", [3, 5, 6, 7, 9])
    def test_invalid_length_rejected(self, count: int) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_glyphs(["*"] * count)

        assert exc_info.value.option == "border_glyphs"
        assert str(count) in str(exc_info.value)

    def test_wide_glyph_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_glyphs(["日"])

    def test_multi_character_glyph_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_glyphs(["ab", "+"])

    def test_string_rejected(self) -> None:
        """A bare string is not a glyph list, even if its length is valid."""
        with pytest.raises(ConfigurationError):
            resolve_glyphs("-+")


class TestDrawBorder:
    """Tests for draw_border."""

    def test_frame_order(self) -> None:
        """Corners are placed clockwise from the top-left."""
        glyphs = resolve_glyphs(["-", "|", "-", "|", "a", "b", "c", "d"])

        assert draw_border(3, 2, glyphs) == [
            "a---b",
            "|   |",
            "|   |",
            "d---c",
        ]

    def test_default_glyphs(self) -> None:
        assert draw_border(2, 1, resolve_glyphs(None)) == [
            "╭──╮",
            "│  │",
            "╰──╯",
        ]

    def test_title_centered(self) -> None:
        glyphs = resolve_glyphs(["-", "+"])

        assert draw_border(6, 1, glyphs, "ab")[0] == "+--ab--+"

    def test_title_truncated(self) -> None:
        glyphs = resolve_glyphs(["-", "+"])

        assert draw_border(3, 1, glyphs, "abcdef")[0] == "+abc+"

    def test_line_count(self) -> None:
        assert len(draw_border(4, 5, resolve_glyphs(None))) == 7
