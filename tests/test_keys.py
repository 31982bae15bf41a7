"""Tests for terminal key parsing."""

import pytest

from contextmenu.screen.keys import (
    KEY_BACKSPACE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_SPACE,
    KEY_TAB,
    KEY_UNKNOWN,
    KEY_UP,
    Key,
    key_notation,
    parse_key,
)


class TestParseKey:
    """Tests for parse_key."""

    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (b"\r", KEY_ENTER),
            (b"\n", KEY_ENTER),
            (b"\t", KEY_TAB),
            (b"\x7f", KEY_BACKSPACE),
            (b"\x1b", KEY_ESCAPE),
            (b" ", KEY_SPACE),
            (b"\x1b[A", KEY_UP),
            (b"\x1bOB", KEY_DOWN),
            (b"", KEY_UNKNOWN),
        ],
    )
    def test_special_keys(self, data: bytes, expected: Key) -> None:
        assert parse_key(data) == expected

    def test_printable(self) -> None:
        assert parse_key(b"j") == Key(name="j", char="j")

    def test_utf8_character(self) -> None:
        assert parse_key("é".encode()) == Key(name="é", char="é")

    def test_ctrl_letter(self) -> None:
        assert parse_key(b"\x0e") == Key(name="ctrl+n", char="n", ctrl=True)

    def test_alt_character(self) -> None:
        assert parse_key(b"\x1bx") == Key(name="alt+x", char="x", alt=True)

    def test_ctrl_arrow(self) -> None:
        key = parse_key(b"\x1b[1;5B")

        assert key.name == "down"
        assert key.ctrl is True
        assert key.shift is False

    def test_tilde_sequence(self) -> None:
        assert parse_key(b"\x1b[3~").name == "delete"

    def test_shift_tab(self) -> None:
        key = parse_key(b"\x1b[Z")

        assert key.name == "tab"
        assert key.shift is True

    def test_unknown_sequence(self) -> None:
        assert parse_key(b"\x1b[99~") == KEY_UNKNOWN

    def test_invalid_utf8(self) -> None:
        assert parse_key(b"\xff") == KEY_UNKNOWN


class TestKeyNotation:
    """Tests for key_notation."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            (KEY_ENTER, "<CR>"),
            (KEY_ESCAPE, "<Esc>"),
            (KEY_UP, "<Up>"),
            (KEY_SPACE, "<Space>"),
            (Key(name="j", char="j"), "j"),
            (Key(name="ctrl+c", char="c", ctrl=True), "<C-c>"),
            (Key(name="alt+x", char="x", alt=True), "<A-x>"),
            (Key(name="tab", char="\t", shift=True), "<S-Tab>"),
            (Key(name="down", ctrl=True), "<C-Down>"),
            (Key(name="+", char="+"), "+"),
            (KEY_UNKNOWN, ""),
        ],
    )
    def test_notation(self, key: Key, expected: str) -> None:
        assert key_notation(key) == expected

    def test_parsed_keys_drive_host_motions(self) -> None:
        """Arrow and Ctrl-N input maps onto the notation the host understands."""
        assert key_notation(parse_key(b"\x1b[B")) == "<Down>"
        assert key_notation(parse_key(b"\x0e")) == "<C-n>"
        assert key_notation(parse_key(b"\r")) == "<CR>"
