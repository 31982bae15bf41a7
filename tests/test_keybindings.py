"""Tests for keybinding management."""

import json
from pathlib import Path

import pytest

from contextmenu.keybindings import DEFAULT_KEYBINDINGS, KeybindingsManager, normalise_key


class TestNormaliseKey:
    """Tests for normalise_key."""

    @pytest.mark.parametrize(
        ("descriptor", "expected"),
        [
            ("<cr>", "<CR>"),
            ("<Enter>", "<CR>"),
            ("<ESCAPE>", "<Esc>"),
            ("<down>", "<Down>"),
            ("<c-N>", "<C-n>"),
            ("<s-c-X>", "<C-S-x>"),
            ("<Ctrl-Shift-Tab>", "<C-S-Tab>"),
            ("<C-->", "<C-->"),
            (" ", "<Space>"),
            ("<space>", "<Space>"),
            ("j", "j"),
            ("J", "J"),
            ("<", "<"),
            ("<x>", "x"),
        ],
    )
    def test_normalise(self, descriptor: str, expected: str) -> None:
        assert normalise_key(descriptor) == expected


class TestKeybindingsManager:
    """Tests for KeybindingsManager."""

    def test_defaults_loaded(self) -> None:
        """All default actions should be present in a fresh manager."""
        manager = KeybindingsManager()
        actions = manager.actions()

        for action in DEFAULT_KEYBINDINGS:
            assert action in actions

    def test_default_keys(self) -> None:
        manager = KeybindingsManager()

        assert manager.get_keys("submit") == ["<CR>"]
        assert manager.get_keys("close") == ["<Esc>"]

    def test_matches_any_notation(self) -> None:
        """'<cr>' and '<Enter>' should both match the 'submit' action."""
        manager = KeybindingsManager()

        assert manager.matches("<cr>", "submit") is True
        assert manager.matches("<Enter>", "submit") is True
        assert manager.matches("<Esc>", "submit") is False

    def test_matches_unknown_action(self) -> None:
        assert KeybindingsManager().matches("<CR>", "nonexistent") is False

    def test_user_overrides_replace_defaults(self) -> None:
        """User overrides should replace the default bindings for that action."""
        manager = KeybindingsManager(user_overrides={"close": ["q"]})

        assert manager.matches("q", "close") is True
        assert manager.matches("<Esc>", "close") is False

    def test_user_overrides_preserve_other_defaults(self) -> None:
        """Overriding one action should not affect other defaults."""
        manager = KeybindingsManager(user_overrides={"close": ["q"]})

        assert manager.matches("<CR>", "submit") is True

    def test_get_keys_unknown_action(self) -> None:
        """get_keys for an unknown action should return an empty list."""
        assert KeybindingsManager().get_keys("nonexistent") == []

    def test_find_action(self) -> None:
        manager = KeybindingsManager()

        assert manager.find_action("<esc>") == "close"
        assert manager.find_action("<CR>") == "submit"
        assert manager.find_action("x") is None


class TestKeybindingsLoad:
    """Tests for loading overrides from JSON."""

    def test_load_from_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "keybindings.json"
        config_file.write_text(json.dumps({"submit": ["<CR>", "l"], "close": ["q"]}))

        manager = KeybindingsManager.load(config_file)

        assert manager.matches("l", "submit") is True
        assert manager.matches("q", "close") is True
        assert manager.matches("<Esc>", "close") is False

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        manager = KeybindingsManager.load(tmp_path / "missing.json")

        assert manager.get_keys("close") == ["<Esc>"]

    def test_invalid_json_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "keybindings.json"
        config_file.write_text("{not json")

        manager = KeybindingsManager.load(config_file)

        assert manager.get_keys("submit") == ["<CR>"]

    def test_invalid_entries_skipped(self, tmp_path: Path) -> None:
        """Non-list values and non-string keys are ignored."""
        config_file = tmp_path / "keybindings.json"
        config_file.write_text(json.dumps({"submit": "l", "close": ["q", 1], "extra": ["x"]}))

        manager = KeybindingsManager.load(config_file)

        assert manager.get_keys("submit") == ["<CR>"]
        assert manager.get_keys("close") == ["<Esc>"]
        assert manager.get_keys("extra") == ["x"]
