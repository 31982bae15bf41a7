"""Tests for the command-line interface."""

import io
import sys
from pathlib import Path

import pytest

from contextmenu import MenuConfig
from contextmenu.cli import build_parser, cmd_pick, load_config, main, overrides_from_args, read_entries
from contextmenu.screen import terminal


class FakeTTY(io.StringIO):
    """A stdin that claims to be a terminal."""

    def isatty(self) -> bool:
        return True


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point the default config path at a file that does not exist."""
    monkeypatch.setenv("CONTEXTMENU_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setenv("HOME", str(tmp_path))


class FakeMenu:
    """Stands in for the terminal menu; records calls and returns ``result``."""

    def __init__(self) -> None:
        self.result: int | None = 2
        self.calls: list[tuple[list[str], MenuConfig, dict]] = []

    def __call__(self, entries, config=None, **kwargs):
        self.calls.append((list(entries), config, kwargs))
        return self.result


@pytest.fixture
def fake_menu(monkeypatch: pytest.MonkeyPatch) -> FakeMenu:
    """Replace the terminal menu and give the process a terminal stdin."""
    menu = FakeMenu()
    monkeypatch.setattr(terminal, "run_menu", menu)
    monkeypatch.setattr(sys, "stdin", FakeTTY())
    return menu


class TestArguments:
    """Tests for argument handling."""

    def test_overrides(self) -> None:
        args = build_parser().parse_args([
            "pick",
            "--padding-left", "2",
            "--max-height", "5",
            "--anchor", "botleft",
            "--row", "5",
            "--col", "cursor-1",
            "--glyphs", "-+",
            "--title", "Go",
            "a",
        ])

        assert overrides_from_args(args) == {
            "padding_left": 2,
            "max_height": 5,
            "anchor": "botleft",
            "title": "Go",
            "row": 5,
            "col": "cursor-1",
            "border_glyphs": ["-", "+"],
        }

    def test_no_border(self) -> None:
        args = build_parser().parse_args(["pick", "--no-border", "a"])

        assert overrides_from_args(args) == {"border_width": 0}

    def test_no_overrides(self) -> None:
        args = build_parser().parse_args(["pick", "a"])

        assert overrides_from_args(args) == {}

    def test_negative_row(self) -> None:
        args = build_parser().parse_args(["pick", "--row=-3", "a"])

        assert overrides_from_args(args)["row"] == -3


class TestReadEntries:
    """Tests for read_entries."""

    def test_from_arguments(self) -> None:
        args = build_parser().parse_args(["pick", "one", "two"])

        assert read_entries(args, io.StringIO("ignored\n")) == ["one", "two"]

    def test_from_stdin(self) -> None:
        args = build_parser().parse_args(["pick"])

        entries = read_entries(args, io.StringIO("one\n\n  \ntwo\r\n"))

        assert entries == ["one", "two"]

    def test_terminal_stdin_is_not_read(self) -> None:
        args = build_parser().parse_args(["pick"])

        assert read_entries(args, FakeTTY("one\n")) == []


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self) -> None:
        assert load_config() == MenuConfig()

    def test_explicit_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "menu.yaml"
        config_file.write_text("padding_left: 4\n")

        assert load_config(config_file).padding_left == 4

    def test_default_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "default.yaml"
        config_file.write_text("title: Hi\n")
        monkeypatch.setenv("CONTEXTMENU_CONFIG", str(config_file))

        assert load_config().title == "Hi"

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            load_config(tmp_path / "nope.yaml")


class TestPick:
    """Tests for the pick command."""

    def test_prints_chosen_entry(self, fake_menu: FakeMenu, capsys: pytest.CaptureFixture[str]) -> None:
        args = build_parser().parse_args(["pick", "--padding-left", "1", "red", "green"])

        assert cmd_pick(args) == 0

        assert capsys.readouterr().out == "green\n"
        entries, config, kwargs = fake_menu.calls[0]
        assert entries == ["red", "green"]
        assert config.padding_left == 1
        assert kwargs["keybindings"].get_keys("submit") == ["<CR>"]

    def test_prints_index(self, fake_menu: FakeMenu, capsys: pytest.CaptureFixture[str]) -> None:
        args = build_parser().parse_args(["pick", "--index", "red", "green"])

        assert cmd_pick(args) == 0

        assert capsys.readouterr().out == "2\n"

    def test_dismissed(self, fake_menu: FakeMenu, capsys: pytest.CaptureFixture[str]) -> None:
        fake_menu.result = None
        args = build_parser().parse_args(["pick", "red"])

        assert cmd_pick(args) == 1

        assert capsys.readouterr().out == ""

    def test_no_entries(self, fake_menu: FakeMenu) -> None:
        args = build_parser().parse_args(["pick"])

        assert cmd_pick(args) == 2
        assert fake_menu.calls == []

    def test_invalid_configuration(self, fake_menu: FakeMenu, capsys: pytest.CaptureFixture[str]) -> None:
        args = build_parser().parse_args(["pick", "--padding-left", "-1", "red"])

        assert cmd_pick(args) == 2

        assert "padding_left" in capsys.readouterr().err
        assert fake_menu.calls == []

    def test_invalid_config_file(self, fake_menu: FakeMenu, tmp_path: Path) -> None:
        config_file = tmp_path / "menu.yaml"
        config_file.write_text("anchor: middle\n")
        args = build_parser().parse_args(["pick", "-c", str(config_file), "red"])

        assert cmd_pick(args) == 2

    def test_main_exit_code(self, fake_menu: FakeMenu) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["pick", "red", "green"])

        assert exc_info.value.code == 0


class TestConfigCommand:
    """Tests for the config command."""

    def test_show_defaults(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["config", "show"])

        out = capsys.readouterr().out
        assert "Using defaults" in out
        assert "padding_left: 0" in out
        assert "row: cursor+1" in out

    def test_show_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        config_file = tmp_path / "menu.yaml"
        config_file.write_text("padding_left: 3\n")

        main(["config", "show", "-c", str(config_file)])

        out = capsys.readouterr().out
        assert "padding_left: 3" in out
        assert "Loaded from" in out

    def test_show_invalid_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "menu.yaml"
        config_file.write_text("colour: red\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["config", "show", "-c", str(config_file)])

        assert exc_info.value.code == 2

    def test_path(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["config", "path"])

        out = capsys.readouterr().out
        assert "missing.yaml" in out.replace("\n", "")
        assert "not found" in out
