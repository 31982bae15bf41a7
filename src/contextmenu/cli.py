"""
Command-line interface: pick an entry from a floating menu.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, TextIO

import yaml
from rich.console import Console

from contextmenu.config import MenuConfig, default_config_path
from contextmenu.errors import ConfigurationError
from contextmenu.keybindings import KeybindingsManager
from contextmenu.logging import setup_logging

console = Console()
err_console = Console(stderr=True)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        setup_logging("DEBUG", file=args.log_file)

    if args.command == "pick":
        sys.exit(cmd_pick(args))
    elif args.command == "config":
        cmd_config(args)
    else:
        parser.print_help()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Floating selection menu",
        prog="contextmenu",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to this file instead of stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    pick = subparsers.add_parser("pick", help="Choose one entry and print it")
    pick.add_argument("entries", nargs="*", help="Menu entries (default: lines of stdin)")
    pick.add_argument("-c", "--config", type=Path, help="YAML menu configuration")
    pick.add_argument("-k", "--keybindings", type=Path, help="JSON keybindings file")
    pick.add_argument("-p", "--prompt", default="", help="Text shown before the cursor")
    pick.add_argument("-t", "--title", help="Title shown in the border")
    pick.add_argument("--padding-left", type=int)
    pick.add_argument("--padding-right", type=int)
    pick.add_argument("--max-width", type=int)
    pick.add_argument("--min-width", type=int)
    pick.add_argument("--max-height", type=int)
    pick.add_argument("--min-height", type=int)
    pick.add_argument(
        "--anchor",
        choices=["topleft", "topright", "botleft", "botright"],
    )
    pick.add_argument("--row", help="Absolute row or cursor±N")
    pick.add_argument("--col", help="Absolute column or cursor±N")
    pick.add_argument("--no-border", action="store_true", help="Draw no border")
    pick.add_argument(
        "--glyphs",
        help="Border glyphs as one string of 1, 2, 4 or 8 characters",
    )
    pick.add_argument(
        "--index",
        action="store_true",
        help="Print the 1-based index instead of the entry",
    )
    pick.add_argument("--no-color", action="store_true", help="Disable ANSI styling")

    config_parser = subparsers.add_parser("config", help="Configuration")
    config_sub = config_parser.add_subparsers(dest="config_command")
    show = config_sub.add_parser("show", help="Show the effective menu configuration")
    show.add_argument("-c", "--config", type=Path, help="YAML menu configuration")
    config_sub.add_parser("path", help="Show the default configuration path")

    return parser


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def load_config(path: Path | None = None) -> MenuConfig:
    """
    Load the menu configuration.

    An explicit *path* must exist; the default path is used only when
    present.
    """
    if path is not None:
        return MenuConfig.from_yaml(path)
    default = default_config_path()
    if default.is_file():
        return MenuConfig.from_yaml(default)
    return MenuConfig()


def _position(value: str | None) -> int | str | None:
    if value is None:
        return None
    stripped = value.strip()
    if stripped.lstrip("-").isdigit():
        return int(stripped)
    return stripped


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Collect the config fields set on the command line."""
    overrides: dict[str, Any] = {}
    for name in (
        "padding_left",
        "padding_right",
        "max_width",
        "min_width",
        "max_height",
        "min_height",
        "anchor",
        "title",
    ):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value

    for name in ("row", "col"):
        value = _position(getattr(args, name))
        if value is not None:
            overrides[name] = value

    if args.no_border:
        overrides["border_width"] = 0
    if args.glyphs:
        overrides["border_glyphs"] = list(args.glyphs)
    return overrides


def read_entries(args: argparse.Namespace, stdin: TextIO) -> list[str]:
    """Entries from the command line, or the non-empty lines of *stdin*."""
    if args.entries:
        return list(args.entries)
    if stdin.isatty():
        return []
    return [line.rstrip("\r\n") for line in stdin if line.strip()]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_pick(args: argparse.Namespace) -> int:
    """Show the menu; print the choice.  Returns the exit code."""
    from contextmenu.screen.terminal import run_menu

    entries = read_entries(args, sys.stdin)
    if not entries:
        err_console.print("[red]No entries given[/red]")
        return 2

    try:
        config = load_config(args.config).merged(**overrides_from_args(args))
        config.validate()
    except (ConfigurationError, OSError, yaml.YAMLError) as e:
        err_console.print(f"[red]Invalid configuration:[/red] {e}")
        return 2

    keybindings = KeybindingsManager.load(args.keybindings)

    # Entries may have come from stdin; keys always come from the terminal
    if sys.stdin.isatty():
        chosen = run_menu(
            entries,
            config,
            prompt=args.prompt,
            keybindings=keybindings,
            color=not args.no_color,
        )
    else:
        with open("/dev/tty", "rb", buffering=0) as tty_in:
            chosen = run_menu(
                entries,
                config,
                prompt=args.prompt,
                keybindings=keybindings,
                input_fd=tty_in.fileno(),
                color=not args.no_color,
            )

    if chosen is None:
        return 1
    if args.index:
        console.print(str(chosen), highlight=False)
    else:
        console.print(entries[chosen - 1], markup=False, highlight=False)
    return 0


def cmd_config(args: argparse.Namespace) -> None:
    """Configuration commands."""
    if args.config_command == "show":
        _config_show(getattr(args, "config", None))
    elif args.config_command == "path":
        _config_path()
    else:
        console.print("[yellow]Usage: contextmenu config <show|path>[/yellow]")


def _config_show(path: Path | None) -> None:
    try:
        config = load_config(path)
    except (ConfigurationError, OSError, yaml.YAMLError) as e:
        err_console.print(f"[red]Failed to load configuration:[/red] {e}")
        sys.exit(2)

    source = path or default_config_path()
    if path is None and not source.is_file():
        console.print("[dim]No config file found. Using defaults.[/dim]\n")
    else:
        console.print(f"[dim]Loaded from: {source}[/dim]\n")

    console.print(
        yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True),
        markup=False,
        highlight=False,
    )


def _config_path() -> None:
    path = default_config_path()
    state = "exists" if path.is_file() else "not found"
    console.print(f"{path} [dim]({state})[/dim]")


if __name__ == "__main__":
    main()
