#!/usr/bin/env python3
"""
Context Menu Demo

Opens menus on an in-memory editor screen, drives them with key presses
and prints the composited screen after each step.

Usage:
    # Scripted demo
    python examples/menu_demo.py

    # Pick from a real menu on this terminal
    python examples/menu_demo.py --interactive
"""

import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import contextmenu
from contextmenu.screen import ScreenHost, run_menu

CHOICES = ["choice 1", "choice 2", "choice 3"]


def show(host: ScreenHost, caption: str) -> None:
    print(f"\n-- {caption} " + "-" * (40 - len(caption)))
    for line in host.render():
        print(f"  {line}")


def demo_submit():
    """Move down one entry and accept it."""
    print("=" * 44)
    print("Submit Demo")
    print("=" * 44)

    host = ScreenHost(["def handler(event):", "    return event.name"], width=40, height=8, cursor=(2, 11))
    contextmenu.open(
        CHOICES,
        host=host,
        padding_left=1,
        padding_right=1,
        title="Actions",
        on_submit=lambda index: print(f"\nFinal choice: {CHOICES[index - 1]}"),
    )
    show(host, "menu open")

    host.feed_key("j")
    show(host, "after j")

    host.feed_key("<CR>")
    show(host, "after <CR>")


def demo_dismiss():
    """Open a second menu above the cursor and dismiss it."""
    print("\n" + "=" * 44)
    print("Dismiss Demo")
    print("=" * 44)

    host = ScreenHost(["", "", "", "", "cursor here"], width=40, height=6, cursor=(5, 7))
    contextmenu.open(
        ["yes", "no"],
        host=host,
        anchor="botleft",
        row="cursor-1",
        col="cursor",
        border_glyphs=["-", "|", "-", "|", "+", "+", "+", "+"],
        on_close=lambda: print("\nMenu dismissed"),
    )
    show(host, "menu open")

    host.feed_key("<Esc>")
    show(host, "after <Esc>")


def run_interactive():
    """Pick from a menu drawn on this terminal."""
    chosen = run_menu(CHOICES, prompt="pick one> ", config=contextmenu.MenuConfig(padding_left=1))
    if chosen is None:
        print("Nothing chosen")
    else:
        print(f"You picked {CHOICES[chosen - 1]}")


def main():
    """Main entry point."""
    if "--interactive" in sys.argv or "-i" in sys.argv:
        run_interactive()
    else:
        demo_submit()
        demo_dismiss()
        print("\n" + "=" * 44)
        print("Demo complete! Run with --interactive to use a real terminal.")
        print("=" * 44)


if __name__ == "__main__":
    main()
