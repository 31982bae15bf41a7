"""
Key parsing for terminal input.

Translates raw bytes read from a terminal into structured ``Key`` objects,
and ``Key`` objects into editor key notation (``"<CR>"``, ``"<C-c>"``,
``"j"``) understood by :meth:`ScreenHost.feed_key`.
"""

from __future__ import annotations

from dataclasses import dataclass

from contextmenu.keybindings import normalise_key

# ---------------------------------------------------------------------------
# Key data model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Key:
    """
    Parsed representation of a single key press.

    Attributes
    ----------
    name:
        Symbolic name for special keys (e.g. ``'enter'``, ``'up'``).
        For plain printable characters this equals *char*.
    char:
        The literal character, if printable.  Empty string otherwise.
    ctrl, alt, shift:
        Modifier state (shift is only detectable for certain keys).
    """

    name: str
    char: str = ""
    ctrl: bool = False
    alt: bool = False
    shift: bool = False


KEY_ENTER = Key(name="enter", char="\r")
KEY_TAB = Key(name="tab", char="\t")
KEY_ESCAPE = Key(name="escape")
KEY_BACKSPACE = Key(name="backspace")
KEY_SPACE = Key(name="space", char=" ")
KEY_UP = Key(name="up")
KEY_DOWN = Key(name="down")
KEY_LEFT = Key(name="left")
KEY_RIGHT = Key(name="right")
KEY_HOME = Key(name="home")
KEY_END = Key(name="end")
KEY_UNKNOWN = Key(name="unknown")

# CSI final bytes (ESC [ <letter>) and SS3 sequences (ESC O <letter>)
_CSI_SIMPLE: dict[str, Key] = {
    "A": KEY_UP,
    "B": KEY_DOWN,
    "C": KEY_RIGHT,
    "D": KEY_LEFT,
    "H": KEY_HOME,
    "F": KEY_END,
    "Z": Key(name="tab", char="\t", shift=True),
}

# CSI <number> ~
_CSI_TILDE: dict[int, Key] = {
    1: KEY_HOME,
    2: Key(name="insert"),
    3: Key(name="delete"),
    4: KEY_END,
    5: Key(name="page_up"),
    6: Key(name="page_down"),
}

_NOTATION: dict[str, str] = {
    "enter": "CR",
    "escape": "Esc",
    "tab": "Tab",
    "backspace": "BS",
    "delete": "Del",
    "insert": "Insert",
    "space": "Space",
    "up": "Up",
    "down": "Down",
    "left": "Left",
    "right": "Right",
    "home": "Home",
    "end": "End",
    "page_up": "PageUp",
    "page_down": "PageDown",
}


def _modifier_flags(code: int) -> tuple[bool, bool, bool]:
    """Decode an xterm modifier parameter into ``(shift, alt, ctrl)``."""
    code -= 1
    return bool(code & 1), bool(code & 2), bool(code & 4)


def _with_modifiers(base: Key, mod: str) -> Key:
    try:
        shift, alt, ctrl = _modifier_flags(int(mod))
    except ValueError:
        return KEY_UNKNOWN
    return Key(name=base.name, char=base.char, ctrl=ctrl, alt=alt, shift=shift)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_key(data: bytes) -> Key:
    """
    Parse raw terminal input bytes into a ``Key``.

    Handles printable UTF-8 characters, Ctrl+letter, Alt+character, and
    CSI/SS3 sequences for arrows, home/end, page keys and xterm modifier
    suffixes (``ESC [ 1 ; 5 A`` is Ctrl+Up).
    """
    if not data:
        return KEY_UNKNOWN

    if data[:1] == b"\x1b":
        if len(data) == 1:
            return KEY_ESCAPE
        if data[1:2] in (b"[", b"O"):
            return _parse_csi(data[2:].decode("ascii", errors="replace"))
        if len(data) == 2:
            ch = chr(data[1])
            if ch.isprintable():
                return Key(name=f"alt+{ch}", char=ch, alt=True)
        return KEY_UNKNOWN

    byte = data[0]
    if byte in (0x0D, 0x0A):
        return KEY_ENTER
    if byte == 0x09:
        return KEY_TAB
    if byte in (0x7F, 0x08):
        return KEY_BACKSPACE
    if 1 <= byte <= 26:
        letter = chr(byte + 96)
        return Key(name=f"ctrl+{letter}", char=letter, ctrl=True)

    try:
        ch = data.decode("utf-8")
    except UnicodeDecodeError:
        return KEY_UNKNOWN

    if ch == " ":
        return KEY_SPACE
    if len(ch) == 1 and ch.isprintable():
        return Key(name=ch, char=ch)
    return KEY_UNKNOWN


def _parse_csi(text: str) -> Key:
    if not text:
        return KEY_UNKNOWN

    if len(text) == 1:
        return _CSI_SIMPLE.get(text, KEY_UNKNOWN)

    if text.endswith("~"):
        parts = text[:-1].split(";")
        try:
            base = _CSI_TILDE.get(int(parts[0]))
        except ValueError:
            return KEY_UNKNOWN
        if base is None:
            return KEY_UNKNOWN
        return _with_modifiers(base, parts[1]) if len(parts) == 2 else base

    # <num>;<mod><letter>
    parts = text[:-1].split(";")
    base = _CSI_SIMPLE.get(text[-1])
    if base is not None and len(parts) == 2:
        return _with_modifiers(base, parts[1])
    return KEY_UNKNOWN


def key_notation(key: Key) -> str:
    """
    Convert *key* to editor key notation.

    >>> key_notation(Key(name="enter", char="\\r"))
    '<CR>'
    >>> key_notation(Key(name="ctrl+c", char="c", ctrl=True))
    '<C-c>'

    Returns an empty string for unknown keys.
    """
    if key.name == "unknown":
        return ""

    base = key.name
    if len(base) > 1 and "+" in base:
        base = base.rsplit("+", 1)[-1]

    mods = [flag for flag, on in (("C", key.ctrl), ("S", key.shift), ("A", key.alt)) if on]
    special = _NOTATION.get(base)
    if special is not None:
        return normalise_key("<" + "-".join(mods + [special]) + ">")
    if not mods:
        return base
    return normalise_key("<" + "-".join(mods + [base]) + ">")
