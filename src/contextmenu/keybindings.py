"""
Keybinding management.

Stores the mapping from menu actions to keys, supports user overrides
loaded from a JSON configuration file.  Keys use editor notation:
plain characters (``"j"``) or bracketed names (``"<CR>"``, ``"<C-c>"``).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from contextmenu.logging import get_logger

logger = get_logger("keybindings")

# Keymaps are registered in normal mode
KEYMAP_MODE = "n"

# ---------------------------------------------------------------------------
# Default keybinding map
# ---------------------------------------------------------------------------

DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    "submit": ["<CR>"],
    "close": ["<Esc>"],
}

_KEY_ALIASES: dict[str, str] = {
    "cr": "CR",
    "enter": "CR",
    "return": "CR",
    "esc": "Esc",
    "escape": "Esc",
    "up": "Up",
    "down": "Down",
    "left": "Left",
    "right": "Right",
    "tab": "Tab",
    "bs": "BS",
    "backspace": "BS",
    "del": "Del",
    "delete": "Del",
    "space": "Space",
    "home": "Home",
    "end": "End",
    "pageup": "PageUp",
    "pagedown": "PageDown",
}

_MODIFIERS: dict[str, str] = {
    "c": "C",
    "ctrl": "C",
    "s": "S",
    "shift": "S",
    "a": "A",
    "alt": "A",
    "m": "A",
    "meta": "A",
}


# ---------------------------------------------------------------------------
# Normalised key descriptor parsing
# ---------------------------------------------------------------------------

def normalise_key(descriptor: str) -> str:
    """
    Normalise a key descriptor to a canonical form.

    ``"<cr>"`` -> ``"<CR>"``, ``"<s-c-X>"`` -> ``"<C-S-x>"``, ``" "`` -> ``"<Space>"``.
    Plain characters are case-sensitive and returned unchanged.
    """
    if descriptor == " ":
        return "<Space>"
    if len(descriptor) < 3 or not (descriptor.startswith("<") and descriptor.endswith(">")):
        return descriptor

    parts = descriptor[1:-1].split("-")
    # "<C-->" binds ctrl+minus
    if parts[-1] == "" and len(parts) > 1:
        parts = parts[:-2] + ["-"]

    base = parts[-1]
    modifiers = sorted({_MODIFIERS.get(p.lower(), p.upper()) for p in parts[:-1]})

    if len(base) == 1:
        # Ctrl combinations are case-insensitive in terminals
        if modifiers:
            base = base.lower()
    else:
        base = _KEY_ALIASES.get(base.lower(), base)

    if not modifiers and len(base) == 1:
        return base
    return "<" + "-".join(modifiers + [base]) + ">"


# ---------------------------------------------------------------------------
# Manager
# ---------------------------------------------------------------------------

class KeybindingsManager:
    """
    Manages the mapping from menu action names to keys.

    Parameters
    ----------
    user_overrides:
        Optional mapping of action names to key descriptor lists that
        replace the defaults for those actions.
    """

    def __init__(self, user_overrides: dict[str, list[str]] | None = None) -> None:
        self._bindings: dict[str, list[str]] = dict(DEFAULT_KEYBINDINGS)
        if user_overrides:
            self._bindings.update(user_overrides)

        self._normalised: dict[str, list[str]] = {
            action: [normalise_key(d) for d in descriptors]
            for action, descriptors in self._bindings.items()
        }

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> KeybindingsManager:
        """
        Load keybindings from a JSON file.

        When *config_path* is ``None`` the file
        ``~/.config/contextmenu/keybindings.json`` is used if present.

        The JSON file should be a mapping from action names to lists of
        key descriptors, e.g.::

            {
                "submit": ["<CR>", "l"],
                "close": ["<Esc>", "q"]
            }
        """
        if config_path is not None:
            path = Path(config_path)
        else:
            path = Path.home() / ".config" / "contextmenu" / "keybindings.json"

        overrides: dict[str, list[str]] | None = None

        if path.is_file():
            try:
                raw: Any = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Ignoring keybindings file %s: %s", path, exc)
                raw = None
            if isinstance(raw, dict):
                overrides = {}
                for key, val in raw.items():
                    if isinstance(val, list) and all(isinstance(v, str) for v in val):
                        overrides[key] = val

        return cls(user_overrides=overrides)

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------

    def matches(self, key: str, action: str) -> bool:
        """Test whether *key* matches any binding for *action*."""
        descriptors = self._normalised.get(action)
        if descriptors is None:
            return False
        return normalise_key(key) in descriptors

    def get_keys(self, action: str) -> list[str]:
        """Return the key descriptors bound to *action*, as given."""
        return list(self._bindings.get(action, []))

    def actions(self) -> list[str]:
        """Return all registered action names."""
        return list(self._bindings.keys())

    def find_action(self, key: str) -> str | None:
        """
        Find the first action that matches *key*, or ``None``.

        Actions are checked in insertion order.
        """
        for action in self._bindings:
            if self.matches(key, action):
                return action
        return None
