"""
Configuration for a context menu.

A :class:`MenuConfig` can be built programmatically, from a dictionary,
or loaded from YAML.  Callbacks can only be set programmatically.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Literal

import yaml

from contextmenu.border import BorderGlyphs, resolve_glyphs
from contextmenu.errors import ConfigurationError

Anchor = Literal["topleft", "topright", "botleft", "botright"]

ANCHORS: tuple[str, ...] = ("topleft", "topright", "botleft", "botright")

DEFAULT_POSITION = "cursor+1"
DEFAULT_HIGHLIGHT_GROUP = "TermCursor"

_CURSOR_RE = re.compile(r"^cursor(?:\s*([+-])\s*(\d+))?$")


def default_config_path() -> Path:
    """Config file location: ``$CONTEXTMENU_CONFIG`` or the XDG default."""
    env = os.environ.get("CONTEXTMENU_CONFIG")
    if env:
        return Path(env).expanduser()
    return Path.home() / ".config" / "contextmenu" / "config.yaml"


# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Coordinate:
    """
    One axis of the menu position.

    When *relative* is true the value is an offset from the caller's
    cursor on that axis, otherwise it is an absolute coordinate.
    """

    offset: int
    relative: bool = False

    def resolve(self, cursor: int) -> int:
        return cursor + self.offset if self.relative else self.offset

    @classmethod
    def parse(cls, value: int | str | None, option: str = "position") -> Coordinate:
        """
        Parse ``5``, ``"cursor"``, ``"cursor+2"`` or ``"cursor-1"``.

        ``None`` yields the default, one cell past the cursor.
        """
        if value is None:
            value = DEFAULT_POSITION
        if isinstance(value, bool):
            raise ConfigurationError("expected an integer or 'cursor±N'", option=option)
        if isinstance(value, int):
            return cls(value, relative=False)
        if isinstance(value, str):
            match = _CURSOR_RE.match(value.strip())
            if match:
                sign, amount = match.groups()
                offset = int(amount) if amount else 0
                return cls(-offset if sign == "-" else offset, relative=True)
            raise ConfigurationError(
                f"{value!r} is not of the form 'cursor', 'cursor+N' or 'cursor-N'",
                option=option,
            )
        raise ConfigurationError("expected an integer or 'cursor±N'", option=option)

    def __str__(self) -> str:
        if not self.relative:
            return str(self.offset)
        if self.offset == 0:
            return "cursor"
        return f"cursor{self.offset:+d}"


# ---------------------------------------------------------------------------
# MenuConfig
# ---------------------------------------------------------------------------

@dataclass
class MenuConfig:
    """
    Options for one context menu.

    Example YAML:
        padding_left: 1
        max_height: 10
        anchor: topleft
        row: cursor+1
        col: cursor
        border_glyphs: ["-", "+"]
        title: Actions
    """

    # Size bounds
    max_width: int | None = None
    min_width: int | None = None
    max_height: int | None = None
    min_height: int | None = None

    # Padding, only left/right are supported
    padding_left: int = 0
    padding_right: int = 0
    padding_top: int = 0
    padding_bottom: int = 0

    # Placement
    anchor: Anchor = "topleft"
    row: int | str | None = None
    col: int | str | None = None

    # Decoration
    border_width: int = 1
    border_glyphs: Sequence[str] | None = None
    title: str | None = None
    highlight_group: str = DEFAULT_HIGHLIGHT_GROUP
    cursor_group: str = DEFAULT_HIGHLIGHT_GROUP
    style_minimal: bool = True

    # Completion callbacks
    on_submit: Callable[[int], None] | None = field(default=None, repr=False)
    on_close: Callable[[], None] | None = field(default=None, repr=False)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def row_coordinate(self) -> Coordinate:
        return Coordinate.parse(self.row, option="row")

    @property
    def col_coordinate(self) -> Coordinate:
        return Coordinate.parse(self.col, option="col")

    @property
    def glyphs(self) -> BorderGlyphs:
        return resolve_glyphs(self.border_glyphs)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self) -> None:
        """
        Check every option.

        Raises
        ------
        ConfigurationError
            On the first invalid option found.
        """
        for name in ("max_width", "min_width", "max_height", "min_height"):
            value = getattr(self, name)
            if value is not None:
                _check_int(name, value, minimum=1)

        for name in ("padding_left", "padding_right"):
            _check_int(name, getattr(self, name), minimum=0)

        for name in ("padding_top", "padding_bottom"):
            value = getattr(self, name)
            _check_int(name, value, minimum=0)
            if value:
                raise ConfigurationError(
                    "top/bottom padding is not supported", option=name,
                )

        if self.anchor not in ANCHORS:
            raise ConfigurationError(
                f"expected one of {', '.join(ANCHORS)}, got {self.anchor!r}",
                option="anchor",
            )

        Coordinate.parse(self.row, option="row")
        Coordinate.parse(self.col, option="col")

        _check_int("border_width", self.border_width, minimum=0)
        if self.border_width not in (0, 1):
            raise ConfigurationError(
                f"only 0 or 1 is supported, got {self.border_width}",
                option="border_width",
            )
        resolve_glyphs(self.border_glyphs)

        if self.title is not None:
            if not isinstance(self.title, str):
                raise ConfigurationError("expected a string", option="title")
            if self.border_width == 0:
                raise ConfigurationError("a title needs a border", option="title")

        for name in ("highlight_group", "cursor_group"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigurationError("expected a non-empty string", option=name)

        if not isinstance(self.style_minimal, bool):
            raise ConfigurationError("expected a boolean", option="style_minimal")

        for name in ("on_submit", "on_close"):
            value = getattr(self, name)
            if value is not None and not callable(value):
                raise ConfigurationError("expected a callable", option=name)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def merged(self, **overrides: Any) -> MenuConfig:
        """Return a copy with *overrides* applied."""
        _check_known(overrides)
        return replace(self, **overrides)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MenuConfig:
        """Create config from a dictionary."""
        if not isinstance(data, dict):
            raise ConfigurationError("configuration must be a mapping")
        _check_known(data)
        if "on_submit" in data or "on_close" in data:
            raise ConfigurationError("callbacks cannot be loaded from data")

        config = cls(**data)
        if config.border_glyphs is not None and not isinstance(config.border_glyphs, str):
            config.border_glyphs = list(config.border_glyphs)
        return config

    @classmethod
    def from_yaml(cls, path: Path) -> MenuConfig:
        """Load config from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_yaml_string(cls, content: str) -> MenuConfig:
        """Load config from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data or {})

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary (callbacks are left out)."""
        return {
            "max_width": self.max_width,
            "min_width": self.min_width,
            "max_height": self.max_height,
            "min_height": self.min_height,
            "padding_left": self.padding_left,
            "padding_right": self.padding_right,
            "anchor": self.anchor,
            "row": self.row if self.row is not None else DEFAULT_POSITION,
            "col": self.col if self.col is not None else DEFAULT_POSITION,
            "border_width": self.border_width,
            "border_glyphs": list(self.glyphs.as_tuple()),
            "title": self.title,
            "highlight_group": self.highlight_group,
            "cursor_group": self.cursor_group,
            "style_minimal": self.style_minimal,
        }


def _check_int(name: str, value: Any, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"expected an integer, got {value!r}", option=name)
    if value < minimum:
        raise ConfigurationError(f"must be >= {minimum}, got {value}", option=name)


def _check_known(data: dict[str, Any]) -> None:
    known = {f.name for f in fields(MenuConfig)}
    for key in data:
        if key not in known:
            raise ConfigurationError("unknown option", option=str(key))
