"""
Display-width measurement and cursor-cell spans.

Widths are counted in terminal cells, so East Asian wide characters
occupy two columns and combining marks occupy none.
"""

from __future__ import annotations

from dataclasses import dataclass

from wcwidth import wcswidth, wcwidth

# End column meaning "to the end of the line"
EOL = -1


def char_width(char: str) -> int:
    """Return the cell width of a single character (0 for non-printables)."""
    return max(wcwidth(char), 0)


def display_width(text: str) -> int:
    """
    Return the printable width of *text* in terminal cells.

    Non-printable characters (for which ``wcwidth`` reports -1) count as
    zero instead of poisoning the whole measurement.
    """
    if text.isascii() and text.isprintable():
        return len(text)

    width = wcswidth(text)
    if width < 0:
        width = sum(char_width(ch) for ch in text)
    return width


def display_column(line: str, byte_col: int) -> int:
    """Convert a byte offset into *line* to a display column."""
    prefix = line.encode("utf-8")[:max(byte_col, 0)]
    return display_width(prefix.decode("utf-8", errors="ignore"))


def truncate(text: str, width: int) -> str:
    """Cut *text* so that it occupies at most *width* cells."""
    if display_width(text) <= width:
        return text
    out: list[str] = []
    used = 0
    for ch in text:
        w = char_width(ch)
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(out)


@dataclass(frozen=True)
class CellSpan:
    """
    Byte range of the character under a cursor.

    ``end`` is :data:`EOL` when the cursor sits past the last character;
    the span is then empty.
    """

    start: int
    end: int

    @property
    def empty(self) -> bool:
        return self.end == EOL


def cursor_cell_span(line: str, byte_col: int) -> CellSpan:
    """
    Return the byte span of the single display character at *byte_col*.

    The span starts on a character boundary even when *byte_col* points
    into the middle of a multi-byte sequence, and swallows any trailing
    zero-width combining characters so that a base character and its
    accents are marked as one unit.
    """
    data = line.encode("utf-8")
    if byte_col >= len(data):
        return CellSpan(len(data), EOL)

    offset = 0
    chars = list(line)
    for index, ch in enumerate(chars):
        size = len(ch.encode("utf-8"))
        if offset + size > byte_col:
            end = offset + size
            for follower in chars[index + 1:]:
                if wcwidth(follower) != 0:
                    break
                end += len(follower.encode("utf-8"))
            return CellSpan(offset, end)
        offset += size

    return CellSpan(len(data), EOL)
