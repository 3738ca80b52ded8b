"""Styled text fragments with a separately tracked display width."""

from __future__ import annotations

from dataclasses import dataclass

from .ansi import display_width
from .theme import paint


@dataclass(frozen=True)
class Cell:
    """ANSI-styled text plus the number of terminal columns it occupies.

    ``width`` never counts escape sequences, so two cells can be compared for
    alignment regardless of how they are colored.
    """

    text: str = ""
    width: int = 0

    @classmethod
    def empty(cls) -> Cell:
        return cls("", 0)

    @classmethod
    def paint(cls, style: str, text: str) -> Cell:
        """Build a cell from unstyled ``text`` rendered in ``style``."""
        return cls(paint(style, text), display_width(text))

    @classmethod
    def spaces(cls, count: int) -> Cell:
        count = max(0, count)
        return cls(" " * count, count)

    def __add__(self, other: Cell) -> Cell:
        if not isinstance(other, Cell):
            return NotImplemented
        return Cell(self.text + other.text, self.width + other.width)

    def pad_left(self, width: int) -> Cell:
        """Right-align this cell inside ``width`` columns."""
        return Cell.spaces(width - self.width) + self

    def pad_right(self, width: int) -> Cell:
        """Left-align this cell inside ``width`` columns."""
        return self + Cell.spaces(width - self.width)


def concat(cells) -> Cell:
    """Join ``cells`` left to right, summing their widths."""
    text: list[str] = []
    width = 0
    for cell in cells:
        text.append(cell.text)
        width += cell.width
    return Cell("".join(text), width)


__all__ = ["Cell", "concat"]
