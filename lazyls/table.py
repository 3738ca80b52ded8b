"""Buffered table of rows whose column widths are settled at print time.

Rows are appended freely (files, extended attributes, errors). Only
``print_table`` measures them: every column is padded to the widest cell in
that column across all rows, so nothing can be rendered before the last row
exists. Tree prefixes are drawn from a depth-indexed stack of branch parts.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import tzinfo
from enum import Enum
from pathlib import Path

from .ansi import lossy_text
from .cell import Cell, concat
from .columns import Alignment, Column
from .locale_fmt import Numeric, TimeLocale
from .render import CellRenderer
from .theme import DEFAULT_THEME, Theme
from .users import Users


@dataclass(frozen=True)
class HasCells:
    cells: tuple[Cell, ...]


@dataclass(frozen=True)
class NoCells:
    pass


NO_CELLS = NoCells()


@dataclass(frozen=True)
class Row:
    """One output line: optional per-column cells, the name, and tree position.

    Attribute and error rows carry ``NoCells``; they contribute nothing to
    column widths and print blank space where the cells would be.
    """

    cells: HasCells | NoCells
    name: Cell
    depth: int
    last: bool

    def column_width(self, index: int) -> int:
        if isinstance(self.cells, HasCells):
            return self.cells.cells[index].width
        return 0


class TreePart(Enum):
    EDGE = "├──"
    LINE = "│  "
    CORNER = "└──"
    BLANK = "   "


class TreeTrail:
    """Branch parts for every depth seen so far in one rendering pass.

    The part at a row's own depth is set before drawing (corner for the last
    sibling, edge otherwise) and demoted after drawing (blank or line), so
    deeper rows under a finished branch draw blank space instead of a line.
    """

    def __init__(self) -> None:
        self.stack: list[TreePart] = []

    def new_row(self, depth: int, last: bool) -> list[TreePart]:
        """Return the parts to draw for levels ``1..depth`` of this row."""
        if len(self.stack) < depth + 1:
            self.stack.extend([TreePart.EDGE] * (depth + 1 - len(self.stack)))
        self.stack[depth] = TreePart.CORNER if last else TreePart.EDGE
        parts = self.stack[1 : depth + 1]
        self.stack[depth] = TreePart.BLANK if last else TreePart.LINE
        return parts


def format_error(error: BaseException) -> str:
    """Describe an OS error the way listings show it: ``message (os error N)``."""
    if isinstance(error, OSError) and error.strerror and error.errno is not None:
        return f"{error.strerror} (os error {error.errno})"
    return str(error)


class Table:
    """All rows of one listing plus the renderer that produced their cells."""

    def __init__(
        self,
        columns: list[Column],
        theme: Theme = DEFAULT_THEME,
        users: Users | None = None,
        numeric: Numeric | None = None,
        time_locale: TimeLocale | None = None,
        tz: tzinfo | None = None,
        current_year: int | None = None,
    ) -> None:
        self.columns = list(columns)
        self.theme = theme
        self.rows: list[Row] = []
        self.renderer = CellRenderer(
            theme=theme,
            users=users,
            numeric=numeric,
            time_locale=time_locale,
            tz=tz,
            current_year=current_year,
        )
        self._lock = threading.Lock()

    @property
    def current_year(self) -> int:
        return self.renderer.current_year

    def _push(self, row: Row) -> None:
        with self._lock:
            self.rows.append(row)

    def add_header(self) -> None:
        """Insert the underlined column titles as the first row."""
        header = self.theme.header
        row = Row(
            cells=HasCells(tuple(Cell.paint(header, column.header()) for column in self.columns)),
            name=Cell.paint(header, "Name"),
            depth=0,
            last=False,
        )
        with self._lock:
            self.rows.insert(0, row)

    def add_file(self, cells, name: Cell, depth: int, last: bool) -> None:
        cells = tuple(cells)
        if len(cells) != len(self.columns):
            raise ValueError(f"row has {len(cells)} cells for {len(self.columns)} columns")
        self._push(Row(cells=HasCells(cells), name=name, depth=depth, last=last))

    def add_xattr(self, name: str, size: int, depth: int, last: bool) -> None:
        text = f"{name} (len {size})"
        self._push(Row(cells=NO_CELLS, name=Cell.paint(self.theme.attribute, text), depth=depth, last=last))

    def add_error(self, error: BaseException, depth: int, last: bool, path: Path | str | None = None) -> None:
        if path is not None:
            message = f"<{lossy_text(str(path))}: {format_error(error)}>"
        else:
            message = f"<{format_error(error)}>"
        self._push(Row(cells=NO_CELLS, name=Cell.paint(self.theme.broken_arrow, message), depth=depth, last=last))

    def cells_for_file(self, file, xattrs: bool) -> list[Cell]:
        """Render one cell per column for ``file``."""
        return [self.renderer.render(file, column, xattrs) for column in self.columns]

    def column_widths(self) -> list[int]:
        with self._lock:
            rows = list(self.rows)
        return self._widths(rows)

    def _widths(self, rows: list[Row]) -> list[int]:
        return [max((row.column_width(index) for row in rows), default=0) for index in range(len(self.columns))]

    def render_rows(self) -> list[Cell]:
        """Lay out every row against the final column widths.

        Each tree level adds three columns of glyph plus the one space before
        the name, so every returned cell's width equals its display width.
        """
        with self._lock:
            rows = list(self.rows)
        widths = self._widths(rows)
        total_width = len(self.columns) + sum(widths)
        trail = TreeTrail()
        punctuation = self.theme.punctuation
        rendered: list[Cell] = []

        for row in rows:
            parts: list[Cell] = []
            if isinstance(row.cells, HasCells):
                for column, cell, width in zip(self.columns, row.cells.cells, widths):
                    if column.alignment is Alignment.LEFT:
                        parts.append(cell.pad_right(width))
                    else:
                        parts.append(cell.pad_left(width))
                    parts.append(Cell.spaces(1))
            else:
                parts.append(Cell.spaces(total_width))

            for part in trail.new_row(row.depth, row.last):
                parts.append(Cell.paint(punctuation, part.value))
            if row.depth != 0:
                parts.append(Cell.spaces(1))
            parts.append(row.name)
            rendered.append(concat(parts))
        return rendered

    def print_table(self) -> list[str]:
        """Return the finished lines; printing does not mutate the table."""
        return [cell.text for cell in self.render_rows()]


__all__ = [
    "HasCells",
    "NoCells",
    "NO_CELLS",
    "Row",
    "TreePart",
    "TreeTrail",
    "format_error",
    "Table",
]
