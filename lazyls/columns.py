"""Column kinds, alignment, and the per-directory column set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .fields import TimeType


class Alignment(Enum):
    LEFT = "left"
    RIGHT = "right"


class SizeFormat(Enum):
    """How file sizes are rendered: powers of 1000, powers of 1024, or raw bytes."""

    DECIMAL_BYTES = "decimal"
    BINARY_BYTES = "binary"
    JUST_BYTES = "bytes"


class ColumnKind(Enum):
    PERMISSIONS = "permissions"
    FILE_SIZE = "size"
    TIMESTAMP = "timestamp"
    HARD_LINKS = "links"
    INODE = "inode"
    BLOCKS = "blocks"
    USER = "user"
    GROUP = "group"
    GIT_STATUS = "git"


_RIGHT_ALIGNED = frozenset(
    {
        ColumnKind.FILE_SIZE,
        ColumnKind.HARD_LINKS,
        ColumnKind.INODE,
        ColumnKind.BLOCKS,
        ColumnKind.GIT_STATUS,
    }
)

_HEADERS = {
    ColumnKind.PERMISSIONS: "Permissions",
    ColumnKind.FILE_SIZE: "Size",
    ColumnKind.HARD_LINKS: "Links",
    ColumnKind.INODE: "inode",
    ColumnKind.BLOCKS: "Blocks",
    ColumnKind.USER: "User",
    ColumnKind.GROUP: "Group",
    ColumnKind.GIT_STATUS: "Git",
}


@dataclass(frozen=True)
class Column:
    """One table column; size and timestamp columns carry their variant."""

    kind: ColumnKind
    size_format: SizeFormat | None = None
    time_type: TimeType | None = None

    @classmethod
    def file_size(cls, size_format: SizeFormat) -> Column:
        return cls(ColumnKind.FILE_SIZE, size_format=size_format)

    @classmethod
    def timestamp(cls, time_type: TimeType) -> Column:
        return cls(ColumnKind.TIMESTAMP, time_type=time_type)

    @property
    def alignment(self) -> Alignment:
        return Alignment.RIGHT if self.kind in _RIGHT_ALIGNED else Alignment.LEFT

    def header(self) -> str:
        if self.kind is ColumnKind.TIMESTAMP:
            return (self.time_type or TimeType.MODIFIED).header
        return _HEADERS[self.kind]


@dataclass(frozen=True)
class Columns:
    """The user's column choices, expanded into a concrete list per directory."""

    size_format: SizeFormat = SizeFormat.DECIMAL_BYTES
    time_types: tuple[TimeType, ...] = (TimeType.MODIFIED,)
    inode: bool = False
    links: bool = False
    blocks: bool = False
    group: bool = False
    git: bool = False

    def for_dir(self, directory=None) -> list[Column]:
        """Return the ordered columns for a listing of ``directory``.

        The git column only appears when requested and ``directory`` lives
        inside a git work tree.
        """
        columns: list[Column] = []
        if self.inode:
            columns.append(Column(ColumnKind.INODE))
        columns.append(Column(ColumnKind.PERMISSIONS))
        if self.links:
            columns.append(Column(ColumnKind.HARD_LINKS))
        columns.append(Column.file_size(self.size_format))
        if self.blocks:
            columns.append(Column(ColumnKind.BLOCKS))
        columns.append(Column(ColumnKind.USER))
        if self.group:
            columns.append(Column(ColumnKind.GROUP))
        for time_type in self.time_types:
            columns.append(Column.timestamp(time_type))
        if self.git and directory is not None and directory.has_git_repo():
            columns.append(Column(ColumnKind.GIT_STATUS))
        return columns


__all__ = [
    "Alignment",
    "SizeFormat",
    "ColumnKind",
    "Column",
    "Columns",
]
