"""Per-file attribute values consumed by the column renderers.

Absent values are modeled as ``None`` (size, blocks, timestamp) so that a
known zero is never confused with "not applicable".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FileType(Enum):
    FILE = "."
    DIRECTORY = "d"
    PIPE = "|"
    LINK = "l"
    SPECIAL = "?"


@dataclass(frozen=True)
class Permissions:
    """File type plus the nine rwx bits for user, group and other."""

    file_type: FileType
    user_read: bool = False
    user_write: bool = False
    user_execute: bool = False
    group_read: bool = False
    group_write: bool = False
    group_execute: bool = False
    other_read: bool = False
    other_write: bool = False
    other_execute: bool = False

    @classmethod
    def from_mode(cls, file_type: FileType, mode: int) -> Permissions:
        return cls(
            file_type=file_type,
            user_read=bool(mode & 0o400),
            user_write=bool(mode & 0o200),
            user_execute=bool(mode & 0o100),
            group_read=bool(mode & 0o040),
            group_write=bool(mode & 0o020),
            group_execute=bool(mode & 0o010),
            other_read=bool(mode & 0o004),
            other_write=bool(mode & 0o002),
            other_execute=bool(mode & 0o001),
        )


@dataclass(frozen=True)
class Links:
    count: int
    multiple: bool = False


class TimeType(Enum):
    MODIFIED = "modified"
    ACCESSED = "accessed"
    CREATED = "created"

    @property
    def header(self) -> str:
        return f"Date {self.value.capitalize()}"


class GitStatus(Enum):
    NOT_MODIFIED = "-"
    NEW = "N"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    TYPE_CHANGE = "T"


@dataclass(frozen=True)
class Git:
    """Staged and unstaged status of one path."""

    staged: GitStatus = GitStatus.NOT_MODIFIED
    unstaged: GitStatus = GitStatus.NOT_MODIFIED


__all__ = [
    "FileType",
    "Permissions",
    "Links",
    "TimeType",
    "GitStatus",
    "Git",
]
