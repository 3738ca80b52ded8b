"""Which files to show and the order to show them in."""

from __future__ import annotations

import fnmatch
import re
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key

from .fields import TimeType

_DIGITS_RE = re.compile(r"(\d+)")


class SortField(Enum):
    UNSORTED = "none"
    NAME = "name"
    NAME_CASE_INSENSITIVE = "iname"
    EXTENSION = "extension"
    SIZE = "size"
    INODE = "inode"
    MODIFIED = "modified"
    ACCESSED = "accessed"
    CREATED = "created"


def natural_key(text: str) -> tuple[tuple[int, int | str], ...]:
    """Sort key that orders embedded numbers numerically (``file2`` < ``file10``)."""
    key: list[tuple[int, int | str]] = []
    for chunk in _DIGITS_RE.split(text):
        if not chunk:
            continue
        if chunk.isdigit():
            key.append((0, int(chunk)))
        else:
            key.append((1, chunk))
    return tuple(key)


def _cmp(left, right) -> int:
    return (left > right) - (left < right)


@dataclass(frozen=True)
class FileFilter:
    """Hidden-file and glob filtering plus the listing comparator."""

    show_invisibles: bool = False
    sort_field: SortField = SortField.NAME
    reverse: bool = False
    list_dirs_first: bool = False
    ignore_patterns: tuple[str, ...] = ()

    def is_visible(self, file) -> bool:
        if not self.show_invisibles and file.name.startswith("."):
            return False
        return not any(fnmatch.fnmatchcase(file.name, pattern) for pattern in self.ignore_patterns)

    def filter_files(self, files: list) -> list:
        return [file for file in files if self.is_visible(file)]

    def _field_key(self, file):
        field = self.sort_field
        if field is SortField.NAME:
            return natural_key(file.name)
        if field is SortField.NAME_CASE_INSENSITIVE:
            return natural_key(file.name.lower())
        if field is SortField.EXTENSION:
            ext = file.extension
            return (ext is not None, (ext or "").lower(), natural_key(file.name))
        if field is SortField.SIZE:
            return file.size() or 0
        if field is SortField.INODE:
            return file.inode()
        if field is SortField.MODIFIED:
            return file.timestamp(TimeType.MODIFIED) or 0.0
        if field is SortField.ACCESSED:
            return file.timestamp(TimeType.ACCESSED) or 0.0
        if field is SortField.CREATED:
            return file.timestamp(TimeType.CREATED) or 0.0
        return 0

    def compare_files(self, left, right) -> int:
        """Three-way comparison implementing the configured listing order."""
        if self.list_dirs_first:
            by_kind = _cmp(not left.is_directory(), not right.is_directory())
            if by_kind:
                return by_kind
        if self.sort_field is SortField.UNSORTED:
            return 0
        result = _cmp(self._field_key(left), self._field_key(right))
        return -result if self.reverse else result

    def sort_key(self):
        return cmp_to_key(self.compare_files)

    def sort_files(self, files: list) -> list:
        return sorted(files, key=self.sort_key())


__all__ = ["SortField", "natural_key", "FileFilter"]
