"""Visibility filtering and the listing comparator."""

from __future__ import annotations

import unittest
from dataclasses import dataclass

from lazyls.fields import TimeType
from lazyls.filtering import FileFilter, SortField, natural_key


@dataclass
class Entry:
    name: str
    is_dir: bool = False
    bytes: int | None = 0
    mtime: float = 0.0
    ino: int = 0

    @property
    def extension(self) -> str | None:
        stem, dot, ext = self.name.rpartition(".")
        return ext if dot and stem else None

    def is_directory(self) -> bool:
        return self.is_dir

    def size(self) -> int | None:
        return self.bytes

    def inode(self) -> int:
        return self.ino

    def timestamp(self, time_type: TimeType) -> float:
        return self.mtime


def _names(entries) -> list[str]:
    return [entry.name for entry in entries]


class FilterTests(unittest.TestCase):
    def test_hidden_files_filtered_unless_requested(self) -> None:
        entries = [Entry(".git"), Entry("src")]
        self.assertEqual(_names(FileFilter().filter_files(entries)), ["src"])
        self.assertEqual(_names(FileFilter(show_invisibles=True).filter_files(entries)), [".git", "src"])

    def test_ignore_patterns(self) -> None:
        entries = [Entry("a.pyc"), Entry("a.py"), Entry("build")]
        file_filter = FileFilter(ignore_patterns=("*.pyc", "build"))
        self.assertEqual(_names(file_filter.filter_files(entries)), ["a.py"])


class SortTests(unittest.TestCase):
    def test_name_sort_is_natural(self) -> None:
        entries = [Entry("file10"), Entry("file2"), Entry("file1")]
        self.assertEqual(_names(FileFilter().sort_files(entries)), ["file1", "file2", "file10"])

    def test_name_sort_is_case_sensitive_unless_asked(self) -> None:
        entries = [Entry("b"), Entry("B"), Entry("a")]
        self.assertEqual(_names(FileFilter().sort_files(entries)), ["B", "a", "b"])
        insensitive = FileFilter(sort_field=SortField.NAME_CASE_INSENSITIVE)
        self.assertEqual(_names(insensitive.sort_files(entries)), ["a", "b", "B"])

    def test_extension_sort_puts_extensionless_first(self) -> None:
        entries = [Entry("b.txt"), Entry("a.rs"), Entry("Makefile"), Entry("a.txt")]
        file_filter = FileFilter(sort_field=SortField.EXTENSION)
        self.assertEqual(_names(file_filter.sort_files(entries)), ["Makefile", "a.rs", "a.txt", "b.txt"])

    def test_size_sort_treats_absent_as_zero(self) -> None:
        entries = [Entry("big", bytes=10), Entry("dir", bytes=None), Entry("small", bytes=1)]
        file_filter = FileFilter(sort_field=SortField.SIZE)
        self.assertEqual(_names(file_filter.sort_files(entries)), ["dir", "small", "big"])

    def test_reverse_and_directories_first(self) -> None:
        entries = [Entry("a"), Entry("b", is_dir=True), Entry("c")]
        file_filter = FileFilter(reverse=True, list_dirs_first=True)
        self.assertEqual(_names(file_filter.sort_files(entries)), ["b", "c", "a"])

    def test_unsorted_keeps_input_order(self) -> None:
        entries = [Entry("c"), Entry("a"), Entry("b")]
        file_filter = FileFilter(sort_field=SortField.UNSORTED)
        self.assertEqual(_names(file_filter.sort_files(entries)), ["c", "a", "b"])

    def test_time_sort(self) -> None:
        entries = [Entry("new", mtime=20.0), Entry("old", mtime=10.0)]
        file_filter = FileFilter(sort_field=SortField.MODIFIED)
        self.assertEqual(_names(file_filter.sort_files(entries)), ["old", "new"])

    def test_natural_key_splits_digits(self) -> None:
        self.assertLess(natural_key("v9"), natural_key("v10"))


if __name__ == "__main__":
    unittest.main()
