"""Filesystem-backed entries and directory listings."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from lazyls.fields import FileType, TimeType
from lazyls.files import Dir, File
from lazyls.render import file_name_cell
from lazyls.theme import DEFAULT_THEME, PLAIN_THEME


class FileTests(unittest.TestCase):
    def test_regular_file_attributes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "notes.txt"
            path.write_text("hello", encoding="utf-8")
            os.chmod(path, 0o640)
            file = File.from_path(path)

            self.assertEqual(file.name, "notes.txt")
            self.assertEqual(file.extension, "txt")
            self.assertEqual(file.size(), 5)
            self.assertEqual(file.permissions().file_type, FileType.FILE)
            self.assertTrue(file.permissions().group_read)
            self.assertFalse(file.permissions().other_read)
            self.assertEqual(file.links().count, 1)
            self.assertFalse(file.links().multiple)
            self.assertEqual(file.timestamp(TimeType.MODIFIED), path.stat().st_mtime)

    def test_directory_has_no_size_or_blocks(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            file = File.from_path(Path(tmp))
            self.assertTrue(file.is_directory())
            self.assertIsNone(file.size())
            self.assertIsNone(file.blocks())

    def test_hard_links_are_flagged(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            original = Path(tmp) / "a"
            original.write_text("x", encoding="utf-8")
            os.link(original, Path(tmp) / "b")
            links = File.from_path(original).links()
            self.assertEqual(links.count, 2)
            self.assertTrue(links.multiple)

    def test_dotfile_has_no_extension(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / ".bashrc"
            path.write_text("", encoding="utf-8")
            self.assertIsNone(File.from_path(path).extension)

    def test_missing_path_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OSError):
                File.from_path(Path(tmp) / "missing")


class SymlinkNameTests(unittest.TestCase):
    def test_symlink_name_shows_target(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "target.txt"
            target.write_text("x", encoding="utf-8")
            link = Path(tmp) / "link"
            link.symlink_to("target.txt")
            cell = file_name_cell(File.from_path(link), PLAIN_THEME)
            self.assertEqual(cell.text, "link -> target.txt")
            self.assertEqual(cell.width, len("link -> target.txt"))

    def test_broken_symlink_uses_broken_style(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            link = Path(tmp) / "dangling"
            link.symlink_to("nowhere")
            file = File.from_path(link)
            self.assertEqual(file.permissions().file_type, FileType.LINK)
            cell = file_name_cell(file, DEFAULT_THEME)
            self.assertIn(DEFAULT_THEME.broken_arrow + "nowhere", cell.text)
            self.assertEqual(cell.width, len("dangling -> nowhere"))

    def test_executable_file_style(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            script = Path(tmp) / "run.sh"
            script.write_text("#!/bin/sh\n", encoding="utf-8")
            os.chmod(script, 0o755)
            cell = file_name_cell(File.from_path(script), DEFAULT_THEME)
            self.assertTrue(cell.text.startswith(DEFAULT_THEME.file_executable))


class DirTests(unittest.TestCase):
    def test_files_yields_each_child_with_parent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_text("a", encoding="utf-8")
            (root / "sub").mkdir()
            directory = Dir.read_dir(root)
            children = list(directory.files())
            self.assertEqual(sorted(child.name for child in children), ["a.txt", "sub"])
            self.assertTrue(all(child.parent is directory for child in children))
            self.assertFalse(directory.has_git_repo())

    def test_vanished_child_becomes_error_pair(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            directory = Dir(root, ["gone"])
            (child,) = list(directory.files())
            path, error = child
            self.assertEqual(path, root / "gone")
            self.assertIsInstance(error, FileNotFoundError)

    def test_unreadable_directory_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OSError):
                Dir.read_dir(Path(tmp) / "missing")

    def test_undecodable_name_is_shown_lossily(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            try:
                fd = os.open(os.path.join(os.fsencode(tmp), b"bad\xff.txt"), os.O_CREAT | os.O_WRONLY, 0o644)
            except OSError as exc:
                self.skipTest(f"filesystem rejects non-UTF-8 names: {exc}")
            os.write(fd, b"abc")
            os.close(fd)
            (child,) = list(Dir.read_dir(Path(tmp)).files())
            self.assertEqual(child.name, "bad\ufffd.txt")
            self.assertEqual(child.size(), 3)
            self.assertEqual(file_name_cell(child, PLAIN_THEME).text.encode("utf-8"), "bad\ufffd.txt".encode("utf-8"))


if __name__ == "__main__":
    unittest.main()
