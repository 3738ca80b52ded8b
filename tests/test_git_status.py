"""Git status parsing and repository discovery."""

from __future__ import annotations

import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path

from lazyls.columns import ColumnKind, Columns
from lazyls.fields import Git, GitStatus
from lazyls.files import Dir
from lazyls.git_status import GitCache, GitRepo, iter_porcelain_records, parse_status_code


class PorcelainParsingTests(unittest.TestCase):
    def test_status_codes(self) -> None:
        self.assertEqual(parse_status_code("??"), Git(GitStatus.NOT_MODIFIED, GitStatus.NEW))
        self.assertEqual(parse_status_code("M "), Git(GitStatus.MODIFIED, GitStatus.NOT_MODIFIED))
        self.assertEqual(parse_status_code("AM"), Git(GitStatus.NEW, GitStatus.MODIFIED))
        self.assertEqual(parse_status_code(" D"), Git(GitStatus.NOT_MODIFIED, GitStatus.DELETED))
        self.assertEqual(parse_status_code("RT"), Git(GitStatus.RENAMED, GitStatus.TYPE_CHANGE))

    def test_rename_source_token_is_skipped(self) -> None:
        output = "R  new.txt\0old.txt\0 M other.txt\0"
        self.assertEqual(iter_porcelain_records(output), [("R ", "new.txt"), (" M", "other.txt")])

    def test_directory_status_picks_most_significant(self) -> None:
        root = Path("/repo")
        repo = GitRepo(
            root,
            {
                root / "src" / "a.py": Git(GitStatus.MODIFIED, GitStatus.NOT_MODIFIED),
                root / "src" / "b.py": Git(GitStatus.NOT_MODIFIED, GitStatus.NEW),
                root / "other.py": Git(GitStatus.DELETED, GitStatus.DELETED),
            },
        )
        self.assertEqual(repo.dir_status(root / "src"), Git(GitStatus.MODIFIED, GitStatus.NEW))
        self.assertEqual(repo.dir_status(root / "docs"), Git())
        self.assertEqual(repo.status(root / "src" / "missing.py"), Git())


@unittest.skipIf(shutil.which("git") is None, "git is required for repository tests")
class GitRepositoryTests(unittest.TestCase):
    def test_untracked_and_modified_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            subprocess.run(["git", "init", "-q"], cwd=root, check=True)
            subprocess.run(["git", "config", "user.email", "tests@example.com"], cwd=root, check=True)
            subprocess.run(["git", "config", "user.name", "Tests"], cwd=root, check=True)
            tracked = root / "tracked.txt"
            tracked.write_text("one\n", encoding="utf-8")
            subprocess.run(["git", "add", "-A"], cwd=root, check=True)
            subprocess.run(["git", "commit", "-q", "-m", "initial"], cwd=root, check=True)

            tracked.write_text("two\n", encoding="utf-8")
            (root / "new.txt").write_text("new\n", encoding="utf-8")

            directory = Dir.read_dir(root, GitCache())
            self.assertTrue(directory.has_git_repo())
            statuses = {
                child.name: child.git_status() for child in directory.files() if not isinstance(child, tuple)
            }
            self.assertEqual(statuses["tracked.txt"], Git(GitStatus.NOT_MODIFIED, GitStatus.MODIFIED))
            self.assertEqual(statuses["new.txt"], Git(GitStatus.NOT_MODIFIED, GitStatus.NEW))

            kinds = [column.kind for column in Columns(git=True).for_dir(directory)]
            self.assertEqual(kinds[-1], ColumnKind.GIT_STATUS)

    def test_outside_repository(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            cache = GitCache()
            if cache.repo_for(root) is not None:
                self.skipTest("temporary directory lives inside a git work tree")
            directory = Dir.read_dir(root, cache)
            kinds = [column.kind for column in Columns(git=True).for_dir(directory)]
            self.assertNotIn(ColumnKind.GIT_STATUS, kinds)


if __name__ == "__main__":
    unittest.main()
