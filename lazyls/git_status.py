"""Git status lookups for the git column.

One ``git status`` run per repository is parsed into (staged, unstaged)
codes keyed by absolute path. A directory reports the most significant code
found among the changed paths beneath it.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from pathlib import Path

from .fields import Git, GitStatus

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 2.0

_CODE_TO_STATUS = {
    " ": GitStatus.NOT_MODIFIED,
    "M": GitStatus.MODIFIED,
    "A": GitStatus.NEW,
    "?": GitStatus.NEW,
    "C": GitStatus.NEW,
    "D": GitStatus.DELETED,
    "R": GitStatus.RENAMED,
    "T": GitStatus.TYPE_CHANGE,
}

# First match wins when several changes sit under one directory.
_DIRECTORY_PRECEDENCE = (
    GitStatus.NEW,
    GitStatus.MODIFIED,
    GitStatus.DELETED,
    GitStatus.RENAMED,
    GitStatus.TYPE_CHANGE,
)


def _run_git(cwd: Path, args: list[str], timeout_seconds: float) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(
            ["git", "-C", str(cwd), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("git %s failed in %s: %s", args[0], cwd, exc)
        return None


def resolve_repo_root(path: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> Path | None:
    """Return the work-tree root containing ``path``, or ``None`` outside git."""
    proc = _run_git(path, ["rev-parse", "--show-toplevel"], timeout_seconds)
    if proc is None or proc.returncode != 0:
        return None
    top = proc.stdout.strip()
    if not top:
        return None
    return Path(top).resolve()


def parse_status_code(code: str) -> Git:
    """Turn a two-letter porcelain code into staged and unstaged statuses."""
    if code == "??":
        return Git(staged=GitStatus.NOT_MODIFIED, unstaged=GitStatus.NEW)
    staged = _CODE_TO_STATUS.get(code[0], GitStatus.NOT_MODIFIED)
    unstaged = _CODE_TO_STATUS.get(code[1], GitStatus.NOT_MODIFIED)
    return Git(staged=staged, unstaged=unstaged)


def iter_porcelain_records(output: str) -> list[tuple[str, str]]:
    records: list[tuple[str, str]] = []
    tokens = output.split("\0")
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1
        if len(token) < 4 or token[2] != " ":
            continue

        status = token[:2]
        records.append((status, token[3:]))

        # Renames and copies carry the source path as an extra token.
        if "R" in status or "C" in status:
            index += 1
    return records


class GitRepo:
    """Parsed status of one work tree."""

    def __init__(self, root: Path, statuses: dict[Path, Git]) -> None:
        self.root = root
        self.statuses = statuses

    @classmethod
    def discover(cls, path: Path, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> GitRepo | None:
        root = resolve_repo_root(path, timeout_seconds)
        if root is None:
            return None
        proc = _run_git(root, ["status", "--porcelain=v1", "-z", "--untracked-files=all"], timeout_seconds)
        if proc is None or proc.returncode != 0:
            logger.debug("git status unavailable for %s", root)
            return None

        statuses: dict[Path, Git] = {}
        for code, rel_path in iter_porcelain_records(proc.stdout):
            if code == "!!" or not rel_path:
                continue
            statuses[root / rel_path.rstrip("/")] = parse_status_code(code)
        return cls(root, statuses)

    def status(self, path: Path) -> Git:
        return self.statuses.get(path, Git())

    def dir_status(self, directory: Path) -> Git:
        staged: set[GitStatus] = set()
        unstaged: set[GitStatus] = set()
        for path, git in self.statuses.items():
            if path == directory or directory in path.parents:
                staged.add(git.staged)
                unstaged.add(git.unstaged)
        return Git(staged=_most_significant(staged), unstaged=_most_significant(unstaged))


def _most_significant(statuses: set[GitStatus]) -> GitStatus:
    for status in _DIRECTORY_PRECEDENCE:
        if status in statuses:
            return status
    return GitStatus.NOT_MODIFIED


class GitCache:
    """Discovered repositories, shared by every directory of one listing."""

    def __init__(self, timeout_seconds: float = GIT_TIMEOUT_SECONDS) -> None:
        self.timeout_seconds = timeout_seconds
        self._lock = threading.Lock()
        self._repos: list[GitRepo] = []
        self._misses: set[Path] = set()

    def repo_for(self, directory: Path) -> GitRepo | None:
        directory = directory.resolve()
        with self._lock:
            for repo in self._repos:
                if directory == repo.root or repo.root in directory.parents:
                    return repo
            if directory in self._misses:
                return None
        repo = GitRepo.discover(directory, self.timeout_seconds)
        with self._lock:
            if repo is None:
                self._misses.add(directory)
            else:
                self._repos.append(repo)
        return repo


__all__ = [
    "GIT_TIMEOUT_SECONDS",
    "resolve_repo_root",
    "parse_status_code",
    "iter_porcelain_records",
    "GitRepo",
    "GitCache",
]
