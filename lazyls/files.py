"""Filesystem-backed file entries and directory listings."""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .ansi import display_width, lossy_text
from .fields import FileType, Git, Links, Permissions, TimeType
from .git_status import GitCache, GitRepo
from .xattr import Attribute, list_attributes


@dataclass(frozen=True)
class LinkTarget:
    """Where a symlink points; ``file_type`` is ``None`` for a broken link."""

    path: str
    file_type: FileType | None


def file_type_for_mode(mode: int) -> FileType:
    if stat.S_ISREG(mode):
        return FileType.FILE
    if stat.S_ISDIR(mode):
        return FileType.DIRECTORY
    if stat.S_ISFIFO(mode):
        return FileType.PIPE
    if stat.S_ISLNK(mode):
        return FileType.LINK
    return FileType.SPECIAL


class File:
    """One path plus its ``lstat`` metadata.

    ``parent`` is the ``Dir`` the file was listed from, if any; it supplies
    the git status for the file.
    """

    def __init__(self, path: Path, metadata: os.stat_result, parent: Dir | None = None, name: str | None = None) -> None:
        self.path = path
        self.metadata = metadata
        self.parent = parent
        self.name = lossy_text(name if name is not None else (path.name or str(path)))

    @classmethod
    def from_path(
        cls,
        path: Path,
        parent: Dir | None = None,
        name: str | None = None,
        follow_symlinks: bool = False,
    ) -> File:
        """Stat ``path``, by default without following symlinks; raises ``OSError``."""
        metadata = os.stat(path) if follow_symlinks else os.lstat(path)
        return cls(path, metadata, parent=parent, name=name)

    def __repr__(self) -> str:
        return f"File({str(self.path)!r})"

    @property
    def extension(self) -> str | None:
        stem, dot, ext = self.name.rpartition(".")
        if not dot or not stem:
            return None
        return ext

    def name_width(self) -> int:
        return display_width(self.name)

    def is_directory(self) -> bool:
        return stat.S_ISDIR(self.metadata.st_mode)

    def is_file(self) -> bool:
        return stat.S_ISREG(self.metadata.st_mode)

    def is_link(self) -> bool:
        return stat.S_ISLNK(self.metadata.st_mode)

    def is_executable_file(self) -> bool:
        return self.is_file() and bool(self.metadata.st_mode & stat.S_IXUSR)

    def permissions(self) -> Permissions:
        mode = self.metadata.st_mode
        return Permissions.from_mode(file_type_for_mode(mode), mode)

    def size(self) -> int | None:
        if self.is_directory():
            return None
        return int(self.metadata.st_size)

    def timestamp(self, time_type: TimeType | None) -> float | None:
        metadata = self.metadata
        if time_type is TimeType.ACCESSED:
            return metadata.st_atime
        if time_type is TimeType.CREATED:
            return getattr(metadata, "st_birthtime", metadata.st_ctime)
        return metadata.st_mtime

    def links(self) -> Links:
        count = int(self.metadata.st_nlink)
        return Links(count=count, multiple=self.is_file() and count > 1)

    def inode(self) -> int:
        return int(self.metadata.st_ino)

    def blocks(self) -> int | None:
        if self.is_file() or self.is_link():
            return getattr(self.metadata, "st_blocks", None)
        return None

    def user(self) -> int:
        return int(self.metadata.st_uid)

    def group(self) -> int:
        return int(self.metadata.st_gid)

    def git_status(self) -> Git:
        if self.parent is None:
            return Git()
        return self.parent.git_status(self.path, self.is_directory())

    def attributes(self) -> list[Attribute]:
        return list_attributes(self.path)

    def link_target(self) -> LinkTarget | None:
        if not self.is_link():
            return None
        try:
            raw = os.readlink(self.path)
        except OSError:
            return None
        try:
            target_mode = os.stat(self.path).st_mode
        except OSError:
            return LinkTarget(path=lossy_text(raw), file_type=None)
        return LinkTarget(path=lossy_text(raw), file_type=file_type_for_mode(target_mode))

    def to_dir(self, git_cache: GitCache | None = None) -> Dir:
        """Read this directory's listing; raises ``OSError``."""
        return Dir.read_dir(self.path, git_cache)


class Dir:
    """The names inside one directory, read eagerly."""

    def __init__(self, path: Path, names: list[str], git: GitRepo | None = None) -> None:
        self.path = path
        self.names = names
        self.git = git

    @classmethod
    def read_dir(cls, path: Path, git_cache: GitCache | None = None) -> Dir:
        names = os.listdir(path)
        git = git_cache.repo_for(path) if git_cache is not None else None
        return cls(path, names, git)

    def join(self, name: str) -> Path:
        return self.path / name

    def files(self) -> Iterator[File | tuple[Path, OSError]]:
        """Yield each child as a ``File``, or ``(path, error)`` when it cannot be statted."""
        for name in self.names:
            path = self.join(name)
            try:
                yield File.from_path(path, parent=self, name=name)
            except OSError as exc:
                yield path, exc

    def has_git_repo(self) -> bool:
        return self.git is not None

    def git_status(self, path: Path, is_directory: bool) -> Git:
        if self.git is None:
            return Git()
        try:
            absolute = path.resolve() if is_directory else path.parent.resolve() / path.name
        except OSError:
            return Git()
        if is_directory:
            return self.git.dir_status(absolute)
        return self.git.status(absolute)


__all__ = ["LinkTarget", "file_type_for_mode", "File", "Dir"]
