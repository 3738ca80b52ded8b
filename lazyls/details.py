"""The details view: files as rows of a table, optionally as a tree.

Attribute gathering (stat fields, extended attributes, opening
subdirectories) runs on a thread pool one batch of siblings at a time. The
driving thread waits for the whole batch, sorts the results with the
listing comparator, appends rows, and only then descends into
subdirectories. Completion order of the workers never reaches the output.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import Executor, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path

from .cell import Cell
from .columns import Columns
from .filtering import FileFilter
from .git_status import GitCache
from .locale_fmt import Numeric, TimeLocale
from .options import RecurseOptions
from .render import file_name_cell
from .table import Table
from .theme import DEFAULT_THEME, Theme
from .users import OSUsers, Users
from .xattr import Attribute

logger = logging.getLogger(__name__)


@dataclass
class _Egg:
    """Everything gathered for one file before it becomes rows."""

    file: object
    cells: list[Cell]
    name: Cell
    xattrs: list[Attribute] = field(default_factory=list)
    errors: list[tuple[OSError, Path | None]] = field(default_factory=list)
    dir: object | None = None


def default_worker_count() -> int:
    return os.cpu_count() or 1


@dataclass
class Details:
    """Options for one details listing.

    ``columns`` is ``None`` for a names-only (tree) listing. Identity,
    locale and time zone collaborators default to the running system.
    """

    columns: Columns | None = None
    recurse: RecurseOptions | None = None
    filter: FileFilter = field(default_factory=FileFilter)
    header: bool = False
    xattr: bool = False
    theme: Theme = DEFAULT_THEME
    users: Users | None = None
    numeric: Numeric | None = None
    time_locale: TimeLocale | None = None
    tz: tzinfo | None = None
    current_year: int | None = None
    max_workers: int | None = None
    git_cache: GitCache | None = None

    def __post_init__(self) -> None:
        if self.users is None:
            self.users = OSUsers()
        if self.git_cache is None and self.columns is not None and self.columns.git:
            self.git_cache = GitCache()

    def make_table(self, directory=None) -> Table:
        columns = self.columns.for_dir(directory) if self.columns is not None else []
        table = Table(
            columns,
            theme=self.theme,
            users=self.users,
            numeric=self.numeric,
            time_locale=self.time_locale,
            tz=self.tz,
            current_year=self.current_year,
        )
        if self.header:
            table.add_header()
        return table

    def view(self, directory, files: list) -> list[str]:
        """Render ``files`` (read from ``directory``, if any) as finished lines."""
        return self.collect(directory, files).print_table()

    def collect(self, directory, files: list) -> Table:
        """Build the table for ``files`` without printing it.

        ``files`` may also hold ``(path, error)`` pairs for entries that could
        not be statted; they become error rows after the file rows.
        """
        entries = [item for item in files if not isinstance(item, tuple)]
        failures = [item for item in files if isinstance(item, tuple)]
        table = self.make_table(directory)
        with ThreadPoolExecutor(max_workers=self.max_workers or default_worker_count()) as pool:
            self.add_files_to_table(table, entries, 0, pool, trailing=bool(failures))
        for index, (path, error) in enumerate(failures):
            table.add_error(error, 0, index == len(failures) - 1, path)
        return table

    def _hatch(self, table: Table, file, depth: int) -> _Egg:
        """Gather one file's cells, name, attributes, errors and subdirectory."""
        xattrs: list[Attribute] = []
        errors: list[tuple[OSError, Path | None]] = []
        if self.xattr:
            try:
                xattrs = list(file.attributes())
            except OSError as exc:
                errors.append((exc, None))

        cells = table.cells_for_file(file, bool(xattrs))
        name = file_name_cell(file, self.theme, links=True)

        subdir = None
        recurse = self.recurse
        if recurse is not None and recurse.tree and file.is_directory() and not recurse.is_too_deep(depth):
            try:
                subdir = file.to_dir(self.git_cache)
            except OSError as exc:
                logger.debug("not descending into %s: %s", getattr(file, "path", file), exc)

        return _Egg(file=file, cells=cells, name=name, xattrs=xattrs, errors=errors, dir=subdir)

    def add_files_to_table(
        self,
        table: Table,
        files: list,
        depth: int,
        pool: Executor | None = None,
        trailing: bool = False,
    ) -> None:
        """Append rows for ``files`` at ``depth``, recursing into subdirectories.

        ``trailing`` means more sibling rows follow this batch, so none of its
        rows is the last of the group.
        """
        if pool is None:
            with ThreadPoolExecutor(max_workers=self.max_workers or default_worker_count()) as own_pool:
                self.add_files_to_table(table, files, depth, own_pool, trailing)
            return

        futures = [pool.submit(self._hatch, table, file, depth) for file in files]
        wait(futures)
        eggs: list[_Egg] = [future.result() for future in futures]
        compare = self.filter.sort_key()
        eggs.sort(key=lambda egg: compare(egg.file))

        for index, egg in enumerate(eggs):
            table.add_file(egg.cells, egg.name, depth, not trailing and index == len(eggs) - 1)
            errors = list(egg.errors)

            if egg.dir is not None:
                children = []
                for child in egg.dir.files():
                    if isinstance(child, tuple):
                        path, error = child
                        errors.append((error, path))
                    else:
                        children.append(child)
                children = self.filter.filter_files(children)

                if children:
                    for xattr in egg.xattrs:
                        table.add_xattr(xattr.name, xattr.size, depth + 1, False)
                    for error, path in errors:
                        table.add_error(error, depth + 1, False, path)
                    self.add_files_to_table(table, children, depth + 1, pool)
                    continue

            for xattr_index, xattr in enumerate(egg.xattrs):
                last = not errors and xattr_index == len(egg.xattrs) - 1
                table.add_xattr(xattr.name, xattr.size, depth + 1, last)
            for error_index, (error, path) in enumerate(errors):
                table.add_error(error, depth + 1, error_index == len(errors) - 1, path)


__all__ = ["Details", "default_worker_count"]
