"""Column renderers: one file attribute plus a column kind becomes one cell.

Every renderer returns a ``Cell`` whose width is the exact display width of
its unstyled text, because table alignment is computed from those widths.
"""

from __future__ import annotations

from datetime import datetime, tzinfo

from .cell import Cell, concat
from .columns import Column, ColumnKind, SizeFormat
from .fields import FileType, Git, GitStatus, Links, Permissions
from .locale_fmt import Numeric, TimeLocale
from .theme import DEFAULT_THEME, Theme
from .users import OSUsers, Users

DECIMAL_PREFIXES = ("k", "M", "G", "T", "P", "E", "Z", "Y")
BINARY_PREFIXES = ("Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi")


def scale_size(size: int, size_format: SizeFormat) -> tuple[float, str | None]:
    """Divide ``size`` down to its largest unit.

    Returns ``(value, symbol)``; ``symbol`` is ``None`` when the size is below
    one unit and should be printed as a bare number.
    """
    if size_format is SizeFormat.BINARY_BYTES:
        base, prefixes = 1024.0, BINARY_PREFIXES
    else:
        base, prefixes = 1000.0, DECIMAL_PREFIXES
    value = float(size)
    if value < base:
        return value, None
    index = -1
    while value >= base and index < len(prefixes) - 1:
        value /= base
        index += 1
    return value, prefixes[index]


def file_type_style(file_type: FileType, theme: Theme) -> str:
    if file_type is FileType.DIRECTORY:
        return theme.file_directory
    if file_type is FileType.LINK:
        return theme.file_symlink
    if file_type is FileType.PIPE:
        return theme.file_pipe
    if file_type is FileType.SPECIAL:
        return theme.file_special
    return theme.file_normal


def file_name_cell(file, theme: Theme, links: bool = True) -> Cell:
    """Render a file's name styled by type, with ``-> target`` for symlinks."""
    file_type = file.permissions().file_type
    style = file_type_style(file_type, theme)
    if file_type is FileType.FILE and file.is_executable_file():
        style = theme.file_executable
    name = Cell.paint(style, file.name)
    if not links or file_type is not FileType.LINK:
        return name

    target = file.link_target()
    if target is None:
        return name
    arrow = Cell.paint(theme.punctuation, " -> ")
    if target.file_type is None:
        return concat((name, arrow, Cell.paint(theme.broken_arrow, target.path)))
    return concat((name, arrow, Cell.paint(theme.symlink_path, target.path)))


class CellRenderer:
    """Formats attribute values into cells for one table.

    ``current_year`` is captured once so every timestamp in the listing is
    compared against the same instant.
    """

    def __init__(
        self,
        theme: Theme = DEFAULT_THEME,
        users: Users | None = None,
        numeric: Numeric | None = None,
        time_locale: TimeLocale | None = None,
        tz: tzinfo | None = None,
        current_year: int | None = None,
    ) -> None:
        if users is None:
            users = OSUsers()
        self.theme = theme
        self.users = users
        self.numeric = numeric or Numeric.english()
        self.time_locale = time_locale or TimeLocale.english()
        self.tz = tz
        self.current_year = current_year if current_year is not None else datetime.now(tz).year

    def dash(self) -> Cell:
        return Cell.paint(self.theme.punctuation, "-")

    def render(self, file, column: Column, xattrs: bool) -> Cell:
        kind = column.kind
        if kind is ColumnKind.PERMISSIONS:
            return self.render_permissions(file.permissions(), xattrs)
        if kind is ColumnKind.FILE_SIZE:
            return self.render_size(file.size(), column.size_format or SizeFormat.DECIMAL_BYTES)
        if kind is ColumnKind.TIMESTAMP:
            return self.render_time(file.timestamp(column.time_type))
        if kind is ColumnKind.HARD_LINKS:
            return self.render_links(file.links())
        if kind is ColumnKind.INODE:
            return self.render_inode(file.inode())
        if kind is ColumnKind.BLOCKS:
            return self.render_blocks(file.blocks())
        if kind is ColumnKind.USER:
            return self.render_user(file.user())
        if kind is ColumnKind.GROUP:
            return self.render_group(file.group())
        if kind is ColumnKind.GIT_STATUS:
            return self.render_git_status(file.git_status())
        raise ValueError(f"unknown column kind: {kind!r}")

    def render_permissions(self, permissions: Permissions, xattrs: bool) -> Cell:
        theme = self.theme

        def bit(flag: bool, char: str, style: str) -> Cell:
            return Cell.paint(style, char) if flag else self.dash()

        file_type = permissions.file_type
        if file_type is FileType.FILE:
            user_execute = theme.perm_user_execute_file
        else:
            user_execute = theme.perm_user_execute_other

        parts = [
            Cell.paint(file_type_style(file_type, theme), file_type.value),
            bit(permissions.user_read, "r", theme.perm_user_read),
            bit(permissions.user_write, "w", theme.perm_user_write),
            bit(permissions.user_execute, "x", user_execute),
            bit(permissions.group_read, "r", theme.perm_group_read),
            bit(permissions.group_write, "w", theme.perm_group_write),
            bit(permissions.group_execute, "x", theme.perm_group_execute),
            bit(permissions.other_read, "r", theme.perm_other_read),
            bit(permissions.other_write, "w", theme.perm_other_write),
            bit(permissions.other_execute, "x", theme.perm_other_execute),
        ]
        if xattrs:
            parts.append(Cell.paint(theme.attribute, "@"))
        return concat(parts)

    def render_size(self, size: int | None, size_format: SizeFormat) -> Cell:
        if size is None:
            return self.dash()
        numbers = self.theme.size_numbers
        if size_format is SizeFormat.JUST_BYTES:
            return Cell.paint(numbers, self.numeric.format_int(size))

        value, symbol = scale_size(size, size_format)
        if symbol is None:
            return Cell.paint(numbers, str(int(value)))
        if value < 10:
            number = self.numeric.format_float(value, 1)
        else:
            number = self.numeric.format_int(int(value))
        return Cell.paint(numbers, number) + Cell.paint(self.theme.size_unit, symbol)

    def render_time(self, timestamp: float | None) -> Cell:
        if timestamp is None:
            return self.dash()
        try:
            date = datetime.fromtimestamp(timestamp, self.tz)
        except (OverflowError, OSError, ValueError):
            return self.dash()

        month = self.time_locale.short_month_name(date.month)
        if date.year == self.current_year:
            text = f"{date.day:>2} {month} {date.hour:>2}:{date.minute:02}"
        else:
            text = f"{date.day:>2} {month} {date.year:>5}"
        return Cell.paint(self.theme.date, text)

    def render_links(self, links: Links) -> Cell:
        style = self.theme.links_multi if links.multiple else self.theme.links_normal
        return Cell.paint(style, self.numeric.format_int(links.count))

    def render_inode(self, inode: int) -> Cell:
        return Cell.paint(self.theme.inode, str(inode))

    def render_blocks(self, blocks: int | None) -> Cell:
        if blocks is None:
            return self.dash()
        return Cell.paint(self.theme.blocks, str(blocks))

    def render_user(self, uid: int) -> Cell:
        user = self.users.get_user_by_uid(uid)
        name = user.name if user is not None else str(uid)
        if self.users.get_current_uid() == uid:
            style = self.theme.user_you
        else:
            style = self.theme.user_someone_else
        return Cell.paint(style, name)

    def render_group(self, gid: int) -> Cell:
        style = self.theme.group_not_yours
        group = self.users.get_group_by_gid(gid)
        if group is None:
            return Cell.paint(style, str(gid))

        current_user = self.users.get_user_by_uid(self.users.get_current_uid())
        if current_user is not None:
            if current_user.primary_group == group.gid or current_user.name in group.members:
                style = self.theme.group_yours
        return Cell.paint(style, group.name)

    def render_git_status(self, git: Git | None) -> Cell:
        git = git or Git()
        return concat((self._git_char(git.staged), self._git_char(git.unstaged)))

    def _git_char(self, status: GitStatus) -> Cell:
        if status is GitStatus.NOT_MODIFIED:
            return self.dash()
        style = {
            GitStatus.NEW: self.theme.git_new,
            GitStatus.MODIFIED: self.theme.git_modified,
            GitStatus.DELETED: self.theme.git_deleted,
            GitStatus.RENAMED: self.theme.git_renamed,
            GitStatus.TYPE_CHANGE: self.theme.git_typechange,
        }[status]
        return Cell.paint(style, status.value)


__all__ = [
    "DECIMAL_PREFIXES",
    "BINARY_PREFIXES",
    "scale_size",
    "file_type_style",
    "file_name_cell",
    "CellRenderer",
]
