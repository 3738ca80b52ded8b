"""Theme definitions and selection helpers.

A theme maps every semantic role of the listing (permission bits, size
numbers and units, user/group ownership, git letters, tree punctuation...)
to an ANSI SGR prefix. It is purely a lookup table; renderers decide which
role applies.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

RESET = "\033[0m"


def paint(style: str, text: str) -> str:
    """Wrap ``text`` in ``style`` and a reset, or return it unchanged for an empty style."""
    if not style or not text:
        return text
    return f"{style}{text}{RESET}"


@dataclass(frozen=True)
class Theme:
    """Semantic ANSI palette used by the column and name renderers."""

    name: str
    header: str
    punctuation: str
    broken_arrow: str
    attribute: str
    date: str
    inode: str
    blocks: str
    symlink_path: str
    file_normal: str
    file_directory: str
    file_symlink: str
    file_pipe: str
    file_special: str
    file_executable: str
    perm_user_read: str
    perm_user_write: str
    perm_user_execute_file: str
    perm_user_execute_other: str
    perm_group_read: str
    perm_group_write: str
    perm_group_execute: str
    perm_other_read: str
    perm_other_write: str
    perm_other_execute: str
    size_numbers: str
    size_unit: str
    user_you: str
    user_someone_else: str
    group_yours: str
    group_not_yours: str
    links_normal: str
    links_multi: str
    git_new: str
    git_modified: str
    git_deleted: str
    git_renamed: str
    git_typechange: str

    @property
    def is_plain(self) -> bool:
        return all(not getattr(self, f.name) for f in fields(self) if f.name != "name")


DEFAULT_THEME = Theme(
    name="default",
    header="\033[4m",
    punctuation="\033[38;5;244m",
    broken_arrow="\033[31m",
    attribute="",
    date="\033[34m",
    inode="\033[35m",
    blocks="\033[36m",
    symlink_path="\033[36m",
    file_normal="",
    file_directory="\033[1;34m",
    file_symlink="\033[36m",
    file_pipe="\033[33m",
    file_special="\033[33m",
    file_executable="\033[1;32m",
    perm_user_read="\033[1;33m",
    perm_user_write="\033[1;31m",
    perm_user_execute_file="\033[1;4;32m",
    perm_user_execute_other="\033[1;32m",
    perm_group_read="\033[33m",
    perm_group_write="\033[31m",
    perm_group_execute="\033[32m",
    perm_other_read="\033[33m",
    perm_other_write="\033[31m",
    perm_other_execute="\033[32m",
    size_numbers="\033[1;32m",
    size_unit="\033[32m",
    user_you="\033[1;33m",
    user_someone_else="",
    group_yours="\033[1;33m",
    group_not_yours="",
    links_normal="\033[1;31m",
    links_multi="\033[31;43m",
    git_new="\033[32m",
    git_modified="\033[34m",
    git_deleted="\033[31m",
    git_renamed="\033[33m",
    git_typechange="\033[35m",
)

OCEAN_THEME = Theme(
    name="ocean",
    header="\033[1;4;38;5;45m",
    punctuation="\033[2;38;5;31m",
    broken_arrow="\033[38;5;203m",
    attribute="\033[38;5;153m",
    date="\033[38;5;110m",
    inode="\033[38;5;73m",
    blocks="\033[38;5;73m",
    symlink_path="\033[38;5;117m",
    file_normal="\033[38;5;252m",
    file_directory="\033[1;38;5;45m",
    file_symlink="\033[38;5;117m",
    file_pipe="\033[38;5;215m",
    file_special="\033[38;5;215m",
    file_executable="\033[1;38;5;84m",
    perm_user_read="\033[38;5;229m",
    perm_user_write="\033[38;5;215m",
    perm_user_execute_file="\033[4;38;5;84m",
    perm_user_execute_other="\033[38;5;84m",
    perm_group_read="\033[38;5;187m",
    perm_group_write="\033[38;5;180m",
    perm_group_execute="\033[38;5;114m",
    perm_other_read="\033[38;5;187m",
    perm_other_write="\033[38;5;180m",
    perm_other_execute="\033[38;5;114m",
    size_numbers="\033[1;38;5;81m",
    size_unit="\033[38;5;39m",
    user_you="\033[1;38;5;229m",
    user_someone_else="\033[38;5;250m",
    group_yours="\033[1;38;5;229m",
    group_not_yours="\033[38;5;250m",
    links_normal="\033[38;5;203m",
    links_multi="\033[1;38;5;203m",
    git_new="\033[38;5;84m",
    git_modified="\033[38;5;39m",
    git_deleted="\033[38;5;203m",
    git_renamed="\033[38;5;215m",
    git_typechange="\033[38;5;141m",
)

PLAIN_THEME = Theme(name="plain", **{f.name: "" for f in fields(Theme) if f.name != "name"})

_THEMES: dict[str, Theme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> Theme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "RESET",
    "paint",
    "Theme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
