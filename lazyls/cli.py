"""Command-line front door for lazyls.

Parses CLI options over persisted config defaults, stats the named paths,
and prints one details table per section.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .columns import Columns, SizeFormat
from .details import Details
from .fields import TimeType
from .files import Dir, File
from .filtering import FileFilter, SortField
from .locale_fmt import Numeric, TimeLocale
from .logging_setup import configure_logging
from .options import RecurseOptions
from .table import format_error
from .theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyls",
        description="List directory contents as an aligned, optionally tree-shaped table.",
        add_help=False,
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="Files or directories to list (default: .).")
    parser.add_argument("--help", action="help", help="Show this help message and exit.")

    display = parser.add_argument_group("display")
    display.add_argument("-l", "--long", action="store_true", help="Show a details column for each attribute.")
    display.add_argument("-T", "--tree", action="store_true", help="Recurse into directories as a tree.")
    display.add_argument("-L", "--level", type=_positive_int, default=None, help="Limit tree depth.")
    display.add_argument("--theme", default=None, help=f"Color theme ({', '.join(available_theme_names())}).")
    display.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")

    filtering = parser.add_argument_group("filtering")
    filtering.add_argument("-a", "--all", action="store_true", help="Show hidden files.")
    filtering.add_argument(
        "-I",
        "--ignore-glob",
        action="append",
        default=[],
        metavar="PATTERNS",
        help="Hide names matching these '|'-separated globs.",
    )
    filtering.add_argument(
        "-s",
        "--sort",
        choices=[field.value for field in SortField],
        default=None,
        help="Sort field (default: name).",
    )
    filtering.add_argument("-r", "--reverse", action="store_true", help="Reverse the sort order.")
    filtering.add_argument("--group-directories-first", action="store_true", help="List directories before files.")

    long_view = parser.add_argument_group("long view")
    long_view.add_argument("-h", "--header", action="store_true", help="Add a header row.")
    long_view.add_argument("-@", "--extended", action="store_true", help="List extended attributes and their sizes.")
    sizes = long_view.add_mutually_exclusive_group()
    sizes.add_argument("-b", "--binary", action="store_true", help="Sizes in powers of 1024 (Ki, Mi, ...).")
    sizes.add_argument("-B", "--bytes", action="store_true", help="Sizes in raw bytes.")
    long_view.add_argument("-g", "--group", action="store_true", help="Show the owning group.")
    long_view.add_argument("-H", "--links", action="store_true", help="Show hard link counts.")
    long_view.add_argument("-i", "--inode", action="store_true", help="Show inode numbers.")
    long_view.add_argument("-S", "--blocks", action="store_true", help="Show allocated block counts.")
    long_view.add_argument("-m", "--modified", action="store_true", help="Show the modification time.")
    long_view.add_argument("-u", "--accessed", action="store_true", help="Show the access time.")
    long_view.add_argument("-U", "--created", action="store_true", help="Show the creation time.")
    long_view.add_argument("--git", action="store_true", help="Show git status inside repositories.")

    parser.add_argument("--debug", action="store_true", help="Log diagnostics to stderr.")
    return parser


def _time_types(args: argparse.Namespace, settings: dict[str, object]) -> tuple[TimeType, ...]:
    chosen = []
    if args.modified:
        chosen.append(TimeType.MODIFIED)
    if args.accessed:
        chosen.append(TimeType.ACCESSED)
    if args.created:
        chosen.append(TimeType.CREATED)
    return tuple(chosen) or (config.load_time_type(settings),)


def _size_format(args: argparse.Namespace, settings: dict[str, object]) -> SizeFormat:
    if args.binary:
        return SizeFormat.BINARY_BYTES
    if args.bytes:
        return SizeFormat.JUST_BYTES
    return config.load_size_format(settings)


def build_details(args: argparse.Namespace, settings: dict[str, object], *, is_tty: bool = True) -> Details:
    """Combine parsed arguments with config defaults into view options."""
    columns = None
    if args.long:
        columns = Columns(
            size_format=_size_format(args, settings),
            time_types=_time_types(args, settings),
            inode=args.inode,
            links=args.links,
            blocks=args.blocks,
            group=args.group,
            git=args.git,
        )

    patterns: list[str] = []
    for raw in args.ignore_glob:
        patterns.extend(pattern for pattern in raw.split("|") if pattern)
    file_filter = FileFilter(
        show_invisibles=args.all or config.load_show_hidden(settings),
        sort_field=SortField(args.sort) if args.sort else config.load_sort_field(settings),
        reverse=args.reverse,
        list_dirs_first=args.group_directories_first or config.load_group_directories_first(settings),
        ignore_patterns=tuple(patterns),
    )

    theme_name = args.theme or config.load_theme_name(settings)
    return Details(
        columns=columns,
        recurse=RecurseOptions(tree=True, max_depth=args.level) if args.tree else None,
        filter=file_filter,
        header=bool(columns is not None and (args.header or config.load_header(settings))),
        xattr=args.extended,
        theme=resolve_theme(theme_name, no_color=args.no_color or not is_tty),
        numeric=Numeric.load_user_locale(),
        time_locale=TimeLocale.load_user_locale(),
    )


def _tree_anchor(files: list[File], details: Details) -> Dir | None:
    """Pick the directory whose git repository decides the git column of a tree."""
    if details.git_cache is None:
        return None
    for file in files:
        if file.is_directory():
            return Dir(file.path, [], details.git_cache.repo_for(file.path))
    return None


def run(args: argparse.Namespace, details: Details, out=None, err=None) -> int:
    """List every requested path; return the process exit status."""
    out = out or sys.stdout
    err = err or sys.stderr
    status = 0
    files: list[File] = []
    directories: list[File] = []

    for raw in args.paths or ["."]:
        try:
            file = File.from_path(Path(raw), name=raw, follow_symlinks=True)
        except OSError as exc:
            err.write(f"lazyls: {raw}: {format_error(exc)}\n")
            status = 1
            continue
        if file.is_directory() and not args.tree:
            directories.append(file)
        else:
            files.append(file)

    sections: list[list[str]] = []
    if files:
        sections.append(details.view(_tree_anchor(files, details), files))

    show_titles = len(args.paths) > 1
    for file in details.filter.sort_files(directories):
        try:
            directory = file.to_dir(details.git_cache)
        except OSError as exc:
            err.write(f"lazyls: {file.name}: {format_error(exc)}\n")
            status = 1
            continue
        children = []
        for child in directory.files():
            if isinstance(child, tuple) or details.filter.is_visible(child):
                children.append(child)
        lines = details.view(directory, children)
        if show_titles:
            lines = [f"{file.name}:", *lines]
        sections.append(lines)

    for index, lines in enumerate(sections):
        if index:
            out.write("\n")
        for line in lines:
            out.write(line + "\n")
    return status


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and print the listing."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(debug=args.debug)
    settings = config.load_config()
    details = build_details(args, settings, is_tty=sys.stdout.isatty())
    logger.debug("listing %s", args.paths or ["."])
    return run(args, details)


if __name__ == "__main__":
    raise SystemExit(main())
