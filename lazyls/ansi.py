"""ANSI-aware text measurement utilities.

Cell widths are measured on the visible text only: escape sequences count
for nothing, combining marks for nothing and wide characters for two columns.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    """Remove every escape sequence from ``text``."""
    if "\x1b" not in text:
        return text
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies once rendered."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def lossy_text(text: str) -> str:
    """Replace undecodable bytes smuggled in by ``surrogateescape`` with U+FFFD."""
    if text.isascii():
        return text
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raw = text.encode("utf-8", "replace")
    return raw.decode("utf-8", "replace")


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "strip_ansi",
    "display_width",
    "lossy_text",
]
