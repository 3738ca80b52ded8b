"""Extended attribute listing."""

from __future__ import annotations

import errno
import os
from dataclasses import dataclass
from pathlib import Path

ENABLED = hasattr(os, "listxattr") and hasattr(os, "getxattr")
_UNSUPPORTED = {errno.ENOTSUP, errno.EOPNOTSUPP}


@dataclass(frozen=True)
class Attribute:
    name: str
    size: int


def list_attributes(path: Path, follow_symlinks: bool = False) -> list[Attribute]:
    """Return every extended attribute of ``path`` with its value length.

    Raises ``OSError`` when the attributes cannot be read. Platforms and
    filesystems without xattr support report none.
    """
    if not ENABLED:
        return []
    try:
        names = os.listxattr(path, follow_symlinks=follow_symlinks)
    except OSError as exc:
        if exc.errno in _UNSUPPORTED:
            return []
        raise
    attributes: list[Attribute] = []
    for name in names:
        value = os.getxattr(path, name, follow_symlinks=follow_symlinks)
        attributes.append(Attribute(name=name, size=len(value)))
    return attributes


__all__ = ["ENABLED", "Attribute", "list_attributes"]
