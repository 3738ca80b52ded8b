"""Recursion settings for tree listings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RecurseOptions:
    """``tree`` enables descent; ``max_depth`` caps it when set."""

    tree: bool = False
    max_depth: int | None = None

    def is_too_deep(self, depth: int) -> bool:
        if self.max_depth is None:
            return False
        return self.max_depth <= depth


__all__ = ["RecurseOptions"]
