"""User and group name resolution.

``OSUsers`` looks names up in the system databases and caches every answer,
including misses. Column rendering happens on worker threads, so the cache is
guarded by a lock. ``MockUsers`` serves a fixed table for tests.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field

try:
    import grp
    import pwd
except ImportError:  # pragma: no cover - non-POSIX platforms
    grp = None
    pwd = None

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    uid: int
    name: str
    primary_group: int


@dataclass(frozen=True)
class Group:
    gid: int
    name: str
    members: tuple[str, ...] = ()


class Users:
    """Identity lookup interface used by the user and group renderers."""

    def get_user_by_uid(self, uid: int) -> User | None:
        raise NotImplementedError

    def get_group_by_gid(self, gid: int) -> Group | None:
        raise NotImplementedError

    def get_current_uid(self) -> int:
        raise NotImplementedError


class OSUsers(Users):
    """System-database backed lookups with a thread-safe cache."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[int, User | None] = {}
        self._groups: dict[int, Group | None] = {}
        self._current_uid: int | None = None

    def get_user_by_uid(self, uid: int) -> User | None:
        with self._lock:
            if uid in self._users:
                return self._users[uid]
        user: User | None = None
        if pwd is not None:
            try:
                entry = pwd.getpwuid(uid)
            except (KeyError, OverflowError):
                logger.debug("no passwd entry for uid %s", uid)
            else:
                user = User(uid=uid, name=entry.pw_name, primary_group=entry.pw_gid)
        with self._lock:
            self._users[uid] = user
        return user

    def get_group_by_gid(self, gid: int) -> Group | None:
        with self._lock:
            if gid in self._groups:
                return self._groups[gid]
        group: Group | None = None
        if grp is not None:
            try:
                entry = grp.getgrgid(gid)
            except (KeyError, OverflowError):
                logger.debug("no group entry for gid %s", gid)
            else:
                group = Group(gid=gid, name=entry.gr_name, members=tuple(entry.gr_mem))
        with self._lock:
            self._groups[gid] = group
        return group

    def get_current_uid(self) -> int:
        if self._current_uid is None:
            self._current_uid = os.getuid() if hasattr(os, "getuid") else -1
        return self._current_uid


@dataclass
class MockUsers(Users):
    """In-memory identity table."""

    current_uid: int = 0
    users: dict[int, User] = field(default_factory=dict)
    groups: dict[int, Group] = field(default_factory=dict)

    def add_user(self, user: User) -> None:
        self.users[user.uid] = user

    def add_group(self, group: Group) -> None:
        self.groups[group.gid] = group

    def get_user_by_uid(self, uid: int) -> User | None:
        return self.users.get(uid)

    def get_group_by_gid(self, gid: int) -> Group | None:
        return self.groups.get(gid)

    def get_current_uid(self) -> int:
        return self.current_uid


__all__ = ["User", "Group", "Users", "OSUsers", "MockUsers"]
