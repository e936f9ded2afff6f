"""Status information about files and directories."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from typing import Callable

from dirpoll.filesystem import (
    dir_add_slash_at_end,
    dir_remove_slash_at_end,
    path_remove_file_name,
)

_IS_ROOT = hasattr(os, "getuid") and os.getuid() == 0


@dataclass
class FileInfo:
    """A stat record of one path.

    Two records are equal when their status fields match; the path itself
    takes no part in the comparison.
    """

    filepath: str = field(default="", compare=False)
    modification_time: int = 0
    size: int = 0
    owner_id: int = 0
    group_id: int = 0
    permissions: int = 0
    inode: int = 0

    @classmethod
    def from_path(cls, path: str, link_info: bool = False) -> FileInfo:
        """Build a record for ``path``; with ``link_info`` a symlink itself is described."""
        info = cls(path)
        if link_info:
            info.refresh_link()
        else:
            info.refresh()
        return info

    @staticmethod
    def path_exists(path: str) -> bool:
        """Return whether ``path`` can be stat'ed."""
        return FileInfo(path).exists()

    @staticmethod
    def path_is_link(path: str) -> bool:
        """Return whether ``path`` is a symbolic link."""
        return FileInfo.from_path(path, True).is_link()

    @staticmethod
    def inode_supported() -> bool:
        """Return whether inode numbers identify files on this system."""
        return os.name != "nt"

    def _load(self, stat_fn: Callable[[str], os.stat_result]) -> None:
        try:
            st = stat_fn(dir_remove_slash_at_end(self.filepath))
        except (OSError, ValueError):
            return
        self.modification_time = st.st_mtime_ns
        self.size = st.st_size
        self.owner_id = st.st_uid
        self.group_id = st.st_gid
        self.permissions = st.st_mode
        self.inode = st.st_ino

    def refresh(self) -> None:
        """Reload the status, following symbolic links."""
        self._load(os.stat)

    def refresh_link(self) -> None:
        """Reload the status of the path itself, without following links."""
        self._load(os.lstat)

    def exists(self) -> bool:
        """Return whether the path currently exists."""
        try:
            os.stat(dir_remove_slash_at_end(self.filepath))
        except (OSError, ValueError):
            return False
        return True

    def is_directory(self) -> bool:
        return stat.S_ISDIR(self.permissions)

    def is_regular_file(self) -> bool:
        return stat.S_ISREG(self.permissions)

    def is_readable(self) -> bool:
        """Return whether the owner may read the path (always true for root)."""
        return _IS_ROOT or bool(self.permissions & stat.S_IRUSR)

    def is_link(self) -> bool:
        return os.name != "nt" and stat.S_ISLNK(self.permissions)

    def links_to(self) -> str:
        """Return the resolved target of a symbolic link, or an empty string."""
        if os.name != "nt" and self.is_link():
            try:
                return os.path.realpath(self.filepath, strict=True)
            except OSError:
                return ""
        return ""

    def same_inode(self, other: FileInfo) -> bool:
        return self.inode_supported() and self.inode == other.inode


def files_info_from_path(path: str) -> dict[str, FileInfo]:
    """Return the entries of directory ``path`` by name, in name order.

    An unreadable or missing directory gives an empty mapping.
    """
    path = dir_add_slash_at_end(path)
    try:
        with os.scandir(path) as entries:
            names = sorted(entry.name for entry in entries)
    except OSError:
        return {}
    return {name: FileInfo.from_path(path + name) for name in names}


def get_link_real_path(path: str) -> tuple[str, str] | None:
    """If ``path`` is a symbolic link, return its target and the directory holding it.

    Both returned paths end with the separator. ``None`` means not a link.
    """
    path = dir_remove_slash_at_end(path)
    info = FileInfo.from_path(path, True)
    if info.is_link():
        link = dir_add_slash_at_end(info.links_to())
        return link, path_remove_file_name(path)
    return None