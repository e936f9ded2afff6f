"""Polling watcher for one directory and, recursively, its subdirectories."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dirpoll.fileinfo import FileInfo, get_link_real_path
from dirpoll.filesystem import (
    dir_add_slash_at_end,
    file_name_from_path,
    os_slash,
    path_remove_file_name,
)
from dirpoll.snapshot import DirectorySnapshot
from dirpoll.strings import split
from dirpoll.watcher import Action

if TYPE_CHECKING:
    from dirpoll.watchergeneric import WatcherGeneric


class DirWatcherGeneric:
    """Keeps a snapshot of one directory and reports what changed in it."""

    def __init__(
        self,
        parent: DirWatcherGeneric | None,
        watch: WatcherGeneric,
        directory: str,
        recursive: bool,
        report_new_files: bool = False,
    ) -> None:
        self.parent = parent
        self.watcher = watch
        self.recursive = recursive
        self.dir_snap = DirectorySnapshot()
        self.directories: dict[str, DirWatcherGeneric] = {}
        self._deleted = False

        self._reset_directory(directory)

        diff = self.dir_snap.scan()
        if report_new_files and diff.changed():
            for info in diff.files_created:
                self._handle_action(info.filepath, Action.ADD)

    @property
    def path(self) -> str:
        """The directory this watcher looks at."""
        return self.dir_snap.directory_info.filepath

    def _reset_directory(self, directory: str) -> None:
        target = directory
        if self.watcher.directory != directory:
            slash = os_slash()
            absolute_or_dir = bool(directory) and (
                directory.startswith(slash) or directory.endswith(slash)
            )
            if not absolute_or_dir and self.parent is not None:
                target = self.parent.path + dir_add_slash_at_end(directory)
        self.dir_snap.set_directory_info(target)

    def _handle_action(self, filename: str, action: Action, old_filename: str = "") -> None:
        listener = self.watcher.listener
        if listener is None:
            return
        listener.handle_file_action(
            self.watcher.id,
            self.path,
            file_name_from_path(filename),
            action,
            old_filename,
        )

    def _resolve_subdir(self, path: str, plain: str) -> str | None:
        """Return the directory to watch for ``path``, or None when it must be skipped."""
        impl = self.watcher.impl
        resolved = get_link_real_path(path)
        if resolved is not None:
            link, cur_path = resolved
            if not impl.file_watcher.follow_symlinks:
                return None
            if (
                impl.path_in_watches(link)
                or self.watcher.path_in_watches(link)
                or not impl.link_allowed(cur_path, link)
            ):
                return None
            return link
        if self.watcher.path_in_watches(plain) or impl.path_in_watches(plain):
            return None
        return plain

    def add_childs(self, report_new_files: bool = True) -> None:
        """Create watchers for the subdirectories, when recursive."""
        if not self.recursive:
            return
        for name, info in sorted(self.dir_snap.files.items()):
            if not (info.is_directory() and info.is_readable()):
                continue
            target = self._resolve_subdir(info.filepath, name)
            if target is None:
                continue
            if report_new_files:
                self._handle_action(target, Action.ADD)
            child = DirWatcherGeneric(self, self.watcher, target, self.recursive, report_new_files)
            self.directories[target] = child
            child.add_childs(report_new_files)

    def watch(self, report_own_change: bool = False) -> None:
        """Scan this directory and its subdirectories, reporting every change."""
        diff = self.dir_snap.scan()

        if report_own_change and diff.dir_changed and self.parent is not None:
            listener = self.watcher.listener
            if listener is not None:
                listener.handle_file_action(
                    self.watcher.id,
                    path_remove_file_name(self.path),
                    file_name_from_path(self.path),
                    Action.MODIFIED,
                )

        if diff.changed():
            for info in diff.files_created:
                self._handle_action(info.filepath, Action.ADD)
            for info in diff.files_modified:
                self._handle_action(info.filepath, Action.MODIFIED)
            for info in diff.files_deleted:
                self._handle_action(info.filepath, Action.DELETE)
            for old_name, info in diff.files_moved:
                self._handle_action(info.filepath, Action.MOVED, old_name)

            for info in diff.dirs_created:
                self._create_directory(info.filepath)
            for info in diff.dirs_modified:
                self._handle_action(info.filepath, Action.MODIFIED)
            for info in diff.dirs_deleted:
                self._handle_action(info.filepath, Action.DELETE)
                self._remove_directory(info.filepath)
            for old_name, info in diff.dirs_moved:
                self._handle_action(info.filepath, Action.MOVED, old_name)
                self._move_directory(old_name, info.filepath)

        for child in list(self.directories.values()):
            child.watch()

    def watch_dir(self, directory: str) -> None:
        """Scan only the watcher responsible for ``directory``, if there is one."""
        if self.watcher.impl.file_watcher.allow_out_of_scope_links:
            found = self.find_dir_watcher(directory)
        else:
            found = self.find_dir_watcher_fast(directory)
        if found is not None:
            found.watch(True)

    def find_dir_watcher_fast(self, directory: str) -> DirWatcherGeneric | None:
        """Find the watcher of ``directory`` by walking its components below this one."""
        base = self.path
        if base and len(directory) >= len(base):
            directory = directory[len(base) - 1:]
        if len(directory) == 1:
            return self
        current: DirWatcherGeneric | None = self
        for part in split(directory, os_slash(), False):
            current = current.directories.get(part)
            if current is None:
                return None
        return current

    def find_dir_watcher(self, directory: str) -> DirWatcherGeneric | None:
        """Find the watcher whose path equals ``directory`` by searching the whole tree."""
        if self.path == directory:
            return self
        for child in self.directories.values():
            found = child.find_dir_watcher(directory)
            if found is not None:
                return found
        return None

    def _create_directory(self, newdir: str) -> DirWatcherGeneric | None:
        name = file_name_from_path(newdir)
        path = dir_add_slash_at_end(self.path + name)
        info = FileInfo.from_path(path)
        if not info.is_directory() or not info.is_readable():
            return None
        target = self._resolve_subdir(path, path)
        if target is None:
            return None

        self._handle_action(name, Action.ADD)
        child = DirWatcherGeneric(self, self.watcher, target, self.recursive)
        child.add_childs()
        child.watch()
        self.directories[name] = child
        return child

    def _remove_directory(self, directory: str) -> None:
        child = self.directories.pop(file_name_from_path(directory), None)
        if child is not None:
            child._deleted = True
            child.close()

    def _move_directory(self, old_dir: str, new_dir: str) -> None:
        old_name = file_name_from_path(old_dir)
        new_name = file_name_from_path(new_dir)
        child = self.directories.pop(old_name, None)
        if child is not None:
            self.directories[new_name] = child
            child._reset_directory(new_name)

    def path_in_watches(self, path: str) -> bool:
        """Return whether ``path`` is this directory or one watched below it."""
        if self.path == path:
            return True
        return any(child.path_in_watches(path) for child in self.directories.values())

    def close(self) -> None:
        """Release the subdirectory watchers; a deleted directory reports its lost entries."""
        if self._deleted:
            diff = self.dir_snap.scan()
            if not self.dir_snap.exists():
                for info in diff.files_deleted:
                    self._handle_action(info.filepath, Action.DELETE)
                for info in diff.dirs_deleted:
                    self._handle_action(info.filepath, Action.DELETE)
        for child in self.directories.values():
            if self._deleted:
                child._deleted = True
            child.close()
        self.directories.clear()