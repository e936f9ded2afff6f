"""Watch backends: the common base and the polling implementation."""

from __future__ import annotations

import abc
import threading
from typing import Any

from dirpoll.errors import ErrorCode, create_error
from dirpoll.fileinfo import FileInfo, get_link_real_path
from dirpoll.filesystem import dir_add_slash_at_end
from dirpoll.strings import str_starts_with
from dirpoll.watcher import FileWatchListener
from dirpoll.watchergeneric import WatcherGeneric

_POLL_INTERVAL = 1.0


class WatcherBackend(abc.ABC):
    """Base of the backends that a file watcher drives.

    ``file_watcher`` supplies the ``follow_symlinks`` and
    ``allow_out_of_scope_links`` settings.
    """

    def __init__(self, file_watcher: Any) -> None:
        self.file_watcher = file_watcher
        self.init_ok = False
        self.is_generic = False

    @abc.abstractmethod
    def add_watch(self, directory: str, listener: FileWatchListener, recursive: bool) -> int:
        """Watch ``directory`` and return the new watch id; raises WatchError."""

    @abc.abstractmethod
    def remove_watch(self, target: int | str) -> None:
        """Stop a watch given by id or by directory."""

    @abc.abstractmethod
    def watch(self) -> None:
        """Start watching in the background."""

    @abc.abstractmethod
    def directories(self) -> list[str]:
        """Return the watched directories."""

    @abc.abstractmethod
    def path_in_watches(self, path: str) -> bool:
        """Return whether ``path`` is already watched."""

    @abc.abstractmethod
    def close(self) -> None:
        """Stop watching and release every watch."""

    def link_allowed(self, cur_path: str, link: str) -> bool:
        """Return whether a symlink from ``cur_path`` to ``link`` may be followed."""
        fw = self.file_watcher
        if fw.follow_symlinks and fw.allow_out_of_scope_links:
            return True
        return str_starts_with(cur_path, link) != -1


class GenericBackend(WatcherBackend):
    """Watches directories by rescanning them about once a second."""

    def __init__(self, file_watcher: Any) -> None:
        super().__init__(file_watcher)
        self.init_ok = True
        self.is_generic = True
        self._watches: list[WatcherGeneric] = []
        self._lock = threading.RLock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._last_id = 0

    def add_watch(
        self, directory: str, listener: FileWatchListener, recursive: bool = False
    ) -> int:
        path = dir_add_slash_at_end(directory)
        with self._lock:
            info = FileInfo.from_path(path)
            if not info.is_directory():
                raise create_error(ErrorCode.FILE_NOT_FOUND, path)
            if not info.is_readable():
                raise create_error(ErrorCode.FILE_NOT_READABLE, path)
            if self.path_in_watches(path):
                raise create_error(ErrorCode.FILE_REPEATED, path)

            resolved = get_link_real_path(path)
            if resolved is not None:
                link, cur_path = resolved
                if self.path_in_watches(link):
                    raise create_error(ErrorCode.FILE_REPEATED, path)
                if not self.link_allowed(cur_path, link):
                    raise create_error(ErrorCode.FILE_OUT_OF_SCOPE, path)
                path = link

            self._last_id += 1
            watcher = WatcherGeneric(self._last_id, path, listener, self, recursive)
            self._watches.append(watcher)
            return watcher.id

    def remove_watch(self, target: int | str) -> None:
        with self._lock:
            for watcher in self._watches:
                key = watcher.directory if isinstance(target, str) else watcher.id
                if key == target:
                    self._watches.remove(watcher)
                    watcher.close()
                    return

    def watch(self) -> None:
        if self._thread is None:
            self._thread = threading.Thread(target=self._run, name="dirpoll", daemon=True)
            self._thread.start()

    def _run(self) -> None:
        while True:
            self.poll()
            if not self.init_ok or self._stop.wait(_POLL_INTERVAL):
                break

    def poll(self) -> None:
        """Scan every watch once in the calling thread."""
        with self._lock:
            for watcher in list(self._watches):
                watcher.watch()

    def directories(self) -> list[str]:
        with self._lock:
            return [watcher.directory for watcher in self._watches]

    def path_in_watches(self, path: str) -> bool:
        with self._lock:
            return any(
                watcher.directory == path or watcher.path_in_watches(path)
                for watcher in self._watches
            )

    def close(self) -> None:
        self.init_ok = False
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        with self._lock:
            for watcher in self._watches:
                watcher.close()
            self._watches.clear()