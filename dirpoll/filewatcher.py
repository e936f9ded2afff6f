"""The public entry point: a file watcher that drives a polling backend."""

from __future__ import annotations

from dirpoll.backend import GenericBackend, WatcherBackend
from dirpoll.watcher import FileWatchListener


class FileWatcher:
    """Watches directories and reports their changes to listeners.

    Only the polling backend is available, so ``use_generic`` makes no
    difference to how directories are watched.

    ``follow_symlinks`` lets symbolic links to directories be watched.
    ``allow_out_of_scope_links`` additionally lets such links point outside
    the watched tree.
    """

    def __init__(self, use_generic: bool = False) -> None:
        self.follow_symlinks = False
        self.allow_out_of_scope_links = False
        self.use_generic = use_generic
        self._impl: WatcherBackend = GenericBackend(self)

    @property
    def backend(self) -> WatcherBackend:
        """The backend doing the watching."""
        return self._impl

    def add_watch(
        self, directory: str, listener: FileWatchListener, recursive: bool = False
    ) -> int:
        """Watch ``directory`` and return the watch id.

        Raises WatchError when the directory is missing, unreadable,
        already watched or a link out of scope.
        """
        return self._impl.add_watch(directory, listener, recursive)

    def remove_watch(self, target: int | str) -> None:
        """Stop the watch given by id or by directory; unknown targets are ignored."""
        self._impl.remove_watch(target)

    def watch(self) -> None:
        """Start polling in a background thread; further calls do nothing."""
        self._impl.watch()

    def poll(self) -> None:
        """Scan every watch once in the calling thread."""
        self._impl.poll()

    def directories(self) -> list[str]:
        """Return the watched directories."""
        return self._impl.directories()

    def close(self) -> None:
        """Stop the background thread and release every watch."""
        self._impl.close()

    def __enter__(self) -> FileWatcher:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()