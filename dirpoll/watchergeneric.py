"""A watch backed by polling directory snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dirpoll.dirwatcher import DirWatcherGeneric
from dirpoll.filesystem import dir_add_slash_at_end
from dirpoll.watcher import FileWatchListener, Watcher

if TYPE_CHECKING:
    from dirpoll.backend import WatcherBackend


class WatcherGeneric(Watcher):
    """A watch whose directory tree is polled for changes."""

    def __init__(
        self,
        watch_id: int,
        directory: str,
        listener: FileWatchListener | None,
        impl: WatcherBackend,
        recursive: bool,
    ) -> None:
        super().__init__(watch_id, dir_add_slash_at_end(directory), listener, recursive)
        self.impl = impl
        self.dir_watch: DirWatcherGeneric | None = None
        self.dir_watch = DirWatcherGeneric(None, self, directory, recursive, False)
        self.dir_watch.add_childs(False)

    def watch(self) -> None:
        """Poll the whole tree once."""
        if self.dir_watch is not None:
            self.dir_watch.watch()

    def watch_dir(self, directory: str) -> None:
        """Poll only the watcher responsible for ``directory``."""
        if self.dir_watch is not None:
            self.dir_watch.watch_dir(directory)

    def path_in_watches(self, path: str) -> bool:
        """Return whether ``path`` is watched by this tree."""
        return self.dir_watch is not None and self.dir_watch.path_in_watches(path)

    def close(self) -> None:
        """Release the directory watchers."""
        if self.dir_watch is not None:
            self.dir_watch.close()
            self.dir_watch = None