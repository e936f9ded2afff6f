# dirpoll

`dirpoll` watches directories by taking snapshots of them and comparing each new snapshot
with the previous one. It reports files and directories that were added, modified, deleted
or moved. Where the platform has inode numbers, a new name that has the inode of a name that
disappeared is reported as a move. It uses only the standard library.

## Installation

```
pip install dirpoll
```

## Usage

Subclass `dirpoll.watcher.FileWatchListener` and implement `handle_file_action`. Then
register one or more directories with a `dirpoll.filewatcher.FileWatcher`:

```python
from dirpoll.filewatcher import FileWatcher
from dirpoll.watcher import Action, FileWatchListener


class Printer(FileWatchListener):
    def handle_file_action(self, watch_id, directory, filename, action, old_filename=""):
        if action is Action.MOVED:
            print(f"{directory}{old_filename} -> {filename}")
        else:
            print(action.name, directory + filename)


with FileWatcher() as watcher:
    watch_id = watcher.add_watch("/tmp/inbox", Printer(), recursive=True)
    watcher.watch()   # starts a background thread that polls about once a second
    ...
```

The listener receives the watch id, the directory that holds the changed entry (ending with
the path separator), the entry's name, an `Action` (`ADD`, `DELETE`, `MODIFIED` or `MOVED`)
and, for moves, the old name.

Watches are not recursive unless `recursive=True` is passed. A recursive watch also follows
subdirectories created later.

`watch()` runs the polling loop in a daemon thread. Calling it again does nothing. To run
the checks yourself, for example in tests or in your own loop, call `poll()`. It makes one
scan pass over every watch in the calling thread:

```python
watcher = FileWatcher()
watcher.add_watch("/tmp/inbox", Printer())
watcher.poll()
watcher.close()
```

Other calls:

- `watcher.directories()` returns the directories being watched.
- `watcher.remove_watch(target)` stops a watch. `target` is the watch id or the directory
  path as it appears in `directories()`. Unknown targets are ignored.
- `watcher.close()` stops the background thread and releases every watch. Leaving a `with`
  block calls it.
- `watcher.backend` is the `dirpoll.backend.GenericBackend` that does the work.

The snapshot machinery can also be used on its own. `dirpoll.snapshot.DirectorySnapshot`
records the regular files and directories directly inside one directory. Its `scan()`
method returns a `SnapshotDiff` with the created, modified, deleted and moved entries.

## Errors

`add_watch` raises `dirpoll.errors.WatchError` when a directory cannot be watched. The
error's `code` is an `ErrorCode`:

- `FILE_NOT_FOUND`: the path is missing or is not a directory;
- `FILE_NOT_READABLE`: the directory cannot be read;
- `FILE_REPEATED`: the directory, or the target of a link to it, is already watched;
- `FILE_OUT_OF_SCOPE`: the path is a symbolic link to a place outside the permitted scope.

`dirpoll.errors.last_error()` returns the message of the most recent error.

## Symbolic links

Subdirectories that are symbolic links are skipped by default. Set
`watcher.follow_symlinks = True` to descend into them when their target lies inside the
directory that holds the link. To follow links that point anywhere, also set
`watcher.allow_out_of_scope_links = True`.

## What it does not do

- Every change is found by rescanning. The package does not use any operating-system change
  notification service, so a change is seen only on the next pass. The
  `FileWatcher(use_generic=...)` argument is accepted but changes nothing.
- There is no command-line program; the package is a library only.