import itertools
import os
import shutil
from types import SimpleNamespace

from dirpoll.dirwatcher import DirWatcherGeneric
from dirpoll.filesystem import dir_add_slash_at_end
from dirpoll.watcher import Action, FileWatchListener

_stamps = itertools.count(1)


def bump(path):
    value = 1_000_000_000 * (1_500_000_000 + next(_stamps))
    os.utime(path, ns=(value, value))


class Recorder(FileWatchListener):
    def __init__(self):
        self.events = []

    def handle_file_action(self, watch_id, directory, filename, action, old_filename=""):
        self.events.append((watch_id, directory, filename, action, old_filename))


class FakeImpl:
    def __init__(self, out_of_scope=False):
        self.file_watcher = SimpleNamespace(
            follow_symlinks=False, allow_out_of_scope_links=out_of_scope
        )

    def path_in_watches(self, path):
        return False

    def link_allowed(self, cur_path, link):
        return False


class FakeWatch:
    def __init__(self, directory, listener, impl):
        self.id = 7
        self.directory = directory
        self.listener = listener
        self.impl = impl

    def path_in_watches(self, path):
        return False


def make(tmp_path, recursive=True, report=False, out_of_scope=False):
    root = dir_add_slash_at_end(str(tmp_path))
    rec = Recorder()
    watch = FakeWatch(root, rec, FakeImpl(out_of_scope))
    dw = DirWatcherGeneric(None, watch, root, recursive, report)
    dw.add_childs(False)
    return root, rec, dw


def test_report_new_files_on_creation(tmp_path):
    (tmp_path / "a.txt").write_text("x")
    root, rec, _ = make(tmp_path, report=True)
    assert (7, root, "a.txt", Action.ADD, "") in rec.events


def test_existing_files_not_reported_by_default(tmp_path):
    (tmp_path / "a.txt").write_text("x")
    _, rec, _ = make(tmp_path)
    assert rec.events == []


def test_created_file_reported(tmp_path):
    root, rec, dw = make(tmp_path)
    (tmp_path / "new.txt").write_text("x")
    dw.watch()
    assert rec.events == [(7, root, "new.txt", Action.ADD, "")]


def test_modified_file_reported(tmp_path):
    (tmp_path / "m.txt").write_text("a")
    root, rec, dw = make(tmp_path)
    (tmp_path / "m.txt").write_text("abc")
    dw.watch()
    assert (7, root, "m.txt", Action.MODIFIED, "") in rec.events


def test_deleted_file_reported(tmp_path):
    (tmp_path / "d.txt").write_text("a")
    root, rec, dw = make(tmp_path)
    os.remove(tmp_path / "d.txt")
    bump(tmp_path)
    dw.watch()
    assert (7, root, "d.txt", Action.DELETE, "") in rec.events
    assert "d.txt" not in dw.dir_snap.files


def test_moved_file_reported(tmp_path):
    (tmp_path / "old.txt").write_text("a")
    root, rec, dw = make(tmp_path)
    os.rename(tmp_path / "old.txt", tmp_path / "renamed.txt")
    bump(tmp_path)
    dw.watch()
    assert (7, root, "renamed.txt", Action.MOVED, "old.txt") in rec.events
    assert not any(e[3] == Action.DELETE for e in rec.events)


def test_recursive_children_and_lookup(tmp_path):
    (tmp_path / "sub").mkdir()
    root, _, dw = make(tmp_path)
    assert list(dw.directories) == ["sub"]
    child = dw.directories["sub"]
    assert child.path == root + "sub/"
    assert dw.path_in_watches(root + "sub/")
    assert not dw.path_in_watches(root + "other/")
    assert dw.find_dir_watcher(root + "sub/") is child
    assert dw.find_dir_watcher(root) is dw
    assert dw.find_dir_watcher(root + "missing/") is None
    assert dw.find_dir_watcher_fast(root + "sub/") is child
    assert dw.find_dir_watcher_fast(root) is dw
    assert dw.find_dir_watcher_fast(root + "missing/") is None


def test_non_recursive_has_no_children(tmp_path):
    (tmp_path / "sub").mkdir()
    _, _, dw = make(tmp_path, recursive=False)
    assert dw.directories == {}


def test_created_directory_is_watched(tmp_path):
    root, rec, dw = make(tmp_path)
    (tmp_path / "fresh").mkdir()
    dw.watch()
    assert (7, root, "fresh", Action.ADD, "") in rec.events
    assert dw.directories["fresh"].path == root + "fresh/"
    (tmp_path / "fresh" / "inner.txt").write_text("x")
    dw.watch()
    assert (7, root + "fresh/", "inner.txt", Action.ADD, "") in rec.events


def test_deleted_directory_reports_contents(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "f.txt").write_text("x")
    root, rec, dw = make(tmp_path)
    shutil.rmtree(tmp_path / "sub")
    bump(tmp_path)
    dw.watch()
    assert (7, root, "sub", Action.DELETE, "") in rec.events
    assert (7, root + "sub/", "f.txt", Action.DELETE, "") in rec.events
    assert dw.directories == {}


def test_moved_directory_rekeyed(tmp_path):
    (tmp_path / "sub").mkdir()
    root, rec, dw = make(tmp_path)
    os.rename(tmp_path / "sub", tmp_path / "sub2")
    bump(tmp_path)
    dw.watch()
    assert (7, root, "sub2", Action.MOVED, "sub") in rec.events
    assert list(dw.directories) == ["sub2"]
    assert dw.directories["sub2"].path == root + "sub2/"


def test_watch_dir_reports_own_change(tmp_path):
    (tmp_path / "sub").mkdir()
    root, rec, dw = make(tmp_path)
    (tmp_path / "sub" / "n.txt").write_text("x")
    bump(tmp_path / "sub")
    dw.watch_dir(root + "sub/")
    assert (7, root + "sub/", "n.txt", Action.ADD, "") in rec.events
    assert (7, root, "sub", Action.MODIFIED, "") in rec.events


def test_watch_dir_out_of_scope_search(tmp_path):
    (tmp_path / "sub").mkdir()
    root, rec, dw = make(tmp_path, out_of_scope=True)
    (tmp_path / "sub" / "q.txt").write_text("x")
    dw.watch_dir(root + "sub/")
    assert (7, root + "sub/", "q.txt", Action.ADD, "") in rec.events


def test_close_clears_children(tmp_path):
    (tmp_path / "sub").mkdir()
    _, rec, dw = make(tmp_path)
    dw.close()
    assert dw.directories == {}
    assert rec.events == []