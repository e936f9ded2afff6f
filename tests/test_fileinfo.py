import os

from dirpoll.fileinfo import FileInfo, files_info_from_path, get_link_real_path


def test_regular_file_info(tmp_path):
    target = tmp_path / "data.bin"
    target.write_bytes(b"abcdef")
    info = FileInfo.from_path(str(target))
    assert info.is_regular_file()
    assert not info.is_directory()
    assert info.size == len(b"abcdef")
    assert info.filepath == str(target)


def test_directory_info_keeps_trailing_slash(tmp_path):
    path = str(tmp_path) + os.sep
    info = FileInfo.from_path(path)
    assert info.is_directory()
    assert info.filepath == path
    assert info.exists()


def test_equality_ignores_path(tmp_path):
    with_slash = FileInfo.from_path(str(tmp_path) + os.sep)
    without = FileInfo.from_path(str(tmp_path))
    assert with_slash == without
    assert with_slash.same_inode(without)


def test_default_records_are_equal():
    assert FileInfo() == FileInfo()
    assert FileInfo().size == 0


def test_missing_path(tmp_path):
    missing = str(tmp_path / "nope")
    info = FileInfo.from_path(missing)
    assert not info.exists()
    assert not FileInfo.path_exists(missing)
    assert info == FileInfo()


def test_refresh_sees_growth(tmp_path):
    target = tmp_path / "f.txt"
    target.write_text("a")
    info = FileInfo.from_path(str(target))
    before = FileInfo.from_path(str(target))
    target.write_text("abc")
    info.refresh()
    assert info.size == 3
    assert info != before


def test_readable(tmp_path):
    target = tmp_path / "r.txt"
    target.write_text("x")
    os.chmod(target, 0o644)
    assert FileInfo.from_path(str(target)).is_readable()


def test_symlink_detection(tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "alias"
    os.symlink(real, link)
    assert FileInfo.path_is_link(str(link))
    assert not FileInfo.path_is_link(str(real))
    assert FileInfo.from_path(str(link)).is_directory()
    assert FileInfo.from_path(str(link), True).links_to() == os.path.realpath(real)
    assert FileInfo.from_path(str(real), True).links_to() == ""


def test_get_link_real_path(tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "alias"
    os.symlink(real, link)
    result = get_link_real_path(str(link) + os.sep)
    assert result == (os.path.realpath(real) + os.sep, str(tmp_path) + os.sep)
    assert get_link_real_path(str(real)) is None


def test_files_info_from_path(tmp_path):
    (tmp_path / "b").write_text("1")
    (tmp_path / "a").write_text("22")
    (tmp_path / "sub").mkdir()
    infos = files_info_from_path(str(tmp_path))
    assert list(infos) == ["a", "b", "sub"]
    assert infos["a"].filepath == str(tmp_path) + os.sep + "a"
    assert infos["a"].size == 2
    assert infos["sub"].is_directory()


def test_files_info_from_missing_directory(tmp_path):
    assert files_info_from_path(str(tmp_path / "missing")) == {}


def test_inode_supported_matches_platform():
    assert FileInfo.inode_supported() == (os.name != "nt")