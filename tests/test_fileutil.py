import os

import pytest

from authselect import fileutil


@pytest.fixture
def regular(tmp_path):
    path = tmp_path / "file"
    path.write_text("content\n")
    os.chmod(path, 0o644)
    return path


def test_is_regular_matching_mode(regular):
    assert fileutil.is_regular(regular, -1, -1, 0o644) is True


def test_is_regular_wrong_mode(regular):
    assert fileutil.is_regular(regular, -1, -1, 0o600) is False


def test_is_regular_owner(regular):
    assert fileutil.is_regular(regular, os.getuid(), os.getgid(), 0o644) is True
    assert fileutil.is_regular(regular, os.getuid() + 1, -1, 0o644) is False
    assert fileutil.is_regular(regular, -1, os.getgid() + 1, 0o644) is False


def test_is_regular_directory_and_missing(tmp_path):
    assert fileutil.is_regular(tmp_path, -1, -1, 0o755) is False
    assert fileutil.is_regular(tmp_path / "missing", -1, -1, 0o644) is False


def test_links_to(tmp_path, regular):
    link = tmp_path / "link"
    os.symlink(str(regular), link)
    assert fileutil.links_to(link, str(regular)) is True
    assert fileutil.links_to(link, str(tmp_path / "other")) is False


def test_links_to_not_a_link(regular):
    assert fileutil.links_to(regular, str(regular)) is False


def test_does_not_link_to(tmp_path, regular):
    link = tmp_path / "link"
    os.symlink(str(regular), link)
    assert fileutil.does_not_link_to(link, str(regular), True) is False
    assert fileutil.does_not_link_to(link, str(tmp_path / "other"), False) is True
    assert fileutil.does_not_link_to(regular, str(regular), False) is True
    assert fileutil.does_not_link_to(tmp_path / "missing", str(regular), False) is True


def test_check_access(tmp_path, regular):
    assert fileutil.check_access(regular, os.R_OK) is True
    with pytest.raises(FileNotFoundError):
        fileutil.check_access(tmp_path / "missing", os.F_OK)


def test_exists(tmp_path, regular):
    assert fileutil.exists(regular) is True
    assert fileutil.exists(tmp_path / "missing") is False


@pytest.mark.parametrize(
    "path, expected",
    [
        ("dir/name", "name"),
        ("name", "name"),
        ("dir/", None),
        ("/", None),
        (None, None),
    ],
)
def test_get_basename(path, expected):
    assert fileutil.get_basename(path) == expected


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/usr/lib", "/usr"),
        ("/usr/lib/", "/usr"),
        ("name", "."),
        ("/name", "/"),
        ("/", "/"),
    ],
)
def test_get_parent_directory(path, expected):
    assert fileutil.get_parent_directory(path) == expected


def test_make_path_creates_nested(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    fileutil.make_path(str(target), 0o755)
    assert target.is_dir()
    fileutil.make_path(str(target), 0o755)
    assert target.is_dir()


def test_mktmp_for(tmp_path):
    base = str(tmp_path / "target")
    tmp = fileutil.mktmp_for(base, 0o600)
    assert tmp.startswith(base + ".")
    assert len(tmp) == len(base) + 7
    assert os.path.isfile(tmp)
    assert os.stat(tmp).st_mode & 0o777 == 0o600


def test_mktmp_for_mode_limits_permissions(tmp_path):
    tmp = fileutil.mktmp_for(str(tmp_path / "target"), 0o400)
    assert os.stat(tmp).st_mode & 0o777 == 0o400


def test_mktmp_for_unique(tmp_path):
    base = str(tmp_path / "target")
    first = fileutil.mktmp_for(base, 0o600)
    second = fileutil.mktmp_for(base, 0o600)
    assert first != second


def test_copy_file_keeps_content_and_mode(tmp_path, regular):
    os.chmod(regular, 0o640)
    destdir = tmp_path / "out" / "nested"
    fileutil.copy_file(str(regular), str(destdir), "copy", 0o755)
    copied = destdir / "copy"
    assert copied.read_text() == regular.read_text()
    assert os.stat(copied).st_mode & 0o7777 == 0o640


def test_copy_file_missing_source(tmp_path):
    with pytest.raises(FileNotFoundError):
        fileutil.copy_file(str(tmp_path / "missing"), str(tmp_path), "x", 0o755)


def test_mktmp_copy(tmp_path, regular):
    destdir = tmp_path / "dest"
    tmp = fileutil.mktmp_copy(str(regular), str(destdir), "name", 0o755)
    assert tmp.startswith(f"{destdir}/name.")
    with open(tmp) as handle:
        assert handle.read() == regular.read_text()
    assert os.stat(tmp).st_mode & 0o777 == 0o644


def test_mktmp_copy_failure_leaves_nothing(tmp_path):
    destdir = tmp_path / "dest"
    with pytest.raises(FileNotFoundError):
        fileutil.mktmp_copy(str(tmp_path / "missing"), str(destdir), "name", 0o755)
    assert list(destdir.iterdir()) == []