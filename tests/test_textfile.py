import errno
import os
import stat

import pytest

from authselect.textfile import read_text, read_text_in, write_text


def test_write_read_round_trip(tmp_path):
    path = tmp_path / "file.txt"
    content = "line one\nline two\r\n"
    write_text(path, content, 0o644)
    assert read_text(path, 4) == content


def test_write_sets_mode(tmp_path):
    path = tmp_path / "file.txt"
    write_text(path, "data", 0o600)
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600


def test_write_truncates_existing(tmp_path):
    path = tmp_path / "file.txt"
    write_text(path, "a much longer original content", 0o644)
    write_text(path, "short", 0o644)
    assert read_text(path, 4) == "short"


def test_write_none_creates_empty_file(tmp_path):
    path = tmp_path / "empty"
    write_text(path, None, 0o644)
    assert read_text(path, 4) == ""


def test_write_empty_path_rejected():
    with pytest.raises(ValueError):
        write_text("", "data", 0o644)


def test_write_to_directory_fails_and_leaves_directory(tmp_path):
    target = tmp_path / "dir"
    target.mkdir()
    with pytest.raises(IsADirectoryError):
        write_text(target, "data", 0o644)
    assert target.is_dir()


def test_read_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_text(tmp_path / "missing", 4)


def test_read_over_limit_raises_erange(tmp_path):
    path = tmp_path / "big"
    path.write_bytes(b"x" * (1024 + 1))
    with pytest.raises(OSError) as info:
        read_text(path, 1)
    assert info.value.errno == errno.ERANGE


def test_read_exactly_at_limit(tmp_path):
    path = tmp_path / "fits"
    data = "y" * 1024
    path.write_text(data)
    assert read_text(path, 1) == data


def test_read_in_directory_path(tmp_path):
    (tmp_path / "README").write_text("Name\nDescription\n")
    assert read_text_in(tmp_path, "README", 4) == "Name\nDescription\n"


def test_read_in_directory_descriptor(tmp_path):
    (tmp_path / "REQUIREMENTS").write_text("needs things")
    fd = os.open(tmp_path, os.O_RDONLY)
    try:
        assert read_text_in(fd, "REQUIREMENTS", 4) == "needs things"
    finally:
        os.close(fd)


def test_read_in_over_limit(tmp_path):
    (tmp_path / "big").write_bytes(b"z" * 2049)
    with pytest.raises(OSError) as info:
        read_text_in(tmp_path, "big", 2)
    assert info.value.errno == errno.ERANGE


def test_read_in_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_text_in(tmp_path, "nothing", 4)