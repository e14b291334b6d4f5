"""Reading and writing small text files."""

from __future__ import annotations

import contextlib
import errno
import logging
import os

log = logging.getLogger(__name__)

_ALLPERMS = 0o7777


def _read_open_file(handle, name: str, limit_kib: int) -> str:
    size = os.fstat(handle.fileno()).st_size
    if size > limit_kib * 1024:
        log.error("File [%s] is bigger than %uKiB!", name, limit_kib)
        raise OSError(errno.ERANGE, f"File is bigger than {limit_kib}KiB", name)
    data = handle.read(size)
    if len(data) != size:
        raise OSError(errno.EIO, "Short read", name)
    return data.decode("utf-8")


def read_text(path: str | os.PathLike, limit_kib: int) -> str:
    """Return the content of ``path``.

    Raises OSError with errno ERANGE if the file exceeds ``limit_kib`` KiB.
    """
    with open(path, "rb") as handle:
        return _read_open_file(handle, os.fspath(path), limit_kib)


def read_text_in(
    directory: str | os.PathLike | int, filename: str, limit_kib: int
) -> str:
    """Return the content of ``filename`` inside ``directory``.

    ``directory`` is either a path or an open directory descriptor.
    """
    if isinstance(directory, int):
        fd = os.open(filename, os.O_RDONLY, dir_fd=directory)
    else:
        fd = os.open(os.path.join(directory, filename), os.O_RDONLY)
    with os.fdopen(fd, "rb") as handle:
        return _read_open_file(handle, filename, limit_kib)


def write_text(path: str | os.PathLike, content: str | None, mode: int) -> None:
    """Write ``content`` to ``path`` and set its mode to ``mode``.

    The file is created or truncated. On failure it is removed.
    """
    if path is None or os.fspath(path) == "":
        raise ValueError("File path must not be empty")

    if content is None:
        content = ""

    old_mask = os.umask(~mode & _ALLPERMS)
    try:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fchmod(handle.fileno(), mode)
    except OSError as exc:
        log.error("Unable to write file [%s]: %s", path, exc)
        with contextlib.suppress(OSError):
            os.unlink(path)
        raise
    finally:
        os.umask(old_mask)