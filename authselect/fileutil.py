"""File system helpers: attribute checks, temporary files and copies."""

from __future__ import annotations

import contextlib
import errno
import logging
import os
import secrets
import shutil
import stat
import string

log = logging.getLogger(__name__)

__all__ = [
    "is_regular",
    "links_to",
    "does_not_link_to",
    "check_access",
    "exists",
    "get_basename",
    "get_parent_directory",
    "make_path",
    "mktmp_for",
    "mktmp_copy",
    "copy_file",
]

_ALLPERMS = 0o7777
_ACCESSPERMS = 0o777
_TMP_CHARS = string.ascii_letters + string.digits
_TMP_ATTEMPTS = 100


def _check_type(st: os.stat_result, name: str, mode: int) -> bool:
    expected = stat.S_IFMT(mode)
    real = stat.S_IFMT(st.st_mode)
    if expected == real:
        return True

    if expected == stat.S_IFDIR:
        log.error("[%s] is not a directory!", name)
    elif expected == stat.S_IFREG:
        log.error("[%s] is not a regular file!", name)
    elif expected == stat.S_IFLNK:
        log.error("[%s] is not a symbolic link!", name)
    else:
        log.error(
            "[%s] has wrong type [%07o], expected [%07o]!", name, real, expected
        )
    return False


def _check_mode(st: os.stat_result, name: str, uid: int, gid: int, mode: int) -> bool:
    if not _check_type(st, name, mode):
        return False

    expected_perm = mode & _ALLPERMS
    real_perm = st.st_mode & _ALLPERMS
    if expected_perm != real_perm:
        log.error(
            "[%s] has wrong mode [%04o], expected [%04o]!",
            name, real_perm, expected_perm,
        )
        return False

    if uid != -1 and st.st_uid != uid:
        log.error("[%s] has wrong owner [%u], expected [%u]!", name, st.st_uid, uid)
        return False

    if gid != -1 and st.st_gid != gid:
        log.error("[%s] has wrong group [%u], expected [%u]!", name, st.st_gid, gid)
        return False

    return True


def _check_attributes(path: str, uid: int, gid: int, mode: int) -> bool:
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        log.error("[%s] does not exist!", path)
        return False
    except OSError as exc:
        log.error("Unable to stat [%s]: %s", path, exc)
        raise
    return _check_mode(st, path, uid, gid, mode)


def is_regular(path: str | os.PathLike, uid: int, gid: int, access_mode: int) -> bool:
    """Return True if ``path`` is a regular file with the given owner and mode.

    Use -1 for ``uid`` or ``gid`` to accept any owner or group.
    """
    return _check_attributes(os.fspath(path), uid, gid, stat.S_IFREG | access_mode)


def _link_matches(target: str, destpath: str) -> bool:
    # The link target is compared over its own length only.
    return destpath[: len(target)] == target


def links_to(linkpath: str | os.PathLike, destpath: str) -> bool:
    """Return True if ``linkpath`` is a symbolic link pointing to ``destpath``."""
    linkpath = os.fspath(linkpath)
    if not _check_attributes(linkpath, -1, -1, stat.S_IFLNK | _ACCESSPERMS):
        return False

    try:
        target = os.readlink(linkpath)
    except OSError as exc:
        log.error("Unable to read link destination [%s]: %s", linkpath, exc)
        raise

    if not _link_matches(target, destpath):
        log.error("Link [%s] does not point to [%s]", linkpath, destpath)
        return False
    return True


def does_not_link_to(
    linkpath: str | os.PathLike, destpath: str, error_mode: bool = False
) -> bool:
    """Return True if ``linkpath`` is not a symbolic link to ``destpath``."""
    linkpath = os.fspath(linkpath)
    try:
        st = os.lstat(linkpath)
    except FileNotFoundError:
        return True
    except OSError as exc:
        log.error("Unable to stat [%s]: %s", linkpath, exc)
        raise

    if not stat.S_ISLNK(st.st_mode):
        return True

    try:
        target = os.readlink(linkpath)
    except OSError as exc:
        log.error("Unable to read link destination [%s]: %s", linkpath, exc)
        raise

    if _link_matches(target, destpath):
        level = logging.ERROR if error_mode else logging.INFO
        log.log(level, "Link [%s] points to [%s]", linkpath, destpath)
        return False
    return True


def check_access(path: str | os.PathLike, mode: int) -> bool:
    """Return True if ``path`` is accessible with ``mode`` (os.R_OK etc.).

    Raises FileNotFoundError if the file is missing and PermissionError if
    it exists but cannot be accessed that way.
    """
    path = os.fspath(path)
    if os.access(path, mode):
        return True
    if not os.path.exists(path):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
    raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), path)


def exists(path: str | os.PathLike) -> bool:
    """Return True if ``path`` exists; errors other than a missing file raise."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    return True


def get_basename(path: str | None) -> str | None:
    """Return the last component of ``path``, or None if it ends with a slash."""
    if path is None:
        return None
    slash = path.rfind("/")
    if slash == -1:
        return path
    name = path[slash + 1 :]
    return name or None


def get_parent_directory(path: str) -> str:
    """Return the parent directory of ``path`` as POSIX dirname() does."""
    if path is None:
        raise ValueError("File path must not be None")

    stripped = path.rstrip("/")
    if not stripped:
        return "/" if path else "."
    slash = stripped.rfind("/")
    if slash == -1:
        return "."
    parent = stripped[:slash].rstrip("/")
    return parent or "/"


def make_path(path: str | os.PathLike, mode: int) -> None:
    """Create directory ``path`` and any missing parents with ``mode``."""
    path = os.fspath(path)
    if exists(path):
        return

    parent = get_parent_directory(path)
    if parent != path:
        make_path(parent, mode)

    os.mkdir(path, mode)


def mktmp_for(path: str | os.PathLike, mode: int) -> str:
    """Create an empty temporary file ``path.XXXXXX`` and return its path.

    The file is created with permissions 0600 limited by ``mode``.
    """
    path = os.fspath(path)
    old_mask = os.umask(~mode & _ALLPERMS)
    try:
        for _ in range(_TMP_ATTEMPTS):
            suffix = "".join(secrets.choice(_TMP_CHARS) for _ in range(6))
            candidate = f"{path}.{suffix}"
            try:
                fd = os.open(candidate, os.O_RDWR | os.O_CREAT | os.O_EXCL, 0o600)
            except FileExistsError:
                continue
            os.close(fd)
            return candidate
    finally:
        os.umask(old_mask)

    raise FileExistsError(
        errno.EEXIST, "Unable to create a unique temporary file", path
    )


def mktmp_copy(
    source: str | os.PathLike,
    destdir: str | os.PathLike,
    destname: str,
    dir_mode: int,
) -> str:
    """Copy ``source`` into a new temporary file ``destdir/destname.XXXXXX``.

    The owner and permissions of the source are kept. Returns the path of
    the temporary file; it is removed again if copying fails.
    """
    destdir = os.fspath(destdir)
    make_path(destdir, dir_mode)

    tmpfile = mktmp_for(f"{destdir}/{destname}", 0o600)
    try:
        tmpname = get_basename(tmpfile)
        if tmpname is None:
            raise ValueError(f"Invalid temporary file name [{tmpfile}]")
        copy_file(source, destdir, tmpname, dir_mode)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmpfile)
        raise

    return tmpfile


def copy_file(
    source: str | os.PathLike,
    destdir: str | os.PathLike,
    destname: str,
    dir_mode: int,
) -> None:
    """Copy ``source`` to ``destdir/destname`` keeping owner and permissions.

    ``destdir`` is created with ``dir_mode`` if it does not exist.
    """
    destdir = os.fspath(destdir)
    make_path(destdir, dir_mode)
    destpath = f"{destdir}/{destname}"

    old_mask = os.umask(0o177)
    try:
        with open(source, "rb") as fsource:
            st = os.fstat(fsource.fileno())
            fd = os.open(destpath, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o666)
            with os.fdopen(fd, "wb") as fdest:
                shutil.copyfileobj(fsource, fdest)
                fdest.flush()

                try:
                    os.fchmod(fdest.fileno(), st.st_mode & _ALLPERMS)
                except OSError as exc:
                    log.warning("Unable to chmod file [%s]: %s", destpath, exc)

                try:
                    os.fchown(fdest.fileno(), st.st_uid, st.st_gid)
                except OSError as exc:
                    log.warning("Unable to chown file [%s]: %s", destpath, exc)
    finally:
        os.umask(old_mask)