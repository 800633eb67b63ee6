"""Generic operations over any filesystem.

Each helper uses the filesystem's own implementation when it has the
matching capability, and otherwise either falls back to ``open()`` and
handle calls (read side) or raises a ``PathError`` whose cause is
``ErrNotImplemented`` (write and remove side).
"""

from __future__ import annotations

import logging
import posixpath
import stat as stat_mod
from collections.abc import Iterator
from typing import Any

from . import paths
from .base import (
    FS,
    MODE_PERM,
    Capability,
    DirEntry,
    FileInfo,
    GlobFS,
    ReadDirFile,
    ReadDirFS,
    ReadFileFS,
    RemoveFileFS,
    StatFS,
    SubFS,
    WriteFileFS,
    WriterFile,
    capabilities,
)
from .errors import ErrInvalid, ErrNotImplemented, PatternError, path_error

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 32 * 1024


# -------------------------------------------------------------------------
# Write and remove capabilities
# -------------------------------------------------------------------------


def mkdir_all(fsys: FS, dir: str, mode: int = MODE_PERM) -> None:
    """Create ``dir`` and any missing parents on ``fsys``."""
    if isinstance(fsys, WriteFileFS):
        return fsys.mkdir_all(dir, mode)
    raise path_error("MkdirAll", dir, ErrNotImplemented)


def create_file(fsys: FS, name: str, mode: int = MODE_PERM) -> WriterFile:
    """Create the named file on ``fsys`` and return a writable handle."""
    if isinstance(fsys, WriteFileFS):
        return fsys.create_file(name, mode)
    raise path_error("CreateFile", name, ErrNotImplemented)


def write_file(fsys: FS, name: str, data: bytes, mode: int = MODE_PERM) -> int:
    """Write ``data`` to the named file on ``fsys``."""
    if isinstance(fsys, WriteFileFS):
        return fsys.write_file(name, data, mode)
    raise path_error("WriteFile", name, ErrNotImplemented)


def remove_file(fsys: FS, name: str) -> None:
    """Remove the named file from ``fsys``."""
    if isinstance(fsys, RemoveFileFS):
        return fsys.remove_file(name)
    raise path_error("RemoveFile", name, ErrNotImplemented)


def remove_all(fsys: FS, path: str) -> None:
    """Remove ``path`` and any children from ``fsys``."""
    if isinstance(fsys, RemoveFileFS):
        return fsys.remove_all(path)
    raise path_error("RemoveAll", path, ErrNotImplemented)


# -------------------------------------------------------------------------
# Read capabilities
# -------------------------------------------------------------------------


def stat(fsys: FS, name: str) -> FileInfo:
    """Return file information for ``name``."""
    if isinstance(fsys, StatFS):
        return fsys.stat(name)
    f = fsys.open(name)
    try:
        return f.stat()
    finally:
        f.close()


def read_file(fsys: FS, name: str) -> bytes:
    """Return the whole content of the named file."""
    if isinstance(fsys, ReadFileFS):
        return fsys.read_file(name)
    f = fsys.open(name)
    try:
        return f.read()
    finally:
        f.close()


def read_dir(fsys: FS, name: str) -> list[DirEntry]:
    """Return the entries of directory ``name`` sorted by name."""
    if isinstance(fsys, ReadDirFS):
        return fsys.read_dir(name)
    f = fsys.open(name)
    try:
        if not isinstance(f, ReadDirFile):
            raise path_error("ReadDir", name, ErrNotImplemented)
        entries = f.read_dir(-1)
    finally:
        f.close()
    return sorted(entries, key=lambda e: e.name)


def sub(fsys: FS, dir: str) -> FS:
    """Return the filesystem rooted at ``dir``."""
    if not paths.valid_path(dir):
        raise path_error("Sub", dir, ErrInvalid)
    if dir == ".":
        return fsys
    if isinstance(fsys, SubFS):
        return fsys.sub(dir)
    raise path_error("Sub", dir, ErrNotImplemented)


def glob(fsys: FS, pattern: str) -> list[str]:
    """Return the names of all files matching ``pattern``."""
    if isinstance(fsys, GlobFS):
        return fsys.glob(pattern)
    return search_glob(fsys, pattern)


def search_glob(fsys: FS, pattern: str) -> list[str]:
    """Glob by listing one directory level at a time.

    Only the pattern is validated; directories that cannot be read simply
    contribute no matches.

    Raises:
        PatternError: If the pattern is malformed.
    """
    paths.compile_pattern(pattern)

    if not paths.has_meta(pattern):
        try:
            stat(fsys, pattern)
        except OSError:
            return []
        return [pattern]

    dir, file = posixpath.split(pattern)
    dir = dir or "."

    if not paths.has_meta(dir):
        return _glob_dir(fsys, dir, file)

    if dir == pattern:
        raise PatternError()

    matches: list[str] = []
    for d in search_glob(fsys, dir):
        matches.extend(_glob_dir(fsys, d, file))
    return matches


def _glob_dir(fsys: FS, dir: str, pattern: str) -> list[str]:
    try:
        entries = read_dir(fsys, dir)
    except OSError:
        return []
    return [
        _child(dir, entry.name) for entry in entries if paths.match(pattern, entry.name)
    ]


def _child(dir: str, name: str) -> str:
    if dir == ".":
        return name
    return posixpath.join(dir, name)


# -------------------------------------------------------------------------
# Walking and copying
# -------------------------------------------------------------------------


def walk_dir(fsys: FS, root: str = ".") -> Iterator[tuple[str, Any]]:
    """Walk the tree at ``root``, yielding ``(path, entry)`` pairs.

    Parents come before children and siblings are visited in lexical
    order. The root is yielded with its ``FileInfo``; every other path with
    the ``DirEntry`` its parent listed.
    """
    info = stat(fsys, root)
    yield from _walk(fsys, root, info)


def _walk(fsys: FS, path: str, entry: Any) -> Iterator[tuple[str, Any]]:
    yield path, entry
    if not entry.is_dir():
        return
    for child in read_dir(fsys, path):
        yield from _walk(fsys, _child(path, child.name), child)


def _perm(entry: Any) -> int:
    info = entry.info() if hasattr(entry, "info") else entry
    return stat_mod.S_IMODE(info.mode) or MODE_PERM


def _copy_file(dest: FS, src: FS, path: str, mode: int) -> None:
    src_file = src.open(path)
    try:
        dest_file = create_file(dest, path, mode)
        try:
            while True:
                chunk = src_file.read(COPY_CHUNK_SIZE)
                if not chunk:
                    break
                dest_file.write(chunk)
        finally:
            dest_file.close()
    finally:
        src_file.close()


def copy_fs(dest: FS, src: FS, root: str = ".") -> None:
    """Copy the tree at ``root`` on ``src`` to the same path on ``dest``.

    Directories are created with ``mkdir_all`` and files written through
    ``create_file``. The first error aborts the copy.

    Raises:
        NotImplementedPathError: If ``dest`` cannot be written.
    """
    if Capability.WRITE not in capabilities(dest):
        raise path_error("CopyFS", root, ErrNotImplemented)

    path = root
    try:
        for path, entry in walk_dir(src, root):
            if entry.is_dir():
                logger.debug("copy_fs: mkdir %s", path)
                mkdir_all(dest, path, _perm(entry))
            else:
                logger.debug("copy_fs: copy %s", path)
                _copy_file(dest, src, path, _perm(entry))
    except OSError as err:
        logger.warning("copy_fs aborted at %s: %s", path, err)
        raise
