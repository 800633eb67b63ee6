"""Host filesystem rooted at a directory.

Provides OSFS, which exposes a host directory through the same interfaces
as MemFS. Paths are validated before they reach the host, so callers can
never address anything outside the root.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat as stat_mod
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import BinaryIO

from . import paths
from .base import MODE_PERM, FileStat, next_page
from .errors import ErrInvalid, ErrIsDir, path_error
from .ops import search_glob

logger = logging.getLogger(__name__)


def _create(path: str) -> BinaryIO:
    return open(path, "wb")


def _mkdir_all(path: str, mode: int) -> None:
    os.makedirs(path, mode, exist_ok=True)


def _remove_all(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    elif os.path.lexists(path):
        os.remove(path)


@dataclass
class OSOperations:
    """Host calls used by OSFS for mutations.

    Pass a customized instance to ``OSFS`` to substitute fakes in tests.

    Attributes:
        create: Open a path for writing, truncating it.
        mkdir_all: Create a directory and its parents; existing ones are fine.
        remove: Remove a single file or empty directory.
        remove_all: Remove a path and everything below it; missing is fine.
    """

    create: Callable[[str], BinaryIO] = _create
    mkdir_all: Callable[[str, int], None] = _mkdir_all
    remove: Callable[[str], None] = os.remove
    remove_all: Callable[[str], None] = _remove_all


def is_invalid_path(name: str) -> bool:
    """Report whether ``name`` must be rejected before reaching the host."""
    if not paths.valid_path(name):
        return True
    return sys.platform == "win32" and any(c in name for c in "\\:")


class OSFile:
    """Handle on a host file or directory opened through OSFS."""

    def __init__(self, fsys: "OSFS", name: str, file: BinaryIO | None):
        self._fsys = fsys
        self.name = name
        self._file = file
        self._dir_entries: list[FileStat] | None = None
        self._dir_index = 0
        self._closed = False

    def read(self, size: int = -1) -> bytes:
        if self._file is None:
            raise path_error("Read", self.name, ErrIsDir)
        return self._file.read(size)

    def write(self, data: bytes) -> int:
        if self._file is None:
            raise path_error("Write", self.name, ErrIsDir)
        return self._file.write(data)

    def stat(self) -> FileStat:
        return self._fsys.stat(self.name)

    def read_dir(self, n: int = -1) -> list[FileStat]:
        """Read the next ``n`` directory entries (see ``base.next_page``)."""
        if self._dir_entries is None:
            self._dir_entries = self._fsys.read_dir(self.name)
        entries, self._dir_index = next_page(self._dir_entries, self._dir_index, n)
        return entries

    def close(self) -> None:
        self._closed = True
        if self._file is not None:
            self._file.close()
        self._dir_entries = None

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "OSFile":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class OSFS:
    """Filesystem for the tree of files rooted at a host directory.

    Modes given to ``mkdir_all`` and ``create_file`` are passed to the host
    (subject to its umask); nothing else about permissions is enforced.

    Attributes:
        dir: Host directory acting as the root.
        ops: Host calls used for mutations.
    """

    def __init__(self, dir: str, ops: OSOperations | None = None):
        """Initialize the filesystem.

        Args:
            dir: Host directory to expose. It is not required to exist yet.
            ops: Host calls to use; defaults to the real ones.
        """
        self.dir = dir
        self.ops = ops if ops is not None else OSOperations()

    def _check(self, op: str, name: str) -> str:
        if is_invalid_path(name):
            raise path_error(op, name, ErrInvalid)
        if name == ".":
            return self.dir
        return os.path.join(self.dir, *name.split("/"))

    def open(self, name: str) -> OSFile:
        """Open the named file or directory for reading."""
        path = self._check("Open", name)
        try:
            if os.path.isdir(path):
                return OSFile(self, name, None)
            return OSFile(self, name, open(path, "rb"))
        except OSError as err:
            raise path_error("Open", name, err) from err

    def glob(self, pattern: str) -> list[str]:
        return search_glob(self, pattern)

    def read_dir(self, dir: str) -> list[FileStat]:
        """Return the entries of ``dir`` sorted by name."""
        path = self._check("ReadDir", dir)
        try:
            with os.scandir(path) as it:
                entries = [FileStat.from_stat(e.name, e.stat()) for e in it]
        except OSError as err:
            raise path_error("ReadDir", dir, err) from err
        return sorted(entries, key=lambda e: e.name)

    def read_file(self, name: str) -> bytes:
        path = self._check("ReadFile", name)
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as err:
            raise path_error("ReadFile", name, err) from err

    def stat(self, name: str) -> FileStat:
        path = self._check("Stat", name)
        try:
            st = os.stat(path)
        except OSError as err:
            raise path_error("Stat", name, err) from err
        return FileStat.from_stat(os.path.basename(name) if name != "." else ".", st)

    def sub(self, dir: str) -> "OSFS":
        """Return the filesystem rooted at ``dir``, sharing this one's ops."""
        path = self._check("Sub", dir)
        return OSFS(path, self.ops)

    def mkdir_all(self, dir: str, mode: int = MODE_PERM) -> None:
        path = self._check("MkdirAll", dir)
        logger.debug("mkdir_all %s", path)
        try:
            self.ops.mkdir_all(path, stat_mod.S_IMODE(mode))
        except OSError as err:
            raise path_error("MkdirAll", dir, err) from err

    def create_file(self, name: str, mode: int = MODE_PERM) -> OSFile:
        """Create (or truncate) the named file, creating parents as needed."""
        path = self._check("Create", name)
        logger.debug("create %s", path)
        try:
            self.ops.mkdir_all(os.path.dirname(path) or self.dir, stat_mod.S_IMODE(mode))
            f = self.ops.create(path)
        except OSError as err:
            raise path_error("Create", name, err) from err
        return OSFile(self, name, f)

    def write_file(self, name: str, data: bytes, mode: int = MODE_PERM) -> int:
        with self.create_file(name, mode) as f:
            return f.write(data)

    def remove_file(self, name: str) -> None:
        path = self._check("Remove", name)
        logger.debug("remove %s", path)
        try:
            self.ops.remove(path)
        except OSError as err:
            raise path_error("Remove", name, err) from err

    def remove_all(self, path: str) -> None:
        host_path = self._check("RemoveAll", path)
        logger.debug("remove_all %s", host_path)
        try:
            self.ops.remove_all(host_path)
        except OSError as err:
            raise path_error("RemoveAll", path, err) from err


def dir_fs(dir: str) -> OSFS:
    """Return an OSFS for the tree rooted at ``dir``."""
    return OSFS(dir)
