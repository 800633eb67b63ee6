"""Filesystem capability interfaces and shared records.

A filesystem is anything with ``open()``. Optional capabilities are
separate protocols so generic code can ask once what a filesystem supports
(see ``capabilities()``) and branch on the answer.
"""

from __future__ import annotations

import enum
import stat as stat_mod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

MODE_DIR = stat_mod.S_IFDIR
MODE_FILE = stat_mod.S_IFREG
MODE_PERM = 0o777


def now() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)


@runtime_checkable
class FileInfo(Protocol):
    """Describes a file or directory, as returned by ``stat()``."""

    @property
    def name(self) -> str: ...

    @property
    def size(self) -> int: ...

    @property
    def mode(self) -> int: ...

    @property
    def mod_time(self) -> datetime: ...

    def is_dir(self) -> bool: ...


@runtime_checkable
class DirEntry(Protocol):
    """An entry read from a directory."""

    @property
    def name(self) -> str: ...

    @property
    def type(self) -> int: ...

    def is_dir(self) -> bool: ...

    def info(self) -> FileInfo: ...


@runtime_checkable
class File(Protocol):
    """An open file or directory."""

    def read(self, size: int = -1) -> bytes: ...

    def stat(self) -> FileInfo: ...

    def close(self) -> None: ...


@runtime_checkable
class ReadDirFile(File, Protocol):
    """A directory handle that can be listed page by page."""

    def read_dir(self, n: int = -1) -> list[DirEntry]: ...


@runtime_checkable
class WriterFile(File, Protocol):
    """A handle that accepts writes."""

    def write(self, data: bytes) -> int: ...


@runtime_checkable
class FS(Protocol):
    """Minimal read-only filesystem."""

    def open(self, name: str) -> File: ...


@runtime_checkable
class ReadDirFS(FS, Protocol):
    def read_dir(self, name: str) -> list[DirEntry]: ...


@runtime_checkable
class ReadFileFS(FS, Protocol):
    def read_file(self, name: str) -> bytes: ...


@runtime_checkable
class GlobFS(FS, Protocol):
    def glob(self, pattern: str) -> list[str]: ...


@runtime_checkable
class StatFS(FS, Protocol):
    def stat(self, name: str) -> FileInfo: ...


@runtime_checkable
class SubFS(FS, Protocol):
    def sub(self, dir: str) -> FS: ...


@runtime_checkable
class WriteFileFS(FS, Protocol):
    """Filesystem that can create directories and write files."""

    def mkdir_all(self, dir: str, mode: int = MODE_PERM) -> None: ...

    def create_file(self, name: str, mode: int = MODE_PERM) -> WriterFile: ...

    def write_file(self, name: str, data: bytes, mode: int = MODE_PERM) -> int: ...


@runtime_checkable
class RemoveFileFS(FS, Protocol):
    """Filesystem that can remove files and trees."""

    def remove_file(self, name: str) -> None: ...

    def remove_all(self, path: str) -> None: ...


class Capability(enum.Flag):
    """Capability sets a filesystem may satisfy."""

    NONE = 0
    READ = enum.auto()
    WRITE = enum.auto()
    REMOVE = enum.auto()


def capabilities(fsys: Any) -> Capability:
    """Report which capability sets ``fsys`` implements."""
    caps = Capability.NONE
    if isinstance(fsys, FS):
        caps |= Capability.READ
    if isinstance(fsys, WriteFileFS):
        caps |= Capability.WRITE
    if isinstance(fsys, RemoveFileFS):
        caps |= Capability.REMOVE
    return caps


@dataclass
class FileStat:
    """File information captured from a host ``stat`` call.

    Serves both as ``FileInfo`` and ``DirEntry``.

    Attributes:
        name: Base name of the file or directory.
        size: Size in bytes (0 for directories).
        mode: ``stat`` mode bits, including the file type.
        mod_time: Last modification time (UTC).
    """

    name: str
    size: int
    mode: int
    mod_time: datetime

    @classmethod
    def from_stat(cls, name: str, st: Any) -> "FileStat":
        is_dir = stat_mod.S_ISDIR(st.st_mode)
        return cls(
            name=name,
            size=0 if is_dir else st.st_size,
            mode=st.st_mode,
            mod_time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        )

    @property
    def type(self) -> int:
        return stat_mod.S_IFMT(self.mode)

    @property
    def sys(self) -> Any:
        return None

    def is_dir(self) -> bool:
        return stat_mod.S_ISDIR(self.mode)

    def info(self) -> "FileStat":
        return self


def next_page(entries: list[Any], index: int, n: int) -> tuple[list[Any], int]:
    """Slice the next page of a directory listing.

    Returns the page and the new cursor position. With ``n > 0`` at most
    ``n`` entries are returned and ``EOFError`` is raised once the listing
    is exhausted; with ``n <= 0`` every remaining entry is returned.
    """
    remaining = len(entries) - index
    if remaining <= 0:
        if n <= 0:
            return [], index
        raise EOFError("end of directory")
    if n <= 0 or n > remaining:
        n = remaining
    return entries[index : index + n], index + n
