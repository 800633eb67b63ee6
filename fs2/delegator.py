"""Filesystem and file types that forward to pluggable functions.

Useful for adapting arbitrary objects to the filesystem interfaces, and for
tests that need to inject failures into one operation while keeping the
rest of a real filesystem.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from . import ops
from .base import (
    FS,
    MODE_PERM,
    DirEntry,
    File,
    FileInfo,
    ReadDirFile,
    RemoveFileFS,
    WriteFileFS,
    WriterFile,
)
from .errors import ErrNotImplemented, path_error


@dataclass
class OpenFSDelegator:
    """Filesystem whose ``open`` calls ``open_func``."""

    open_func: Callable[[str], File] | None = None

    def open(self, name: str) -> File:
        if self.open_func is None:
            raise path_error("Open", name, ErrNotImplemented)
        return self.open_func(name)


def delegate_open_fs(fsys: FS) -> OpenFSDelegator:
    """Return an ``OpenFSDelegator`` forwarding to ``fsys.open``."""
    return OpenFSDelegator(open_func=fsys.open)


@dataclass
class FSDelegator:
    """Filesystem implementing every capability through function fields.

    Unset read, write and remove functions raise a ``PathError`` with
    ``ErrNotImplemented`` as cause. An unset ``mkdir_all_func`` is a no-op.
    """

    open_func: Callable[[str], File] | None = None
    read_dir_func: Callable[[str], list[DirEntry]] | None = None
    read_file_func: Callable[[str], bytes] | None = None
    glob_func: Callable[[str], list[str]] | None = None
    stat_func: Callable[[str], FileInfo] | None = None
    sub_func: Callable[[str], FS] | None = None
    mkdir_all_func: Callable[[str, int], None] | None = None
    create_file_func: Callable[[str, int], WriterFile] | None = None
    write_file_func: Callable[[str, bytes, int], int] | None = None
    remove_file_func: Callable[[str], None] | None = None
    remove_all_func: Callable[[str], None] | None = None

    def open(self, name: str) -> File:
        if self.open_func is None:
            raise path_error("Open", name, ErrNotImplemented)
        return self.open_func(name)

    def read_dir(self, name: str) -> list[DirEntry]:
        if self.read_dir_func is None:
            raise path_error("ReadDir", name, ErrNotImplemented)
        return self.read_dir_func(name)

    def read_file(self, name: str) -> bytes:
        if self.read_file_func is None:
            raise path_error("ReadFile", name, ErrNotImplemented)
        return self.read_file_func(name)

    def glob(self, pattern: str) -> list[str]:
        if self.glob_func is None:
            raise path_error("Glob", pattern, ErrNotImplemented)
        return self.glob_func(pattern)

    def stat(self, name: str) -> FileInfo:
        if self.stat_func is None:
            raise path_error("Stat", name, ErrNotImplemented)
        return self.stat_func(name)

    def sub(self, dir: str) -> FS:
        if self.sub_func is None:
            raise path_error("Sub", dir, ErrNotImplemented)
        return self.sub_func(dir)

    def mkdir_all(self, dir: str, mode: int = MODE_PERM) -> None:
        if self.mkdir_all_func is None:
            return None
        return self.mkdir_all_func(dir, mode)

    def create_file(self, name: str, mode: int = MODE_PERM) -> WriterFile:
        if self.create_file_func is None:
            raise path_error("CreateFile", name, ErrNotImplemented)
        return self.create_file_func(name, mode)

    def write_file(self, name: str, data: bytes, mode: int = MODE_PERM) -> int:
        if self.write_file_func is None:
            raise path_error("WriteFile", name, ErrNotImplemented)
        return self.write_file_func(name, data, mode)

    def remove_file(self, name: str) -> None:
        if self.remove_file_func is None:
            raise path_error("RemoveFile", name, ErrNotImplemented)
        return self.remove_file_func(name)

    def remove_all(self, path: str) -> None:
        if self.remove_all_func is None:
            raise path_error("RemoveAll", path, ErrNotImplemented)
        return self.remove_all_func(path)


def delegate_fs(fsys: FS) -> FSDelegator:
    """Return an ``FSDelegator`` forwarding to ``fsys``.

    Read operations ``fsys`` lacks are emulated through ``open()``. Write
    and remove functions are only set when ``fsys`` has the capability.
    """
    d = FSDelegator(
        open_func=fsys.open,
        read_dir_func=functools.partial(ops.read_dir, fsys),
        read_file_func=functools.partial(ops.read_file, fsys),
        glob_func=functools.partial(ops.glob, fsys),
        stat_func=functools.partial(ops.stat, fsys),
        sub_func=functools.partial(ops.sub, fsys),
    )
    if isinstance(fsys, WriteFileFS):
        d.mkdir_all_func = fsys.mkdir_all
        d.create_file_func = fsys.create_file
        d.write_file_func = fsys.write_file
    if isinstance(fsys, RemoveFileFS):
        d.remove_file_func = fsys.remove_file
        d.remove_all_func = fsys.remove_all
    return d


@dataclass
class FileDelegator:
    """File implementing read, directory and write interfaces through
    function fields. Unset functions raise ``NotImplementedError``, except
    ``close_func`` which defaults to a no-op."""

    stat_func: Callable[[], FileInfo] | None = None
    read_func: Callable[[int], bytes] | None = None
    close_func: Callable[[], None] | None = None
    read_dir_func: Callable[[int], list[DirEntry]] | None = None
    write_func: Callable[[bytes], int] | None = None

    def stat(self) -> FileInfo:
        if self.stat_func is None:
            raise NotImplementedError("not implemented")
        return self.stat_func()

    def read(self, size: int = -1) -> bytes:
        if self.read_func is None:
            raise NotImplementedError("not implemented")
        return self.read_func(size)

    def close(self) -> None:
        if self.close_func is None:
            return None
        return self.close_func()

    def read_dir(self, n: int = -1) -> list[DirEntry]:
        if self.read_dir_func is None:
            raise NotImplementedError("not implemented")
        return self.read_dir_func(n)

    def write(self, data: bytes) -> int:
        if self.write_func is None:
            raise NotImplementedError("not implemented")
        return self.write_func(data)

    def __enter__(self) -> "FileDelegator":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def delegate_file(f: File) -> FileDelegator:
    """Return a ``FileDelegator`` forwarding to ``f``."""
    d = FileDelegator(stat_func=f.stat, read_func=f.read, close_func=f.close)
    if isinstance(f, ReadDirFile):
        d.read_dir_func = f.read_dir
    if isinstance(f, WriterFile):
        d.write_func = f.write
    return d
