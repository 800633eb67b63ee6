"""File handle returned by MemFS.open() and MemFS.create_file()."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from .base import next_page
from .errors import ErrIsDir, path_error
from .store import Entry

if TYPE_CHECKING:
    from .memfs import MemFS


class MemFile:
    """Handle on a MemFS file or directory.

    A handle opened for reading holds a snapshot of the file content taken
    at open time. A handle from ``create_file()`` buffers writes and commits
    them to the filesystem on close. Directory handles list their children
    lazily through ``read_dir()``.

    Attributes:
        name: Path the handle was opened with, relative to its filesystem.
        mode: Mode used when the buffered content is committed.
    """

    def __init__(
        self,
        fsys: "MemFS",
        name: str,
        mode: int,
        data: bytes | None = None,
        writable: bool = False,
    ):
        """Initialize a handle.

        Args:
            fsys: Owning filesystem.
            name: Relative path the handle refers to.
            mode: File mode.
            data: Content to read from; None for directories and write handles.
            writable: True to buffer writes until close.
        """
        self._fsys = fsys
        self.name = name
        self.mode = mode
        self._reader = io.BytesIO(data) if data is not None else None
        self._writer = io.BytesIO() if writable else None
        self._wrote = False
        self._dir_read = False
        self._dir_entries: list[Entry] = []
        self._dir_index = 0
        self._closed = False

    def _is_dir_handle(self) -> bool:
        return self._reader is None and self._writer is None

    def _check_closed(self) -> None:
        if self._closed:
            raise ValueError(f"I/O operation on closed file: {self.name}")

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all remaining when negative).

        Returns ``b""`` once the content is exhausted.

        Raises:
            IsADirectoryError: If the handle refers to a directory.
            io.UnsupportedOperation: If the handle was opened for writing.
        """
        self._check_closed()
        if self._reader is None:
            if self._is_dir_handle():
                raise path_error("Read", self.name, ErrIsDir)
            raise io.UnsupportedOperation("read")
        return self._reader.read(size)

    def write(self, data: bytes) -> int:
        """Append ``data`` to the write buffer."""
        self._check_closed()
        if self._writer is None:
            if self._is_dir_handle():
                raise path_error("Write", self.name, ErrIsDir)
            raise io.UnsupportedOperation("write")
        self._wrote = True
        return self._writer.write(data)

    def stat(self) -> Entry:
        return self._fsys.stat(self.name)

    def read_dir(self, n: int = -1) -> list[Entry]:
        """Read the next ``n`` directory entries.

        With ``n > 0`` at most ``n`` entries are returned, and ``EOFError`` is
        raised once none remain. With ``n <= 0`` all remaining entries are
        returned, possibly an empty list.
        """
        if not self._dir_read:
            self._dir_entries = self._fsys.read_dir(self.name)
            self._dir_read = True

        entries, self._dir_index = next_page(self._dir_entries, self._dir_index, n)
        return entries

    def close(self) -> None:
        """Commit buffered writes, if any.

        The dirty flag survives close, so closing again writes the same
        content a second time.
        """
        self._closed = True
        if self._wrote:
            assert self._writer is not None
            self._fsys.write_file(self.name, self._writer.getvalue(), self.mode)
            return
        self._dir_entries = []

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "MemFile":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
