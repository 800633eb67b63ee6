"""Sorted key/value store backing MemFS."""

from __future__ import annotations

import bisect
import stat as stat_mod
from dataclasses import dataclass, field
from datetime import datetime

from . import paths
from .base import now


@dataclass
class Entry:
    """A stored file or directory.

    An entry works both as a ``DirEntry`` and as a ``FileInfo``.

    Attributes:
        name: Base name (``"."`` for the root).
        data: File content; always empty for directories.
        mode: ``stat`` mode bits, including the file type.
        mod_time: Time of the last write (UTC).
        directory: True for directories.
    """

    name: str
    data: bytes = b""
    mode: int = stat_mod.S_IFREG
    mod_time: datetime = field(default_factory=now)
    directory: bool = False

    def __post_init__(self) -> None:
        if stat_mod.S_ISDIR(self.mode) != self.directory:
            raise ValueError(
                f"mode {oct(self.mode)} disagrees with directory={self.directory}"
            )

    @property
    def size(self) -> int:
        if self.directory:
            return 0
        return len(self.data)

    @property
    def type(self) -> int:
        return stat_mod.S_IFMT(self.mode)

    @property
    def sys(self) -> None:
        return None

    def is_dir(self) -> bool:
        return self.directory

    def info(self) -> "Entry":
        return self


class Store:
    """In-memory key/value store with keys kept in sorted order.

    Keys are absolute slash-separated paths; the root is ``"/"``. Because
    the keys are sorted, every descendant of a path forms one contiguous run
    starting at ``path + "/"``, which makes subtree listing and removal a
    binary search plus a slice.

    Not thread safe; callers serialize access.
    """

    def __init__(self) -> None:
        self.keys: list[str] = []
        self.values: dict[str, Entry] = {}

    def __len__(self) -> int:
        return len(self.keys)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def get(self, key: str) -> Entry | None:
        return self.values.get(key)

    def put(self, key: str, entry: Entry) -> Entry:
        if key not in self.values:
            self.keys.append(key)
            self.keys.sort()
        self.values[key] = entry
        return entry

    def remove(self, key: str) -> Entry | None:
        i = self._key_index(key)
        if i == -1:
            return None
        del self.keys[i]
        return self.values.pop(key)

    def remove_all(self, prefix: str) -> None:
        """Remove ``prefix`` and every key below it."""
        self.remove(prefix)
        start, end = self._subtree(prefix)
        for key in self.keys[start:end]:
            del self.values[key]
        del self.keys[start:end]

    def prefix_keys(self, prefix: str) -> list[str]:
        """Return the keys of the direct children of ``prefix``."""
        if self._key_index(prefix) == -1:
            return []
        sep = _with_sep(prefix)
        start, end = self._subtree(prefix)
        return [k for k in self.keys[start:end] if "/" not in k[len(sep):]]

    def prefix_glob_keys(self, prefix: str, pattern: str) -> list[str]:
        """Return the keys below ``prefix`` whose remainder matches ``pattern``.

        Raises:
            PatternError: If the pattern is malformed.
        """
        regex = paths.compile_pattern(pattern)
        if self._key_index(prefix) == -1:
            return []
        sep = _with_sep(prefix)
        start, end = self._subtree(prefix)
        return [k for k in self.keys[start:end] if regex.fullmatch(k[len(sep):])]

    def _key_index(self, key: str) -> int:
        i = bisect.bisect_left(self.keys, key)
        if i < len(self.keys) and self.keys[i] == key:
            return i
        return -1

    def _subtree(self, prefix: str) -> tuple[int, int]:
        sep = _with_sep(prefix)
        start = bisect.bisect_left(self.keys, sep)
        # The root key is its own separator-terminated prefix.
        if start < len(self.keys) and self.keys[start] == prefix:
            start += 1
        end = start
        while end < len(self.keys) and self.keys[end].startswith(sep):
            end += 1
        return start, end


def _with_sep(prefix: str) -> str:
    return prefix if prefix.endswith("/") else prefix + "/"
