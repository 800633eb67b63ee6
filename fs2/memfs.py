"""In-memory filesystem implementation."""

from __future__ import annotations

import posixpath
import stat as stat_mod
import threading

from . import paths
from .base import MODE_DIR, MODE_FILE, MODE_PERM, now
from .errors import ErrInvalid, ErrNotDir, ErrNotExist, path_error
from .memfile import MemFile
from .store import Entry, Store


class MemFS:
    """In-memory filesystem over a sorted key/value store.

    Paths are relative and slash separated (see ``paths.valid_path``). Each
    instance maps them onto store keys below its root prefix. ``sub()``
    returns another instance over the same store, so writes through either
    one are visible through both.

    Every operation holds the instance lock. A sub view has its own lock,
    so concurrent mutation through a parent and its sub view is not
    serialized.

    Modes are stored but never checked.

    Example:
        >>> fsys = MemFS()
        >>> fsys.write_file("path/to/example.txt", b"Hello")
        5
        >>> fsys.read_file("path/to/example.txt")
        b'Hello'
        >>> [e.name for e in fsys.read_dir("path/to")]
        ['example.txt']
    """

    def __init__(self, store: Store | None = None, root: str = "/"):
        """Initialize the filesystem.

        Args:
            store: Store to share. A new store with a root directory is
                created when omitted.
            root: Store key this instance treats as ``"."``.
        """
        self._lock = threading.Lock()
        self._root = root
        if store is None:
            store = Store()
            store.put(root, Entry(name=".", mode=MODE_DIR | MODE_PERM, directory=True))
        self._store = store

    @property
    def root(self) -> str:
        return self._root

    @property
    def store(self) -> Store:
        return self._store

    def _key(self, name: str) -> str:
        return paths.clean(posixpath.join(self._root, name))

    def _rel(self, key: str) -> str:
        prefix = self._root if self._root.endswith("/") else self._root + "/"
        if key.startswith(prefix):
            return key[len(prefix) :]
        return "."

    def _open(self, name: str) -> Entry:
        if not paths.valid_path(name):
            raise path_error("Open", name, ErrInvalid)
        entry = self._store.get(self._key(name))
        if entry is None:
            raise path_error("Open", name, ErrNotExist)
        return entry

    def _mkdir_all(self, dir: str, mode: int) -> None:
        if not paths.valid_path(dir):
            raise path_error("MkdirAll", dir, ErrInvalid)

        levels = [(self._root, posixpath.basename(self._root) or ".")]
        if dir != ".":
            key = self._root
            for elem in dir.split("/"):
                key = posixpath.join(key, elem)
                levels.append((key, elem))

        for key, name in levels:
            entry = self._store.get(key)
            if entry is not None:
                if not entry.directory:
                    raise path_error("MkdirAll", dir, ErrInvalid)
                continue
            self._store.put(
                key,
                Entry(name=name, mode=MODE_DIR | stat_mod.S_IMODE(mode), directory=True),
            )

    def _create(self, name: str, mode: int) -> Entry:
        if not paths.valid_path(name):
            raise path_error("Create", name, ErrInvalid)
        self._mkdir_all(paths.parent(name), mode)

        key = self._key(name)
        entry = self._store.get(key)
        if entry is None:
            entry = Entry(name=posixpath.basename(name), mode=MODE_FILE | stat_mod.S_IMODE(mode))
            self._store.put(key, entry)
        elif entry.directory:
            raise path_error("Create", name, ErrInvalid)
        return entry

    def open(self, name: str) -> MemFile:
        """Open the named file or directory for reading.

        Raises:
            InvalidPathError: If the name is not a valid path.
            NotExistError: If nothing exists at the name.
        """
        with self._lock:
            entry = self._open(name)
            if entry.directory:
                return MemFile(self, name, entry.mode)
            return MemFile(self, name, entry.mode, data=entry.data)

    def glob(self, pattern: str) -> list[str]:
        """Return the paths matching ``pattern``, in sorted order.

        Raises:
            PatternError: If the pattern is malformed.
        """
        with self._lock:
            keys = self._store.prefix_glob_keys(self._root, pattern)
            return [self._rel(key) for key in keys]

    def read_dir(self, dir: str) -> list[Entry]:
        """Return the entries of ``dir`` sorted by name.

        Raises:
            InvalidPathError: If the name is not a valid path.
            NotExistError: If the directory does not exist.
            NotDirError: If the name refers to a file.
        """
        with self._lock:
            entry = self._open(dir)
            if not entry.directory:
                raise path_error("ReadDir", dir, ErrNotDir)
            keys = self._store.prefix_keys(self._key(dir))
            return [self._store.values[key] for key in keys]

    def read_file(self, name: str) -> bytes:
        """Return the content of the named file.

        Raises:
            InvalidPathError: If the name is invalid or is a directory.
            NotExistError: If the file does not exist.
        """
        with self._lock:
            entry = self._open(name)
            if entry.directory:
                raise path_error("ReadFile", name, ErrInvalid)
            return entry.data

    def stat(self, name: str) -> Entry:
        with self._lock:
            return self._open(name)

    def sub(self, dir: str) -> "MemFS":
        """Return a view of the subtree rooted at ``dir``.

        The view shares this filesystem's store; nothing is copied.
        """
        with self._lock:
            if not paths.valid_path(dir):
                raise path_error("Sub", dir, ErrInvalid)
            entry = self._open(dir)
            if not entry.directory:
                raise path_error("Sub", dir, ErrInvalid)
            return MemFS(self._store, root=self._key(dir))

    def mkdir_all(self, dir: str, mode: int = MODE_PERM) -> None:
        """Create ``dir`` and any missing parents.

        Existing directories are left alone.

        Raises:
            InvalidPathError: If the name is invalid or a level is a file.
        """
        with self._lock:
            self._mkdir_all(dir, mode)

    def create_file(self, name: str, mode: int = MODE_PERM) -> MemFile:
        """Create the named file, returning a handle that writes on close.

        Missing parent directories are created.

        Raises:
            InvalidPathError: If the name is invalid, is a directory, or a
                parent is a file.
        """
        with self._lock:
            self._create(name, mode)
            return MemFile(self, name, mode, writable=True)

    def write_file(self, name: str, data: bytes, mode: int = MODE_PERM) -> int:
        """Replace the content of the named file, creating it if needed.

        Returns:
            Number of bytes written.
        """
        with self._lock:
            entry = self._create(name, mode)
            entry.data = bytes(data)
            entry.mod_time = now()
            return len(entry.data)

    def remove_file(self, name: str) -> None:
        """Remove the named entry. Missing names are ignored."""
        with self._lock:
            if not paths.valid_path(name):
                raise path_error("RemoveFile", name, ErrInvalid)
            self._store.remove(self._key(name))

    def remove_all(self, path: str) -> None:
        """Remove ``path`` and everything below it."""
        with self._lock:
            if not paths.valid_path(path):
                raise path_error("RemoveAll", path, ErrInvalid)
            self._store.remove_all(self._key(path))
