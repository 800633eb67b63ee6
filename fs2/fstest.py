"""Conformance checks for filesystem implementations.

Typical usage inside a test::

    def test_write_file_fs(tmp_path):
        fsys = OSFS(str(tmp_path))
        fsys.mkdir_all("tmp")
        check_write_file_fs(fsys, "tmp")

Each check raises ``AssertionError`` describing the first failure.
"""

from __future__ import annotations

from . import ops, paths
from .base import MODE_PERM, FS, WriterFile

_CHUNKS = (b"hello", b",world")

# (name, expect failure)
_WRITE_CASES = [
    ("file.txt", False),  # simple create
    ("dir/file.txt", False),  # mkdir and create
    ("dir", True),  # existing directory
    ("dir/file.txt/invalid", True),  # parent is a file
    ("file.txt/.", True),  # invalid path
    ("dir/file.txt", False),  # update
]


def check_write_file_fs(fsys: FS, tmp_dir: str) -> None:
    """Check the write and remove capabilities of ``fsys`` below ``tmp_dir``."""
    for case, want_err in _WRITE_CASES:
        name = f"{tmp_dir}/{case}"
        try:
            f = ops.create_file(fsys, name, MODE_PERM)
        except OSError as err:
            if want_err:
                continue
            raise AssertionError(f"{name}: create_file: {err}") from err
        if want_err:
            f.close()
            raise AssertionError(f"{name}: create_file raised no error")
        _check_file_write(fsys, f, name)

    try:
        ops.remove_file(fsys, f"{tmp_dir}/file.txt")
    except OSError as err:
        raise AssertionError(f"file.txt: remove_file: {err}") from err
    try:
        ops.remove_all(fsys, f"{tmp_dir}/dir")
    except OSError as err:
        raise AssertionError(f"dir: remove_all: {err}") from err


def _check_file_write(fsys: FS, f: WriterFile, name: str) -> None:
    want = b"".join(_CHUNKS)
    written = 0
    try:
        for chunk in _CHUNKS:
            written += f.write(chunk)
    except OSError as err:
        f.close()
        raise AssertionError(f"{name}: write: {err}") from err

    try:
        f.close()
    except OSError as err:
        raise AssertionError(f"{name}: close: {err}") from err

    if written != len(want):
        raise AssertionError(f"{name}: write size got {written}; want {len(want)}")

    r = fsys.open(name)
    try:
        got = r.read()
    finally:
        r.close()
    if got != want:
        raise AssertionError(f"{name}: read got {got!r}; want {want!r}")


def check_fs(fsys: FS, *expected: str) -> None:
    """Check that every ``expected`` file is consistently visible on ``fsys``.

    Each file must open and read, match ``read_file``, stat as a file, be
    listed by its parent directory (in sorted order), and be found by
    ``glob`` of its escaped name.
    """
    if not expected:
        raise AssertionError("expected at least one file to check")

    for name in expected:
        try:
            f = fsys.open(name)
            try:
                data = f.read()
            finally:
                f.close()
        except OSError as err:
            raise AssertionError(f"{name}: open: {err}") from err

        if ops.read_file(fsys, name) != data:
            raise AssertionError(f"{name}: read_file disagrees with open+read")

        info = ops.stat(fsys, name)
        if info.is_dir():
            raise AssertionError(f"{name}: stat reports a directory")
        if info.size != len(data):
            raise AssertionError(f"{name}: stat size {info.size}; want {len(data)}")

        parent = paths.parent(name)
        listed = [e.name for e in ops.read_dir(fsys, parent)]
        if listed != sorted(listed):
            raise AssertionError(f"{parent}: read_dir not sorted: {listed}")
        base = name.rsplit("/", 1)[-1]
        if base not in listed:
            raise AssertionError(f"{parent}: read_dir missing {base}")

        matches = ops.glob(fsys, paths.escape(name))
        if matches != [name]:
            raise AssertionError(f"{name}: glob got {matches}; want {[name]}")
