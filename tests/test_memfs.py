"""Tests for MemFS, the in-memory filesystem."""

import threading

import pytest

from fs2 import MemFS, PatternError, is_not_exist
from fs2.base import MODE_PERM
from fs2.errors import InvalidPathError, NotDirError, NotExistError, PathError


def make_fs() -> MemFS:
    """Return a MemFS holding dir0/file01.txt and dir0/file02.txt."""
    fsys = MemFS()
    fsys.write_file("dir0/file01.txt", b"content01\n")
    fsys.write_file("dir0/file02.txt", b"content02\n")
    return fsys


def err_str(fn, *args) -> str:
    try:
        fn(*args)
    except PathError as err:
        return str(err)
    return ""


class TestMemFSOpen:
    """Test open() and stat()."""

    def test_open_file_reads_content(self):
        fsys = make_fs()
        f = fsys.open("dir0/file01.txt")
        assert f.read() == b"content01\n"
        assert f.read() == b""
        f.close()

    def test_open_root(self):
        """The root is an existing directory named '.'."""
        fsys = MemFS()
        info = fsys.stat(".")
        assert info.is_dir() is True
        assert info.name == "."

    def test_open_missing(self):
        fsys = make_fs()
        with pytest.raises(FileNotFoundError) as exc:
            fsys.open("not-found")
        assert str(exc.value) == "Open not-found: file does not exist"
        assert is_not_exist(exc.value)

    @pytest.mark.parametrize("name", ["../invalid", "/abs", "dir0/", "a//b", ""])
    def test_open_invalid(self, name):
        fsys = make_fs()
        with pytest.raises(InvalidPathError) as exc:
            fsys.open(name)
        assert exc.value.op == "Open"
        assert exc.value.path == name

    def test_stat_is_the_entry(self):
        """stat returns the stored entry, which doubles as file info."""
        fsys = make_fs()
        info = fsys.stat("dir0/file01.txt")
        assert info.name == "file01.txt"
        assert info.size == 10
        assert info.is_dir() is False
        assert info is fsys.store.get("/dir0/file01.txt")


class TestMemFSMkdirAll:
    """Test mkdir_all()."""

    @pytest.mark.parametrize(
        "dir,err",
        [
            ("test0", ""),
            ("test0/test1", ""),
            ("test2/test3", ""),
            ("../invalid", "MkdirAll ../invalid: invalid argument"),
            ("dir0/file01.txt", "MkdirAll dir0/file01.txt: invalid argument"),
            ("dir0/file01.txt/below", "MkdirAll dir0/file01.txt/below: invalid argument"),
        ],
    )
    def test_mkdir_all(self, dir, err):
        fsys = make_fs()
        assert err_str(fsys.mkdir_all, dir, MODE_PERM) == err
        if not err:
            assert fsys.stat(dir).is_dir() is True

    def test_mkdir_all_is_idempotent(self):
        """Creating the same tree twice succeeds and leaves one entry."""
        fsys = MemFS()
        fsys.mkdir_all("a/b")
        fsys.mkdir_all("a/b")

        assert fsys.store.keys.count("/a/b") == 1
        assert fsys.store.keys == ["/", "/a", "/a/b"]

    def test_mkdir_all_sets_dir_names_and_mode(self):
        fsys = MemFS()
        fsys.mkdir_all("a/b", 0o750)
        entry = fsys.stat("a/b")
        assert entry.name == "b"
        assert entry.mode & 0o777 == 0o750


class TestMemFSCreateFile:
    """Test create_file()."""

    @pytest.mark.parametrize(
        "name,err",
        [
            ("file.txt", ""),
            ("newDir/file.txt", ""),
            ("dir0", "Create dir0: invalid argument"),
            ("dir0/file01.txt/invalid", "MkdirAll dir0/file01.txt: invalid argument"),
            ("../invalid", "Create ../invalid: invalid argument"),
            ("dir0/file01.txt", ""),
        ],
    )
    def test_create_file(self, name, err):
        fsys = make_fs()
        assert err_str(fsys.create_file, name, MODE_PERM) == err
        if not err:
            assert fsys.stat(name).is_dir() is False

    def test_create_file_writes_on_close(self):
        """Content appears only once the handle is closed."""
        fsys = MemFS()
        f = fsys.create_file("a/new.txt")
        f.write(b"hello")
        f.write(b",world")
        assert fsys.read_file("a/new.txt") == b""

        f.close()
        assert fsys.read_file("a/new.txt") == b"hello,world"


class TestMemFSWriteFile:
    """Test write_file() and read_file()."""

    @pytest.mark.parametrize(
        "name,err",
        [
            ("new.txt", ""),
            ("dir0/file01.txt", ""),
            ("dir0", "Create dir0: invalid argument"),
            ("../invalid.txt", "Create ../invalid.txt: invalid argument"),
        ],
    )
    def test_write_file(self, name, err):
        fsys = make_fs()
        data = b"testdata"
        try:
            n = fsys.write_file(name, data, MODE_PERM)
        except PathError as exc:
            assert str(exc) == err
        else:
            assert err == ""
            assert n == len(data)
            assert fsys.read_file(name) == data

    def test_round_trip_empty(self):
        """Writing empty content reads back as empty, not missing."""
        fsys = MemFS()
        assert fsys.write_file("empty.txt", b"") == 0
        assert fsys.read_file("empty.txt") == b""

    def test_write_replaces_and_updates_mod_time(self):
        fsys = MemFS()
        fsys.write_file("f.txt", b"first")
        before = fsys.stat("f.txt").mod_time
        fsys.write_file("f.txt", b"second")

        assert fsys.read_file("f.txt") == b"second"
        assert fsys.stat("f.txt").mod_time >= before

    def test_previously_read_data_is_unaffected(self):
        fsys = MemFS()
        fsys.write_file("f.txt", b"first")
        data = fsys.read_file("f.txt")
        fsys.write_file("f.txt", b"second")
        assert data == b"first"

    def test_accepts_bytearray(self):
        fsys = MemFS()
        fsys.write_file("f.txt", bytearray(b"abc"))
        assert fsys.read_file("f.txt") == b"abc"

    @pytest.mark.parametrize(
        "name,err",
        [
            ("not-found", "Open not-found: file does not exist"),
            ("dir0", "ReadFile dir0: invalid argument"),
            ("../invalid.txt", "Open ../invalid.txt: invalid argument"),
        ],
    )
    def test_read_file_errors(self, name, err):
        fsys = make_fs()
        assert err_str(fsys.read_file, name) == err


class TestMemFSReadDir:
    """Test read_dir()."""

    @pytest.mark.parametrize(
        "dir,want,err",
        [
            (".", ["dir0"], ""),
            ("dir0", ["file01.txt", "file02.txt"], ""),
            ("not-found", [], "Open not-found: file does not exist"),
            ("dir0/file01.txt", [], "ReadDir dir0/file01.txt: not a directory"),
            ("../invalid", [], "Open ../invalid: invalid argument"),
        ],
    )
    def test_read_dir(self, dir, want, err):
        fsys = make_fs()
        try:
            entries = fsys.read_dir(dir)
        except PathError as exc:
            assert str(exc) == err
        else:
            assert err == ""
            assert [e.name for e in entries] == want

    def test_not_a_directory_type(self):
        fsys = make_fs()
        with pytest.raises(NotADirectoryError):
            fsys.read_dir("dir0/file01.txt")
        with pytest.raises(NotDirError):
            fsys.read_dir("dir0/file01.txt")

    def test_sorted_and_direct_only(self):
        fsys = MemFS()
        for name in ("b.txt", "a/x.txt", "c/d/e.txt", "a-1.txt"):
            fsys.write_file(name, b"")
        assert [e.name for e in fsys.read_dir(".")] == ["a", "a-1.txt", "b.txt", "c"]


class TestMemFSGlob:
    """Test glob()."""

    @pytest.mark.parametrize(
        "pattern,want",
        [
            ("*/*1.txt", ["dir0/file01.txt"]),
            ("dir0/*.txt", ["dir0/file01.txt", "dir0/file02.txt"]),
            ("*", ["dir0"]),
            ("no-match", []),
        ],
    )
    def test_glob(self, pattern, want):
        fsys = make_fs()
        assert fsys.glob(pattern) == want

    def test_glob_bad_pattern(self):
        fsys = make_fs()
        with pytest.raises(PatternError) as exc:
            fsys.glob("[[")
        assert str(exc.value) == "syntax error in pattern"

    def test_glob_in_sub_is_relative(self):
        fsys = make_fs()
        dir0 = fsys.sub("dir0")
        assert dir0.glob("*.txt") == ["file01.txt", "file02.txt"]


class TestMemFSSub:
    """Test sub() views."""

    def test_write_through_sub_visible_in_parent(self):
        fsys = make_fs()
        dir0 = fsys.sub("dir0")

        dir0.write_file("test.txt", b"test")

        assert fsys.read_file("dir0/test.txt") == b"test"

    def test_write_through_parent_visible_in_sub(self):
        fsys = make_fs()
        dir0 = fsys.sub("dir0")

        fsys.write_file("dir0/later.txt", b"later")

        assert dir0.read_file("later.txt") == b"later"
        assert [e.name for e in dir0.read_dir(".")] == ["file01.txt", "file02.txt", "later.txt"]

    def test_sub_shares_store(self):
        fsys = make_fs()
        dir0 = fsys.sub("dir0")
        assert dir0.store is fsys.store
        assert dir0.root == "/dir0"

    def test_nested_sub_mkdir(self):
        """mkdir_all through a sub view creates keys under the view's root."""
        fsys = make_fs()
        dir0 = fsys.sub("dir0")
        dir0.mkdir_all("x/y")

        assert fsys.stat("dir0/x/y").is_dir() is True
        assert "/dir0/dir0" not in fsys.store

    @pytest.mark.parametrize(
        "dir,err",
        [
            ("../invalid", "Sub ../invalid: invalid argument"),
            ("not-found", "Open not-found: file does not exist"),
            ("dir0/file01.txt", "Sub dir0/file01.txt: invalid argument"),
        ],
    )
    def test_sub_errors(self, dir, err):
        fsys = make_fs()
        assert err_str(fsys.sub, dir) == err


class TestMemFSRemove:
    """Test remove_file() and remove_all()."""

    def test_remove_file(self):
        fsys = make_fs()
        name = "dir0/file01.txt"
        fsys.stat(name)

        fsys.remove_file(name)

        with pytest.raises(NotExistError):
            fsys.stat(name)

    def test_remove_missing_is_not_an_error(self):
        fsys = make_fs()
        fsys.remove_file("missing.txt")
        fsys.remove_all("missing")

    def test_remove_file_invalid(self):
        fsys = make_fs()
        with pytest.raises(InvalidPathError) as exc:
            fsys.remove_file("../invalid")
        assert (exc.value.op, exc.value.path) == ("RemoveFile", "../invalid")

    def test_remove_all(self):
        fsys = make_fs()
        want = [k for k in fsys.store.keys if not k.startswith("/dir0")]

        fsys.remove_all("dir0")

        assert fsys.store.keys == want

    def test_remove_all_invalid(self):
        fsys = make_fs()
        assert err_str(fsys.remove_all, "../invalid") == "RemoveAll ../invalid: invalid argument"


class TestMemFSScenarios:
    """End-to-end scenarios."""

    def test_write_read_and_list(self):
        fsys = MemFS()
        fsys.mkdir_all("a/b")
        fsys.write_file("a/b/f.txt", b"hi")

        assert fsys.read_file("a/b/f.txt") == b"hi"
        assert [e.name for e in fsys.read_dir("a/b")] == ["f.txt"]

        assert fsys.glob("a/*/f.txt") == ["a/b/f.txt"]
        with pytest.raises(PatternError):
            fsys.glob("[[")

        fsys.remove_all("a")
        assert not [k for k in fsys.store.keys if k.startswith("/a")]
        with pytest.raises(FileNotFoundError):
            fsys.stat("a/b/f.txt")

    def test_paginated_directory_read(self):
        fsys = MemFS()
        fsys.write_file("d/one", b"1")
        fsys.write_file("d/two", b"2")

        f = fsys.open("d")
        assert [e.name for e in f.read_dir(1)] == ["one"]
        assert [e.name for e in f.read_dir(1)] == ["two"]
        with pytest.raises(EOFError):
            f.read_dir(1)
        f.close()

    def test_concurrent_writers_on_one_instance(self):
        """Writers sharing one instance never corrupt the key order."""
        fsys = MemFS()

        def writer(prefix):
            for i in range(50):
                fsys.write_file(f"{prefix}/f{i:02d}.txt", b"x")

        threads = [threading.Thread(target=writer, args=(f"t{n}",)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        keys = fsys.store.keys
        assert keys == sorted(set(keys))
        assert len(fsys.glob("*/*.txt")) == 200
