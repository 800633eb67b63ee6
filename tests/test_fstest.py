"""Run the conformance checks against every backend."""

import pytest

from fs2 import OSFS, FSDelegator, MemFS
from fs2.fstest import check_fs, check_write_file_fs


def populate(fsys):
    fsys.write_file("dir0/file01.txt", b"content01\n")
    fsys.write_file("dir0/file02.txt", b"content02\n")
    fsys.write_file("weird[1].txt", b"brackets")
    return fsys


@pytest.fixture(params=["memory", "os", "memory-sub"])
def fsys(request, tmp_path):
    if request.param == "memory":
        return populate(MemFS())
    if request.param == "os":
        return populate(OSFS(str(tmp_path)))
    parent = MemFS()
    parent.mkdir_all("root")
    return populate(parent.sub("root"))


class TestConformance:
    """Test every backend passes the conformance checks."""

    def test_check_write_file_fs(self, fsys):
        fsys.mkdir_all("tmp")
        check_write_file_fs(fsys, "tmp")
        assert [e.name for e in fsys.read_dir("tmp")] == []

    def test_check_fs(self, fsys):
        check_fs(fsys, "dir0/file01.txt", "dir0/file02.txt", "weird[1].txt")


class TestChecksCatchFailures:
    """Test the checks report broken implementations."""

    def test_no_files(self):
        with pytest.raises(AssertionError):
            check_fs(MemFS())

    def test_missing_file(self):
        with pytest.raises(AssertionError, match="missing.txt: open"):
            check_fs(populate(MemFS()), "missing.txt")

    def test_read_file_disagrees(self):
        memfs = populate(MemFS())
        broken = FSDelegator(open_func=memfs.open, read_file_func=lambda name: b"wrong")
        with pytest.raises(AssertionError, match="read_file disagrees"):
            check_fs(broken, "dir0/file01.txt")

    def test_write_without_error_on_directory(self):
        """A filesystem that happily creates over a directory fails."""
        memfs = MemFS()
        memfs.mkdir_all("tmp")

        def lenient_create(name, mode):
            if name == "tmp/dir":
                name = "tmp/dir.new"
            return memfs.create_file(name, mode)

        lenient = FSDelegator(
            open_func=memfs.open,
            mkdir_all_func=memfs.mkdir_all,
            create_file_func=lenient_create,
            remove_file_func=memfs.remove_file,
            remove_all_func=memfs.remove_all,
        )
        with pytest.raises(AssertionError, match="raised no error"):
            check_write_file_fs(lenient, "tmp")
