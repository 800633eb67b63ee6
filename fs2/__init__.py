"""fs2: writable filesystem interfaces with in-memory and host backends."""

from .base import (
    FS,
    MODE_DIR,
    MODE_FILE,
    MODE_PERM,
    Capability,
    DirEntry,
    File,
    FileInfo,
    FileStat,
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
from .config import FSConfig, MemFSConfig, OSFSConfig, connect_fs, new_fs
from .delegator import (
    FileDelegator,
    FSDelegator,
    OpenFSDelegator,
    delegate_file,
    delegate_fs,
    delegate_open_fs,
)
from .errors import (
    ErrInvalid,
    ErrIsDir,
    ErrNotDir,
    ErrNotExist,
    ErrNotImplemented,
    InvalidPathError,
    IsDirError,
    NotDirError,
    NotExistError,
    NotImplementedPathError,
    PathError,
    PatternError,
    is_invalid,
    is_not_exist,
    is_not_implemented,
)
from .memfile import MemFile
from .memfs import MemFS
from .ops import (
    copy_fs,
    create_file,
    glob,
    mkdir_all,
    read_dir,
    read_file,
    remove_all,
    remove_file,
    stat,
    sub,
    walk_dir,
    write_file,
)
from .osfs import OSFS, OSFile, OSOperations, dir_fs
from .paths import valid_path
from .store import Entry, Store

__all__ = [
    "Capability",
    "capabilities",
    "connect_fs",
    "copy_fs",
    "create_file",
    "delegate_file",
    "delegate_fs",
    "delegate_open_fs",
    "dir_fs",
    "DirEntry",
    "Entry",
    "ErrInvalid",
    "ErrIsDir",
    "ErrNotDir",
    "ErrNotExist",
    "ErrNotImplemented",
    "File",
    "FileDelegator",
    "FileInfo",
    "FileStat",
    "FS",
    "FSConfig",
    "FSDelegator",
    "glob",
    "GlobFS",
    "InvalidPathError",
    "is_invalid",
    "is_not_exist",
    "is_not_implemented",
    "IsDirError",
    "MemFile",
    "MemFS",
    "MemFSConfig",
    "mkdir_all",
    "MODE_DIR",
    "MODE_FILE",
    "MODE_PERM",
    "new_fs",
    "NotDirError",
    "NotExistError",
    "NotImplementedPathError",
    "OpenFSDelegator",
    "OSFile",
    "OSFS",
    "OSFSConfig",
    "OSOperations",
    "PathError",
    "PatternError",
    "read_dir",
    "read_file",
    "ReadDirFile",
    "ReadDirFS",
    "ReadFileFS",
    "remove_all",
    "remove_file",
    "RemoveFileFS",
    "stat",
    "StatFS",
    "Store",
    "sub",
    "SubFS",
    "valid_path",
    "walk_dir",
    "write_file",
    "WriteFileFS",
    "WriterFile",
]
