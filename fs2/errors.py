"""Error types shared by every filesystem implementation.

Every failing operation raises a ``PathError`` carrying the operation name,
the offending path and a cause. The cause is one of the module-level
sentinels below; ``path_error()`` picks the ``PathError`` subclass that also
derives from the matching built-in ``OSError`` subclass, so callers can use
either ``except FileNotFoundError`` or ``errors.is_not_exist(err)``.
"""

from __future__ import annotations

import errno


class PatternError(ValueError):
    """Malformed glob pattern."""

    def __init__(self, message: str = "syntax error in pattern"):
        super().__init__(message)


# Cause sentinels. Compared by identity in the is_* predicates.
ErrInvalid = OSError(errno.EINVAL, "invalid argument")
ErrNotExist = FileNotFoundError(errno.ENOENT, "file does not exist")
ErrNotDir = NotADirectoryError(errno.ENOTDIR, "not a directory")
ErrIsDir = IsADirectoryError(errno.EISDIR, "is a directory")
ErrNotImplemented = NotImplementedError("not implemented")


def _cause_text(err: BaseException) -> str:
    strerror = getattr(err, "strerror", None)
    return strerror if strerror else str(err)


class PathError(OSError):
    """An error tied to an operation on a path.

    Attributes:
        op: Operation name, e.g. ``"Open"`` or ``"MkdirAll"``.
        path: The path given by the caller.
        err: The underlying cause.
    """

    def __init__(self, op: str, path: str, err: BaseException):
        super().__init__(getattr(err, "errno", None), _cause_text(err), path)
        self.op = op
        self.path = path
        self.err = err

    def __str__(self) -> str:
        return f"{self.op} {self.path}: {_cause_text(self.err)}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(op={self.op!r}, path={self.path!r}, err={_cause_text(self.err)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathError):
            return NotImplemented
        return (self.op, self.path, self.err) == (other.op, other.path, other.err)

    def __hash__(self) -> int:
        return hash((self.op, self.path, id(self.err)))


class InvalidPathError(PathError):
    """Malformed path, or a file/directory conflict."""


class NotExistError(PathError, FileNotFoundError):
    """Lookup against a missing path."""


class NotDirError(PathError, NotADirectoryError):
    """Directory operation on a file."""


class IsDirError(PathError, IsADirectoryError):
    """File operation on a directory."""


class NotImplementedPathError(PathError):
    """The filesystem lacks the requested capability."""


def path_error(op: str, path: str, err: BaseException) -> PathError:
    """Build the ``PathError`` subclass matching ``err``."""
    if err is ErrNotExist or isinstance(err, FileNotFoundError):
        cls: type[PathError] = NotExistError
    elif err is ErrNotDir or isinstance(err, NotADirectoryError):
        cls = NotDirError
    elif err is ErrIsDir or isinstance(err, IsADirectoryError):
        cls = IsDirError
    elif err is ErrNotImplemented or isinstance(err, NotImplementedError):
        cls = NotImplementedPathError
    elif err is ErrInvalid or getattr(err, "errno", None) == errno.EINVAL:
        cls = InvalidPathError
    else:
        cls = PathError
    return cls(op, path, err)


def _unwrap(err: BaseException) -> BaseException:
    while isinstance(err, PathError):
        err = err.err
    return err


def is_not_exist(err: BaseException) -> bool:
    """Report whether ``err`` means the path does not exist."""
    return isinstance(_unwrap(err), FileNotFoundError)


def is_invalid(err: BaseException) -> bool:
    """Report whether ``err`` is an invalid-argument error."""
    return getattr(_unwrap(err), "errno", None) == errno.EINVAL


def is_not_implemented(err: BaseException) -> bool:
    """Report whether ``err`` means a capability is missing."""
    return isinstance(_unwrap(err), NotImplementedError)
