"""Slash-separated path helpers and glob pattern matching.

Paths handed to a filesystem are relative, slash separated and unrooted.
Glob patterns follow the usual shell syntax, matched element-wise:

    '*'         any sequence of non-'/' characters
    '?'         any single non-'/' character
    '[' ['^'] { char | lo '-' hi } ']'
                character class (must be non-empty)
    '\\' c      matches c literally
"""

from __future__ import annotations

import functools
import posixpath
import re

from .errors import PatternError

_META = "*?[\\"


def valid_path(name: str) -> bool:
    """Report whether ``name`` is a valid path name.

    ``"."`` names the root. Otherwise the name must be non-empty, must not
    start or end with a slash, and must not contain empty, ``.`` or ``..``
    elements.
    """
    if name == ".":
        return True
    if not name:
        return False
    for elem in name.split("/"):
        if elem in ("", ".", ".."):
            return False
    return True


def clean(name: str) -> str:
    """Lexically normalize ``name``; the empty path becomes ``"."``."""
    if not name:
        return "."
    cleaned = posixpath.normpath(name)
    # POSIX keeps a leading "//"; collapse it like every other run of slashes.
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def join(*elems: str) -> str:
    """Join non-empty elements with slashes and clean the result."""
    parts = [e for e in elems if e]
    if not parts:
        return ""
    return clean("/".join(parts))


def parent(name: str) -> str:
    """Return the directory part of ``name`` (``"."`` when there is none)."""
    return clean(posixpath.dirname(name))


def has_meta(pattern: str) -> bool:
    """Report whether ``pattern`` contains any glob metacharacters."""
    return any(c in _META for c in pattern)


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    if i >= len(pattern) or pattern[i] in "-]":
        raise PatternError()
    if pattern[i] == "\\":
        i += 1
        if i >= len(pattern):
            raise PatternError()
    return pattern[i], i + 1


@functools.lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a glob pattern into a compiled regular expression.

    Raises:
        PatternError: If the pattern is malformed.
    """
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        i += 1
        if c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "\\":
            if i >= n:
                raise PatternError()
            out.append(re.escape(pattern[i]))
            i += 1
        elif c == "[":
            negate = i < n and pattern[i] == "^"
            if negate:
                i += 1
            ranges: list[str] = []
            while True:
                if i >= n:
                    raise PatternError()
                if pattern[i] == "]" and ranges:
                    i += 1
                    break
                lo, i = _class_char(pattern, i)
                hi = lo
                if i < n and pattern[i] == "-":
                    hi, i = _class_char(pattern, i + 1)
                if hi < lo:
                    raise PatternError()
                if lo == hi:
                    ranges.append(re.escape(lo))
                else:
                    ranges.append(f"{re.escape(lo)}-{re.escape(hi)}")
            out.append("[" + ("^" if negate else "") + "".join(ranges) + "]")
        else:
            out.append(re.escape(c))
    return re.compile("".join(out), re.DOTALL)


def match(pattern: str, name: str) -> bool:
    """Report whether ``name`` matches the glob ``pattern``.

    Raises:
        PatternError: If the pattern is malformed.
    """
    return compile_pattern(pattern).fullmatch(name) is not None


def escape(name: str) -> str:
    """Escape glob metacharacters so ``name`` matches only itself."""
    return "".join("\\" + c if c in _META or c == "]" else c for c in name)
