"""Path predicates used to decide how inputs and outputs are mapped.

The helpers operate on plain path strings so that the caller's spelling is
preserved (``out/`` stays a directory-mode output, ``out.html`` a file-mode
one) regardless of what currently exists on disk.
"""

from __future__ import annotations

import os
import re
from enum import Enum

__all__ = [
    "PathKind",
    "base_name",
    "classify_path",
    "extension_of",
    "has_extension",
    "is_directory",
    "strip_extension",
]

_TRAILING_SEGMENT_RE = re.compile(r"\.[^/]+$")
_BASENAME_RE = re.compile(r"/?[^/]+$")


class PathKind(Enum):
    """Filesystem state of a path at the time it was inspected."""

    DIRECTORY = "directory"
    FILE = "file"
    MISSING = "missing"
    DENIED = "denied"


def classify_path(path: str | os.PathLike[str]) -> PathKind:
    """Inspect ``path`` without raising.

    A directory only counts as such when it can be listed, so an unreadable
    directory is reported as :attr:`PathKind.DENIED`.
    """

    try:
        os.listdir(path)
        return PathKind.DIRECTORY
    except NotADirectoryError:
        return PathKind.FILE
    except (FileNotFoundError, ValueError):
        return PathKind.MISSING
    except PermissionError:
        return PathKind.DENIED
    except OSError:
        if os.path.lexists(path):
            return PathKind.FILE
        return PathKind.MISSING


def is_directory(path: str | os.PathLike[str]) -> bool:
    """Return ``True`` only when ``path`` can currently be listed."""

    return classify_path(path) is PathKind.DIRECTORY


def has_extension(path: str | os.PathLike[str]) -> bool:
    """Return ``True`` if the last path segment has a ``.ext`` suffix."""

    return _TRAILING_SEGMENT_RE.search(os.fspath(path)) is not None


def extension_of(path: str | os.PathLike[str]) -> str:
    """Return the text after the last dot of the final segment.

    Raises :class:`ValueError` when the path has no extension; guard with
    :func:`has_extension` first.
    """

    match = _TRAILING_SEGMENT_RE.search(os.fspath(path))
    if match is None:
        raise ValueError(f"Path has no file extension: {os.fspath(path)!r}")
    return match.group(0).rsplit(".", 1)[1]


def base_name(path: str | os.PathLike[str]) -> str:
    match = _BASENAME_RE.search(os.fspath(path))
    if match is None:
        raise ValueError(f"Path has no final segment: {os.fspath(path)!r}")
    return match.group(0).lstrip("/")


def strip_extension(path: str | os.PathLike[str]) -> str:
    return _TRAILING_SEGMENT_RE.sub("", os.fspath(path))
