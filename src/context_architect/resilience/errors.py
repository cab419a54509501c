"""Error classification for filesystem reads.

Classifies read failures by category to enable:
- Absence handling (a missing file is a normal condition, not an error)
- Informative user messages (permission vs. other OS failures)
- A single read-and-classify step instead of exists-then-read
"""

from __future__ import annotations

import errno
from enum import Enum
from pathlib import Path

_UNREACHABLE_ERRNOS = frozenset({errno.ENAMETOOLONG, errno.ELOOP})


class ReadError(Enum):
    MISSING = "missing"  # ENOENT, ENOTDIR, EISDIR, ENAMETOOLONG, ELOOP
    PERMISSION = "permission"  # EACCES, EPERM
    UNKNOWN = "unknown"  # anything else the OS reports


class ContextArchitectError(Exception):
    """Base class for errors surfaced to the CLI."""


class DocumentReadError(ContextArchitectError):
    """A document exists but could not be read."""

    def __init__(self, path: Path, kind: ReadError) -> None:
        super().__init__(f"Cannot read {path} ({kind.value})")
        self.path = path
        self.kind = kind


def classify_read_error(error: OSError) -> ReadError:
    """Classify an OSError raised while opening or reading a file.

    A directory where a file was expected counts as missing: a link
    to ``docs/`` does not resolve to a readable document. Names too long
    for the filesystem and symlink loops are missing too: no file can
    ever be read at such a path.
    """
    if isinstance(
        error,
        (FileNotFoundError, NotADirectoryError, IsADirectoryError),
    ):
        return ReadError.MISSING
    if error.errno in _UNREACHABLE_ERRNOS:
        return ReadError.MISSING
    if isinstance(error, PermissionError):
        return ReadError.PERMISSION
    return ReadError.UNKNOWN


def is_absent(kind: ReadError | None) -> bool:
    """Return True if the read failure means the file is simply not there."""
    return kind is ReadError.MISSING
