"""Restricted glob matching over POSIX-style relative paths.

Supported wildcards:

* ``*``   zero or more characters, never ``/``
* ``?``   exactly one character, never ``/``
* ``**/`` zero or more whole path segments followed by ``/``
* ``**``  anything, including ``/``

Every other character is literal. Matches are anchored at both ends.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from pathlib import Path


def _normalize(value: str) -> str:
    return value.replace("\\", "/")


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Translate a glob into a compiled, fully anchored regex.

    A new pattern object is built per call; nothing is shared between
    matches.
    """
    parts: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if i + 1 < n and pattern[i + 1] == "*":
                if i + 2 < n and pattern[i + 2] == "/":
                    parts.append("(?:.+/)?")
                    i += 3
                else:
                    parts.append(".*")
                    i += 2
            else:
                parts.append("[^/]*")
                i += 1
        elif c == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(c))
            i += 1
    return re.compile("".join(parts), re.DOTALL)


def match_glob(path: str, pattern: str) -> bool:
    """Return True if the whole of ``path`` matches ``pattern``."""
    regex = glob_to_regex(_normalize(pattern))
    return regex.fullmatch(_normalize(path)) is not None


def should_ignore(
    file_path: Path | str,
    root: Path | str,
    ignore_patterns: Iterable[str] | None,
) -> bool:
    """Check a file's root-relative path against the ignore globs."""
    patterns = list(ignore_patterns or ())
    if not patterns:
        return False
    rel = os.path.relpath(file_path, root)
    return any(match_glob(rel, p) for p in patterns)
