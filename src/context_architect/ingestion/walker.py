"""Recursively enumerate markdown files under a directory."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from context_architect.constants import MARKDOWN_SUFFIX
from context_architect.ingestion.globbing import should_ignore

logger = logging.getLogger(__name__)


def list_markdown_files(
    directory: Path | str,
    root: Path | str | None = None,
    ignore_patterns: Iterable[str] | None = None,
) -> list[Path]:
    """Return absolute paths of all ``.md`` files below ``directory``.

    * Symlinks (file or directory) are neither followed nor yielded.
    * When both ``root`` and ``ignore_patterns`` are given, files whose
      root-relative path matches any pattern are excluded.
    * A missing or unreadable directory yields an empty list; a project
      without a docs tree is a normal condition. An unreadable
      subdirectory drops only its own subtree.

    Results are sorted so callers that cap output are deterministic.
    """
    start = Path(os.path.abspath(directory))
    patterns = list(ignore_patterns or ())
    files = _walk_markdown(start)

    if root is not None and patterns:
        files = [f for f in files if not should_ignore(f, root, patterns)]
    return files


def _walk_markdown(current: Path) -> list[Path]:
    """Recursive walk helper; entries visited in sorted order."""
    try:
        entries = sorted(current.iterdir())
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", current, exc)
        return []

    files: list[Path] = []
    for item in entries:
        if item.is_symlink():
            continue
        if item.is_dir():
            files.extend(_walk_markdown(item))
        elif item.is_file() and item.name.endswith(MARKDOWN_SUFFIX):
            files.append(item)
    return files
