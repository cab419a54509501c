"""Document ingestion: read files, match ignore globs, enumerate markdown."""

import logging
from pathlib import Path

from context_architect.ingestion.globbing import match_glob, should_ignore
from context_architect.ingestion.schemas import DocumentRead
from context_architect.ingestion.walker import list_markdown_files
from context_architect.resilience.errors import (
    DocumentReadError,
    ReadError,
    classify_read_error,
)

__all__ = [
    "DocumentRead",
    "list_markdown_files",
    "match_glob",
    "read_document",
    "read_existing",
    "should_ignore",
]

logger = logging.getLogger(__name__)


def read_document(path: Path) -> DocumentRead:
    """Read a UTF-8 text file in one step, classifying any failure.

    Undecodable bytes are replaced rather than raising, so the only
    failures are OS-level ones (missing, permission, other). A path the
    OS cannot even express, such as one with an embedded NUL, is missing.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            text = f.read()
    except OSError as exc:
        kind = classify_read_error(exc)
        logger.debug("Read of %s failed: %s", path, kind.value)
        return DocumentRead(path=path, error=kind)
    except ValueError:
        logger.debug("Read of %s failed: invalid path", path)
        return DocumentRead(path=path, error=ReadError.MISSING)
    return DocumentRead(path=path, text=text)


def read_existing(path: Path) -> DocumentRead:
    """Read a document that is expected to be there.

    Returns the (possibly missing) read; raises DocumentReadError for
    any failure other than absence.
    """
    doc = read_document(path)
    if doc.error is not None and not doc.missing:
        raise DocumentReadError(path, doc.error)
    return doc
