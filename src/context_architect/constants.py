"""Shared constants: single source of truth for cross-module values.

All magic strings and numbers that appear in 2+ files belong here.
StrEnum members are str-compatible, so downstream code (JSON output,
CLI validation, test assertions) works unchanged.
"""

from __future__ import annotations

import math
from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class Phase(StrEnum):
    """Detection phases for the anti-pattern detector."""

    STRUCTURE = "structure"
    DOCS = "docs"
    LINKS = "links"


class Severity(StrEnum):
    """Severity levels for detector findings."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    INFO = "info"


class Rating(StrEnum):
    """CCS rating bands."""

    SAFE = "Safe"
    RISK = "Risk"
    HIGH_OVER_SPECIFICATION = "High Over-Specification"


class FactorName(StrEnum):
    """CCS factor identifiers, in rule evaluation order."""

    MONOLITH = "monolith"
    ROLE_MIXING = "role_mixing"
    TOOL_FORCING = "tool_forcing"
    INDEX_CONTENT_LEAK = "index_content_leak"
    NO_DOCS_SEPARATION = "no_docs_separation"
    BROKEN_LINK = "broken_link"
    HEADERLESS_DOC = "headerless_doc"
    FAT_DOC = "fat_doc"
    FAT_DOC_OVERFLOW = "fat_doc_overflow"
    ORPHAN_DOC = "orphan_doc"
    ORPHAN_DOC_OVERFLOW = "orphan_doc_overflow"


class FindingType(StrEnum):
    """Detector finding identifiers."""

    MONOLITH = "monolith"
    ROLE_MIXING = "role_mixing"
    TOOL_FORCING = "tool_forcing"
    DIRECTORY_DUMP = "directory_dump"
    LINT_DUMP = "lint_dump"
    PHILOSOPHY_ESSAY = "philosophy_essay"
    INDEX_CONTENT_LEAK = "index_content_leak"
    HEADERLESS_DOC = "headerless_doc"
    FAT_DOC = "fat_doc"
    BROKEN_LINK = "broken_link"
    BROKEN_LINK_OVERFLOW = "broken_link_overflow"
    ORPHAN_DOC = "orphan_doc"
    ORPHAN_DOC_OVERFLOW = "orphan_doc_overflow"


class FileRole(StrEnum):
    """Role of a file in a token estimate."""

    INDEX = "index"
    LINKED = "linked"


# ── File Names ───────────────────────────────────────────

CONFIG_FILENAME = ".context-architect.json"
DEFAULT_CONTEXT_FILE = "CLAUDE.md"
DEFAULT_PROBE_MODEL = "sonnet"
DOCS_DIRNAME = "docs"
MARKDOWN_SUFFIX = ".md"
PACKAGE_JSON = "package.json"

# ── Rating Bands ─────────────────────────────────────────

SAFE_MAX_TOTAL = 2
RISK_MAX_TOTAL = 5


def rating_for_total(total: int) -> Rating:
    """Map a CCS total to its rating band."""
    if total <= SAFE_MAX_TOTAL:
        return Rating.SAFE
    if total <= RISK_MAX_TOTAL:
        return Rating.RISK
    return Rating.HIGH_OVER_SPECIFICATION


# ── Knowledge Probe ──────────────────────────────────────

MIN_STATEMENT_CHARS = 10
DEFAULT_PROBE_BATCH_SIZE = 10

# ── Token Estimation ────────────────────────────────────

CHARS_PER_TOKEN_ESTIMATE = 4


def estimate_tokens(chars: int) -> int:
    """Rough token estimate using chars-per-token ratio, rounded up."""
    return math.ceil(chars / CHARS_PER_TOKEN_ESTIMATE)


# ── Exit Codes ──────────────────────────────────────────

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_ERROR = 2
