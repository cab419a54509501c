"""Knowledge probe: pull directives out of a context file and phrase them
as questions or batched prompts for a redundancy check against a model.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from context_architect.analysis.markdown import is_fence, split_lines
from context_architect.analysis.schemas import ProbeBatch, ProbeQuestion
from context_architect.constants import (
    DEFAULT_PROBE_BATCH_SIZE,
    MIN_STATEMENT_CHARS,
    PACKAGE_JSON,
)
from context_architect.prompts import PROBE_BATCH_PROMPT, format_numbered

logger = logging.getLogger(__name__)

# A line that is only a link, e.g. "See [text](url)." or "- [text](url)"
_LINK_ONLY_RE = re.compile(
    r"^\s*(?:[-*]?\s*)?(?:See\s+)?\[.*?\]\(.*?\)\.?\s*$"
)

_USE_FOR_RE = re.compile(r"^Use\s+(.+?)\s+for\s+(.+?)\.?\s*$", re.IGNORECASE)
_ALWAYS_RE = re.compile(r"^Always\s+(.+?)\.?\s*$", re.IGNORECASE)
_MUST_RE = re.compile(r"^(.+?)\s+must\s+(.+?)\.?\s*$", re.IGNORECASE)

# dependency name → framework label, checked in priority order
_FRAMEWORKS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("react",), "React"),
    (("vue",), "Vue"),
    (("angular", "@angular/core"), "Angular"),
    (("svelte",), "Svelte"),
    (("next",), "Next.js"),
    (("express",), "Express"),
)


def extract_statements(markdown: str) -> list[str]:
    """Directive statements from markdown, trimmed.

    Skips fenced code, blank lines, headings, lines shorter than ten
    characters, and lines that are nothing but a link.
    """
    statements: list[str] = []
    in_code = False
    for line in split_lines(markdown):
        if is_fence(line):
            in_code = not in_code
            continue
        if in_code:
            continue
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        if len(trimmed) < MIN_STATEMENT_CHARS:
            continue
        if _LINK_ONLY_RE.match(trimmed):
            continue
        statements.append(trimmed)
    return statements


def _convert_to_question(statement: str, framework: str) -> str:
    suffix = f" in {framework}" if framework else ""

    match = _USE_FOR_RE.match(statement)
    if match:
        return f"What is the standard approach for {match.group(2)}{suffix}?"

    match = _ALWAYS_RE.match(statement)
    if match:
        return f"Is {match.group(1)} the standard practice{suffix}?"

    match = _MUST_RE.match(statement)
    if match:
        return (
            f"Should {match.group(1)} {match.group(2)} by default{suffix}?"
        )

    return (
        "Is the following a standard convention or "
        f"project-specific{suffix}? {statement}"
    )


def to_probe_questions(
    statements: list[str], framework: str = ""
) -> list[ProbeQuestion]:
    """Rewrite imperative statements as neutral questions.

    Patterns, in priority order:
      "Use X for Y"  → "What is the standard approach for Y?"
      "Always X"     → "Is X the standard practice?"
      "X must Y"     → "Should X Y by default?"
      anything else  → asks whether the statement is a standard convention
    """
    return [
        ProbeQuestion(
            original=stmt, question=_convert_to_question(stmt, framework)
        )
        for stmt in statements
    ]


def build_probe_batches(
    statements: list[str],
    batch_size: int = DEFAULT_PROBE_BATCH_SIZE,
) -> list[ProbeBatch]:
    """Split statements into consecutive batches with ready-to-send prompts.

    Batch ids start at 1. Statement numbers in the prompts run across
    batches (the second batch of ten starts at 11), so answers can be
    mapped back to the flat statement list.
    """
    if batch_size < 1:
        msg = f"batch_size must be at least 1, got {batch_size}"
        raise ValueError(msg)

    batches: list[ProbeBatch] = []
    for offset in range(0, len(statements), batch_size):
        chunk = statements[offset : offset + batch_size]
        prompt = PROBE_BATCH_PROMPT.format(
            statements=format_numbered(chunk, start=offset + 1)
        )
        batches.append(
            ProbeBatch(
                batch_id=len(batches) + 1,
                statements=chunk,
                prompt=prompt,
            )
        )
    return batches


def detect_framework(root: Path | str) -> str:
    """Best-effort framework name from ``package.json``; empty if unknown."""
    pkg_path = Path(root) / PACKAGE_JSON
    try:
        pkg = json.loads(pkg_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return ""
    if not isinstance(pkg, dict):
        return ""

    deps: dict[str, object] = {}
    for key in ("dependencies", "devDependencies"):
        section = pkg.get(key)
        if isinstance(section, dict):
            deps.update(section)

    for names, label in _FRAMEWORKS:
        if any(name in deps for name in names):
            logger.debug("Detected framework %s from %s", label, pkg_path)
            return label
    return ""
