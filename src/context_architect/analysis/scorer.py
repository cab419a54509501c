"""Context Complexity Score (CCS) calculator.

Scores a project's context file and documentation tree for
over-specification. Each rule is a small function returning its
factors; the results are concatenated in a fixed order:

monolith, role_mixing, tool_forcing, index_content_leak,
no_docs_separation, broken_link, headerless_doc, fat_doc, orphan_doc.

Rules never short-circuit one another.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeAlias

from context_architect.analysis.bounded import (
    cap_with_overflow,
    overflow_detail,
)
from context_architect.analysis.markdown import starts_with_heading
from context_architect.analysis.project import (
    ProjectContext,
    load_project,
    read_linked_documents,
)
from context_architect.analysis.rules import (
    has_tool_forcing,
    is_fat,
    is_monolith,
    lacks_docs_separation,
    matched_role_categories,
    measure_content_leak,
    orphan_docs,
)
from context_architect.analysis.rules_config import DEFAULT_RULES, RuleConfig
from context_architect.analysis.schemas import (
    AnalysisResult,
    Factor,
    ResolvedLink,
)
from context_architect.constants import FactorName
from context_architect.ingestion import DocumentRead, read_existing

logger = logging.getLogger(__name__)

# Factor weights
MONOLITH_SCORE = 3
ROLE_MIXING_SCORE = 2
TOOL_FORCING_SCORE = 2
INDEX_CONTENT_LEAK_SCORE = 2
NO_DOCS_SEPARATION_SCORE = 1
BROKEN_LINK_SCORE = 2
HEADERLESS_DOC_SCORE = 1
FAT_DOC_SCORE = 2
ORPHAN_DOC_SCORE = 1

LinkedRead: TypeAlias = tuple[ResolvedLink, DocumentRead]


def calculate_ccs(
    root: Path | str,
    context_file: str | None = None,
    rules: RuleConfig = DEFAULT_RULES,
) -> AnalysisResult:
    """Score ``root`` and return factors, total and rating.

    A missing or unreadable context file scores nothing.
    """
    project = load_project(root, context_file)
    if project is None:
        return AnalysisResult()

    linked = read_linked_documents(project)
    orphans = orphan_docs(project)

    factors = [
        *_monolith(project, rules),
        *_role_mixing(project, rules),
        *_tool_forcing(project),
        *_index_content_leak(project, rules),
        *_no_docs_separation(project, rules),
        *_broken_links(linked),
        *_headerless_docs(linked),
        *_fat_docs(project, linked, orphans, rules),
        *_orphan_docs(project, orphans, rules),
    ]
    result = AnalysisResult(factors=factors)
    logger.info(
        "CCS for %s: %d (%s, %d factors)",
        project.root,
        result.total,
        result.rating,
        len(factors),
    )
    return result


# ── Index rules ──────────────────────────────────────────


def _index_factor(
    project: ProjectContext,
    name: FactorName,
    score: int,
    detail: str | None = None,
) -> Factor:
    return Factor(
        name=name,
        score=score,
        file=str(project.context_path),
        detail=detail,
    )


def _monolith(project: ProjectContext, rules: RuleConfig) -> list[Factor]:
    line_count = len(project.lines)
    if not is_monolith(line_count, rules):
        return []
    return [
        _index_factor(
            project,
            FactorName.MONOLITH,
            MONOLITH_SCORE,
            f"{line_count} lines",
        )
    ]


def _role_mixing(
    project: ProjectContext, rules: RuleConfig
) -> list[Factor]:
    labels = matched_role_categories(project.text, rules)
    if len(labels) < rules.role_category_min:
        return []
    return [
        _index_factor(
            project,
            FactorName.ROLE_MIXING,
            ROLE_MIXING_SCORE,
            ", ".join(labels),
        )
    ]


def _tool_forcing(project: ProjectContext) -> list[Factor]:
    if not has_tool_forcing(project.text):
        return []
    return [
        _index_factor(
            project, FactorName.TOOL_FORCING, TOOL_FORCING_SCORE
        )
    ]


def _index_content_leak(
    project: ProjectContext, rules: RuleConfig
) -> list[Factor]:
    leak = measure_content_leak(project.text, rules)
    if not leak.triggered(rules):
        return []
    return [
        _index_factor(
            project,
            FactorName.INDEX_CONTENT_LEAK,
            INDEX_CONTENT_LEAK_SCORE,
            (
                f"{leak.code_blocks} code blocks, "
                f"{leak.long_paragraphs} long paragraphs"
            ),
        )
    ]


def _no_docs_separation(
    project: ProjectContext, rules: RuleConfig
) -> list[Factor]:
    if not lacks_docs_separation(project, rules):
        return []
    return [
        _index_factor(
            project,
            FactorName.NO_DOCS_SEPARATION,
            NO_DOCS_SEPARATION_SCORE,
        )
    ]


# ── Linked-document rules ────────────────────────────────


def _broken_links(linked: list[LinkedRead]) -> list[Factor]:
    """One factor per broken link occurrence."""
    return [
        Factor(
            name=FactorName.BROKEN_LINK,
            score=BROKEN_LINK_SCORE,
            file=link.absolute,
            detail=link.raw,
        )
        for link, doc in linked
        if doc.missing
    ]


def _existing_linked(linked: list[LinkedRead]) -> list[DocumentRead]:
    """Distinct readable link targets, first occurrence order."""
    seen: set[Path] = set()
    docs: list[DocumentRead] = []
    for _link, doc in linked:
        if doc.ok and doc.path not in seen:
            seen.add(doc.path)
            docs.append(doc)
    return docs


def _headerless_docs(linked: list[LinkedRead]) -> list[Factor]:
    return [
        Factor(
            name=FactorName.HEADERLESS_DOC,
            score=HEADERLESS_DOC_SCORE,
            file=str(doc.path),
        )
        for doc in _existing_linked(linked)
        if not starts_with_heading(doc.text or "")
    ]


def _fat_docs(
    project: ProjectContext,
    linked: list[LinkedRead],
    orphans: list[Path],
    rules: RuleConfig,
) -> list[Factor]:
    """Fat linked docs, then fat orphans; capped with an overflow record."""
    candidates = _existing_linked(linked)
    seen = {doc.path for doc in candidates}
    for orphan in orphans:
        if orphan in seen:
            continue
        doc = read_existing(orphan)
        if doc.ok:
            candidates.append(doc)

    fat = [
        Factor(
            name=FactorName.FAT_DOC,
            score=FAT_DOC_SCORE,
            file=str(doc.path),
            detail=f"{doc.line_count} lines",
        )
        for doc in candidates
        if is_fat(doc.line_count, rules)
    ]
    return cap_with_overflow(
        fat,
        rules.emission_cap,
        lambda remainder: _index_factor(
            project,
            FactorName.FAT_DOC_OVERFLOW,
            0,
            overflow_detail(remainder, "fat doc"),
        ),
    )


def _orphan_docs(
    project: ProjectContext,
    orphans: list[Path],
    rules: RuleConfig,
) -> list[Factor]:
    factors = [
        Factor(
            name=FactorName.ORPHAN_DOC,
            score=ORPHAN_DOC_SCORE,
            file=str(orphan),
        )
        for orphan in orphans
    ]
    return cap_with_overflow(
        factors,
        rules.emission_cap,
        lambda remainder: Factor(
            name=FactorName.ORPHAN_DOC_OVERFLOW,
            score=0,
            file=str(project.docs_dir),
            detail=overflow_detail(remainder, "orphan doc"),
        ),
    )
