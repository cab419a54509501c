"""Three-phase anti-pattern detector for context files.

Phases:
  - structure: the context file itself (size, roles, mandates, dumps)
  - docs:      linked docs and the docs/ tree (headers, size)
  - links:     link integrity and unreachable documents

Each phase is a fixed sequence of rule functions whose findings are
concatenated in order. A call runs exactly one phase.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from context_architect.analysis.bounded import (
    cap_with_overflow,
    overflow_detail,
)
from context_architect.analysis.markdown import (
    Paragraph,
    find_line,
    segment_paragraphs,
    starts_with_heading,
)
from context_architect.analysis.project import (
    ProjectContext,
    load_project,
    read_linked_documents,
)
from context_architect.analysis.rules import (
    is_fat,
    is_monolith,
    matched_role_categories,
    measure_content_leak,
    orphan_docs,
    tool_forcing_lines,
)
from context_architect.analysis.rules_config import (
    ABSTRACT_LANGUAGE_RE,
    DEFAULT_RULES,
    LINT_RULE_RE,
    TREE_LINE_RE,
    RuleConfig,
)
from context_architect.analysis.schemas import DetectionResult, Finding
from context_architect.constants import (
    MARKDOWN_SUFFIX,
    FindingType,
    Phase,
    Severity,
)
from context_architect.ingestion import DocumentRead, read_existing

logger = logging.getLogger(__name__)


def detect_antipatterns(
    root: Path | str,
    phase: Phase | str,
    context_file: str | None = None,
    rules: RuleConfig = DEFAULT_RULES,
) -> DetectionResult:
    """Run one detection phase over the project at ``root``.

    An unreadable context file or an unknown phase yields no findings;
    rejecting bad phase names is the caller's job.
    """
    project = load_project(root, context_file)
    if project is None:
        return DetectionResult(phase=phase)

    runner = _PHASES.get(str(phase))
    if runner is None:
        logger.debug("Unknown phase %r; nothing to run", phase)
        return DetectionResult(phase=phase)

    findings = runner(project, rules)
    logger.info(
        "Phase %s on %s: %d finding(s)",
        phase,
        project.root,
        len(findings),
    )
    return DetectionResult(phase=phase, findings=findings)


# ── Phase: structure ─────────────────────────────────────


def _analyse_structure(
    project: ProjectContext, rules: RuleConfig
) -> list[Finding]:
    paragraphs = segment_paragraphs(project.text)
    return [
        *_monolith(project, rules),
        *_role_mixing(project, rules),
        *_tool_forcing(project),
        *_directory_dump(project, rules),
        *_lint_dump(project, rules),
        *_philosophy_essays(project, paragraphs, rules),
        *_index_content_leak(project, paragraphs, rules),
    ]


def _index_finding(
    project: ProjectContext,
    kind: FindingType,
    severity: Severity,
    message: str,
    line: int = 1,
) -> Finding:
    return Finding(
        type=kind,
        severity=severity,
        file=str(project.context_path),
        line=line,
        message=message,
    )


def _monolith(project: ProjectContext, rules: RuleConfig) -> list[Finding]:
    line_count = len(project.lines)
    if not is_monolith(line_count, rules):
        return []
    return [
        _index_finding(
            project,
            FindingType.MONOLITH,
            Severity.HIGH,
            (
                f"{project.context_path.name} is {line_count} lines "
                "- consider splitting into focused docs"
            ),
        )
    ]


def _role_mixing(
    project: ProjectContext, rules: RuleConfig
) -> list[Finding]:
    labels = matched_role_categories(project.text, rules)
    if len(labels) < rules.role_category_min:
        return []
    return [
        _index_finding(
            project,
            FindingType.ROLE_MIXING,
            Severity.MEDIUM,
            (
                f"{project.context_path.name} mixes {len(labels)} roles: "
                + ", ".join(labels)
            ),
        )
    ]


def _tool_forcing(project: ProjectContext) -> list[Finding]:
    return [
        _index_finding(
            project,
            FindingType.TOOL_FORCING,
            Severity.MEDIUM,
            f'Tool forcing: "{line.strip()}"',
            line=number,
        )
        for number, line in tool_forcing_lines(project.text)
    ]


def _directory_dump(
    project: ProjectContext, rules: RuleConfig
) -> list[Finding]:
    tree_lines = [
        number
        for number, line in enumerate(project.lines, 1)
        if TREE_LINE_RE.search(line)
    ]
    if len(tree_lines) < rules.tree_line_min:
        return []
    return [
        _index_finding(
            project,
            FindingType.DIRECTORY_DUMP,
            Severity.LOW,
            (
                "Directory tree dump detected "
                f"({len(tree_lines)} tree-output lines)"
            ),
            line=tree_lines[0],
        )
    ]


def _lint_dump(project: ProjectContext, rules: RuleConfig) -> list[Finding]:
    count = sum(1 for _ in LINT_RULE_RE.finditer(project.text))
    if count < rules.lint_rule_min:
        return []
    return [
        _index_finding(
            project,
            FindingType.LINT_DUMP,
            Severity.LOW,
            (
                f"{count} lint rule references found "
                "- consider linking to the linter config"
            ),
        )
    ]


def _philosophy_essays(
    project: ProjectContext,
    paragraphs: list[Paragraph],
    rules: RuleConfig,
) -> list[Finding]:
    return [
        _index_finding(
            project,
            FindingType.PHILOSOPHY_ESSAY,
            Severity.LOW,
            (
                f"Long abstract paragraph ({len(p.text)} chars) "
                "- move to a design doc"
            ),
            line=p.start_line,
        )
        for p in paragraphs
        if len(p.text) >= rules.essay_chars
        and ABSTRACT_LANGUAGE_RE.search(p.text)
    ]


def _index_content_leak(
    project: ProjectContext,
    paragraphs: list[Paragraph],
    rules: RuleConfig,
) -> list[Finding]:
    leak = measure_content_leak(project.text, rules, paragraphs)
    if not leak.triggered(rules):
        return []
    return [
        _index_finding(
            project,
            FindingType.INDEX_CONTENT_LEAK,
            Severity.HIGH,
            (
                "Index file contains heavy content "
                f"({leak.code_blocks} code blocks, "
                f"{leak.long_paragraphs} long paragraphs)"
            ),
        )
    ]


# ── Phase: docs ──────────────────────────────────────────


def _collect_docs(project: ProjectContext) -> list[DocumentRead]:
    """Linked markdown targets, then the docs tree; ignore-filtered, deduplicated."""
    paths: dict[Path, None] = {}
    for link in project.links:
        if link.absolute.endswith(MARKDOWN_SUFFIX):
            paths[Path(link.absolute)] = None
    for doc_path in project.docs_tree():
        paths[doc_path] = None

    docs: list[DocumentRead] = []
    for path in paths:
        if project.is_ignored(path):
            continue
        doc = read_existing(path)
        if doc.ok:
            docs.append(doc)
    return docs


def _analyse_docs(
    project: ProjectContext, rules: RuleConfig
) -> list[Finding]:
    docs = _collect_docs(project)
    headerless = [
        Finding(
            type=FindingType.HEADERLESS_DOC,
            severity=Severity.MEDIUM,
            file=str(doc.path),
            line=1,
            message="Document does not start with a heading",
        )
        for doc in docs
        if not starts_with_heading(doc.text or "")
    ]
    fat = [
        Finding(
            type=FindingType.FAT_DOC,
            severity=Severity.MEDIUM,
            file=str(doc.path),
            line=1,
            message=f"Document is {doc.line_count} lines - consider splitting",
        )
        for doc in docs
        if is_fat(doc.line_count, rules)
    ]
    return [*headerless, *fat]


# ── Phase: links ─────────────────────────────────────────


def _analyse_links(
    project: ProjectContext, rules: RuleConfig
) -> list[Finding]:
    return [
        *_broken_links(project, rules),
        *_orphans(project, rules),
    ]


def _broken_links(
    project: ProjectContext, rules: RuleConfig
) -> list[Finding]:
    broken = [
        _index_finding(
            project,
            FindingType.BROKEN_LINK,
            Severity.HIGH,
            f"Broken link: {link.raw} does not exist",
            line=find_line(project.text, link.raw),
        )
        for link, doc in read_linked_documents(project)
        if doc.missing
    ]
    return cap_with_overflow(
        broken,
        rules.emission_cap,
        lambda remainder: _index_finding(
            project,
            FindingType.BROKEN_LINK_OVERFLOW,
            Severity.INFO,
            overflow_detail(remainder, "broken link"),
        ),
    )


def _orphans(project: ProjectContext, rules: RuleConfig) -> list[Finding]:
    index_name = project.context_path.name
    found = [
        Finding(
            type=FindingType.ORPHAN_DOC,
            severity=Severity.MEDIUM,
            file=str(orphan),
            line=1,
            message=f"{orphan.name} is not linked from {index_name}",
        )
        for orphan in orphan_docs(project)
    ]
    return cap_with_overflow(
        found,
        rules.emission_cap,
        lambda remainder: Finding(
            type=FindingType.ORPHAN_DOC_OVERFLOW,
            severity=Severity.INFO,
            file=str(project.docs_dir),
            line=1,
            message=overflow_detail(remainder, "orphan doc"),
        ),
    )


_PHASES: dict[
    str, Callable[[ProjectContext, RuleConfig], list[Finding]]
] = {
    Phase.STRUCTURE: _analyse_structure,
    Phase.DOCS: _analyse_docs,
    Phase.LINKS: _analyse_links,
}
