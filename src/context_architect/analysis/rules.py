"""Rule predicates shared by the CCS scorer and the anti-pattern detector.

Each function is pure over its inputs; the scorer and detector decide
how to weigh or report what these return.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from context_architect.analysis.markdown import (
    Paragraph,
    count_code_blocks,
    extract_headings,
    segment_paragraphs,
    split_lines,
)
from context_architect.analysis.project import ProjectContext
from context_architect.analysis.rules_config import (
    ROLE_CATEGORIES,
    TOOL_FORCING_RE,
    RuleConfig,
)


@dataclass(frozen=True)
class ContentLeak:
    """Inline-content measurements for an index file."""

    code_blocks: int
    long_paragraphs: int

    def triggered(self, rules: RuleConfig) -> bool:
        return (
            self.code_blocks >= rules.code_block_min
            or self.long_paragraphs >= rules.long_paragraph_min
        )


def is_monolith(line_count: int, rules: RuleConfig) -> bool:
    return line_count >= rules.monolith_lines


def is_fat(line_count: int, rules: RuleConfig) -> bool:
    return line_count >= rules.fat_doc_lines


def matched_role_categories(text: str, rules: RuleConfig) -> list[str]:
    """Labels of role categories hit by headings, in table order."""
    headings = extract_headings(text, rules.role_heading_max_level)
    return [
        category.label
        for category in ROLE_CATEGORIES
        if any(category.matches(h.text) for h in headings)
    ]


def has_tool_forcing(text: str) -> bool:
    return TOOL_FORCING_RE.search(text) is not None


def tool_forcing_lines(text: str) -> list[tuple[int, str]]:
    """(1-based line, line) for every line with a tool mandate."""
    return [
        (number, line)
        for number, line in enumerate(split_lines(text), 1)
        if TOOL_FORCING_RE.search(line)
    ]


def measure_content_leak(
    text: str,
    rules: RuleConfig,
    paragraphs: list[Paragraph] | None = None,
) -> ContentLeak:
    if paragraphs is None:
        paragraphs = segment_paragraphs(text)
    return ContentLeak(
        code_blocks=count_code_blocks(text),
        long_paragraphs=sum(
            1
            for p in paragraphs
            if len(p.text) >= rules.long_paragraph_chars
        ),
    )


def lacks_docs_separation(project: ProjectContext, rules: RuleConfig) -> bool:
    return len(project.lines) >= rules.no_docs_min_lines and not project.links


def orphan_docs(project: ProjectContext) -> list[Path]:
    """Docs-tree files not reachable from the context file.

    Configured reference docs are intentionally unlinked and never
    count as orphans.
    """
    known = project.linked_paths() | project.reference_paths()
    return [doc for doc in project.docs_tree() if str(doc) not in known]
