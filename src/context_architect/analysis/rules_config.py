"""Thresholds and keyword tables for the scorer and detector.

The scorer (scorer.py) and detector (detector.py) consume a RuleConfig
directly. The heuristic checks (directory dump, lint dump, philosophy
essay) have no precision target, so their thresholds live here rather
than in the rule code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class RoleCategory:
    """A responsibility area recognised from heading keywords."""

    label: str
    keywords: tuple[str, ...]

    def matches(self, heading: str) -> bool:
        lowered = heading.lower()
        return any(kw in lowered for kw in self.keywords)


ROLE_CATEGORIES: tuple[RoleCategory, ...] = (
    RoleCategory("architecture", ("architect", "design")),
    RoleCategory("style", ("style", "naming")),
    RoleCategory("testing", ("test",)),
    RoleCategory("deploy", ("deploy",)),
    RoleCategory("tooling", ("tool", "build")),
    RoleCategory("api", ("api",)),
    RoleCategory("git/ci", ("git", "ci", "workflow")),
    RoleCategory("security/devops", ("security", "infra", "devops")),
    RoleCategory("conventions", ("convention",)),
)

TOOL_FORCING_RE = re.compile(r"\b(always use|must use)\b", re.IGNORECASE)

TREE_LINE_RE = re.compile(r"[├└│─]")

LINT_RULE_RE = re.compile(
    r"(?<![\w@/-])(no-unused-vars|no-console|semi|quotes|indent|eqeqeq"
    r"|@typescript-eslint/[\w-]+|eslint-disable|eslint-enable)(?!\w)"
)

ABSTRACT_LANGUAGE_RE = re.compile(
    r"\b(philosophy|principle|believe|vision|paradigm|ethos"
    r"|fundamental|holistic|comprehensive)\b",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class RuleConfig:
    """Thresholds shared by the CCS scorer and the anti-pattern detector."""

    monolith_lines: int = 300
    fat_doc_lines: int = 200
    no_docs_min_lines: int = 30
    role_category_min: int = 3
    role_heading_max_level: int = 3
    code_block_min: int = 3
    long_paragraph_chars: int = 300
    long_paragraph_min: int = 2
    tree_line_min: int = 5
    lint_rule_min: int = 5
    essay_chars: int = 500
    emission_cap: int = 10


DEFAULT_RULES = RuleConfig()
