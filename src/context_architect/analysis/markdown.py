"""Line-oriented markdown scanning shared by the scorer and detector.

No AST is built. Fenced code blocks are recognised by lines whose
stripped form starts with three backticks; everything from one such
line to the next (inclusive) is code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_FENCE = "```"

# [label](target) where target does not start with http:// or https://
_RELATIVE_LINK_RE = re.compile(r"\[.*?\]\(((?!https?://).*?)\)")

_HEADING_RE = re.compile(r"^(#{1,6})[ \t]+(.+)$")


@dataclass(frozen=True)
class Paragraph:
    """A run of prose lines joined with single spaces."""

    text: str
    start_line: int  # 1-based, in the original text


@dataclass(frozen=True)
class Heading:
    """An ATX heading outside fenced code."""

    level: int
    text: str
    line: int  # 1-based


def extract_relative_links(text: str) -> list[str]:
    """Return relative link targets in order of appearance.

    Absolute http(s) URLs are skipped; duplicates are kept.
    """
    return [m.group(1) for m in _RELATIVE_LINK_RE.finditer(text)]


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, so a trailing newline yields an empty last line."""
    return text.split("\n")


def is_fence(line: str) -> bool:
    return line.strip().startswith(_FENCE)


def count_code_blocks(text: str) -> int:
    """Number of fenced blocks: delimiter lines paired up."""
    delimiters = sum(1 for line in split_lines(text) if is_fence(line))
    return delimiters // 2


def _prose_lines(text: str) -> list[tuple[int, str]]:
    """Lines outside fenced code, as (1-based line number, raw line)."""
    prose: list[tuple[int, str]] = []
    in_code = False
    for number, line in enumerate(split_lines(text), 1):
        if is_fence(line):
            in_code = not in_code
            continue
        if not in_code:
            prose.append((number, line))
    return prose


def segment_paragraphs(text: str) -> list[Paragraph]:
    """Split a document into paragraphs.

    Code blocks are removed first and do not break the paragraph they
    sit in. A blank line or a ``#`` line ends the current paragraph.
    """
    paragraphs: list[Paragraph] = []
    buffer: list[str] = []
    start = 0

    for number, line in _prose_lines(text):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            if buffer:
                paragraphs.append(Paragraph(" ".join(buffer), start))
                buffer = []
            continue
        if not buffer:
            start = number
        buffer.append(stripped)

    if buffer:
        paragraphs.append(Paragraph(" ".join(buffer), start))
    return paragraphs


def extract_headings(text: str, max_level: int = 6) -> list[Heading]:
    """ATX headings up to ``max_level``, skipping fenced code."""
    headings: list[Heading] = []
    for number, line in _prose_lines(text):
        match = _HEADING_RE.match(line)
        if match and len(match.group(1)) <= max_level:
            headings.append(
                Heading(
                    level=len(match.group(1)),
                    text=match.group(2).strip(),
                    line=number,
                )
            )
    return headings


def find_line(text: str, needle: str) -> int:
    """1-based line of the first line containing ``needle``; 1 if absent."""
    for number, line in enumerate(split_lines(text), 1):
        if needle in line:
            return number
    return 1


def starts_with_heading(text: str) -> bool:
    """True if the document's first non-whitespace character is ``#``."""
    return text.lstrip().startswith("#")
