"""Tests for the token estimator."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from context_architect.analysis import TokenEstimate, estimate_project_tokens
from context_architect.constants import estimate_tokens

WriteFile = Callable[[str, str], Path]


def test_estimate_rounds_up() -> None:
    assert estimate_tokens(0) == 0
    assert estimate_tokens(1) == 1
    assert estimate_tokens(4) == 1
    assert estimate_tokens(5) == 2


def test_missing_context_file_is_zero(project: Path) -> None:
    assert estimate_project_tokens(project) == TokenEstimate()
    assert estimate_project_tokens(project).model_dump() == {
        "total_chars": 0,
        "estimated_tokens": 0,
        "files": [],
    }


def test_index_and_distinct_linked_files(
    project: Path, write_file: WriteFile
) -> None:
    context_text = (
        "# P\n[a](docs/a.md)\n[a again](docs/a.md)\n"
        "[self](CLAUDE.md)\n[gone](docs/gone.md)\n[b](b.txt)\n"
    )
    context = write_file("CLAUDE.md", context_text)
    a = write_file("docs/a.md", "abcde")
    b = write_file("b.txt", "xyz")

    result = estimate_project_tokens(project)
    assert [(f.file, f.role) for f in result.files] == [
        (str(context), "index"),
        (str(a), "linked"),
        (str(b), "linked"),
    ]
    assert result.files[0].chars == len(context_text)
    assert result.files[1].chars == 5
    assert result.files[1].tokens == 2
    assert result.files[2].tokens == 1
    assert result.total_chars == len(context_text) + 8
    assert result.estimated_tokens == estimate_tokens(result.total_chars)


def test_total_tokens_use_total_chars(
    project: Path, write_file: WriteFile
) -> None:
    """Rounding happens once on the total, not per file."""
    write_file("CLAUDE.md", "[a](a.md)")  # 9 chars -> 3 tokens
    write_file("a.md", "abc")  # 3 chars -> 1 token

    result = estimate_project_tokens(project)
    assert sum(f.tokens for f in result.files) == 4
    assert result.total_chars == 12
    assert result.estimated_tokens == 3


def test_unreachable_link_targets_are_skipped(
    project: Path, write_file: WriteFile
) -> None:
    context_text = (
        "# P\n![logo](data:image/png;base64," + "A" * 5000 + ")\n"
    )
    context = write_file("CLAUDE.md", context_text)
    result = estimate_project_tokens(project)
    assert [f.file for f in result.files] == [str(context)]
    assert result.total_chars == len(context_text)
