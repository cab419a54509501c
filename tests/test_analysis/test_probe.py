"""Tests for statement extraction, probe questions and batching."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from context_architect.analysis import (
    build_probe_batches,
    detect_framework,
    extract_statements,
    to_probe_questions,
)
from context_architect.prompts import format_numbered

# ── extract_statements ───────────────────────────────────────


class TestExtractStatements:
    def test_heading_and_bare_link_only(self) -> None:
        text = "# Docs\n\n- See [the guide](docs/guide.md).\n"
        assert extract_statements(text) == []

    def test_short_line_skipped(self) -> None:
        text = "Short.\nRun the migrations before starting the server.\n"
        assert extract_statements(text) == [
            "Run the migrations before starting the server."
        ]

    def test_code_blocks_skipped(self) -> None:
        text = (
            "```bash\nnpm run build --production\n```\n"
            "  Use pnpm for package management.  \n"
        )
        assert extract_statements(text) == [
            "Use pnpm for package management."
        ]

    @pytest.mark.parametrize(
        "line",
        [
            "[guide](docs/guide.md)",
            "* [guide](docs/guide.md)",
            "See [guide](docs/guide.md).",
        ],
    )
    def test_link_only_variants(self, line: str) -> None:
        assert extract_statements(line) == []

    def test_link_inside_sentence_kept(self) -> None:
        line = "Read [the guide](docs/guide.md) before deploying."
        assert extract_statements(line) == [line]


# ── to_probe_questions ───────────────────────────────────────


class TestProbeQuestions:
    def test_use_for(self) -> None:
        [q] = to_probe_questions(["Use Zustand for state management."])
        assert q.original == "Use Zustand for state management."
        assert q.question == (
            "What is the standard approach for state management?"
        )

    def test_always(self) -> None:
        [q] = to_probe_questions(["Always write tests first."])
        assert q.question == "Is write tests first the standard practice?"

    def test_must(self) -> None:
        [q] = to_probe_questions(["Components must be typed."])
        assert q.question == "Should Components be typed by default?"

    def test_fallback(self) -> None:
        [q] = to_probe_questions(["Prefer small pull requests."])
        assert q.question == (
            "Is the following a standard convention or project-specific? "
            "Prefer small pull requests."
        )

    def test_framework_suffix(self) -> None:
        [q] = to_probe_questions(
            ["Use hooks for side effects."], framework="React"
        )
        assert q.question == (
            "What is the standard approach for side effects in React?"
        )


# ── build_probe_batches ──────────────────────────────────────


class TestProbeBatches:
    def test_twelve_statements_two_batches(self) -> None:
        statements = [f"Statement number {i}" for i in range(1, 13)]
        batches = build_probe_batches(statements)

        assert [b.batch_id for b in batches] == [1, 2]
        assert [len(b.statements) for b in batches] == [10, 2]
        assert "1. Statement number 1" in batches[0].prompt
        assert "10. Statement number 10" in batches[0].prompt
        assert "11. Statement number 11" in batches[1].prompt
        assert "12. Statement number 12" in batches[1].prompt
        assert "1. Statement number 11" not in batches[1].prompt.splitlines()

    def test_prompt_asks_for_labels(self) -> None:
        [batch] = build_probe_batches(["Use pnpm for installs."])
        assert "REDUNDANT" in batch.prompt
        assert "PROJECT-SPECIFIC" in batch.prompt

    def test_empty_input(self) -> None:
        assert build_probe_batches([]) == []

    def test_custom_batch_size(self) -> None:
        batches = build_probe_batches(["a" * 10] * 5, batch_size=2)
        assert [len(b.statements) for b in batches] == [2, 2, 1]

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_batch_size(self, size: int) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            build_probe_batches(["statement here"], batch_size=size)

    def test_format_numbered_start(self) -> None:
        assert format_numbered(["a", "b"], start=11) == "11. a\n12. b"


# ── detect_framework ─────────────────────────────────────────


def _write_package(root: Path, data: object) -> None:
    (root / "package.json").write_text(json.dumps(data))


class TestDetectFramework:
    def test_no_package_json(self, tmp_path: Path) -> None:
        assert detect_framework(tmp_path) == ""

    def test_invalid_json(self, tmp_path: Path) -> None:
        (tmp_path / "package.json").write_text("{oops")
        assert detect_framework(tmp_path) == ""

    def test_dev_dependencies_count(self, tmp_path: Path) -> None:
        _write_package(tmp_path, {"devDependencies": {"svelte": "^4"}})
        assert detect_framework(tmp_path) == "Svelte"

    def test_priority_order(self, tmp_path: Path) -> None:
        _write_package(
            tmp_path,
            {"dependencies": {"next": "14", "react": "18", "express": "4"}},
        )
        assert detect_framework(tmp_path) == "React"

    def test_angular_core(self, tmp_path: Path) -> None:
        _write_package(tmp_path, {"dependencies": {"@angular/core": "17"}})
        assert detect_framework(tmp_path) == "Angular"

    def test_unknown_dependencies(self, tmp_path: Path) -> None:
        _write_package(tmp_path, {"dependencies": {"lodash": "4"}})
        assert detect_framework(tmp_path) == ""

    def test_non_object_json(self, tmp_path: Path) -> None:
        _write_package(tmp_path, ["react"])
        assert detect_framework(tmp_path) == ""
