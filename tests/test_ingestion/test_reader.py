"""Tests for single-step document reads."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from context_architect.ingestion import read_document, read_existing
from context_architect.resilience.errors import DocumentReadError, ReadError


def test_reads_text(tmp_path: Path) -> None:
    path = tmp_path / "a.md"
    path.write_text("# Title\nbody\n", encoding="utf-8")

    doc = read_document(path)
    assert doc.ok
    assert doc.text == "# Title\nbody\n"
    assert doc.error is None
    assert doc.line_count == 3


def test_undecodable_bytes_replaced(tmp_path: Path) -> None:
    path = tmp_path / "bad.md"
    path.write_bytes(b"# Title\n\xff\xfe\n")

    doc = read_document(path)
    assert doc.ok
    assert "�" in (doc.text or "")


def test_missing_file_is_classified(tmp_path: Path) -> None:
    doc = read_document(tmp_path / "missing.md")
    assert not doc.ok
    assert doc.missing
    assert doc.error is ReadError.MISSING
    assert doc.line_count == 0


def test_directory_counts_as_missing(tmp_path: Path) -> None:
    (tmp_path / "docs").mkdir()
    doc = read_document(tmp_path / "docs")
    assert doc.missing


def test_path_through_file_counts_as_missing(tmp_path: Path) -> None:
    (tmp_path / "file.md").write_text("x")
    doc = read_document(tmp_path / "file.md" / "child.md")
    assert doc.missing


def test_over_long_name_counts_as_missing(tmp_path: Path) -> None:
    doc = read_document(tmp_path / ("x" * 300 + ".md"))
    assert doc.missing
    assert read_existing(tmp_path / ("x" * 300 + ".md")).missing


def test_embedded_nul_counts_as_missing(tmp_path: Path) -> None:
    doc = read_document(tmp_path / "a\x00b.md")
    assert doc.missing
    assert read_existing(tmp_path / "a\x00b.md").missing


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="no symlinks")
def test_symlink_loop_counts_as_missing(tmp_path: Path) -> None:
    (tmp_path / "a.md").symlink_to(tmp_path / "b.md")
    (tmp_path / "b.md").symlink_to(tmp_path / "a.md")
    assert read_document(tmp_path / "a.md").missing


def test_read_existing_returns_missing_reads(tmp_path: Path) -> None:
    doc = read_existing(tmp_path / "missing.md")
    assert doc.missing


@pytest.mark.skipif(
    os.name != "posix" or os.geteuid() == 0,
    reason="permission bits not enforced",
)
def test_read_existing_raises_on_permission_error(tmp_path: Path) -> None:
    path = tmp_path / "locked.md"
    path.write_text("# Locked\n")
    path.chmod(0)
    try:
        assert read_document(path).error is ReadError.PERMISSION
        with pytest.raises(DocumentReadError, match="permission"):
            read_existing(path)
    finally:
        path.chmod(0o644)
