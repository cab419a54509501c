"""Shared test fixtures: throwaway projects built under tmp_path."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeAlias

import pytest

import context_architect.logging_config as logging_config

WriteFile: TypeAlias = Callable[[str, str], Path]


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project root."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_file(project: Path) -> WriteFile:
    """Write ``content`` to ``project/relative``, creating parents."""

    def _write(relative: str, content: str) -> Path:
        path = project / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_config(project: Path) -> Callable[[Any], Path]:
    """Write ``.context-architect.json`` from a JSON-serialisable value."""

    def _write(data: Any) -> Path:
        path = project / ".context-architect.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """No stray CONTEXT_ARCHITECT_* settings; fresh logging per test."""
    monkeypatch.delenv("CONTEXT_ARCHITECT_LOG_LEVEL", raising=False)
    monkeypatch.delenv("CONTEXT_ARCHITECT_PROBE_BATCH_SIZE", raising=False)
    monkeypatch.setattr(logging_config, "_configured", False)
