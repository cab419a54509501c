"""Estimate the token cost of loading a context file and its linked docs."""

from __future__ import annotations

import logging
from pathlib import Path

from context_architect.analysis.project import load_project
from context_architect.analysis.schemas import FileTokens, TokenEstimate
from context_architect.constants import FileRole, estimate_tokens
from context_architect.ingestion import read_existing

logger = logging.getLogger(__name__)


def estimate_project_tokens(
    root: Path | str,
    context_file: str | None = None,
) -> TokenEstimate:
    """Character and token counts for the index file and each linked doc.

    Each distinct, existing link target is counted once; the index file
    is never counted as its own link. Tokens are ``ceil(chars / 4)``.
    """
    project = load_project(root, context_file)
    if project is None:
        return TokenEstimate()

    files = [
        FileTokens(
            file=str(project.context_path),
            chars=len(project.text),
            tokens=estimate_tokens(len(project.text)),
            role=FileRole.INDEX,
        )
    ]
    seen = {str(project.context_path)}
    for link in project.links:
        if link.absolute in seen:
            continue
        seen.add(link.absolute)
        doc = read_existing(Path(link.absolute))
        if doc.text is None:
            continue
        files.append(
            FileTokens(
                file=link.absolute,
                chars=len(doc.text),
                tokens=estimate_tokens(len(doc.text)),
                role=FileRole.LINKED,
            )
        )

    total_chars = sum(f.chars for f in files)
    logger.info(
        "Token estimate for %s: %d chars across %d file(s)",
        project.root,
        total_chars,
        len(files),
    )
    return TokenEstimate(
        total_chars=total_chars,
        estimated_tokens=estimate_tokens(total_chars),
        files=files,
    )
