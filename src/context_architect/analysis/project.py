"""Load the inputs every analysis shares: config, context file, links."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from context_architect.analysis.markdown import (
    extract_relative_links,
    split_lines,
)
from context_architect.analysis.schemas import ResolvedLink
from context_architect.config import (
    ProjectConfig,
    absolute_path,
    load_config,
    resolve_context_file,
)
from context_architect.constants import DOCS_DIRNAME
from context_architect.ingestion import (
    DocumentRead,
    list_markdown_files,
    read_document,
    read_existing,
    should_ignore,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectContext:
    """A project root with its context file already read."""

    root: Path
    config: ProjectConfig
    context_path: Path
    text: str
    links: tuple[ResolvedLink, ...]

    @property
    def lines(self) -> list[str]:
        return split_lines(self.text)

    @property
    def docs_dir(self) -> Path:
        return self.root / DOCS_DIRNAME

    def linked_paths(self) -> set[str]:
        return {link.absolute for link in self.links}

    def reference_paths(self) -> set[str]:
        return {
            str(absolute_path(self.root, ref))
            for ref in self.config.reference_docs
        }

    def is_ignored(self, path: Path | str) -> bool:
        return should_ignore(path, self.root, self.config.ignore)

    def docs_tree(self) -> list[Path]:
        """Markdown files under ``docs/`` with ignore globs applied."""
        return list_markdown_files(
            self.docs_dir, self.root, self.config.ignore
        )


def resolve_links(
    root: Path, raw_links: list[str]
) -> tuple[ResolvedLink, ...]:
    """Resolve link targets against the project root, keeping order."""
    return tuple(
        ResolvedLink(raw=raw, absolute=str(absolute_path(root, raw)))
        for raw in raw_links
    )


def load_project(
    root: Path | str,
    context_file: str | None = None,
) -> ProjectContext | None:
    """Read config and context file; None when the context file is unreadable.

    A project without a context file has nothing to analyse, so any
    read failure here is reported as absence rather than an error.
    """
    abs_root = Path(os.path.abspath(root))
    config = load_config(abs_root)
    context_path = resolve_context_file(abs_root, context_file, config)

    doc = read_document(context_path)
    if doc.text is None:
        return None
    text = doc.text

    links = resolve_links(abs_root, extract_relative_links(text))
    logger.debug(
        "Loaded %s (%d relative links)", context_path, len(links)
    )
    return ProjectContext(
        root=abs_root,
        config=config,
        context_path=context_path,
        text=text,
        links=links,
    )


def read_linked_documents(
    project: ProjectContext,
) -> list[tuple[ResolvedLink, DocumentRead]]:
    """Pair each link occurrence with the read of its target, in link order.

    Missing targets come back as missing reads; other failures raise.
    A target linked twice is read once.
    """
    reads: dict[str, DocumentRead] = {}
    pairs: list[tuple[ResolvedLink, DocumentRead]] = []
    for link in project.links:
        if link.absolute not in reads:
            reads[link.absolute] = read_existing(Path(link.absolute))
        pairs.append((link, reads[link.absolute]))
    return pairs
