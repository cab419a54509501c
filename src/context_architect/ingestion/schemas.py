"""Pydantic models for the document reading flow."""

from pathlib import Path

from pydantic import BaseModel

from context_architect.resilience.errors import ReadError, is_absent


class DocumentRead(BaseModel):
    """Outcome of a single read attempt: either text or a classified failure."""

    path: Path
    text: str | None = None
    error: ReadError | None = None

    @property
    def ok(self) -> bool:
        return self.text is not None

    @property
    def missing(self) -> bool:
        return is_absent(self.error)

    @property
    def line_count(self) -> int:
        """Line count with the newline-split convention (``"a\\n"`` is 2)."""
        if self.text is None:
            return 0
        return self.text.count("\n") + 1
