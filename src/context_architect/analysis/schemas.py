"""Pydantic models for analysis output."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from context_architect.constants import (
    FactorName,
    FileRole,
    FindingType,
    Phase,
    Rating,
    Severity,
    rating_for_total,
)


class ResolvedLink(BaseModel):
    """A relative link from the context file and where it points."""

    model_config = ConfigDict(frozen=True)

    raw: str
    absolute: str


class Factor(BaseModel):
    """One weighted contribution to the Context Complexity Score."""

    model_config = ConfigDict(frozen=True)

    name: FactorName
    score: int = Field(ge=0)
    file: str
    detail: str | None = None


class Finding(BaseModel):
    """One anti-pattern reported by the detector."""

    model_config = ConfigDict(frozen=True)

    type: FindingType
    severity: Severity
    file: str
    line: int = Field(default=1, ge=1)
    message: str


class AnalysisResult(BaseModel):
    """CCS output: factors in detection order plus derived total and rating."""

    model_config = ConfigDict(frozen=True)

    factors: list[Factor] = Field(
        default_factory=lambda: list[Factor]()
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return sum(f.score for f in self.factors)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def rating(self) -> Rating:
        return rating_for_total(self.total)


class DetectionResult(BaseModel):
    """Detector output for a single phase."""

    model_config = ConfigDict(frozen=True)

    phase: Phase | str
    findings: list[Finding] = Field(
        default_factory=lambda: list[Finding]()
    )


class FileTokens(BaseModel):
    """Per-file size and token estimate."""

    file: str
    chars: int
    tokens: int
    role: FileRole


class TokenEstimate(BaseModel):
    """Token cost of loading the context file and its linked docs."""

    total_chars: int = 0
    estimated_tokens: int = 0
    files: list[FileTokens] = Field(
        default_factory=lambda: list[FileTokens]()
    )


class ProbeQuestion(BaseModel):
    """A directive rewritten as a neutral question for a fresh agent."""

    original: str
    question: str


class ProbeBatch(BaseModel):
    """A group of statements and the prompt that asks about them."""

    batch_id: int = Field(ge=1)
    statements: list[str]
    prompt: str
