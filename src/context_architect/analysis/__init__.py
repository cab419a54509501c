"""Context-file analysis: CCS scoring, anti-pattern detection, probing."""

from context_architect.analysis.detector import detect_antipatterns
from context_architect.analysis.probe import (
    build_probe_batches,
    detect_framework,
    extract_statements,
    to_probe_questions,
)
from context_architect.analysis.rules_config import DEFAULT_RULES, RuleConfig
from context_architect.analysis.schemas import (
    AnalysisResult,
    DetectionResult,
    Factor,
    Finding,
    ProbeBatch,
    ProbeQuestion,
    TokenEstimate,
)
from context_architect.analysis.scorer import calculate_ccs
from context_architect.analysis.tokens import estimate_project_tokens

__all__ = [
    "DEFAULT_RULES",
    "AnalysisResult",
    "DetectionResult",
    "Factor",
    "Finding",
    "ProbeBatch",
    "ProbeQuestion",
    "RuleConfig",
    "TokenEstimate",
    "build_probe_batches",
    "calculate_ccs",
    "detect_antipatterns",
    "detect_framework",
    "estimate_project_tokens",
    "extract_statements",
    "to_probe_questions",
]
