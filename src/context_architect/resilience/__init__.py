"""Error classification and CLI-facing exceptions."""

from context_architect.resilience.errors import (
    ContextArchitectError,
    DocumentReadError,
    ReadError,
    classify_read_error,
    is_absent,
)

__all__ = [
    "ContextArchitectError",
    "DocumentReadError",
    "ReadError",
    "classify_read_error",
    "is_absent",
]
