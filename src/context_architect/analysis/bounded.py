"""Bounded output with a truncation marker."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeVar

T = TypeVar("T")


def cap_with_overflow(
    items: Sequence[T],
    limit: int,
    make_overflow: Callable[[int], T],
) -> list[T]:
    """Return the first ``limit`` items, plus one overflow record if needed.

    The overflow record is built from the number of items left out and
    is only appended when that number is positive.
    """
    kept = list(items[:limit])
    remainder = len(items) - limit
    if remainder > 0:
        kept.append(make_overflow(remainder))
    return kept


def overflow_detail(remainder: int, noun: str) -> str:
    """Human-readable count used in overflow records."""
    plural = noun if remainder == 1 else f"{noun}s"
    return f"{remainder} more {plural} not listed"
