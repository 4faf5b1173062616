"""Threshold lookup and progress math over an award catalog.

All functions are pure: they only read ``count`` and the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from tapdeep.core.awards import Award


def _thresholds(catalog: Iterable[Award]) -> list[int]:
    return sorted(a.threshold for a in catalog)


def next_threshold(count: int, catalog: Iterable[Award]) -> Optional[int]:
    """First threshold strictly greater than ``count``, or None when all are earned."""
    for threshold in _thresholds(catalog):
        if threshold > count:
            return threshold
    return None


def previous_threshold(count: int, catalog: Iterable[Award]) -> int:
    """Greatest threshold <= ``count``; 0 when no award has been reached."""
    previous = 0
    for threshold in _thresholds(catalog):
        if threshold > count:
            break
        previous = threshold
    return previous


def progress_fraction(count: int, next_value: Optional[int], catalog: Iterable[Award]) -> float:
    """Fraction of the way from the last reached threshold to ``next_value``.

    Returns 0.0 right after landing on a threshold and approaches 1.0 just
    before the next one. With no next threshold the bar is full.
    """
    if next_value is None:
        return 1.0
    previous = previous_threshold(count, catalog)
    span = max(next_value - previous, 1)
    delta = max(0, min(count - previous, span))
    return delta / span


def earned_count(count: int, catalog: Iterable[Award]) -> int:
    return sum(1 for a in catalog if a.threshold <= count)


@dataclass(frozen=True)
class ProgressSnapshot:
    """Everything the progress bar and summary badge need for one count."""

    count: int
    next_threshold: Optional[int]
    fraction: float
    earned: int
    total: int

    @property
    def is_deepest(self) -> bool:
        return self.next_threshold is None


def snapshot(count: int, catalog: Iterable[Award]) -> ProgressSnapshot:
    awards = list(catalog)
    nxt = next_threshold(count, awards)
    return ProgressSnapshot(
        count=count,
        next_threshold=nxt,
        fraction=progress_fraction(count, nxt, awards),
        earned=earned_count(count, awards),
        total=len(awards),
    )
