"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from tapdeep.core.awards import Award
from tapdeep.core.progress import next_threshold


@dataclass
class AwardState:
    """UI state for a single award row: earned flag and next-up marker."""

    award: Award
    earned: bool
    is_next: bool = False


def build_award_states(awards: Iterable[Award], count: int) -> List[AwardState]:
    """Project the catalog onto the awards list for the given depth."""
    awards = list(awards)
    upcoming = next_threshold(count, awards)
    return [
        AwardState(
            award=award,
            earned=award.threshold <= count,
            is_next=award.threshold == upcoming,
        )
        for award in awards
    ]
