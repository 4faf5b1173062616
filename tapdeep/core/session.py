from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from tapdeep.core.awards import Award, AwardCatalog
from tapdeep.core.progress import ProgressSnapshot, snapshot
from tapdeep.core.store import DEPTH_KEY, CounterStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AwardEvent:
    """One-shot signal that a tap landed exactly on ``award.threshold``."""

    award: Award
    count: int


@dataclass(frozen=True)
class TapResult:
    """Outcome of a single tap."""

    count: int
    award: Optional[Award] = None
    burst_requested: bool = True


class TapSession:
    """Owns the depth counter and the pending award event.

    Awards fire only when the new count *equals* a threshold. Landing past a
    threshold without touching it never fires, so a variable-size increment
    would silently skip the tiers in between. That policy is intentional and
    kept as is.
    """

    def __init__(self, catalog: AwardCatalog, store: Optional[CounterStore] = None) -> None:
        self._catalog = catalog
        self._store = store
        self._count = max(0, store.get_int(DEPTH_KEY, 0)) if store is not None else 0
        self._pending: Optional[AwardEvent] = None

    @property
    def count(self) -> int:
        """Current depth."""
        return self._count

    @property
    def catalog(self) -> AwardCatalog:
        return self._catalog

    @property
    def pending_award(self) -> Optional[AwardEvent]:
        """Award event not yet consumed by the UI, if any."""
        return self._pending

    def tap(self) -> TapResult:
        """Increment depth by one and check for an exact threshold landing."""
        self._count += 1
        self._persist()
        award = self._catalog.find_by_threshold(self._count)
        if award is not None:
            self._pending = AwardEvent(award=award, count=self._count)
            logger.info("Award earned at depth %d: %s", self._count, award.name)
        return TapResult(count=self._count, award=award)

    def consume_award_event(self) -> Optional[AwardEvent]:
        """Return the pending award event and clear it."""
        event, self._pending = self._pending, None
        return event

    def reset(self) -> None:
        self._count = 0
        self._pending = None
        self._persist()
        logger.info("Depth reset")

    def progress(self) -> ProgressSnapshot:
        return snapshot(self._count, self._catalog.all())

    def _persist(self) -> None:
        if self._store is not None:
            self._store.set_int(DEPTH_KEY, self._count)
