"""
BestEverTracker — all-time-high fitness record for diagnostics.

Every scored state is offered to the tracker. An entry is appended
only when it beats the current maximum, and nothing is ever evicted,
so memory grows with the number of "new record" events.
"""

from __future__ import annotations

import heapq
import logging
from typing import Generic, TypeVar

from rampart.search.heap import HeapEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BestEverTracker(Generic[T]):
    """Append-only max-heap of record-breaking (state, fitness) pairs."""

    def __init__(self) -> None:
        self._heap: list[HeapEntry[T]] = []

    def record(self, state: T, fitness: float) -> None:
        """Append *state* if the tracker is empty or *fitness* beats the best so far."""
        best = self.peek_best()
        if best is None or fitness > best.fitness:
            heapq.heappush(self._heap, HeapEntry(fitness, state))
            logger.debug("New best fitness %s: %r", fitness, state)

    def peek_best(self) -> HeapEntry[T] | None:
        """Return the highest-fitness entry ever recorded, or None."""
        return self._heap[0] if self._heap else None

    def history(self) -> list[HeapEntry[T]]:
        """All recorded entries, best first."""
        return sorted(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self) -> str:
        best = self.peek_best()
        shown = best.fitness if best is not None else None
        return f"BestEverTracker(records={len(self._heap)}, best={shown!r})"
