"""
Heap entries and the search frontier.

``heapq`` is a min-heap, so ``HeapEntry`` inverts the comparison on
fitness: the entry with the *highest* fitness sorts first and is the
one ``heappop`` returns.
"""

from __future__ import annotations

import heapq
import math
from functools import total_ordering
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@total_ordering
class HeapEntry(Generic[T]):
    """
    A (fitness, item) pair ordered by fitness alone, max-first.

    Two entries with the same fitness compare equal regardless of
    their items, so ties pop in an arbitrary order.
    """

    __slots__ = ("fitness", "item")

    def __init__(self, fitness: float, item: T) -> None:
        if math.isnan(fitness):
            raise ValueError(f"Cannot order a NaN fitness (item={item!r}).")
        self.fitness = fitness
        self.item = item

    def __lt__(self, other: "HeapEntry[Any]") -> bool:
        if not isinstance(other, HeapEntry):
            return NotImplemented
        return self.fitness > other.fitness

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeapEntry):
            return NotImplemented
        return self.fitness == other.fitness

    __hash__ = None  # type: ignore[assignment]

    def __iter__(self):
        yield self.item
        yield self.fitness

    def __repr__(self) -> str:
        return f"HeapEntry(fitness={self.fitness!r}, item={self.item!r})"


class Frontier(Generic[T]):
    """
    Discovered, not-yet-expanded states, popped highest fitness first.

    No decrease-key: once pushed, an entry keeps its fitness.
    """

    def __init__(self) -> None:
        self._heap: list[HeapEntry[T]] = []
        self.pushes = 0

    def push(self, item: T, fitness: float) -> HeapEntry[T]:
        entry = HeapEntry(fitness, item)
        heapq.heappush(self._heap, entry)
        self.pushes += 1
        return entry

    def pop(self) -> HeapEntry[T]:
        """Remove and return the maximum-fitness entry. Raises IndexError if empty."""
        if not self._heap:
            raise IndexError("pop from an empty frontier")
        return heapq.heappop(self._heap)

    def peek(self) -> HeapEntry[T] | None:
        return self._heap[0] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self) -> str:
        return f"Frontier(size={len(self._heap)}, pushes={self.pushes})"
