"""
Search Problem Interface — abstract base for all problem models.

Design: Strategy pattern.  The BestFirstSearcher drives whichever
SearchProblem implementation it is given, so you can swap in the
castle game, an explicit graph, etc. without touching the engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable, Sequence
from typing import Generic, TypeVar

State = TypeVar("State", bound=Hashable)


class SearchProblem(ABC, Generic[State]):
    """
    Capability contract a concrete domain implements.

    States are opaque to the engine; they only need equality, a stable
    hash and a readable ``repr``.
    """

    @abstractmethod
    def start(self) -> State:
        """Produce the initial candidate state. May be randomised."""
        ...

    @abstractmethod
    def neighbors(self, state: State) -> Sequence[State]:
        """
        Enumerate the neighbors of *state*.

        Must be finite (possibly empty) and must not depend on any
        engine-side bookkeeping.  Duplicates are allowed; the engine
        skips anything it has already seen.
        """
        ...

    @abstractmethod
    def score(self, state: State) -> float:
        """
        Return the fitness of *state*.  Higher is better.

        Must be a finite number.  Side effects are allowed, and the
        engine may call this any number of times for the same state.
        """
        ...

    def is_goal(self, state: State, fitness: float) -> bool:
        """Goal predicate.  The default never succeeds."""
        return False

    def report(self, state: State, fitness: float) -> None:
        """Notification for every expanded state.  Return value is ignored."""
        return None


class FunctionProblem(SearchProblem[State]):
    """
    Problem model assembled from plain callables.

    Parameters
    ----------
    start : () -> State
    neighbors : State -> Sequence[State]
    score : State -> float
    is_goal : (State, float) -> bool, optional (default: never)
    report : (State, float) -> None, optional (default: no-op)
    """

    def __init__(
        self,
        start: Callable[[], State],
        neighbors: Callable[[State], Sequence[State]],
        score: Callable[[State], float],
        is_goal: Callable[[State, float], bool] | None = None,
        report: Callable[[State, float], None] | None = None,
    ) -> None:
        self._start = start
        self._neighbors = neighbors
        self._score = score
        self._is_goal = is_goal
        self._report = report

    def start(self) -> State:
        return self._start()

    def neighbors(self, state: State) -> Sequence[State]:
        return self._neighbors(state)

    def score(self, state: State) -> float:
        return self._score(state)

    def is_goal(self, state: State, fitness: float) -> bool:
        if self._is_goal is None:
            return False
        return bool(self._is_goal(state, fitness))

    def report(self, state: State, fitness: float) -> None:
        if self._report is not None:
            self._report(state, fitness)
