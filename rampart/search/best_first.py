"""
BestFirstSearcher — greedy best-first expansion over raw fitness.

Repeatedly pops the highest-scoring unexplored state, reports it,
tests the goal and enqueues every not-yet-seen neighbor.  There is no
path cost and no heuristic: a state's fitness is fixed when it is
enqueued and never recomputed.
"""

from __future__ import annotations

import logging
import math
import numbers
from dataclasses import asdict, dataclass
from typing import Any, Generic

from rampart.search.errors import (
    ExpansionLimitReached,
    InvalidFitnessError,
    SearchSpaceExhausted,
)
from rampart.search.heap import Frontier
from rampart.search.interface import SearchProblem, State
from rampart.search.tracker import BestEverTracker

logger = logging.getLogger(__name__)

# Log a progress line every N expansions
PROGRESS_INTERVAL = 1_000


@dataclass
class SearchStats:
    """Counters for a single run."""

    scored: int = 0
    reported: int = 0
    expanded: int = 0
    enqueued: int = 0
    skipped_duplicates: int = 0
    visited: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


class BestFirstSearcher(Generic[State]):
    """
    Drives a SearchProblem until its goal predicate holds or the
    reachable space runs out.

    The best-ever tracker belongs to the searcher and outlives
    individual runs; the frontier and visited set are rebuilt on every
    call to ``run``.

    Usage
    -----
    >>> searcher = BestFirstSearcher(problem)
    >>> try:
    ...     state = searcher.run()
    ... except SearchSpaceExhausted:
    ...     state = None
    """

    def __init__(
        self,
        problem: SearchProblem[State],
        max_expansions: int | None = None,
    ) -> None:
        if max_expansions is not None and max_expansions < 1:
            raise ValueError(f"max_expansions must be positive, got {max_expansions}.")
        self.problem = problem
        self.max_expansions = max_expansions
        self.best_ever: BestEverTracker[State] = BestEverTracker()
        self.stats = SearchStats()
        # Fitness of the goal state returned by the last successful run
        self.result_fitness: float | None = None

    # ── Public API ─────────────────────────────────────────────────

    def run(self) -> State:
        """
        Execute one search pass.

        Returns
        -------
        The first popped state for which ``problem.is_goal`` holds.

        Raises
        ------
        SearchSpaceExhausted
            The frontier emptied before any goal was reached.
        ExpansionLimitReached
            ``max_expansions`` states were popped without a goal.
        InvalidFitnessError
            The problem model scored a state with a non-finite value.
        """
        self.stats = SearchStats()
        self.result_fitness = None
        frontier: Frontier[State] = Frontier()
        visited: set[State] = set()

        start = self.problem.start()
        start_fitness = self._score(start)
        self._enqueue(start, start_fitness, frontier, visited)

        while True:
            if not frontier:
                logger.warning(
                    "Frontier exhausted after %d expansions (%d states visited).",
                    self.stats.expanded,
                    self.stats.visited,
                )
                raise SearchSpaceExhausted(self.stats, self.best_ever.peek_best())

            if self.max_expansions is not None and self.stats.reported >= self.max_expansions:
                logger.warning(
                    "Expansion limit of %d reached (%d states still queued).",
                    self.max_expansions,
                    len(frontier),
                )
                raise ExpansionLimitReached(self.stats, self.best_ever.peek_best())

            current, fitness = frontier.pop()

            self.problem.report(current, fitness)
            self.stats.reported += 1
            self._log_progress(current, fitness, frontier)

            if self.problem.is_goal(current, fitness):
                logger.info(
                    "Goal reached after %d expansions: %r (fitness=%s)",
                    self.stats.reported,
                    current,
                    fitness,
                )
                self.result_fitness = fitness
                return current

            self._expand(current, frontier, visited)

    # ── Expansion ──────────────────────────────────────────────────

    def _expand(
        self,
        current: State,
        frontier: Frontier[State],
        visited: set[State],
    ) -> None:
        """Score and enqueue every neighbor of *current* not seen before."""
        self.stats.expanded += 1
        for neighbor in self.problem.neighbors(current):
            if neighbor in visited:
                self.stats.skipped_duplicates += 1
                continue

            visited.add(neighbor)
            self.stats.visited += 1
            fitness = self._score(neighbor)
            frontier.push(neighbor, fitness)
            self.stats.enqueued += 1

    def _enqueue(
        self,
        state: State,
        fitness: float,
        frontier: Frontier[State],
        visited: set[State],
    ) -> None:
        visited.add(state)
        self.stats.visited += 1
        frontier.push(state, fitness)
        self.stats.enqueued += 1

    # ── Scoring ────────────────────────────────────────────────────

    def _score(self, state: State) -> float:
        """
        Score *state* through the problem model and offer it to the
        best-ever tracker.  Rejects anything that is not a finite number.
        """
        raw: Any = self.problem.score(state)
        self.stats.scored += 1

        if isinstance(raw, bool) or not isinstance(raw, numbers.Real):
            raise InvalidFitnessError(state, raw)
        fitness = float(raw)
        if not math.isfinite(fitness):
            raise InvalidFitnessError(state, raw)

        self.best_ever.record(state, fitness)
        return fitness

    # ── Helper ─────────────────────────────────────────────────────

    def _log_progress(self, current: State, fitness: float, frontier: Frontier[State]) -> None:
        logger.debug("Expanding %r (fitness=%s)", current, fitness)
        if self.stats.reported % PROGRESS_INTERVAL == 0:
            best = self.best_ever.peek_best()
            logger.info(
                "%d expansions, frontier=%d, current=%s, best=%s",
                self.stats.reported,
                len(frontier),
                fitness,
                best.fitness if best is not None else None,
            )
