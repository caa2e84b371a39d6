"""
CastleSearcher — the castle battle game as a search problem.

Scores an allocation by how many castles of a random training pool it
beats, and walks the allocation space by shifting one cut point at a
time.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from rampart.core.castle import Castle, count_wins, random_troops
from rampart.core.config import N_TRAINING_SAMPLES
from rampart.search.interface import SearchProblem
from rampart.search.tracker import BestEverTracker

logger = logging.getLogger(__name__)


class CastleSearcher(SearchProblem[Castle]):
    """
    Parameters
    ----------
    n_samples : int
        Size of the random opponent pool (default 100 000).
    seed : int, optional
        Seed for the pool, the random start and nothing else.
    target_wins : int, optional
        Goal threshold.  None (default) means the goal never holds and
        every run ends by exhausting the frontier.
    start_troops : sequence of int, optional
        Fixed starting allocation instead of a random one.
    """

    def __init__(
        self,
        n_samples: int = N_TRAINING_SAMPLES,
        seed: int | None = None,
        target_wins: int | None = None,
        start_troops: Sequence[int] | None = None,
    ) -> None:
        self.rng = np.random.default_rng(seed)
        self.training_data = random_troops(n_samples, self.rng)
        self.target_wins = target_wins
        self.start_castle = Castle.from_troops(start_troops) if start_troops is not None else None
        self.tracker: BestEverTracker[Castle] | None = None
        self.reports = 0
        logger.info("Castle searcher ready with %d training samples", n_samples)

    # ── SearchProblem ──────────────────────────────────────────────

    def start(self) -> Castle:
        if self.start_castle is not None:
            return self.start_castle
        return Castle.from_random(self.rng)

    def neighbors(self, state: Castle) -> list[Castle]:
        return state.neighbors()

    def score(self, state: Castle) -> float:
        return float(self.test_on_data(state))

    def is_goal(self, state: Castle, fitness: float) -> bool:
        if self.target_wins is None:
            return False
        return fitness >= self.target_wins

    def report(self, state: Castle, fitness: float) -> None:
        self.reports += 1
        best = self.tracker.peek_best() if self.tracker is not None else None
        if best is None:
            logger.debug("%s: %s", fitness, list(state.troops()))
            return
        logger.debug(
            "%s: %s - best: %s: %s",
            fitness,
            list(state.troops()),
            best.fitness,
            list(best.item.troops()),
        )

    # ── Evaluation ─────────────────────────────────────────────────

    def test_on_data(self, castle: Castle) -> int:
        """Number of training castles *castle* beats."""
        return count_wins(castle.troops_array(), self.training_data)

    def attach_tracker(self, tracker: BestEverTracker[Castle]) -> None:
        """Include the searcher's all-time best in every report line."""
        self.tracker = tracker

    @property
    def n_samples(self) -> int:
        return len(self.training_data)
