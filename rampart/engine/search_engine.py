"""
SearchEngine — Top-level orchestrator.

Builds a problem model from the registry, runs a BestFirstSearcher on
it and turns every outcome (goal, exhaustion, expansion limit) into a
plain result dict.
"""

from __future__ import annotations

import logging
from typing import Any

from rampart.core.problem_registry import create_problem
from rampart.search.best_first import BestFirstSearcher
from rampart.search.errors import ExpansionLimitReached, SearchSpaceExhausted
from rampart.search.heap import HeapEntry
from rampart.search.interface import SearchProblem

logger = logging.getLogger(__name__)

STATUS_GOAL = "goal"
STATUS_EXHAUSTED = "exhausted"
STATUS_LIMIT = "limit"


class SearchEngine:
    """
    Main entry-point for running searches.

    Usage
    -----
    >>> engine = SearchEngine()
    >>> result = engine.run("castle", {"n_samples": 1000, "seed": 7}, max_expansions=50)
    >>> print(result["status"], result["best"])
    """

    def __init__(self) -> None:
        self.searcher: BestFirstSearcher[Any] | None = None
        self.problem: SearchProblem[Any] | None = None

    # ── Public API ─────────────────────────────────────────────────

    def run(
        self,
        problem_type: str,
        params: dict[str, Any] | None = None,
        max_expansions: int | None = None,
    ) -> dict[str, Any]:
        """
        Build and search a problem of *problem_type*.

        Returns
        -------
        dict with keys: status, result, fitness, best, stats
        """
        problem = create_problem(problem_type, **(params or {}))
        return self.search(problem, max_expansions=max_expansions)

    def search(
        self,
        problem: SearchProblem[Any],
        max_expansions: int | None = None,
    ) -> dict[str, Any]:
        """Search an already-built problem model."""
        searcher = BestFirstSearcher(problem, max_expansions=max_expansions)
        if hasattr(problem, "attach_tracker"):
            problem.attach_tracker(searcher.best_ever)
        self.problem = problem
        self.searcher = searcher

        try:
            state = searcher.run()
        except SearchSpaceExhausted as exc:
            return self._outcome(STATUS_EXHAUSTED, None, searcher, exc.best)
        except ExpansionLimitReached as exc:
            return self._outcome(STATUS_LIMIT, None, searcher, exc.best)

        best = searcher.best_ever.peek_best()
        return self._outcome(STATUS_GOAL, state, searcher, best)

    # ── Rendering ──────────────────────────────────────────────────

    @staticmethod
    def render(result: dict[str, Any]) -> str:
        """Human-readable one-line summary of a result dict."""
        best = result["best"]
        best_text = f"best: {best['fitness']}: {best['state']}" if best else "best: none"
        if result["status"] == STATUS_GOAL:
            return f"goal: {result['fitness']}: {result['result']} - {best_text}"
        if result["status"] == STATUS_EXHAUSTED:
            return f"no goal found, search space exhausted - {best_text}"
        return f"no goal found, expansion limit reached - {best_text}"

    # ── Helper ─────────────────────────────────────────────────────

    def _outcome(
        self,
        status: str,
        state: Any,
        searcher: BestFirstSearcher[Any],
        best: HeapEntry[Any] | None,
    ) -> dict[str, Any]:
        reached = status == STATUS_GOAL
        fitness = searcher.result_fitness if reached else None

        logger.info(
            "Search finished: status=%s expansions=%d scored=%d",
            status,
            searcher.stats.reported,
            searcher.stats.scored,
        )
        return {
            "status": status,
            "result": self._describe(state) if reached else None,
            "fitness": fitness,
            "best": (
                {"state": self._describe(best.item), "fitness": best.fitness}
                if best is not None
                else None
            ),
            "stats": searcher.stats.to_dict(),
        }

    @staticmethod
    def _describe(state: Any) -> Any:
        """JSON-friendly rendering of a state."""
        if hasattr(state, "troops"):
            return list(state.troops())
        if isinstance(state, (str, int, float)):
            return state
        return repr(state)
