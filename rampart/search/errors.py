"""
Search errors — typed outcomes for runs that end without a goal,
and for problem models that break their contract.
"""

from __future__ import annotations

from typing import Any


class SearchError(Exception):
    """Base class for everything the search engine raises on purpose."""


class _UnsuccessfulRun(SearchError):
    """A run that terminated without satisfying the goal predicate."""

    reason = "search ended without a goal"

    def __init__(self, stats: Any = None, best: Any = None) -> None:
        self.stats = stats
        self.best = best
        super().__init__(self._describe())

    def _describe(self) -> str:
        parts = [self.reason]
        if self.stats is not None:
            parts.append(f"{self.stats.reported} states expanded")
        if self.best is not None:
            parts.append(f"best fitness {self.best.fitness}")
        return ", ".join(parts)


class SearchSpaceExhausted(_UnsuccessfulRun):
    """Raised when the frontier empties before any goal is satisfied."""

    reason = "no goal found, search space exhausted"


class ExpansionLimitReached(_UnsuccessfulRun):
    """Raised when a run pops ``max_expansions`` states without a goal."""

    reason = "no goal found, expansion limit reached"


class InvalidFitnessError(SearchError, ValueError):
    """Raised when a problem model scores a state with a non-finite value."""

    def __init__(self, state: Any, fitness: Any) -> None:
        self.state = state
        self.fitness = fitness
        super().__init__(f"score({state!r}) returned {fitness!r}; fitness must be a finite number")


# Mapping of search errors to HTTP status codes
SEARCH_ERRORS = {
    SearchSpaceExhausted: 422,
    ExpansionLimitReached: 422,
    InvalidFitnessError: 400,
}
