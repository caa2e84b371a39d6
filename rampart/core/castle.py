"""
Castle — a troop allocation in the castle battle game.

100 soldiers are split across 10 castles worth 1..10 points.  An
allocation is stored as 9 sorted cut points in [0, 100]; the troops
sent to each castle are the gaps between consecutive cut points.

Battle rules, for castle i (1-based):
    more troops  → 2·i points
    tie          → i points to each side
    fewer troops → 0 points
The side with strictly more points wins.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

N_CASTLES = 10
N_CUTS = N_CASTLES - 1
TOTAL_TROOPS = 100

# Castle values 1..10
CASTLE_WEIGHTS = np.arange(1, N_CASTLES + 1, dtype=np.int64)


class Castle:
    """
    Immutable, hashable troop allocation.

    Attributes
    ----------
    inner : tuple[int, ...]
        The 9 sorted cut points, each in [0, 100].
    """

    __slots__ = ("inner",)

    def __init__(self, inner: Sequence[int]) -> None:
        cuts = tuple(int(c) for c in inner)
        if len(cuts) != N_CUTS:
            raise ValueError(f"Expected {N_CUTS} cut points, got {len(cuts)}.")
        if any(c < 0 or c > TOTAL_TROOPS for c in cuts):
            raise ValueError(f"Cut points must lie in [0, {TOTAL_TROOPS}]: {cuts}")
        if list(cuts) != sorted(cuts):
            raise ValueError(f"Cut points must be sorted: {cuts}")
        object.__setattr__(self, "inner", cuts)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("Castle is immutable")

    # ── Construction ───────────────────────────────────────────────

    @classmethod
    def from_troops(cls, troops: Sequence[int]) -> "Castle":
        """Build a castle from 10 non-negative allocations summing to 100."""
        troops = [int(t) for t in troops]
        if len(troops) != N_CASTLES:
            raise ValueError(f"Expected {N_CASTLES} troop counts, got {len(troops)}.")
        if any(t < 0 for t in troops):
            raise ValueError(f"Troop counts must be non-negative: {troops}")
        if sum(troops) != TOTAL_TROOPS:
            raise ValueError(f"Troop counts must sum to {TOTAL_TROOPS}, got {sum(troops)}.")
        return cls(np.cumsum(troops[:N_CUTS]).tolist())

    @classmethod
    def from_random(cls, rng: np.random.Generator | None = None) -> "Castle":
        """
        Draw 9 cut points uniformly from [0, 100) and sort them.

        An upper cut point of exactly 100 is only reachable by moving
        through neighbors.
        """
        rng = rng or np.random.default_rng()
        cuts = np.sort(rng.integers(0, TOTAL_TROOPS, size=N_CUTS))
        return cls(cuts.tolist())

    # ── Troops ─────────────────────────────────────────────────────

    def troops(self) -> tuple[int, ...]:
        """Troops per castle: first cut, the 8 gaps, and what is left of 100."""
        bounds = (0, *self.inner, TOTAL_TROOPS)
        return tuple(b - a for a, b in zip(bounds, bounds[1:]))

    def troops_array(self) -> np.ndarray:
        return np.asarray(self.troops(), dtype=np.int64)

    # ── Neighborhood ───────────────────────────────────────────────

    def neighbors(self) -> list["Castle"]:
        """
        Move each cut point by ±1 (staying inside [0, 100]) and re-sort.

        Returns up to 18 castles.  Different moves may land on the same
        allocation, so the list can contain duplicates.
        """
        result: list[Castle] = []
        for index in range(N_CUTS):
            for delta in (-1, 1):
                moved = self.inner[index] + delta
                if moved < 0 or moved > TOTAL_TROOPS:
                    continue
                cuts = list(self.inner)
                cuts[index] = moved
                result.append(Castle(sorted(cuts)))
        return result

    # ── Battle ─────────────────────────────────────────────────────

    def does_win(self, other: "Castle") -> bool:
        """True if this allocation strictly out-scores *other*."""
        self_points = 0
        other_points = 0
        for value, (mine, theirs) in enumerate(zip(self.troops(), other.troops()), start=1):
            if mine < theirs:
                other_points += 2 * value
            elif mine == theirs:
                self_points += value
                other_points += value
            else:
                self_points += 2 * value
        return self_points > other_points

    # ── Dunder helpers ─────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Castle):
            return NotImplemented
        return self.inner == other.inner

    def __hash__(self) -> int:
        return hash(self.inner)

    def __repr__(self) -> str:
        return f"Castle(troops={list(self.troops())})"


def count_wins(troops: Sequence[int] | np.ndarray, opponents: np.ndarray) -> int:
    """
    Count how many rows of *opponents* (shape ``(n, 10)``) lose to *troops*.

    Vectorised form of ``Castle.does_win``: my points minus theirs is
    ``2 · Σ value·sign(mine − theirs)``, so a win is a positive weighted
    sign sum.
    """
    mine = np.asarray(troops, dtype=np.int64)
    if opponents.size == 0:
        return 0
    signs = np.sign(mine[np.newaxis, :] - opponents)
    margins = signs @ CASTLE_WEIGHTS
    return int(np.count_nonzero(margins > 0))


def random_troops(n: int, rng: np.random.Generator | None = None) -> np.ndarray:
    """Troop matrix of shape ``(n, 10)`` for *n* random castles."""
    rng = rng or np.random.default_rng()
    cuts = np.sort(rng.integers(0, TOTAL_TROOPS, size=(n, N_CUTS)), axis=1)
    bounds = np.hstack(
        [np.zeros((n, 1), dtype=np.int64), cuts, np.full((n, 1), TOTAL_TROOPS, dtype=np.int64)]
    )
    return np.diff(bounds, axis=1)
