"""
Search configuration.

Module-level defaults plus a ``SearchConfig`` dataclass that can be
overridden from ``RAMPART_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any

# Size of the random opponent pool a castle is scored against
N_TRAINING_SAMPLES = 100_000

# Unbounded: a run ends at a goal or when the frontier is exhausted
DEFAULT_MAX_EXPANSIONS: int | None = None

# HTTP requests get a smaller pool and a cap so they return promptly
API_TRAINING_SAMPLES = 2_000
API_MAX_EXPANSIONS = 2_000

# Upper bounds a single HTTP request may ask for
API_SAMPLES_LIMIT = 20_000
API_EXPANSIONS_LIMIT = 20_000

ENV_PREFIX = "RAMPART_"


def _env_int(name: str) -> int | None:
    raw = os.environ.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


@dataclass
class SearchConfig:
    """
    Castle search parameters.

    Attributes:
        n_samples: Number of random opponents each castle is scored against
        seed: Seed for the numpy random generator (None = fresh entropy)
        target_wins: Goal threshold on wins; None means the goal never holds
        max_expansions: Cap on popped states; None means unbounded
    """

    n_samples: int = N_TRAINING_SAMPLES
    seed: int | None = None
    target_wins: int | None = None
    max_expansions: int | None = DEFAULT_MAX_EXPANSIONS

    def __post_init__(self) -> None:
        if self.n_samples < 0:
            raise ValueError(f"n_samples must be non-negative, got {self.n_samples}")
        if self.max_expansions is not None and self.max_expansions < 1:
            raise ValueError(f"max_expansions must be positive, got {self.max_expansions}")

    @classmethod
    def from_env(cls) -> "SearchConfig":
        """Read RAMPART_N_SAMPLES, RAMPART_SEED, RAMPART_TARGET_WINS, RAMPART_MAX_EXPANSIONS."""
        n_samples = _env_int("N_SAMPLES")
        return cls(
            n_samples=N_TRAINING_SAMPLES if n_samples is None else n_samples,
            seed=_env_int("SEED"),
            target_wins=_env_int("TARGET_WINS"),
            max_expansions=_env_int("MAX_EXPANSIONS"),
        )

    def problem_params(self) -> dict[str, Any]:
        """Keyword arguments for the castle problem factory."""
        params = asdict(self)
        params.pop("max_expansions")
        return params
