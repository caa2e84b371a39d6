"""
Problem Registry — maps problem type strings to problem model factories.

This is the single extensibility point for adding new search domains.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from rampart.models.castle_searcher import CastleSearcher
from rampart.models.graph_problem import GraphProblem
from rampart.search.interface import SearchProblem

ProblemFactory = Callable[..., SearchProblem[Any]]

# ── Default registry ───────────────────────────────────────────────

_REGISTRY: dict[str, ProblemFactory] = {
    "castle": CastleSearcher,
    "graph": GraphProblem.from_json,
}


def register_problem_type(type_name: str, factory: ProblemFactory) -> None:
    """Register a new problem type (or override an existing one)."""
    _REGISTRY[type_name] = factory


def get_problem_factory(type_name: str) -> ProblemFactory:
    """
    Look up the factory for a problem type.

    Raises KeyError if the type is not registered.
    """
    if type_name not in _REGISTRY:
        raise KeyError(
            f"Unknown problem type {type_name!r}. "
            f"Registered types: {list(_REGISTRY.keys())}"
        )
    return _REGISTRY[type_name]


def list_problem_types() -> list[str]:
    """Return all registered problem type names."""
    return list(_REGISTRY.keys())


def create_problem(type_name: str, **params: Any) -> SearchProblem[Any]:
    """
    Factory: instantiate a problem model by its type string.

    ``graph`` takes the JSON payload as a single ``graph_json`` keyword.
    """
    factory = get_problem_factory(type_name)
    return factory(**params)
