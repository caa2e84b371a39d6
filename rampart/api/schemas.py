"""
Pydantic schemas for the FastAPI endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from rampart.core.config import (
    API_EXPANSIONS_LIMIT,
    API_MAX_EXPANSIONS,
    API_SAMPLES_LIMIT,
    API_TRAINING_SAMPLES,
)


# ── Shared ─────────────────────────────────────────────────────────

class SearchStatsOut(BaseModel):
    """Per-run engine counters."""

    scored: int
    reported: int
    expanded: int
    enqueued: int
    skipped_duplicates: int
    visited: int


class BestEntry(BaseModel):
    state: Any
    fitness: float


# ── Castle search ──────────────────────────────────────────────────

class CastleSearchInput(BaseModel):
    """Castle search request."""

    seed: int | None = Field(default=None, description="Seed for the opponent pool and start")
    n_samples: int = Field(
        default=API_TRAINING_SAMPLES, ge=0, le=API_SAMPLES_LIMIT, description="Opponent pool size"
    )
    max_expansions: int = Field(default=API_MAX_EXPANSIONS, ge=1, le=API_EXPANSIONS_LIMIT)
    target_wins: int | None = Field(default=None, description="Stop once this many wins are reached")
    troops: list[int] | None = Field(default=None, description="Fixed start allocation (10 values)")


class CastleSearchResult(BaseModel):
    """Outcome of a castle search."""

    status: str
    result: list[int] | None
    fitness: float | None
    best: BestEntry | None
    stats: SearchStatsOut


# ── Graph search ───────────────────────────────────────────────────

class GraphNodeIn(BaseModel):
    id: str
    fitness: float


class GraphEdgeIn(BaseModel):
    source: str
    target: str


class GraphSearchInput(BaseModel):
    """Explicit graph + start node + optional goals."""

    nodes: list[GraphNodeIn] = Field(..., description="Nodes with their fitness")
    edges: list[GraphEdgeIn] = Field(default_factory=list)
    start: str
    goals: list[str] = Field(default_factory=list)
    max_expansions: int | None = Field(default=None, ge=1)


class ReportEntry(BaseModel):
    node: str
    fitness: float


class GraphSearchResult(BaseModel):
    """Outcome of a graph search, including the expansion order."""

    status: str
    result: str | None
    fitness: float | None
    best: BestEntry | None
    stats: SearchStatsOut
    report_order: list[ReportEntry]


# ── Castles ────────────────────────────────────────────────────────

class DuelInput(BaseModel):
    """Two troop allocations to battle."""

    attacker: list[int]
    defender: list[int]


class DuelResult(BaseModel):
    attacker_wins: bool
    defender_wins: bool
    attacker_troops: list[int]
    defender_troops: list[int]


class TroopsInput(BaseModel):
    troops: list[int]


class NeighborsResult(BaseModel):
    troops: list[int]
    neighbors: list[list[int]]
