"""
FastAPI routes for the Rampart search backend.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from rampart.api.schemas import (
    CastleSearchInput,
    CastleSearchResult,
    DuelInput,
    DuelResult,
    GraphSearchInput,
    GraphSearchResult,
    NeighborsResult,
    ReportEntry,
    TroopsInput,
)
from rampart.core.castle import Castle
from rampart.core.problem_registry import list_problem_types
from rampart.engine.search_engine import SearchEngine
from rampart.search.errors import SEARCH_ERRORS, SearchError

logger = logging.getLogger(__name__)

router = APIRouter()


def _http_error(exc: Exception) -> HTTPException:
    status = SEARCH_ERRORS.get(type(exc), 400)
    return HTTPException(status_code=status, detail=str(exc))


# ── Search ─────────────────────────────────────────────────────────

@router.post("/search/castle", response_model=CastleSearchResult)
async def search_castle(payload: CastleSearchInput) -> CastleSearchResult:
    """
    Run a best-first castle search.  Exhaustion and the expansion limit
    are normal outcomes, reported through ``status``.
    """
    engine = SearchEngine()
    try:
        result = engine.run(
            "castle",
            {
                "n_samples": payload.n_samples,
                "seed": payload.seed,
                "target_wins": payload.target_wins,
                "start_troops": payload.troops,
            },
            max_expansions=payload.max_expansions,
        )
    except (SearchError, ValueError) as exc:
        raise _http_error(exc)
    except Exception as exc:
        logger.exception("Castle search failed")
        raise HTTPException(status_code=500, detail=str(exc))
    return CastleSearchResult(**result)


@router.post("/search/graph", response_model=GraphSearchResult)
async def search_graph(payload: GraphSearchInput) -> GraphSearchResult:
    """
    Run a best-first search over an explicit graph and return the
    order in which nodes were expanded.
    """
    engine = SearchEngine()
    graph_json = payload.model_dump(exclude={"max_expansions"})
    try:
        result = engine.run(
            "graph",
            {"graph_json": graph_json},
            max_expansions=payload.max_expansions,
        )
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except (SearchError, ValueError) as exc:
        raise _http_error(exc)
    except Exception as exc:
        logger.exception("Graph search failed")
        raise HTTPException(status_code=500, detail=str(exc))

    report_order = [
        ReportEntry(node=node, fitness=fitness)
        for node, fitness in engine.problem.report_order
    ]
    return GraphSearchResult(**result, report_order=report_order)


@router.get("/problems")
async def get_problem_types() -> dict[str, list[str]]:
    """List the registered problem types."""
    return {"problem_types": list_problem_types()}


# ── Castles ────────────────────────────────────────────────────────

@router.post("/castles/duel", response_model=DuelResult)
async def duel(payload: DuelInput) -> DuelResult:
    """Battle two troop allocations against each other."""
    try:
        attacker = Castle.from_troops(payload.attacker)
        defender = Castle.from_troops(payload.defender)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return DuelResult(
        attacker_wins=attacker.does_win(defender),
        defender_wins=defender.does_win(attacker),
        attacker_troops=list(attacker.troops()),
        defender_troops=list(defender.troops()),
    )


@router.post("/castles/neighbors", response_model=NeighborsResult)
async def castle_neighbors(payload: TroopsInput) -> NeighborsResult:
    """Distinct allocations one cut-point move away."""
    try:
        castle = Castle.from_troops(payload.troops)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    distinct = list(dict.fromkeys(castle.neighbors()))
    return NeighborsResult(
        troops=list(castle.troops()),
        neighbors=[list(n.troops()) for n in distinct],
    )
