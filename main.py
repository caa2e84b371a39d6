"""
Rampart — Best-First Local Search Backend
=========================================

FastAPI entry point.
Start with:  uvicorn main:app --reload
Or run a single castle search:  python main.py
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rampart.api.routes import router
from rampart.core.config import SearchConfig
from rampart.engine.search_engine import SearchEngine

# ── Logging ────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

# ── App ────────────────────────────────────────────────────────────
app = FastAPI(
    title="Rampart",
    description=(
        "Greedy best-first local search.  Expands the highest-scoring "
        "unexplored state until a goal holds or the frontier runs out, "
        "with the castle battle game as the built-in problem model."
    ),
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount all routes
app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": "Rampart",
        "version": "0.1.0",
        "status": "running",
        "docs": "/docs",
    }


def main() -> None:
    """Run one castle search configured from RAMPART_* variables and print the outcome."""
    config = SearchConfig.from_env()
    engine = SearchEngine()
    result = engine.run("castle", config.problem_params(), max_expansions=config.max_expansions)
    print(engine.render(result))


if __name__ == "__main__":
    main()
