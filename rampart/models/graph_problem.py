"""
GraphProblem — best-first search over an explicit directed graph.

Node ids are the states, a ``fitness`` node attribute is the score and
successors are the neighbors.  Useful for checking the engine's order
of expansion on small hand-built graphs.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable
from typing import Any

import networkx as nx

from rampart.search.interface import SearchProblem

logger = logging.getLogger(__name__)


class GraphProblem(SearchProblem[Hashable]):
    """
    Parameters
    ----------
    graph : nx.DiGraph
        Every node must carry a numeric ``fitness`` attribute.
    start : node id
    goals : iterable of node ids, optional
        Popping any of these ends the run.  Empty means never.
    """

    def __init__(
        self,
        graph: nx.DiGraph,
        start: Hashable,
        goals: Iterable[Hashable] = (),
    ) -> None:
        if start not in graph:
            raise KeyError(f"Start node {start!r} not in graph.")
        missing = [n for n, data in graph.nodes(data=True) if "fitness" not in data]
        if missing:
            raise ValueError(f"Nodes without a fitness attribute: {missing}")

        self.graph = graph
        self.start_node = start
        self.goals = frozenset(goals)
        self.report_order: list[tuple[Hashable, float]] = []
        self.score_calls: list[Hashable] = []

    # ── SearchProblem ──────────────────────────────────────────────

    def start(self) -> Hashable:
        return self.start_node

    def neighbors(self, state: Hashable) -> list[Hashable]:
        return list(self.graph.successors(state))

    def score(self, state: Hashable) -> float:
        self.score_calls.append(state)
        return self.graph.nodes[state]["fitness"]

    def is_goal(self, state: Hashable, fitness: float) -> bool:
        return state in self.goals

    def report(self, state: Hashable, fitness: float) -> None:
        self.report_order.append((state, fitness))

    # ── JSON parsing ───────────────────────────────────────────────

    @classmethod
    def from_json(cls, graph_json: dict[str, Any]) -> "GraphProblem":
        """
        Build a problem from a JSON payload.

        Expected format:
        {
          "nodes": [ { "id": "A", "fitness": 1.0 }, ... ],
          "edges": [ { "source": "A", "target": "B" }, ... ],
          "start": "A",
          "goals": ["B"]
        }
        """
        g = nx.DiGraph()
        for rn in graph_json.get("nodes", []):
            g.add_node(rn["id"], fitness=rn["fitness"])

        for re_ in graph_json.get("edges", []):
            source, target = re_["source"], re_["target"]
            if source not in g or target not in g:
                raise KeyError(f"Edge {source!r} -> {target!r} references an unknown node.")
            g.add_edge(source, target)

        logger.info(
            "Parsed search graph: %d nodes, %d edges",
            g.number_of_nodes(),
            g.number_of_edges(),
        )
        return cls(g, graph_json["start"], graph_json.get("goals", ()))
