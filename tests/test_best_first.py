"""Tests for BestFirstSearcher — expansion order, dedup and outcomes."""

import math

import networkx as nx
import numpy as np
import pytest

from rampart.models.graph_problem import GraphProblem
from rampart.search.best_first import BestFirstSearcher
from rampart.search.errors import (
    ExpansionLimitReached,
    InvalidFitnessError,
    SearchSpaceExhausted,
)
from rampart.search.interface import FunctionProblem

TOY_GRAPH = {"A": ["B", "C"], "B": [], "C": []}
TOY_SCORES = {"A": 1.0, "B": 5.0, "C": 3.0}


def _make_toy(goal=None, scores=None):
    """A → {B, C} with score(A)=1, score(B)=5, score(C)=3."""
    scores = scores or TOY_SCORES
    calls = {"score": [], "report": [], "neighbors": []}

    def neighbors(state):
        calls["neighbors"].append(state)
        return TOY_GRAPH[state]

    def score(state):
        calls["score"].append(state)
        return scores[state]

    def report(state, fitness):
        calls["report"].append((state, fitness))

    problem = FunctionProblem(
        start=lambda: "A",
        neighbors=neighbors,
        score=score,
        is_goal=(lambda s, f: s == goal) if goal else None,
        report=report,
    )
    return problem, calls


def _graph_with_fitness(graph, rng):
    for node in graph.nodes:
        graph.nodes[node]["fitness"] = float(rng.random())
    return graph


def test_toy_graph_reports_in_fitness_order_then_exhausts():
    problem, calls = _make_toy()
    searcher = BestFirstSearcher(problem)

    with pytest.raises(SearchSpaceExhausted) as info:
        searcher.run()

    assert calls["report"] == [("A", 1.0), ("B", 5.0), ("C", 3.0)]
    assert len(calls["score"]) == 3
    assert info.value.stats.reported == 3
    assert info.value.best.item == "B"
    assert "exhausted" in str(info.value)


def test_toy_graph_goal_returns_b():
    """C is enqueued while expanding A, but never reported."""
    problem, calls = _make_toy(goal="B")
    searcher = BestFirstSearcher(problem)

    result = searcher.run()

    assert result == "B"
    assert searcher.result_fitness == 5.0
    assert [s for s, _ in calls["report"]] == ["A", "B"]
    assert calls["neighbors"] == ["A"]
    # Neighbors are scored when enqueued, so C is scored while A expands
    assert calls["score"] == ["A", "B", "C"]


def test_goal_short_circuit_on_start():
    def no_neighbors(state):
        raise AssertionError("start state must not be expanded")

    reports = []
    problem = FunctionProblem(
        start=lambda: "S",
        neighbors=no_neighbors,
        score=lambda s: 0.0,
        is_goal=lambda s, f: True,
        report=lambda s, f: reports.append(s),
    )
    searcher = BestFirstSearcher(problem)

    assert searcher.run() == "S"
    assert reports == ["S"]
    assert searcher.stats.scored == 1
    assert searcher.stats.expanded == 0


def test_diamond_is_deduplicated():
    """A → {B, C}, B → D, C → D: D is scored and enqueued once."""
    g = nx.DiGraph([("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")])
    nx.set_node_attributes(g, {"A": 0.0, "B": 2.0, "C": 1.0, "D": 3.0}, "fitness")
    problem = GraphProblem(g, "A")
    searcher = BestFirstSearcher(problem)

    with pytest.raises(SearchSpaceExhausted):
        searcher.run()

    assert problem.score_calls.count("D") == 1
    assert searcher.stats.skipped_duplicates == 1
    assert searcher.stats.visited == searcher.stats.enqueued == 4
    assert [n for n, _ in problem.report_order] == ["A", "B", "D", "C"]


def test_dedup_and_termination_on_cyclic_graph():
    """Every reachable node is scored exactly once; unreachable ones never."""
    rng = np.random.default_rng(5)
    g = _graph_with_fitness(nx.gnp_random_graph(60, 0.08, seed=5, directed=True), rng)
    g.add_node("island", fitness=100.0)
    reachable = nx.descendants(g, 0) | {0}

    problem = GraphProblem(g, 0)
    searcher = BestFirstSearcher(problem)

    with pytest.raises(SearchSpaceExhausted):
        searcher.run()

    assert sorted(problem.score_calls) == sorted(reachable)
    assert searcher.stats.scored == len(reachable)
    assert searcher.stats.reported == len(reachable)
    assert searcher.stats.visited == searcher.stats.enqueued
    assert "island" not in problem.score_calls


def test_report_never_jumps_above_an_older_candidate():
    """
    A pop can only beat the previous pop's fitness if it was just
    discovered by expanding that previous state.
    """
    rng = np.random.default_rng(17)
    g = _graph_with_fitness(nx.gnp_random_graph(80, 0.05, seed=17, directed=True), rng)
    problem = GraphProblem(g, 0)

    with pytest.raises(SearchSpaceExhausted):
        BestFirstSearcher(problem).run()

    order = problem.report_order
    for (prev, prev_fit), (cur, cur_fit) in zip(order, order[1:]):
        if cur_fit > prev_fit:
            assert cur in g.successors(prev)


def test_non_increasing_reports_when_fitness_falls_with_depth():
    g = nx.balanced_tree(2, 4, create_using=nx.DiGraph)
    depth = nx.shortest_path_length(g, 0)
    rng = np.random.default_rng(3)
    for node in g.nodes:
        g.nodes[node]["fitness"] = -depth[node] + float(rng.random()) * 0.5
    problem = GraphProblem(g, 0)

    with pytest.raises(SearchSpaceExhausted):
        BestFirstSearcher(problem).run()

    fitnesses = [f for _, f in problem.report_order]
    assert fitnesses == sorted(fitnesses, reverse=True)


def test_expansion_limit():
    problem, calls = _make_toy()
    searcher = BestFirstSearcher(problem, max_expansions=2)

    with pytest.raises(ExpansionLimitReached) as info:
        searcher.run()

    assert [s for s, _ in calls["report"]] == ["A", "B"]
    assert info.value.stats.reported == 2
    assert info.value.best.fitness == 5.0


def test_invalid_max_expansions():
    problem, _ = _make_toy()
    with pytest.raises(ValueError):
        BestFirstSearcher(problem, max_expansions=0)


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf, "5", None])
def test_non_finite_score_is_rejected(bad):
    problem, _ = _make_toy(scores={"A": 1.0, "B": bad, "C": 3.0})
    searcher = BestFirstSearcher(problem)

    with pytest.raises(InvalidFitnessError) as info:
        searcher.run()

    assert info.value.state == "B"
    assert isinstance(info.value, ValueError)
    # The bad state never reached the tracker
    assert [e.item for e in searcher.best_ever.history()] == ["A"]


def test_tracker_outlives_runs():
    problem, _ = _make_toy()
    searcher = BestFirstSearcher(problem)

    with pytest.raises(SearchSpaceExhausted):
        searcher.run()
    assert len(searcher.best_ever) == 2

    with pytest.raises(SearchSpaceExhausted):
        searcher.run()
    # Nothing in the second run beat 5.0, so no new records
    assert len(searcher.best_ever) == 2
    assert searcher.stats.scored == 3


def test_numpy_scores_are_accepted():
    problem, _ = _make_toy(
        scores={"A": np.float64(1.0), "B": np.int64(5), "C": np.float32(3.0)}
    )
    with pytest.raises(SearchSpaceExhausted) as info:
        BestFirstSearcher(problem).run()
    assert info.value.best.fitness == 5.0


def test_tracker_records_scored_but_unexpanded_states():
    """B is scored while A expands, then the limit stops the run before B is popped."""
    problem, calls = _make_toy()
    searcher = BestFirstSearcher(problem, max_expansions=1)

    with pytest.raises(ExpansionLimitReached) as info:
        searcher.run()

    assert [s for s, _ in calls["report"]] == ["A"]
    assert info.value.best.item == "B"
    assert info.value.best.fitness == 5.0
