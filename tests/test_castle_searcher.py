"""Tests for CastleSearcher — the castle game as a search problem."""

import pytest

from rampart.core.castle import Castle
from rampart.models.castle_searcher import CastleSearcher
from rampart.search.best_first import BestFirstSearcher
from rampart.search.errors import ExpansionLimitReached


def test_training_pool_is_seeded():
    a = CastleSearcher(n_samples=100, seed=9)
    b = CastleSearcher(n_samples=100, seed=9)
    assert a.n_samples == 100
    assert (a.training_data == b.training_data).all()
    assert a.start() == b.start()


def test_score_counts_wins_over_pool():
    searcher = CastleSearcher(n_samples=200, seed=4)
    castle = Castle.from_troops([10] * 10)

    expected = sum(
        castle.does_win(Castle.from_troops(row)) for row in searcher.training_data
    )
    assert searcher.score(castle) == float(expected)
    assert 0 <= searcher.score(castle) <= 200


def test_fixed_start_troops():
    searcher = CastleSearcher(n_samples=10, seed=1, start_troops=[10] * 10)
    assert searcher.start() == Castle.from_troops([10] * 10)


def test_goal_is_never_reached_without_target():
    searcher = CastleSearcher(n_samples=10, seed=1)
    assert not searcher.is_goal(searcher.start(), 1e9)


def test_goal_with_target():
    searcher = CastleSearcher(n_samples=10, seed=1, target_wins=7)
    castle = searcher.start()
    assert searcher.is_goal(castle, 7.0)
    assert not searcher.is_goal(castle, 6.0)


def test_search_climbs_with_limit():
    problem = CastleSearcher(n_samples=300, seed=2, start_troops=[10] * 10)
    searcher = BestFirstSearcher(problem, max_expansions=25)
    problem.attach_tracker(searcher.best_ever)

    with pytest.raises(ExpansionLimitReached) as info:
        searcher.run()

    assert problem.reports == 25
    assert info.value.best.fitness >= problem.score(problem.start())
    assert searcher.stats.visited == searcher.stats.enqueued


def test_search_stops_at_target():
    """The best neighbor of the start is reported second at the latest."""
    problem = CastleSearcher(n_samples=300, seed=2, start_troops=[10] * 10)
    start = problem.start()
    problem.target_wins = int(max(problem.score(n) for n in start.neighbors()))

    searcher = BestFirstSearcher(problem, max_expansions=5)
    result = searcher.run()

    assert problem.score(result) >= problem.target_wins
    assert searcher.stats.reported <= 2
