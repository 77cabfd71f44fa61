"""
Tests for match outcome simulation and ledger updates.
"""
from __future__ import annotations

import random
from itertools import permutations

import pytest

from league_sim.config import DEFAULT_COMPETITORS
from league_sim.models import Competitor
from league_sim.simulation.outcome import apply_result, simulate_match
from league_sim.simulation.rng import SeededRNG


def _pair(home_strength: int = 5, away_strength: int = 2) -> tuple[Competitor, Competitor]:
    return (
        Competitor(id="h", name="Home", strength=home_strength),
        Competitor(id="a", name="Away", strength=away_strength),
    )


class TestApplyResult:
    def test_home_win(self):
        home, away = _pair()
        apply_result(home, away, 3, 1)
        assert (home.played, home.won, home.drawn, home.lost) == (1, 1, 0, 0)
        assert (away.played, away.won, away.drawn, away.lost) == (1, 0, 0, 1)
        assert home.points == 3 and away.points == 0
        assert (home.goals_for, home.goals_against, home.goal_difference) == (3, 1, 2)
        assert (away.goals_for, away.goals_against, away.goal_difference) == (1, 3, -2)

    def test_away_win(self):
        home, away = _pair()
        apply_result(home, away, 0, 2)
        assert home.lost == 1 and home.points == 0
        assert away.won == 1 and away.points == 3
        assert home.goal_difference == -2 and away.goal_difference == 2

    def test_draw(self):
        home, away = _pair()
        apply_result(home, away, 1, 1)
        assert home.drawn == 1 and away.drawn == 1
        assert home.points == 1 and away.points == 1
        assert home.goal_difference == 0 and away.goal_difference == 0

    def test_accumulates(self):
        home, away = _pair()
        apply_result(home, away, 2, 0)
        apply_result(home, away, 0, 0)
        apply_result(away, home, 4, 1)
        assert home.played == 3 and away.played == 3
        assert home.points == 4 and away.points == 4
        assert home.goals_for == 3 and home.goals_against == 4
        assert home.goal_difference == -1 and away.goal_difference == 1


class TestSimulateMatch:
    def test_deterministic_for_seed(self):
        results = []
        for _ in range(2):
            home, away = _pair()
            rng = SeededRNG(12345)
            results.append([simulate_match(home, away, rng) for _ in range(20)])
        assert results[0] == results[1]

    def test_draws_home_then_away_uniformly(self):
        """Home goals drawn first from [0, home.strength], then away from [0, away.strength]."""
        ref = random.Random(42)
        expected = (ref.randint(0, 5), ref.randint(0, 2))
        home, away = _pair(5, 2)
        assert simulate_match(home, away, SeededRNG(42)) == expected

    def test_goals_within_strength(self):
        rng = SeededRNG(7)
        home, away = _pair(5, 2)
        seen_home, seen_away = set(), set()
        for _ in range(500):
            hg, ag = simulate_match(home, away, rng)
            assert 0 <= hg <= 5
            assert 0 <= ag <= 2
            seen_home.add(hg)
            seen_away.add(ag)
        assert seen_home == {0, 1, 2, 3, 4, 5}
        assert seen_away == {0, 1, 2}

    def test_zero_strength_always_draws(self):
        home, away = _pair(0, 0)
        rng = SeededRNG(1)
        for _ in range(10):
            assert simulate_match(home, away, rng) == (0, 0)
        assert home.drawn == 10 and home.points == 10

    def test_updates_ledgers(self):
        home, away = _pair(4, 3)
        hg, ag = simulate_match(home, away, SeededRNG(5))
        assert home.played == 1 and away.played == 1
        assert home.goals_for == hg and home.goals_against == ag
        assert away.goals_for == ag and away.goals_against == hg
        assert home.points + away.points in (2, 3)

    def test_default_league_every_pairing_repeatable(self):
        """Every ordered pairing of the default 5/4/3/2 league stays within strength and replays per seed."""

        def play(seed):
            rng = SeededRNG(seed)
            league = [Competitor(id=s.name, name=s.name, strength=s.strength) for s in DEFAULT_COMPETITORS]
            scores = []
            for home, away in permutations(league, 2):
                hg, ag = simulate_match(home, away, rng)
                assert 0 <= hg <= home.strength
                assert 0 <= ag <= away.strength
                scores.append((home.name, away.name, hg, ag))
            return scores, [(c.name, c.played, c.points, c.goal_difference) for c in league]

        first = play(2024)
        assert len(first[0]) == 12
        assert all(played == 6 for _, played, _, _ in first[1])
        assert play(2024) == first


def test_negative_strength_rejected():
    with pytest.raises(ValueError):
        Competitor(id="x", name="Bad", strength=-1)
