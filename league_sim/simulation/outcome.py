"""
Match outcome simulation and standings bookkeeping.
Pure in-memory: no persistence. The caller decides when ledgers are saved.
"""
from __future__ import annotations

from league_sim.models import Competitor
from league_sim.simulation.rng import SeededRNG

POINTS_FOR_WIN = 3
POINTS_FOR_DRAW = 1


def apply_result(home: Competitor, away: Competitor, home_goals: int, away_goals: int) -> None:
    """Update both ledgers in place for one completed match."""
    home.played += 1
    away.played += 1

    home.goals_for += home_goals
    home.goals_against += away_goals
    away.goals_for += away_goals
    away.goals_against += home_goals

    if home_goals > away_goals:
        home.won += 1
        away.lost += 1
        home.points += POINTS_FOR_WIN
    elif away_goals > home_goals:
        away.won += 1
        home.lost += 1
        away.points += POINTS_FOR_WIN
    else:
        home.drawn += 1
        away.drawn += 1
        home.points += POINTS_FOR_DRAW
        away.points += POINTS_FOR_DRAW

    home.goal_difference = home.goals_for - home.goals_against
    away.goal_difference = away.goals_for - away.goals_against


def simulate_match(home: Competitor, away: Competitor, rng: SeededRNG) -> tuple[int, int]:
    """
    Draw each side's goals uniformly from [0, strength] (home first, independent draws),
    apply the result to both ledgers and return (home_goals, away_goals).
    Deterministic for a fixed rng seed.
    """
    home_goals = rng.randint(0, home.strength)
    away_goals = rng.randint(0, away.strength)
    apply_result(home, away, home_goals, away_goals)
    return home_goals, away_goals
