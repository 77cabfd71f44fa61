"""
Data models for the league simulator.
Domain objects only: no persistence or API logic.

A season is a double round-robin between a fixed set of competitors. Fixtures
are scheduled up front; results are filled in as weeks are advanced.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


# ---------- Season status (state machine) ----------
class SeasonStatus(str, Enum):
    """Season lifecycle: not_started → in_progress → complete."""
    NOT_STARTED = "not_started"  # current_week == 0
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"  # current_week == week_count; terminal


class ResultsScope(str, Enum):
    CURRENT_WEEK = "current_week"
    ALL = "all"


# ---------- Competitor ----------
@dataclass
class CompetitorSpec:
    """Name and strength used to create a competitor at season start."""
    name: str
    strength: int


@dataclass
class Competitor:
    """
    A league member and its standings ledger.
    strength is fixed at creation; goals are drawn from [0, strength].
    Standings fields change only through completed matches.
    """
    id: str
    name: str
    strength: int
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0

    def __post_init__(self) -> None:
        if self.strength < 0:
            raise ValueError(f"strength must be >= 0 (got {self.strength} for {self.name})")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "strength": self.strength,
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "goals_for": self.goals_for,
            "goals_against": self.goals_against,
            "goal_difference": self.goal_difference,
            "points": self.points,
        }


# ---------- Fixture ----------
@dataclass
class Fixture:
    """
    Scheduled pairing for a week (1-based). id is None until persisted.
    home_goals / away_goals stay None until the week is simulated.
    """
    home_id: str
    away_id: str
    week: int
    id: int | None = None
    home_goals: int | None = None
    away_goals: int | None = None

    @property
    def is_played(self) -> bool:
        return self.home_goals is not None and self.away_goals is not None

    @property
    def natural_key(self) -> tuple[str, str, int]:
        return (self.home_id, self.away_id, self.week)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "week": self.week,
            "home_id": self.home_id,
            "away_id": self.away_id,
            "home_goals": self.home_goals,
            "away_goals": self.away_goals,
        }


@dataclass
class MatchResult:
    """Played fixture with competitor names resolved (for views)."""
    week: int
    home_name: str
    away_name: str
    home_goals: int
    away_goals: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "week": self.week,
            "home_name": self.home_name,
            "away_name": self.away_name,
            "home_goals": self.home_goals,
            "away_goals": self.away_goals,
        }


@dataclass
class SeasonSummary:
    """Consistent snapshot of one season: state, table, results and predictions."""
    current_week: int
    week_count: int
    status: SeasonStatus
    scope: ResultsScope
    standings: list[Competitor]
    results: list[MatchResult]
    predictions: dict[str, int]
