"""
Championship predictions: a naive points-share heuristic, not a statistical model.
Each competitor's chance is its share of all points awarded so far.
"""
from __future__ import annotations

from typing import Callable, Sequence

from league_sim.models import Competitor

MIN_WEEKS_FOR_PREDICTION = 4

# (competitors, current_week) -> {name: percentage}
PredictionEstimator = Callable[[Sequence[Competitor], int], dict[str, int]]


def estimate_predictions(competitors: Sequence[Competitor], current_week: int) -> dict[str, int]:
    """
    Empty before week 4. Otherwise floor(points * 100 / total points) per competitor.
    Percentages are floored independently and need not sum to 100.
    All zero when no points have been awarded.
    """
    if current_week < MIN_WEEKS_FOR_PREDICTION:
        return {}
    total_points = sum(c.points for c in competitors)
    if total_points == 0:
        return {c.name: 0 for c in competitors}
    return {c.name: (c.points * 100) // total_points for c in competitors}
