"""
Service layer: scheduling, season progression, predictions.
season_service orchestrates persistence; scheduling and predictions are pure.
"""
from .scheduling import InvalidConfigurationError, SchedulePolicy, generate_schedule
from .predictions import MIN_WEEKS_FOR_PREDICTION, estimate_predictions
from .season_service import SeasonService

__all__ = [
    "InvalidConfigurationError",
    "SchedulePolicy",
    "generate_schedule",
    "MIN_WEEKS_FOR_PREDICTION",
    "estimate_predictions",
    "SeasonService",
]
