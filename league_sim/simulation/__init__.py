"""
Match simulation: seeded randomness and per-match outcomes.
"""
from .rng import SeededRNG
from .outcome import POINTS_FOR_DRAW, POINTS_FOR_WIN, apply_result, simulate_match

__all__ = [
    "SeededRNG",
    "POINTS_FOR_DRAW",
    "POINTS_FOR_WIN",
    "apply_result",
    "simulate_match",
]
