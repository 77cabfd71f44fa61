"""
Seeded RNG for deterministic, replayable seasons.
"""
from __future__ import annotations

import random
from typing import MutableSequence


class SeededRNG:
    """Wrapper around random.Random for reproducible schedules and results."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Uniform integer in [a, b], both inclusive."""
        return self._rng.randint(a, b)

    def shuffle(self, seq: MutableSequence) -> None:
        self._rng.shuffle(seq)

    def getstate(self):
        return self._rng.getstate()

    def setstate(self, state) -> None:
        self._rng.setstate(state)
