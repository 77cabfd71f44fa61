"""
Double round-robin schedule generation.

Circle method: fix the first slot, rotate the others each round. N competitors
(N even) give N-1 rounds of N/2 pairings covering every unordered pair once;
the second leg mirrors home/away, so each ordered pair (home, away) occurs
exactly once across 2(N-1) rounds and N(N-1) fixtures.

Week assignment is a policy:
  SHUFFLED  the whole fixture list is permuted and sliced into weeks of N/2
            fixtures in permuted order. Weeks do not follow round boundaries,
            so a competitor may play more than once in a week (and sit out
            another). This is how the league has always scheduled.
  BY_ROUND  round order is permuted but each round stays one week, so every
            competitor plays exactly once a week.
"""
from __future__ import annotations

from enum import Enum
from typing import Sequence

from league_sim.models import Competitor, Fixture
from league_sim.simulation.rng import SeededRNG


class InvalidConfigurationError(ValueError):
    """Competitor set cannot be scheduled (empty, odd-sized or duplicate ids)."""


class SchedulePolicy(str, Enum):
    SHUFFLED = "shuffled"
    BY_ROUND = "by_round"


def validate_competitor_ids(ids: Sequence[str]) -> None:
    n = len(ids)
    if n < 2:
        raise InvalidConfigurationError(f"Need at least 2 competitors to schedule (got {n})")
    if n % 2 == 1:
        raise InvalidConfigurationError(f"Competitor count must be even (got {n})")
    if len(set(ids)) != n:
        raise InvalidConfigurationError("Competitor ids must be unique")


def round_robin_rounds(ids: Sequence[str]) -> list[list[tuple[str, str]]]:
    """
    Single leg: N-1 rounds of (home_id, away_id). Deterministic for a given ordering.
    The fixed competitor alternates home and away from round to round.
    """
    validate_competitor_ids(ids)
    n = len(ids)
    order = list(range(n))
    rounds: list[list[tuple[str, str]]] = []
    for r in range(n - 1):
        pairings: list[tuple[str, str]] = []
        for i in range(n // 2):
            a, b = order[i], order[n - 1 - i]
            if i == 0 and r % 2 == 1:
                a, b = b, a
            pairings.append((ids[a], ids[b]))
        rounds.append(pairings)
        # Rotate: keep 0, then order[n-1], order[1], ..., order[n-2]
        order = [order[0]] + [order[n - 1]] + order[1 : n - 1]
    return rounds


def double_round_robin(ids: Sequence[str]) -> list[list[tuple[str, str]]]:
    """First leg followed by the mirrored second leg: 2(N-1) rounds."""
    first_leg = round_robin_rounds(ids)
    second_leg = [[(away, home) for home, away in rnd] for rnd in first_leg]
    return first_leg + second_leg


def partition_into_weeks(
    rounds: list[list[tuple[str, str]]],
    rng: SeededRNG,
    policy: SchedulePolicy = SchedulePolicy.SHUFFLED,
) -> list[list[Fixture]]:
    """Assign 1-based weeks to every pairing according to policy."""
    if not rounds:
        return []
    per_week = len(rounds[0])
    weeks: list[list[Fixture]] = []
    if policy == SchedulePolicy.BY_ROUND:
        shuffled_rounds = list(rounds)
        rng.shuffle(shuffled_rounds)
        for w, rnd in enumerate(shuffled_rounds, start=1):
            weeks.append([Fixture(home_id=h, away_id=a, week=w) for h, a in rnd])
        return weeks
    pairings = [p for rnd in rounds for p in rnd]
    rng.shuffle(pairings)
    for start in range(0, len(pairings), per_week):
        w = start // per_week + 1
        weeks.append([
            Fixture(home_id=h, away_id=a, week=w)
            for h, a in pairings[start : start + per_week]
        ])
    return weeks


def generate_schedule(
    competitors: Sequence[Competitor],
    rng: SeededRNG,
    policy: SchedulePolicy = SchedulePolicy.SHUFFLED,
) -> list[list[Fixture]]:
    """
    Build the season schedule (unpersisted fixtures). Raises InvalidConfigurationError
    for empty, odd or duplicate competitor sets; no partial schedule is produced.
    """
    ids = [c.id for c in competitors]
    return partition_into_weeks(double_round_robin(ids), rng, SchedulePolicy(policy))
