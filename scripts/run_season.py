#!/usr/bin/env python3
"""
Play a whole season and print results and the final table.
Run from project root: python3 scripts/run_season.py --seed 7
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

# Ensure project root on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from league_sim.config import DEFAULT_COMPETITORS
from league_sim.models import ResultsScope
from league_sim.persistence import reset_db
from league_sim.services import MIN_WEEKS_FOR_PREDICTION, SchedulePolicy, SeasonService
from league_sim.simulation import SeededRNG


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate a double round-robin season")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for a replayable season")
    parser.add_argument(
        "--policy",
        choices=[p.value for p in SchedulePolicy],
        default=SchedulePolicy.SHUFFLED.value,
        help="How fixtures are assigned to weeks",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=PROJECT_ROOT / "data" / "run_season.db",
        help="SQLite file (reset on every run)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    reset_db(args.db)
    season = SeasonService(db_path=args.db, rng=SeededRNG(args.seed), policy=args.policy)
    season.create_season(DEFAULT_COMPETITORS)

    while season.current_week < season.week_count:
        season.advance_one_week()
        print(f"Week {season.current_week}")
        for r in season.get_results(ResultsScope.CURRENT_WEEK):
            print(f"  {r.home_name:>16} {r.home_goals} - {r.away_goals} {r.away_name}")
        if season.current_week >= MIN_WEEKS_FOR_PREDICTION:
            preds = season.get_predictions()
            print("  Predictions: " + ", ".join(f"{n} {p}%" for n, p in preds.items()))

    print()
    print(f"{'Team':<16} {'P':>2} {'W':>2} {'D':>2} {'L':>2} {'GF':>3} {'GA':>3} {'GD':>3} {'Pts':>3}")
    for c in season.get_standings():
        print(
            f"{c.name:<16} {c.played:>2} {c.won:>2} {c.drawn:>2} {c.lost:>2} "
            f"{c.goals_for:>3} {c.goals_against:>3} {c.goal_difference:>3} {c.points:>3}"
        )


if __name__ == "__main__":
    main()
