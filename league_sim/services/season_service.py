"""
Season service: one season's context (schedule, ledgers, current week) and the
week-by-week progression state machine.

current_week counts completed weeks: 0 = not started, week_count = complete.
Advances hold a single lock for the whole operation (simulate, persist
fixtures, persist ledgers, increment). Store writes for a week share one
transaction; in-memory state is only replaced after commit, so a failed or
interrupted week leaves everything as it was.
"""
from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Iterator

from league_sim.models import (
    Competitor,
    CompetitorSpec,
    Fixture,
    MatchResult,
    ResultsScope,
    SeasonStatus,
    SeasonSummary,
)
from league_sim.persistence.db import StoreUnavailableError, get_connection, store_errors
from league_sim.persistence.repositories import CompetitorRepository, FixtureRepository
from league_sim.services.predictions import PredictionEstimator, estimate_predictions
from league_sim.services.scheduling import (
    InvalidConfigurationError,
    SchedulePolicy,
    generate_schedule,
)
from league_sim.simulation.outcome import simulate_match
from league_sim.simulation.rng import SeededRNG

logger = logging.getLogger(__name__)


class SeasonService:
    """
    Owns one season. Safe to share between request threads.
    Persistence is delegated to repositories; db_path None means the configured default.
    """

    def __init__(
        self,
        db_path: str | Path | None = None,
        rng: SeededRNG | None = None,
        policy: SchedulePolicy | str = SchedulePolicy.SHUFFLED,
        estimator: PredictionEstimator = estimate_predictions,
    ) -> None:
        self._db_path = db_path
        self._rng = rng or SeededRNG()
        self._policy = SchedulePolicy(policy)
        self._estimator = estimator
        self._lock = threading.RLock()
        self._competitors: dict[str, Competitor] = {}  # insertion ordered
        self._schedule: list[list[Fixture]] = []
        self._current_week = 0
        self._show_all_results = False
        self._competitor_repo = CompetitorRepository()
        self._fixture_repo = FixtureRepository()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        conn = get_connection(self._db_path)
        try:
            yield conn
        finally:
            conn.close()

    # ---------- State ----------

    @property
    def current_week(self) -> int:
        return self._current_week

    @property
    def week_count(self) -> int:
        return len(self._schedule)

    @property
    def status(self) -> SeasonStatus:
        with self._lock:
            if self._current_week == 0 and self._schedule:
                return SeasonStatus.NOT_STARTED
            if self._current_week >= len(self._schedule):
                return SeasonStatus.COMPLETE
            return SeasonStatus.IN_PROGRESS

    @property
    def show_all_results(self) -> bool:
        """True after advance_all_remaining, until the next create_season."""
        with self._lock:
            return self._show_all_results

    @property
    def schedule(self) -> list[list[Fixture]]:
        with self._lock:
            return [[replace(f) for f in week] for week in self._schedule]

    # ---------- Setup ----------

    def create_season(self, specs: Iterable[CompetitorSpec]) -> list[list[Fixture]]:
        """
        Replace any stored season with a new one: persist the competitors in order,
        generate the double round-robin schedule, persist every fixture with its week.
        Raises InvalidConfigurationError before touching the store for unschedulable input.
        """
        specs = list(specs)
        if len(specs) < 2 or len(specs) % 2 == 1:
            raise InvalidConfigurationError(
                f"Need an even number of at least 2 competitors (got {len(specs)})"
            )
        for spec in specs:
            if spec.strength < 0:
                raise InvalidConfigurationError(f"strength must be >= 0 (got {spec.strength} for {spec.name})")

        with self._lock:
            with self._connection() as conn, store_errors("create_season"), conn:
                self._fixture_repo.delete_all(conn)
                self._competitor_repo.delete_all(conn)
                competitors = [
                    self._competitor_repo.create(conn, spec.name, spec.strength)
                    for spec in specs
                ]
                weeks = generate_schedule(competitors, self._rng, self._policy)
                schedule = [
                    [self._fixture_repo.create(conn, f) for f in week]
                    for week in weeks
                ]
            self._competitors = {c.id: c for c in competitors}
            self._schedule = schedule
            self._current_week = 0
            self._show_all_results = False
            logger.info(
                "Created season: %d competitors, %d weeks, %d fixtures (policy=%s)",
                len(competitors), len(schedule), sum(len(w) for w in schedule),
                self._policy.value,
            )
            return self.schedule

    def load(self) -> None:
        """
        Rebuild the season from the store (competitors, fixtures by week).
        current_week becomes the number of leading weeks whose fixtures all have results.
        """
        with self._lock:
            with self._connection() as conn, store_errors("load season"):
                competitors = self._competitor_repo.find_all(conn)
                fixtures = self._fixture_repo.list_all(conn)
            by_week: dict[int, list[Fixture]] = {}
            for f in fixtures:
                by_week.setdefault(f.week, []).append(f)
            schedule = [by_week[w] for w in sorted(by_week)]
            current = 0
            for week in schedule:
                if not all(f.is_played for f in week):
                    break
                current += 1
            self._competitors = {c.id: c for c in competitors}
            self._schedule = schedule
            self._current_week = current
            logger.info("Loaded season: %d competitors, week %d of %d", len(competitors), current, len(schedule))

    # ---------- Progression ----------

    def advance_one_week(self) -> None:
        """
        Simulate every fixture of the next week and persist results and ledgers.
        No-op once the season is complete. Raises StoreUnavailableError (after rolling
        back the store and leaving in-memory state untouched) if the week cannot be saved.
        """
        with self._lock:
            if self.status == SeasonStatus.COMPLETE:
                return
            week_index = self._current_week
            week_number = week_index + 1
            rng_state = self._rng.getstate()

            working = {cid: replace(c) for cid, c in self._competitors.items()}
            touched: dict[str, None] = {}
            played: list[Fixture] = []
            for f in self._schedule[week_index]:
                home_goals, away_goals = simulate_match(working[f.home_id], working[f.away_id], self._rng)
                played.append(replace(f, week=week_number, home_goals=home_goals, away_goals=away_goals))
                touched[f.home_id] = None
                touched[f.away_id] = None

            try:
                with self._connection() as conn, store_errors(f"advance week {week_number}"), conn:
                    persisted = [self._reconcile(conn, f) for f in played]
                    for cid in touched:
                        self._competitor_repo.save(conn, working[cid])
            except StoreUnavailableError:
                self._rng.setstate(rng_state)
                logger.warning("Week %d not advanced: store write failed, rolled back", week_number, exc_info=True)
                raise

            for cid in touched:
                self._competitors[cid] = working[cid]
            self._schedule[week_index] = persisted
            self._current_week = week_number
            logger.info("Advanced to week %d of %d", week_number, len(self._schedule))

    def _reconcile(self, conn: sqlite3.Connection, fixture: Fixture) -> Fixture:
        """Update the stored fixture with the same natural key, or create it."""
        existing = self._fixture_repo.find(conn, *fixture.natural_key)
        if existing is None:
            return self._fixture_repo.create(conn, replace(fixture, id=None))
        self._fixture_repo.update_result(conn, existing.id, fixture.home_goals, fixture.away_goals)
        return replace(fixture, id=existing.id)

    def advance_all_remaining(self) -> int:
        """
        Advance week by week, in order, until complete. Returns weeks played.
        Afterwards summary() defaults to every result instead of the last week's.
        """
        weeks_played = 0
        with self._lock:
            while self.status != SeasonStatus.COMPLETE:
                self.advance_one_week()
                weeks_played += 1
            self._show_all_results = True
        return weeks_played

    # ---------- Reads ----------

    def get_standings(self) -> list[Competitor]:
        """Copies sorted by points descending; ties keep insertion order."""
        with self._lock:
            ledgers = [replace(c) for c in self._competitors.values()]
        return sorted(ledgers, key=lambda c: -c.points)

    def get_results(self, scope: ResultsScope | str = ResultsScope.CURRENT_WEEK) -> list[MatchResult]:
        """
        Played fixtures read from the store with names resolved.
        CURRENT_WEEK = the most recently played week (empty before week 1).
        """
        scope = ResultsScope(scope)
        with self._lock:
            week = self._current_week
            names = {cid: c.name for cid, c in self._competitors.items()}
            if scope == ResultsScope.CURRENT_WEEK and week == 0:
                return []
            with self._connection() as conn, store_errors("get_results"):
                fixtures = self._fixture_repo.list_played(
                    conn, week if scope == ResultsScope.CURRENT_WEEK else None
                )
        return [
            MatchResult(
                week=f.week,
                home_name=names.get(f.home_id, f.home_id),
                away_name=names.get(f.away_id, f.away_id),
                home_goals=f.home_goals,
                away_goals=f.away_goals,
            )
            for f in fixtures
        ]

    def get_predictions(self) -> dict[str, int]:
        """Championship likelihood per name; empty before week 4."""
        with self._lock:
            ledgers = [replace(c) for c in self._competitors.values()]
            week = self._current_week
        return self._estimator(ledgers, week)

    def summary(self, scope: ResultsScope | str | None = None) -> SeasonSummary:
        """
        State, standings, results and predictions taken under one lock hold, so no
        week can be advanced between the parts. scope None follows show_all_results.
        """
        with self._lock:
            if scope is None:
                scope = ResultsScope.ALL if self._show_all_results else ResultsScope.CURRENT_WEEK
            scope = ResultsScope(scope)
            return SeasonSummary(
                current_week=self._current_week,
                week_count=len(self._schedule),
                status=self.status,
                scope=scope,
                standings=self.get_standings(),
                results=self.get_results(scope),
                predictions=self.get_predictions(),
            )
