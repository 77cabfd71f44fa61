"""
Repository interfaces for league data.
No business logic, only read/write operations.

Methods never commit: the caller owns the transaction (``with conn:``), so a
week of results and ledgers can be written all-or-nothing.
"""
from __future__ import annotations

import sqlite3
import uuid
from dataclasses import replace
from datetime import datetime, timezone

from league_sim.models import Competitor, Fixture

_COMPETITOR_COLS = (
    "id, name, strength, played, won, drawn, lost, "
    "goals_for, goals_against, goal_difference, points"
)
_FIXTURE_COLS = "id, week, home_competitor_id, away_competitor_id, home_goals, away_goals"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_competitor(r: sqlite3.Row) -> Competitor:
    return Competitor(
        id=r["id"],
        name=r["name"],
        strength=r["strength"],
        played=r["played"],
        won=r["won"],
        drawn=r["drawn"],
        lost=r["lost"],
        goals_for=r["goals_for"],
        goals_against=r["goals_against"],
        goal_difference=r["goal_difference"],
        points=r["points"],
    )


def _row_to_fixture(r: sqlite3.Row) -> Fixture:
    return Fixture(
        id=r["id"],
        week=r["week"],
        home_id=r["home_competitor_id"],
        away_id=r["away_competitor_id"],
        home_goals=r["home_goals"],
        away_goals=r["away_goals"],
    )


# ---------- CompetitorRepository ----------


class CompetitorRepository:
    """CRUD for competitors. find_all returns insertion order."""

    def create(
        self,
        conn: sqlite3.Connection,
        name: str,
        strength: int,
        id: str | None = None,
    ) -> Competitor:
        competitor = Competitor(id=id or str(uuid.uuid4()), name=name, strength=strength)
        conn.execute(
            f"INSERT INTO competitors ({_COMPETITOR_COLS}, created_at) "
            "VALUES (?, ?, ?, 0, 0, 0, 0, 0, 0, 0, 0, ?)",
            (competitor.id, name, strength, _now_iso()),
        )
        return competitor

    def get(self, conn: sqlite3.Connection, competitor_id: str) -> Competitor | None:
        row = conn.execute(
            f"SELECT {_COMPETITOR_COLS} FROM competitors WHERE id = ?",
            (competitor_id,),
        ).fetchone()
        if row is None:
            return None
        return _row_to_competitor(row)

    def find_all(self, conn: sqlite3.Connection) -> list[Competitor]:
        rows = conn.execute(
            f"SELECT {_COMPETITOR_COLS} FROM competitors ORDER BY rowid"
        ).fetchall()
        return [_row_to_competitor(r) for r in rows]

    def save(self, conn: sqlite3.Connection, c: Competitor) -> None:
        """Upsert the full record (identity, strength and every standings column)."""
        conn.execute(
            f"""INSERT INTO competitors ({_COMPETITOR_COLS}, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    strength = excluded.strength,
                    played = excluded.played,
                    won = excluded.won,
                    drawn = excluded.drawn,
                    lost = excluded.lost,
                    goals_for = excluded.goals_for,
                    goals_against = excluded.goals_against,
                    goal_difference = excluded.goal_difference,
                    points = excluded.points""",
            (
                c.id, c.name, c.strength, c.played, c.won, c.drawn, c.lost,
                c.goals_for, c.goals_against, c.goal_difference, c.points,
                _now_iso(),
            ),
        )

    def delete_all(self, conn: sqlite3.Connection) -> None:
        conn.execute("DELETE FROM competitors")


# ---------- FixtureRepository ----------


class FixtureRepository:
    """CRUD for fixtures. Natural key: (home_competitor_id, away_competitor_id, week)."""

    def create(self, conn: sqlite3.Connection, fixture: Fixture) -> Fixture:
        """Insert the fixture (with its result if already set); return a copy carrying the new id."""
        cur = conn.execute(
            """INSERT INTO fixtures (
                week, home_competitor_id, away_competitor_id, home_goals, away_goals, created_at
            ) VALUES (?, ?, ?, ?, ?, ?)""",
            (
                fixture.week,
                fixture.home_id,
                fixture.away_id,
                fixture.home_goals,
                fixture.away_goals,
                _now_iso(),
            ),
        )
        return replace(fixture, id=cur.lastrowid)

    def find(
        self, conn: sqlite3.Connection, home_id: str, away_id: str, week: int
    ) -> Fixture | None:
        row = conn.execute(
            f"""SELECT {_FIXTURE_COLS} FROM fixtures
                WHERE home_competitor_id = ? AND away_competitor_id = ? AND week = ?
                ORDER BY id LIMIT 1""",
            (home_id, away_id, week),
        ).fetchone()
        if row is None:
            return None
        return _row_to_fixture(row)

    def update_result(
        self, conn: sqlite3.Connection, fixture_id: int, home_goals: int, away_goals: int
    ) -> None:
        conn.execute(
            "UPDATE fixtures SET home_goals = ?, away_goals = ? WHERE id = ?",
            (home_goals, away_goals, fixture_id),
        )

    def delete_all(self, conn: sqlite3.Connection) -> None:
        conn.execute("DELETE FROM fixtures")

    def list_all(self, conn: sqlite3.Connection) -> list[Fixture]:
        rows = conn.execute(
            f"SELECT {_FIXTURE_COLS} FROM fixtures ORDER BY week, id"
        ).fetchall()
        return [_row_to_fixture(r) for r in rows]

    def list_played(self, conn: sqlite3.Connection, week: int | None = None) -> list[Fixture]:
        """Fixtures with a result, ordered by week; restricted to one week if given."""
        sql = (
            f"SELECT {_FIXTURE_COLS} FROM fixtures "
            "WHERE home_goals IS NOT NULL AND away_goals IS NOT NULL"
        )
        args: tuple = ()
        if week is not None:
            sql += " AND week = ?"
            args = (week,)
        rows = conn.execute(sql + " ORDER BY week, id", args).fetchall()
        return [_row_to_fixture(r) for r in rows]
