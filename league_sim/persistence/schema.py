"""
SQLite schema for league entities.
Each table created with IF NOT EXISTS; reset_db drops and recreates them.
"""
from __future__ import annotations

TABLES = ("fixtures", "competitors")  # drop order: fixtures reference competitors


def competitors_schema() -> str:
    """One row per competitor. Standings columns are the ledger, overwritten on save."""
    return """
    CREATE TABLE IF NOT EXISTS competitors (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        strength INTEGER NOT NULL CHECK (strength >= 0),
        played INTEGER NOT NULL DEFAULT 0,
        won INTEGER NOT NULL DEFAULT 0,
        drawn INTEGER NOT NULL DEFAULT 0,
        lost INTEGER NOT NULL DEFAULT 0,
        goals_for INTEGER NOT NULL DEFAULT 0,
        goals_against INTEGER NOT NULL DEFAULT 0,
        goal_difference INTEGER NOT NULL DEFAULT 0,
        points INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL
    );
    """


def fixtures_schema() -> str:
    """Scheduled pairing per week. home_goals/away_goals NULL until simulated."""
    return """
    CREATE TABLE IF NOT EXISTS fixtures (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        week INTEGER NOT NULL,
        home_competitor_id TEXT NOT NULL,
        away_competitor_id TEXT NOT NULL,
        home_goals INTEGER,
        away_goals INTEGER,
        created_at TEXT NOT NULL,
        FOREIGN KEY (home_competitor_id) REFERENCES competitors(id),
        FOREIGN KEY (away_competitor_id) REFERENCES competitors(id)
    );
    CREATE INDEX IF NOT EXISTS ix_fixtures_week ON fixtures(week);
    CREATE INDEX IF NOT EXISTS ix_fixtures_natural_key
        ON fixtures(home_competitor_id, away_competitor_id, week);
    """


def all_schema_sql() -> str:
    """Combine all schema DDL for a single execution. Order: competitors, fixtures."""
    return "\n".join([
        competitors_schema(),
        fixtures_schema(),
    ])
