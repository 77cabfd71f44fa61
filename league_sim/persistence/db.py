"""
Database connection, initialization and reset.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .schema import TABLES, all_schema_sql

logger = logging.getLogger(__name__)


class StoreUnavailableError(RuntimeError):
    """The persistence store could not be read or written."""


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Translate sqlite3 and filesystem errors raised inside the block into StoreUnavailableError."""
    try:
        yield
    except (sqlite3.Error, OSError) as e:
        raise StoreUnavailableError(f"{action} failed: {e}") from e


# Default DB path (project root / data / league.db)
def get_db_path() -> Path:
    return Path(__file__).resolve().parent.parent.parent / "data" / "league.db"


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """
    Return a new SQLite connection.
    Use as context manager or ensure close() is called.
    """
    path = Path(db_path) if db_path else get_db_path()
    with store_errors(f"connect to {path}"):
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(path), check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str | Path | None = None) -> None:
    """Create or ensure all tables exist."""
    path = Path(db_path) if db_path else get_db_path()
    conn = get_connection(path)
    try:
        with store_errors("init_db"):
            conn.executescript(all_schema_sql())
            conn.commit()
    finally:
        conn.close()


def reset_db(db_path: str | Path | None = None) -> None:
    """
    Drop and recreate every table. Process start only: wipes any previous season.
    """
    path = Path(db_path) if db_path else get_db_path()
    conn = get_connection(path)
    try:
        with store_errors("reset_db"):
            for table in TABLES:
                conn.execute(f"DROP TABLE IF EXISTS {table}")
            conn.executescript(all_schema_sql())
            conn.commit()
    finally:
        conn.close()
    logger.info("Reset league store at %s", path)
