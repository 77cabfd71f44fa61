"""
Runtime settings read from environment variables.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from league_sim.models import CompetitorSpec
from league_sim.persistence.db import get_db_path

# The four-team league the simulator boots with.
DEFAULT_COMPETITORS: tuple[CompetitorSpec, ...] = (
    CompetitorSpec("Chelsea", 5),
    CompetitorSpec("Arsenal", 4),
    CompetitorSpec("Manchester City", 3),
    CompetitorSpec("Liverpool", 2),
)


def _int_or_none(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    return int(raw)


@dataclass
class Settings:
    db_path: Path
    seed: int | None = None
    schedule_policy: str = "shuffled"
    log_level: str = "INFO"
    competitors: tuple[CompetitorSpec, ...] = field(default=DEFAULT_COMPETITORS)

    @classmethod
    def from_env(cls) -> "Settings":
        db_path = os.environ.get("LEAGUE_SIM_DB_PATH", "").strip()
        return cls(
            db_path=Path(db_path) if db_path else get_db_path(),
            seed=_int_or_none(os.environ.get("LEAGUE_SIM_SEED")),
            schedule_policy=os.environ.get("LEAGUE_SIM_SCHEDULE_POLICY", "shuffled").strip().lower(),
            log_level=os.environ.get("LEAGUE_SIM_LOG_LEVEL", "INFO").strip().upper(),
        )
