"""
Persistence layer for league data.
No business logic or simulation here: read/write interfaces only.
"""
from .db import (
    StoreUnavailableError,
    get_connection,
    init_db,
    reset_db,
    store_errors,
)
from .repositories import (
    CompetitorRepository,
    FixtureRepository,
)

__all__ = [
    "StoreUnavailableError",
    "get_connection",
    "init_db",
    "reset_db",
    "store_errors",
    "CompetitorRepository",
    "FixtureRepository",
]
