"""
REST API for the league simulator.
Thin wrappers around SeasonService; one season per process.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from pydantic import BaseModel, Field

from league_sim.config import Settings
from league_sim.models import CompetitorSpec, ResultsScope
from league_sim.persistence import StoreUnavailableError, reset_db
from league_sim.services import InvalidConfigurationError, SeasonService
from league_sim.simulation import SeededRNG

logger = logging.getLogger(__name__)


# ---------- Startup: reset store, seed default league ----------
def _bootstrap(app: FastAPI, settings: Settings) -> None:
    reset_db(settings.db_path)
    season = SeasonService(
        db_path=settings.db_path,
        rng=SeededRNG(settings.seed),
        policy=settings.schedule_policy,
    )
    season.create_season(settings.competitors)
    app.state.settings = settings
    app.state.season = season


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _bootstrap(app, settings)
    logger.info("League simulator ready (db=%s)", settings.db_path)
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title="League Simulator API",
    description="Double round-robin league: weekly simulation, standings and predictions",
    version="0.1.0",
    lifespan=lifespan,
)


# ---------- Request models ----------


class CompetitorIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    strength: int = Field(..., ge=0)


class CreateSeasonRequest(BaseModel):
    competitors: list[CompetitorIn] | None = Field(
        None, description="Even number of competitors; omit to use the default four-team league."
    )


def get_season(request: Request) -> SeasonService:
    return request.app.state.season


def _season_state(season: SeasonService) -> dict[str, Any]:
    return {
        "current_week": season.current_week,
        "week_count": season.week_count,
        "status": season.status.value,
    }


def _store_unavailable(e: StoreUnavailableError) -> HTTPException:
    logger.warning("Store unavailable: %s", e)
    return HTTPException(status_code=503, detail="Service unavailable")


def _prediction_list(predictions: dict[str, int]) -> list[dict[str, Any]]:
    rows = [{"name": name, "percentage": pct} for name, pct in predictions.items()]
    return sorted(rows, key=lambda r: -r["percentage"])


# ---------- Endpoints ----------


@app.get("/")
def league_summary(season: SeasonService = Depends(get_season)) -> dict[str, Any]:
    """League table, results (current week, or all after play-all) and predictions."""
    try:
        summary = season.summary()
    except StoreUnavailableError as e:
        raise _store_unavailable(e)
    return {
        "current_week": summary.current_week,
        "week_count": summary.week_count,
        "status": summary.status.value,
        "scope": summary.scope.value,
        "standings": [c.to_dict() for c in summary.standings],
        "results": [r.to_dict() for r in summary.results],
        "predictions": _prediction_list(summary.predictions),
    }


@app.post("/season")
def create_season(
    request: Request,
    req: CreateSeasonRequest | None = None,
    season: SeasonService = Depends(get_season),
) -> dict[str, Any]:
    """Start a new season: replaces competitors and schedule, week back to 0."""
    if req is not None and req.competitors is not None:
        specs = [CompetitorSpec(c.name, c.strength) for c in req.competitors]
    else:
        specs = list(request.app.state.settings.competitors)
    try:
        schedule = season.create_season(specs)
    except InvalidConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailableError as e:
        raise _store_unavailable(e)
    return {
        **_season_state(season),
        "competitors": [c.to_dict() for c in season.get_standings()],
        "schedule": [[f.to_dict() for f in week] for week in schedule],
    }


@app.post("/next-week")
def next_week(season: SeasonService = Depends(get_season)) -> dict[str, Any]:
    """Simulate the next week. No-op when the season is complete."""
    before = season.current_week
    try:
        season.advance_one_week()
    except StoreUnavailableError as e:
        raise _store_unavailable(e)
    return {"advanced": season.current_week > before, **_season_state(season)}


@app.post("/play-all")
def play_all(season: SeasonService = Depends(get_season)) -> dict[str, Any]:
    """Simulate every remaining week; the summary then shows all results."""
    try:
        weeks_played = season.advance_all_remaining()
    except StoreUnavailableError as e:
        raise _store_unavailable(e)
    return {"weeks_played": weeks_played, **_season_state(season)}


@app.get("/standings")
def standings(season: SeasonService = Depends(get_season)) -> dict[str, Any]:
    return {"standings": [c.to_dict() for c in season.get_standings()]}


@app.get("/results")
def results(
    scope: ResultsScope = Query(ResultsScope.CURRENT_WEEK),
    season: SeasonService = Depends(get_season),
) -> dict[str, Any]:
    try:
        rows = season.get_results(scope)
    except StoreUnavailableError as e:
        raise _store_unavailable(e)
    return {"scope": scope.value, "current_week": season.current_week, "results": [r.to_dict() for r in rows]}


@app.get("/predictions")
def predictions(season: SeasonService = Depends(get_season)) -> dict[str, Any]:
    """Naive points-share percentages; empty before week 4."""
    return {"current_week": season.current_week, "predictions": _prediction_list(season.get_predictions())}
