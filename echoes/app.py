"""
FastAPI web application for echoes.

Provides REST API endpoints for the activity heatmap grid.
"""

from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from echoes import config
from echoes.config import validate_config
from echoes.history_client import AbacusClient, AbacusClientError
from echoes.logging_config import configure_logging, get_logger
from echoes.models import HeatmapError, grid_to_dict
from echoes.pipeline import build_calendar_grid
from echoes.range_builder import one_year_window, parse_date, validate_range

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="echoes",
    description="Shell history activity heatmap",
    version="0.1.0",
)


class Observation(BaseModel):
    """A single day's command count."""

    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    count: int = Field(..., description="Commands run that day")


class HeatmapRequest(BaseModel):
    """Request model for building a heatmap from supplied observations."""

    history: list[Observation] = Field(default_factory=list)
    start: str = Field(..., description="First date of the window (YYYY-MM-DD)")
    end: str = Field(..., description="Last date of the window (YYYY-MM-DD)")
    total: int | None = Field(None, description="Optional total, passed through")


def _build_client() -> AbacusClient:
    try:
        validate_config()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")

    return AbacusClient(
        config.ABACUS_API_URL, config.ABACUS_TIMEZONE, timeout=config.get_timeout()
    )


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/heatmap")
def get_heatmap(start: str | None = None, end: str | None = None):
    """
    Fetch history from the counting service and build the heatmap grid.

    Args:
        start: Optional window start (defaults to one year before end)
        end: Optional window end (defaults to today)

    Returns:
        JSON grid with months, weeks, days, thresholds and total
    """
    try:
        end_date = parse_date(end) if end else date.today()
        start_date = parse_date(start) if start else one_year_window(end_date)[0]
        validate_range(start_date, end_date)
    except HeatmapError as e:
        raise HTTPException(status_code=400, detail=str(e))

    client = _build_client()

    try:
        history = client.get_history(start_date)
    except AbacusClientError as e:
        raise HTTPException(status_code=502, detail=str(e))

    # The grid is still useful without the headline total
    try:
        total = client.get_total(start_date)
    except AbacusClientError as e:
        logger.error("Failed to fetch total: %s", e)
        total = None

    # The window is already valid, so remaining errors come from fetched data
    try:
        grid = build_calendar_grid(history, start_date, end_date, total=total)
    except HeatmapError as e:
        raise HTTPException(
            status_code=502, detail=f"History service returned invalid data: {e}"
        )

    return grid_to_dict(grid)


@app.post("/api/heatmap")
def post_heatmap(request: HeatmapRequest):
    """
    Build the heatmap grid from caller-supplied observations.

    Args:
        request: HeatmapRequest with history, window and optional total

    Returns:
        JSON grid with months, weeks, days, thresholds and total
    """
    history = [observation.model_dump() for observation in request.history]

    try:
        grid = build_calendar_grid(
            history, request.start, request.end, total=request.total
        )
    except HeatmapError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return grid_to_dict(grid)
