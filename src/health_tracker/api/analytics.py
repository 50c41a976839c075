"""Analytics endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from health_tracker.api.auth import require_user

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

router = APIRouter(prefix="/analytics", tags=["analytics"])

MAX_DAYS = 365

SERIES = {
    "weight": "weight_trend",
    "calories": "calorie_balance",
    "macros": "macro_trend",
    "workouts": "workout_summary",
    "injections": "injection_adherence",
    "nirvana": "nirvana_sessions",
    "mits": "mit_completion",
}


@router.get("/overview")
async def overview(
    request: Request,
    user_id: UUID = Depends(require_user),
    days: int | None = Query(default=None, ge=1, le=MAX_DAYS),
) -> dict[str, object]:
    """Return the dashboard summary."""
    container: AppContainer = request.app.state.container
    window = days or container.settings.default_analytics_days
    return {"overview": container.analytics_service.overview(user_id, window)}


@router.get("/{series}")
async def series_points(
    series: str,
    request: Request,
    user_id: UUID = Depends(require_user),
    days: int | None = Query(default=None, ge=1, le=MAX_DAYS),
) -> dict[str, object]:
    """Return one trend series, oldest point first."""
    container: AppContainer = request.app.state.container
    method_name = SERIES.get(series)
    if method_name is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    window = days or container.settings.default_analytics_days
    points = getattr(container.analytics_service, method_name)(user_id, window)
    return {"series": series, "days": window, "points": points}
