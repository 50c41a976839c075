"""Milestone and weekly review endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from health_tracker.api.auth import require_user
from health_tracker.api.models import (  # noqa: TC001
    MilestoneBody,
    MilestoneProgressBody,
    WeeklyEntryBody,
)
from health_tracker.domain.goals import WeeklyObjective

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

router = APIRouter(tags=["goals"])

MAX_WEEKS = 52


@router.get("/milestones")
async def list_milestones(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's milestones, newest first."""
    container: AppContainer = request.app.state.container
    return {"milestones": container.goals_service.list_milestones(user_id)}


@router.post("/milestones", status_code=status.HTTP_201_CREATED)
async def create_milestone(
    body: MilestoneBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Start tracking a milestone."""
    container: AppContainer = request.app.state.container
    milestone = container.goals_service.create_milestone(
        user_id, **body.model_dump()
    )
    return {"milestone": milestone}


@router.put("/milestones/{milestone_id}/progress")
async def update_milestone_progress(
    milestone_id: UUID,
    body: MilestoneProgressBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Set a milestone's progress percentage."""
    container: AppContainer = request.app.state.container
    milestone = container.goals_service.update_milestone_progress(
        user_id, milestone_id, body.progress_percentage
    )
    return {"milestone": milestone}


@router.post("/milestones/{milestone_id}/complete")
async def complete_milestone(
    milestone_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Mark a milestone as completed today."""
    container: AppContainer = request.app.state.container
    milestone = container.goals_service.complete_milestone(user_id, milestone_id)
    return {"milestone": milestone}


@router.get("/weekly")
async def list_weekly_entries(
    request: Request,
    user_id: UUID = Depends(require_user),
    weeks: int = Query(default=8, ge=1, le=MAX_WEEKS),
) -> dict[str, object]:
    """Return weekly entries for the trailing ``weeks`` weeks."""
    container: AppContainer = request.app.state.container
    return {
        "weeks": weeks,
        "entries": container.analytics_service.weekly_objectives(user_id, weeks),
    }


@router.put("/weekly/{day}")
async def put_weekly_entry(
    day: date,
    body: WeeklyEntryBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Save objectives and review notes for the week containing ``day``."""
    container: AppContainer = request.app.state.container
    objectives = {
        item.slot: WeeklyObjective(
            description=item.description, completed=item.completed
        )
        for item in body.objectives
    }
    entry = container.goals_service.upsert_weekly_entry(
        user_id,
        day,
        objectives,
        insights=body.insights,
        next_week_focus=body.next_week_focus,
    )
    return {"entry": entry}
