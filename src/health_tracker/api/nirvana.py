"""Nirvana session endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from health_tracker.api.auth import require_user
from health_tracker.api.models import NirvanaSessionBody  # noqa: TC001

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

router = APIRouter(prefix="/nirvana", tags=["nirvana"])


@router.get("/sessions")
async def list_sessions(
    request: Request,
    user_id: UUID = Depends(require_user),
    since: date | None = Query(default=None),
) -> dict[str, object]:
    """Return the caller's sessions, optionally from ``since`` onward."""
    container: AppContainer = request.app.state.container
    return {"sessions": container.nirvana_service.list_sessions(user_id, since)}


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def log_session(
    body: NirvanaSessionBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Record a session."""
    container: AppContainer = request.app.state.container
    session = container.nirvana_service.log_session(user_id, **body.model_dump())
    return {"session": session}
