"""Food template endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from health_tracker.api.auth import require_user
from health_tracker.api.models import TemplateBody, TemplateLogBody  # noqa: TC001

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("")
async def list_templates(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's templates, most used first."""
    container: AppContainer = request.app.state.container
    return {"templates": container.food_service.list_templates(user_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_template(
    body: TemplateBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Save a reusable food preset."""
    container: AppContainer = request.app.state.container
    template = container.food_service.create_template(user_id, **body.model_dump())
    return {"template": template}


@router.post("/{template_id}/log", status_code=status.HTTP_201_CREATED)
async def log_template(
    template_id: UUID,
    body: TemplateLogBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Log a template as a food entry on ``body.day``."""
    container: AppContainer = request.app.state.container
    food = container.food_service.log_template(
        user_id, body.day, template_id, body.meal_type, body.amount
    )
    return {"food": food}


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> None:
    """Delete one of the caller's templates."""
    container: AppContainer = request.app.state.container
    container.food_service.delete_template(user_id, template_id)
