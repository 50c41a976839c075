"""Injectable compound and injection log endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from health_tracker.api.auth import require_user
from health_tracker.api.models import (  # noqa: TC001
    CompoundBody,
    CompoundUpdateBody,
    InjectionBody,
)

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

router = APIRouter(tags=["injections"])


@router.get("/compounds")
async def list_compounds(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's compound catalog."""
    container: AppContainer = request.app.state.container
    return {"compounds": container.injection_service.list_compounds(user_id)}


@router.post("/compounds", status_code=status.HTTP_201_CREATED)
async def create_compound(
    body: CompoundBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Add a compound to the caller's catalog."""
    container: AppContainer = request.app.state.container
    compound = container.injection_service.create_compound(
        user_id, **body.model_dump()
    )
    return {"compound": compound}


@router.patch("/compounds/{compound_id}")
async def update_compound(
    compound_id: UUID,
    body: CompoundUpdateBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Update catalog fields of one of the caller's compounds."""
    container: AppContainer = request.app.state.container
    compound = container.injection_service.update_compound(
        user_id, compound_id, body.model_dump(exclude_none=True)
    )
    return {"compound": compound}


@router.delete("/compounds/{compound_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_compound(
    compound_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> None:
    """Remove one of the caller's compounds."""
    container: AppContainer = request.app.state.container
    container.injection_service.delete_compound(user_id, compound_id)


@router.get("/injections")
async def list_injections(
    request: Request,
    user_id: UUID = Depends(require_user),
    since: date | None = Query(default=None),
) -> dict[str, object]:
    """Return the caller's injections, optionally from ``since`` onward."""
    container: AppContainer = request.app.state.container
    return {"injections": container.injection_service.list_injections(user_id, since)}


@router.post("/injections", status_code=status.HTTP_201_CREATED)
async def log_injection(
    body: InjectionBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Record a dose of one of the caller's compounds."""
    container: AppContainer = request.app.state.container
    injection = container.injection_service.log_injection(
        user_id, **body.model_dump()
    )
    return {"injection": injection}


@router.delete("/injections/{injection_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_injection(
    injection_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> None:
    """Delete one of the caller's injections."""
    container: AppContainer = request.app.state.container
    container.injection_service.delete_injection(user_id, injection_id)
