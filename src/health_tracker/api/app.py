"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from health_tracker.api.analytics import router as analytics_router
from health_tracker.api.goals import router as goals_router
from health_tracker.api.injections import router as injections_router
from health_tracker.api.nirvana import router as nirvana_router
from health_tracker.api.templates import router as templates_router
from health_tracker.api.tracking import router as tracking_router
from health_tracker.app_logging import configure_logging
from health_tracker.containers import AppContainer
from health_tracker.errors import BackendError, EntityNotFoundError, InvalidInputError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(tracking_router)
    app.include_router(templates_router)
    app.include_router(injections_router)
    app.include_router(nirvana_router)
    app.include_router(goals_router)
    app.include_router(analytics_router)

    @app.exception_handler(EntityNotFoundError)
    async def not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc), "entity": exc.entity},
        )

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.message, "field": exc.field},
        )

    @app.exception_handler(BackendError)
    async def backend_failure(request: Request, exc: BackendError) -> JSONResponse:
        logger.error(
            "Backend failure: method=%s path=%s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
