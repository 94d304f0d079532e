"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from hydration_tracker.api.models import (
    AddWaterRequest,
    DailyGoalRequest,
    DailySummaryResponse,
    IntakeEntryResponse,
    PresetsResponse,
    ResetResponse,
)
from hydration_tracker.api.presenters import present_entry, present_summary
from hydration_tracker.app_logging import configure_logging
from hydration_tracker.config import parse_quick_add_amounts
from hydration_tracker.containers import AppContainer
from hydration_tracker.domain.errors import (
    ClockUnavailableError,
    HydrationError,
    InvalidAmountError,
    InvalidGoalError,
    StorageError,
)

HTTP_422_UNPROCESSABLE = 422

_ERROR_STATUS: dict[type[HydrationError], int] = {
    InvalidAmountError: HTTP_422_UNPROCESSABLE,
    InvalidGoalError: HTTP_422_UNPROCESSABLE,
    ClockUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    quick_add_amounts = parse_quick_add_amounts(container.settings.quick_add_amounts)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        logger.info(
            "Hydration tracker started",
            extra={
                "environment": state_container.settings.environment,
                "storage_backend": state_container.settings.storage_backend,
            },
        )
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(HydrationError)
    async def hydration_error_handler(
        request: Request, exc: HydrationError
    ) -> JSONResponse:
        status_code = _ERROR_STATUS.get(
            type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Intake request failed",
                extra={"path": request.url.path, "error": exc.code},
                exc_info=exc,
            )
        return JSONResponse(
            status_code=status_code,
            content={"detail": str(exc), "error": exc.code},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/intake/today")
    async def today(request: Request) -> DailySummaryResponse:
        """Return today's entries, total and completion percentage."""
        state_container: AppContainer = request.app.state.container
        summary = state_container.intake_service.summary()
        return present_summary(summary, state_container.clock.now().tzinfo)

    @app.post("/intake", status_code=status.HTTP_201_CREATED)
    async def add_water(
        body: AddWaterRequest, request: Request
    ) -> IntakeEntryResponse:
        """Record a water intake at the current time."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.intake_service.add_water(body.amount)
        return present_entry(entry, state_container.clock.now().tzinfo)

    @app.post("/intake/reset")
    async def reset_today(request: Request) -> ResetResponse:
        """Remove every entry recorded today."""
        state_container: AppContainer = request.app.state.container
        removed = state_container.intake_service.reset_today_entries()
        return ResetResponse(removed=removed)

    @app.put("/intake/goal")
    async def set_goal(
        body: DailyGoalRequest, request: Request
    ) -> DailySummaryResponse:
        """Change the daily goal and return the refreshed summary."""
        state_container: AppContainer = request.app.state.container
        state_container.intake_service.set_daily_goal(body.daily_goal)
        summary = state_container.intake_service.summary()
        return present_summary(summary, state_container.clock.now().tzinfo)

    @app.get("/intake/presets")
    async def presets() -> PresetsResponse:
        """Return the configured quick-add amounts."""
        return PresetsResponse(amounts=quick_add_amounts)

    return app
