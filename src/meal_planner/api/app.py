"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from meal_planner.api.meal_plans import router as meal_plans_router
from meal_planner.app_logging import configure_logging
from meal_planner.containers import AppContainer
from meal_planner.domain.errors import (
    InvalidDayCountError,
    MealPlanNotFoundError,
    ProfileNotFoundError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)
    logger.info(
        "Meal plan backend: available=%s mock_forced=%s",
        container.meal_plan_generator.config.available,
        container.meal_plan_generator.config.mock_forced,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(meal_plans_router)

    @app.exception_handler(InvalidDayCountError)
    async def invalid_day_count(
        request: Request, exc: InvalidDayCountError
    ) -> JSONResponse:
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Day count must be an integer between 1 and 7",
            "INVALID_DAY_COUNT",
        )

    @app.exception_handler(ProfileNotFoundError)
    async def profile_not_found(
        request: Request, exc: ProfileNotFoundError
    ) -> JSONResponse:
        return _error_response(
            status.HTTP_404_NOT_FOUND,
            "Patient profile not found",
            "PROFILE_NOT_FOUND",
        )

    @app.exception_handler(MealPlanNotFoundError)
    async def meal_plan_not_found(
        request: Request, exc: MealPlanNotFoundError
    ) -> JSONResponse:
        return _error_response(
            status.HTTP_404_NOT_FOUND,
            "No meal plan found. Generate a meal plan to get started.",
            "MEAL_PLAN_NOT_FOUND",
        )

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error for %s %s", request.method, request.url.path)
        message = "Internal server error"
        if container.settings.environment == "local":
            message = f"{message} (debug: {type(exc).__name__}: {exc})"
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, message, "INTERNAL_ERROR"
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_response(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "code": code},
    )
