"""Meal plan API endpoints with shared-token auth."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from pydantic import BaseModel, ConfigDict, Field

from meal_planner.services.meal_plans import DEFAULT_HISTORY_LIMIT

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer
    from meal_planner.domain.meal_plans import MealPlanRecord

router = APIRouter(prefix="/mealplans", tags=["mealplans"])


class GenerateMealPlanRequest(BaseModel):
    """Request body for plan generation."""

    model_config = ConfigDict(populate_by_name=True)

    # Validated by the service so a bad value maps to INVALID_DAY_COUNT.
    day_count: Any = Field(default=1, alias="dayCount")


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include the shared service token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post(
    "/{patient_id}/generate",
    dependencies=[Depends(require_api_token)],
    status_code=status.HTTP_201_CREATED,
)
async def generate_meal_plan(
    patient_id: UUID,
    request: Request,
    body: GenerateMealPlanRequest | None = None,
) -> dict[str, object]:
    """Generate and store a new plan for a patient."""
    container: AppContainer = request.app.state.container
    day_count = body.day_count if body is not None else 1
    record = await container.meal_plan_service.generate_for_patient(
        patient_id, day_count
    )
    return {
        "success": True,
        "message": f"{record.plan.day_count}-day meal plan generated successfully",
        "data": {"mealPlan": format_meal_plan(record)},
    }


@router.get("/{patient_id}", dependencies=[Depends(require_api_token)])
async def latest_meal_plan(patient_id: UUID, request: Request) -> dict[str, object]:
    """Return the most recent plan for a patient."""
    container: AppContainer = request.app.state.container
    record = container.meal_plan_service.get_latest(patient_id)
    now = datetime.now(tz=UTC)
    return {
        "success": True,
        "message": "Meal plan retrieved successfully",
        "data": {"mealPlan": format_meal_plan(record, now=now)},
    }


@router.get("/{patient_id}/history", dependencies=[Depends(require_api_token)])
async def meal_plan_history(
    patient_id: UUID,
    request: Request,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_HISTORY_LIMIT, ge=1, le=100),
) -> dict[str, object]:
    """Return a page of a patient's plans, newest first."""
    container: AppContainer = request.app.state.container
    history = container.meal_plan_service.get_history(patient_id, page, limit)
    now = datetime.now(tz=UTC)
    return {
        "success": True,
        "message": "Meal plan history retrieved successfully",
        "data": {
            "mealPlans": [format_meal_plan(plan, now=now) for plan in history.plans],
            "pagination": {
                "currentPage": history.current_page,
                "totalPages": history.total_pages,
                "totalCount": history.total_count,
                "hasNextPage": history.has_next_page,
                "hasPrevPage": history.has_prev_page,
            },
        },
    }


def format_meal_plan(
    record: MealPlanRecord, now: datetime | None = None
) -> dict[str, object]:
    """Render a stored plan; consumers branch on dayCount."""
    payload: dict[str, object] = {
        "id": str(record.id),
        "generatedAt": record.generated_at.isoformat(),
        **record.plan.to_document(),
    }
    if record.plan.source is not None:
        payload["source"] = record.plan.source
    if now is not None:
        payload["daysAgo"] = record.days_ago(now)
    return payload
