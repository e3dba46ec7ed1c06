"""Tests for the meal plan HTTP API."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from fastapi.testclient import TestClient

from meal_planner.api.app import create_app
from meal_planner.api.meal_plans import format_meal_plan
from meal_planner.domain.meal_plans import MealPlanRecord
from meal_planner.services.fallback import FallbackMealPlanGenerator
from tests.conftest import make_profile

HEADERS = {"X-Api-Token": "api-token"}


def test_health_needs_no_token(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_generate_single_day(container, profile_repository) -> None:
    client = TestClient(create_app(container))
    patient_id = profile_repository.add(make_profile())

    response = client.post(
        f"/mealplans/{patient_id}/generate", json={"dayCount": 1}, headers=HEADERS
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "1-day meal plan generated successfully"
    meal_plan = body["data"]["mealPlan"]
    assert meal_plan["dayCount"] == 1
    assert set(meal_plan["meals"]) == {"breakfast", "lunch", "snacks", "dinner"}
    assert meal_plan["source"] == "fallback"
    assert "generatedAt" in meal_plan


def test_generate_defaults_to_one_day(container, profile_repository) -> None:
    client = TestClient(create_app(container))
    patient_id = profile_repository.add(make_profile())

    response = client.post(f"/mealplans/{patient_id}/generate", headers=HEADERS)

    assert response.status_code == 201
    assert response.json()["data"]["mealPlan"]["dayCount"] == 1


def test_generate_multi_day(container, profile_repository) -> None:
    client = TestClient(create_app(container))
    patient_id = profile_repository.add(make_profile())

    response = client.post(
        f"/mealplans/{patient_id}/generate", json={"dayCount": 5}, headers=HEADERS
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "5-day meal plan generated successfully"
    meal_plan = body["data"]["mealPlan"]
    assert meal_plan["dayCount"] == 5
    assert list(meal_plan["dailyMeals"]) == [f"day{day}" for day in range(1, 6)]
    assert "meals" not in meal_plan


def test_generate_rejects_invalid_day_count(
    container, profile_repository, meal_plan_repository
) -> None:
    client = TestClient(create_app(container))
    patient_id = profile_repository.add(make_profile())

    for day_count in (0, 8, "3", True):
        response = client.post(
            f"/mealplans/{patient_id}/generate",
            json={"dayCount": day_count},
            headers=HEADERS,
        )
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Day count must be an integer between 1 and 7",
            "code": "INVALID_DAY_COUNT",
        }
    assert meal_plan_repository.records == []


def test_generate_unknown_patient(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/mealplans/{uuid4()}/generate", json={"dayCount": 2}, headers=HEADERS
    )

    assert response.status_code == 404
    assert response.json()["code"] == "PROFILE_NOT_FOUND"


def test_endpoints_require_token(container, profile_repository) -> None:
    client = TestClient(create_app(container))
    patient_id = profile_repository.add(make_profile())

    missing = client.post(f"/mealplans/{patient_id}/generate")
    wrong = client.get(f"/mealplans/{patient_id}", headers={"X-Api-Token": "nope"})

    assert missing.status_code == 401
    assert wrong.status_code == 401


def test_latest_meal_plan(container, profile_repository) -> None:
    client = TestClient(create_app(container))
    patient_id = profile_repository.add(make_profile())
    client.post(
        f"/mealplans/{patient_id}/generate", json={"dayCount": 2}, headers=HEADERS
    )

    response = client.get(f"/mealplans/{patient_id}", headers=HEADERS)

    assert response.status_code == 200
    meal_plan = response.json()["data"]["mealPlan"]
    assert meal_plan["dayCount"] == 2
    assert meal_plan["daysAgo"] == 0


def test_latest_meal_plan_missing(container, profile_repository) -> None:
    client = TestClient(create_app(container))
    patient_id = profile_repository.add(make_profile())

    response = client.get(f"/mealplans/{patient_id}", headers=HEADERS)

    assert response.status_code == 404
    assert response.json()["code"] == "MEAL_PLAN_NOT_FOUND"


def test_history_pagination(container, profile_repository) -> None:
    client = TestClient(create_app(container))
    patient_id = profile_repository.add(make_profile())
    for day_count in (1, 2, 3):
        client.post(
            f"/mealplans/{patient_id}/generate",
            json={"dayCount": day_count},
            headers=HEADERS,
        )

    response = client.get(
        f"/mealplans/{patient_id}/history",
        params={"page": 1, "limit": 2},
        headers=HEADERS,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["mealPlans"]) == 2
    assert data["pagination"] == {
        "currentPage": 1,
        "totalPages": 2,
        "totalCount": 3,
        "hasNextPage": True,
        "hasPrevPage": False,
    }


def test_history_rejects_out_of_range_paging(container, profile_repository) -> None:
    client = TestClient(create_app(container))
    patient_id = profile_repository.add(make_profile())

    response = client.get(
        f"/mealplans/{patient_id}/history", params={"page": 0}, headers=HEADERS
    )

    assert response.status_code == 422


def test_format_meal_plan_adds_days_ago() -> None:
    generated_at = datetime(2024, 5, 1, tzinfo=UTC)
    record = MealPlanRecord(
        id=uuid4(),
        patient_id=uuid4(),
        generated_at=generated_at,
        plan=FallbackMealPlanGenerator().generate(make_profile(), 1),
    )

    payload = format_meal_plan(record, now=generated_at + timedelta(days=3))

    assert payload["id"] == str(record.id)
    assert payload["generatedAt"] == "2024-05-01T00:00:00+00:00"
    assert payload["daysAgo"] == 3
    assert payload["summary"] == record.plan.summary.model_dump()
