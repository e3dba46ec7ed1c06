"""Supabase repository for generated meal plans."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from meal_planner.domain.meal_plans import (
    MealPlanRecord,
    MealPlanResult,
    parse_meal_plan_document,
)
from meal_planner.services.meal_plans import MealPlanRepository

_COLUMNS = (
    "id, patient_id, generated_at, day_count, meals, daily_meals, "
    "daily_summaries, summary"
)


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase implementation for meal plans."""

    client: Client

    def create_meal_plan(
        self, patient_id: UUID, plan: MealPlanResult, generated_at: datetime
    ) -> MealPlanRecord:
        """Insert a meal plan row and return the stored record."""
        document = plan.to_document()
        response = (
            self.client.table("meal_plans")
            .insert(
                {
                    "patient_id": str(patient_id),
                    "generated_at": generated_at.isoformat(),
                    "day_count": document["dayCount"],
                    "meals": document.get("meals"),
                    "daily_meals": document.get("dailyMeals"),
                    "daily_summaries": document.get("dailySummaries"),
                    "summary": document["summary"],
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal plan")
        return MealPlanRecord(
            id=UUID(response.data[0]["id"]),
            patient_id=patient_id,
            generated_at=generated_at,
            plan=plan,
        )

    def get_latest(self, patient_id: UUID) -> MealPlanRecord | None:
        """Return the newest meal plan for a patient."""
        response = (
            self.client.table("meal_plans")
            .select(_COLUMNS)
            .eq("patient_id", str(patient_id))
            .order("generated_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_meal_plans(
        self, patient_id: UUID, limit: int, offset: int
    ) -> list[MealPlanRecord]:
        """Return a page of meal plans, newest first."""
        response = (
            self.client.table("meal_plans")
            .select(_COLUMNS)
            .eq("patient_id", str(patient_id))
            .order("generated_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def count_meal_plans(self, patient_id: UUID) -> int:
        """Return the number of stored plans for a patient."""
        response = (
            self.client.table("meal_plans")
            .select("id", count="exact")
            .eq("patient_id", str(patient_id))
            .execute()
        )
        return response.count or 0


def _parse_row(row: dict[str, object]) -> MealPlanRecord:
    document = {
        "dayCount": row.get("day_count") or 1,
        "meals": row.get("meals"),
        "dailyMeals": row.get("daily_meals"),
        "dailySummaries": row.get("daily_summaries"),
        "summary": row.get("summary"),
    }
    return MealPlanRecord(
        id=UUID(row["id"]),
        patient_id=UUID(row["patient_id"]),
        generated_at=datetime.fromisoformat(row["generated_at"]),
        plan=parse_meal_plan_document(document),
    )
