"""Meal plan models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

MEAL_SLOTS = ("breakfast", "lunch", "snacks", "dinner")
MEAL_NUMERIC_FIELDS = ("carbs_g", "protein_g", "fat_g", "fiber_g", "calories_kcal")
MEAL_FIELDS = ("items", *MEAL_NUMERIC_FIELDS)
SUMMARY_FIELDS = (
    "total_calories_kcal",
    "total_protein_g",
    "total_carbs_g",
    "total_fat_g",
)
# Summary field -> meal field it totals.
SUMMARY_SOURCES = {
    "total_calories_kcal": "calories_kcal",
    "total_protein_g": "protein_g",
    "total_carbs_g": "carbs_g",
    "total_fat_g": "fat_g",
}

PlanSource = Literal["backend", "fallback"]
NonNegative = Annotated[int | float, Field(ge=0)]


def day_key(day: int) -> str:
    """Return the key used for a 1-based day in multi-day plans."""
    return f"day{day}"


def day_keys(day_count: int) -> list[str]:
    """Return day1..dayN."""
    return [day_key(day) for day in range(1, day_count + 1)]


class MealEntry(BaseModel):
    """Single meal with macros."""

    model_config = ConfigDict(frozen=True)

    items: str
    carbs_g: NonNegative
    protein_g: NonNegative
    fat_g: NonNegative
    fiber_g: NonNegative
    calories_kcal: NonNegative


class NutritionSummary(BaseModel):
    """Totals for one day or a whole plan."""

    model_config = ConfigDict(frozen=True)

    total_calories_kcal: NonNegative
    total_protein_g: NonNegative
    total_carbs_g: NonNegative
    total_fat_g: NonNegative


class DayMeals(BaseModel):
    """The four meals of a day."""

    model_config = ConfigDict(frozen=True)

    breakfast: MealEntry
    lunch: MealEntry
    snacks: MealEntry
    dinner: MealEntry

    def entries(self) -> list[MealEntry]:
        """Return meals in slot order."""
        return [getattr(self, slot) for slot in MEAL_SLOTS]

    def totals(self) -> NutritionSummary:
        """Sum the day's meals into a summary."""
        meals = self.entries()
        return NutritionSummary(
            **{
                summary_field: sum(getattr(meal, meal_field) for meal in meals)
                for summary_field, meal_field in SUMMARY_SOURCES.items()
            }
        )


def sum_summaries(summaries: list[NutritionSummary]) -> NutritionSummary:
    """Add summaries field by field."""
    return NutritionSummary(
        **{
            field: sum(getattr(summary, field) for summary in summaries)
            for field in SUMMARY_FIELDS
        }
    )


class SingleDayMealPlan(BaseModel):
    """Meal plan covering one day."""

    model_config = ConfigDict(frozen=True)

    day_count: Literal[1] = 1
    meals: DayMeals
    summary: NutritionSummary
    source: PlanSource | None = None

    def to_document(self) -> dict[str, object]:
        """Render the stored document shape."""
        return {
            "dayCount": self.day_count,
            "meals": self.meals.model_dump(),
            "summary": self.summary.model_dump(),
        }


class MultiDayMealPlan(BaseModel):
    """Meal plan keyed by day1..dayN."""

    model_config = ConfigDict(frozen=True)

    day_count: int = Field(ge=2, le=7)
    daily_meals: dict[str, DayMeals]
    daily_summaries: dict[str, NutritionSummary]
    summary: NutritionSummary
    source: PlanSource | None = None

    def to_document(self) -> dict[str, object]:
        """Render the stored document shape."""
        return {
            "dayCount": self.day_count,
            "dailyMeals": {
                key: meals.model_dump() for key, meals in self.daily_meals.items()
            },
            "dailySummaries": {
                key: summary.model_dump()
                for key, summary in self.daily_summaries.items()
            },
            "summary": self.summary.model_dump(),
        }


MealPlanResult = SingleDayMealPlan | MultiDayMealPlan


def parse_meal_plan_document(
    document: dict[str, object], source: PlanSource | None = None
) -> MealPlanResult:
    """Rebuild a plan from its stored document shape."""
    day_count = document.get("dayCount") or 1
    if day_count == 1:
        return SingleDayMealPlan(
            meals=DayMeals.model_validate(document["meals"]),
            summary=NutritionSummary.model_validate(document["summary"]),
            source=source,
        )
    return MultiDayMealPlan(
        day_count=day_count,
        daily_meals={
            key: DayMeals.model_validate(value)
            for key, value in document["dailyMeals"].items()
        },
        daily_summaries={
            key: NutritionSummary.model_validate(value)
            for key, value in document["dailySummaries"].items()
        },
        summary=NutritionSummary.model_validate(document["summary"]),
        source=source,
    )


@dataclass(frozen=True)
class MealPlanRecord:
    """Persisted meal plan with identity."""

    id: UUID
    patient_id: UUID
    generated_at: datetime
    plan: MealPlanResult

    def days_ago(self, now: datetime) -> int:
        """Return whole days elapsed since generation."""
        return max((now - self.generated_at).days, 0)


@dataclass(frozen=True)
class MealPlanPage:
    """One page of a patient's meal plan history."""

    plans: list[MealPlanRecord]
    current_page: int
    total_pages: int
    total_count: int

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.current_page > 1
