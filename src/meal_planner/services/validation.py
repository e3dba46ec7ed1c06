"""Structural and numeric validation of generated meal plans."""

import logging
import math
from collections.abc import Mapping

from meal_planner.domain.errors import MealPlanValidationError, ensure_day_count
from meal_planner.domain.meal_plans import (
    MEAL_FIELDS,
    MEAL_NUMERIC_FIELDS,
    MEAL_SLOTS,
    SUMMARY_FIELDS,
    SUMMARY_SOURCES,
    DayMeals,
    MealEntry,
    MealPlanResult,
    MultiDayMealPlan,
    NutritionSummary,
    SingleDayMealPlan,
    day_keys,
)

SUMMARY_TOLERANCE = 10.0

_logger = logging.getLogger(__name__)


def validate_meal_plan(
    parsed: Mapping[str, object],
    day_count: int,
    tolerance: float = SUMMARY_TOLERANCE,
) -> MealPlanResult:
    """Check a parsed response against the plan schema.

    Structural problems raise MealPlanValidationError on the first violation.
    Summary totals that drift from the meal sums by more than ``tolerance``
    are only logged; values are returned as given.
    """
    ensure_day_count(day_count)
    if day_count == 1:
        return _validate_single_day(parsed, tolerance)
    return _validate_multi_day(parsed, day_count, tolerance)


def summary_mismatches(
    calculated: Mapping[str, float],
    stated: Mapping[str, object],
    tolerance: float = SUMMARY_TOLERANCE,
) -> list[tuple[str, float, float]]:
    """Return (field, calculated, stated) for totals beyond tolerance."""
    mismatches = []
    for field in SUMMARY_FIELDS:
        calculated_value = calculated[field]
        stated_value = stated[field]
        if abs(calculated_value - stated_value) > tolerance:
            mismatches.append((field, calculated_value, stated_value))
    return mismatches


def _validate_single_day(
    parsed: Mapping[str, object], tolerance: float
) -> SingleDayMealPlan:
    meals = parsed.get("meals")
    summary = parsed.get("summary")
    if not meals or not summary:
        raise MealPlanValidationError(
            "Invalid meal plan structure: missing meals or summary"
        )
    day_meals = _validate_day(meals, context=None)
    summary_data = _validate_summary(summary, context="summary")
    _check_totals(_meal_totals(meals), summary, tolerance, context="")
    return SingleDayMealPlan(
        meals=day_meals,
        summary=summary_data,
        source="backend",
    )


def _validate_multi_day(
    parsed: Mapping[str, object], day_count: int, tolerance: float
) -> MultiDayMealPlan:
    daily_meals = parsed.get("dailyMeals")
    daily_summaries = parsed.get("dailySummaries")
    summary = parsed.get("summary")
    if not daily_meals or not daily_summaries or not summary:
        raise MealPlanValidationError(
            "Invalid multi-day meal plan structure: missing dailyMeals, "
            "dailySummaries, or summary"
        )
    _require_mapping(daily_meals, "dailyMeals")
    _require_mapping(daily_summaries, "dailySummaries")

    validated_meals: dict[str, DayMeals] = {}
    validated_summaries: dict[str, NutritionSummary] = {}
    for key in day_keys(day_count):
        if not daily_meals.get(key):
            raise MealPlanValidationError(f"Missing meals for {key}")
        if not daily_summaries.get(key):
            raise MealPlanValidationError(f"Missing summary for {key}")
        day_data = daily_meals[key]
        validated_meals[key] = _validate_day(day_data, context=key)
        validated_summaries[key] = _validate_summary(
            daily_summaries[key], context=f"{key} summary"
        )
        _check_totals(
            _meal_totals(day_data), daily_summaries[key], tolerance, context=key
        )

    overall_summary = _validate_summary(summary, context="summary")
    rollup = {
        field: sum(daily_summaries[key][field] for key in day_keys(day_count))
        for field in SUMMARY_FIELDS
    }
    _check_totals(rollup, summary, tolerance, context="overall")
    return MultiDayMealPlan(
        day_count=day_count,
        daily_meals=validated_meals,
        daily_summaries=validated_summaries,
        summary=overall_summary,
        source="backend",
    )


def _validate_day(day_data: object, context: str | None) -> DayMeals:
    label = "meals" if context is None else context
    _require_mapping(day_data, label)
    meals: dict[str, MealEntry] = {}
    for slot in MEAL_SLOTS:
        meal = day_data.get(slot)
        if not meal:
            if context is None:
                raise MealPlanValidationError(f"Missing required meal: {slot}")
            raise MealPlanValidationError(
                f"Missing required meal {slot} for {context}"
            )
        name = slot if context is None else f"{context}-{slot}"
        meals[slot] = _validate_meal(meal, name)
    return DayMeals(**meals)


def _validate_meal(meal: object, name: str) -> MealEntry:
    _require_mapping(meal, name)
    for field in MEAL_FIELDS:
        if meal.get(field) is None:
            raise MealPlanValidationError(
                f"Missing required field {field} in {name}"
            )
        if field in MEAL_NUMERIC_FIELDS and not _is_non_negative(meal[field]):
            raise MealPlanValidationError(
                f"Invalid {field} value in {name}: must be a non-negative number"
            )
    items = meal["items"]
    return MealEntry(
        items=items if isinstance(items, str) else str(items),
        **{field: meal[field] for field in MEAL_NUMERIC_FIELDS},
    )


def _validate_summary(summary: object, context: str) -> NutritionSummary:
    _require_mapping(summary, context)
    for field in SUMMARY_FIELDS:
        if summary.get(field) is None:
            raise MealPlanValidationError(
                f"Missing required summary field: {field} ({context})"
            )
        if not _is_non_negative(summary[field]):
            raise MealPlanValidationError(
                f"Invalid {field} value in {context}: must be a non-negative number"
            )
    return NutritionSummary(**{field: summary[field] for field in SUMMARY_FIELDS})


def _meal_totals(day_data: Mapping[str, Mapping[str, float]]) -> dict[str, float]:
    return {
        summary_field: sum(day_data[slot][meal_field] for slot in MEAL_SLOTS)
        for summary_field, meal_field in SUMMARY_SOURCES.items()
    }


def _check_totals(
    calculated: Mapping[str, float],
    stated: Mapping[str, object],
    tolerance: float,
    context: str,
) -> None:
    for field, calculated_value, stated_value in summary_mismatches(
        calculated, stated, tolerance
    ):
        _logger.warning(
            "Summary mismatch for %s %s: calculated %s, summary %s",
            field,
            context,
            calculated_value,
            stated_value,
        )


def _is_non_negative(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value) and value >= 0


def _require_mapping(value: object, label: str) -> None:
    if not isinstance(value, Mapping):
        raise MealPlanValidationError(f"Invalid {label}: expected an object")
