"""Deterministic meal plan generator used without an LLM backend."""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from meal_planner.domain.errors import ensure_day_count
from meal_planner.domain.meal_plans import (
    MEAL_SLOTS,
    DayMeals,
    MealEntry,
    MealPlanResult,
    MultiDayMealPlan,
    SingleDayMealPlan,
    day_key,
    sum_summaries,
)
from meal_planner.domain.profiles import PatientProfile
from meal_planner.services.meal_templates import MealTemplate, select_template

ACTIVITY_MULTIPLIERS = {
    "Sedentary": 1.2,
    "Lightly Active": 1.375,
    "Moderately Active": 1.55,
    "Very Active": 1.725,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.375

GOAL_ADJUSTMENTS = {
    "Weight Loss": -300,
    "Weight Maintenance": 0,
    "Muscle Gain": 300,
    "Manage Condition": 0,
}

MEAL_SHARES = {
    "breakfast": 0.25,
    "lunch": 0.35,
    "snacks": 0.15,
    "dinner": 0.25,
}

_logger = logging.getLogger(__name__)

# Height is not part of the estimate; an average is assumed.
ASSUMED_HEIGHT_CM = 170


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class ConditionRule:
    """Adjustment applied when a condition keyword appears in the profile."""

    keyword: str
    annotation: str
    carbs_factor: float = 1.0
    fiber_factor: float = 1.0

    def matches(self, condition: str) -> bool:
        return self.keyword in condition.lower()

    def apply(self, template: MealTemplate) -> MealTemplate:
        adjusted = replace(template, items=template.items + self.annotation)
        if self.carbs_factor != 1.0:
            adjusted = replace(
                adjusted, carbs_g=round_half_up(adjusted.carbs_g * self.carbs_factor)
            )
        if self.fiber_factor != 1.0:
            adjusted = replace(
                adjusted, fiber_g=round_half_up(adjusted.fiber_g * self.fiber_factor)
            )
        return adjusted


CONDITION_RULES = (
    ConditionRule(
        keyword="diabetes",
        annotation=" (low glycemic index options)",
        carbs_factor=0.8,
        fiber_factor=1.2,
    ),
    ConditionRule(keyword="hypertension", annotation=" (low sodium preparation)"),
)


def _unchanged(template: MealTemplate) -> MealTemplate:
    return template


def _larger_portions(template: MealTemplate) -> MealTemplate:
    items = template.items.replace("1 cup", "1.5 cups").replace("2 ", "1 ")
    return replace(template, items=items)


def _herbs_and_spices(template: MealTemplate) -> MealTemplate:
    return replace(template, items=template.items + " with herbs and spices")


DAY_VARIATIONS: tuple[Callable[[MealTemplate], MealTemplate], ...] = (
    _unchanged,
    _larger_portions,
    _herbs_and_spices,
)


def calculate_base_calories(age: float, weight_kg: float, activity_level: str) -> int:
    """Estimate daily calories from weight, age and activity."""
    bmr = 10 * weight_kg + 6.25 * ASSUMED_HEIGHT_CM - 5 * age + 5
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)
    return round_half_up(bmr * multiplier)


def adjust_calories_for_goal(base_calories: int, health_goal: str) -> int:
    """Apply the per-goal calorie delta."""
    return base_calories + GOAL_ADJUSTMENTS.get(health_goal, 0)


def target_calories(profile: PatientProfile) -> int:
    """Return the goal-adjusted daily calorie target for a profile."""
    base = calculate_base_calories(
        profile.age, profile.weight_kg, profile.activity_level
    )
    return adjust_calories_for_goal(base, profile.health_goal)


def meal_calorie_targets(daily_target: int) -> dict[str, int]:
    """Split a daily target across meal slots."""
    return {
        slot: round_half_up(daily_target * share)
        for slot, share in MEAL_SHARES.items()
    }


def scale_to_calories(template: MealTemplate, calories: int) -> MealEntry:
    """Scale template macros so they imply ``calories``."""
    implied = template.carbs_g * 4 + template.protein_g * 4 + template.fat_g * 9
    factor = calories / implied
    return MealEntry(
        items=template.items,
        carbs_g=round_half_up(template.carbs_g * factor),
        protein_g=round_half_up(template.protein_g * factor),
        fat_g=round_half_up(template.fat_g * factor),
        fiber_g=round_half_up(template.fiber_g * factor),
        calories_kcal=calories,
    )


@dataclass
class FallbackMealPlanGenerator:
    """Builds meal plans from regional templates without external calls."""

    condition_rules: tuple[ConditionRule, ...] = field(default=CONDITION_RULES)
    variations: tuple[Callable[[MealTemplate], MealTemplate], ...] = field(
        default=DAY_VARIATIONS
    )

    def generate(self, profile: PatientProfile, day_count: int) -> MealPlanResult:
        """Generate a plan for ``day_count`` days."""
        ensure_day_count(day_count)
        daily_target = target_calories(profile)
        _logger.info(
            "Generating fallback meal plan: days=%s target_kcal=%s",
            day_count,
            daily_target,
        )
        if day_count == 1:
            meals = self.generate_day(profile, daily_target, day=1)
            return SingleDayMealPlan(
                meals=meals, summary=meals.totals(), source="fallback"
            )

        daily_meals = {
            day_key(day): self.generate_day(profile, daily_target, day=day)
            for day in range(1, day_count + 1)
        }
        daily_summaries = {key: meals.totals() for key, meals in daily_meals.items()}
        return MultiDayMealPlan(
            day_count=day_count,
            daily_meals=daily_meals,
            daily_summaries=daily_summaries,
            summary=sum_summaries(list(daily_summaries.values())),
            source="fallback",
        )

    def generate_day(
        self, profile: PatientProfile, daily_target: int, day: int
    ) -> DayMeals:
        """Generate the four meals of one (1-based) day."""
        targets = meal_calorie_targets(daily_target)
        return DayMeals(
            **{
                slot: self.generate_meal(profile, slot, targets[slot], day)
                for slot in MEAL_SLOTS
            }
        )

    def generate_meal(
        self, profile: PatientProfile, meal_slot: str, calories: int, day: int
    ) -> MealEntry:
        """Select, vary, adjust and scale a single meal."""
        template = select_template(
            profile.location, meal_slot, profile.meal_preference
        )
        variation = self.variations[(day - 1) % len(self.variations)]
        template = variation(template)
        condition = profile.disease_condition or ""
        for rule in self.condition_rules:
            if rule.matches(condition):
                template = rule.apply(template)
        return scale_to_calories(template, calories)

