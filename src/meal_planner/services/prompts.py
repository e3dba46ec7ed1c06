"""Prompt construction for LLM meal plan generation."""

from meal_planner.domain.errors import ensure_day_count
from meal_planner.domain.meal_plans import (
    MEAL_NUMERIC_FIELDS,
    MEAL_SLOTS,
    SUMMARY_FIELDS,
    day_keys,
)
from meal_planner.domain.profiles import Location, PatientProfile

NOT_SPECIFIED = "Not specified"

_JSON_INSTRUCTIONS = (
    "IMPORTANT: You must respond with ONLY a valid JSON object in the exact "
    "format specified below. Do not include any explanations, markdown "
    "formatting, or additional text."
)

_SINGLE_DAY_GOALS = (
    "Addresses the specific disease condition and health goal",
    "Respects dietary preferences and restrictions",
    "Avoids all listed allergies and disliked items",
    "Matches the activity level and caloric needs",
    "Incorporates regional/local cuisines and ingredients based on the location",
    "Uses locally available and culturally appropriate foods",
    "Provides detailed food items with specific portions",
    "Includes accurate nutritional calculations",
)

_MULTI_DAY_GOALS = (
    "Addresses the specific disease condition and health goal",
    "Respects dietary preferences and restrictions",
    "Avoids all listed allergies and disliked items",
    "Matches the activity level and caloric needs",
    "Incorporates regional/local cuisines and ingredients based on the location",
    "Uses locally available and culturally appropriate foods",
    "Provides variety across days while maintaining nutritional consistency",
    "Ensures each day has balanced nutrition appropriate for the health goal",
    "Provides detailed food items with specific portions for each day",
    "Includes accurate nutritional calculations for each day and overall totals",
)

_MULTI_DAY_CHECKS = (
    "Each daily summary matches the sum of that day's individual meal nutrients",
    "The overall summary matches the sum of all daily summaries",
    "There is variety in meals across different days",
    "Nutritional consistency is maintained throughout the plan",
)


def build_prompt(profile: PatientProfile, day_count: int) -> str:
    """Build the full generation prompt for a profile and day count."""
    ensure_day_count(day_count)
    if day_count == 1:
        intro = (
            "You are an expert dietitian and nutritionist. Generate a personalized "
            "daily meal plan based on the patient's health profile."
        )
    else:
        intro = (
            "You are an expert dietitian and nutritionist. Generate a personalized "
            f"{day_count}-day meal plan based on the patient's health profile. "
            "Ensure variety across days while maintaining nutritional consistency."
        )
    system_prompt = (
        f"{intro}\n\n{_JSON_INSTRUCTIONS}\n\n"
        f"Required JSON format:\n{response_format(day_count)}"
    )
    return f"{system_prompt}\n\n{_user_prompt(profile, day_count)}"


def response_format(day_count: int) -> str:
    """Describe the exact JSON shape expected back."""
    summary = _summary_block(indent="  ")
    if day_count == 1:
        meals = ",\n".join(
            _meal_block(slot, indent="    ", inline=False) for slot in MEAL_SLOTS
        )
        return f'{{\n  "meals": {{\n{meals}\n  }},\n  "summary": {summary}\n}}'

    days = ",\n".join(
        f'    "{key}": {{\n'
        + ",\n".join(
            _meal_block(slot, indent="      ", inline=True) for slot in MEAL_SLOTS
        )
        + "\n    }"
        for key in day_keys(day_count)
    )
    daily_summaries = ",\n".join(
        f'    "{key}": {_summary_block(indent="    ")}' for key in day_keys(day_count)
    )
    return (
        f'{{\n  "dailyMeals": {{\n{days}\n  }},\n'
        f'  "dailySummaries": {{\n{daily_summaries}\n  }},\n'
        f'  "summary": {summary}\n}}'
    )


def _meal_block(slot: str, *, indent: str, inline: bool) -> str:
    fields = [f'"items": "detailed {slot} items with portions"'] + [
        f'"{name}": number' for name in MEAL_NUMERIC_FIELDS
    ]
    if inline:
        return f'{indent}"{slot}": {{ ' + ", ".join(fields) + " }"
    body = ",\n".join(f"{indent}  {field}" for field in fields)
    return f'{indent}"{slot}": {{\n{body}\n{indent}}}'


def _summary_block(*, indent: str) -> str:
    body = ",\n".join(f'{indent}  "{name}": number' for name in SUMMARY_FIELDS)
    return f"{{\n{body}\n{indent}}}"


def _user_prompt(profile: PatientProfile, day_count: int) -> str:
    lines = [
        "Patient Profile:",
        f"- Age: {profile.age} years",
        f"- Height: {_number(profile.height_cm)} cm",
        f"- Weight: {_number(profile.weight_kg)} kg",
        f"- Blood Pressure: {profile.blood_pressure or NOT_SPECIFIED}",
        f"- Blood Group: {profile.blood_group or NOT_SPECIFIED}",
        f"- Medical Summary: {profile.medical_summary or 'None provided'}",
        f"- Disease/Condition: {profile.disease_condition}",
        f"- Meal Preference: {profile.meal_preference}",
        f"- Allergies: {_join_or_none(profile.allergies)}",
        f"- Disliked Items: {_join_or_none(profile.disliked_items)}",
        f"- Activity Level: {profile.activity_level}",
        f"- Health Goal: {profile.health_goal}",
        f"- Location: {format_location(profile.location)}",
    ]
    if day_count == 1:
        lines += ["", "Generate a balanced daily meal plan that:"]
        lines += _numbered(_SINGLE_DAY_GOALS)
        lines += [
            "",
            "Ensure the summary totals match the sum of individual meal nutrients.",
        ]
    else:
        lines += ["", f"Generate a balanced {day_count}-day meal plan that:"]
        lines += _numbered(_MULTI_DAY_GOALS)
        lines += ["", "Ensure:"]
        lines += [f"- {check}" for check in _MULTI_DAY_CHECKS]
    return "\n".join(lines)


def format_location(location: Location) -> str:
    """Render a location as 'country, state, city'."""
    if location.is_empty():
        return NOT_SPECIFIED
    parts = (location.country, location.state, location.city)
    return ", ".join(part or NOT_SPECIFIED for part in parts)


def _join_or_none(values: list[str]) -> str:
    return ", ".join(values) if values else "None"


def _numbered(items: tuple[str, ...]) -> list[str]:
    return [f"{index}. {item}" for index, item in enumerate(items, start=1)]


def _number(value: float) -> str:
    """Drop a trailing .0 so 170.0 renders as 170."""
    return f"{value:g}"
