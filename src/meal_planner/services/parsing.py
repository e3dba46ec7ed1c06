"""Extract JSON objects from free-form LLM output."""

import json
import logging
import re

from meal_planner.domain.errors import MealPlanParseError

_FENCE_PATTERN = re.compile(r"```(?:json)?\n?")
_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

_logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> float:
    raise ValueError(f"Non-finite number {name} is not valid JSON")


def parse_json(raw: str) -> dict[str, object]:
    """Return the first JSON object found in a model response."""
    if not isinstance(raw, str):
        _logger.error("Model response is not text: %r", raw)
        raise MealPlanParseError("Response is not text", repr(raw))
    cleaned = _FENCE_PATTERN.sub("", raw.strip())
    match = _OBJECT_PATTERN.search(cleaned)
    if match is None:
        _logger.error("No JSON object in model response: %r", raw)
        raise MealPlanParseError("No valid JSON found in response", raw)
    try:
        parsed = json.loads(match.group(0), parse_constant=_reject_constant)
    except ValueError as exc:
        _logger.error("Invalid JSON in model response (%s): %r", exc, raw)
        raise MealPlanParseError(f"Invalid JSON in response: {exc}", raw) from exc
    if not isinstance(parsed, dict):
        _logger.error("Model response JSON is not an object: %r", raw)
        raise MealPlanParseError("Response JSON is not an object", raw)
    return parsed
