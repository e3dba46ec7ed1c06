"""Meal plan generation with LLM backend and deterministic fallback."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from meal_planner.domain.errors import (
    BackendInvocationError,
    GenerationFailure,
    ensure_day_count,
)
from meal_planner.domain.meal_plans import MealPlanResult
from meal_planner.domain.profiles import PatientProfile
from meal_planner.services.fallback import FallbackMealPlanGenerator
from meal_planner.services.parsing import parse_json
from meal_planner.services.prompts import build_prompt
from meal_planner.services.validation import SUMMARY_TOLERANCE, validate_meal_plan

_logger = logging.getLogger(__name__)


class MealPlanBackend(Protocol):
    """Interface for the generative model."""

    async def invoke(self, prompt: str) -> str:
        """Return the raw model response for a prompt."""


@dataclass(frozen=True)
class BackendConfig:
    """Resolved once from settings."""

    available: bool
    mock_forced: bool = False

    @property
    def use_backend(self) -> bool:
        return self.available and not self.mock_forced


@dataclass
class MealPlanGenerator:
    """Generates meal plans, falling back to templates on any backend failure."""

    backend: MealPlanBackend | None
    config: BackendConfig
    fallback: FallbackMealPlanGenerator = field(
        default_factory=FallbackMealPlanGenerator
    )
    summary_tolerance: float = SUMMARY_TOLERANCE

    async def generate_meal_plan(
        self, profile: PatientProfile, day_count: int
    ) -> MealPlanResult:
        """Return a plan for the profile; only an invalid day count raises."""
        ensure_day_count(day_count)
        if self.backend is None or not self.config.use_backend:
            if self.config.mock_forced:
                reason = "forced by configuration"
            else:
                reason = "no backend available"
            _logger.info("Using fallback meal plan generator (%s)", reason)
            return self.fallback.generate(profile, day_count)

        try:
            return await self._generate_with_backend(profile, day_count)
        except GenerationFailure:
            _logger.warning(
                "Backend meal plan generation failed; using fallback generator",
                exc_info=True,
            )
            return self.fallback.generate(profile, day_count)

    async def _generate_with_backend(
        self, profile: PatientProfile, day_count: int
    ) -> MealPlanResult:
        prompt = build_prompt(profile, day_count)
        _logger.info("Generating %s-day meal plan with backend", day_count)
        try:
            raw = await self.backend.invoke(prompt)
        except BackendInvocationError:
            raise
        except Exception as exc:
            raise BackendInvocationError(str(exc) or type(exc).__name__) from exc
        parsed = parse_json(raw)
        return validate_meal_plan(parsed, day_count, tolerance=self.summary_tolerance)
