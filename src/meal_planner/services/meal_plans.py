"""Meal plan generation and history for patients."""

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from meal_planner.domain.errors import (
    MealPlanNotFoundError,
    ProfileNotFoundError,
    ensure_day_count,
)
from meal_planner.domain.meal_plans import MealPlanPage, MealPlanRecord, MealPlanResult
from meal_planner.domain.profiles import PatientProfile
from meal_planner.services.generation import MealPlanGenerator

DEFAULT_HISTORY_LIMIT = 10

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Read access to patient profiles."""

    def get_profile(self, patient_id: UUID) -> PatientProfile | None:
        """Return the profile for a patient, if present."""


class MealPlanRepository(Protocol):
    """Persistence interface for generated meal plans."""

    def create_meal_plan(
        self, patient_id: UUID, plan: MealPlanResult, generated_at: datetime
    ) -> MealPlanRecord:
        """Store a plan and return it with its identity."""

    def get_latest(self, patient_id: UUID) -> MealPlanRecord | None:
        """Return the most recently generated plan."""

    def list_meal_plans(
        self, patient_id: UUID, limit: int, offset: int
    ) -> list[MealPlanRecord]:
        """Return plans newest first."""

    def count_meal_plans(self, patient_id: UUID) -> int:
        """Return how many plans a patient has."""


@dataclass
class MealPlanService:
    """Application service for patient meal plans."""

    generator: MealPlanGenerator
    profile_repository: ProfileRepository
    meal_plan_repository: MealPlanRepository

    async def generate_for_patient(
        self, patient_id: UUID, day_count: object = 1
    ) -> MealPlanRecord:
        """Generate, persist and return a plan for a patient."""
        days = ensure_day_count(day_count)
        profile = self._require_profile(patient_id)
        plan = await self.generator.generate_meal_plan(profile, days)
        record = self.meal_plan_repository.create_meal_plan(
            patient_id, plan, generated_at=datetime.now(tz=UTC)
        )
        _logger.info(
            "Stored meal plan: patient_id=%s plan_id=%s days=%s source=%s",
            patient_id,
            record.id,
            days,
            plan.source,
        )
        return record

    def get_latest(self, patient_id: UUID) -> MealPlanRecord:
        """Return the latest plan for a patient."""
        self._require_profile(patient_id)
        record = self.meal_plan_repository.get_latest(patient_id)
        if record is None:
            raise MealPlanNotFoundError(f"No meal plan found for patient {patient_id}")
        return record

    def get_history(
        self, patient_id: UUID, page: int = 1, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> MealPlanPage:
        """Return one page of a patient's plans, newest first."""
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be positive")
        self._require_profile(patient_id)
        offset = (page - 1) * limit
        plans = self.meal_plan_repository.list_meal_plans(patient_id, limit, offset)
        total_count = self.meal_plan_repository.count_meal_plans(patient_id)
        return MealPlanPage(
            plans=plans,
            current_page=page,
            total_pages=math.ceil(total_count / limit),
            total_count=total_count,
        )

    def _require_profile(self, patient_id: UUID) -> PatientProfile:
        profile = self.profile_repository.get_profile(patient_id)
        if profile is None:
            raise ProfileNotFoundError(f"Patient profile {patient_id} not found")
        return profile
