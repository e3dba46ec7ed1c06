"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_planner.adapters.openai_meal_plan_client import OpenAIMealPlanClient
from meal_planner.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from meal_planner.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from meal_planner.config import Settings
from meal_planner.services.fallback import FallbackMealPlanGenerator
from meal_planner.services.generation import MealPlanGenerator
from meal_planner.services.meal_plans import MealPlanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    meal_plan_generator: MealPlanGenerator
    meal_plan_service: MealPlanService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    backend_config = resolved_settings.backend_config()
    openai_client = None
    if backend_config.use_backend:
        openai_client = OpenAIMealPlanClient.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )
    generator = MealPlanGenerator(
        backend=openai_client,
        config=backend_config,
        fallback=FallbackMealPlanGenerator(),
        summary_tolerance=resolved_settings.summary_tolerance,
    )
    meal_plan_service = MealPlanService(
        generator=generator,
        profile_repository=SupabaseProfileRepository(supabase_client),
        meal_plan_repository=SupabaseMealPlanRepository(supabase_client),
    )

    async def close_resources() -> None:
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        meal_plan_generator=generator,
        meal_plan_service=meal_plan_service,
        close_resources=close_resources,
    )
