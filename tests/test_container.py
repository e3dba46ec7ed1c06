"""Tests for container wiring and settings."""

import asyncio

from meal_planner.adapters.openai_meal_plan_client import OpenAIMealPlanClient
from meal_planner.config import Settings
from meal_planner.containers import build_container
from tests.conftest import SERVICE_KEY


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.meal_plan_service is not None
    assert isinstance(container.meal_plan_generator.backend, OpenAIMealPlanClient)
    assert container.meal_plan_generator.config.use_backend
    asyncio.run(container.close_resources())


def test_build_container_without_openai_key(settings) -> None:
    container = build_container(
        settings.model_copy(update={"openai_api_key": "your-openai-api-key-here"})
    )

    assert container.meal_plan_generator.backend is None
    assert not container.meal_plan_generator.config.available
    asyncio.run(container.close_resources())


def test_build_container_skips_openai_when_mock_forced(settings) -> None:
    container = build_container(
        settings.model_copy(update={"use_mock_meal_plans": True})
    )

    assert container.meal_plan_generator.backend is None
    assert container.meal_plan_generator.config.available
    assert not container.meal_plan_generator.config.use_backend
    asyncio.run(container.close_resources())


def test_backend_config_honours_mock_flag() -> None:
    settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=SERVICE_KEY,
        api_token="api-token",
        openai_api_key="sk-live",
        use_mock_meal_plans=True,
    )

    config = settings.backend_config()

    assert config.available
    assert config.mock_forced
    assert not config.use_backend
