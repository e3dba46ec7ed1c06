"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from meal_planner.adapters.openai_meal_plan_client import backend_available
from meal_planner.services.generation import BackendConfig

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "low"
    openai_store: bool = False
    use_mock_meal_plans: bool = False
    summary_tolerance: float = 10.0
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def backend_config(self) -> BackendConfig:
        """Resolve backend availability and mock mode."""
        return BackendConfig(
            available=backend_available(self.openai_api_key),
            mock_forced=self.use_mock_meal_plans,
        )
