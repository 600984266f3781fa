"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    meals_table: str = "meals"
    nutrition_plans_table: str = "nutrition_plans"
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    default_calorie_goal: float = 2000
    report_cache_ttl_seconds: int = 60
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def insights_enabled(self) -> bool:
        """Return True when an OpenAI key is configured."""
        return bool(self.openai_api_key and self.openai_api_key.strip())
