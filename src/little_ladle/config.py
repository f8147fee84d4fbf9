"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from little_ladle.domain.rules import SearchRules

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    catalog_path: Path = DATA_DIR / "foods.json"
    guidelines_path: Path = DATA_DIR / "who_nutrition_guidelines.json"
    default_mode: str = "complementary"
    quick_fix_limit: int = 3
    quick_fix_serving_grams: float = 10.0
    suggestion_limit: int = 3
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="LITTLE_LADLE_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def search_rules(self) -> SearchRules:
        """Build search limits from the configured overrides."""
        return SearchRules(
            quick_fix_limit=self.quick_fix_limit,
            quick_fix_serving_grams=self.quick_fix_serving_grams,
            suggestion_limit=self.suggestion_limit,
        )
