from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RECIPE_SCALER_",
        extra="ignore",
    )

    log_level: str = "INFO"

    # What to do when a logarithmic rule drops below zero (ratio < 1/4)
    negative_amount_policy: Literal["clamp", "error"] = "clamp"

    # Density helpers fall back to this when no keyword matches
    default_grams_per_cup: float = 240.0

    # Used by auto_select_unit when the caller does not pick a system
    default_unit_system: Literal["metric", "us_customary"] = "metric"


settings = Settings()
