"""
Centralized settings management using pydantic-settings.

All tunables of the outfit engine are defined here: score weights,
selection penalties/bonuses, exploration sharpness and logging.
Use get_settings() to access the singleton settings instance.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Every variable is optional and prefixed with ``OUTFIT_``, e.g.:
        - OUTFIT_LOG_LEVEL: Minimum log level (default: INFO)
        - OUTFIT_JSON_LOGS: Emit JSON logs instead of console output
        - OUTFIT_WEIGHT_WEATHER_FIT: Weight of the weather axis in ``total``
        - OUTFIT_EXCLUSION_PENALTY: Score deducted from excluded items
    """

    model_config = SettingsConfigDict(
        env_prefix="OUTFIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: str = Field(default="INFO", description="Minimum log level")
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v):
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
                raise ValueError(f"Unknown log level: {v}")
        return v

    # ==========================================================================
    # Compatibility score weights (normalized before use)
    # ==========================================================================
    weight_weather_fit: float = Field(default=0.4, ge=0.0, description="Weather fit weight")
    weight_formality_alignment: float = Field(default=0.3, ge=0.0, description="Formality alignment weight")
    weight_color_harmony: float = Field(default=0.2, ge=0.0, description="Color harmony weight")
    weight_capsule_cohesion: float = Field(default=0.1, ge=0.0, description="Capsule cohesion weight")

    @model_validator(mode="after")
    def check_weights(self) -> "Settings":
        total = (
            self.weight_weather_fit
            + self.weight_formality_alignment
            + self.weight_color_harmony
            + self.weight_capsule_cohesion
        )
        if total <= 0:
            raise ValueError("At least one score weight must be positive")
        return self

    rain_penalty: float = Field(
        default=0.2, ge=0.0, le=1.0,
        description="Weather fit deduction when rain is likely and nothing resists it",
    )
    unknown_color_score: float = Field(
        default=0.5, ge=0.0, le=1.0,
        description="Color harmony contributed by a pair with an unknown color",
    )

    # ==========================================================================
    # Candidate selection
    # ==========================================================================
    exclusion_penalty: float = Field(
        default=1.0, ge=0.0,
        description="Score deducted from items listed in exclude_items",
    )
    shorts_bonus: float = Field(
        default=0.15, ge=0.0,
        description="Shorts bonus in hot weather (applied negatively in cold)",
    )
    formality_band_bonus: float = Field(
        default=0.10, ge=0.0,
        description="Bonus for items inside the preferred formality band",
    )
    belt_shoe_clash_penalty: float = Field(
        default=0.30, ge=0.0,
        description="Penalty for a black/brown leather mismatch between belt and shoes",
    )
    formality_tolerance: int = Field(
        default=1, ge=0,
        description="Slack around preferred_formality_range for core slots",
    )
    exploration_sharpness: float = Field(
        default=12.0, gt=0.0,
        description="Softmax sharpness of the weighted draw at exploration_level 0+",
    )

    # ==========================================================================
    # Variation controller (caller side)
    # ==========================================================================
    variation_max_attempts: int = Field(default=8, ge=1, le=50, description="Retry cap")
    variation_min_items: int = Field(default=4, ge=3, description="Minimum items per variation")
    variation_exploration_level: float = Field(
        default=0.8, ge=0.0, le=1.0,
        description="Exploration level used by retry attempts",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get the engine settings singleton.

    Cached, so every component sees the same values. Reads OUTFIT_*
    environment variables and a .env file at the project root if present.

    Returns:
        Settings: The engine settings instance

    Raises:
        ValidationError: If an environment variable holds an invalid value
    """
    env_file = Path(__file__).resolve().parents[2] / ".env"
    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: A new settings instance with overrides applied
    """
    test_defaults = {
        "environment": "testing",
        "debug": True,
    }
    test_defaults.update(overrides)

    return Settings(_env_file=None, **test_defaults)
