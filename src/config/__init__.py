"""
Configuration module for the outfit engine.

This module provides centralized configuration management using pydantic-settings.
All environment variables and tunables should be accessed through this module.

Usage:
    from config import get_settings

    settings = get_settings()
    weights = ScoringWeights.from_settings(settings)
"""

from config.settings import Settings, get_settings, get_settings_for_testing
from config.constants import (
    ColorHarmonyScores,
    ScoringWeights,
    SelectionConfig,
)

__all__ = [
    "Settings",
    "get_settings",
    "get_settings_for_testing",
    "ColorHarmonyScores",
    "ScoringWeights",
    "SelectionConfig",
]
