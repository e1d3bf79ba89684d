"""
Wardrobe domain types.

Quick start::

    from wardrobe import Slot, WardrobeItem, normalize_weather_context

    ctx = normalize_weather_context(current_temp=62, precip_chance=0.1)
    shirt = WardrobeItem(id="s1", slot="shirt", name="Navy Oxford Shirt",
                         formality_score=6)
"""

from wardrobe.models import (
    CONDITIONAL_SLOTS,
    REQUIRED_SLOTS,
    SLOT_ORDER,
    TORSO_CORE_SLOTS,
    CompatibilityScore,
    GeneratedOutfit,
    Scores,
    Season,
    Slot,
    WardrobeItem,
    WeatherContext,
    pair_key,
)
from wardrobe.weather import describe_weather_context, normalize_weather_context

__all__ = [
    "CONDITIONAL_SLOTS",
    "REQUIRED_SLOTS",
    "SLOT_ORDER",
    "TORSO_CORE_SLOTS",
    "CompatibilityScore",
    "GeneratedOutfit",
    "Scores",
    "Season",
    "Slot",
    "WardrobeItem",
    "WeatherContext",
    "pair_key",
    "describe_weather_context",
    "normalize_weather_context",
]
