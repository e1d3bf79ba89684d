"""
Weather normalization.

Turns raw forecast numbers (Fahrenheit, precipitation probability 0-1)
into the band flags and layering weight the engine consumes.

Thresholds:
- cold  < 55F
- mild  55-75F
- warm  75-90F
- hot  >= 90F

Degrades gracefully:
- No current temperature -> neutral mild context
- Missing high/low -> current +/- 5F
- Non-finite high/low -> zero swing
"""

import math
from typing import Dict, Optional

from wardrobe.models import WeatherContext

COLD_THRESHOLD = 55
MILD_THRESHOLD = 75
WARM_THRESHOLD = 90

PRECIP_THRESHOLD = 0.35
LARGE_SWING_THRESHOLD = 20


def classify_temperature(temp: float) -> Dict[str, bool]:
    """Classify a temperature into exactly one band."""
    bands = {"is_cold": False, "is_mild": False, "is_warm": False, "is_hot": False}
    if temp < COLD_THRESHOLD:
        bands["is_cold"] = True
    elif temp < MILD_THRESHOLD:
        bands["is_mild"] = True
    elif temp < WARM_THRESHOLD:
        bands["is_warm"] = True
    else:
        bands["is_hot"] = True
    return bands


def is_rain_likely(precip_chance: float) -> bool:
    return precip_chance >= PRECIP_THRESHOLD


def calculate_daily_swing(high: float, low: float) -> float:
    if not math.isfinite(high) or not math.isfinite(low):
        return 0.0
    return abs(high - low)


def has_large_swing(swing: float) -> bool:
    return swing >= LARGE_SWING_THRESHOLD


def map_temperature_to_weight(bands: Dict[str, bool]) -> int:
    """Layering need: cold 3, mild 2, warm 1, hot 0."""
    if bands.get("is_cold"):
        return 3
    if bands.get("is_mild"):
        return 2
    if bands.get("is_warm"):
        return 1
    if bands.get("is_hot"):
        return 0
    return 1


def normalize_weather_context(
    current_temp: Optional[float],
    high_temp: Optional[float] = None,
    low_temp: Optional[float] = None,
    precip_chance: Optional[float] = None,
) -> WeatherContext:
    """
    Build a WeatherContext from raw forecast values.

    With no current temperature a neutral mild context is returned.
    """
    if current_temp is None:
        return WeatherContext(
            is_mild=True,
            target_weight=1,
            current_temp=65.0,
            high_temp=70.0,
            low_temp=60.0,
        )

    high = high_temp if high_temp is not None else current_temp + 5
    low = low_temp if low_temp is not None else current_temp - 5
    precip = min(1.0, max(0.0, precip_chance or 0.0))

    bands = classify_temperature(current_temp)
    swing = calculate_daily_swing(high, low)

    return WeatherContext(
        **bands,
        is_rain_likely=is_rain_likely(precip),
        precip_chance=precip,
        target_weight=map_temperature_to_weight(bands),
        current_temp=current_temp,
        high_temp=max(high, low),
        low_temp=min(high, low),
        daily_swing=swing,
        has_large_swing=has_large_swing(swing),
    )


def describe_weather_context(context: WeatherContext) -> str:
    """Human-readable summary, e.g. ``"mild weather and rain likely (40%)"``."""
    swing = (
        f" with a large temperature swing ({round(context.daily_swing)}F)"
        if context.has_large_swing else ""
    )
    rain = (
        f" and rain likely ({round(context.precip_chance * 100)}%)"
        if context.is_rain_likely else ""
    )
    return f"{context.band} weather{swing}{rain}"
