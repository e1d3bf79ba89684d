"""
Engine constants and algorithm configuration.

These are values that don't change per call but may need to be tuned.
Each config has a module-level default instance and a ``from_settings``
constructor so environment overrides flow into the components.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from config.settings import Settings, get_settings


# =============================================================================
# Compatibility Score Weights
# =============================================================================

@dataclass(frozen=True)
class ScoringWeights:
    """Weights combining the four axes into ``total``."""

    weather_fit: float = 0.4
    formality_alignment: float = 0.3
    color_harmony: float = 0.2
    capsule_cohesion: float = 0.1

    # Deduction applied to weather fit when rain is likely and neither the
    # jacket nor the shoes resist it
    rain_penalty: float = 0.2

    def normalized(self) -> Dict[str, float]:
        raw = {
            "weather_fit": self.weather_fit,
            "formality_alignment": self.formality_alignment,
            "color_harmony": self.color_harmony,
            "capsule_cohesion": self.capsule_cohesion,
        }
        total = sum(raw.values())
        if total <= 0:
            return {k: 0.25 for k in raw}
        return {k: v / total for k, v in raw.items()}

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ScoringWeights":
        s = settings or get_settings()
        return cls(
            weather_fit=s.weight_weather_fit,
            formality_alignment=s.weight_formality_alignment,
            color_harmony=s.weight_color_harmony,
            capsule_cohesion=s.weight_capsule_cohesion,
            rain_penalty=s.rain_penalty,
        )


DEFAULT_SCORING_WEIGHTS = ScoringWeights()


# =============================================================================
# Color Harmony Table
# =============================================================================

@dataclass(frozen=True)
class ColorHarmonyScores:
    """Pair scores for the color compatibility lookup."""

    both_neutral: float = 1.0
    same_color: float = 0.85
    neutral_with_color: float = 0.85
    analogous: float = 0.75
    complementary: float = 0.70
    other: float = 0.60
    clashing: float = 0.30
    unknown: float = 0.5

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ColorHarmonyScores":
        s = settings or get_settings()
        return cls(unknown=s.unknown_color_score)


DEFAULT_COLOR_SCORES = ColorHarmonyScores()


# =============================================================================
# Candidate Selection
# =============================================================================

@dataclass(frozen=True)
class SelectionConfig:
    """Adjustments applied on top of contextual fitness during ranking."""

    exclusion_penalty: float = 1.0
    shorts_bonus: float = 0.15
    formality_band_bonus: float = 0.10
    belt_shoe_clash_penalty: float = 0.30
    formality_tolerance: int = 1
    exploration_sharpness: float = 12.0

    # Blend of pairwise compatibility vs. layering-weight fit in fitness
    layering_share: float = 0.2

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SelectionConfig":
        s = settings or get_settings()
        return cls(
            exclusion_penalty=s.exclusion_penalty,
            shorts_bonus=s.shorts_bonus,
            formality_band_bonus=s.formality_band_bonus,
            belt_shoe_clash_penalty=s.belt_shoe_clash_penalty,
            formality_tolerance=s.formality_tolerance,
            exploration_sharpness=s.exploration_sharpness,
        )


DEFAULT_SELECTION_CONFIG = SelectionConfig()


# =============================================================================
# Formality
# =============================================================================

# Population variance of {1, 10}: the widest possible spread
MAX_FORMALITY_VARIANCE: float = 20.25

# Missing formality scores are treated as the midpoint
DEFAULT_FORMALITY_SCORE: int = 5
