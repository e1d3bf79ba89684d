"""
Compatibility scoring.

Quick start::

    from scoring import CompatibilityScorer

    scorer = CompatibilityScorer()
    scores = scorer.score({Slot.SHIRT: shirt, Slot.PANTS: pants}, ctx)
    scores.overall.total, scores.pairwise["shirt-pants"].color_harmony
"""

from scoring.compatibility import (
    CompatibilityScorer,
    capsule_pair_cohesion,
    color_pair_harmony,
    is_weather_resistant,
    season_match,
)

__all__ = [
    "CompatibilityScorer",
    "capsule_pair_cohesion",
    "color_pair_harmony",
    "is_weather_resistant",
    "season_match",
]
