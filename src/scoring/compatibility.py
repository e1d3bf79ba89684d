"""
Compatibility Scorer
====================

Scores a set of chosen items on four independent axes, each in [0, 1]:

  1. Weather fit          - share of items tagged for the active season,
                            minus a rain penalty when no rain gear is worn
  2. Formality alignment  - inverse-normalized variance of formality scores
  3. Color harmony        - pairwise color lookup, averaged
  4. Capsule cohesion     - pairwise capsule-tag overlap, averaged

``total`` is the weighted combination (weights normalized, see
``config.constants.ScoringWeights``). ``pairwise`` repeats the four axes
for every unordered pair of filled slots.

Degrades gracefully:
- No season tags -> material lookup, else neutral 0.5
- No color -> neutral pair score
- No capsule tags -> neutral pair score
- Missing formality -> midpoint 5
"""

import math
import re
from itertools import combinations
from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np

from config.constants import (
    DEFAULT_COLOR_SCORES,
    DEFAULT_SCORING_WEIGHTS,
    MAX_FORMALITY_VARIANCE,
    ColorHarmonyScores,
    ScoringWeights,
)
from config.settings import Settings
from scoring.constants.color_harmony import (
    ANALOGOUS_GROUPS,
    CLASHING_PAIRS,
    COMPLEMENTARY_PAIRS,
)
from scoring.constants.weather_materials import (
    ALL_SEASON_TAGS,
    SEASON_ALIASES,
    SEASON_MATERIALS,
    WEATHER_RESISTANT_KEYWORDS,
    WEATHER_RESISTANT_MATERIALS,
)
from wardrobe.enrichment import UNKNOWN_COLOR, is_neutral_color, resolve_color
from wardrobe.models import (
    SLOT_ORDER,
    CompatibilityScore,
    Scores,
    Season,
    Slot,
    WardrobeItem,
    WeatherContext,
    pair_key,
)

# Slots whose items decide whether an outfit copes with rain
RAIN_GEAR_SLOTS = (Slot.JACKET, Slot.SHOES)

CAPSULE_UNTAGGED = 0.5
CAPSULE_DISJOINT = 0.3
CAPSULE_SHARED_BASE = 0.6

_RESISTANT_RE = re.compile(
    r"\b(" + "|".join(re.escape(k) for k in WEATHER_RESISTANT_KEYWORDS) + r")\b",
    re.IGNORECASE,
)


def _clamp01(x: float) -> float:
    if not math.isfinite(x):
        return 0.0
    return max(0.0, min(1.0, x))


def _mean(values: Sequence[float], default: float) -> float:
    if not values:
        return default
    return sum(values) / len(values)


# ---------------------------------------------------------------------------
# AXIS 1: Weather fit
# ---------------------------------------------------------------------------

def season_match(item: WardrobeItem, season: Season) -> float:
    """1.0 in season, 0.0 out of season, 0.5 when nothing is known."""
    tags = {t.lower() for t in item.season}
    if tags & ALL_SEASON_TAGS:
        return 1.0
    seasons = {SEASON_ALIASES[t] for t in tags if t in SEASON_ALIASES}
    if seasons:
        return 1.0 if season in seasons else 0.0

    material = (item.material or "").strip().lower()
    if material:
        mats = SEASON_MATERIALS.get(season, {})
        if material in mats.get("good", frozenset()):
            return 1.0
        if material in mats.get("bad", frozenset()):
            return 0.0
    return 0.5


def is_weather_resistant(item: WardrobeItem) -> bool:
    """Whether the item holds up in rain (material, subcategory or name)."""
    material = (item.material or "").strip().lower()
    if material in WEATHER_RESISTANT_MATERIALS:
        return True
    for text in (item.material, item.subcategory, item.name):
        if text and _RESISTANT_RE.search(text):
            return True
    return False


def score_weather_fit(
    items: Mapping[Slot, WardrobeItem],
    context: WeatherContext,
    rain_penalty: float = DEFAULT_SCORING_WEIGHTS.rain_penalty,
) -> float:
    """
    Proportion of items suited to the active season.

    When rain is likely and the scored set contains a jacket or shoes,
    the fit is reduced unless at least one of those is weather resistant.
    """
    if not items:
        return 0.5
    season = context.active_season
    fit = _mean([season_match(item, season) for item in items.values()], 0.5)

    if context.is_rain_likely:
        gear = [items[s] for s in RAIN_GEAR_SLOTS if s in items]
        if gear and not any(is_weather_resistant(g) for g in gear):
            fit -= rain_penalty
    return _clamp01(fit)


# ---------------------------------------------------------------------------
# AXIS 2: Formality alignment
# ---------------------------------------------------------------------------

def score_formality_alignment(items: Sequence[WardrobeItem]) -> float:
    """
    ``1 - var / MAX_FORMALITY_VARIANCE``.

    Tight clusters score near 1; a 1-and-10 spread scores 0.
    """
    if len(items) < 2:
        return 1.0
    variance = float(np.var([item.formality for item in items]))
    return _clamp01(1.0 - variance / MAX_FORMALITY_VARIANCE)


# ---------------------------------------------------------------------------
# AXIS 3: Color harmony
# ---------------------------------------------------------------------------

def color_pair_harmony(
    c1: str, c2: str, table: ColorHarmonyScores = DEFAULT_COLOR_SCORES,
) -> float:
    """Lookup score for two color categories."""
    if not c1 or not c2 or c1 == UNKNOWN_COLOR or c2 == UNKNOWN_COLOR:
        return table.unknown
    if c1 == c2:
        return table.same_color
    if frozenset({c1, c2}) in CLASHING_PAIRS:
        return table.clashing

    n1, n2 = is_neutral_color(c1), is_neutral_color(c2)
    if n1 and n2:
        return table.both_neutral
    if n1 or n2:
        return table.neutral_with_color

    for group in ANALOGOUS_GROUPS:
        if c1 in group and c2 in group:
            return table.analogous
    for group_a, group_b in COMPLEMENTARY_PAIRS:
        if (c1 in group_a and c2 in group_b) or (c1 in group_b and c2 in group_a):
            return table.complementary
    return table.other


def score_color_harmony(
    items: Sequence[WardrobeItem], table: ColorHarmonyScores = DEFAULT_COLOR_SCORES,
) -> float:
    colors = [resolve_color(item) for item in items]
    pairs = [color_pair_harmony(a, b, table) for a, b in combinations(colors, 2)]
    return _clamp01(_mean(pairs, 1.0))


# ---------------------------------------------------------------------------
# AXIS 4: Capsule cohesion
# ---------------------------------------------------------------------------

def capsule_pair_cohesion(a: WardrobeItem, b: WardrobeItem) -> float:
    """Jaccard-style overlap, rewarding any shared capsule tag."""
    ta = {t.lower() for t in a.capsule_tags}
    tb = {t.lower() for t in b.capsule_tags}
    if not ta or not tb:
        return CAPSULE_UNTAGGED
    shared = ta & tb
    if not shared:
        return CAPSULE_DISJOINT
    jaccard = len(shared) / len(ta | tb)
    return CAPSULE_SHARED_BASE + (1.0 - CAPSULE_SHARED_BASE) * jaccard


def score_capsule_cohesion(items: Sequence[WardrobeItem]) -> float:
    pairs = [capsule_pair_cohesion(a, b) for a, b in combinations(items, 2)]
    return _clamp01(_mean(pairs, 1.0))


# ---------------------------------------------------------------------------
# MAIN SCORER
# ---------------------------------------------------------------------------

class CompatibilityScorer:
    """
    Pure four-axis scorer.

    Stateless beyond its immutable weights, safe to share across threads.
    """

    def __init__(
        self,
        weights: Optional[ScoringWeights] = None,
        color_scores: Optional[ColorHarmonyScores] = None,
    ) -> None:
        self.weights = weights or DEFAULT_SCORING_WEIGHTS
        self.color_scores = color_scores or DEFAULT_COLOR_SCORES
        self._normalized = self.weights.normalized()

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompatibilityScorer":
        return cls(
            weights=ScoringWeights.from_settings(settings),
            color_scores=ColorHarmonyScores.from_settings(settings),
        )

    def _combine(self, axes: Dict[str, float]) -> CompatibilityScore:
        axes = {k: _clamp01(v) for k, v in axes.items()}
        total = sum(self._normalized[k] * v for k, v in axes.items())
        return CompatibilityScore(**axes, total=_clamp01(total))

    def score_items(
        self, items: Mapping[Slot, WardrobeItem], context: WeatherContext,
    ) -> CompatibilityScore:
        """Four axes and total for any subset of filled slots."""
        values = list(items.values())
        return self._combine({
            "weather_fit": score_weather_fit(items, context, self.weights.rain_penalty),
            "formality_alignment": score_formality_alignment(values),
            "color_harmony": score_color_harmony(values, self.color_scores),
            "capsule_cohesion": score_capsule_cohesion(values),
        })

    def score(
        self, outfit_slots: Mapping[Slot, WardrobeItem], context: WeatherContext,
    ) -> Scores:
        """Overall scores plus one pairwise entry per unordered slot pair."""
        ordered = [(s, outfit_slots[s]) for s in SLOT_ORDER if s in outfit_slots]
        overall = self.score_items(dict(ordered), context)

        pairwise: Dict[str, CompatibilityScore] = {}
        for (slot_a, item_a), (slot_b, item_b) in combinations(ordered, 2):
            pairwise[pair_key(slot_a, slot_b)] = self.score_items(
                {slot_a: item_a, slot_b: item_b}, context,
            )
        return Scores(overall=overall, pairwise=pairwise)

    def score_candidate(
        self,
        candidate: WardrobeItem,
        slot: Slot,
        neighbours: Mapping[Slot, WardrobeItem],
        context: WeatherContext,
    ) -> CompatibilityScore:
        """
        Fit of one candidate against the items already chosen.

        Pairwise axes are averaged over neighbours (1.0 with none).
        Weather fit is the candidate's own season match; rain-gear slots
        lose ``rain_penalty`` when rain is likely and the candidate does
        not resist it.
        """
        weather = season_match(candidate, context.active_season)
        if context.is_rain_likely and slot in RAIN_GEAR_SLOTS and not is_weather_resistant(candidate):
            weather -= self.weights.rain_penalty

        others: List[WardrobeItem] = [
            item for s, item in neighbours.items() if s != slot
        ]
        cand_color = resolve_color(candidate)
        return self._combine({
            "weather_fit": weather,
            "formality_alignment": _mean(
                [score_formality_alignment([candidate, o]) for o in others], 1.0,
            ),
            "color_harmony": _mean(
                [color_pair_harmony(cand_color, resolve_color(o), self.color_scores) for o in others],
                1.0,
            ),
            "capsule_cohesion": _mean(
                [capsule_pair_cohesion(candidate, o) for o in others], 1.0,
            ),
        })
