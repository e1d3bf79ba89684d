"""
Candidate Selector.

Picks one item for a slot given the items already chosen:

  1. Eligibility   - right slot, active, within the preferred formality
                     range (core slots only, with tolerance)
  2. Fitness       - compatibility with the chosen items blended with
                     layering-weight fit, plus the selection adjustments
                     in ``SelectionConfig`` (shorts, formality band,
                     belt/shoe leather, exclusion)
  3. Pick          - greedy top item, or a seeded softmax draw when a
                     variation seed and exploration level are given

Exclusion is a penalty, not a ban: an excluded item is still returned
when it is the only candidate. ``strict_exclusion`` turns it into a ban
for callers that need "is there any alternative".
"""

import hashlib
import math
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from config.constants import DEFAULT_SELECTION_CONFIG, SelectionConfig
from config.settings import Settings
from core.logging import LoggerMixin
from scoring.compatibility import CompatibilityScorer
from scoring.constants.color_harmony import BLACK_LEATHER_FAMILY, BROWN_LEATHER_FAMILY
from wardrobe.enrichment import (
    FormalityBand,
    classify_formality_band,
    infer_weather_weight,
    is_shorts,
    resolve_color,
)
from wardrobe.models import REQUIRED_SLOTS, Slot, WardrobeItem, WeatherContext

MAX_WEATHER_WEIGHT = 3

FormalityRange = Tuple[int, int]


def make_rng(variation_seed: str, slot: Slot) -> np.random.Generator:
    """Deterministic per-slot generator derived from the variation seed."""
    digest = hashlib.sha256(f"{variation_seed}:{slot.value}".encode("utf-8")).digest()
    return np.random.default_rng(int.from_bytes(digest[:8], "big"))


def within_formality_range(
    item: WardrobeItem, formality_range: FormalityRange, tolerance: int = 1,
) -> bool:
    low, high = formality_range
    return low - tolerance <= item.formality <= high + tolerance


def leather_clash(a: WardrobeItem, b: WardrobeItem) -> bool:
    """Black-family leather next to brown-family leather."""
    ca, cb = resolve_color(a), resolve_color(b)
    return (
        (ca in BLACK_LEATHER_FAMILY and cb in BROWN_LEATHER_FAMILY)
        or (ca in BROWN_LEATHER_FAMILY and cb in BLACK_LEATHER_FAMILY)
    )


class CandidateSelector(LoggerMixin):
    """Ranks and picks items for a single slot."""

    def __init__(
        self,
        scorer: Optional[CompatibilityScorer] = None,
        config: Optional[SelectionConfig] = None,
    ) -> None:
        self.scorer = scorer or CompatibilityScorer()
        self.config = config or DEFAULT_SELECTION_CONFIG

    @classmethod
    def from_settings(cls, settings: Settings) -> "CandidateSelector":
        return cls(
            scorer=CompatibilityScorer.from_settings(settings),
            config=SelectionConfig.from_settings(settings),
        )

    # ------------------------------------------------------------------
    # Eligibility
    # ------------------------------------------------------------------

    def eligible(
        self,
        slot: Slot,
        catalog: Iterable[WardrobeItem],
        preferred_formality_range: Optional[FormalityRange] = None,
    ) -> List[WardrobeItem]:
        """Candidates for ``slot`` in catalog order."""
        out = []
        for item in catalog:
            if item.slot != slot or not item.active:
                continue
            if (
                preferred_formality_range is not None
                and slot in REQUIRED_SLOTS
                and not within_formality_range(
                    item, preferred_formality_range, self.config.formality_tolerance,
                )
            ):
                continue
            out.append(item)
        return out

    # ------------------------------------------------------------------
    # Fitness
    # ------------------------------------------------------------------

    def fitness(
        self,
        item: WardrobeItem,
        slot: Slot,
        context: WeatherContext,
        chosen: Mapping[Slot, WardrobeItem],
        exclude_items: Union[frozenset, set] = frozenset(),
        preferred_formality_band: Optional[FormalityBand] = None,
    ) -> float:
        cfg = self.config
        compat = self.scorer.score_candidate(item, slot, chosen, context).total
        layering = 1.0 - abs(infer_weather_weight(item) - context.target_weight) / MAX_WEATHER_WEIGHT
        score = (1.0 - cfg.layering_share) * compat + cfg.layering_share * layering

        if slot == Slot.PANTS and is_shorts(item):
            if context.is_hot:
                score += cfg.shorts_bonus
            elif context.is_cold:
                score -= cfg.shorts_bonus

        if (
            preferred_formality_band is not None
            and classify_formality_band(item.formality_score) == preferred_formality_band
        ):
            score += cfg.formality_band_bonus

        partner_slot = {Slot.BELT: Slot.SHOES, Slot.SHOES: Slot.BELT}.get(slot)
        partner = chosen.get(partner_slot) if partner_slot else None
        if partner is not None and leather_clash(item, partner):
            score -= cfg.belt_shoe_clash_penalty

        if item.id in exclude_items:
            score -= cfg.exclusion_penalty

        return score

    def rank(
        self,
        slot: Slot,
        candidates: Sequence[WardrobeItem],
        context: WeatherContext,
        chosen: Mapping[Slot, WardrobeItem],
        exclude_items: Union[frozenset, set] = frozenset(),
        preferred_formality_band: Optional[FormalityBand] = None,
    ) -> List[Tuple[WardrobeItem, float]]:
        """Candidates with fitness, best first. Ties keep catalog order."""
        scored = [
            (item, self.fitness(item, slot, context, chosen, exclude_items, preferred_formality_band))
            for item in candidates
        ]
        return sorted(scored, key=lambda pair: -pair[1])

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_for_slot(
        self,
        slot: Slot,
        catalog: Iterable[WardrobeItem],
        context: WeatherContext,
        chosen_so_far: Optional[Mapping[Slot, WardrobeItem]] = None,
        exclude_items: Iterable[str] = (),
        variation_seed: Optional[str] = None,
        exploration_level: float = 0.0,
        preferred_formality_band: Optional[Union[FormalityBand, str]] = None,
        preferred_formality_range: Optional[FormalityRange] = None,
        strict_exclusion: bool = False,
    ) -> Optional[WardrobeItem]:
        """
        Pick one item for ``slot``.

        Returns None only when no candidate is eligible (with
        ``strict_exclusion``, when none is eligible and not excluded).
        Identical inputs always give the identical pick.
        """
        chosen = chosen_so_far or {}
        excluded = frozenset(exclude_items)
        band = FormalityBand(preferred_formality_band) if preferred_formality_band else None

        candidates = self.eligible(slot, catalog, preferred_formality_range)
        if strict_exclusion:
            candidates = [c for c in candidates if c.id not in excluded]
        if not candidates:
            self.logger.debug("No eligible candidates", slot=slot)
            return None

        ranked = self.rank(slot, candidates, context, chosen, excluded, band)

        level = max(0.0, min(1.0, exploration_level))
        if variation_seed is None or level <= 0.0 or len(ranked) == 1:
            pick = ranked[0][0]
        else:
            pick = ranked[self._draw(ranked, slot, variation_seed, level)][0]

        self.logger.debug(
            "Slot filled",
            slot=slot,
            item_id=pick.id,
            candidates=len(ranked),
            exploration_level=level,
        )
        return pick

    def _draw(
        self,
        ranked: Sequence[Tuple[WardrobeItem, float]],
        slot: Slot,
        variation_seed: str,
        level: float,
    ) -> int:
        """
        Softmax draw over fitness relative to the best candidate.

        ``w_i = exp(sharpness * (1 - level) * (s_i - s_best))``; level 1
        is a uniform draw, so fitness adjustments (the exclusion penalty
        included) stop biasing it. Use ``strict_exclusion`` for a ban.
        """
        scores = np.array([s for _, s in ranked], dtype=float)
        temperature = self.config.exploration_sharpness * (1.0 - level)
        weights = np.exp(temperature * (scores - scores.max()))
        total = weights.sum()
        if not math.isfinite(total) or total <= 0:
            return 0
        rng = make_rng(variation_seed, slot)
        return int(rng.choice(len(ranked), p=weights / total))
