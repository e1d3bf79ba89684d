"""
Outfit Assembler.

Composes one outfit from a catalog snapshot and a weather context:

    plan slots -> fill shirt, pants, shoes -> re-plan with the lower half
    known -> fill jacket, undershirt, belt, watch -> swappable flags ->
    score -> GeneratedOutfit

Everything is computed fresh per call from immutable inputs; the
assembler itself only holds configuration and is safe to share.
"""

import threading
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional, Union

from config.settings import Settings, get_settings
from core.logging import LoggerMixin
from scoring.compatibility import CompatibilityScorer
from services.candidate_selector import CandidateSelector, FormalityRange
from services.category_policy import CategoryPolicy, available_slots
from services.errors import MissingRequiredCategory
from wardrobe.enrichment import FormalityBand
from wardrobe.models import SLOT_ORDER, GeneratedOutfit, Slot, WardrobeItem, WeatherContext


class OutfitAssembler(LoggerMixin):
    """Runs the policy -> selector -> scorer pipeline."""

    def __init__(
        self,
        policy: Optional[CategoryPolicy] = None,
        selector: Optional[CandidateSelector] = None,
        scorer: Optional[CompatibilityScorer] = None,
    ) -> None:
        self.scorer = scorer or CompatibilityScorer()
        self.selector = selector or CandidateSelector(scorer=self.scorer)
        self.policy = policy or CategoryPolicy()

    @classmethod
    def from_settings(cls, settings: Settings) -> "OutfitAssembler":
        scorer = CompatibilityScorer.from_settings(settings)
        selector = CandidateSelector.from_settings(settings)
        return cls(selector=selector, scorer=scorer)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate_outfit(
        self,
        catalog: Iterable[WardrobeItem],
        weather_context: WeatherContext,
        *,
        exclude_items: Iterable[str] = (),
        variation_seed: Optional[str] = None,
        exploration_level: float = 0.0,
        preferred_formality_band: Optional[Union[FormalityBand, str]] = None,
        preferred_formality_range: Optional[FormalityRange] = None,
    ) -> GeneratedOutfit:
        """
        Build one outfit.

        Raises:
            MissingRequiredCategory: shirt, pants or shoes has no eligible item
        """
        catalog = list(catalog)
        excluded = frozenset(exclude_items)
        available = available_slots(catalog)

        plan = self.policy.plan_slots(weather_context, available)
        missing = [
            slot for slot in plan.required
            if not self.selector.eligible(slot, catalog, preferred_formality_range)
        ]
        if missing:
            raise MissingRequiredCategory(missing)

        select_kwargs = dict(
            exclude_items=excluded,
            variation_seed=variation_seed,
            exploration_level=exploration_level,
            preferred_formality_band=preferred_formality_band,
            preferred_formality_range=preferred_formality_range,
        )

        chosen: Dict[Slot, WardrobeItem] = {}
        for slot in plan.required:
            chosen[slot] = self.selector.select_for_slot(
                slot, catalog, weather_context, chosen, **select_kwargs
            )

        plan = self.policy.plan_slots(weather_context, available, chosen)
        self.logger.debug(
            "Slot plan",
            band=weather_context.band,
            target_weight=weather_context.target_weight,
            conditional=list(plan.conditional),
        )
        for slot in plan.conditional:
            item = self.selector.select_for_slot(
                slot, catalog, weather_context, chosen, **select_kwargs
            )
            if item is not None:
                chosen[slot] = item

        return self.build_outfit(
            chosen, catalog, weather_context, formality_range=preferred_formality_range,
        )

    def regenerate_outfit(
        self,
        catalog: Iterable[WardrobeItem],
        weather_context: WeatherContext,
        *,
        previous_outfit: Optional[GeneratedOutfit] = None,
        exclude_items: Iterable[str] = (),
        variation_seed: Optional[str] = None,
        exploration_level: float = 0.0,
        preferred_formality_band: Optional[Union[FormalityBand, str]] = None,
        preferred_formality_range: Optional[FormalityRange] = None,
    ) -> GeneratedOutfit:
        """Same pipeline; a previous outfit's items are biased against."""
        excluded = set(exclude_items)
        if previous_outfit is not None:
            excluded.update(previous_outfit.item_ids)
        return self.generate_outfit(
            catalog,
            weather_context,
            exclude_items=excluded,
            variation_seed=variation_seed,
            exploration_level=exploration_level,
            preferred_formality_band=preferred_formality_band,
            preferred_formality_range=preferred_formality_range,
        )

    # ------------------------------------------------------------------
    # Shared with the swap engine
    # ------------------------------------------------------------------

    def is_swappable(
        self,
        slot: Slot,
        items: Mapping[Slot, WardrobeItem],
        catalog: List[WardrobeItem],
        context: WeatherContext,
        formality_range: Optional[FormalityRange] = None,
    ) -> bool:
        """Whether another eligible item exists for ``slot`` within ``formality_range``."""
        alternative = self.selector.select_for_slot(
            slot,
            catalog,
            context,
            chosen_so_far={s: i for s, i in items.items() if s != slot},
            exclude_items=(items[slot].id,),
            preferred_formality_range=formality_range,
            strict_exclusion=True,
        )
        return alternative is not None

    def build_outfit(
        self,
        items: Mapping[Slot, WardrobeItem],
        catalog: List[WardrobeItem],
        context: WeatherContext,
        formality_range: Optional[FormalityRange] = None,
    ) -> GeneratedOutfit:
        """Swappable flags, scores, ids and timestamp for a filled slot map."""
        ordered = {slot: items[slot] for slot in SLOT_ORDER if slot in items}
        swappable = {
            slot: self.is_swappable(slot, ordered, catalog, context, formality_range)
            for slot in ordered
        }
        return GeneratedOutfit(
            items=ordered,
            swappable=swappable,
            item_ids=[item.id for item in ordered.values()],
            scores=self.scorer.score(ordered, context),
            weather_context=context,
            generated_at=datetime.now(timezone.utc),
            formality_range=formality_range,
        )


# =============================================================================
# Singleton & module-level API
# =============================================================================

_assembler: Optional[OutfitAssembler] = None
_assembler_lock = threading.Lock()


def get_outfit_assembler() -> OutfitAssembler:
    """Get or create OutfitAssembler singleton (thread-safe)."""
    global _assembler
    if _assembler is None:
        with _assembler_lock:
            if _assembler is None:
                _assembler = OutfitAssembler.from_settings(get_settings())
    return _assembler


def generate_outfit(
    catalog: Iterable[WardrobeItem], weather_context: WeatherContext, **kwargs,
) -> GeneratedOutfit:
    return get_outfit_assembler().generate_outfit(catalog, weather_context, **kwargs)


def regenerate_outfit(
    catalog: Iterable[WardrobeItem], weather_context: WeatherContext, **kwargs,
) -> GeneratedOutfit:
    return get_outfit_assembler().regenerate_outfit(catalog, weather_context, **kwargs)
