"""
Variation Controller.

Caller-side loop that keeps asking the assembler for outfits until one is
new to the user and matches the requested formality target:

    attempt 0..N-1:
        seed = f"{base_seed}:{attempt}"
        outfit = generate(..., variation_seed=seed, exploration_level=0.8)
        accept if  >= min items
               and shirt, pants, shoes present
               and formality target satisfied
               and signature unseen
        otherwise remember the signature and retry

The assembler never remembers previous outputs; the set of seen
signatures is supplied by the caller.
"""

from enum import Enum
from typing import Iterable, List, Mapping, Optional, Set, Tuple

from config.settings import Settings, get_settings
from core.logging import LoggerMixin, bind_context, unbind_context
from services.errors import VariationExhausted
from services.outfit_assembler import OutfitAssembler, get_outfit_assembler
from wardrobe.enrichment import FormalityBand
from wardrobe.models import REQUIRED_SLOTS, GeneratedOutfit, Slot, WardrobeItem, WeatherContext

FORMALITY_CHECK_TOLERANCE = 1


def outfit_signature(item_ids: Iterable[str]) -> str:
    """Order-independent identity of an item combination."""
    return "|".join(sorted(item_ids))


class FormalityTarget(str, Enum):
    CASUAL = "casual"
    SMART = "smart"
    FORMAL = "formal"

    def formality_range(self) -> Tuple[int, int]:
        return _TARGET_RANGES[self]

    def formality_band(self) -> FormalityBand:
        return _TARGET_BANDS[self]


_TARGET_RANGES = {
    FormalityTarget.CASUAL: (1, 4),
    FormalityTarget.SMART: (4, 7),
    FormalityTarget.FORMAL: (7, 10),
}

_TARGET_BANDS = {
    FormalityTarget.CASUAL: FormalityBand.CASUAL,
    FormalityTarget.SMART: FormalityBand.SMART_CASUAL,
    FormalityTarget.FORMAL: FormalityBand.REFINED,
}


def formality_range_mismatch(
    target: FormalityTarget, items: Mapping[Slot, WardrobeItem],
) -> bool:
    """
    True when the core items (shirt, pants, shoes) miss the target.

    Every core item must sit inside the target range (tolerance 1), then:
      casual  - nothing above 7
      smart   - shirt, pants, shoes not below 3; shoes not above 8
      formal  - at least two core items >= 7, shoes >= 7, shirt >= 6
    """
    target = FormalityTarget(target)
    core = {slot: items[slot] for slot in REQUIRED_SLOTS if slot in items}
    if not core:
        return True

    low, high = target.formality_range()
    if any(
        not (low - FORMALITY_CHECK_TOLERANCE <= item.formality <= high + FORMALITY_CHECK_TOLERANCE)
        for item in core.values()
    ):
        return True

    def score(slot: Slot) -> int:
        item = core.get(slot)
        return item.formality if item is not None else 5

    shirt, pants, shoes = score(Slot.SHIRT), score(Slot.PANTS), score(Slot.SHOES)

    if target == FormalityTarget.CASUAL:
        return max(shirt, pants, shoes) > 7
    if target == FormalityTarget.SMART:
        return shoes < 3 or shoes > 8 or shirt < 3 or pants < 3
    refined = sum(1 for s in (shirt, pants, shoes) if s >= 7)
    return refined < 2 or shoes < 7 or shirt < 6


class VariationController(LoggerMixin):

    def __init__(
        self,
        assembler: Optional[OutfitAssembler] = None,
        max_attempts: int = 8,
        min_items: int = 4,
        exploration_level: float = 0.8,
    ) -> None:
        self.assembler = assembler or OutfitAssembler()
        self.max_attempts = max_attempts
        self.min_items = min_items
        self.exploration_level = exploration_level

    @classmethod
    def from_settings(
        cls, settings: Settings, assembler: Optional[OutfitAssembler] = None,
    ) -> "VariationController":
        return cls(
            assembler=assembler or OutfitAssembler.from_settings(settings),
            max_attempts=settings.variation_max_attempts,
            min_items=settings.variation_min_items,
            exploration_level=settings.variation_exploration_level,
        )

    def is_acceptable(
        self,
        outfit: GeneratedOutfit,
        target: Optional[FormalityTarget],
        seen: Iterable[str],
    ) -> bool:
        if len(outfit.item_ids) < self.min_items:
            return False
        if any(outfit.get(slot) is None for slot in REQUIRED_SLOTS):
            return False
        if target is not None and formality_range_mismatch(target, outfit.items):
            return False
        return outfit.signature not in seen

    def find_variation(
        self,
        catalog: Iterable[WardrobeItem],
        weather_context: WeatherContext,
        *,
        base_seed: str,
        target: Optional[FormalityTarget] = None,
        seen_signatures: Iterable[str] = (),
        exclude_items: Iterable[str] = (),
    ) -> GeneratedOutfit:
        """
        First acceptable outfit within ``max_attempts`` seeded attempts.

        Raises:
            MissingRequiredCategory: the catalog cannot fill a required slot
            VariationExhausted: every attempt was rejected
        """
        target = FormalityTarget(target) if target is not None else None
        bind_context(base_seed=base_seed, formality_target=target)
        try:
            return self._search(
                list(catalog), weather_context, base_seed, target,
                set(seen_signatures), exclude_items,
            )
        finally:
            unbind_context("base_seed", "formality_target")

    def _search(
        self,
        catalog: List[WardrobeItem],
        weather_context: WeatherContext,
        base_seed: str,
        target: Optional[FormalityTarget],
        exhausted: Set[str],
        exclude_items: Iterable[str],
    ) -> GeneratedOutfit:
        band = target.formality_band() if target else None
        formality_range = target.formality_range() if target else None

        for attempt in range(self.max_attempts):
            outfit = self.assembler.generate_outfit(
                catalog,
                weather_context,
                exclude_items=exclude_items,
                variation_seed=f"{base_seed}:{attempt}",
                exploration_level=self.exploration_level,
                preferred_formality_band=band,
                preferred_formality_range=formality_range,
            )
            if self.is_acceptable(outfit, target, exhausted):
                self.logger.debug(
                    "Variation found", attempt=attempt, signature=outfit.signature,
                )
                return outfit
            exhausted.add(outfit.signature)

        self.logger.warning(
            "Variation attempts exhausted", attempts=self.max_attempts, seen=len(exhausted),
        )
        raise VariationExhausted(self.max_attempts, exhausted)


def get_variation_controller() -> VariationController:
    """Controller sharing the assembler singleton, configured from settings."""
    return VariationController.from_settings(get_settings(), assembler=get_outfit_assembler())
