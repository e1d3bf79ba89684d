"""
Swap Engine.

Replaces the item in one slot of an existing outfit, keeping every other
slot's item as-is, and rebuilds scores and swappable flags from scratch.
"""

import threading
from typing import Iterable, Optional, Union

from core.logging import LoggerMixin
from services.errors import NoAlternativeAvailable, SlotNotPresent
from services.outfit_assembler import OutfitAssembler, get_outfit_assembler
from wardrobe.models import GeneratedOutfit, Slot, WardrobeItem, WeatherContext


def _parse_slot(category: Union[Slot, str]) -> Slot:
    if isinstance(category, Slot):
        return category
    try:
        return Slot(str(category).strip().lower())
    except ValueError:
        raise SlotNotPresent(str(category)) from None


class SwapEngine(LoggerMixin):

    def __init__(self, assembler: Optional[OutfitAssembler] = None) -> None:
        self.assembler = assembler or OutfitAssembler()

    def swap_item(
        self,
        current_outfit: GeneratedOutfit,
        category: Union[Slot, str],
        catalog: Iterable[WardrobeItem],
        weather_context: WeatherContext,
        *,
        variation_seed: Optional[str] = None,
        exploration_level: float = 0.0,
    ) -> GeneratedOutfit:
        """
        Swap the item in ``category`` for the best alternative.

        The current item is never returned again. Pass a
        ``variation_seed`` with an ``exploration_level`` to cycle through
        alternatives on repeated swaps. An outfit generated under a
        formality range only swaps in items within that range.

        Raises:
            SlotNotPresent: the outfit has no item in that slot
            NoAlternativeAvailable: no other eligible item exists
        """
        slot = _parse_slot(category)
        current = current_outfit.get(slot)
        if current is None:
            raise SlotNotPresent(slot.value)

        catalog = list(catalog)
        neighbours = {s: item for s, item in current_outfit.items.items() if s != slot}
        replacement = self.assembler.selector.select_for_slot(
            slot,
            catalog,
            weather_context,
            chosen_so_far=neighbours,
            exclude_items=(current.id,),
            variation_seed=variation_seed,
            exploration_level=exploration_level,
            preferred_formality_range=current_outfit.formality_range,
            strict_exclusion=True,
        )
        if replacement is None:
            raise NoAlternativeAvailable(slot)

        self.logger.debug(
            "Item swapped", slot=slot, old_id=current.id, new_id=replacement.id,
        )
        items = dict(current_outfit.items)
        items[slot] = replacement
        return self.assembler.build_outfit(
            items, catalog, weather_context, formality_range=current_outfit.formality_range,
        )


_swap_engine: Optional[SwapEngine] = None
_swap_engine_lock = threading.Lock()


def get_swap_engine() -> SwapEngine:
    """Get or create SwapEngine singleton (thread-safe)."""
    global _swap_engine
    if _swap_engine is None:
        with _swap_engine_lock:
            if _swap_engine is None:
                _swap_engine = SwapEngine(get_outfit_assembler())
    return _swap_engine


def swap_item(
    current_outfit: GeneratedOutfit,
    category: Union[Slot, str],
    catalog: Iterable[WardrobeItem],
    weather_context: WeatherContext,
    **kwargs,
) -> GeneratedOutfit:
    return get_swap_engine().swap_item(current_outfit, category, catalog, weather_context, **kwargs)
