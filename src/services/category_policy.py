"""
Category Policy.

Decides which slots an outfit should fill for a weather context. Required
slots are always planned; conditional slots only when the context calls
for them and the catalog can supply them. Omitting a conditional slot is
never an error.
"""

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Set, Tuple

from wardrobe.models import REQUIRED_SLOTS, Slot, WardrobeItem, WeatherContext

# Belt is planned when the lower half is dressy enough to expect one
BELT_MIN_PANTS_FORMALITY = 5
BELT_MIN_SHOES_FORMALITY = 6

JACKET_MIN_TARGET_WEIGHT = 2


@dataclass(frozen=True)
class SlotPlan:
    required: Tuple[Slot, ...] = REQUIRED_SLOTS
    conditional: Tuple[Slot, ...] = field(default_factory=tuple)

    @property
    def slots(self) -> Tuple[Slot, ...]:
        return self.required + self.conditional


def available_slots(catalog: Iterable[WardrobeItem]) -> Set[Slot]:
    """Slots with at least one active item."""
    return {item.slot for item in catalog if item.active}


class CategoryPolicy:

    def plan_slots(
        self,
        context: WeatherContext,
        available: Set[Slot],
        chosen: Optional[Mapping[Slot, WardrobeItem]] = None,
    ) -> SlotPlan:
        """
        Plan required and conditional slots.

        The belt rule needs pants and shoes, so it is only evaluated when
        ``chosen`` already holds both; a first pass without them never
        plans a belt.
        """
        chosen = chosen or {}
        conditional = []

        if context.target_weight >= JACKET_MIN_TARGET_WEIGHT and Slot.JACKET in available:
            conditional.append(Slot.JACKET)

        if not context.is_hot and Slot.UNDERSHIRT in available:
            conditional.append(Slot.UNDERSHIRT)

        if Slot.BELT in available and self._wants_belt(chosen):
            conditional.append(Slot.BELT)

        if Slot.WATCH in available:
            conditional.append(Slot.WATCH)

        return SlotPlan(required=REQUIRED_SLOTS, conditional=tuple(conditional))

    @staticmethod
    def _wants_belt(chosen: Mapping[Slot, WardrobeItem]) -> bool:
        pants = chosen.get(Slot.PANTS)
        shoes = chosen.get(Slot.SHOES)
        if pants is None or shoes is None:
            return False
        return (
            pants.formality >= BELT_MIN_PANTS_FORMALITY
            or shoes.formality >= BELT_MIN_SHOES_FORMALITY
        )
