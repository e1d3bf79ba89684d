"""
Outfit engine exceptions.

Raised synchronously where the condition is detected and propagated to
the caller. Scoring never raises; the selector never raises for
exclusions.
"""

from typing import Iterable, List, Optional

from wardrobe.models import Slot


class OutfitEngineError(Exception):
    """Base class for all outfit engine errors."""
    pass


class MissingRequiredCategory(OutfitEngineError):
    """A required slot (shirt, pants, shoes) has no eligible candidates."""

    def __init__(self, missing: Iterable[Slot]):
        self.missing: List[Slot] = list(missing)
        names = ", ".join(s.value for s in self.missing)
        super().__init__(f"No eligible items for required categories: {names}")


class SlotNotPresent(OutfitEngineError):
    """A swap targeted a slot the outfit does not fill."""

    def __init__(self, slot: str):
        self.slot = slot
        super().__init__(f"Outfit has no item in slot '{slot}'")


class NoAlternativeAvailable(OutfitEngineError):
    """A swap found no other eligible item for the slot."""

    def __init__(self, slot: Slot):
        self.slot = slot
        super().__init__(f"No alternative item available for slot '{slot.value}'")


class VariationExhausted(OutfitEngineError):
    """The variation retry loop hit its attempt cap without a fresh outfit."""

    def __init__(self, attempts: int, seen: Optional[Iterable[str]] = None):
        self.attempts = attempts
        self.seen = set(seen or ())
        super().__init__(
            f"No new outfit variation after {attempts} attempts "
            f"({len(self.seen)} combinations seen)"
        )
