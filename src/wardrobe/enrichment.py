"""
Derived item attributes.

Pure helpers that read a WardrobeItem and compute what the selector and
scorer need but the catalog does not store:

- color category (explicit ``color`` first, then inferred from the name)
- formality band (casual / smart-casual / refined)
- weather weight (0 minimal .. 3 heavy coverage)
- shorts detection
"""

import math
import re
from enum import Enum
from typing import Optional

from wardrobe.models import Slot, WardrobeItem

UNKNOWN_COLOR = "unknown"

# Order matters only for spelling aliases; inference picks the earliest
# occurrence in the text.
COLOR_KEYWORDS = (
    "black", "white", "grey", "gray", "navy", "blue", "cream", "khaki",
    "brown", "tan", "green", "red", "burgundy", "olive", "charcoal",
    "beige", "camel", "stone", "taupe", "chocolate", "ivory",
)

_COLOR_ALIASES = {"gray": "grey"}

_COLOR_RE = re.compile(r"\b(" + "|".join(COLOR_KEYWORDS) + r")\b", re.IGNORECASE)

NEUTRAL_COLORS = frozenset({
    "black", "white", "grey", "navy", "cream", "khaki", "brown", "tan",
    "charcoal", "beige", "camel", "stone", "taupe", "ivory",
})


class FormalityBand(str, Enum):
    CASUAL = "casual"
    SMART_CASUAL = "smart-casual"
    REFINED = "refined"


# Base weather weight per subcategory (falls back to the slot)
_BASE_WEIGHTS = {
    "jacket": 3, "coat": 3, "parka": 3, "blazer": 2, "overshirt": 2,
    "shirt": 2, "t-shirt": 0, "tee": 0, "polo": 1, "sweater": 2, "cardigan": 2,
    "undershirt": 1,
    "pants": 2, "jeans": 2, "shorts": 0, "chinos": 2, "trousers": 2,
    "shoes": 2, "boots": 3, "sneakers": 1, "sandals": 0, "loafers": 1,
    "belt": 0, "watch": 0,
}

_SEASON_WEIGHT_ADJUSTMENTS = {"summer": -1, "winter": 1, "spring": 0, "fall": 0, "autumn": 0}


def infer_color(text: Optional[str]) -> str:
    """
    Infer a color category from free text.

    Whole words only ("Greenish" is not green); the earliest color in the
    text wins; ``gray`` is folded into ``grey``.
    """
    if not isinstance(text, str) or not text.strip():
        return UNKNOWN_COLOR
    match = _COLOR_RE.search(text)
    if not match:
        return UNKNOWN_COLOR
    color = match.group(1).lower()
    return _COLOR_ALIASES.get(color, color)


def resolve_color(item: WardrobeItem) -> str:
    """Explicit color field first, then the item name."""
    if item.color and item.color.strip():
        inferred = infer_color(item.color)
        if inferred != UNKNOWN_COLOR:
            return inferred
        return item.color.strip().lower()
    return infer_color(item.name)


def is_neutral_color(color: str) -> bool:
    return _COLOR_ALIASES.get(color, color) in NEUTRAL_COLORS


def classify_formality_band(formality_score: Optional[int]) -> FormalityBand:
    """1-3 casual, 4-6 smart-casual, 7-10 refined. Missing -> smart-casual."""
    if formality_score is None:
        return FormalityBand.SMART_CASUAL
    score = max(1, min(10, formality_score))
    if score <= 3:
        return FormalityBand.CASUAL
    if score <= 6:
        return FormalityBand.SMART_CASUAL
    return FormalityBand.REFINED


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def infer_weather_weight(item: WardrobeItem) -> int:
    """
    How warm/heavy an item is, 0 (hot weather) to 3 (cold weather).

    Base weight from the subcategory (or slot), shifted by the average
    seasonal adjustment of the item's season tags.
    """
    sub = (item.subcategory or "").strip().lower()
    weight = _BASE_WEIGHTS.get(sub, _BASE_WEIGHTS.get(item.slot.value, 2))

    adjustments = [
        _SEASON_WEIGHT_ADJUSTMENTS[s.lower()]
        for s in item.season
        if s.lower() in _SEASON_WEIGHT_ADJUSTMENTS
    ]
    if adjustments:
        weight += sum(adjustments) / len(adjustments)

    return max(0, min(3, _round_half_up(weight)))


def is_shorts(item: WardrobeItem) -> bool:
    """Pants item that denotes shorts (subcategory first, then name)."""
    if item.slot != Slot.PANTS:
        return False
    if item.subcategory:
        return "shorts" in item.subcategory.lower()
    return "shorts" in item.name.lower()

