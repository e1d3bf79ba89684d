"""
Pydantic models for the outfit engine.

Models cover:
- Slot / Season enumerations
- WardrobeItem catalog records (immutable)
- WeatherContext snapshots (immutable, validated band flags)
- Compatibility scores and the GeneratedOutfit result
"""

from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from config.constants import DEFAULT_FORMALITY_SCORE


# =============================================================================
# Enums
# =============================================================================

class Slot(str, Enum):
    """Clothing role an outfit may or must fill."""
    SHIRT = "shirt"
    PANTS = "pants"
    SHOES = "shoes"
    JACKET = "jacket"
    UNDERSHIRT = "undershirt"
    BELT = "belt"
    WATCH = "watch"


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


REQUIRED_SLOTS: Tuple[Slot, ...] = (Slot.SHIRT, Slot.PANTS, Slot.SHOES)
CONDITIONAL_SLOTS: Tuple[Slot, ...] = (Slot.JACKET, Slot.UNDERSHIRT, Slot.BELT, Slot.WATCH)
SLOT_ORDER: Tuple[Slot, ...] = REQUIRED_SLOTS + CONDITIONAL_SLOTS

# Either of these satisfies the downstream "torso core" check
TORSO_CORE_SLOTS: FrozenSet[Slot] = frozenset({Slot.SHIRT, Slot.UNDERSHIRT})


def pair_key(a: Slot, b: Slot) -> str:
    """Key for an unordered slot pair, e.g. ``"shirt-pants"``."""
    if SLOT_ORDER.index(a) > SLOT_ORDER.index(b):
        a, b = b, a
    return f"{a.value}-{b.value}"


def _to_tag_set(v) -> FrozenSet[str]:
    if v is None:
        return frozenset()
    if isinstance(v, str):
        v = [v]
    return frozenset(str(t).strip() for t in v if t and str(t).strip())


# =============================================================================
# Catalog
# =============================================================================

class WardrobeItem(BaseModel):
    """One catalog record. Supplied by the caller, never mutated."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    slot: Slot = Field(..., validation_alias=AliasChoices("slot", "category"))
    name: str = ""
    subcategory: Optional[str] = None   # shorts, chinos, boots, polo, ...
    brand: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None
    formality_score: Optional[int] = Field(None, ge=1, le=10)
    capsule_tags: FrozenSet[str] = Field(default_factory=frozenset)
    season: FrozenSet[str] = Field(default_factory=frozenset)
    active: bool = True

    @field_validator("slot", mode="before")
    @classmethod
    def parse_slot(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("capsule_tags", "season", mode="before")
    @classmethod
    def parse_tags(cls, v):
        return _to_tag_set(v)

    @property
    def formality(self) -> int:
        """Formality score with the neutral midpoint for missing values."""
        if self.formality_score is None:
            return DEFAULT_FORMALITY_SCORE
        return self.formality_score


# =============================================================================
# Weather / Context
# =============================================================================

class WeatherContext(BaseModel):
    """
    Normalized weather snapshot for one generation call.

    Exactly one temperature band flag is true. ``target_weight`` is the
    layering need from 0 (hot) to 3 (cold). Temperatures are Fahrenheit.
    """
    model_config = ConfigDict(frozen=True)

    is_cold: bool = False
    is_mild: bool = False
    is_warm: bool = False
    is_hot: bool = False

    is_rain_likely: bool = False
    precip_chance: float = Field(0.0, ge=0.0, le=1.0)

    target_weight: int = Field(..., ge=0, le=3)

    current_temp: float = 65.0
    high_temp: float = 70.0
    low_temp: float = 60.0
    daily_swing: float = Field(0.0, ge=0.0)
    has_large_swing: bool = False

    # Explicit season overrides the temperature-derived one
    season: Optional[Season] = None

    @model_validator(mode="after")
    def check_bands(self) -> "WeatherContext":
        bands = [self.is_cold, self.is_mild, self.is_warm, self.is_hot]
        if sum(1 for b in bands if b) != 1:
            raise ValueError(
                "Exactly one temperature band (is_cold, is_mild, is_warm, is_hot) must be true"
            )
        if self.high_temp < self.low_temp:
            raise ValueError("high_temp must be greater than or equal to low_temp")
        return self

    @property
    def band(self) -> str:
        if self.is_cold:
            return "cold"
        if self.is_mild:
            return "mild"
        if self.is_warm:
            return "warm"
        return "hot"

    @property
    def active_season(self) -> Season:
        if self.season is not None:
            return self.season
        if self.is_cold:
            return Season.WINTER
        if self.is_hot:
            return Season.SUMMER
        if self.current_temp < 65:
            return Season.FALL
        return Season.SPRING


# =============================================================================
# Scores
# =============================================================================

class CompatibilityScore(BaseModel):
    """Four axis scores plus their weighted combination, all in [0, 1]."""
    model_config = ConfigDict(frozen=True)

    weather_fit: float = Field(..., ge=0.0, le=1.0)
    formality_alignment: float = Field(..., ge=0.0, le=1.0)
    color_harmony: float = Field(..., ge=0.0, le=1.0)
    capsule_cohesion: float = Field(..., ge=0.0, le=1.0)
    total: float = Field(..., ge=0.0, le=1.0)


class Scores(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall: CompatibilityScore
    pairwise: Dict[str, CompatibilityScore] = Field(default_factory=dict)


# =============================================================================
# Result
# =============================================================================

class GeneratedOutfit(BaseModel):
    """
    One composed outfit.

    ``items`` only holds filled slots; use :meth:`get` to handle absent
    slots explicitly.
    """
    model_config = ConfigDict(frozen=True)

    items: Dict[Slot, WardrobeItem]
    swappable: Dict[Slot, bool]
    item_ids: List[str]
    scores: Scores
    weather_context: WeatherContext
    generated_at: datetime
    # Core-slot formality range the outfit was built under; swaps keep to it
    formality_range: Optional[Tuple[int, int]] = None

    @model_validator(mode="after")
    def check_invariants(self) -> "GeneratedOutfit":
        missing = [s.value for s in REQUIRED_SLOTS if s not in self.items]
        if missing:
            raise ValueError(f"Required slots missing: {', '.join(missing)}")
        for slot, item in self.items.items():
            if item.slot != slot:
                raise ValueError(f"Item {item.id} belongs to {item.slot.value}, not {slot.value}")
        if len(set(self.item_ids)) != len(self.item_ids):
            raise ValueError("item_ids contains duplicates")
        if set(self.item_ids) != {item.id for item in self.items.values()}:
            raise ValueError("item_ids must match the ids of the slot map")
        if set(self.swappable) != set(self.items):
            raise ValueError("swappable must have exactly one entry per filled slot")
        return self

    def get(self, slot: Slot) -> Optional[WardrobeItem]:
        return self.items.get(slot)

    @property
    def slots(self) -> List[Slot]:
        """Filled slots in canonical order."""
        return [s for s in SLOT_ORDER if s in self.items]

    @property
    def signature(self) -> str:
        return "|".join(sorted(self.item_ids))
