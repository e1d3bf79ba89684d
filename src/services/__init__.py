"""
Services module for outfit composition.

Provides outfit generation, single-slot swaps and the caller-side
variation loop.
"""

from services.errors import (
    MissingRequiredCategory,
    NoAlternativeAvailable,
    OutfitEngineError,
    SlotNotPresent,
    VariationExhausted,
)
from services.category_policy import CategoryPolicy, SlotPlan, available_slots
from services.candidate_selector import CandidateSelector
from services.outfit_assembler import (
    OutfitAssembler,
    generate_outfit,
    get_outfit_assembler,
    regenerate_outfit,
)
from services.swap_engine import SwapEngine, get_swap_engine, swap_item
from services.variation import (
    FormalityTarget,
    VariationController,
    formality_range_mismatch,
    get_variation_controller,
    outfit_signature,
)

__all__ = [
    "MissingRequiredCategory",
    "NoAlternativeAvailable",
    "OutfitEngineError",
    "SlotNotPresent",
    "VariationExhausted",
    "CategoryPolicy",
    "SlotPlan",
    "available_slots",
    "CandidateSelector",
    "OutfitAssembler",
    "generate_outfit",
    "get_outfit_assembler",
    "regenerate_outfit",
    "SwapEngine",
    "get_swap_engine",
    "swap_item",
    "FormalityTarget",
    "VariationController",
    "formality_range_mismatch",
    "get_variation_controller",
    "outfit_signature",
]
