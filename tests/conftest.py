"""
Pytest configuration and shared fixtures for the outfit engine tests.
"""
import os
import sys
from typing import Callable, List

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))

from wardrobe.models import WardrobeItem, WeatherContext
from wardrobe.weather import normalize_weather_context


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

@pytest.fixture
def make_item() -> Callable[..., WardrobeItem]:
    """Factory for WardrobeItem with sensible defaults."""
    def _make(id: str, slot: str, name: str = "", **kwargs) -> WardrobeItem:
        return WardrobeItem(id=id, slot=slot, name=name or id, **kwargs)
    return _make


@pytest.fixture
def core_catalog(make_item) -> List[WardrobeItem]:
    """One item per required slot."""
    return [
        make_item("shirt-1", "shirt", "Navy Oxford Shirt", formality_score=6),
        make_item("pants-1", "pants", "Grey Chinos", formality_score=5),
        make_item("shoes-1", "shoes", "Brown Derbies", formality_score=7),
    ]


@pytest.fixture
def full_catalog(make_item) -> List[WardrobeItem]:
    """Several items for every slot, with mixed metadata."""
    return [
        make_item("s-navy-oxford", "shirt", "Navy Oxford Shirt", formality_score=6,
                  capsule_tags=["workweek"], season=["spring", "fall"], material="oxford"),
        make_item("s-white-tee", "shirt", "White T-Shirt", subcategory="tee",
                  formality_score=2, season=["summer"], material="cotton"),
        make_item("s-grey-flannel", "shirt", "Grey Flannel Shirt", formality_score=5,
                  season=["fall", "winter"], material="flannel"),
        make_item("p-grey-chinos", "pants", "Grey Chinos", subcategory="chinos",
                  formality_score=6, capsule_tags=["workweek"], season=["spring", "fall"]),
        make_item("p-khaki-shorts", "pants", "Khaki Shorts", subcategory="shorts",
                  formality_score=2, season=["summer"]),
        make_item("p-dark-jeans", "pants", "Dark Blue Jeans", subcategory="jeans",
                  formality_score=4, season=["all season"]),
        make_item("sh-brown-loafers", "shoes", "Brown Leather Loafers", subcategory="loafers",
                  formality_score=7, material="leather", capsule_tags=["workweek"]),
        make_item("sh-white-sneakers", "shoes", "White Sneakers", subcategory="sneakers",
                  formality_score=3, season=["spring", "summer"]),
        make_item("sh-black-boots", "shoes", "Black Chelsea Boots", subcategory="boots",
                  formality_score=6, season=["fall", "winter"]),
        make_item("j-navy-blazer", "jacket", "Navy Blazer", subcategory="blazer",
                  formality_score=7, capsule_tags=["workweek"]),
        make_item("j-olive-parka", "jacket", "Olive Parka", subcategory="parka",
                  formality_score=3, season=["winter"]),
        make_item("u-white", "undershirt", "White Undershirt", formality_score=3),
        make_item("b-brown", "belt", "Brown Leather Belt", formality_score=6),
        make_item("b-black", "belt", "Black Leather Belt", formality_score=6),
        make_item("w-steel", "watch", "Steel Field Watch", formality_score=6),
    ]


# ============================================================================
# Fixtures: Weather contexts
# ============================================================================

@pytest.fixture
def mild_context() -> WeatherContext:
    return normalize_weather_context(current_temp=65, high_temp=70, low_temp=58, precip_chance=0.1)


@pytest.fixture
def cold_context() -> WeatherContext:
    return normalize_weather_context(current_temp=38, high_temp=42, low_temp=30, precip_chance=0.0)


@pytest.fixture
def hot_context() -> WeatherContext:
    return normalize_weather_context(current_temp=94, high_temp=98, low_temp=80, precip_chance=0.0)


@pytest.fixture
def rainy_context() -> WeatherContext:
    return normalize_weather_context(current_temp=60, high_temp=63, low_temp=55, precip_chance=0.8)


# ============================================================================
# Fixtures: Engine components
# ============================================================================

@pytest.fixture
def assembler():
    from services.outfit_assembler import OutfitAssembler
    return OutfitAssembler()


@pytest.fixture
def swap_engine(assembler):
    from services.swap_engine import SwapEngine
    return SwapEngine(assembler)


# ============================================================================
# Markers auto-use
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "slow: marks tests as slow")
