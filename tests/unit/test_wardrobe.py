"""
Tests for wardrobe models, weather normalization and item enrichment.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from wardrobe.enrichment import (
    UNKNOWN_COLOR,
    FormalityBand,
    classify_formality_band,
    infer_color,
    infer_weather_weight,
    is_neutral_color,
    is_shorts,
    resolve_color,
)
from wardrobe.models import GeneratedOutfit, Season, Slot, WardrobeItem, WeatherContext, pair_key
from wardrobe.weather import (
    calculate_daily_swing,
    classify_temperature,
    describe_weather_context,
    has_large_swing,
    is_rain_likely,
    map_temperature_to_weight,
    normalize_weather_context,
)


# =============================================================================
# Models
# =============================================================================

class TestWardrobeItem:

    def test_category_alias_and_case(self):
        item = WardrobeItem(id="x", category="Shirt", name="Shirt")
        assert item.slot == Slot.SHIRT

    def test_unknown_slot_rejected(self):
        with pytest.raises(ValidationError):
            WardrobeItem(id="x", slot="hat")

    def test_formality_defaults_to_midpoint(self):
        assert WardrobeItem(id="x", slot="shirt").formality == 5
        assert WardrobeItem(id="x", slot="shirt", formality_score=8).formality == 8

    def test_formality_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            WardrobeItem(id="x", slot="shirt", formality_score=11)

    def test_tags_parsed_to_frozensets(self):
        item = WardrobeItem(id="x", slot="shirt", capsule_tags=["work", " ", "work"], season="fall")
        assert item.capsule_tags == frozenset({"work"})
        assert item.season == frozenset({"fall"})

    def test_items_are_immutable(self):
        item = WardrobeItem(id="x", slot="shirt")
        with pytest.raises(ValidationError):
            item.name = "changed"


class TestWeatherContext:

    def test_exactly_one_band(self):
        with pytest.raises(ValidationError):
            WeatherContext(is_cold=True, is_hot=True, target_weight=1)
        with pytest.raises(ValidationError):
            WeatherContext(target_weight=1)

    def test_target_weight_bounds(self):
        with pytest.raises(ValidationError):
            WeatherContext(is_mild=True, target_weight=4)

    def test_high_not_below_low(self):
        with pytest.raises(ValidationError):
            WeatherContext(is_mild=True, target_weight=2, high_temp=50, low_temp=60)

    @pytest.mark.parametrize("flags,temp,expected", [
        ({"is_cold": True}, 40, Season.WINTER),
        ({"is_hot": True}, 95, Season.SUMMER),
        ({"is_mild": True}, 60, Season.FALL),
        ({"is_warm": True}, 80, Season.SPRING),
    ])
    def test_active_season(self, flags, temp, expected):
        ctx = WeatherContext(**flags, target_weight=1, current_temp=temp,
                             high_temp=temp, low_temp=temp)
        assert ctx.active_season == expected

    def test_explicit_season_wins(self):
        ctx = WeatherContext(is_cold=True, target_weight=3, season="fall")
        assert ctx.active_season == Season.FALL


class TestGeneratedOutfit:

    @pytest.fixture
    def parts(self, core_catalog, mild_context):
        from scoring.compatibility import CompatibilityScorer

        items = {item.slot: item for item in core_catalog}
        return dict(
            items=items,
            swappable={slot: False for slot in items},
            item_ids=[item.id for item in items.values()],
            scores=CompatibilityScorer().score(items, mild_context),
            weather_context=mild_context,
            generated_at=datetime.now(timezone.utc),
        )

    def test_valid(self, parts):
        outfit = GeneratedOutfit(**parts)
        assert outfit.get(Slot.JACKET) is None
        assert outfit.signature == "pants-1|shirt-1|shoes-1"

    def test_required_slot_missing(self, parts):
        del parts["items"][Slot.SHOES]
        with pytest.raises(ValidationError):
            GeneratedOutfit(**parts)

    def test_item_in_wrong_slot(self, parts):
        parts["items"][Slot.PANTS] = parts["items"][Slot.SHIRT]
        with pytest.raises(ValidationError):
            GeneratedOutfit(**parts)

    def test_ids_must_match(self, parts):
        parts["item_ids"] = ["shirt-1", "pants-1", "other"]
        with pytest.raises(ValidationError):
            GeneratedOutfit(**parts)

    def test_duplicate_ids(self, parts):
        parts["item_ids"] = parts["item_ids"] + ["shirt-1"]
        with pytest.raises(ValidationError):
            GeneratedOutfit(**parts)


def test_pair_key_is_canonical():
    assert pair_key(Slot.PANTS, Slot.SHIRT) == "shirt-pants"
    assert pair_key(Slot.WATCH, Slot.JACKET) == "jacket-watch"


# =============================================================================
# Weather normalization
# =============================================================================

class TestWeatherNormalization:

    @pytest.mark.parametrize("temp,band", [
        (30, "is_cold"), (54.9, "is_cold"), (55, "is_mild"), (74, "is_mild"),
        (75, "is_warm"), (89, "is_warm"), (90, "is_hot"),
    ])
    def test_classify_temperature(self, temp, band):
        bands = classify_temperature(temp)
        assert bands[band] is True
        assert sum(bands.values()) == 1

    def test_rain_threshold(self):
        assert is_rain_likely(0.35) is True
        assert is_rain_likely(0.34) is False

    def test_daily_swing(self):
        assert calculate_daily_swing(80, 55) == 25
        assert has_large_swing(20) is True
        assert has_large_swing(19) is False

    def test_temperature_weights(self):
        assert map_temperature_to_weight({"is_cold": True}) == 3
        assert map_temperature_to_weight({"is_mild": True}) == 2
        assert map_temperature_to_weight({"is_warm": True}) == 1
        assert map_temperature_to_weight({"is_hot": True}) == 0

    def test_normalize_full_forecast(self):
        ctx = normalize_weather_context(current_temp=50, high_temp=72, low_temp=45, precip_chance=0.6)

        assert ctx.is_cold is True
        assert ctx.target_weight == 3
        assert ctx.is_rain_likely is True
        assert ctx.daily_swing == 27
        assert ctx.has_large_swing is True

    def test_normalize_missing_data_is_neutral(self):
        ctx = normalize_weather_context(current_temp=None)

        assert ctx.is_mild is True
        assert ctx.target_weight == 1
        assert ctx.is_rain_likely is False

    def test_normalize_clamps_precip(self):
        assert normalize_weather_context(current_temp=70, precip_chance=1.7).precip_chance == 1.0

    def test_describe(self):
        ctx = normalize_weather_context(current_temp=62, high_temp=64, low_temp=58, precip_chance=0.4)
        assert describe_weather_context(ctx) == "mild weather and rain likely (40%)"


# =============================================================================
# Enrichment
# =============================================================================

class TestColorInference:

    @pytest.mark.parametrize("text,expected", [
        ("Navy Oxford Shirt", "navy"),
        ("Light Gray Tee", "grey"),
        ("Brown and Black Sneakers", "brown"),
        ("Greenish Cardigan", UNKNOWN_COLOR),
        ("", UNKNOWN_COLOR),
        (None, UNKNOWN_COLOR),
    ])
    def test_infer_color(self, text, expected):
        assert infer_color(text) == expected

    def test_explicit_color_wins(self, make_item):
        item = make_item("x", "shirt", "Navy Shirt", color="White")
        assert resolve_color(item) == "white"

    def test_free_text_color_kept(self, make_item):
        item = make_item("x", "shirt", "Shirt", color="Mauve")
        assert resolve_color(item) == "mauve"

    def test_neutral(self):
        assert is_neutral_color("navy") is True
        assert is_neutral_color("gray") is True
        assert is_neutral_color("red") is False


class TestFormalityBand:

    @pytest.mark.parametrize("score,band", [
        (1, FormalityBand.CASUAL), (3, FormalityBand.CASUAL),
        (4, FormalityBand.SMART_CASUAL), (6, FormalityBand.SMART_CASUAL),
        (7, FormalityBand.REFINED), (10, FormalityBand.REFINED),
        (None, FormalityBand.SMART_CASUAL),
    ])
    def test_classify(self, score, band):
        assert classify_formality_band(score) == band


class TestWeatherWeight:

    def test_subcategory_base(self, make_item):
        assert infer_weather_weight(make_item("x", "jacket", subcategory="parka")) == 3
        assert infer_weather_weight(make_item("x", "pants", subcategory="shorts")) == 0

    def test_slot_fallback(self, make_item):
        assert infer_weather_weight(make_item("x", "shoes")) == 2

    def test_season_adjustment(self, make_item):
        summer_shirt = make_item("x", "shirt", season=["summer"])
        winter_shirt = make_item("y", "shirt", season=["winter"])
        assert infer_weather_weight(summer_shirt) == 1
        assert infer_weather_weight(winter_shirt) == 3

    def test_clamped(self, make_item):
        assert infer_weather_weight(make_item("x", "jacket", subcategory="coat", season=["winter"])) == 3


class TestShorts:

    def test_subcategory_first(self, make_item):
        assert is_shorts(make_item("x", "pants", "Linen Trousers", subcategory="shorts"))
        assert not is_shorts(make_item("x", "pants", "Board Shorts", subcategory="trousers"))

    def test_name_fallback(self, make_item):
        assert is_shorts(make_item("x", "pants", "Khaki Shorts"))

    def test_only_pants(self, make_item):
        assert not is_shorts(make_item("x", "shirt", "Shorts Print Tee"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
