"""
Tests for slot planning.
"""

import pytest

from services.category_policy import CategoryPolicy, SlotPlan, available_slots
from wardrobe.models import CONDITIONAL_SLOTS, REQUIRED_SLOTS, Slot, WeatherContext

ALL_SLOTS = set(REQUIRED_SLOTS) | set(CONDITIONAL_SLOTS)


def _ctx(band: str, target_weight: int) -> WeatherContext:
    return WeatherContext(**{f"is_{band}": True}, target_weight=target_weight)


@pytest.fixture
def policy():
    return CategoryPolicy()


class TestAvailableSlots:

    def test_ignores_inactive(self, make_item):
        catalog = [
            make_item("a", "shirt"),
            make_item("b", "watch", active=False),
        ]
        assert available_slots(catalog) == {Slot.SHIRT}


class TestPlanSlots:

    def test_required_always_planned(self, policy):
        plan = policy.plan_slots(_ctx("hot", 0), set())
        assert plan.required == (Slot.SHIRT, Slot.PANTS, Slot.SHOES)
        assert plan.conditional == ()

    @pytest.mark.parametrize("weight,expected", [(0, False), (1, False), (2, True), (3, True)])
    def test_jacket_by_target_weight(self, policy, weight, expected):
        plan = policy.plan_slots(_ctx("mild", weight), ALL_SLOTS)
        assert (Slot.JACKET in plan.conditional) is expected

    def test_jacket_needs_catalog_item(self, policy):
        plan = policy.plan_slots(_ctx("cold", 3), ALL_SLOTS - {Slot.JACKET})
        assert Slot.JACKET not in plan.conditional

    @pytest.mark.parametrize("band,expected", [
        ("cold", True), ("mild", True), ("warm", True), ("hot", False),
    ])
    def test_undershirt_never_when_hot(self, policy, band, expected):
        plan = policy.plan_slots(_ctx(band, 1), ALL_SLOTS)
        assert (Slot.UNDERSHIRT in plan.conditional) is expected

    def test_belt_needs_chosen_lower_half(self, policy):
        plan = policy.plan_slots(_ctx("mild", 1), ALL_SLOTS)
        assert Slot.BELT not in plan.conditional

    @pytest.mark.parametrize("pants_f,shoes_f,expected", [
        (5, 1, True),
        (4, 6, True),
        (4, 5, False),
        (None, None, True),  # both default to 5
        (2, None, False),
    ])
    def test_belt_formality_rule(self, policy, make_item, pants_f, shoes_f, expected):
        chosen = {
            Slot.PANTS: make_item("p", "pants", formality_score=pants_f),
            Slot.SHOES: make_item("s", "shoes", formality_score=shoes_f),
        }
        plan = policy.plan_slots(_ctx("mild", 1), ALL_SLOTS, chosen)
        assert (Slot.BELT in plan.conditional) is expected

    def test_belt_needs_catalog_item(self, policy, make_item):
        chosen = {
            Slot.PANTS: make_item("p", "pants", formality_score=8),
            Slot.SHOES: make_item("s", "shoes", formality_score=8),
        }
        plan = policy.plan_slots(_ctx("mild", 1), ALL_SLOTS - {Slot.BELT}, chosen)
        assert Slot.BELT not in plan.conditional

    def test_watch_whenever_available(self, policy):
        assert Slot.WATCH in policy.plan_slots(_ctx("hot", 0), {Slot.WATCH}).conditional
        assert Slot.WATCH not in policy.plan_slots(_ctx("hot", 0), set()).conditional

    def test_conditional_order(self, policy, make_item):
        chosen = {
            Slot.PANTS: make_item("p", "pants", formality_score=7),
            Slot.SHOES: make_item("s", "shoes", formality_score=7),
        }
        plan = policy.plan_slots(_ctx("cold", 3), ALL_SLOTS, chosen)
        assert plan.conditional == (Slot.JACKET, Slot.UNDERSHIRT, Slot.BELT, Slot.WATCH)
        assert plan.slots == REQUIRED_SLOTS + plan.conditional

    def test_plan_is_value_object(self):
        assert SlotPlan() == SlotPlan(required=REQUIRED_SLOTS, conditional=())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
