"""Tests for derived views over finished levels."""

from __future__ import annotations

import pytest

from levels.derived import (
    HospitalTierTotal,
    dig_sites_common_equivalent,
    find_market_for_resource,
    hospital_tier_totals,
    page_name,
)
from levels.dto import DigSite, DigSiteRewards, Hospital, Location, Market

pytestmark = pytest.mark.unit

HERE = Location(name="Riverlands")


def test_hospital_tier_totals_caps_each_hospital_at_its_max_level() -> None:
    """Sum armies saved and cumulative upgrade costs per tier."""

    hospitals = [
        Hospital(base_army_saved=100, upgrade_costs=(1_000, 2_000), location=HERE),
        Hospital(base_army_saved=10, upgrade_costs=(), location=HERE),
    ]

    totals = hospital_tier_totals(hospitals)

    assert [t.level for t in totals] == [1, 2, 3]
    assert totals[0] == HospitalTierTotal(level=1, armies_saved=pytest.approx(110.0), upgrade_cost=0)
    assert totals[1].armies_saved == pytest.approx(190.0 + 10.0)
    assert totals[1].upgrade_cost == 1_000
    assert totals[2].armies_saved == pytest.approx(100 * 3.4 + 10.0)
    assert totals[2].upgrade_cost == 3_000


def test_hospital_tier_totals_empty() -> None:
    """No hospitals means no tiers."""

    assert hospital_tier_totals([]) == []


def test_dig_sites_common_equivalent_weights_tiers() -> None:
    """Weight tiers as epic 125, rare 25, uncommon 5, common 1, poor 1/5."""

    dig_sites = [
        DigSite(location=HERE, cost=1, time=3_600, rewards=DigSiteRewards(poor=50, common=50)),
        DigSite(location=HERE, cost=1, time=3_600, rewards=DigSiteRewards(rare=4, epic=1)),
    ]

    assert dig_sites_common_equivalent(dig_sites) == pytest.approx((10 + 50 + 100 + 125) / 100)
    assert dig_sites_common_equivalent([]) == 0


def test_find_market_for_resource_returns_first_match() -> None:
    """Return the first market trading a resource, or None."""

    first = Market(location=HERE, name="Mixtup", resources=("Iron", "Wood", "Stone", "Salt"))
    second = Market(location=HERE, name="Twisometo", resources=("Iron", "Gold", "Silk", "Tea"))

    assert find_market_for_resource([first, second], "Iron") is first
    assert find_market_for_resource([first, second], "Gold") is second
    assert find_market_for_resource([first, second], "Ruby") is None


def test_page_name_builds_slug() -> None:
    """Drop apostrophes, dash other symbols, collapse runs, lowercase."""

    assert page_name("Siege of Feldmere") == "siege-of-feldmere"
    assert page_name("Caesar's Rise & Fall") == "caesars-rise-fall"
