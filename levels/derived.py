"""Derived views over finished levels.

These helpers compute the secondary numbers shown next to a level (hospital
totals per upgrade tier, dig-site value) without mutating the model.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from .dto import DigSite, Hospital, Market

_NON_ALNUM_RE = re.compile(r"[^0-9a-z]", re.IGNORECASE)
_DASH_RUN_RE = re.compile(r"-+")


@dataclass(frozen=True, slots=True)
class HospitalTierTotal:
    """Combined hospital figures when every hospital is upgraded to a tier.

    Attributes:
        level: Hospital tier (1-based). Hospitals that cap out earlier stay at
            their own maximum.
        armies_saved: Sum of armies saved per territory across hospitals.
        upgrade_cost: Total cost of reaching this tier across hospitals.
    """

    level: int
    armies_saved: float
    upgrade_cost: float


def hospital_tier_totals(hospitals: Sequence[Hospital]) -> list[HospitalTierTotal]:
    """Return combined hospital totals for tiers 1..max over all hospitals.

    Args:
        hospitals: Hospitals of a single level.

    Returns:
        One entry per tier up to the highest `max_level`; empty when there are
        no hospitals.
    """

    if not hospitals:
        return []

    max_level = max(hospital.max_level for hospital in hospitals)
    totals: list[HospitalTierTotal] = []
    for tier in range(1, max_level + 1):
        armies = sum(hospital.army_saved_at_level(min(tier, hospital.max_level)) for hospital in hospitals)
        cost = sum(sum(hospital.upgrade_costs[: tier - 1]) for hospital in hospitals)
        totals.append(HospitalTierTotal(level=tier, armies_saved=armies, upgrade_cost=cost))
    return totals


def dig_sites_common_equivalent(dig_sites: Sequence[DigSite]) -> float:
    """Return the expected rewards of one dig at each site, in common rewards."""

    total = 0.0
    for dig_site in dig_sites:
        rewards = dig_site.rewards
        # Weights in common-reward units: epic 125, rare 25, uncommon 5, poor 1/5.
        total += rewards.epic * 125 + rewards.rare * 25 + rewards.uncommon * 5 + rewards.common + rewards.poor / 5
    return total / 100


def find_market_for_resource(markets: Sequence[Market], resource: str) -> Market | None:
    """Return the first market that trades `resource`, if any."""

    for market in markets:
        if resource in market.resources:
            return market
    return None


def page_name(level_name: str) -> str:
    """Build a URL-safe page slug from a level name.

    Apostrophes are dropped, other non-alphanumerics become dashes, dash runs
    collapse, and the result is lowercased.
    """

    cleaned = _NON_ALNUM_RE.sub("-", level_name.replace("'", ""))
    return _DASH_RUN_RE.sub("-", cleaned).lower()
