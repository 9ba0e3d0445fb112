"""Typed model produced by level export ingestion.

Sub-entities are immutable values created once per source row. `Level` is the
mutable aggregate root that the aggregator folds rows into; once ingestion
finishes it is handed to renderers read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum

from .quantity import Number

Ingredients = dict[str, Number]


class StrikeClass(Enum):
    """Multiple-strike class required to take a territory."""

    SS = "SS"
    JS = "JS"
    TS = "TS"
    QS = "QS"


@dataclass(frozen=True, slots=True)
class Location:
    """A territory or bonus zone referenced by a row.

    Attributes:
        name: Place name with the `Territory: `/`Bonus: ` prefix removed.
        is_bonus: True when the place is a bonus zone.
        bonuses: Names of the bonus zones this place contributes to.
    """

    name: str
    is_bonus: bool = False
    bonuses: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Territory:
    """One of a level's largest territories."""

    cost: Number
    location: Location
    strike_class: StrikeClass


@dataclass(frozen=True, slots=True)
class Cache:
    """One of a level's largest army or money caches."""

    quantity: Number
    location: Location


@dataclass(frozen=True, slots=True)
class Hospital:
    """A hospital with its upgrade path.

    Attributes:
        base_army_saved: Armies saved per territory at level 1.
        upgrade_costs: Cost of each successive upgrade (level 2, 3, ...).
        location: Where the hospital is.
    """

    base_army_saved: Number
    upgrade_costs: tuple[Number, ...]
    location: Location

    @property
    def max_level(self) -> int:
        """Return the highest reachable hospital level."""

        return len(self.upgrade_costs) + 1

    def army_saved_at_level(self, level: int) -> float:
        """Return armies saved per territory at a given hospital level.

        Args:
            level: Hospital level, between 1 and `max_level` inclusive.

        Returns:
            `base_army_saved * (0.3 * level**2 + 0.7)`, unrounded.

        Raises:
            ValueError: When `level` is outside the reachable range.
        """

        if not 1 <= level <= self.max_level:
            raise ValueError(f"Hospital level {level} outside 1..{self.max_level}.")
        return self.base_army_saved * (0.3 * level * level + 0.7)


@dataclass(frozen=True, slots=True)
class Market:
    """A market and the four resources it trades."""

    location: Location
    name: str
    resources: tuple[str, str, str, str]


@dataclass(frozen=True, slots=True)
class DigSiteRewards:
    """Reward tier chances (integer percentages) for a dig site."""

    poor: int = 0
    common: int = 0
    uncommon: int = 0
    rare: int = 0
    epic: int = 0


@dataclass(frozen=True, slots=True)
class DigSite:
    """A dig site.

    Attributes:
        location: Where the dig site is.
        cost: Cost to start a dig.
        time: Dig duration in seconds.
        rewards: Reward tier chances.
    """

    location: Location
    cost: Number
    time: int
    rewards: DigSiteRewards


@dataclass(frozen=True, slots=True)
class MercenaryCamp:
    """A mercenary camp; `cost` is the cost per mercenary."""

    location: Location
    quantity: Number
    cost: Number


@dataclass(frozen=True, slots=True)
class Recipe:
    """A crafting recipe and the place it is crafted."""

    ingredients: Ingredients
    location: Location


@dataclass(frozen=True, slots=True)
class Powers:
    """Counts of each power available on a level."""

    time_warp: int = 0
    supercharge_army_camp: int = 0
    supercharge_mine: int = 0
    free_cache: int = 0
    market_raid: int = 0
    fog_buster: int = 0
    inspire_mercenaries: int = 0
    skip_level: int = 0
    multi_level: int = 0

    @property
    def total(self) -> int:
        """Return the number of powers of any kind."""

        return sum(getattr(self, f.name) for f in fields(self))


@dataclass
class Level:
    """Aggregate root for one level of the export.

    Scalar `total_*` fields are written by Meta rows (last write wins). List
    fields are in ingestion order until the level is canonicalized.
    """

    level_id: int
    name: str = ""
    base_ap: float | None = None
    map_reference: str | None = None
    largest_army_caches: list[Cache] = field(default_factory=list)
    largest_money_caches: list[Cache] = field(default_factory=list)
    largest_territories: list[Territory] = field(default_factory=list)
    total_armies_required: Number = 0
    total_base_army_caches: Number = 0
    total_base_mercenaries: Number = 0
    total_base_mercenaries_cost: Number = 0
    total_base_money_caches: Number = 0
    total_base_money_generation: Number = 0
    total_hospital_saves: Number = 0
    total_hospital_upgrade_cost: Number = 0
    total_territories: Number = 0
    recipes: dict[str, Recipe] = field(default_factory=dict)
    tech_recipes: dict[str, Ingredients] = field(default_factory=dict)
    mercenary_camps: list[MercenaryCamp] = field(default_factory=list)
    markets: list[Market] = field(default_factory=list)
    dig_sites: list[DigSite] = field(default_factory=list)
    hospitals: list[Hospital] = field(default_factory=list)
    powers: Powers = field(default_factory=Powers)

    @property
    def market_resources(self) -> tuple[str, ...]:
        """Return every market resource, flattened in market order."""

        return tuple(resource for market in self.markets for resource in market.resources)
