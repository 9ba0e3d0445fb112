"""Fold export rows into Level aggregates.

The aggregator is a single-pass accumulator: rows must be fed in source order
because level creation order, last-write-wins Meta scalars and the stable
canonical sorts all depend on it. Any error aborts the run; `ingest_level_rows`
never returns a partially built model.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Final

from .canonical import canonicalize_levels
from .dto import Cache, Level, Location, Recipe, Territory
from .fields import (
    canonical_tech_name,
    classify_strike,
    parse_dig_site,
    parse_hospital,
    parse_ingredients,
    parse_market,
    parse_mercenary_camp,
    parse_powers,
)
from .locations import parse_location
from .lookups import LevelLookups, default_lookups
from .quantity import parse_scaled_number
from .rows import CacheKind, LevelRow, MetaField, RowType

logger = logging.getLogger(__name__)

RowHandler = Callable[[Level, LevelRow], None]

_META_ATTRIBUTES: Final[dict[MetaField, str]] = {
    MetaField.TOTAL_ARMIES_REQUIRED: "total_armies_required",
    MetaField.TOTAL_BASE_ARMY_CACHES: "total_base_army_caches",
    MetaField.TOTAL_BASE_MERCENARIES: "total_base_mercenaries",
    MetaField.TOTAL_BASE_MERCENARIES_COSTS: "total_base_mercenaries_cost",
    MetaField.TOTAL_BASE_MONEY_CACHES: "total_base_money_caches",
    MetaField.TOTAL_BASE_MONEY_GENERATION: "total_base_money_generation",
    MetaField.TOTAL_HOSPITAL_SAVES: "total_hospital_saves",
    MetaField.TOTAL_HOSPITAL_UPGRADE_COSTS: "total_hospital_upgrade_cost",
    MetaField.TOTAL_TERRITORIES: "total_territories",
}


class LevelAggregator:
    """Accumulate export rows into `Level` aggregates keyed by level id."""

    def __init__(self, lookups: LevelLookups | None = None) -> None:
        """Initialize the aggregator.

        Args:
            lookups: Static base AP and map tables; defaults to the built-in
                tables.
        """

        self._lookups = lookups if lookups is not None else default_lookups()
        self._levels: dict[int, Level] = {}
        self._rows_ingested = 0
        self._finished = False
        self._failed = False

    @property
    def rows_ingested(self) -> int:
        """Return how many rows have been folded in so far."""

        return self._rows_ingested

    def ingest(self, raw_row: Mapping[str, str]) -> Level:
        """Fold a single row into its level.

        A new level is only registered once its first row has been folded in
        successfully. Any error marks the aggregator as failed.

        Args:
            raw_row: Mapping of export column name to raw cell text.

        Returns:
            The Level the row was folded into.

        Raises:
            LevelIngestionError: When any cell of the row is malformed or the
                row category is unknown.
            RuntimeError: When called after `finish()` or after a failed row.
        """

        self._ensure_usable()
        try:
            row = LevelRow.from_mapping(raw_row)
            level_id = row.parse_level_id()
            handler = _ROW_HANDLERS[row.row_type()]
            level = self._levels.get(level_id)
            if level is None:
                level = self._new_level(level_id, row)
                handler(level, row)
                self._levels[level_id] = level
                logger.debug("Created level %s (%s)", level_id, level.name)
            else:
                handler(level, row)
        except Exception:
            self._failed = True
            raise
        self._rows_ingested += 1
        return level

    def finish(self) -> dict[int, Level]:
        """Canonicalize every level and return them in first-seen order.

        Raises:
            RuntimeError: When an earlier row failed to ingest.
        """

        if self._failed:
            raise RuntimeError("Cannot finish an aggregator after a failed row.")
        if not self._finished:
            canonicalize_levels(self._levels)
            self._finished = True
        return self._levels

    def _ensure_usable(self) -> None:
        if self._failed:
            raise RuntimeError("Cannot ingest rows after a failed row.")
        if self._finished:
            raise RuntimeError("Cannot ingest rows after the aggregator has finished.")

    def _new_level(self, level_id: int, row: LevelRow) -> Level:
        return Level(
            level_id=level_id,
            name=row.level_name,
            base_ap=self._lookups.base_ap.get(level_id),
            map_reference=self._lookups.map_references.get(level_id),
        )


def ingest_level_rows(rows: Iterable[Mapping[str, str]], *, lookups: LevelLookups | None = None) -> dict[int, Level]:
    """Ingest a full export and return the canonicalized levels.

    Args:
        rows: Export rows in source order.
        lookups: Static base AP and map tables; defaults to the built-in tables.

    Returns:
        Mapping of level id to finished Level, in first-seen order.

    Raises:
        LevelIngestionError: On the first malformed or unknown row. No partial
            result is returned.
    """

    aggregator = LevelAggregator(lookups)
    for row in rows:
        aggregator.ingest(row)
    levels = aggregator.finish()
    logger.debug("Ingested %s rows into %s levels", aggregator.rows_ingested, len(levels))
    return levels


def _location(row: LevelRow) -> Location:
    return parse_location(row.location, row.location_hints)


def _ingest_dig_site(level: Level, row: LevelRow) -> None:
    level.dig_sites.append(parse_dig_site(row.details, location=_location(row)))


def _ingest_hospital(level: Level, row: LevelRow) -> None:
    level.hospitals.append(parse_hospital(row.details, location=_location(row)))


def _ingest_largest_cache(level: Level, row: LevelRow) -> None:
    kind = row.cache_kind()
    cache = Cache(quantity=parse_scaled_number(row.details), location=_location(row))
    if kind is CacheKind.ARMY:
        level.largest_army_caches.append(cache)
    else:
        level.largest_money_caches.append(cache)


def _ingest_largest_territory(level: Level, row: LevelRow) -> None:
    level.largest_territories.append(
        Territory(
            cost=parse_scaled_number(row.details),
            location=_location(row),
            strike_class=classify_strike(row.details),
        )
    )


def _ingest_market(level: Level, row: LevelRow) -> None:
    level.markets.append(parse_market(row.name, row.details, location=_location(row)))


def _ingest_mercenary_camp(level: Level, row: LevelRow) -> None:
    level.mercenary_camps.append(parse_mercenary_camp(row.details, location=_location(row)))


def _ingest_meta(level: Level, row: LevelRow) -> None:
    meta_field = row.meta_field()
    if meta_field is MetaField.TOTAL_POWERS_AVAILABLE:
        # An empty cell means the level has no powers listed.
        if row.details:
            level.powers = parse_powers(row.details)
        return
    setattr(level, _META_ATTRIBUTES[meta_field], parse_scaled_number(row.details))


def _ingest_recipe(level: Level, row: LevelRow) -> None:
    ingredients = parse_ingredients(row.details)
    level.recipes[row.name] = Recipe(ingredients=ingredients, location=_location(row))


def _ingest_tech_recipe(level: Level, row: LevelRow) -> None:
    level.tech_recipes[canonical_tech_name(row.name)] = parse_ingredients(row.details)


_ROW_HANDLERS: Final[dict[RowType, RowHandler]] = {
    RowType.DIG_SITES: _ingest_dig_site,
    RowType.HOSPITAL: _ingest_hospital,
    RowType.LARGEST_CACHE: _ingest_largest_cache,
    RowType.LARGEST_TERRITORIES: _ingest_largest_territory,
    RowType.MARKET: _ingest_market,
    RowType.MERCENARY_CAMP: _ingest_mercenary_camp,
    RowType.META: _ingest_meta,
    RowType.RECIPE: _ingest_recipe,
    RowType.TECH_RECIPE: _ingest_tech_recipe,
}
