"""Tests for canonical ordering of finished levels."""

from __future__ import annotations

import pytest

from levels.canonical import MARKET_ORDER, canonicalize_level, canonicalize_levels
from levels.dto import Cache, Level, Location, Market, StrikeClass, Territory

pytestmark = pytest.mark.unit


def _territory(cost: int, name: str) -> Territory:
    return Territory(cost=cost, location=Location(name=name), strike_class=StrikeClass.SS)


def _market(name: str) -> Market:
    return Market(location=Location(name=f"{name} Square"), name=name, resources=("a", "b", "c", "d"))


def test_canonicalize_level_sorts_territories_descending_and_stable() -> None:
    """Sort by cost descending, keeping ingestion order among ties."""

    level = Level(level_id=1)
    level.largest_territories.extend(
        [_territory(5, "a"), _territory(9, "b"), _territory(5, "c"), _territory(9, "d"), _territory(1, "e")]
    )

    canonicalize_level(level)

    assert [t.location.name for t in level.largest_territories] == ["b", "d", "a", "c", "e"]
    costs = [t.cost for t in level.largest_territories]
    assert all(costs[i] >= costs[i + 1] for i in range(len(costs) - 1))


def test_canonicalize_level_sorts_caches_descending() -> None:
    """Sort army and money caches independently by quantity."""

    level = Level(level_id=1)
    level.largest_army_caches.extend([Cache(1, Location("a")), Cache(3, Location("b")), Cache(3, Location("c"))])
    level.largest_money_caches.extend([Cache(2, Location("x")), Cache(8, Location("y"))])

    canonicalize_level(level)

    assert [c.location.name for c in level.largest_army_caches] == ["b", "c", "a"]
    assert [c.location.name for c in level.largest_money_caches] == ["y", "x"]


def test_canonicalize_level_orders_markets_and_puts_unknown_last() -> None:
    """Known markets follow MARKET_ORDER; unknown names trail in ingestion order."""

    level = Level(level_id=1)
    level.markets.extend(
        [_market("Zeta"), _market("Paidittinicked"), _market("Mixtup"), _market("Alpha"), _market("Belluminkling")]
    )

    canonicalize_level(level)

    assert [m.name for m in level.markets] == ["Belluminkling", "Mixtup", "Paidittinicked", "Zeta", "Alpha"]


def test_canonicalize_levels_visits_every_level() -> None:
    """Canonicalize each level in the mapping."""

    levels = {1: Level(level_id=1), 2: Level(level_id=2)}
    for level in levels.values():
        level.markets.extend(_market(name) for name in reversed(MARKET_ORDER))

    canonicalize_levels(levels)

    for level in levels.values():
        assert tuple(m.name for m in level.markets) == MARKET_ORDER
