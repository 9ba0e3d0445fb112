"""Canonical display ordering for finished levels.

Renderers rely on these orders (rank order of the largest territories and
caches, fixed market order), so they are part of the model contract. Every
sort is stable: ties keep their ingestion order.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from .dto import Level, Market

MARKET_ORDER: Final[tuple[str, ...]] = (
    "Belluminkling",
    "Mixtup",
    "Twisometo",
    "Cleakuwaked",
    "Bationare",
    "Miscoutly",
    "Paidittinicked",
)

_MARKET_POSITIONS: Final[dict[str, int]] = {name: index for index, name in enumerate(MARKET_ORDER)}


def market_sort_key(market: Market) -> int:
    """Return a market's canonical position; unknown names sort last."""

    return _MARKET_POSITIONS.get(market.name, len(MARKET_ORDER))


def canonicalize_level(level: Level) -> None:
    """Sort a level's ranked collections in place.

    - Largest territories: cost, descending.
    - Largest army and money caches: quantity, descending.
    - Markets: `MARKET_ORDER`, unknown names after known ones.
    """

    level.largest_territories.sort(key=lambda territory: territory.cost, reverse=True)
    level.largest_army_caches.sort(key=lambda cache: cache.quantity, reverse=True)
    level.largest_money_caches.sort(key=lambda cache: cache.quantity, reverse=True)
    level.markets.sort(key=market_sort_key)


def canonicalize_levels(levels: Mapping[int, Level]) -> None:
    """Canonicalize every level of an ingested export."""

    for level in levels.values():
        canonicalize_level(level)
