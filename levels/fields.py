"""Parsers for the type-specific Details cell grammars.

Each row Type stores its facts in the free-text Details cell using a small
grammar of its own. The parsers here are strict about the surrounding
structure and delegate numbers to `parse_scaled_number`. Location values are
parsed by the caller and passed in, so these functions only see Details text.
"""

from __future__ import annotations

import re
from typing import Final

from .dto import (
    DigSite,
    DigSiteRewards,
    Hospital,
    Ingredients,
    Location,
    Market,
    MercenaryCamp,
    Powers,
    StrikeClass,
)
from .errors import (
    MalformedDigSiteError,
    MalformedHospitalError,
    MalformedIngredientError,
    MalformedMarketError,
    MalformedMercenaryCampError,
    MalformedNumberError,
    MalformedRecipeError,
    UnknownPowerError,
)
from .quantity import Number, parse_scaled_number

SECONDS_PER_HOUR: Final[int] = 3600
MARKET_RESOURCE_COUNT: Final[int] = 4
TECH_NAME_PREFIX: Final[str] = "!MS: "

_DIG_SITE_RE = re.compile(r"^Cost: (?P<cost>.+?); Time: (?P<time>.+?); Type: (?P<rewards>.+)$")
_DIG_SITE_REWARDS_RE = re.compile(
    r"^(?:p(?P<poor>\d+))?\s*(?:c(?P<common>\d+))?\s*(?:u(?P<uncommon>\d+))?"
    r"\s*(?:r(?P<rare>\d+))?\s*(?:e(?P<epic>\d+))?"
)
_HOSPITAL_RE = re.compile(r"^Base armies saved: (?P<base>.+?); Upgrade costs: ?(?P<costs>.*?)$")
_MERCENARY_CAMP_RE = re.compile(r"^Base mercs: (?P<quantity>.+?); Base cost: (?P<cost>.*?)$")
_INGREDIENT_RE = re.compile(r"^(?P<name>.+) x(?P<quantity>\d+(?:\.\d+)?[KM]?)$")
_POWER_COUNT_RE = re.compile(r"[0-9]+")

_MARKET_PREFIX: Final[str] = "Resources: "
_RECIPE_PREFIX: Final[str] = "Requires: "

# Highest class first; the first substring found wins.
_STRIKE_PRECEDENCE: Final[tuple[StrikeClass, ...]] = (StrikeClass.QS, StrikeClass.TS, StrikeClass.JS)

POWER_ABBREVIATIONS: Final[dict[str, str]] = {
    "TW": "time_warp",
    "SAC": "supercharge_army_camp",
    "SM": "supercharge_mine",
    "FC": "free_cache",
    "MR": "market_raid",
    "FB": "fog_buster",
    "IM": "inspire_mercenaries",
    "SL": "skip_level",
    "ML": "multi_level",
}


def parse_dig_site(details: str, *, location: Location) -> DigSite:
    """Parse `Cost: <num>; Time: <hours>; Type: <rewards>` into a DigSite.

    Args:
        details: Raw Details cell.
        location: Already-parsed location of the dig site.

    Returns:
        DigSite with `time` converted from hours to whole seconds.

    Raises:
        MalformedDigSiteError: When the cell does not match the grammar.
        MalformedNumberError: When the cost or time is not a number.
    """

    match = _DIG_SITE_RE.match(details)
    if match is None:
        raise MalformedDigSiteError(f"Invalid dig site: {details!r}", raw_value=details)

    # Fractional hours are kept and rounded to the nearest second, not truncated.
    hours = parse_scaled_number(match.group("time"))
    return DigSite(
        location=location,
        cost=parse_scaled_number(match.group("cost")),
        time=round(hours * SECONDS_PER_HOUR),
        rewards=parse_dig_site_rewards(match.group("rewards")),
    )


def parse_dig_site_rewards(text: str) -> DigSiteRewards:
    """Parse reward tier chances such as `p10 c50 u30 r5 e1`.

    Every tier is optional but tiers must appear in poor/common/uncommon/
    rare/epic order. Missing tiers default to 0.
    """

    match = _DIG_SITE_REWARDS_RE.match(text)
    if match is None:
        raise MalformedDigSiteError(f"Invalid dig site rewards: {text!r}", raw_value=text)
    return DigSiteRewards(**{tier: int(value) for tier, value in match.groupdict().items() if value is not None})


def parse_hospital(details: str, *, location: Location) -> Hospital:
    """Parse `Base armies saved: <num>; Upgrade costs: <num>, <num>, ...`.

    Args:
        details: Raw Details cell.
        location: Already-parsed hospital location.

    Returns:
        Hospital whose upgrade cost list may be empty.

    Raises:
        MalformedHospitalError: When the cell does not match the grammar.
        MalformedNumberError: When a number inside the cell is malformed.
    """

    match = _HOSPITAL_RE.match(details)
    if match is None:
        raise MalformedHospitalError(f"Invalid hospital: {details!r}", raw_value=details)

    costs_text = match.group("costs")
    upgrade_costs = tuple(parse_scaled_number(cost.strip()) for cost in costs_text.split(",")) if costs_text else ()
    return Hospital(
        base_army_saved=parse_scaled_number(match.group("base")),
        upgrade_costs=upgrade_costs,
        location=location,
    )


def parse_market(name: str, details: str, *, location: Location) -> Market:
    """Parse `Resources: <r1>, <r2>, <r3>, <r4>` into a Market.

    Args:
        name: Market name from the row's Name cell.
        details: Raw Details cell.
        location: Already-parsed market location.

    Returns:
        Market with exactly four resources.

    Raises:
        MalformedMarketError: When the prefix is missing or the cell does not
            list exactly four resources.
    """

    if not details.startswith(_MARKET_PREFIX):
        raise MalformedMarketError(f"Invalid market: {details!r}", raw_value=details)

    resources = tuple(resource.strip() for resource in details[len(_MARKET_PREFIX) :].split(","))
    if len(resources) != MARKET_RESOURCE_COUNT:
        raise MalformedMarketError(
            f"Market {name!r} lists {len(resources)} resources, expected {MARKET_RESOURCE_COUNT}: {details!r}",
            raw_value=details,
        )
    return Market(location=location, name=name, resources=resources)


def parse_mercenary_camp(details: str, *, location: Location) -> MercenaryCamp:
    """Parse `Base mercs: <num>; Base cost: <num>` into a MercenaryCamp."""

    match = _MERCENARY_CAMP_RE.match(details)
    if match is None:
        raise MalformedMercenaryCampError(f"Invalid mercenary camp: {details!r}", raw_value=details)

    return MercenaryCamp(
        location=location,
        quantity=parse_scaled_number(match.group("quantity")),
        cost=parse_scaled_number(match.group("cost")),
    )


def parse_ingredient(text: str) -> tuple[str, Number]:
    """Parse a single `<name> x<quantity>` ingredient.

    Quantities accept a decimal point and only the `K`/`M` suffixes.

    Raises:
        MalformedIngredientError: When the text does not match.
    """

    match = _INGREDIENT_RE.match(text)
    if match is None:
        raise MalformedIngredientError(f"Invalid ingredient: {text!r}", raw_value=text)
    return match.group("name"), parse_scaled_number(match.group("quantity"))


def parse_ingredients(details: str) -> Ingredients:
    """Parse `Requires: <ingredient>, <ingredient>, ...` into Ingredients.

    Args:
        details: Raw Details cell of a Recipe or Tech Recipe row.

    Returns:
        Mapping of ingredient name to required quantity.

    Raises:
        MalformedRecipeError: When the prefix is missing or an ingredient is
            listed twice.
        MalformedIngredientError: When an ingredient is malformed.
    """

    if not details.startswith(_RECIPE_PREFIX):
        raise MalformedRecipeError(f"Invalid recipe: {details!r}", raw_value=details)

    ingredients: Ingredients = {}
    for text in details[len(_RECIPE_PREFIX) :].split(", "):
        name, quantity = parse_ingredient(text)
        if name in ingredients:
            raise MalformedRecipeError(f"Ingredient {name!r} listed twice: {details!r}", raw_value=details)
        ingredients[name] = quantity
    return ingredients


def canonical_tech_name(name: str) -> str:
    """Strip the multiple-strike `!MS: ` marker from a tech recipe name."""

    return name.removeprefix(TECH_NAME_PREFIX)


def classify_strike(details: str) -> StrikeClass:
    """Classify a territory's Details text into a StrikeClass.

    The scan is a priority-ordered substring search: `QS` beats `TS`, which
    beats `JS`, regardless of where each appears. No marker means `SS`.
    """

    for strike_class in _STRIKE_PRECEDENCE:
        if strike_class.value in details:
            return strike_class
    return StrikeClass.SS


def parse_powers(details: str) -> Powers:
    """Parse space-separated `<ABBR>x<count>` tokens into Powers.

    Args:
        details: Raw Details cell, e.g. `TWx2 SACx1`.

    Returns:
        Powers with unlisted counters left at 0. A repeated abbreviation keeps
        its last count.

    Raises:
        UnknownPowerError: When an abbreviation is not a known power.
        MalformedNumberError: When a known power has a non-integer count.
    """

    counts: dict[str, int] = {}
    for token in details.split():
        abbreviation, separator, count = token.partition("x")
        attribute = POWER_ABBREVIATIONS.get(abbreviation)
        if attribute is None:
            raise UnknownPowerError(abbreviation=abbreviation, raw_value=details)
        if not separator or _POWER_COUNT_RE.fullmatch(count) is None:
            raise MalformedNumberError(f"Invalid power count in {token!r}", raw_value=token)
        counts[attribute] = int(count)
    return Powers(**counts)
