"""Location and location-hint parsing."""

from __future__ import annotations

from typing import Final

from .dto import Location
from .errors import MalformedLocationError, MalformedLocationHintsError

TERRITORY_PREFIX: Final[str] = "Territory: "
BONUS_PREFIX: Final[str] = "Bonus: "
BONUS_HINTS_PREFIX: Final[str] = "Part of bonuses:"


def parse_location(location: str, hints: str) -> Location:
    """Parse a Location cell and its Location hints cell.

    Args:
        location: Raw Location cell (`Territory: <name>` or `Bonus: <name>`).
        hints: Raw Location hints cell (empty or `Part of bonuses: a, b`).

    Returns:
        A new Location value.

    Raises:
        MalformedLocationHintsError: When the hints cell is not recognized.
        MalformedLocationError: When the location cell has no known prefix.
    """

    bonuses = parse_location_hints(hints)
    if location.startswith(TERRITORY_PREFIX):
        return Location(name=location[len(TERRITORY_PREFIX) :], is_bonus=False, bonuses=bonuses)
    if location.startswith(BONUS_PREFIX):
        return Location(name=location[len(BONUS_PREFIX) :], is_bonus=True, bonuses=bonuses)
    raise MalformedLocationError(f"Invalid location: {location!r}", raw_value=location)


def parse_location_hints(hints: str) -> tuple[str, ...]:
    """Return the bonus names listed in a Location hints cell."""

    if hints == "":
        return ()
    if not hints.startswith(BONUS_HINTS_PREFIX):
        raise MalformedLocationHintsError(f"Invalid location hints: {hints!r}", raw_value=hints)

    names = (part.strip() for part in hints[len(BONUS_HINTS_PREFIX) :].split(","))
    return tuple(name for name in names if name)
