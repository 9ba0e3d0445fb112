"""Row model and closed dispatch tags for the level export.

Rows arrive as plain `column -> string` mappings. `LevelRow` pins down the
required columns, and the enums below are the complete set of row categories
the aggregator understands. Resolving a tag that is not listed raises
`UnknownRowError`.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Final, TypeVar

from .errors import MalformedLevelIdError, MissingColumnError, UnknownRowError

_LEVEL_ID_RE = re.compile(r"-?[0-9]+")

E = TypeVar("E", bound=Enum)

COLUMNS: Final[dict[str, str]] = {
    "Level ID": "level_id",
    "Level Name": "level_name",
    "Type": "type",
    "Name": "name",
    "Details": "details",
    "Location": "location",
    "Location hints": "location_hints",
}


class RowType(Enum):
    """Declared row Type values."""

    DIG_SITES = "Dig Sites"
    HOSPITAL = "Hospital"
    LARGEST_CACHE = "Largest Cache"
    LARGEST_TERRITORIES = "Largest Territories"
    MARKET = "Market"
    MERCENARY_CAMP = "Mercenary Camp"
    META = "Meta"
    RECIPE = "Recipe"
    TECH_RECIPE = "Tech Recipe"


class CacheKind(Enum):
    """Name values of `Largest Cache` rows."""

    ARMY = "Army Cache"
    MONEY = "Money Cache"


class MetaField(Enum):
    """Name values of `Meta` rows."""

    TOTAL_ARMIES_REQUIRED = "Total Armies Required"
    TOTAL_BASE_ARMY_CACHES = "Total Base Army Caches"
    TOTAL_BASE_MERCENARIES = "Total Base Mercenaries"
    TOTAL_BASE_MERCENARIES_COSTS = "Total Base Mercenaries Costs"
    TOTAL_BASE_MONEY_CACHES = "Total Base Money Caches"
    TOTAL_BASE_MONEY_GENERATION = "Total Base Money Generation Per Sec"
    TOTAL_HOSPITAL_SAVES = "Total Hospitals Save per Terr"
    TOTAL_HOSPITAL_UPGRADE_COSTS = "Total Hospitals Upgrade Costs"
    TOTAL_TERRITORIES = "Total Territories"
    TOTAL_POWERS_AVAILABLE = "Total Powers Available"


@dataclass(frozen=True, slots=True)
class LevelRow:
    """A single export row with its required columns.

    Attributes:
        level_id: Raw Level ID cell.
        level_name: Raw Level Name cell.
        type: Raw Type cell.
        name: Raw Name cell.
        details: Raw Details cell.
        location: Raw Location cell.
        location_hints: Raw Location hints cell.
        raw_row: The complete source mapping, kept for diagnostics.
    """

    level_id: str
    level_name: str
    type: str
    name: str
    details: str
    location: str
    location_hints: str
    raw_row: Mapping[str, str]

    @classmethod
    def from_mapping(cls, row: Mapping[str, str]) -> LevelRow:
        """Build a LevelRow from a `column -> value` mapping.

        Raises:
            MissingColumnError: When a required column is absent or has no
                value, as in a CSV line with fewer fields than the header.
        """

        values: dict[str, str] = {}
        for column, attribute in COLUMNS.items():
            if row.get(column) is None:
                raise MissingColumnError(column=column, row=row)
            values[attribute] = row[column]
        return cls(raw_row=row, **values)

    def parse_level_id(self) -> int:
        """Return the Level ID as an integer.

        Raises:
            MalformedLevelIdError: When the cell is not an integer.
        """

        cleaned = self.level_id.strip()
        if _LEVEL_ID_RE.fullmatch(cleaned) is None:
            raise MalformedLevelIdError(f"Invalid level id: {self.level_id!r}", raw_value=self.level_id)
        return int(cleaned)

    def row_type(self) -> RowType:
        """Resolve the row's Type cell."""

        return _resolve(RowType, self.type, row=self)

    def cache_kind(self) -> CacheKind:
        """Resolve the Name cell of a `Largest Cache` row."""

        return _resolve(CacheKind, self.name, row=self)

    def meta_field(self) -> MetaField:
        """Resolve the Name cell of a `Meta` row."""

        return _resolve(MetaField, self.name, row=self)


def _resolve(enum_type: type[E], value: str, *, row: LevelRow) -> E:
    """Look up an enum member by value, raising UnknownRowError when absent."""

    try:
        return enum_type(value)
    except ValueError:
        raise UnknownRowError(row=row.raw_row) from None
