"""Fatal ingestion errors for the level export.

Every error raised while ingesting the export derives from
`LevelIngestionError`. Ingestion is all-or-nothing: callers never see a
partially built model when one of these is raised.
"""

from __future__ import annotations

from collections.abc import Mapping


class LevelIngestionError(ValueError):
    """Base class for errors raised while ingesting the level export."""

    def __init__(self, message: str, *, raw_value: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description of the failure.
            raw_value: The offending raw cell text.
        """

        super().__init__(message)
        self.raw_value = raw_value


class MalformedNumberError(LevelIngestionError):
    """Raised when a numeric cell does not start with a scaled number."""


class MalformedLocationError(LevelIngestionError):
    """Raised when a Location cell has neither a territory nor a bonus prefix."""


class MalformedLocationHintsError(LevelIngestionError):
    """Raised when a Location hints cell is neither empty nor a bonus list."""


class MalformedDigSiteError(LevelIngestionError):
    """Raised when a dig site Details cell does not match its grammar."""


class MalformedHospitalError(LevelIngestionError):
    """Raised when a hospital Details cell does not match its grammar."""


class MalformedMarketError(LevelIngestionError):
    """Raised when a market Details cell is not a list of four resources."""


class MalformedMercenaryCampError(LevelIngestionError):
    """Raised when a mercenary camp Details cell does not match its grammar."""


class MalformedIngredientError(LevelIngestionError):
    """Raised when a single `<name> x<quantity>` ingredient is malformed."""


class MalformedRecipeError(LevelIngestionError):
    """Raised when a recipe Details cell is not a valid ingredient list."""


class MalformedLevelIdError(LevelIngestionError):
    """Raised when the Level ID column is not an integer."""


class MalformedLookupTableError(LevelIngestionError):
    """Raised when a lookup table override file has an unexpected shape."""


class UnknownPowerError(LevelIngestionError):
    """Raised when a powers token uses an unrecognized abbreviation."""

    def __init__(self, *, abbreviation: str, raw_value: str) -> None:
        """Initialize the error.

        Args:
            abbreviation: The unrecognized power abbreviation.
            raw_value: The full powers Details cell.
        """

        super().__init__(f"Unknown power {abbreviation!r} in {raw_value!r}.", raw_value=raw_value)
        self.abbreviation = abbreviation


class UnknownRowError(LevelIngestionError):
    """Raised when a row's Type (or Meta/cache Name) matches no known case."""

    def __init__(self, *, row: Mapping[str, str]) -> None:
        """Initialize the error.

        Args:
            row: The complete raw row, kept for diagnostics.
        """

        self.row = dict(row)
        super().__init__(f"Unknown row: {self.row!r}", raw_value=self.row.get("Type", ""))


class MissingColumnError(LevelIngestionError):
    """Raised when a row lacks one of the required export columns."""

    def __init__(self, *, column: str, row: Mapping[str, str]) -> None:
        """Initialize the error.

        Args:
            column: Name of the missing column.
            row: The raw row that lacks the column.
        """

        self.column = column
        self.row = dict(row)
        super().__init__(f"Missing column {column!r} in row {self.row!r}", raw_value="")
