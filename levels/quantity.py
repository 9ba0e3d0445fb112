"""Scaled number parsing for level export cells.

Numeric cells in the export use compact magnitude suffixes (e.g. `10K`,
`1.5M`, `2B`). Unlike a best-effort display parser, this module fails fast:
every caller sits inside an all-or-nothing ingestion run.

Only a prefix match is required, so cells such as `128.7 AP` or `1.2M (QS)`
parse to their leading number.
"""

from __future__ import annotations

import re
from decimal import ROUND_FLOOR, Decimal
from typing import Final

from .errors import MalformedNumberError

Number = int | float

_SCALED_NUMBER_RE = re.compile(r"^(?P<number>-?\d+(?:\.\d+)?)(?P<magnitude>[KMBT]?)")

_MAGNITUDE_MULTIPLIERS: Final[dict[str, Decimal]] = {
    "K": Decimal(1_000),
    "M": Decimal(1_000_000),
    "B": Decimal(1_000_000_000),
    "T": Decimal(1_000_000_000_000),
}

_HALF: Final[Decimal] = Decimal("0.5")


def parse_scaled_number(raw_value: str) -> Number:
    """Parse a number with an optional K/M/B/T magnitude suffix.

    Args:
        raw_value: Raw cell text (e.g. `5K`, `1.5M`, `-2K`, `3`, `128.7 AP`).

    Returns:
        The scaled value. Suffixed values are rounded to the nearest integer
        (halves round up) and returned as `int`. Unsuffixed values are not
        rounded: `int` for integer literals, `float` otherwise.

    Raises:
        MalformedNumberError: When the text does not start with a number.
    """

    match = _SCALED_NUMBER_RE.match(raw_value)
    if match is None:
        raise MalformedNumberError(f"Invalid number: {raw_value!r}", raw_value=raw_value)

    number_text = match.group("number")
    magnitude = match.group("magnitude")
    if not magnitude:
        return _parse_plain(number_text)

    scaled = Decimal(number_text) * _MAGNITUDE_MULTIPLIERS[magnitude]
    return int((scaled + _HALF).to_integral_value(rounding=ROUND_FLOOR))


def _parse_plain(number_text: str) -> Number:
    """Parse an unsuffixed literal, keeping any fractional part."""

    if "." in number_text:
        return float(number_text)
    return int(number_text)
