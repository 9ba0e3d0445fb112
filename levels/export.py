"""Deterministic JSON export of finished levels.

The dump keeps level order (first-seen order of the export) and the canonical
order of every collection, so two ingestions of the same rows produce the same
text and the same checksum.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from dataclasses import asdict
from enum import Enum
from typing import Any

from .dto import Level


def _json_ready(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: value.value if isinstance(value, Enum) else value for key, value in pairs}


def level_to_dict(level: Level) -> dict[str, Any]:
    """Return a JSON-ready dict for a level.

    Args:
        level: A finished Level.

    Returns:
        Nested dicts/lists mirroring the dataclass fields, with enums replaced
        by their values.
    """

    return asdict(level, dict_factory=_json_ready)


def dump_levels(levels: Mapping[int, Level], *, indent: int | None = None) -> str:
    """Serialize levels to JSON text, keyed by level id in mapping order."""

    payload = {str(level_id): level_to_dict(level) for level_id, level in levels.items()}
    separators = (",", ":") if indent is None else (",", ": ")
    return json.dumps(payload, ensure_ascii=False, indent=indent, separators=separators)


def compute_levels_checksum(levels: Mapping[int, Level]) -> str:
    """Compute a SHA-256 checksum of the compact JSON dump.

    Returns:
        A lowercase hex digest.
    """

    return hashlib.sha256(dump_levels(levels).encode("utf-8")).hexdigest()
