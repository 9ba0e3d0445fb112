"""Service-layer functions for the core app.

Services in `core` coordinate Django concerns (settings, files on disk) with
the pure `levels` ingestion package.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from django.conf import settings

from levels.aggregator import ingest_level_rows
from levels.dto import Level
from levels.lookups import LevelLookups, default_lookups, load_lookups

logger = logging.getLogger(__name__)


def resolve_lookups(lookups_path: str | Path | None = None) -> LevelLookups:
    """Return the lookup tables to ingest with.

    Args:
        lookups_path: Optional YAML override file. When omitted, the
            `LEVEL_LOOKUPS_PATH` setting is used; when that is unset too, the
            built-in tables are returned.

    Returns:
        LevelLookups with any overrides applied.
    """

    path = lookups_path or getattr(settings, "LEVEL_LOOKUPS_PATH", None)
    if not path:
        return default_lookups()
    logger.info("Loading level lookup overrides from %s", path)
    return load_lookups(path)


def load_levels_from_csv(csv_path: str | Path, *, lookups: LevelLookups | None = None) -> dict[int, Level]:
    """Read a level export CSV and ingest it.

    Args:
        csv_path: Path to the CSV export (UTF-8, optional BOM, header row).
        lookups: Lookup tables; defaults to `resolve_lookups()`.

    Returns:
        Mapping of level id to finished Level, in first-seen order.

    Raises:
        LevelIngestionError: When any row is malformed. No partial result is
            returned.
    """

    path = Path(csv_path)
    lookups = lookups if lookups is not None else resolve_lookups()
    with path.open(encoding="utf-8-sig", newline="") as handle:
        rows = [dict(row) for row in csv.DictReader(handle)]

    logger.info("Read %s rows from %s", len(rows), path)
    levels = ingest_level_rows(rows, lookups=lookups)
    logger.info("Ingested %s levels from %s", len(levels), path)
    return levels
