"""Pure level-export ingestion package for idleWarzone.

This package turns rows of the level export into canonicalized `Level`
aggregates. It must not import Django. Callers hand in already-read row
mappings and the static lookup tables; the only file it reads is an optional
YAML lookup override passed to `load_lookups`.
"""

from .aggregator import LevelAggregator, ingest_level_rows
from .dto import Level
from .lookups import LevelLookups, default_lookups

__all__ = ["Level", "LevelAggregator", "LevelLookups", "default_lookups", "ingest_level_rows"]
