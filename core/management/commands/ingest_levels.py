"""Ingest a level export CSV and report the resulting levels."""

from __future__ import annotations

from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from core.services import load_levels_from_csv, resolve_lookups
from levels.errors import LevelIngestionError
from levels.export import compute_levels_checksum, dump_levels


class Command(BaseCommand):
    """Parse the level export and print a per-level summary or a JSON dump.

    Ingestion is all-or-nothing: the first malformed row aborts the command
    and nothing is printed for the levels read before it.
    """

    help = "Ingest a level export CSV into canonicalized levels (read-only)."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("csv_path", help="Path to the level export CSV.")
        parser.add_argument(
            "--lookups",
            default=None,
            help="Optional YAML file overlaying the built-in base AP and map tables.",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the canonicalized levels as JSON instead of a summary.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        csv_path = Path(options["csv_path"])
        lookups_path: str | None = options["lookups"]
        as_json: bool = options["json"]

        if not csv_path.is_file():
            raise CommandError(f"Export file not found: {csv_path}")

        try:
            lookups = resolve_lookups(lookups_path)
            levels = load_levels_from_csv(csv_path, lookups=lookups)
        except (LevelIngestionError, OSError, UnicodeDecodeError) as exc:
            raise CommandError(f"Ingestion failed: {exc}") from exc

        if as_json:
            self.stdout.write(dump_levels(levels, indent=2))
            return None

        for level_id, level in levels.items():
            self.stdout.write(
                f"[INGEST] level={level_id} name={level.name!r} ap={level.base_ap} "
                f"territories={len(level.largest_territories)} hospitals={len(level.hospitals)} "
                f"markets={len(level.markets)} dig_sites={len(level.dig_sites)} "
                f"mercenary_camps={len(level.mercenary_camps)} recipes={len(level.recipes)} "
                f"tech_recipes={len(level.tech_recipes)} powers={level.powers.total}"
            )
        self.stdout.write(f"[INGEST] TOTAL levels={len(levels)} checksum={compute_levels_checksum(levels)}")
        return None
