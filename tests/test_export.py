"""Tests for deterministic JSON export of finished levels."""

from __future__ import annotations

import copy
import json

import pytest

from levels.aggregator import ingest_level_rows
from levels.export import compute_levels_checksum, dump_levels, level_to_dict

pytestmark = pytest.mark.unit


def test_repeated_ingestion_is_byte_identical(sample_rows) -> None:
    """Two fresh ingestions of the same rows dump identically."""

    first = ingest_level_rows(copy.deepcopy(sample_rows))
    second = ingest_level_rows(copy.deepcopy(sample_rows))

    assert dump_levels(first) == dump_levels(second)
    assert compute_levels_checksum(first) == compute_levels_checksum(second)
    assert len(compute_levels_checksum(first)) == 64


def test_row_order_changes_the_checksum(sample_rows) -> None:
    """Level order is part of the dump."""

    forward = ingest_level_rows(sample_rows)
    backward = ingest_level_rows(list(reversed(sample_rows)))

    assert list(forward) != list(backward)
    assert compute_levels_checksum(forward) != compute_levels_checksum(backward)


def test_level_to_dict_is_json_ready(sample_rows) -> None:
    """Enums become values and nested dataclasses become dicts."""

    level = ingest_level_rows(sample_rows)[1]
    payload = level_to_dict(level)

    assert payload["largest_territories"][0]["strike_class"] == "QS"
    assert payload["recipes"]["Steel"]["location"]["name"] == "Ironside"
    assert payload["powers"]["time_warp"] == 2

    dumped = json.loads(dump_levels({1: level}, indent=2))
    assert dumped["1"]["markets"][0]["name"] == "Belluminkling"
