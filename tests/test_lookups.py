"""Tests for static lookup tables and YAML overrides."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from levels.errors import MalformedLookupTableError
from levels.lookups import DEFAULT_BASE_AP, DEFAULT_MAP_REFERENCES, LevelLookups, default_lookups, load_lookups


@pytest.mark.unit
def test_default_lookups_cover_base_and_variant_levels() -> None:
    """The built-in tables include base, hardened and later-series ids."""

    lookups = default_lookups()

    assert lookups.base_ap[1] == pytest.approx(0.23)
    assert lookups.base_ap[10005] == pytest.approx(128.7)
    assert lookups.base_ap[20049] == pytest.approx(11052.63)
    assert set(DEFAULT_BASE_AP) == set(DEFAULT_MAP_REFERENCES)
    assert 33 not in lookups.base_ap


@pytest.mark.unit
def test_level_lookups_are_read_only() -> None:
    """Tables are copied into read-only mappings."""

    source = {1: 2.0}
    lookups = LevelLookups(base_ap=source)
    source[1] = 3.0

    assert isinstance(lookups.base_ap, MappingProxyType)
    assert lookups.base_ap[1] == 2.0
    with pytest.raises(TypeError):
        lookups.base_ap[2] = 1.0  # type: ignore[index]


@pytest.mark.integration
def test_load_lookups_overlays_yaml_file(tmp_path) -> None:
    """YAML entries replace or extend the base tables."""

    path = tmp_path / "lookups.yml"
    path.write_text("base_ap:\n  1: 5\n  99: 12.5\nmaps:\n  99: https://example.invalid/99.png\n", encoding="utf-8")

    lookups = load_lookups(path)

    assert lookups.base_ap[1] == 5
    assert lookups.base_ap[99] == 12.5
    assert lookups.base_ap[2] == pytest.approx(17.30)
    assert lookups.map_references[99] == "https://example.invalid/99.png"


@pytest.mark.integration
def test_load_lookups_accepts_empty_file(tmp_path) -> None:
    """An empty file leaves the base tables unchanged."""

    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")

    lookups = load_lookups(path, base=LevelLookups())
    assert dict(lookups.base_ap) == {}
    assert dict(lookups.map_references) == {}


@pytest.mark.integration
@pytest.mark.parametrize(
    "content",
    [
        "- 1\n- 2\n",
        "base_ap: [1, 2]\n",
        "base_ap:\n  one: 1\n",
        "base_ap:\n  1: fast\n",
        "maps:\n  1: 3\n",
        "base_ap: {1: [\n",
    ],
)
def test_load_lookups_rejects_malformed_files(tmp_path, content: str) -> None:
    """Raise MalformedLookupTableError for invalid YAML and unexpected shapes."""

    path = tmp_path / "bad.yml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(MalformedLookupTableError):
        load_lookups(path)
