"""Static per-level lookup tables.

Base AP values and map image references are not part of the export, so they
are supplied from these tables. Ids of hard variants add 10000 to the base
level id; ids of the later map series add 20000.

Tables are immutable and passed to the aggregator explicitly. A YAML file can
overlay the built-in tables, for example when a new level ships before the
defaults are updated.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final

import yaml

from .errors import MalformedLookupTableError

DEFAULT_BASE_AP: Final[Mapping[int, float]] = MappingProxyType(
    {
        1: 0.23,
        2: 17.30,
        3: 31.13,
        4: 33.75,
        5: 42.99,
        10005: 128.7,
        6: 43.05,
        7: 50.40,
        8: 53.57,
        10008: 160.39,
        9: 83.95,
        10: 128.77,
        10010: 385.52,
        11: 194.80,
        12: 198.45,
        10012: 594.13,
        13: 201.67,
        14: 231.84,
        15: 298.84,
        10015: 894.66,
        16: 306.80,
        17: 311.35,
        18: 380.81,
        19: 469.45,
        20: 511.70,
        10020: 1531.88,
        21: 538.39,
        22: 562.48,
        10022: 1683.86,
        23: 588.75,
        24: 604.73,
        25: 614.78,
        10025: 1840.41,
        26: 622.67,
        27: 672.21,
        28: 722.30,
        10028: 2162.24,
        29: 878.54,
        30: 1066.45,
        10030: 3192.43,
        31: 1175.30,
        32: 1224.00,
        10032: 3664.00,
        20033: 120.26,
        20034: 134.03,
        20035: 153.51,
        20036: 163.44,
        20037: 247.14,
        20038: 271.15,
        20039: 369.87,
        20040: 437.96,
        20041: 470.79,
        20042: 516.82,
        20043: 636.28,
        20044: 753.4,
        20045: 1298.34,
        20046: 1785.48,
        20047: 4644.78,
        20048: 6752.28,
        20049: 11052.63,
    }
)

DEFAULT_MAP_REFERENCES: Final[Mapping[int, str]] = MappingProxyType(
    {
        1: "https://i.imgur.com/ohZpUCT.png",
        2: "https://i.imgur.com/UvC6a8I.png",
        3: "https://i.imgur.com/UKXVpBE.png",
        4: "https://i.imgur.com/w4NkjZE.png",
        5: "https://i.imgur.com/KHyizW7.png",
        10005: "https://i.imgur.com/YJZtguP.png",
        6: "https://i.imgur.com/lTZTknj.png",
        7: "https://i.imgur.com/4gxq1U4.png",
        8: "https://i.imgur.com/fsRW55h.png",
        10008: "https://i.imgur.com/pNZo05Q.png",
        9: "https://i.imgur.com/PWBZp31.png",
        10: "https://i.imgur.com/upnjf3E.png",
        10010: "https://i.imgur.com/JUnbTyJ.png",
        11: "https://i.imgur.com/UnzsX8w.png",
        12: "https://i.imgur.com/fpIOx85.png",
        10012: "https://i.gyazo.com/f7311d0a2492c13a3de070543042c412.png",
        13: "https://i.imgur.com/QGCmnl2.png",
        14: "https://i.imgur.com/T2XCtup.png",
        15: "https://i.imgur.com/iLsR4we.png",
        10015: "https://i.imgur.com/6EFPXDM.png",
        16: "https://i.imgur.com/gQtWEWL.jpeg",
        17: "https://i.imgur.com/AhwLFuH.png",
        18: "https://i.imgur.com/9D6862k.png",
        19: "https://i.imgur.com/G6XnqqS.png",
        20: "https://i.imgur.com/bw1MgCO.png",
        10020: "https://i.imgur.com/bpwzxlD.png",
        21: "https://i.imgur.com/btnQV6E.png",
        22: "https://i.imgur.com/8bueeXd.png",
        10022: "https://i.ibb.co/KNnjFcX/22b-Scandinavia-Hard.png",
        23: "https://i.imgur.com/Joofzp5.png",
        24: "https://i.imgur.com/ACtMiYb.png",
        25: "https://i.imgur.com/I2sDd3a.png",
        10025: "https://i.ibb.co/CJYG3Fx/25a-Hardened-Rise-and-Fall-of-the-Roman-Empire-HD.png",
        26: "https://i.imgur.com/lhdEb7M.png",
        27: "https://i.imgur.com/Oc1Ejc7.png",
        28: "https://i.imgur.com/4AiqDjD.png",
        10028: "https://i.imgur.com/0rDZLeg.png",
        29: "https://i.imgur.com/5XXLo83.png",
        30: "https://i.gyazo.com/8725ed7edf07d4c6af393fa566de5071.png",
        10030: "https://i.postimg.cc/TfSjMZqR/Idle-Warzone-Hardened-Triskelion.png",
        31: "https://i.gyazo.com/004cb5f1859a063dad9e07d5fa4954be.png",
        32: "https://i.imgur.com/3cpvaXa.png",
        10032: "https://i.postimg.cc/fW1svbL1/Hardened-Europe-Huge.png",
        20033: "https://i.gyazo.com/ee005fdd061f928f36b56cfa926b0d37.png",
        20034: "https://i.gyazo.com/74ae0c8f2710a24c45411581b74e9e82.png",
        20035: "https://i.gyazo.com/46618bdd5be4de73f59a473f9fadaf89.png",
        20036: "https://i.gyazo.com/e65f29b52c909606353ef6d23708f0ba.png",
        20037: "https://i.gyazo.com/6d8a8e629caa25091b11b12a5613aa46.png",
        20038: "https://i.imgur.com/GM3dQye.png",
        20039: "https://i.gyazo.com/e66c7bffa625124a7849e28f5755abda.png",
        20040: "https://i.gyazo.com/0eb66640f9c56e0ad38dc2ce1c186180.png",
        20041: "https://i.gyazo.com/9ad3d6cc8820274b4a5473d5715edbd3.png",
        20042: "https://i.gyazo.com/ecea8c43701f1ca9891d6c46f88055d2.png",
        20043: "https://i.gyazo.com/1d67fe47a90858ac84c05965d72e5eb2.png",
        20044: "https://i.gyazo.com/ecfede94e4c3059e5b9c7594ee75157a.png",
        20045: "https://i.gyazo.com/ce053ea613098dec4e32c48de0d091cd.png",
        20046: "https://i.gyazo.com/ce1ca5f7867abb9c391f01d4c5f309c5.png",
        20047: "https://i.imgur.com/jH9LJqW.png",
        20048: "https://i.imgur.com/Kwks7CR.png",
        20049: "https://i.imgur.com/6RLnaTb.png",
    }
)


@dataclass(frozen=True, slots=True)
class LevelLookups:
    """Lookup tables keyed by integer level id.

    Attributes:
        base_ap: Base AP value per level; absent ids have no AP.
        map_references: Map image reference per level; absent ids have no map.
    """

    base_ap: Mapping[int, float] = field(default_factory=lambda: MappingProxyType({}))
    map_references: Mapping[int, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_ap", MappingProxyType(dict(self.base_ap)))
        object.__setattr__(self, "map_references", MappingProxyType(dict(self.map_references)))


def default_lookups() -> LevelLookups:
    """Return the built-in lookup tables."""

    return LevelLookups(base_ap=DEFAULT_BASE_AP, map_references=DEFAULT_MAP_REFERENCES)


def load_lookups(path: str | Path, *, base: LevelLookups | None = None) -> LevelLookups:
    """Overlay a YAML lookup file on top of existing tables.

    The file may contain a `base_ap` mapping (level id -> number) and a `maps`
    mapping (level id -> string). Entries replace the matching ids of `base`.

    Args:
        path: Path to the YAML file.
        base: Tables to overlay; defaults to the built-in tables.

    Returns:
        New LevelLookups with the overrides applied.

    Raises:
        MalformedLookupTableError: When the file does not have the expected shape.
    """

    raw = Path(path).read_text(encoding="utf-8")
    try:
        payload = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise MalformedLookupTableError(f"Lookup file {str(path)!r} is not valid YAML: {exc}", raw_value=raw) from exc
    if not isinstance(payload, dict):
        raise MalformedLookupTableError(f"Lookup file {str(path)!r} must contain a mapping.", raw_value=raw)

    base = base if base is not None else default_lookups()
    base_ap = dict(base.base_ap)
    base_ap.update(_read_table(payload, "base_ap", value_types=(int, float), path=path))
    map_references = dict(base.map_references)
    map_references.update(_read_table(payload, "maps", value_types=(str,), path=path))
    return LevelLookups(base_ap=base_ap, map_references=map_references)


def _read_table(
    payload: dict[str, Any], key: str, *, value_types: tuple[type, ...], path: str | Path
) -> dict[int, Any]:
    """Validate one section of a lookup file."""

    section = payload.get(key) or {}
    if not isinstance(section, dict):
        raise MalformedLookupTableError(f"{key!r} in {str(path)!r} must be a mapping.", raw_value=repr(section))

    table: dict[int, Any] = {}
    for level_id, value in section.items():
        if isinstance(level_id, bool) or not isinstance(level_id, int):
            raise MalformedLookupTableError(
                f"{key!r} in {str(path)!r} has non-integer level id {level_id!r}.", raw_value=repr(level_id)
            )
        if isinstance(value, bool) or not isinstance(value, value_types):
            raise MalformedLookupTableError(
                f"{key!r} in {str(path)!r} has invalid value {value!r} for level {level_id}.", raw_value=repr(value)
            )
        table[level_id] = value
    return table
