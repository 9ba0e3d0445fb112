"""Pytest fixtures shared across level ingestion tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

Row = dict[str, str]


@pytest.fixture
def make_row() -> Callable[..., Row]:
    """Return a factory for export rows with sensible defaults."""

    def _make_row(
        type: str,
        name: str = "",
        details: str = "",
        *,
        level_id: str = "1",
        level_name: str = "Riverlands Campaign",
        location: str = "Territory: Riverlands",
        location_hints: str = "",
    ) -> Row:
        return {
            "Level ID": level_id,
            "Level Name": level_name,
            "Type": type,
            "Name": name,
            "Details": details,
            "Location": location,
            "Location hints": location_hints,
        }

    return _make_row


@pytest.fixture
def sample_rows(make_row) -> list[Row]:
    """Return a small export covering every row Type."""

    return [
        make_row("Meta", "Total Armies Required", "1.2M"),
        make_row("Meta", "Total Territories", "42"),
        make_row("Meta", "Total Powers Available", "TWx2 SACx1"),
        make_row("Largest Territories", "", "250K", location="Territory: Riverlands"),
        make_row("Largest Territories", "", "1.5M (QS)", location="Territory: Highmoor"),
        make_row(
            "Largest Territories",
            "",
            "900K JS",
            location="Bonus: Old Fort",
            location_hints="Part of bonuses: Eastern Reach, Old Guard",
        ),
        make_row("Largest Cache", "Army Cache", "10K", location="Territory: Ashford"),
        make_row("Largest Cache", "Army Cache", "25K", location="Territory: Bramble"),
        make_row("Largest Cache", "Money Cache", "3M", location="Territory: Cinder"),
        make_row("Hospital", "", "Base armies saved: 100; Upgrade costs: 1K, 5K", location="Territory: Dunmore"),
        make_row("Market", "Mixtup", "Resources: Iron, Wood, Stone, Salt", location="Territory: Eastgate"),
        make_row("Market", "Belluminkling", "Resources: Gold, Silk, Tea, Spice", location="Territory: Fairhold"),
        make_row("Mercenary Camp", "", "Base mercs: 2K; Base cost: 15", location="Territory: Glenrock"),
        make_row("Dig Sites", "", "Cost: 10K; Time: 4; Type: c50 u30 r5", location="Territory: Harrow"),
        make_row("Recipe", "Steel", "Requires: Iron x2, Coal x1.5K", location="Territory: Ironside"),
        make_row("Tech Recipe", "!MS: Drafting", "Requires: Steel x10"),
        make_row(
            "Meta",
            "Total Base Money Generation Per Sec",
            "128.7",
            level_id="10005",
            level_name="Hardened Riverlands",
        ),
    ]


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django or filesystem access.
    - `integration`: tests touching Django, management commands, or files.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
