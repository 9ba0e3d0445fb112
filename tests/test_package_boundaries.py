"""Guardrail tests for the pure `levels` package."""

from __future__ import annotations

from pathlib import Path

import pytest

pytestmark = pytest.mark.integration

LEVELS_DIR = Path(__file__).resolve().parent.parent / "levels"


def test_levels_package_has_no_django_imports() -> None:
    """The ingestion core stays importable without Django."""

    sources = sorted(LEVELS_DIR.rglob("*.py"))
    assert sources

    for path in sources:
        source = path.read_text(encoding="utf-8")
        assert "import django" not in source, path
        assert "from django" not in source, path
