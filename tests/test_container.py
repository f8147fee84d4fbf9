"""Tests for container wiring."""

import pytest

from little_ladle.config import Settings
from little_ladle.containers import build_container
from little_ladle.domain.profiles import AgeBracket
from little_ladle.errors import CatalogError


def test_build_container_loads_packaged_data(settings) -> None:
    container = build_container(settings)

    assert len(container.catalog) == 22
    assert set(container.guide.tables) == {
        AgeBracket.MONTHS_6_12,
        AgeBracket.MONTHS_12_24,
    }
    assert container.recommendation_engine.scorer is container.scorer


def test_build_container_passes_search_limits() -> None:
    container = build_container(Settings(suggestion_limit=1))

    assert container.recommendation_engine.rules.suggestion_limit == 1


def test_build_container_fails_on_missing_catalog(tmp_path) -> None:
    with pytest.raises(CatalogError):
        build_container(Settings(catalog_path=tmp_path / "missing.json"))
