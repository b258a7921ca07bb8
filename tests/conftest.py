"""Shared pytest fixtures for pattern learning tests."""

from pathlib import Path

import pytest

from tilepatterns.core.pattern_database import PatternDatabase
from tilepatterns.formats.map_data import MapData

ALL_GRASS = [1, 1, 1, 1, 1, 1, 1, 1]


@pytest.fixture
def fixtures_dir():
    """Path to JSON fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def small_map_path(fixtures_dir):
    """Path to the 5x4 pond map (grass with a 2x2 sand patch)."""
    return fixtures_dir / "small_map.json"


@pytest.fixture
def small_map(small_map_path):
    """Load the 5x4 pond map."""
    map_data = MapData()
    map_data.load(small_map_path)
    return map_data


@pytest.fixture
def empty_db():
    """Create an empty pattern database."""
    return PatternDatabase("grassland")


@pytest.fixture
def grass_db():
    """Database holding one all-grass pattern with tile 5, indices rebuilt."""
    db = PatternDatabase("grassland")
    db.add_pattern(1, ALL_GRASS, 5, "map_a")
    db.rebuild()
    return db
