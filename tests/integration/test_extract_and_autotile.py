"""Integration tests: learn from a map, then replay it."""

from tilepatterns.core.autotiler import AutoTiler
from tilepatterns.core.extractor import PatternExtractor
from tilepatterns.core.match_engine import TIER_EXACT, TIER_SIMILAR
from tilepatterns.core.pattern_database import PatternDatabase
from tilepatterns.formats.map_data import MapData


def test_replaying_learned_map_reproduces_tiles(small_map):
    """Every signature in the pond map has one tile, so replay is exact."""
    db = PatternDatabase("grassland")
    PatternExtractor(db).extract_map(small_map)

    result = AutoTiler(db).fill(small_map.terrain)

    assert result.coverage(TIER_EXACT) == 1.0
    assert result.tiles == small_map.tiles


def test_bigger_pond_uses_similarity(small_map):
    db = PatternDatabase("grassland")
    PatternExtractor(db).extract_map(small_map)

    terrain = [
        [1, 1, 1, 1, 1, 1],
        [1, 1, 2, 2, 2, 1],
        [1, 1, 2, 2, 2, 1],
        [1, 1, 2, 2, 2, 1],
        [1, 1, 1, 1, 1, 1],
    ]
    result = AutoTiler(db).fill(terrain)

    # Centre of the sand patch was never seen surrounded by sand
    assert result.tiers[2][3] == TIER_SIMILAR
    assert result.tiles[2][3] in db.terrain_tiles[2]
    # Grass with no sand nearby still matches exactly
    assert result.tiers[0][0] == TIER_EXACT
    assert result.tiles[0][0] == 0x10


def test_stats_and_validation_after_extraction(small_map, tmp_path):
    db = PatternDatabase("grassland")
    PatternExtractor(db).extract_map(small_map)

    stats = db.get_stats()
    assert stats["terrains_covered"] == 2
    assert stats["unique_tiles"] == 6
    assert sum(stats["quality_distribution"].values()) == stats["total_patterns"]
    assert db.validate()["valid"] is True

    # Learn a copy saved to disk under another name
    path = tmp_path / "copy.json"
    small_map.name = "pond_copy"
    small_map.save(path)
    copy = MapData()
    copy.load(path)

    PatternExtractor(db).extract_map(copy)
    assert db.get_pattern(1, [1] * 8).sources == ["pond", "pond_copy"]
    assert db.get_pattern(1, [1] * 8).frequency == 8
