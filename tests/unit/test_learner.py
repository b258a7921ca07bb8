"""Unit tests for PatternLearner and PatternDatabase.add_pattern."""

import json

import numpy as np
import pytest

from tilepatterns.core.learner import PatternLearner
from tilepatterns.core.pattern_database import PatternDatabase
from tilepatterns.core.pattern_store import INDEX_FRESH, INDEX_STALE, PatternStore
from tilepatterns.core.signature import InvalidContext, make_signature

ALL_GRASS = [1, 1, 1, 1, 1, 1, 1, 1]
SIGNATURE = make_signature(1, ALL_GRASS)


@pytest.fixture
def store():
    """Create an empty pattern store."""
    return PatternStore()


@pytest.fixture
def learner(store):
    return PatternLearner(store)


class TestAddPattern:
    """Tests for learning observations."""

    def test_creates_pattern(self, learner, store):
        learner.add_pattern(1, ALL_GRASS, 5, "map_a")

        pattern = store.get(SIGNATURE)
        assert pattern is not None
        assert pattern.center_terrain == 1
        assert pattern.neighbor_context == tuple(ALL_GRASS)
        assert pattern.valid_tiles == [5]
        assert pattern.frequency == 1
        assert pattern.sources == ["map_a"]

    def test_repeat_observation_only_bumps_frequency(self, learner, store):
        """Same observation twice: membership unchanged, frequency +1 each call."""
        learner.add_pattern(1, ALL_GRASS, 5, "map_a")
        learner.add_pattern(1, ALL_GRASS, 5, "map_a")
        learner.add_pattern(1, ALL_GRASS, 5, "map_a")

        pattern = store.get(SIGNATURE)
        assert pattern.valid_tiles == [5]
        assert pattern.sources == ["map_a"]
        assert pattern.frequency == 3
        assert len(store) == 1

    def test_primary_tile_is_first_seen(self, learner, store):
        learner.add_pattern(1, ALL_GRASS, 5, "map_a")
        learner.add_pattern(1, ALL_GRASS, 7, "map_a")
        learner.add_pattern(1, ALL_GRASS, 5, "map_b")

        pattern = store.get(SIGNATURE)
        assert pattern.valid_tiles == [5, 7]
        assert pattern.primary_tile == 5
        assert pattern.sources == ["map_a", "map_b"]
        assert pattern.frequency == 3

    def test_distinct_contexts_make_distinct_patterns(self, learner, store):
        learner.add_pattern(1, ALL_GRASS, 5, "map_a")
        learner.add_pattern(1, [2, 1, 1, 1, 1, 1, 1, 1], 6, "map_a")
        learner.add_pattern(2, ALL_GRASS, 9, "map_a")

        assert len(store) == 3
        assert list(store.patterns) == [
            SIGNATURE,
            make_signature(1, [2, 1, 1, 1, 1, 1, 1, 1]),
            make_signature(2, ALL_GRASS),
        ]

    def test_malformed_context_raises_without_mutation(self, learner, store):
        with pytest.raises(InvalidContext):
            learner.add_pattern(1, [1, 1, 1], 5, "map_a")

        assert len(store) == 0

    def test_numpy_ids_stored_as_plain_ints(self, learner, store):
        """Ids taken from a numpy terrain grid are stored as builtin ints."""
        learner.add_pattern(np.int64(1), np.array(ALL_GRASS), np.int64(5), "map_a")

        pattern = store.get(SIGNATURE)
        assert type(pattern.center_terrain) is int
        assert all(type(value) is int for value in pattern.neighbor_context)
        assert type(pattern.valid_tiles[0]) is int

    def test_numpy_and_plain_ids_share_a_pattern(self, learner, store):
        learner.add_pattern(1, ALL_GRASS, 5, "map_a")
        learner.add_pattern(np.int32(1), np.array(ALL_GRASS, dtype=np.uint8), np.int64(5), "map_b")

        assert len(store) == 1
        assert store.get(SIGNATURE).valid_tiles == [5]

    def test_float_context_rejected_without_mutation(self, learner, store):
        with pytest.raises(InvalidContext):
            learner.add_pattern(1, [1.5] * 8, 5, "map_a")

        assert len(store) == 0

    def test_float_tile_rejected_without_mutation(self, learner, store):
        with pytest.raises(TypeError):
            learner.add_pattern(1, ALL_GRASS, 5.0, "map_a")

        assert len(store) == 0

    def test_does_not_touch_indices(self, learner, store):
        learner.add_pattern(1, ALL_GRASS, 5, "map_a")
        store.rebuild()
        learner.add_pattern(3, ALL_GRASS, 8, "map_a")

        assert 3 not in store.terrain_tiles
        assert store.index_state == INDEX_STALE


class TestDatabaseAddPattern:
    """Tests for the database-level boundary."""

    def test_returns_true_on_success(self, empty_db):
        assert empty_db.add_pattern(1, ALL_GRASS, 5, "map_a") is True
        assert len(empty_db) == 1

    def test_rejects_malformed_context(self, empty_db):
        assert empty_db.add_pattern(1, [1] * 9, 5, "map_a") is False
        assert len(empty_db) == 0
        assert empty_db.extraction_stats["rejected_observations"] == 1

    def test_rejects_float_context(self, empty_db):
        assert empty_db.add_pattern(1, [1.5] * 8, 5, "map_a") is False
        assert len(empty_db) == 0

    def test_numpy_observation_exports_and_saves(self, empty_db, tmp_path):
        """A database learned from numpy ids can be serialized and reloaded."""
        context = np.array(ALL_GRASS)
        assert empty_db.add_pattern(np.int64(1), context, np.int64(5), "map_a") is True
        empty_db.rebuild()

        json.dumps(empty_db.export_to_json())

        path = tmp_path / "grassland.json"
        empty_db.save(path)
        loaded = PatternDatabase.load(path)
        assert loaded.get_best_tile(1, ALL_GRASS) == 5
        assert loaded.get_best_tile(1, context) == 5

    def test_learning_marks_fresh_index_stale(self, grass_db):
        assert grass_db.index_state == INDEX_FRESH
        grass_db.add_pattern(1, ALL_GRASS, 5, "map_a")
        assert grass_db.index_state == INDEX_STALE
