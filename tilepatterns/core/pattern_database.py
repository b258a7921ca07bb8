"""
Tile Pattern Learning - Pattern Database

Tileset-scoped owner of a pattern store and the components that read and
write it. This is the surface editor and generation code talk to.
"""

from pathlib import Path
from typing import Sequence

from ..formats import compact_json as json
from .learner import PatternLearner
from .match_engine import MatchEngine, MatchResult
from .pattern import Pattern
from .pattern_stats import TILES_PER_TILESET, PatternStats
from .pattern_store import PatternStore
from .signature import InvalidContext, make_signature, parse_signature


class SnapshotError(ValueError):
    """Raised when a pattern snapshot cannot be imported."""

    def __init__(self, message: str, signature: str | None = None):
        self.signature = signature
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.signature is None:
            return f"Invalid pattern snapshot: {self.message}"
        return f"Invalid pattern snapshot entry {self.signature!r}: {self.message}"


def new_extraction_stats() -> dict:
    return {
        "maps_processed": 0,
        "cells_processed": 0,
        "rejected_observations": 0,
        "sources": [],
    }


class PatternDatabase:
    """
    Learned tile patterns for a single tileset.

    Example:
        db = PatternDatabase("grassland")
        db.add_pattern(1, [1, 1, 1, 1, 1, 1, 1, 1], 5, "map_a")
        db.rebuild()
        db.get_best_tile(1, [2, 1, 1, 1, 1, 1, 1, 1])  # -> 5
    """

    def __init__(self, tileset_id: str, tile_limit: int = TILES_PER_TILESET):
        self.tileset_id = tileset_id
        self.store = PatternStore()
        self.learner = PatternLearner(self.store)
        self.matcher = MatchEngine(self.store)
        self.stats = PatternStats(self.store, tile_limit=tile_limit)
        self.extraction_stats: dict = new_extraction_stats()

    def __len__(self) -> int:
        return len(self.store)

    @property
    def patterns(self) -> dict[str, Pattern]:
        return self.store.patterns

    @property
    def terrain_tiles(self) -> dict[int, list[int]]:
        return self.store.terrain_tiles

    @property
    def tile_relationships(self) -> dict[int, set[int]]:
        return self.store.tile_relationships

    @property
    def index_state(self) -> str:
        return self.store.index_state

    def add_pattern(self, center: int, context: Sequence[int], tile: int, source: str) -> bool:
        """
        Learn one observation.

        Returns:
            True if recorded, False if the context was malformed and the
            observation was rejected (counted in extraction_stats)
        """
        try:
            self.learner.add_pattern(center, context, tile, source)
        except InvalidContext:
            self.extraction_stats["rejected_observations"] += 1
            return False
        return True

    def rebuild(self):
        """Recompute the terrain and tile-relationship indices."""
        self.store.rebuild()

    def get_best_tile(self, center: int, context: Sequence[int]) -> int:
        return self.matcher.get_best_tile(center, context)

    def match(self, center: int, context: Sequence[int]) -> MatchResult:
        return self.matcher.match(center, context)

    def get_pattern(self, center: int, context: Sequence[int]) -> Pattern | None:
        """Pattern learned for exactly this neighborhood, if any."""
        try:
            return self.store.get(make_signature(center, context))
        except InvalidContext:
            return None

    def get_related_tiles(self, tile: int) -> set[int]:
        """Tiles sharing a terrain bucket with the given tile (as of the last rebuild)."""
        return set(self.store.tile_relationships.get(tile, set()))

    def get_stats(self) -> dict:
        return self.stats.get_stats()

    def validate(self) -> dict:
        return self.stats.validate()

    def export_to_json(self) -> dict:
        """
        Snapshot of the database as plain JSON-compatible data.

        terrain_tiles reflects the last rebuild, like every other reader.
        """
        return {
            "tileset_id": self.tileset_id,
            "extraction_stats": {
                **self.extraction_stats,
                "sources": list(self.extraction_stats.get("sources", [])),
            },
            "patterns": {
                signature: pattern.to_dict() for signature, pattern in self.store.items()
            },
            "terrain_tiles": {
                str(terrain): list(tiles) for terrain, tiles in self.store.terrain_tiles.items()
            },
        }

    @classmethod
    def from_json(cls, snapshot: dict, tile_limit: int = TILES_PER_TILESET) -> "PatternDatabase":
        """
        Rebuild a database from an export_to_json() snapshot.

        Pattern order is preserved and the derived indices are rebuilt.

        Raises:
            SnapshotError: If required keys are missing or an entry's signature
                does not match its center terrain and context
        """
        for key in ("tileset_id", "patterns"):
            if key not in snapshot:
                raise SnapshotError(f"missing '{key}'")

        db = cls(snapshot["tileset_id"], tile_limit=tile_limit)
        extraction_stats = snapshot.get("extraction_stats", {})
        db.extraction_stats.update(extraction_stats)
        db.extraction_stats["sources"] = list(extraction_stats.get("sources", []))

        for signature, entry in snapshot["patterns"].items():
            try:
                pattern = Pattern.from_dict(entry)
                expected = make_signature(pattern.center_terrain, pattern.neighbor_context)
                parse_signature(signature)
            except KeyError as e:
                raise SnapshotError(f"missing field {e}", signature)
            except (ValueError, TypeError) as e:
                raise SnapshotError(str(e), signature)

            if expected != signature:
                raise SnapshotError(f"signature does not match fields ({expected})", signature)

            db.store.put(signature, pattern)

        db.rebuild()
        return db

    def save(self, path: str | Path):
        """Write the snapshot to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.export_to_json(), f, indent=2)

    @classmethod
    def load(cls, path: str | Path, tile_limit: int = TILES_PER_TILESET) -> "PatternDatabase":
        """Load a database saved with save()."""
        with open(path) as f:
            snapshot = json.load(f)
        return cls.from_json(snapshot, tile_limit=tile_limit)
