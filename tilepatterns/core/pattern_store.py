"""
Tile Pattern Learning - Pattern Store

Insertion-ordered mapping from signature to Pattern, plus the derived
terrain -> tiles and tile -> related tiles indices.

The derived indices are not kept in step with the patterns. They are rebuilt
wholesale by rebuild(); between a learning call and the next rebuild they are
stale and readers see the previous snapshot.
"""

from typing import Dict, Iterator, List, Optional, Set

from .pattern import Pattern
from .signature import make_signature, parse_signature

INDEX_STALE = "stale"
INDEX_FRESH = "fresh"


class PatternStore:
    """Patterns for one tileset, keyed by signature in insertion order."""

    def __init__(self):
        self.patterns: Dict[str, Pattern] = {}  # signature -> Pattern
        self.terrain_tiles: Dict[int, List[int]] = {}  # terrain -> distinct tiles, first-seen order
        self.tile_relationships: Dict[int, Set[int]] = {}  # tile -> co-occurring tiles
        self.index_state: str = INDEX_STALE

    def __len__(self) -> int:
        return len(self.patterns)

    def __contains__(self, signature: str) -> bool:
        return signature in self.patterns

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self.patterns.values())

    @property
    def is_fresh(self) -> bool:
        return self.index_state == INDEX_FRESH

    def get(self, signature: str) -> Optional[Pattern]:
        return self.patterns.get(signature)

    def items(self):
        return self.patterns.items()

    def get_or_create(self, center: int, context) -> Pattern:
        """
        Return the pattern for (center, context), creating an empty one if new.

        New patterns store the ids parsed back from the signature, so they
        are always plain ints.

        Raises:
            InvalidContext: If the context length is not exactly 8
        """
        signature = make_signature(center, context)
        pattern = self.patterns.get(signature)
        if pattern is None:
            center, context = parse_signature(signature)
            pattern = Pattern(center_terrain=center, neighbor_context=context)
            self.patterns[signature] = pattern
        return pattern

    def put(self, signature: str, pattern: Pattern):
        """Insert a fully built pattern (used when importing snapshots)."""
        self.patterns[signature] = pattern
        self.mark_stale()

    def patterns_for_terrain(self, center: int) -> Iterator[Pattern]:
        """Patterns with the given center terrain, in insertion order."""
        return (p for p in self.patterns.values() if p.center_terrain == center)

    def mark_stale(self):
        self.index_state = INDEX_STALE

    def rebuild(self):
        """
        Recompute terrain_tiles and tile_relationships from the patterns.

        Both indices are built aside and swapped in together, so a reader never
        sees a cleared index that is not yet repopulated.
        """
        terrain_tiles: Dict[int, List[int]] = {}
        for pattern in self.patterns.values():
            bucket = terrain_tiles.setdefault(pattern.center_terrain, [])
            for tile in pattern.valid_tiles:
                if tile not in bucket:
                    bucket.append(tile)

        tile_relationships: Dict[int, Set[int]] = {}
        for bucket in terrain_tiles.values():
            for tile in bucket:
                related = tile_relationships.setdefault(tile, set())
                related.update(other for other in bucket if other != tile)

        self.terrain_tiles, self.tile_relationships = terrain_tiles, tile_relationships
        self.index_state = INDEX_FRESH

    def terrain_default(self, center: int) -> Optional[int]:
        """First tile of the terrain's bucket, or None if the bucket is empty/unknown."""
        bucket = self.terrain_tiles.get(center)
        return bucket[0] if bucket else None
