"""
Tile Pattern Learning - Learner

Merges (center, context, tile, source) observations into a PatternStore.
"""

import operator
from typing import Sequence

from .pattern_store import PatternStore
from .signature import InvalidContext, normalize_context


class PatternLearner:
    """Ingests observations into a pattern store."""

    def __init__(self, store: PatternStore):
        self.store = store

    def add_pattern(self, center: int, context: Sequence[int], tile: int, source: str):
        """
        Record one observation of a tile placed in a terrain neighborhood.

        The first tile ever seen for a signature stays its primary tile.
        Frequency counts every call, even when tile and source are known.
        Derived indices are only marked stale, never updated here.

        Args:
            center: Center terrain id
            context: 8 neighbor terrain ids (NW, N, NE, W, E, SW, S, SE)
            tile: Tile index placed at the center cell
            source: Provenance id, e.g. the map name

        Terrain ids and the tile are stored as plain ints, so numpy integers
        from a terrain grid are accepted.

        Raises:
            InvalidContext: If the context length is not exactly 8 or a terrain
                id is not an integer. The store is left untouched.
            TypeError: If the tile is not an integer
        """
        context = normalize_context(context)
        try:
            center = operator.index(center)
        except TypeError:
            raise InvalidContext(len(context), f"non-integer center terrain {center!r}")
        tile = operator.index(tile)

        pattern = self.store.get_or_create(center, context)
        pattern.add_tile(tile)
        pattern.add_source(source)
        pattern.frequency += 1

        self.store.mark_stale()
