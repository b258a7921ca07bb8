"""
Tile Pattern Learning - Match Engine

Resolves a (terrain, context) query to a tile index in three tiers:

1. Exact: a pattern with the same signature exists -> its primary tile.
2. Similar: the same-terrain pattern whose context agrees in the most
   positions (at least one) -> its primary tile. Ties go to the pattern
   learned first.
3. Default: the first tile in the terrain's bucket of the derived index,
   or NO_TILE when the terrain has no bucket.

Lookups never raise. NO_TILE (0) is also a legal tile index, so callers that
care must check MatchResult.tier rather than the tile value.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .pattern import Pattern
from .pattern_store import PatternStore
from .signature import CONTEXT_SIZE, InvalidContext, make_signature, parse_signature

NO_TILE = 0

TIER_EXACT = "exact"
TIER_SIMILAR = "similar"
TIER_DEFAULT = "default"
TIER_NONE = "none"

MATCH_TIERS = (TIER_EXACT, TIER_SIMILAR, TIER_DEFAULT, TIER_NONE)


@dataclass
class MatchResult:
    """Outcome of a tile lookup."""
    tile: int
    tier: str
    similarity: int = 0           # matching context positions (8 for exact)
    signature: str | None = None  # signature of the pattern that answered


class MatchEngine:
    """Picks tiles for terrain neighborhoods from a pattern store."""

    def __init__(self, store: PatternStore):
        self.store = store

    def get_best_tile(self, center: int, context: Sequence[int]) -> int:
        """Tile index for the neighborhood, NO_TILE when nothing is known."""
        return self.match(center, context).tile

    def match(self, center: int, context: Sequence[int]) -> MatchResult:
        """
        Resolve a query and report which tier answered it.

        A context that is not 8 integer terrain ids cannot be compared, so it
        skips straight to the terrain default.
        """
        try:
            signature = make_signature(center, context)
        except InvalidContext:
            signature = None

        if signature is not None:
            center, context = parse_signature(signature)
            pattern = self.store.get(signature)
            if pattern is not None and pattern.valid_tiles:
                return MatchResult(pattern.valid_tiles[0], TIER_EXACT, CONTEXT_SIZE, signature)

            result = self._best_similar(center, context)
            if result is not None:
                return result

        default_tile = self.store.terrain_default(center)
        if default_tile is not None:
            return MatchResult(default_tile, TIER_DEFAULT)

        return MatchResult(NO_TILE, TIER_NONE)

    def _best_similar(self, center: int, context: Sequence[int]) -> Optional[MatchResult]:
        """Highest-scoring same-terrain pattern; strict > keeps the earliest on ties."""
        best_score = 0
        best_signature: str | None = None
        best_pattern: Pattern | None = None

        for signature, pattern in self.store.items():
            if pattern.center_terrain != center or not pattern.valid_tiles:
                continue

            score = pattern.similarity(context)
            if score > best_score:
                best_score = score
                best_signature = signature
                best_pattern = pattern

        if best_pattern is None:
            return None

        return MatchResult(best_pattern.valid_tiles[0], TIER_SIMILAR, best_score, best_signature)
