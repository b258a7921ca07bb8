"""
Tile Pattern Learning - Auto-Tiler

Replays learned patterns over a whole terrain grid to choose a tile for
every cell.
"""

from dataclasses import dataclass, field
from typing import List

from .extractor import neighborhood_at, pad_terrain
from .match_engine import MATCH_TIERS
from .pattern_database import PatternDatabase


@dataclass
class AutoTileResult:
    """Tiles chosen for a terrain grid and which match tier chose each one."""
    tiles: List[List[int]] = field(default_factory=list)
    tiers: List[List[str]] = field(default_factory=list)
    tier_counts: dict = field(default_factory=dict)  # tier -> cell count

    @property
    def cell_count(self) -> int:
        return sum(self.tier_counts.values())

    def coverage(self, tier: str) -> float:
        """Fraction of cells answered by the given tier."""
        total = self.cell_count
        return self.tier_counts.get(tier, 0) / total if total else 0.0


class AutoTiler:
    """Fills terrain grids with tiles from a pattern database."""

    def __init__(self, database: PatternDatabase):
        self.database = database

    def fill(self, terrain: List[List[int]]) -> AutoTileResult:
        """
        Pick a tile for every terrain cell.

        Args:
            terrain: 2D list of terrain ids (rows of columns)

        Returns:
            AutoTileResult with tile and tier grids the same shape as terrain
        """
        result = AutoTileResult(tier_counts={tier: 0 for tier in MATCH_TIERS})
        if not terrain or not terrain[0]:
            return result

        padded = pad_terrain(terrain)
        for row_idx, row in enumerate(terrain):
            tile_row = []
            tier_row = []
            for col_idx, center in enumerate(row):
                match = self.database.match(center, neighborhood_at(padded, row_idx, col_idx))
                tile_row.append(match.tile)
                tier_row.append(match.tier)
                result.tier_counts[match.tier] += 1
            result.tiles.append(tile_row)
            result.tiers.append(tier_row)

        return result

    def fill_cell(self, terrain: List[List[int]], row: int, col: int) -> int:
        """Tile for a single cell of a terrain grid, e.g. after a paint stroke."""
        padded = pad_terrain(terrain)
        return self.database.get_best_tile(terrain[row][col], neighborhood_at(padded, row, col))
