"""
Tile Pattern Learning - Pattern Extractor

Walks map data and feeds every cell's (terrain, neighbors, tile) observation
to a pattern database, recording where the patterns came from.
"""

from typing import Iterable, List

import numpy as np

from ..formats.map_data import MapData
from .pattern_database import PatternDatabase
from .signature import NEIGHBOR_OFFSETS


def pad_terrain(terrain: List[List[int]]) -> np.ndarray:
    """
    Terrain grid padded by one cell on every side.

    Padding repeats the edge value, so a cell on the map border sees its own
    row/column continued beyond the edge.
    """
    return np.pad(np.asarray(terrain, dtype=np.int64), 1, mode="edge")


def neighborhood_at(padded: np.ndarray, row: int, col: int) -> list[int]:
    """8 neighbor terrain ids of (row, col) in an already padded grid."""
    return [int(padded[row + 1 + dr, col + 1 + dc]) for dr, dc in NEIGHBOR_OFFSETS]


def extract_neighborhood(terrain: List[List[int]], row: int, col: int) -> list[int]:
    """
    Neighbor context (NW, N, NE, W, E, SW, S, SE) of a cell.

    Args:
        terrain: 2D list of terrain ids (rows of columns)
        row: Cell row
        col: Cell column

    Returns:
        List of 8 terrain ids, edge-clamped outside the grid
    """
    return neighborhood_at(pad_terrain(terrain), row, col)


class PatternExtractor:
    """Learns patterns from maps into a database."""

    def __init__(self, database: PatternDatabase):
        self.database = database

    def extract_map(self, map_data: MapData, rebuild: bool = True, verbose: bool = False) -> int:
        """
        Learn every cell of a map.

        Args:
            map_data: Map with aligned terrain and tile layers
            rebuild: If True, rebuild the derived indices afterwards
            verbose: If True, print progress messages

        Returns:
            Number of observations recorded
        """
        stats = self.database.extraction_stats
        source = map_data.name
        recorded = 0

        if map_data.height and map_data.width:
            padded = pad_terrain(map_data.terrain)
            for row_idx, row in enumerate(map_data.terrain):
                for col_idx, center in enumerate(row):
                    context = neighborhood_at(padded, row_idx, col_idx)
                    tile = map_data.tiles[row_idx][col_idx]
                    if self.database.add_pattern(center, context, tile, source):
                        recorded += 1
                    stats["cells_processed"] += 1

        stats["maps_processed"] += 1
        if source not in stats["sources"]:
            stats["sources"].append(source)

        if verbose:
            print(f"  {source}: {recorded} cells, {len(self.database)} patterns total")

        if rebuild:
            self.database.rebuild()

        return recorded

    def extract_maps(self, maps: Iterable[MapData], verbose: bool = False) -> int:
        """
        Learn several maps, rebuilding the indices once at the end.

        Returns:
            Total number of observations recorded
        """
        total = 0
        for map_data in maps:
            if map_data.tileset != self.database.tileset_id and verbose:
                print(
                    f"  Warning: {map_data.name} uses tileset '{map_data.tileset}', "
                    f"expected '{self.database.tileset_id}'"
                )
            total += self.extract_map(map_data, rebuild=False, verbose=verbose)

        self.database.rebuild()

        if verbose:
            print(f"Extracted {total} observations into {len(self.database)} patterns")

        return total
