"""
Tile Pattern Learning

Learns tile-placement conventions from existing maps and replays them to pick
the tile that matches the terrain surrounding a cell.
"""

from .core.pattern_database import PatternDatabase

__all__ = ["PatternDatabase"]
