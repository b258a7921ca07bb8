"""
Tile Pattern Learning - Pattern Record

A pattern pairs a center terrain and its 8-neighbor context with the tiles
observed there, how often it was seen, and which maps it came from.
"""

from dataclasses import dataclass, field

# Quality sub-scores reach 1.0 at these counts
FREQUENCY_CAP = 10
VARIETY_CAP = 5
PROVENANCE_CAP = 3


def quality_score(frequency: int, tile_variety: int, source_count: int) -> float:
    """
    Reliability score of a pattern in [0.0, 1.0].

    Mean of three linearly scaled sub-scores, each capped at 1.0:
    observation count over 10, distinct tiles over 5, distinct sources over 3.
    """
    frequency_score = min(frequency / FREQUENCY_CAP, 1.0)
    variety_score = min(tile_variety / VARIETY_CAP, 1.0)
    provenance_score = min(source_count / PROVENANCE_CAP, 1.0)
    return (frequency_score + variety_score + provenance_score) / 3


@dataclass
class Pattern:
    """Tiles observed for one (center terrain, neighbor context) pair."""

    center_terrain: int
    neighbor_context: tuple[int, ...]  # NW, N, NE, W, E, SW, S, SE
    valid_tiles: list[int] = field(default_factory=list)  # first = primary
    frequency: int = 0
    sources: list[str] = field(default_factory=list)  # distinct, insertion order

    @property
    def primary_tile(self) -> int | None:
        return self.valid_tiles[0] if self.valid_tiles else None

    @property
    def tile_variety(self) -> int:
        return len(self.valid_tiles)

    @property
    def source_count(self) -> int:
        return len(self.sources)

    @property
    def quality(self) -> float:
        return quality_score(self.frequency, self.tile_variety, self.source_count)

    def add_tile(self, tile: int) -> bool:
        """Append a tile if not already present. Returns True if added."""
        if tile in self.valid_tiles:
            return False
        self.valid_tiles.append(tile)
        return True

    def add_source(self, source: str) -> bool:
        """Record a provenance id if not already present. Returns True if added."""
        if source in self.sources:
            return False
        self.sources.append(source)
        return True

    def similarity(self, context) -> int:
        """Count of positions (0-8) where this pattern's context equals the given one."""
        return sum(1 for ours, theirs in zip(self.neighbor_context, context) if ours == theirs)

    def to_dict(self) -> dict:
        """Convert pattern to dictionary for JSON serialization."""
        return {
            "center_terrain": self.center_terrain,
            "neighbor_context": list(self.neighbor_context),
            "valid_tiles": list(self.valid_tiles),
            "frequency": self.frequency,
            "quality": round(self.quality, 4),
            "source_count": self.source_count,
            "tile_variety": self.tile_variety,
            "sources": list(self.sources),
        }

    @staticmethod
    def from_dict(data: dict) -> "Pattern":
        """
        Create pattern from dictionary.

        Derived fields (quality, source_count, tile_variety) are ignored and
        recomputed from the stored lists.
        """
        sources = data.get("sources")
        if sources is None:
            # Snapshots without source names keep only the count
            sources = [f"unknown_{i}" for i in range(int(data.get("source_count", 0)))]

        return Pattern(
            center_terrain=int(data["center_terrain"]),
            neighbor_context=tuple(int(v) for v in data["neighbor_context"]),
            valid_tiles=[int(t) for t in data.get("valid_tiles", [])],
            frequency=int(data.get("frequency", 0)),
            sources=[str(s) for s in sources],
        )
