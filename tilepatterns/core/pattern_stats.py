"""
Tile Pattern Learning - Pattern Statistics and Validation

Quality distribution and coverage figures for a pattern store, and an
advisory structural check. Nothing here mutates the store.
"""

from dataclasses import dataclass

import numpy as np

from .pattern_store import PatternStore
from .signature import CONTEXT_SIZE

TILES_PER_TILESET = 1024

HIGH_QUALITY = 0.7
MEDIUM_QUALITY = 0.4

# validate() finding kinds
EMPTY_TILES = "empty_tiles"
BAD_CONTEXT = "bad_context"
ZERO_FREQUENCY = "zero_frequency"
EMPTY_BUCKET = "empty_bucket"
TILE_OUT_OF_RANGE = "tile_out_of_range"
STALE_INDEX = "stale_index"


@dataclass
class StructuralIssue:
    """A malformed or degenerate entry found by validate()."""

    signature: str | None
    kind: str
    message: str

    def __str__(self) -> str:
        if self.signature is None:
            return self.message
        return f"Pattern {self.signature}: {self.message}"


def quality_bucket(quality: float) -> str:
    """Distribution bucket for a quality score."""
    if quality >= HIGH_QUALITY:
        return "high"
    if quality >= MEDIUM_QUALITY:
        return "medium"
    return "low"


def percentile_stats(values):
    """Return min/25th/50th/75th/max statistics."""
    if not values:
        raise ValueError("values cannot be empty in percentile_stats call")
    arr = np.array(values)
    return {
        "min": float(np.min(arr)),
        "25th": float(np.percentile(arr, 25)),
        "50th": float(np.percentile(arr, 50)),
        "75th": float(np.percentile(arr, 75)),
        "max": float(np.max(arr)),
        "count": len(values),
    }


class PatternStats:
    """Computes reports over a pattern store."""

    def __init__(self, store: PatternStore, tile_limit: int = TILES_PER_TILESET):
        self.store = store
        self.tile_limit = tile_limit

    def quality_distribution(self) -> dict[str, int]:
        distribution = {"high": 0, "medium": 0, "low": 0}
        for pattern in self.store:
            distribution[quality_bucket(pattern.quality)] += 1
        return distribution

    def get_stats(self) -> dict:
        """
        Database-level report.

        Returns:
            Dictionary with total_patterns, terrains_covered, unique_tiles,
            avg_tiles_per_pattern, avg_quality, quality_distribution,
            index_state and (when non-empty) frequency_percentiles
        """
        patterns = list(self.store)

        terrains = {p.center_terrain for p in patterns}
        unique_tiles: set[int] = set()
        for pattern in patterns:
            unique_tiles.update(pattern.valid_tiles)

        total = len(patterns)
        stats = {
            "total_patterns": total,
            "terrains_covered": len(terrains),
            "unique_tiles": len(unique_tiles),
            "avg_tiles_per_pattern": (
                sum(p.tile_variety for p in patterns) / total if total else 0.0
            ),
            "avg_quality": sum(p.quality for p in patterns) / total if total else 0.0,
            "quality_distribution": self.quality_distribution(),
            "index_state": self.store.index_state,
        }

        if patterns:
            stats["frequency_percentiles"] = percentile_stats(
                [p.frequency for p in patterns]
            )

        return stats

    def find_issues(self) -> tuple[list[StructuralIssue], list[StructuralIssue]]:
        """Collect (issues, warnings) without touching the store."""
        issues: list[StructuralIssue] = []
        warnings: list[StructuralIssue] = []

        for signature, pattern in self.store.items():
            if not pattern.valid_tiles:
                issues.append(StructuralIssue(signature, EMPTY_TILES, "no valid tiles"))

            if len(pattern.neighbor_context) != CONTEXT_SIZE:
                issues.append(
                    StructuralIssue(
                        signature,
                        BAD_CONTEXT,
                        f"context has {len(pattern.neighbor_context)} entries, "
                        f"expected {CONTEXT_SIZE}",
                    )
                )

            if pattern.frequency <= 0:
                warnings.append(StructuralIssue(signature, ZERO_FREQUENCY, "zero frequency"))

            out_of_range = [t for t in pattern.valid_tiles if not 0 <= t < self.tile_limit]
            if out_of_range:
                warnings.append(
                    StructuralIssue(
                        signature,
                        TILE_OUT_OF_RANGE,
                        f"tiles outside 0-{self.tile_limit - 1}: "
                        + ", ".join(f"0x{t:X}" for t in out_of_range),
                    )
                )

        for terrain, bucket in self.store.terrain_tiles.items():
            if not bucket:
                warnings.append(
                    StructuralIssue(None, EMPTY_BUCKET, f"Terrain {terrain} has no tiles")
                )

        if not self.store.is_fresh and len(self.store):
            warnings.append(
                StructuralIssue(None, STALE_INDEX, "Derived indices are stale; call rebuild()")
            )

        return issues, warnings

    def validate(self) -> dict:
        """
        Structural report of the store.

        Issues are malformed patterns (no tiles, context not 8 long). Warnings
        are degenerate but usable state (zero frequency, empty terrain bucket,
        tile outside the tileset, stale indices).

        Returns:
            {"valid": bool, "issues": [str, ...], "warnings": [str, ...]}
        """
        issues, warnings = self.find_issues()
        return {
            "valid": not issues,
            "issues": [str(issue) for issue in issues],
            "warnings": [str(warning) for warning in warnings],
        }
