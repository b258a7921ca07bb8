#!/usr/bin/env python3
"""
Tile Pattern Learning - Pattern Report

Prints quality statistics and the structural check for a pattern snapshot.
Usage: python pattern_report.py <snapshot.json> [--top N]
"""

import argparse
import sys
from pathlib import Path

from tilepatterns.core.pattern_database import PatternDatabase
from tilepatterns.core.pattern_stats import quality_bucket
from tilepatterns.core.signature import NEIGHBOR_POSITIONS


def print_stats(database: PatternDatabase):
    stats = database.get_stats()

    print(f"Tileset: {database.tileset_id}")
    print(f"  Patterns: {stats['total_patterns']}")
    print(f"  Terrains covered: {stats['terrains_covered']}")
    print(f"  Unique tiles: {stats['unique_tiles']}")
    print(f"  Avg tiles per pattern: {stats['avg_tiles_per_pattern']:.2f}")
    print(f"  Avg quality: {stats['avg_quality']:.3f}")

    distribution = stats["quality_distribution"]
    total = stats["total_patterns"]
    print("\nQuality distribution:")
    for bucket in ("high", "medium", "low"):
        count = distribution[bucket]
        pct = (count / total * 100) if total > 0 else 0
        print(f"  {bucket:<7} {count:6,} ({pct:.1f}%)")

    percentiles = stats.get("frequency_percentiles")
    if percentiles:
        print("\nObservations per pattern:")
        print(
            f"  min {percentiles['min']:.0f} / 25th {percentiles['25th']:.1f} / "
            f"median {percentiles['50th']:.1f} / 75th {percentiles['75th']:.1f} / "
            f"max {percentiles['max']:.0f}"
        )


def print_top_patterns(database: PatternDatabase, count: int):
    ranked = sorted(
        database.patterns.items(), key=lambda item: item[1].quality, reverse=True
    )
    print(f"\nTop {min(count, len(ranked))} patterns by quality:")
    for signature, pattern in ranked[:count]:
        context = " ".join(
            f"{pos}={value}" for pos, value in zip(NEIGHBOR_POSITIONS, pattern.neighbor_context)
        )
        tiles = " ".join(f"0x{t:02X}" for t in pattern.valid_tiles)
        print(
            f"  {signature:<28} q={pattern.quality:.2f} ({quality_bucket(pattern.quality)}) "
            f"freq={pattern.frequency} tiles=[{tiles}]"
        )
        print(f"    {context}")


def print_validation(database: PatternDatabase):
    report = database.validate()
    print("\nValidation: " + ("OK" if report["valid"] else "FAILED"))
    for issue in report["issues"]:
        print(f"  Issue: {issue}")
    for warning in report["warnings"]:
        print(f"  Warning: {warning}")


def main():
    parser = argparse.ArgumentParser(description="Report on a tile pattern snapshot")
    parser.add_argument("snapshot", help="Pattern snapshot JSON file")
    parser.add_argument(
        "--top", type=int, default=10, help="Number of top-quality patterns to list"
    )
    args = parser.parse_args()

    if not Path(args.snapshot).exists():
        print(f"Error: {args.snapshot} not found")
        sys.exit(1)

    try:
        database = PatternDatabase.load(args.snapshot)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print_stats(database)
    if args.top > 0:
        print_top_patterns(database, args.top)
    print_validation(database)


if __name__ == "__main__":
    main()
