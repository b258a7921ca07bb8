#!/usr/bin/env python3
"""
Tile Pattern Learning - Pattern Extractor

Learns terrain -> tile placement patterns from a directory of map files and
saves them as a pattern snapshot.
"""

import argparse
import sys
from pathlib import Path

from tilepatterns.core.extractor import PatternExtractor
from tilepatterns.core.pattern_database import PatternDatabase
from tilepatterns.formats.map_data import load_maps


def main():
    parser = argparse.ArgumentParser(
        description="Learn tile placement patterns from map files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Learn from one directory:
    python tools/extract_patterns.py maps/grassland/ -t grassland

  Learn from several directories into an existing snapshot:
    python tools/extract_patterns.py maps/a/ maps/b/ -t grassland -o data/patterns/grassland.json --append
        """,
    )
    parser.add_argument("inputs", nargs="+", help="Directories of map JSON files")
    parser.add_argument("-t", "--tileset", required=True, help="Tileset id the maps use")
    parser.add_argument(
        "-o", "--output", help="Snapshot path (default: data/patterns/<tileset>.json)"
    )
    parser.add_argument(
        "--append",
        action="store_true",
        help="Extend an existing snapshot instead of starting fresh",
    )

    args = parser.parse_args()

    print("Tile Pattern Learning - Pattern Extractor")
    print("=" * 50)

    output = Path(args.output) if args.output else Path("data") / "patterns" / f"{args.tileset}.json"

    if args.append and output.exists():
        try:
            database = PatternDatabase.load(output)
        except (OSError, ValueError) as e:
            print(f"Error: could not load {output}: {e}")
            sys.exit(1)
        print(f"Loaded {len(database)} existing patterns from {output}")
    else:
        database = PatternDatabase(args.tileset)

    maps = []
    for directory in args.inputs:
        if not Path(directory).is_dir():
            print(f"  Warning: {directory} is not a directory")
            continue
        found = load_maps(directory)
        print(f"\n{directory}: {len(found)} map(s)")
        maps.extend(found)

    if not maps:
        print("No map files found")
        sys.exit(1)

    extractor = PatternExtractor(database)
    extractor.extract_maps(maps, verbose=True)

    database.save(output)
    print(f"\nSaved patterns to: {output}")

    stats = database.get_stats()
    extraction = database.extraction_stats
    print("\nStatistics:")
    print(f"  Maps processed: {extraction['maps_processed']}")
    print(f"  Cells processed: {extraction['cells_processed']}")
    print(f"  Rejected observations: {extraction['rejected_observations']}")
    print(f"  Patterns: {stats['total_patterns']}")
    print(f"  Terrains covered: {stats['terrains_covered']}")
    print(f"  Unique tiles: {stats['unique_tiles']}")


if __name__ == "__main__":
    main()
