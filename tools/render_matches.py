#!/usr/bin/env python3
"""
Tile Pattern Learning - Match Renderer

Auto-tiles map terrain with a pattern snapshot and renders, per cell, which
match tier picked the tile (exact, similar, terrain default, none).
"""

import argparse
import sys
from pathlib import Path

from tilepatterns.core.autotiler import AutoTiler
from tilepatterns.core.match_engine import MATCH_TIERS, TIER_EXACT
from tilepatterns.core.pattern_database import PatternDatabase
from tilepatterns.formats.map_data import MapData
from tilepatterns.rendering.pil_renderer import render_side_by_side


def render_map(
    map_path: Path,
    database: PatternDatabase,
    output_path: Path,
    cell_size: int = 8,
):
    """Auto-tile a single map and save the tier image."""
    map_data = MapData()
    map_data.load(map_path)

    result = AutoTiler(database).fill(map_data.terrain)

    # How often the replayed tile equals the one actually placed
    agree = sum(
        1
        for tile_row, placed_row in zip(result.tiles, map_data.tiles)
        for tile, placed in zip(tile_row, placed_row)
        if tile == placed
    )

    img = render_side_by_side(map_data.terrain, result, cell_size)
    img.save(output_path)

    tiers = ", ".join(f"{tier} {result.tier_counts[tier]}" for tier in MATCH_TIERS)
    print(f"Saved: {output_path} ({img.width}x{img.height})")
    print(
        f"  {tiers}; exact coverage {result.coverage(TIER_EXACT) * 100:.1f}%, "
        f"agrees with placed tiles {agree}/{result.cell_count}"
    )


def main():
    parser = argparse.ArgumentParser(
        description="Render match tiers of an auto-tiled map as PNG images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Render a single map:
    python tools/render_matches.py data/patterns/grassland.json maps/grassland/map_01.json

  Render a directory of maps:
    python tools/render_matches.py data/patterns/grassland.json maps/grassland/ renders/grassland/
        """,
    )
    parser.add_argument("snapshot", help="Pattern snapshot JSON file")
    parser.add_argument("input", help="Map JSON file or directory of maps")
    parser.add_argument("output", nargs="?", help="Output PNG file or directory (optional)")
    parser.add_argument("-s", "--cell-size", type=int, default=8, help="Pixels per cell")
    args = parser.parse_args()

    input_p = Path(args.input)
    if not input_p.exists():
        print(f"Error: {args.input} not found")
        sys.exit(1)

    try:
        database = PatternDatabase.load(args.snapshot)
    except (OSError, ValueError) as e:
        print(f"Error: could not load {args.snapshot}: {e}")
        sys.exit(1)

    if input_p.is_file():
        output_path = Path(args.output) if args.output else Path(input_p.stem + "_tiers.png")
        try:
            render_map(input_p, database, output_path, args.cell_size)
        except (OSError, KeyError, ValueError) as e:
            print(f"Error: could not render {input_p}: {e}")
            sys.exit(1)
        return

    output_dir = Path(args.output) if args.output else Path("renders") / input_p.name
    output_dir.mkdir(parents=True, exist_ok=True)

    map_files = sorted(input_p.glob("*.json"))
    if not map_files:
        print(f"No map files found in {input_p}")
        return

    print(f"Rendering {len(map_files)} maps from {input_p}...")
    for map_file in map_files:
        try:
            render_map(map_file, database, output_dir / f"{map_file.stem}_tiers.png", args.cell_size)
        except (OSError, KeyError, ValueError) as e:
            print(f"  Warning: skipped {map_file}: {e}")


if __name__ == "__main__":
    main()
