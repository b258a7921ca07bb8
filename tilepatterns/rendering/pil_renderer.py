"""
Tile Pattern Learning - PIL Renderer

PIL-based rendering of terrain grids and auto-tiling results.
Used by the render_matches tool to show where learned patterns held up.
"""

from typing import List, Tuple

try:
    from PIL import Image
except ImportError:
    raise ImportError("Pillow library required. Install with: pip install Pillow")

from ..core.autotiler import AutoTileResult
from ..core.match_engine import TIER_DEFAULT, TIER_EXACT, TIER_NONE, TIER_SIMILAR

RGBColor = Tuple[int, int, int]

CELL_SIZE = 8

TIER_COLORS: dict[str, RGBColor] = {
    TIER_EXACT: (0x0C, 0x93, 0x00),    # green
    TIER_SIMILAR: (0xFC, 0xD8, 0x30),  # yellow
    TIER_DEFAULT: (0xF8, 0x78, 0x18),  # orange
    TIER_NONE: (0xC8, 0x10, 0x10),     # red
}

# Terrain ids cycle through this palette
TERRAIN_COLORS: List[RGBColor] = [
    (0x20, 0x38, 0xEC),  # 0: water
    (0x5C, 0xE4, 0x30),  # 1: grass
    (0xFC, 0xE0, 0xA8),  # 2: sand
    (0x00, 0x52, 0x00),  # 3: forest
    (0x7C, 0x7C, 0x7C),  # 4: rock
    (0xA8, 0x10, 0x00),  # 5
    (0xBC, 0xBC, 0xBC),  # 6
    (0x88, 0x14, 0x00),  # 7
]


def _fill_cells(values: List[List], color_of, cell_size: int) -> Image.Image:
    height = len(values)
    width = len(values[0]) if height else 0

    img = Image.new("RGB", (max(width * cell_size, 1), max(height * cell_size, 1)))
    pixels = img.load()
    assert pixels is not None

    for row in range(height):
        for col in range(width):
            color = color_of(values[row][col])
            base_x = col * cell_size
            base_y = row * cell_size
            for py in range(cell_size):
                for px in range(cell_size):
                    pixels[base_x + px, base_y + py] = color

    return img


def render_tiers_to_image(result: AutoTileResult, cell_size: int = CELL_SIZE) -> Image.Image:
    """
    Render the match tier of every cell as a solid color block.

    Args:
        result: Output of AutoTiler.fill()
        cell_size: Pixel size of each cell

    Returns:
        PIL Image object
    """
    return _fill_cells(result.tiers, lambda tier: TIER_COLORS[tier], cell_size)


def render_terrain_to_image(terrain: List[List[int]], cell_size: int = CELL_SIZE) -> Image.Image:
    """Render a terrain grid with one color per terrain id."""
    return _fill_cells(
        terrain, lambda terrain_id: TERRAIN_COLORS[terrain_id % len(TERRAIN_COLORS)], cell_size
    )


def render_side_by_side(
    terrain: List[List[int]], result: AutoTileResult, cell_size: int = CELL_SIZE
) -> Image.Image:
    """Terrain on the left, match tiers on the right, separated by a 1-cell gap."""
    left = render_terrain_to_image(terrain, cell_size)
    right = render_tiers_to_image(result, cell_size)

    img = Image.new("RGB", (left.width + cell_size + right.width, max(left.height, right.height)))
    img.paste(left, (0, 0))
    img.paste(right, (left.width + cell_size, 0))
    return img
