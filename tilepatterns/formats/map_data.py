"""
Tile Pattern Learning - Map Data Model

A map is two aligned grids: the terrain layer (what each cell is) and the
tile layer (which tile graphic was placed there). Handles loading from and
saving to JSON files.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from . import compact_json as json
from . import hex_utils


class MapFormatError(ValueError):
    """Raised when a map file's terrain and tile layers disagree in shape."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class MapData:
    """Manages map data: terrain layer, tile layer and metadata."""

    def __init__(self, name: str = "", tileset: str = "default"):
        self.name = name
        self.tileset = tileset
        self.terrain: List[List[int]] = []
        self.tiles: List[List[int]] = []
        self.metadata: Dict[str, Any] = {}
        self.filepath: Optional[str] = None

    @staticmethod
    def from_grids(
        name: str,
        terrain: List[List[int]],
        tiles: List[List[int]],
        tileset: str = "default",
    ) -> "MapData":
        """Create map data from in-memory grids (copied)."""
        map_data = MapData(name=name, tileset=tileset)
        map_data.terrain = [list(row) for row in terrain]
        map_data.tiles = [list(row) for row in tiles]
        map_data.check_shape()
        return map_data

    @property
    def height(self) -> int:
        return len(self.terrain)

    @property
    def width(self) -> int:
        return len(self.terrain[0]) if self.terrain else 0

    def check_shape(self, path: Optional[str] = None):
        """
        Verify both layers form the same rectangular grid.

        Raises:
            MapFormatError: If the layers are ragged or differ in size
        """
        where = path or self.name or "<map>"

        if len(self.tiles) != len(self.terrain):
            raise MapFormatError(
                where,
                f"terrain has {len(self.terrain)} rows but tiles has {len(self.tiles)}",
            )

        width = self.width
        for row_idx, (terrain_row, tile_row) in enumerate(zip(self.terrain, self.tiles)):
            if len(terrain_row) != width or len(tile_row) != width:
                raise MapFormatError(
                    where,
                    f"row {row_idx} has {len(terrain_row)} terrain / "
                    f"{len(tile_row)} tile columns, expected {width}",
                )

    def load(self, path: str | Path):
        """
        Load map data from JSON file.

        Raises:
            MapFormatError: If the layers disagree in shape
        """
        with open(path, "r") as f:
            data = json.load(f)

        self.terrain = hex_utils.parse_hex_rows(data["terrain"]["rows"])
        self.tiles = hex_utils.parse_hex_rows(data["tiles"]["rows"])

        # Maps without a name fall back to the file stem
        self.name = data.get("name") or Path(path).stem
        self.tileset = data.get("tileset", "default")
        self.metadata = data.get("metadata", {})

        self.check_shape(str(path))

        self.filepath = str(path)

    def save(self, path: Optional[str | Path] = None):
        """Save map data to JSON file."""
        if path is None:
            path = self.filepath
        if path is None:
            raise ValueError("No save path specified")

        data = {
            "name": self.name,
            "tileset": self.tileset,
            "width": self.width,
            "height": self.height,
            "terrain": {"rows": hex_utils.format_hex_rows(self.terrain)},
            "tiles": {"rows": hex_utils.format_hex_rows(self.tiles)},
            "metadata": self.metadata,
        }

        with open(path, "w") as f:
            json.dump(data, f, indent=2)

        self.filepath = str(path)


def load_maps(directory: str | Path, pattern: str = "*.json") -> List[MapData]:
    """
    Load every map file in a directory, sorted by file name.

    Files that fail to load are reported and skipped.

    Args:
        directory: Directory to scan
        pattern: Glob for map files

    Returns:
        List of loaded maps
    """
    maps = []
    for map_file in sorted(Path(directory).glob(pattern)):
        try:
            map_data = MapData()
            map_data.load(map_file)
            maps.append(map_data)
        except (OSError, KeyError, ValueError) as e:
            print(f"Warning: Failed to load map {map_file}: {e}")
    return maps
