"""Unit tests for map files, hex rows and compact JSON."""

import io
import json

import pytest

from tilepatterns.formats import compact_json, hex_utils
from tilepatterns.formats.map_data import MapData, MapFormatError, load_maps


class TestHexUtils:
    """Tests for hex row parsing and formatting."""

    def test_parse_row(self):
        assert hex_utils.parse_hex_row("01 02 A3 3FF") == [1, 2, 0xA3, 0x3FF]

    def test_format_row_default_width(self):
        assert hex_utils.format_hex_row([1, 2, 163, 255]) == "01 02 A3 FF"

    def test_format_rows_widen_for_large_tiles(self):
        assert hex_utils.format_hex_rows([[1, 0x3FF], [0x20, 2]]) == ["001 3FF", "020 002"]

    def test_hex_width(self):
        assert hex_utils.hex_width([[0, 0xFF]]) == 2
        assert hex_utils.hex_width([[0x100]]) == 3
        assert hex_utils.hex_width([]) == 2


class TestCompactJson:
    """Tests for the compact JSON writer."""

    def test_numeric_arrays_on_one_line(self):
        text = compact_json.dumps({"context": [1, 1, 2, 1, 1, 1, 1, 1], "name": "x"})
        assert '"context": [1, 1, 2, 1, 1, 1, 1, 1]' in text

    def test_tuples_written_as_lists(self):
        assert json.loads(compact_json.dumps({"c": (1, 2)})) == {"c": [1, 2]}

    def test_integer_keys_become_strings(self):
        assert json.loads(compact_json.dumps({1: [5]})) == {"1": [5]}

    def test_dump_and_load(self):
        buf = io.StringIO()
        compact_json.dump({"a": [{"b": [1, 2]}, "s"]}, buf)
        buf.seek(0)
        assert compact_json.load(buf) == {"a": [{"b": [1, 2]}, "s"]}


class TestMapData:
    """Tests for loading and saving maps."""

    def test_load(self, small_map):
        assert small_map.name == "pond"
        assert small_map.tileset == "grassland"
        assert small_map.width == 5
        assert small_map.height == 4
        assert small_map.terrain[1] == [1, 1, 2, 2, 1]
        assert small_map.tiles[2] == [0x10, 0x11, 0x22, 0x23, 0x11]
        assert small_map.filepath.endswith("small_map.json")

    def test_ragged_map_rejected(self, fixtures_dir):
        with pytest.raises(MapFormatError, match="row 1"):
            MapData().load(fixtures_dir / "ragged_map.json")

    def test_layer_height_mismatch(self):
        with pytest.raises(MapFormatError, match="rows"):
            MapData.from_grids("bad", [[1, 1], [1, 1]], [[5, 5]])

    def test_save_roundtrip(self, small_map, tmp_path):
        path = tmp_path / "out.json"
        small_map.save(path)

        loaded = MapData()
        loaded.load(path)
        assert loaded.terrain == small_map.terrain
        assert loaded.tiles == small_map.tiles
        assert loaded.name == "pond"

    def test_save_large_tile_ids(self, tmp_path):
        map_data = MapData.from_grids("big", [[1, 2]], [[0x3FF, 0x10]])
        path = tmp_path / "big.json"
        map_data.save(path)

        with open(path) as f:
            assert json.load(f)["tiles"]["rows"] == ["3FF 010"]

    def test_save_without_path_raises(self):
        with pytest.raises(ValueError, match="No save path"):
            MapData().save()

    def test_name_defaults_to_file_stem(self, tmp_path):
        path = tmp_path / "meadow.json"
        path.write_text(json.dumps({"terrain": {"rows": ["01"]}, "tiles": {"rows": ["05"]}}))

        map_data = MapData()
        map_data.load(path)
        assert map_data.name == "meadow"
        assert map_data.tileset == "default"


def test_load_maps_skips_bad_files(fixtures_dir, capsys):
    maps = load_maps(fixtures_dir)
    assert [m.name for m in maps] == ["pond"]
    assert "Warning: Failed to load map" in capsys.readouterr().out
