from __future__ import annotations

import pytest

from watersim.io import MapLoadError, load_map, parse_map


def test_parse_map_symbols_and_dynamic_size() -> None:
    grid = parse_map(["#~ ", "  x#", "o"])

    assert grid.shape == (3, 4)
    assert grid.obstacle[0, 0] and grid.obstacle[1, 3]
    assert grid.water[0, 1] == 1.0
    assert grid.water[1, 2] == 1.0
    assert grid.water[2, 0] == 1.0
    assert grid.water[0, 2] == 0.0
    # Columns past the end of a short line are blank.
    assert not grid.obstacle[2, 3] and grid.water[2, 3] == 0.0
    assert grid.water[0, 0] == 0.0


def test_parse_map_fixed_bounds_crop_and_pad() -> None:
    grid = parse_map(["~~~~~~", "######", "~~~~~~"], width=4, height=5)

    assert grid.shape == (5, 4)
    assert grid.water[0].tolist() == [1.0, 1.0, 1.0, 1.0]
    assert grid.obstacle[1].all()
    assert grid.water[3:].sum() == 0.0

    cropped = parse_map(["~", "~", "~"], width=2, height=2)
    assert cropped.shape == (2, 2)
    assert cropped.total_water() == 2.0


def test_parse_map_rejects_empty_and_bad_bounds() -> None:
    with pytest.raises(MapLoadError):
        parse_map([])
    with pytest.raises(MapLoadError):
        parse_map(["", ""])
    with pytest.raises(MapLoadError):
        parse_map(["~"], width=0)


def test_load_map_reads_file_and_strips_newlines(tmp_path) -> None:
    path = tmp_path / "map.txt"
    path.write_text(" ~ \r\n###\n", encoding="utf-8")

    grid = load_map(path)

    assert grid.shape == (2, 3)
    assert grid.water[0, 1] == 1.0
    assert grid.obstacle[1].all()


def test_missing_map_is_a_load_error(tmp_path) -> None:
    with pytest.raises(MapLoadError, match="Failed to open map file"):
        load_map(tmp_path / "nope.txt")
