"""Map loading."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from watersim.grid import FieldGrid

logger = logging.getLogger(__name__)

OBSTACLE_CHAR = "#"
EMPTY_CHAR = " "


class MapLoadError(ValueError):
    """Raised when a map file is missing, unreadable or empty."""


def parse_map(
    lines: Iterable[str],
    *,
    width: int | None = None,
    height: int | None = None,
) -> FieldGrid:
    """Build a grid from map text rows.

    ``#`` is an obstacle, a space is empty and any other character is a full
    water cell. Without fixed bounds the grid is as wide as the longest line
    and as tall as the line count; short lines are padded with empty cells.
    With fixed bounds, extra rows and columns are dropped.
    """

    if (width is not None and width <= 0) or (height is not None and height <= 0):
        raise MapLoadError(f"Grid bounds must be positive, got width={width} height={height}.")

    rows = [line.rstrip("\r\n") for line in lines]
    if height is not None:
        rows = rows[:height]
    grid_w = width if width is not None else max((len(row) for row in rows), default=0)
    grid_h = height if height is not None else len(rows)
    if grid_w <= 0 or grid_h <= 0:
        raise MapLoadError("Map is empty.")

    grid = FieldGrid(grid_w, grid_h)
    for y, row in enumerate(rows):
        for x, ch in enumerate(row[:grid_w]):
            if ch == OBSTACLE_CHAR:
                grid.obstacle[y, x] = True
            elif ch != EMPTY_CHAR:
                grid.water[y, x] = 1.0
    return grid


def load_map(path: str | Path, *, width: int | None = None, height: int | None = None) -> FieldGrid:
    """Read a map file from disk."""

    map_path = Path(path)
    try:
        text = map_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MapLoadError(f"Failed to open map file {map_path}: {exc}") from exc

    grid = parse_map(text.splitlines(), width=width, height=height)
    logger.info(
        "Loaded map %s (%dx%d, %d obstacle cells, water %.2f)",
        map_path,
        grid.width,
        grid.height,
        int(grid.obstacle.sum()),
        grid.total_water(),
    )
    return grid
