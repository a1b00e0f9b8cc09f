"""Dense cell storage shared by the grid flow models."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Cell:
    """One grid position as seen through `FieldGrid.get`."""

    obstacle: bool = False
    water: float = 0.0
    velocity: tuple[float, float] = (0.0, 0.0)


class FieldGrid:
    """Obstacle flags, water fractions and velocities on a `(height, width)` grid.

    Arrays are indexed ``[row, col]`` with row 0 at the top. Callers address
    cells as ``(x, y)`` = ``(col, row)``.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        obstacle: np.ndarray | None = None,
        water: np.ndarray | None = None,
        vx: np.ndarray | None = None,
        vy: np.ndarray | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        shape = (height, width)
        self.obstacle = _field(obstacle, shape, bool)
        self.water = _field(water, shape, np.float64)
        self.vx = _field(vx, shape, np.float64)
        self.vy = _field(vy, shape, np.float64)

    @property
    def width(self) -> int:
        return int(self.water.shape[1])

    @property
    def height(self) -> int:
        return int(self.water.shape[0])

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Cell:
        self._check(x, y)
        return Cell(
            obstacle=bool(self.obstacle[y, x]),
            water=float(self.water[y, x]),
            velocity=(float(self.vx[y, x]), float(self.vy[y, x])),
        )

    def set(self, x: int, y: int, cell: Cell) -> None:
        self._check(x, y)
        self.obstacle[y, x] = cell.obstacle
        self.water[y, x] = cell.water
        self.vx[y, x], self.vy[y, x] = cell.velocity

    def snapshot(self) -> "FieldGrid":
        """Return an independent deep copy."""

        return FieldGrid(
            self.width,
            self.height,
            obstacle=self.obstacle.copy(),
            water=self.water.copy(),
            vx=self.vx.copy(),
            vy=self.vy.copy(),
        )

    def frozen(self) -> "FieldGrid":
        """Return a read-only copy used as the pre-step view of a step."""

        view = self.snapshot()
        for arr in (view.obstacle, view.water, view.vx, view.vy):
            arr.flags.writeable = False
        return view

    def total_water(self) -> float:
        return float(self.water[~self.obstacle].sum())

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")


def _field(values: np.ndarray | None, shape: tuple[int, int], dtype: type) -> np.ndarray:
    if values is None:
        return np.zeros(shape, dtype=dtype)
    arr = np.array(values, dtype=dtype)
    if arr.shape != shape:
        raise ValueError(f"field shape {arr.shape} does not match grid shape {shape}")
    return arr
