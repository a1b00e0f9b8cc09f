"""Per-cell velocity field with gravity and lossy reflection."""

from __future__ import annotations

from watersim.accounting import Accounting
from watersim.config import VelocityConfig
from watersim.flow import GridFlowModel, reflect
from watersim.grid import FieldGrid


class VelocityField(GridFlowModel):
    """Moves each cell's water toward where its velocity points.

    Source water and velocity come from a frozen copy of the grid taken at
    the start of the step; all writes go to the live grid. Room in a target
    cell is read from the live grid so that two sources aiming at the same
    cell cannot overfill it.
    """

    name = "velocity"

    def __init__(self, grid: FieldGrid, config: VelocityConfig | None = None) -> None:
        super().__init__(grid)
        self.config = config or VelocityConfig()

    def step(self, accounting: Accounting) -> None:
        grid = self.grid
        cfg = self.config
        before = grid.frozen()

        for y in range(grid.height):
            for x in range(grid.width):
                if before.obstacle[y, x]:
                    continue
                water = float(before.water[y, x])
                if water <= 0.0:
                    continue

                vx = float(before.vx[y, x])
                vy = float(before.vy[y, x]) + cfg.gravity
                tx = int(x + vx)
                ty = int(y + vy)

                if not grid.in_bounds(tx, ty):
                    self._bounce(x, y, vx, vy, water, cfg.boundary_loss, accounting)
                elif grid.obstacle[ty, tx]:
                    self._bounce(x, y, vx, vy, water, cfg.obstacle_loss, accounting)
                elif tx == x and ty == y:
                    self._set_velocity(x, y, vx * cfg.damping, (vy + cfg.downward_bias) * cfg.damping)
                elif grid.water[ty, tx] < cfg.capacity:
                    flow = min(water, cfg.capacity - float(grid.water[ty, tx]))
                    grid.water[ty, tx] += flow
                    grid.water[y, x] -= flow
                    self._set_velocity(tx, ty, vx * cfg.damping, (vy + cfg.downward_bias) * cfg.damping)
                    if grid.water[y, x] <= 0.0:
                        self._set_velocity(x, y, 0.0, 0.0)
                else:
                    # Target is full: hold position and bleed off speed.
                    self._set_velocity(x, y, vx * cfg.damping, vy * cfg.damping)

    def _bounce(
        self,
        x: int,
        y: int,
        vx: float,
        vy: float,
        water: float,
        loss: float,
        accounting: Accounting,
    ) -> None:
        self._set_velocity(x, y, *reflect(vx, vy, loss, water))
        if self.config.legacy_bounce_doubling:
            # Reproduces the historic numeric behaviour: every bounce doubles the cell.
            self.grid.water[y, x] += water
            accounting.record_added(water)

    def _set_velocity(self, x: int, y: int, vx: float, vy: float) -> None:
        self.grid.vx[y, x] = vx
        self.grid.vy[y, x] = vy
