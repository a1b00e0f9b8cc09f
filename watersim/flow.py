"""Flow model interface shared by the interchangeable step rules."""

from __future__ import annotations

from watersim.accounting import Accounting, measure_total_water
from watersim.config import RenderConfig
from watersim.grid import FieldGrid
from watersim.render import render_grid


def rebound_factor(water: float) -> float:
    """Wetter cells bounce harder: 0.5 when dry, 1.0 at or above a full cell."""

    return 0.5 + 0.5 * min(1.0, water)


def reflect(vx: float, vy: float, loss: float, water: float) -> tuple[float, float]:
    """Reverse a velocity, losing energy by `loss` scaled by the rebound factor."""

    scale = loss * rebound_factor(water)
    return -vx * scale, -vy * scale


class FlowModel:
    """One frame-to-frame update rule together with the state it owns."""

    name = ""

    def step(self, accounting: Accounting) -> None:
        raise NotImplementedError

    def total_water(self) -> float:
        raise NotImplementedError

    def render_rows(self, config: RenderConfig, *, debug: bool = False) -> list[str]:
        raise NotImplementedError


class GridFlowModel(FlowModel):
    """Base for the models that update a `FieldGrid` in place and take injected water."""

    def __init__(self, grid: FieldGrid) -> None:
        self.grid = grid

    def total_water(self) -> float:
        return measure_total_water(self.grid)

    def render_rows(self, config: RenderConfig, *, debug: bool = False) -> list[str]:
        return render_grid(self.grid, config=config, debug=debug)
