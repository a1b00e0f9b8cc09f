"""Mass-conserving cellular automaton: water falls, then spreads sideways."""

from __future__ import annotations

from watersim.accounting import Accounting
from watersim.config import ConservativeConfig
from watersim.flow import GridFlowModel
from watersim.grid import FieldGrid


class ConservativeAdvection(GridFlowModel):
    """Bottom-up sweep that moves water between neighbouring cells.

    Rows are visited from ``height - 2`` up to the top, columns left to right.
    Each cell decides how much to move from its pre-step amount, while room in
    the receiving cell is read from the buffer being updated, so a cell below
    that already took water this frame has less room left. The second-to-last
    row is a drain: it only decays. The last row is never visited.

    For every frame ``sum(after) == sum(before) + added - decayed``.
    """

    name = "conservative"

    def __init__(self, grid: FieldGrid, config: ConservativeConfig | None = None) -> None:
        super().__init__(grid)
        self.config = config or ConservativeConfig()

    def step(self, accounting: Accounting) -> None:
        grid = self.grid
        cap = self.config.capacity
        before = grid.water.copy()
        before.flags.writeable = False
        water = grid.water
        obstacle = grid.obstacle
        width = grid.width
        decay_row = grid.height - 2

        for y in range(decay_row, -1, -1):
            for x in range(width):
                if obstacle[y, x]:
                    continue
                amount = float(before[y, x])

                if y == decay_row:
                    if amount > 0.0:
                        water[y, x] = self._decay(amount, accounting)
                    continue

                if amount <= 0.0:
                    continue

                if not obstacle[y + 1, x] and water[y + 1, x] < cap:
                    flow = min(amount, cap - water[y + 1, x])
                    water[y + 1, x] += flow
                    water[y, x] -= flow
                    continue

                # Left and right both draw on the same pre-step amount.
                if x > 0 and not obstacle[y, x - 1] and water[y, x - 1] < cap:
                    flow = min(amount / 2.0, cap - water[y, x - 1])
                    water[y, x - 1] += flow
                    water[y, x] -= flow

                if x < width - 1 and not obstacle[y, x + 1] and water[y, x + 1] < cap:
                    flow = min(amount / 2.0, cap - water[y, x + 1])
                    water[y, x + 1] += flow
                    water[y, x] -= flow

    def _decay(self, amount: float, accounting: Accounting) -> float:
        remaining = amount * self.config.decay_rate
        if remaining < self.config.decay_snap:
            remaining = 0.0
        accounting.record_decayed(amount - remaining)
        return remaining
