"""Periodic water inlet with splash spread."""

from __future__ import annotations

import logging
import math

import numpy as np

from watersim.accounting import Accounting
from watersim.config import InjectionConfig
from watersim.grid import FieldGrid

logger = logging.getLogger(__name__)


class InjectionPolicy:
    """Adds a bounded random amount of water at one inlet column.

    Every recorded amount is the post-clamp delta, so a cell that is already
    nearly full contributes only the room it had left.
    """

    def __init__(
        self,
        config: InjectionConfig | None = None,
        generator: np.random.Generator | None = None,
        splash_generator: np.random.Generator | None = None,
    ) -> None:
        self.config = config or InjectionConfig()
        if self.config.period_frames <= 0:
            raise ValueError("period_frames must be positive")
        self.generator = generator if generator is not None else np.random.default_rng()
        # With a separate splash stream, splashes never shift the inlet draws.
        self.splash_generator = splash_generator if splash_generator is not None else self.generator

    def due(self, frame: int) -> bool:
        return frame % self.config.period_frames == 0

    def inject(self, grid: FieldGrid, accounting: Accounting) -> float:
        cfg = self.config
        gen = self.generator
        y = cfg.inlet_row
        x = int(gen.integers(grid.width))
        amount = float(gen.uniform(cfg.min_amount, cfg.max_amount))

        if grid.obstacle[y, x]:
            return 0.0

        added = self._add(grid, x, y, amount)
        if grid.water[y, x] >= cfg.splash_threshold:
            added += self._splash(grid, x, y)

        accounting.record_added(added)
        logger.debug("Injected %.3f at column %d", added, x)
        return added

    def _splash(self, grid: FieldGrid, x: int, y: int) -> float:
        cfg = self.config
        gen = self.splash_generator
        radius = int(gen.integers(cfg.splash_radius_limit))
        added = 0.0
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                nx, ny = x + dx, y + dy
                if not grid.in_bounds(nx, ny):
                    continue
                if math.sqrt(dx * dx + dy * dy) > radius:
                    continue
                if grid.obstacle[ny, nx]:
                    continue
                amount = float(gen.uniform(cfg.splash_min_amount, cfg.splash_max_amount))
                added += self._add(grid, nx, ny, amount)
        return added

    def _add(self, grid: FieldGrid, x: int, y: int, amount: float) -> float:
        before = float(grid.water[y, x])
        after = min(before + amount, self.config.capacity)
        grid.water[y, x] = after
        return after - before
