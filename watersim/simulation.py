"""Frame pipeline: injection, flow step, accounting."""

from __future__ import annotations

import logging

from watersim.accounting import Accounting, FrameStats
from watersim.config import FLOW_MODELS, SimulationConfig
from watersim.conservative import ConservativeAdvection
from watersim.flow import FlowModel, GridFlowModel
from watersim.grid import FieldGrid
from watersim.injection import InjectionPolicy
from watersim.particles import ParticleFlow
from watersim.render import compose_frame
from watersim.rng import RngStream, fresh_seed
from watersim.velocity import VelocityField

logger = logging.getLogger(__name__)


def build_flow_model(name: str, grid: FieldGrid, config: SimulationConfig) -> FlowModel:
    """Create the flow model selected by `name` around a loaded grid."""

    if name == "conservative":
        return ConservativeAdvection(grid, config.conservative)
    if name == "velocity":
        return VelocityField(grid, config.velocity)
    if name == "particles":
        return ParticleFlow.from_grid(grid, config.velocity)
    raise ValueError(f"unknown flow model {name!r}; expected one of {', '.join(FLOW_MODELS)}")


class Simulation:
    """One independent simulation instance with its own model, RNG and counters."""

    def __init__(
        self,
        grid: FieldGrid,
        *,
        config: SimulationConfig | None = None,
        rng: RngStream | None = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.rng = rng or RngStream(fresh_seed())
        self.width = grid.width
        self.height = grid.height
        self.model = build_flow_model(self.config.model, grid, self.config)
        self.accounting = Accounting(total_water=self.model.total_water())
        self.injection = InjectionPolicy(
            self.config.injection,
            self.rng.fork("injection", "inlet").generator(),
            self.rng.fork("injection", "splash").generator(),
        )
        logger.info(
            "Simulation ready: model=%s size=%dx%d seed=%d",
            self.model.name,
            self.width,
            self.height,
            self.rng.seed,
        )

    @property
    def frame(self) -> int:
        return self.accounting.frame

    def step(self) -> FrameStats:
        accounting = self.accounting
        accounting.begin_frame()
        # Particle populations are fixed, so only grid models take injected water.
        if isinstance(self.model, GridFlowModel) and self.injection.due(accounting.frame):
            self.injection.inject(self.model.grid, accounting)
        self.model.step(accounting)
        stats = accounting.end_frame(self.model.total_water())
        logger.debug(
            "frame=%d water=%.4f added=%.4f decayed=%.4f",
            stats.frame,
            stats.total_water,
            stats.added_this_frame,
            stats.decayed_this_frame,
        )
        return stats

    def run(self, frames: int) -> list[FrameStats]:
        return [self.step() for _ in range(frames)]

    def render(self, *, debug: bool = False) -> str:
        rows = self.model.render_rows(self.config.render, debug=debug)
        return compose_frame(rows, self.accounting.stats(), self.width)
