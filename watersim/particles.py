"""Particle rendition of the velocity model: fixed population, continuous positions."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable

from watersim.accounting import Accounting
from watersim.config import RenderConfig, VelocityConfig
from watersim.flow import FlowModel, rebound_factor, reflect
from watersim.grid import FieldGrid
from watersim.render import render_particles

_NEIGHBOR_OFFSETS = [
    (dx, dy)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if (dx, dy) != (0, 0)
]


@dataclass
class Particle:
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    water: float = 0.0
    obstacle: bool = False

    @property
    def cell(self) -> tuple[int, int]:
        return int(self.x), int(self.y)


def particles_from_grid(grid: FieldGrid) -> list[Particle]:
    """One particle per obstacle or wet cell of a loaded map."""

    particles: list[Particle] = []
    for y in range(grid.height):
        for x in range(grid.width):
            obstacle = bool(grid.obstacle[y, x])
            water = float(grid.water[y, x])
            if not obstacle and water <= 0.0:
                continue
            particles.append(
                Particle(
                    x=float(x),
                    y=float(y),
                    vx=float(grid.vx[y, x]),
                    vy=float(grid.vy[y, x]),
                    water=0.0 if obstacle else water,
                    obstacle=obstacle,
                )
            )
    return particles


def build_index(particles: Iterable[Particle], width: int, height: int) -> dict[tuple[int, int], Particle]:
    """Map each occupied in-bounds cell to the last particle found in it."""

    index: dict[tuple[int, int], Particle] = {}
    for p in particles:
        x, y = p.cell
        if 0 <= x < width and 0 <= y < height:
            index[(x, y)] = p
    return index


def neighbors(index: dict[tuple[int, int], Particle], x: int, y: int) -> list[Particle]:
    found = []
    for dx, dy in _NEIGHBOR_OFFSETS:
        other = index.get((x + dx, y + dy))
        if other is not None:
            found.append(other)
    return found


def apply_compression(p: Particle, other: Particle, config: VelocityConfig) -> None:
    """Push `p` away from `other`; particles closing in are squeezed vertically."""

    dx = p.x - other.x
    dy = p.y - other.y
    dist_sq = dx * dx + dy * dy
    if dist_sq == 0.0:
        return

    dist = math.sqrt(dist_sq)
    nx = dx / dist
    ny = dy / dist
    force = config.compression_strength / dist_sq

    dot = p.vx * nx + p.vy * ny
    if dot < 0.0:
        p.vy -= force * abs(dot) * config.closing_share
    else:
        p.vx += force * nx
        p.vy += force * ny


class ParticleFlow(FlowModel):
    """Velocity model over a fixed set of particles.

    Each step rebuilds a cell index from the current positions, then runs
    two passes: neighbour forces (obstacle reflection and compression), and
    motion (gravity, integration, boundary reflection). Particle water never
    changes, so there is nothing to inject or decay.
    """

    name = "particles"

    def __init__(
        self,
        particles: list[Particle],
        width: int,
        height: int,
        config: VelocityConfig | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.particles = particles
        self.width = width
        self.height = height
        self.config = config or VelocityConfig()

    @classmethod
    def from_grid(cls, grid: FieldGrid, config: VelocityConfig | None = None) -> "ParticleFlow":
        return cls(particles_from_grid(grid), grid.width, grid.height, config)

    def step(self, accounting: Accounting) -> None:
        index = build_index(self.particles, self.width, self.height)
        self._apply_neighbor_forces(index)
        self._move(index)

    def _apply_neighbor_forces(self, index: dict[tuple[int, int], Particle]) -> None:
        cfg = self.config
        for p in self.particles:
            if p.obstacle:
                continue
            x, y = p.cell
            for other in neighbors(index, x, y):
                if other is p:
                    continue
                if other.obstacle:
                    p.vx, p.vy = reflect(p.vx, p.vy, cfg.obstacle_loss, p.water)
                else:
                    apply_compression(p, other, cfg)

    def _move(self, index: dict[tuple[int, int], Particle]) -> None:
        cfg = self.config
        for p in self.particles:
            if p.obstacle:
                continue
            self._apply_gravity(p, index)

            p.x += p.vx
            p.y += p.vy

            scale = cfg.boundary_loss * rebound_factor(p.water)
            if p.x < 0.0:
                p.x = 0.0
                p.vx = -p.vx * scale
            elif p.x >= self.width:
                p.x = float(self.width - 1)
                p.vx = -p.vx * scale
            if p.y < 0.0:
                p.y = 0.0
                p.vy = -p.vy * scale
            elif p.y >= self.height:
                p.y = float(self.height - 1)
                p.vy = -p.vy * scale

    def _apply_gravity(self, p: Particle, index: dict[tuple[int, int], Particle]) -> None:
        cfg = self.config
        p.vy += cfg.gravity
        x, y = p.cell
        above = index.get((x, y - 1))
        if above is not None and above is not p and above.vy <= p.vy:
            p.vy *= cfg.support_damping

    def total_water(self) -> float:
        return float(sum(p.water for p in self.particles if not p.obstacle))

    def render_rows(self, config: RenderConfig, *, debug: bool = False) -> list[str]:
        return render_particles(self.particles, self.width, self.height, config=config, debug=debug)
