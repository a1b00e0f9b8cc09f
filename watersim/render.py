"""Terminal glyph rendering of simulation state."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterable

from watersim.accounting import FrameStats
from watersim.config import RenderConfig
from watersim.grid import FieldGrid

if TYPE_CHECKING:
    from watersim.particles import Particle

CURSOR_HOME = "\x1b[H"

# Sector 0 is centred on +x, counting counter-clockwise in 45 degree steps.
_ARROWS = ("→", "↗", "↑", "↖", "←", "↙", "↓", "↘")


def water_glyph(water: float, config: RenderConfig | None = None) -> str:
    """Map a water fraction onto the density ramp."""

    cfg = config or RenderConfig()
    max_idx = len(cfg.ramp) - 1
    idx = int(math.floor(water * cfg.ramp_scale))
    return cfg.ramp[min(max(idx, 0), max_idx)]


def velocity_glyph(vx: float, vy: float, config: RenderConfig | None = None) -> str:
    """Quantize a velocity into one of eight compass arrows, or a resting dot."""

    cfg = config or RenderConfig()
    if math.hypot(vx, vy) < cfg.rest_speed:
        return cfg.rest_glyph
    angle = math.degrees(math.atan2(vy, vx))
    sector = int(((angle + 22.5) % 360.0) // 45.0) % 8
    return _ARROWS[sector]


def _cell_glyph(
    obstacle: bool,
    water: float,
    vx: float,
    vy: float,
    cfg: RenderConfig,
    debug: bool,
) -> str:
    if obstacle:
        return cfg.obstacle_glyph
    if water <= 0.0:
        return cfg.empty_glyph
    if debug:
        return velocity_glyph(vx, vy, cfg)
    return water_glyph(water, cfg)


def render_grid(grid: FieldGrid, *, config: RenderConfig | None = None, debug: bool = False) -> list[str]:
    """Render one string per grid row."""

    cfg = config or RenderConfig()
    rows: list[str] = []
    for y in range(grid.height):
        rows.append(
            "".join(
                _cell_glyph(
                    bool(grid.obstacle[y, x]),
                    float(grid.water[y, x]),
                    float(grid.vx[y, x]),
                    float(grid.vy[y, x]),
                    cfg,
                    debug,
                )
                for x in range(grid.width)
            )
        )
    return rows


def render_particles(
    particles: Iterable[Particle],
    width: int,
    height: int,
    *,
    config: RenderConfig | None = None,
    debug: bool = False,
) -> list[str]:
    """Render particles onto a `width` x `height` screen; later particles win a shared cell."""

    cfg = config or RenderConfig()
    screen = [[cfg.empty_glyph] * width for _ in range(height)]
    for p in particles:
        x = int(p.x)
        y = int(p.y)
        if not (0 <= x < width and 0 <= y < height):
            continue
        if not p.obstacle and p.water <= 0.0:
            continue
        screen[y][x] = _cell_glyph(p.obstacle, p.water, p.vx, p.vy, cfg, debug)
    return ["".join(row) for row in screen]


def status_lines(stats: FrameStats, width: int) -> list[str]:
    """Two accounting lines, each cut to the grid width."""

    first = f"Total Water: {stats.total_water:.2f} | Added This Frame: {stats.added_this_frame:.2f}"
    second = f"Decayed This Frame: {stats.decayed_this_frame:.2f} | Total Decayed: {stats.total_decayed:.2f}"
    return [first[:width], second[:width]]


def compose_frame(rows: list[str], stats: FrameStats, width: int) -> str:
    """Assemble a full frame that redraws from the top-left corner without clearing."""

    lines = rows + status_lines(stats, width)
    return CURSOR_HOME + "\n".join(lines) + "\n"
