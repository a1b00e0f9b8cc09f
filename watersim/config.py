"""Configuration models for the water simulation."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24
DEFAULT_FRAME_INTERVAL_S = 0.08

# Darkest to densest.
WATER_RAMP = " `.^,:~\"<!ct+{i7?u30pw4A8DX%#HWM"

FLOW_MODELS = ("conservative", "velocity", "particles")


@dataclass(frozen=True)
class InjectionConfig:
    """Controls the periodic inlet on the top row and its splash."""

    period_frames: int = 5
    inlet_row: int = 0
    min_amount: float = 0.1
    max_amount: float = 0.5
    splash_threshold: float = 0.8
    splash_radius_limit: int = 4
    splash_min_amount: float = 0.05
    splash_max_amount: float = 0.15
    capacity: float = 1.0


@dataclass(frozen=True)
class ConservativeConfig:
    """Controls the mass-conserving cellular automaton."""

    decay_rate: float = 0.8
    decay_snap: float = 0.01
    capacity: float = 1.0


@dataclass(frozen=True)
class VelocityConfig:
    """Controls both velocity-driven models (cell field and particles)."""

    gravity: float = 0.08
    boundary_loss: float = 0.6
    obstacle_loss: float = 0.8
    damping: float = 0.98
    downward_bias: float = 0.05
    support_damping: float = 0.2
    compression_strength: float = 0.05
    closing_share: float = 0.5
    capacity: float = 1.0
    legacy_bounce_doubling: bool = False


@dataclass(frozen=True)
class RenderConfig:
    """Glyph selection for terminal frames."""

    ramp: str = WATER_RAMP
    ramp_scale: int = 32
    rest_speed: float = 0.1
    obstacle_glyph: str = "#"
    empty_glyph: str = " "
    rest_glyph: str = "·"


@dataclass(frozen=True)
class SimulationConfig:
    """Primary simulation configuration."""

    model: str = "conservative"
    injection: InjectionConfig = field(default_factory=InjectionConfig)
    conservative: ConservativeConfig = field(default_factory=ConservativeConfig)
    velocity: VelocityConfig = field(default_factory=VelocityConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
