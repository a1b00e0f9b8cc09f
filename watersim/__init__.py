"""ASCII water simulation package."""

from .config import DEFAULT_HEIGHT, DEFAULT_WIDTH, FLOW_MODELS, SimulationConfig

__all__ = ["DEFAULT_WIDTH", "DEFAULT_HEIGHT", "FLOW_MODELS", "SimulationConfig"]
