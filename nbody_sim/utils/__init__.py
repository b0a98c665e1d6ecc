"""Utility functions for reproducibility and configuration."""

from nbody_sim.utils.reproducibility import make_rng
from nbody_sim.utils.config import SimulationConfig, load_config, save_config

__all__ = ["make_rng", "SimulationConfig", "load_config", "save_config"]
