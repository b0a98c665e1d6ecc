"""Initial-condition generators."""

from nbody_sim.presets.base import Preset, parse_body_count, validate_body_count
from nbody_sim.presets.uniform_box import UniformBox

__all__ = ["Preset", "UniformBox", "parse_body_count", "validate_body_count"]
