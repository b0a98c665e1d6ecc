"""Configuration management."""

import json
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional
import yaml
from nbody_sim import constants
from nbody_sim.backends.factory import list_available_backends
from nbody_sim.errors import InvalidArgumentError
from nbody_sim.physics.force_calculator import FORCE_METHODS
from nbody_sim.physics.integrators.registry import list_integrators

SEED_MAX = 2**32 - 1


@dataclass
class SimulationConfig:
    """Simulation configuration.

    Defaults are the compiled-in constants; a config file or CLI flags
    override individual fields.
    """
    # Initial conditions
    n_bodies: Optional[int] = None
    box_size: float = constants.BOX_SIZE
    mass_min: float = constants.MASS_MIN
    mass_max: float = constants.MASS_MAX
    max_initial_speed: float = 0.0
    seed: Optional[int] = None

    # Physics
    G: float = constants.G
    dt: float = constants.DT
    max_steps: int = constants.MAX_STEPS
    zero_distance_policy: str = constants.DEFAULT_ZERO_DISTANCE_POLICY
    min_distance: float = constants.MIN_DISTANCE

    # Execution
    integrator: str = "semi_implicit_euler"
    force_method: str = "vectorized"
    backend: str = "numpy"
    check_finite: bool = False

    # Reporting
    report_every: int = 0

    def validate(self) -> "SimulationConfig":
        """Check value ranges; raises InvalidArgumentError on the first bad field."""
        if self.n_bodies is not None and (isinstance(self.n_bodies, bool) or not isinstance(self.n_bodies, int)
                                          or self.n_bodies <= 0):
            raise InvalidArgumentError(f"n_bodies must be a positive integer, got {self.n_bodies!r}")
        for name in ("box_size", "mass_min", "mass_max", "G", "dt"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
                raise InvalidArgumentError(f"{name} must be a positive number, got {value!r}")
        if self.mass_min >= self.mass_max:
            raise InvalidArgumentError(f"mass_min ({self.mass_min}) must be less than mass_max ({self.mass_max})")
        for name in ("max_initial_speed", "min_distance"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
                raise InvalidArgumentError(f"{name} must be a number >= 0, got {value!r}")
        for name in ("max_steps", "report_every"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidArgumentError(f"{name} must be a non-negative integer, got {value!r}")
        if self.zero_distance_policy not in constants.ZERO_DISTANCE_POLICIES:
            raise InvalidArgumentError(
                f"zero_distance_policy must be one of {list(constants.ZERO_DISTANCE_POLICIES)}, "
                f"got {self.zero_distance_policy!r}"
            )
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)
                                      or not 0 <= self.seed <= SEED_MAX):
            raise InvalidArgumentError(f"seed must be an integer in [0, {SEED_MAX}], got {self.seed!r}")
        for name, choices in (
            ("integrator", list_integrators()),
            ("force_method", list(FORCE_METHODS)),
            ("backend", list_available_backends()),
        ):
            value = getattr(self, name)
            if not isinstance(value, str) or value not in choices:
                raise InvalidArgumentError(f"{name} must be one of {choices}, got {value!r}")
        if not isinstance(self.check_finite, bool):
            raise InvalidArgumentError(f"check_finite must be true or false, got {self.check_finite!r}")
        return self


def load_config(config_path: str) -> SimulationConfig:
    """Load configuration from file.

    Args:
        config_path: Path to config file (.json or .yaml)

    Returns:
        Validated SimulationConfig object
    """
    config_path = Path(config_path)

    with open(config_path, 'r') as f:
        if config_path.suffix in ('.yaml', '.yml'):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidArgumentError(f"Config file {config_path} must contain a mapping")

    known = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidArgumentError(f"Unknown config keys in {config_path}: {unknown}")

    return SimulationConfig(**data).validate()


def save_config(config: SimulationConfig, output_path: str):
    """Save configuration to file.

    Args:
        config: SimulationConfig object
        output_path: Output file path (.json or .yaml)
    """
    output_path = Path(output_path)
    data = asdict(config)

    with open(output_path, 'w') as f:
        if output_path.suffix in ('.yaml', '.yml'):
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)
