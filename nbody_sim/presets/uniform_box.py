"""Uniform random bodies in a square box."""

import math
from typing import Optional, Tuple
import numpy as np
from nbody_sim.backends.base import Backend
from nbody_sim.constants import BOX_SIZE, MASS_MAX, MASS_MIN
from nbody_sim.errors import InvalidArgumentError
from nbody_sim.presets.base import Preset


class UniformBox(Preset):
    """Bodies at rest, uniformly placed in [0, box_size)^2 with uniform masses."""

    def __init__(
        self,
        backend: Backend,
        n_bodies: int,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        box_size: float = BOX_SIZE,
        mass_range: Tuple[float, float] = (MASS_MIN, MASS_MAX),
        max_initial_speed: float = 0.0,
    ):
        """Initialize uniform box preset.

        Args:
            backend: Compute backend
            n_bodies: Number of bodies
            seed: Random seed
            rng: Injected random generator
            box_size: Side of the square placement region
            mass_range: (low, high) for masses, sampled from [low, high)
            max_initial_speed: Velocity components drawn from [-s, s); 0 keeps bodies at rest
        """
        super().__init__(backend, n_bodies, seed, rng)
        mass_low, mass_high = (float(m) for m in mass_range)
        if not (math.isfinite(box_size) and box_size > 0.0):
            raise InvalidArgumentError(f"box_size must be positive, got {box_size}")
        if not (0.0 < mass_low < mass_high and math.isfinite(mass_high)):
            raise InvalidArgumentError(f"mass_range must satisfy 0 < low < high, got {mass_range}")
        if not (math.isfinite(max_initial_speed) and max_initial_speed >= 0.0):
            raise InvalidArgumentError(f"max_initial_speed must be >= 0, got {max_initial_speed}")
        self.box_size = float(box_size)
        self.mass_range = (mass_low, mass_high)
        self.max_initial_speed = float(max_initial_speed)

    @property
    def name(self) -> str:
        return "uniform_box"

    def generate(self) -> Tuple:
        """Generate positions, velocities and masses."""
        n = self.n_bodies
        positions = self.backend.random_uniform((n, 2), 0.0, self.box_size, rng=self.rng)
        masses = self.backend.random_uniform((n,), self.mass_range[0], self.mass_range[1], rng=self.rng)
        if self.max_initial_speed > 0.0:
            velocities = self.backend.random_uniform(
                (n, 2), -self.max_initial_speed, self.max_initial_speed, rng=self.rng
            )
        else:
            velocities = self.backend.zeros((n, 2))
        return positions, velocities, masses
