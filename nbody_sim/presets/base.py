"""Base class for initial-condition presets."""

from abc import ABC, abstractmethod
from numbers import Integral
from typing import List, Optional, Tuple
import numpy as np
from nbody_sim.backends.base import Backend
from nbody_sim.errors import InvalidArgumentError
from nbody_sim.physics.body import Body, arrays_to_bodies


def validate_body_count(n_bodies) -> int:
    """Return n_bodies as an int, or raise InvalidArgumentError if it is not a positive integer."""
    if isinstance(n_bodies, bool) or not isinstance(n_bodies, Integral):
        raise InvalidArgumentError(f"Body count must be a positive integer, got {n_bodies!r}")
    if n_bodies <= 0:
        raise InvalidArgumentError(f"Body count must be a positive integer, got {n_bodies}")
    return int(n_bodies)


def parse_body_count(text: Optional[str]) -> int:
    """Parse a command-line body count.

    Raises:
        InvalidArgumentError: If the text is missing, non-numeric or <= 0
    """
    if text is None or not str(text).strip():
        raise InvalidArgumentError("Missing body count")
    try:
        value = int(str(text).strip())
    except ValueError:
        raise InvalidArgumentError(f"Body count must be a positive integer, got {text!r}") from None
    return validate_body_count(value)


class Preset(ABC):
    """Abstract base class for initial-condition presets."""

    def __init__(
        self,
        backend: Backend,
        n_bodies: int,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """Initialize preset.

        Args:
            backend: Compute backend
            n_bodies: Number of bodies, must be a positive integer
            seed: Random seed for reproducibility (ignored when rng is given)
            rng: Injected random generator
        """
        self.backend = backend
        self.n_bodies = validate_body_count(n_bodies)
        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    @abstractmethod
    def generate(self) -> Tuple:
        """Generate initial conditions.

        Returns:
            Tuple of (positions, velocities, masses)
        """
        pass

    def generate_bodies(self) -> List[Body]:
        """Generate initial conditions as an ordered list of bodies."""
        positions, velocities, masses = self.generate()
        return arrays_to_bodies(
            self.backend.to_numpy(positions),
            self.backend.to_numpy(velocities),
            self.backend.to_numpy(masses),
        )

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this preset."""
        pass
