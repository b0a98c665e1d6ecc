"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod
from typing import Tuple


class Integrator(ABC):
    """Abstract interface for numerical integrators.

    Integrators are pure: they read the step's snapshot and return new
    arrays, leaving the inputs untouched.
    """

    @abstractmethod
    def step(self, positions, velocities, masses, forces, dt: float, backend) -> Tuple:
        """Perform one integration step.

        Args:
            positions: Current positions array (n, dim)
            velocities: Current velocities array (n, dim)
            masses: Masses array (n,)
            forces: Net forces computed from the same snapshot (n, dim)
            dt: Time step
            backend: Compute backend

        Returns:
            Tuple of (new_positions, new_velocities)
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass

    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy."""
        pass

    def accelerations(self, masses, forces, backend):
        """a = F / m, broadcasting the (n,) masses over force components."""
        return backend.divide(forces, backend.expand_dims(masses, 1))
