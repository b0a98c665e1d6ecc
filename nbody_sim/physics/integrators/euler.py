"""Euler method integrators (first order)."""

from typing import Tuple
from nbody_sim.backends.base import Backend
from nbody_sim.physics.integrators.base import Integrator


class EulerIntegrator(Integrator):
    """Explicit Euler: positions advance with the velocity from the start of the step."""

    @property
    def name(self) -> str:
        return "euler"

    @property
    def order(self) -> int:
        return 1

    def step(self, positions, velocities, masses, forces, dt: float, backend: Backend) -> Tuple:
        """Euler step: v_new = v + a*dt, r_new = r + v*dt."""
        accelerations = self.accelerations(masses, forces, backend)
        new_velocities = backend.add(velocities, backend.multiply(accelerations, dt))
        new_positions = backend.add(positions, backend.multiply(velocities, dt))
        return new_positions, new_velocities


class SemiImplicitEulerIntegrator(Integrator):
    """Semi-implicit (symplectic) Euler.

    The velocity is updated first and the new velocity moves the position,
    which keeps long-run energy error bounded for orbits. Default integrator.
    """

    @property
    def name(self) -> str:
        return "semi_implicit_euler"

    @property
    def order(self) -> int:
        return 1

    def step(self, positions, velocities, masses, forces, dt: float, backend: Backend) -> Tuple:
        """Semi-implicit Euler step: v_new = v + a*dt, r_new = r + v_new*dt."""
        accelerations = self.accelerations(masses, forces, backend)
        new_velocities = backend.add(velocities, backend.multiply(accelerations, dt))
        new_positions = backend.add(positions, backend.multiply(new_velocities, dt))
        return new_positions, new_velocities
