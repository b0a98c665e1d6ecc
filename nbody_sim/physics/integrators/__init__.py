"""Fixed-step integrators for N-body simulations."""

from nbody_sim.physics.integrators.base import Integrator
from nbody_sim.physics.integrators.euler import EulerIntegrator, SemiImplicitEulerIntegrator
from nbody_sim.physics.integrators.registry import get_integrator, list_integrators

__all__ = [
    "Integrator",
    "EulerIntegrator",
    "SemiImplicitEulerIntegrator",
    "get_integrator",
    "list_integrators",
]
