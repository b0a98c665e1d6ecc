"""Integrator lookup by name."""

from typing import List
from nbody_sim.errors import InvalidArgumentError
from nbody_sim.physics.integrators.base import Integrator
from nbody_sim.physics.integrators.euler import EulerIntegrator, SemiImplicitEulerIntegrator

_INTEGRATORS = {
    "semi_implicit_euler": SemiImplicitEulerIntegrator,
    "euler": EulerIntegrator,
}


def list_integrators() -> List[str]:
    return list(_INTEGRATORS.keys())


def get_integrator(name: str) -> Integrator:
    """Get integrator instance by name."""
    integrator_class = _INTEGRATORS.get(name.lower()) if isinstance(name, str) else None
    if integrator_class is None:
        raise InvalidArgumentError(f"Unknown integrator: {name!r}. Available: {list_integrators()}")
    return integrator_class()
