"""
nbody-sim - brute-force 2D Newtonian N-body simulation.

Features:
- All-pairs gravitational forces with an explicit zero-distance policy
- Explicit and semi-implicit Euler integration with a fixed time step
- Seedable uniform random initial conditions
- Momentum/energy diagnostics, text reports, JSON/NPZ export, PNG snapshot
"""

__version__ = "0.1.0"

from nbody_sim.physics.body import Body
from nbody_sim.physics.simulator import SimulationState, Simulator
from nbody_sim.backends.factory import get_backend, list_available_backends

__all__ = [
    "Body",
    "SimulationState",
    "Simulator",
    "get_backend",
    "list_available_backends",
]
