"""Physics engine for N-body simulations."""

from nbody_sim.physics.body import Body
from nbody_sim.physics.nbody import NBodySystem
from nbody_sim.physics.simulator import SimulationState, Simulator

__all__ = ["Body", "NBodySystem", "SimulationState", "Simulator"]
