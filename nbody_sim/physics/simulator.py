"""Main simulator controller."""

import enum
import math
import time
from typing import Callable, List, Optional, Sequence
import numpy as np
from nbody_sim.backends.base import Backend
from nbody_sim.backends.numpy_backend import NumPyBackend
from nbody_sim.constants import DEFAULT_ZERO_DISTANCE_POLICY, DT, G as G_DEFAULT, MAX_STEPS, MIN_DISTANCE
from nbody_sim.errors import InvalidArgumentError, NumericDegeneracyError, SimulationStateError
from nbody_sim.physics.body import Body
from nbody_sim.physics.integrators.base import Integrator
from nbody_sim.physics.integrators.euler import SemiImplicitEulerIntegrator
from nbody_sim.physics.integrators.registry import get_integrator
from nbody_sim.physics.nbody import NBodySystem


class SimulationState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    STEPPING = "stepping"
    DONE = "done"


class Simulator:
    """Main simulation controller.

    Owns the body system and runs a fixed number of steps. Each step
    computes forces from one snapshot of the state, integrates, and only
    then replaces the state, so the result does not depend on body order.

    Lifecycle: UNINITIALIZED -> READY (bodies loaded, 0 steps) ->
    STEPPING -> DONE (``max_steps`` taken). There is no early exit.
    """

    def __init__(
        self,
        backend: Optional[Backend] = None,
        integrator: Optional[Integrator] = None,
        dt: float = DT,
        G: float = G_DEFAULT,
        max_steps: int = MAX_STEPS,
        zero_distance_policy: str = DEFAULT_ZERO_DISTANCE_POLICY,
        min_distance: float = MIN_DISTANCE,
        force_method: str = "vectorized",
        check_finite: bool = False,
    ):
        """Initialize simulator.

        Args:
            backend: Compute backend (default: NumPy)
            integrator: Integrator to use (default: semi-implicit Euler)
            dt: Fixed time step
            G: Gravitational constant
            max_steps: Number of steps in a full run
            zero_distance_policy: "skip" or "clamp" for near-coincident pairs
            min_distance: Skip threshold / clamp floor
            force_method: "vectorized" or "direct"
            check_finite: Raise NumericDegeneracyError if a step produces NaN/Inf
        """
        dt = float(dt)
        if not math.isfinite(dt) or dt <= 0.0:
            raise InvalidArgumentError(f"dt must be a positive finite number, got {dt}")
        if isinstance(max_steps, bool) or int(max_steps) != max_steps or max_steps < 0:
            raise InvalidArgumentError(f"max_steps must be a non-negative integer, got {max_steps!r}")

        self.backend = backend or NumPyBackend()
        self.integrator = integrator or SemiImplicitEulerIntegrator()
        self.dt = dt
        self.max_steps = int(max_steps)
        self.check_finite = check_finite

        self.system = NBodySystem(
            self.backend,
            G=G,
            zero_distance_policy=zero_distance_policy,
            min_distance=min_distance,
            force_method=force_method,
        )
        self.time = 0.0
        self.step_count = 0

        # Profiling: last step timing (ms)
        self._last_forces_ms: Optional[float] = None
        self._last_integrator_ms: Optional[float] = None
        self._profile: bool = False

        # Callbacks
        self.on_step_callback: Optional[Callable] = None

    @classmethod
    def from_config(cls, config, backend: Optional[Backend] = None) -> "Simulator":
        """Build a simulator from a ``SimulationConfig``."""
        return cls(
            backend=backend,
            integrator=get_integrator(config.integrator),
            dt=config.dt,
            G=config.G,
            max_steps=config.max_steps,
            zero_distance_policy=config.zero_distance_policy,
            min_distance=config.min_distance,
            force_method=config.force_method,
            check_finite=config.check_finite,
        )

    @property
    def G(self) -> float:
        return self.system.G

    @property
    def state(self) -> SimulationState:
        if not self.system.loaded:
            return SimulationState.UNINITIALIZED
        if self.step_count >= self.max_steps:
            return SimulationState.DONE
        if self.step_count == 0:
            return SimulationState.READY
        return SimulationState.STEPPING

    @property
    def is_done(self) -> bool:
        return self.state is SimulationState.DONE

    @property
    def remaining_steps(self) -> int:
        return self.max_steps - self.step_count

    def set_profiling(self, enabled: bool = True):
        """Enable or disable step timing (forces ms, integrator ms)."""
        self._profile = enabled

    def get_timing(self) -> dict:
        """Return last step timing in ms: forces_ms, integrator_ms."""
        return {
            "forces_ms": self._last_forces_ms,
            "integrator_ms": self._last_integrator_ms,
        }

    def initialize(self, positions, velocities, masses):
        """Load the initial state and reset the step counter.

        Args:
            positions: Initial positions (n, 2)
            velocities: Initial velocities (n, 2)
            masses: Body masses (n,)
        """
        self.system.initialize(positions, velocities, masses)
        self.time = 0.0
        self.step_count = 0

    def load_bodies(self, bodies: Sequence[Body]):
        """Load the initial state from an ordered sequence of bodies."""
        self.system.load_bodies(bodies)
        self.time = 0.0
        self.step_count = 0

    def step(self):
        """Perform one simulation step."""
        state = self.state
        if state is SimulationState.UNINITIALIZED:
            raise SimulationStateError("No bodies loaded. Call initialize() or load_bodies() first.")
        if state is SimulationState.DONE:
            raise SimulationStateError(f"Simulation already completed {self.max_steps} steps")

        if self._profile:
            t0 = time.perf_counter()
        forces = self.system.compute_forces()
        if self._profile:
            t1 = time.perf_counter()
        new_positions, new_velocities = self.integrator.step(
            self.system.positions,
            self.system.velocities,
            self.system.masses,
            forces,
            self.dt,
            self.backend,
        )
        if self._profile:
            t2 = time.perf_counter()
            self._last_forces_ms = (t1 - t0) * 1000.0
            self._last_integrator_ms = (t2 - t1) * 1000.0

        if self.check_finite and not self.system.diagnostics.is_finite(new_positions, new_velocities):
            raise NumericDegeneracyError(f"Non-finite body state at step {self.step_count + 1}")

        self.system.positions = new_positions
        self.system.velocities = new_velocities
        self.time += self.dt
        self.step_count += 1

        if self.on_step_callback:
            self.on_step_callback(self)

    def run_steps(self, k: int) -> int:
        """Run up to k steps, stopping at DONE. Returns the number of steps taken (0 for k <= 0)."""
        k = max(0, min(k, self.remaining_steps))
        for _ in range(k):
            self.step()
        return k

    def run(self, n_steps: Optional[int] = None):
        """Run simulation for a number of steps.

        Args:
            n_steps: Number of steps to run (default: all remaining steps)
        """
        if self.state is SimulationState.UNINITIALIZED:
            raise SimulationStateError("No bodies loaded. Call initialize() or load_bodies() first.")
        if n_steps is None:
            n_steps = self.remaining_steps
        if n_steps > self.remaining_steps:
            raise SimulationStateError(
                f"Cannot run {n_steps} steps, only {self.remaining_steps} of {self.max_steps} remain"
            )
        for _ in range(n_steps):
            self.step()

    def get_state(self):
        """Get current simulation state.

        Returns:
            Tuple of (positions, velocities, masses, time, step_count)
        """
        pos, vel, mass = self.system.get_state()
        return pos, vel, mass, self.time, self.step_count

    def get_bodies(self) -> List[Body]:
        """Current state as an ordered list of bodies."""
        return self.system.get_bodies()

    def get_momentum(self) -> np.ndarray:
        """Get current total momentum vector."""
        return self.system.compute_momentum()

    def get_energy(self):
        """Get current total energy (kinetic + potential)."""
        return self.system.compute_total_energy()

    def get_kinetic_energy(self):
        """Get current kinetic energy."""
        return self.system.compute_kinetic_energy()

    def get_potential_energy(self):
        """Get current potential energy."""
        return self.system.compute_potential_energy()
