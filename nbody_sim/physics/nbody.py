"""N-body state container and physics queries."""

import numpy as np
from typing import List, Sequence
from nbody_sim.backends.base import Backend
from nbody_sim.constants import DEFAULT_ZERO_DISTANCE_POLICY, G as G_DEFAULT, MIN_DISTANCE
from nbody_sim.errors import InvalidArgumentError
from nbody_sim.physics.body import Body, arrays_to_bodies, bodies_to_arrays
from nbody_sim.physics.diagnostics import Diagnostics
from nbody_sim.physics.force_calculator import ForceCalculator


class NBodySystem:
    """Gravitational N-body system in two dimensions.

    Holds the state arrays (positions (n, 2), velocities (n, 2), masses (n,))
    and answers force, energy and momentum queries about them. Row i of
    every array is body i for the whole run.
    """

    DIM = 2

    def __init__(
        self,
        backend: Backend,
        G: float = G_DEFAULT,
        zero_distance_policy: str = DEFAULT_ZERO_DISTANCE_POLICY,
        min_distance: float = MIN_DISTANCE,
        force_method: str = "vectorized",
    ):
        """Initialize N-body system.

        Args:
            backend: Compute backend for array operations
            G: Gravitational constant, fixed for the run
            zero_distance_policy: "skip" or "clamp" for near-coincident pairs
            min_distance: Skip threshold / clamp floor
            force_method: "vectorized" or "direct"
        """
        self.backend = backend
        self.G = G
        self.force_calculator = ForceCalculator(
            method=force_method,
            zero_distance_policy=zero_distance_policy,
            min_distance=min_distance,
        )
        self.diagnostics = Diagnostics(
            backend,
            G=G,
            zero_distance_policy=zero_distance_policy,
            min_distance=min_distance,
        )
        self.positions = None
        self.velocities = None
        self.masses = None
        self.n_bodies = 0

    def initialize(self, positions, velocities, masses):
        """Load particle state.

        Args:
            positions: Array of shape (n, 2)
            velocities: Array of shape (n, 2)
            masses: Array of shape (n,), all positive
        """
        positions_np = np.asarray(positions, dtype=float)
        velocities_np = np.asarray(velocities, dtype=float)
        masses_np = np.asarray(masses, dtype=float).flatten()
        n = masses_np.shape[0]

        if n == 0:
            positions_np = positions_np.reshape(0, self.DIM)
            velocities_np = velocities_np.reshape(0, self.DIM)
        if positions_np.shape != (n, self.DIM) or velocities_np.shape != (n, self.DIM):
            raise InvalidArgumentError(
                f"Expected positions and velocities of shape ({n}, {self.DIM}), "
                f"got {positions_np.shape} and {velocities_np.shape}"
            )
        if np.any(~np.isfinite(masses_np)) or np.any(masses_np <= 0.0):
            raise InvalidArgumentError("All masses must be positive finite numbers")
        if not (np.all(np.isfinite(positions_np)) and np.all(np.isfinite(velocities_np))):
            raise InvalidArgumentError("Initial positions and velocities must be finite")

        self.set_state(positions_np, velocities_np, masses_np)

    def load_bodies(self, bodies: Sequence[Body]):
        """Load state from an ordered sequence of bodies."""
        self.initialize(*bodies_to_arrays(bodies))

    def compute_forces(self):
        """Net gravitational force on every body from the current snapshot.

        Returns:
            (n, 2) backend array
        """
        return self.force_calculator.compute_forces(self.positions, self.masses, self.backend, G=self.G)

    def compute_kinetic_energy(self) -> float:
        """Total kinetic energy: 0.5 * sum(m_i * v_i^2)."""
        K, _, _ = self.diagnostics.compute_energies(self.positions, self.velocities, self.masses)
        return K

    def compute_potential_energy(self) -> float:
        """Total pairwise potential energy, consistent with the force policy."""
        _, U, _ = self.diagnostics.compute_energies(self.positions, self.velocities, self.masses)
        return U

    def compute_total_energy(self) -> float:
        """Total energy (kinetic + potential)."""
        _, _, E = self.diagnostics.compute_energies(self.positions, self.velocities, self.masses)
        return E

    def compute_momentum(self) -> np.ndarray:
        """Total momentum vector sum(m_i * v_i)."""
        return self.diagnostics.compute_momentum(self.velocities, self.masses)

    def compute_center_of_mass(self) -> np.ndarray:
        return self.diagnostics.compute_center_of_mass(self.positions, self.masses)

    def is_finite(self) -> bool:
        return self.diagnostics.is_finite(self.positions, self.velocities)

    def get_state(self):
        """Get current state (positions, velocities, masses).

        Returns:
            Tuple of (positions, velocities, masses) as numpy arrays
        """
        return (
            self.backend.to_numpy(self.positions),
            self.backend.to_numpy(self.velocities),
            self.backend.to_numpy(self.masses)
        )

    def set_state(self, positions, velocities, masses):
        """Set particle state without validation.

        Args:
            positions: Array of positions
            velocities: Array of velocities
            masses: Array of masses
        """
        self.positions = self.backend.array(positions)
        self.velocities = self.backend.array(velocities)
        self.masses = self.backend.array(masses)
        self.n_bodies = self.masses.shape[0]

    def get_bodies(self) -> List[Body]:
        """Current state as an ordered list of bodies."""
        if self.masses is None:
            return []
        return arrays_to_bodies(*self.get_state())

    @property
    def loaded(self) -> bool:
        return self.masses is not None
