"""Diagnostics for N-body simulations."""

import numpy as np
from typing import Tuple
from nbody_sim.backends.base import Backend
from nbody_sim.constants import DEFAULT_ZERO_DISTANCE_POLICY, G as G_DEFAULT, MIN_DISTANCE


class Diagnostics:
    """Conserved quantities and sanity checks matching the force law."""

    def __init__(
        self,
        backend: Backend,
        G: float = G_DEFAULT,
        zero_distance_policy: str = DEFAULT_ZERO_DISTANCE_POLICY,
        min_distance: float = MIN_DISTANCE,
    ):
        """Initialize diagnostics.

        Args:
            backend: Compute backend
            G: Gravitational constant
            zero_distance_policy: Must match the force calculation ("skip" or "clamp")
            min_distance: Must match the force calculation
        """
        self.backend = backend
        self.G = G
        self.zero_distance_policy = zero_distance_policy
        self.min_distance = min_distance

    def _as_numpy(self, positions, velocities, masses):
        positions_np = np.asarray(self.backend.to_numpy(positions), dtype=float).reshape(-1, 2)
        velocities_np = np.asarray(self.backend.to_numpy(velocities), dtype=float).reshape(-1, 2)
        masses_np = np.asarray(self.backend.to_numpy(masses), dtype=float).flatten()
        return positions_np, velocities_np, masses_np

    def compute_momentum(self, velocities, masses) -> np.ndarray:
        """Total momentum: sum(m_i * v_i), shape (dim,)."""
        velocities_np = np.asarray(self.backend.to_numpy(velocities), dtype=float)
        masses_np = np.asarray(self.backend.to_numpy(masses), dtype=float).flatten()
        if masses_np.size == 0:
            return np.zeros(velocities_np.shape[-1] if velocities_np.ndim == 2 else 2)
        return np.sum(masses_np[:, np.newaxis] * velocities_np, axis=0)

    def compute_center_of_mass(self, positions, masses) -> np.ndarray:
        """Mass-weighted mean position; zeros for an empty system."""
        positions_np = np.asarray(self.backend.to_numpy(positions), dtype=float)
        masses_np = np.asarray(self.backend.to_numpy(masses), dtype=float).flatten()
        total_mass = np.sum(masses_np)
        if total_mass == 0.0:
            return np.zeros(positions_np.shape[-1] if positions_np.ndim == 2 else 2)
        return np.sum(masses_np[:, np.newaxis] * positions_np, axis=0) / total_mass

    def compute_energies(
        self,
        positions,
        velocities,
        masses
    ) -> Tuple[float, float, float]:
        """Compute kinetic, potential, and total energy.

        The potential uses the same pair treatment as the force law:
        U = -G * sum_{i<j} m_i * m_j / d_ij, skipping pairs the "skip" policy
        skips and using max(d_ij, min_distance) under "clamp".

        Args:
            positions: Body positions (n, dim)
            velocities: Body velocities (n, dim)
            masses: Body masses (n,)

        Returns:
            Tuple of (kinetic_energy, potential_energy, total_energy)
        """
        positions_np, velocities_np, masses_np = self._as_numpy(positions, velocities, masses)
        n = len(masses_np)

        v_sq = np.sum(velocities_np ** 2, axis=1)
        K = 0.5 * np.sum(masses_np * v_sq)

        U = 0.0
        for i in range(n):
            for j in range(i + 1, n):
                distance = np.sqrt(np.sum((positions_np[j] - positions_np[i]) ** 2))
                if distance == 0.0:
                    continue
                if self.zero_distance_policy == "skip":
                    if distance <= self.min_distance:
                        continue
                else:
                    distance = max(distance, self.min_distance)
                U -= self.G * masses_np[i] * masses_np[j] / distance

        return float(K), float(U), float(K + U)

    def is_finite(self, positions, velocities) -> bool:
        """True if every position and velocity component is finite."""
        return bool(
            np.all(self.backend.to_numpy(self.backend.isfinite(positions)))
            and np.all(self.backend.to_numpy(self.backend.isfinite(velocities)))
        )
