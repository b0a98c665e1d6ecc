"""All-pairs gravitational force calculation.

Forces are a pure function of one snapshot of positions and masses: the
calculator never mutates its inputs and returns a fresh ``(n, dim)`` array.
Pairs that are too close to have a well-defined force are handled by the
zero-distance policy:

- ``"skip"``: pairs with distance <= ``min_distance`` contribute nothing.
- ``"clamp"``: the distance in ``G m_i m_j / d^2`` is clamped to
  ``max(d, min_distance)``. Exactly coincident pairs have no direction
  and contribute nothing.

Both policies keep the pairwise force matrix antisymmetric, so total
momentum is conserved.
"""

import math
from typing import Any, Literal
import numpy as np
from nbody_sim.backends.base import Backend
from nbody_sim.constants import (
    DEFAULT_ZERO_DISTANCE_POLICY,
    G as G_DEFAULT,
    MIN_DISTANCE,
    ZERO_DISTANCE_POLICIES,
)
from nbody_sim.errors import InvalidArgumentError

FORCE_METHODS = ("vectorized", "direct")


class ForceCalculator:
    """Brute-force O(N^2) gravitational force evaluation."""

    def __init__(
        self,
        method: Literal["vectorized", "direct"] = "vectorized",
        zero_distance_policy: Literal["skip", "clamp"] = DEFAULT_ZERO_DISTANCE_POLICY,
        min_distance: float = MIN_DISTANCE,
    ):
        """Initialize force calculator.

        Args:
            method: "vectorized" (array broadcasting) or "direct" (pairwise loop)
            zero_distance_policy: "skip" or "clamp"
            min_distance: Skip threshold or clamp floor, must be >= 0
        """
        if method not in FORCE_METHODS:
            raise InvalidArgumentError(f"Unknown force method: {method}. Available: {list(FORCE_METHODS)}")
        if zero_distance_policy not in ZERO_DISTANCE_POLICIES:
            raise InvalidArgumentError(
                f"Unknown zero-distance policy: {zero_distance_policy}. Available: {list(ZERO_DISTANCE_POLICIES)}"
            )
        min_distance = float(min_distance)
        if not math.isfinite(min_distance) or min_distance < 0.0:
            raise InvalidArgumentError(f"min_distance must be a finite number >= 0, got {min_distance}")
        self.method = method
        self.zero_distance_policy = zero_distance_policy
        self.min_distance = min_distance

    def compute_forces(
        self,
        positions: Any,
        masses: Any,
        backend: Backend,
        G: float = G_DEFAULT,
    ) -> Any:
        """Compute the net gravitational force on every body.

        Args:
            positions: (n, dim) backend array
            masses: (n,) backend array
            backend: Compute backend
            G: Gravitational constant

        Returns:
            (n, dim) backend array; row i is the net force on body i
        """
        n = positions.shape[0]
        dim = positions.shape[1]
        if n < 2:
            return backend.zeros((n, dim))
        if self.method == "direct":
            return backend.array(self._compute_forces_direct(backend.to_numpy(positions), backend.to_numpy(masses), G))
        return self._compute_forces_vectorized(positions, masses, backend, G)

    def _compute_forces_vectorized(self, positions: Any, masses: Any, backend: Backend, G: float) -> Any:
        n = positions.shape[0]
        dim = positions.shape[1]
        # r_diff[i, j] points from body i toward body j: (n, n, dim)
        pos_i = backend.reshape(positions, (n, 1, dim))
        pos_j = backend.reshape(positions, (1, n, dim))
        r_diff = backend.subtract(pos_j, pos_i)
        distance = backend.sqrt(backend.sum(backend.square(r_diff), axis=2))

        not_self = ~backend.eye(n, dtype=bool)
        if self.zero_distance_policy == "skip":
            active = not_self & (distance > self.min_distance)
            effective = distance
        else:
            active = not_self & (distance > 0.0)
            effective = backend.maximum(distance, self.min_distance)

        # Inactive pairs divide by 1.0 and are then zeroed
        safe_distance = backend.where(active, distance, 1.0)
        safe_effective = backend.where(active, effective, 1.0)
        # |F| / d: magnitude G m_i m_j / d_eff^2 spread along the unit vector r_diff / d
        scale = backend.divide(1.0, backend.multiply(backend.square(safe_effective), safe_distance))
        scale = backend.where(active, scale, 0.0)

        m_i = backend.expand_dims(masses, 1)
        m_j = backend.expand_dims(masses, 0)
        force_magnitude = backend.multiply(backend.multiply(G, backend.multiply(m_i, m_j)), scale)
        force_vectors = backend.multiply(backend.expand_dims(force_magnitude, 2), r_diff)
        return backend.sum(force_vectors, axis=1)

    def _compute_forces_direct(self, positions: np.ndarray, masses: np.ndarray, G: float) -> np.ndarray:
        """Loop-based reference implementation."""
        n, dim = positions.shape
        masses = np.asarray(masses, dtype=float).flatten()
        forces = np.zeros((n, dim))
        for i in range(n):
            for j in range(n):
                if i == j:
                    continue
                r_diff = positions[j] - positions[i]
                distance = math.sqrt(float(np.sum(r_diff ** 2)))
                if distance == 0.0:
                    continue
                if self.zero_distance_policy == "skip":
                    if distance <= self.min_distance:
                        continue
                    effective = distance
                else:
                    effective = max(distance, self.min_distance)
                magnitude = G * masses[i] * masses[j] / effective ** 2
                forces[i] += magnitude * r_diff / distance
        return forces


def compute_forces(
    positions: Any,
    masses: Any,
    backend: Backend,
    G: float = G_DEFAULT,
    zero_distance_policy: str = DEFAULT_ZERO_DISTANCE_POLICY,
    min_distance: float = MIN_DISTANCE,
) -> Any:
    """Functional shortcut for ``ForceCalculator(...).compute_forces(...)``."""
    calculator = ForceCalculator(zero_distance_policy=zero_distance_policy, min_distance=min_distance)
    return calculator.compute_forces(positions, masses, backend, G=G)
