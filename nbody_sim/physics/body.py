"""Point-mass body record and conversions to/from state arrays."""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple
import numpy as np
from nbody_sim.errors import InvalidArgumentError


@dataclass
class Body:
    """One point mass.

    Position and velocity are 2D ``(x, y)`` tuples. Mass is fixed for the
    body's lifetime and must be positive.
    """

    position: Tuple[float, float]
    mass: float
    velocity: Tuple[float, float] = (0.0, 0.0)

    def __post_init__(self):
        self.position = _as_vector(self.position, "position")
        self.velocity = _as_vector(self.velocity, "velocity")
        try:
            mass = float(self.mass)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Body mass must be a number, got {self.mass!r}") from e
        if not math.isfinite(mass) or mass <= 0.0:
            raise InvalidArgumentError(f"Body mass must be a positive finite number, got {self.mass!r}")
        self.mass = mass

    @property
    def momentum(self) -> Tuple[float, float]:
        return (self.mass * self.velocity[0], self.mass * self.velocity[1])


def _as_vector(value, field_name: str) -> Tuple[float, float]:
    try:
        values = tuple(float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"Body {field_name} must be a pair of numbers, got {value!r}") from e
    if len(values) != 2:
        raise InvalidArgumentError(f"Body {field_name} must have 2 components, got {len(values)}")
    if not all(math.isfinite(v) for v in values):
        raise InvalidArgumentError(f"Body {field_name} must be finite, got {values}")
    return values


def bodies_to_arrays(bodies: Sequence[Body]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Pack bodies into (positions, velocities, masses) arrays.

    Row ``i`` of each array is ``bodies[i]``; an empty sequence gives
    ``(0, 2)``, ``(0, 2)`` and ``(0,)`` arrays.
    """
    n = len(bodies)
    positions = np.zeros((n, 2))
    velocities = np.zeros((n, 2))
    masses = np.zeros(n)
    for i, body in enumerate(bodies):
        positions[i] = body.position
        velocities[i] = body.velocity
        masses[i] = body.mass
    return positions, velocities, masses


def arrays_to_bodies(positions, velocities, masses) -> List[Body]:
    """Unpack state arrays into a list of bodies, preserving order."""
    positions = np.asarray(positions, dtype=float).reshape(-1, 2)
    velocities = np.asarray(velocities, dtype=float).reshape(-1, 2)
    masses = np.asarray(masses, dtype=float).flatten()
    return [
        Body(position=tuple(positions[i]), velocity=tuple(velocities[i]), mass=masses[i])
        for i in range(len(masses))
    ]
