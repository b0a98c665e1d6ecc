"""Tests for momentum, energy and sanity diagnostics."""

import numpy as np
import pytest
from nbody_sim.backends.factory import get_backend
from nbody_sim.physics.diagnostics import Diagnostics


def test_momentum_and_center_of_mass():
    backend = get_backend('numpy')
    diagnostics = Diagnostics(backend, G=1.0)

    positions = np.array([[0.0, 0.0], [4.0, 2.0]])
    velocities = np.array([[1.0, 0.0], [0.0, -2.0]])
    masses = np.array([3.0, 1.0])

    assert np.allclose(diagnostics.compute_momentum(velocities, masses), [3.0, -2.0])
    assert np.allclose(diagnostics.compute_center_of_mass(positions, masses), [1.0, 0.5])


def test_empty_system_diagnostics():
    backend = get_backend('numpy')
    diagnostics = Diagnostics(backend, G=1.0)
    empty = np.zeros((0, 2))

    assert np.array_equal(diagnostics.compute_momentum(empty, np.zeros(0)), [0.0, 0.0])
    assert np.array_equal(diagnostics.compute_center_of_mass(empty, np.zeros(0)), [0.0, 0.0])
    assert diagnostics.compute_energies(empty, empty, np.zeros(0)) == (0.0, 0.0, 0.0)


def test_potential_energy_matches_force_law():
    """U = -G m1 m2 / d for a pair outside min_distance."""
    backend = get_backend('numpy')
    positions = np.array([[0.0, 0.0], [5.0, 0.0]])
    velocities = np.array([[0.0, 0.0], [0.0, 2.0]])
    masses = np.array([100.0, 1.0])

    diagnostics = Diagnostics(backend, G=1.0)
    K, U, E = diagnostics.compute_energies(positions, velocities, masses)

    assert K == pytest.approx(2.0)
    assert U == pytest.approx(-20.0)
    assert E == pytest.approx(-18.0)


def test_potential_energy_policies():
    backend = get_backend('numpy')
    positions = np.array([[0.0, 0.0], [0.01, 0.0]])
    velocities = np.zeros((2, 2))
    masses = np.array([1.0, 1.0])

    _, U_skip, _ = Diagnostics(backend, G=1.0, zero_distance_policy="skip",
                               min_distance=0.05).compute_energies(positions, velocities, masses)
    _, U_clamp, _ = Diagnostics(backend, G=1.0, zero_distance_policy="clamp",
                                min_distance=0.05).compute_energies(positions, velocities, masses)

    assert U_skip == 0.0
    assert U_clamp == pytest.approx(-20.0)


def test_is_finite():
    backend = get_backend('numpy')
    diagnostics = Diagnostics(backend)
    good = np.array([[1.0, 2.0]])

    assert diagnostics.is_finite(good, good)
    assert not diagnostics.is_finite(np.array([[np.nan, 0.0]]), good)
    assert not diagnostics.is_finite(good, np.array([[0.0, np.inf]]))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
