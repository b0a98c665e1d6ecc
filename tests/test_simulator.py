"""Tests for the simulator state machine and the physical invariants of a run."""

import numpy as np
import pytest
from nbody_sim.backends.numpy_backend import NumPyBackend
from nbody_sim.constants import MAX_STEPS
from nbody_sim.errors import InvalidArgumentError, NumericDegeneracyError, SimulationStateError
from nbody_sim.physics.body import Body
from nbody_sim.physics.integrators.base import Integrator
from nbody_sim.physics.integrators.euler import EulerIntegrator
from nbody_sim.physics.simulator import SimulationState, Simulator
from nbody_sim.presets.uniform_box import UniformBox
from nbody_sim.utils.config import SimulationConfig


def test_simulator_defaults():
    sim = Simulator()
    assert sim.max_steps == MAX_STEPS
    assert sim.dt == 1.0
    assert sim.G == pytest.approx(6.67430e-11)
    assert sim.integrator.name == "semi_implicit_euler"
    assert sim.state is SimulationState.UNINITIALIZED


def test_state_transitions():
    sim = Simulator(max_steps=3)
    with pytest.raises(SimulationStateError):
        sim.step()
    with pytest.raises(SimulationStateError):
        sim.run()

    sim.load_bodies([Body(position=(0.0, 0.0), mass=1.0), Body(position=(1.0, 0.0), mass=1.0)])
    assert sim.state is SimulationState.READY
    assert sim.remaining_steps == 3

    sim.step()
    assert sim.state is SimulationState.STEPPING
    assert sim.step_count == 1
    assert sim.time == pytest.approx(1.0)

    sim.run()
    assert sim.state is SimulationState.DONE
    assert sim.is_done
    assert sim.step_count == 3

    with pytest.raises(SimulationStateError):
        sim.step()


def test_run_cannot_overshoot():
    sim = Simulator(max_steps=5)
    sim.load_bodies([Body(position=(0.0, 0.0), mass=1.0)])
    with pytest.raises(SimulationStateError):
        sim.run(6)
    sim.run(2)
    assert sim.step_count == 2
    assert sim.run_steps(10) == 3
    assert sim.is_done


def test_run_steps_ignores_non_positive_counts():
    sim = Simulator(max_steps=5)
    sim.load_bodies([Body(position=(0.0, 0.0), mass=1.0)])

    assert sim.run_steps(-3) == 0
    assert sim.run_steps(0) == 0
    assert sim.step_count == 0
    assert sim.state is SimulationState.READY


def test_zero_max_steps_is_done_once_loaded():
    sim = Simulator(max_steps=0)
    sim.load_bodies([Body(position=(1.0, 1.0), mass=2.0)])
    assert sim.state is SimulationState.DONE


def test_invalid_parameters():
    with pytest.raises(InvalidArgumentError):
        Simulator(dt=0.0)
    with pytest.raises(InvalidArgumentError):
        Simulator(dt=float("nan"))
    with pytest.raises(InvalidArgumentError):
        Simulator(max_steps=-1)
    with pytest.raises(InvalidArgumentError):
        Simulator(zero_distance_policy="merge")


def test_empty_system_is_noop():
    """N = 0 runs every step and reports an empty body list."""
    sim = Simulator(max_steps=1000)
    sim.load_bodies([])
    assert sim.state is SimulationState.READY

    sim.run()

    assert sim.state is SimulationState.DONE
    assert sim.step_count == 1000
    assert sim.get_bodies() == []
    assert np.array_equal(sim.get_momentum(), [0.0, 0.0])


def test_single_body_never_moves():
    """No self-force: a lone body keeps its initial state."""
    sim = Simulator(max_steps=1000, G=1.0)
    sim.load_bodies([Body(position=(3.0, 4.0), velocity=(0.0, 0.0), mass=2.5)])

    sim.run()

    (body,) = sim.get_bodies()
    assert body.position == (3.0, 4.0)
    assert body.velocity == (0.0, 0.0)
    assert body.mass == 2.5


@pytest.mark.parametrize("integrator", [None, EulerIntegrator()])
def test_symmetric_pair_stays_symmetric(integrator):
    """Equal masses placed symmetrically about a center stay symmetric about it."""
    center = np.array([5.0, 5.0])
    sim = Simulator(integrator=integrator, dt=0.01, G=1.0, max_steps=100)
    sim.load_bodies([
        Body(position=tuple(center - [1.0, 0.5]), mass=2.0),
        Body(position=tuple(center + [1.0, 0.5]), mass=2.0),
    ])
    separation_before = 2 * np.linalg.norm([1.0, 0.5])

    for _ in range(100):
        sim.step()
        positions = sim.system.get_state()[0]
        assert np.allclose((positions[0] + positions[1]) / 2.0, center, atol=1e-12)

    positions = sim.system.get_state()[0]
    assert np.linalg.norm(positions[1] - positions[0]) < separation_before


def test_momentum_is_conserved():
    backend = NumPyBackend()
    preset = UniformBox(backend, 6, seed=11)
    sim = Simulator(backend, dt=0.001, G=1.0, max_steps=500, zero_distance_policy="clamp")
    sim.initialize(*preset.generate())
    initial = sim.get_momentum()

    sim.run()

    assert np.allclose(initial, 0.0)
    assert np.allclose(sim.get_momentum(), initial, atol=1e-9)
    assert sim.system.is_finite()


def test_momentum_is_conserved_with_initial_velocities():
    backend = NumPyBackend()
    preset = UniformBox(backend, 5, seed=5, max_initial_speed=0.1)
    sim = Simulator(backend, dt=0.001, G=1.0, max_steps=300, force_method="direct")
    sim.initialize(*preset.generate())
    initial = sim.get_momentum()

    sim.run()

    assert np.allclose(sim.get_momentum(), initial, atol=1e-9)


def test_result_does_not_depend_on_body_order():
    """Every body is updated from the same snapshot, so ordering is irrelevant."""
    backend = NumPyBackend()
    positions, velocities, masses = UniformBox(backend, 5, seed=21).generate()
    order = np.array([3, 0, 4, 1, 2])

    forward = Simulator(backend, dt=0.01, G=0.1, max_steps=50)
    forward.initialize(positions, velocities, masses)
    forward.run()

    permuted = Simulator(backend, dt=0.01, G=0.1, max_steps=50)
    permuted.initialize(positions[order], velocities[order], masses[order])
    permuted.run()

    pos_a, vel_a, _, _, _ = forward.get_state()
    pos_b, vel_b, _, _, _ = permuted.get_state()
    assert np.allclose(pos_a[order], pos_b, rtol=1e-10, atol=1e-12)
    assert np.allclose(vel_a[order], vel_b, rtol=1e-10, atol=1e-12)


@pytest.mark.parametrize("policy", ["skip", "clamp"])
def test_coincident_bodies_stay_finite(policy):
    sim = Simulator(G=1.0, zero_distance_policy=policy, max_steps=1, check_finite=True)
    sim.load_bodies([Body(position=(2.0, 2.0), mass=1.0), Body(position=(2.0, 2.0), mass=3.0)])

    sim.step()

    for body in sim.get_bodies():
        assert np.all(np.isfinite(body.position))
        assert np.all(np.isfinite(body.velocity))


class _BrokenIntegrator(Integrator):
    name = "broken"
    order = 0

    def step(self, positions, velocities, masses, forces, dt, backend):
        return positions * np.nan, velocities


def test_check_finite_raises_numeric_degeneracy():
    sim = Simulator(integrator=_BrokenIntegrator(), max_steps=2, check_finite=True)
    sim.load_bodies([Body(position=(0.0, 0.0), mass=1.0)])

    with pytest.raises(NumericDegeneracyError):
        sim.step()
    # The failed step is not committed
    assert sim.step_count == 0
    assert sim.get_bodies()[0].position == (0.0, 0.0)


def test_step_callback_and_profiling():
    sim = Simulator(max_steps=4)
    sim.load_bodies([Body(position=(0.0, 0.0), mass=1.0), Body(position=(1.0, 1.0), mass=1.0)])
    seen = []
    sim.on_step_callback = lambda s: seen.append(s.step_count)
    sim.set_profiling(True)

    sim.run()

    assert seen == [1, 2, 3, 4]
    timing = sim.get_timing()
    assert timing["forces_ms"] is not None
    assert timing["integrator_ms"] is not None


def test_from_config():
    config = SimulationConfig(max_steps=7, dt=0.5, G=2.0, integrator="euler",
                              zero_distance_policy="clamp", min_distance=0.1, force_method="direct")
    sim = Simulator.from_config(config)

    assert sim.max_steps == 7
    assert sim.dt == 0.5
    assert sim.G == 2.0
    assert sim.integrator.name == "euler"
    assert sim.system.force_calculator.zero_distance_policy == "clamp"
    assert sim.system.force_calculator.min_distance == 0.1
    assert sim.system.force_calculator.method == "direct"


def test_energy_is_roughly_conserved_on_orbit():
    """Semi-implicit Euler keeps a circular orbit's energy bounded."""
    M, m, r = 1000.0, 1.0, 10.0
    v_circ = np.sqrt(M / r)
    sim = Simulator(dt=0.001, G=1.0, max_steps=2000)
    sim.initialize([[0.0, 0.0], [r, 0.0]], [[0.0, 0.0], [0.0, v_circ]], [M, m])
    E0 = sim.get_energy()

    sim.run()

    assert abs(sim.get_energy() - E0) / abs(E0) < 0.01


def test_end_to_end_three_bodies_full_run():
    """count = 3, fixed seed, the full 100,000 steps with default constants."""
    backend = NumPyBackend()
    bodies = UniformBox(backend, 3, seed=2024).generate_bodies()
    sim = Simulator(backend)
    sim.load_bodies(bodies)

    sim.run()

    assert sim.step_count == MAX_STEPS
    assert sim.is_done
    final = sim.get_bodies()
    assert len(final) == 3
    for before, after in zip(bodies, final):
        assert np.all(np.isfinite(after.position))
        assert np.all(np.isfinite(after.velocity))
        assert after.mass == before.mass
    assert np.linalg.norm(sim.get_momentum()) < 1e-6
