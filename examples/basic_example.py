"""Basic example of using the N-body simulator."""

from nbody_sim import Simulator, get_backend
from nbody_sim.io.report import print_report
from nbody_sim.physics.integrators import SemiImplicitEulerIntegrator
from nbody_sim.presets import UniformBox


def main():
    """Run a short five-body simulation with a visible gravitational constant."""
    backend = get_backend("numpy")

    # Five bodies at rest in the 10 x 10 box
    preset = UniformBox(backend, n_bodies=5, seed=42)
    bodies = preset.generate_bodies()

    sim = Simulator(
        backend,
        SemiImplicitEulerIntegrator(),
        dt=0.01,
        G=1.0,
        max_steps=500,
        zero_distance_policy="clamp",
    )
    sim.load_bodies(bodies)

    print("Running simulation...")
    print(f"Initial energy: {sim.get_energy():.6f}")

    while not sim.is_done:
        sim.run_steps(100)
        px, py = sim.get_momentum()
        print(f"Step {sim.step_count}: Time={sim.time:.2f}, Energy={sim.get_energy():.6f}, "
              f"Momentum=({px:.2e}, {py:.2e})")

    print_report(sim)
    print("Simulation complete!")


if __name__ == "__main__":
    main()
