"""CLI main entry point."""

import argparse
import sys
from typing import Optional, Sequence, TextIO
from nbody_sim.backends.factory import get_backend, list_available_backends
from nbody_sim.errors import InvalidArgumentError, NumericDegeneracyError
from nbody_sim.io.report import print_report
from nbody_sim.io.state_io import save_state
from nbody_sim.physics.force_calculator import FORCE_METHODS
from nbody_sim.physics.integrators.registry import list_integrators
from nbody_sim.physics.simulator import Simulator
from nbody_sim.presets.base import parse_body_count
from nbody_sim.presets.uniform_box import UniformBox
from nbody_sim.render.renderer_2d import Renderer2D
from nbody_sim.utils.config import SimulationConfig, load_config
from nbody_sim.utils.reproducibility import make_rng
from nbody_sim import constants


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nbody-sim",
        description="Runs a brute-force 2D N-body gravity simulation for a fixed number of steps",
    )
    parser.add_argument('count', nargs='?', default=None,
                        help='Number of bodies to simulate (positive integer)')
    parser.add_argument('-n', '--count', dest='count_option', default=None,
                        help='Number of bodies (alternative to the positional argument)')

    # Simulation parameters
    parser.add_argument('--steps', type=int, default=None,
                        help=f'Number of simulation steps (default: {constants.MAX_STEPS})')
    parser.add_argument('--dt', type=float, default=None,
                        help=f'Time step (default: {constants.DT})')
    parser.add_argument('--G', type=float, default=None,
                        help=f'Gravitational constant (default: {constants.G})')
    parser.add_argument('--policy', type=str, default=None, choices=list(constants.ZERO_DISTANCE_POLICIES),
                        help='Zero-distance policy: skip close pairs or clamp their distance (default: skip)')
    parser.add_argument('--min-distance', type=float, default=None,
                        help=f'Skip threshold / clamp floor (default: {constants.MIN_DISTANCE})')
    parser.add_argument('--initial-speed', type=float, default=None,
                        help='Draw initial velocity components from [-s, s) (default: 0, bodies at rest)')

    # Execution
    parser.add_argument('--integrator', type=str, default=None, choices=list_integrators(),
                        help='Numerical integrator (default: semi_implicit_euler)')
    parser.add_argument('--method', type=str, default=None, choices=list(FORCE_METHODS),
                        help='Force evaluation method (default: vectorized)')
    parser.add_argument('--backend', type=str, default=None, choices=list_available_backends(),
                        help='Compute backend (default: numpy)')
    parser.add_argument('--check-finite', action='store_true',
                        help='Abort with an error if any position or velocity becomes NaN/Inf')
    parser.add_argument('--config', type=str, default=None,
                        help='YAML or JSON config file; command-line flags override it')

    # Reproducibility
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    # Output
    parser.add_argument('--report-every', type=int, default=None,
                        help='Print a progress line every N steps (0 disables)')
    parser.add_argument('--save-state', type=str, default=None,
                        help='Save final state to file (.json or .npz)')
    parser.add_argument('--plot', type=str, default=None,
                        help='Save a scatter plot of the final state (e.g. final.png)')
    parser.add_argument('--quiet', action='store_true',
                        help='Only print the final state table')
    return parser


def build_config(args) -> SimulationConfig:
    """Merge config file, CLI flags and the body count into one validated config."""
    config = load_config(args.config) if args.config else SimulationConfig()

    overrides = {
        'max_steps': args.steps,
        'dt': args.dt,
        'G': args.G,
        'zero_distance_policy': args.policy,
        'min_distance': args.min_distance,
        'max_initial_speed': args.initial_speed,
        'integrator': args.integrator,
        'force_method': args.method,
        'backend': args.backend,
        'seed': args.seed,
        'report_every': args.report_every,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config, key, value)
    if args.check_finite:
        config.check_finite = True

    if args.count is not None and args.count_option is not None and args.count != args.count_option:
        raise InvalidArgumentError(f"Conflicting body counts: {args.count!r} and {args.count_option!r}")
    count_text = args.count if args.count is not None else args.count_option
    if count_text is not None or config.n_bodies is None:
        config.n_bodies = parse_body_count(count_text)

    return config.validate()


def run_simulation(
    config: SimulationConfig,
    quiet: bool = False,
    save_state_path: Optional[str] = None,
    plot_path: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> Simulator:
    """Generate bodies, run all steps and report the final state."""
    stream = stream or sys.stdout
    backend = get_backend(config.backend)
    rng = make_rng(config.seed)

    preset = UniformBox(
        backend,
        config.n_bodies,
        rng=rng,
        box_size=config.box_size,
        mass_range=(config.mass_min, config.mass_max),
        max_initial_speed=config.max_initial_speed,
    )
    sim = Simulator.from_config(config, backend)
    sim.initialize(*preset.generate())

    if not quiet:
        print(f"Running simulation: {config.n_bodies} bodies, {sim.max_steps} steps", file=stream)
        print(f"Backend: {backend.name}, Integrator: {sim.integrator.name}, dt: {sim.dt}, G: {sim.G:.6g}, "
              f"policy: {config.zero_distance_policy} (min_distance={config.min_distance})", file=stream)

    if config.report_every and not quiet:
        print(f"{'Step':<10} {'Time':<14} {'px':<14} {'py':<14} {'E':<14}", file=stream)
        print("-" * 70, file=stream)

        def report_step(simulator):
            if simulator.step_count % config.report_every == 0 or simulator.is_done:
                px, py = simulator.get_momentum()
                E = simulator.get_energy()
                print(f"{simulator.step_count:<10} {simulator.time:<14.6g} {px:<14.6e} {py:<14.6e} {E:<14.6e}",
                      file=stream)

        sim.on_step_callback = report_step

    sim.run()

    print_report(sim, stream=stream)

    if save_state_path:
        pos, vel, mass = sim.system.get_state()
        save_state(pos, vel, mass, save_state_path, metadata={
            'time': sim.time,
            'steps': sim.step_count,
            'integrator': sim.integrator.name,
            'zero_distance_policy': config.zero_distance_policy,
            'G': sim.G,
            'dt': sim.dt,
        })
        if not quiet:
            print(f"State saved to {save_state_path}", file=stream)

    if plot_path:
        pos, vel, mass = sim.system.get_state()
        Renderer2D().save(plot_path, pos, vel, mass)
        if not quiet:
            print(f"Plot saved to {plot_path}", file=stream)

    if not quiet:
        print("Simulation complete!", file=stream)
    return sim


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except (InvalidArgumentError, OSError) as e:
        parser.error(str(e))

    try:
        run_simulation(config, quiet=args.quiet, save_state_path=args.save_state, plot_path=args.plot)
    except InvalidArgumentError as e:
        parser.error(str(e))
    except NumericDegeneracyError as e:
        print(f"nbody-sim: error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
