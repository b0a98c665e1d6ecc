"""Human-readable reports of body state."""

import sys
from typing import List, Sequence, TextIO
import numpy as np
from nbody_sim.physics.body import Body


def format_bodies(bodies: Sequence[Body]) -> List[str]:
    """One line per body: index, position, velocity, mass."""
    lines = [f"{'Body':<6} {'x':>14} {'y':>14} {'vx':>14} {'vy':>14} {'mass':>10}"]
    for i, body in enumerate(bodies):
        x, y = body.position
        vx, vy = body.velocity
        lines.append(f"{i:<6} {x:>14.6g} {y:>14.6g} {vx:>14.6g} {vy:>14.6g} {body.mass:>10.4f}")
    return lines


def format_summary(step_count: int, time: float, momentum, energy: float) -> str:
    momentum = np.asarray(momentum, dtype=float)
    return (
        f"steps={step_count} time={time:.6g} "
        f"momentum=({momentum[0]:.6e}, {momentum[1]:.6e}) energy={energy:.6e}"
    )


def print_report(simulator, stream: TextIO = None):
    """Print the final state table and a summary line for a simulator."""
    stream = stream or sys.stdout
    bodies = simulator.get_bodies()
    if bodies:
        for line in format_bodies(bodies):
            print(line, file=stream)
    else:
        print("(no bodies)", file=stream)
    print(
        format_summary(
            simulator.step_count,
            simulator.time,
            simulator.get_momentum(),
            simulator.get_energy(),
        ),
        file=stream,
    )
