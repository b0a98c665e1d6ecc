"""Compiled-in simulation constants.

Every value here is also a field of ``SimulationConfig`` so it can be
overridden from a config file or the command line.
"""

# Initial placement: positions in [0, BOX_SIZE) x [0, BOX_SIZE)
BOX_SIZE = 10.0

# Initial masses in [MASS_MIN, MASS_MAX)
MASS_MIN = 1.0
MASS_MAX = 5.0

# Number of steps in a full run
MAX_STEPS = 100_000

# Gravitational constant (SI value, m^3 kg^-1 s^-2)
G = 6.67430e-11

# Fixed time step
DT = 1.0

# Pairs closer than this are skipped (or clamped to it, see force_calculator)
MIN_DISTANCE = 0.05

ZERO_DISTANCE_POLICIES = ("skip", "clamp")
DEFAULT_ZERO_DISTANCE_POLICY = "skip"
