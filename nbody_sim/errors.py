"""Exception types raised by the simulator."""


class NBodyError(Exception):
    """Base class for all nbody_sim errors."""


class InvalidArgumentError(NBodyError, ValueError):
    """A startup precondition failed (bad count, mass, option or config value)."""


class NumericDegeneracyError(NBodyError, ArithmeticError):
    """The state became non-finite during a step."""


class SimulationStateError(NBodyError, RuntimeError):
    """A simulator operation was called in a state that does not allow it."""
