"""Reproducibility utilities for deterministic simulations."""

import numpy as np
from typing import Optional


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Generator for initial conditions; unseeded when seed is None.

    All random draws go through the returned generator, so a fixed seed
    reproduces a run without touching the global ``random``/``np.random``
    state.
    """
    return np.random.default_rng(seed)
