"""Deterministic seeding utilities.

Random actions are drawn from seeded generators so that a run can be
replayed given the same seed.
"""

from __future__ import annotations

import numpy as np


def make_rng(seed: int | np.random.Generator | None = None) -> np.random.Generator:
    """Return a NumPy Generator for ``seed``.

    An existing Generator is passed through unchanged so callers can share
    one stream across several draws.  None yields a fresh (non-reproducible)
    generator.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    if seed is not None and seed < 0:
        raise ValueError(f"seed must be >= 0, got {seed}")
    return np.random.default_rng(seed)
