"""Sample data shared by every summation routine."""

from __future__ import annotations

import math

import numpy as np

__all__ = [
    "generate_sample",
    "reference_sum",
]


def generate_sample(n_elements: int = 10_000_000, random_seed: int = 42) -> np.ndarray:
    """Generate the read-only sample array.

    Parameters
    ----------
    n_elements : int, default=10_000_000
        Length of the array.
    random_seed : int, default=42
        Seed for :func:`numpy.random.default_rng`.

    Returns
    -------
    ndarray
        Contiguous ``float64`` values drawn uniformly from ``[0, 1)``. The
        array is not writeable, so every routine sees the same values.
    """
    if n_elements < 1:
        raise ValueError(f"n_elements must be positive, got {n_elements}.")

    rng = np.random.default_rng(random_seed)
    values = rng.random(n_elements)
    values.flags.writeable = False
    return values


def reference_sum(values) -> float:
    """Correctly rounded sum used as the trusted reference."""
    return math.fsum(values)
