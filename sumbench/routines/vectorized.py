"""Vectorized summation with NumPy."""

import numpy as np

__all__ = ["numpy_sum"]


def numpy_sum(values) -> float:
    """Sum with :func:`numpy.sum`, which uses pairwise summation."""
    return float(np.sum(values))
