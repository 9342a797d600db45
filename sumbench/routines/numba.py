"""Numba-compiled summation loops."""

import numba as nb
import numpy as np

__all__ = [
    "jit_simd_sum",
    "jit_sum",
]


@nb.njit(cache=True)
def _sum_impl(values):
    s = 0.0
    for i in range(values.shape[0]):
        s += values[i]
    return s


@nb.njit(cache=True, fastmath=True)
def _simd_sum_impl(values):
    s = 0.0
    for i in range(values.shape[0]):
        s += values[i]
    return s


def jit_sum(values) -> float:
    """Sum with a compiled loop that keeps the sequential order.

    Parameters
    ----------
    values : ndarray
        One-dimensional ``float64`` array.

    Returns
    -------
    float
        Sum of ``values``.
    """
    return float(_sum_impl(np.ascontiguousarray(values, dtype=np.float64)))


def jit_simd_sum(values) -> float:
    """Sum with a compiled loop that may be reassociated and vectorized.

    ``fastmath`` lets LLVM split the accumulator across SIMD lanes, so the
    result can differ from :func:`jit_sum` in the last bits.
    """
    return float(_simd_sum_impl(np.ascontiguousarray(values, dtype=np.float64)))
