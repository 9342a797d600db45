"""Summation routines compared by the benchmark."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .native import (
    FASTMATH_FLAGS,
    OPTIMIZED_FLAGS,
    NativeSum,
    check_compiler_available,
    compile_shared_library,
    load_native_sum,
)
from .numba import jit_simd_sum, jit_sum
from .python import builtin_sum, loop_sum, to_boxed
from .vectorized import numpy_sum

__all__ = [
    "NATIVE_ROUTINE_NAMES",
    "ROUTINE_NAMES",
    "NativeSum",
    "SumRoutine",
    "builtin_sum",
    "check_compiler_available",
    "compile_shared_library",
    "get_routines",
    "jit_simd_sum",
    "jit_sum",
    "load_native_sum",
    "loop_sum",
    "numpy_sum",
    "select_routines",
    "to_boxed",
]

logger = logging.getLogger(__name__)

NATIVE_ROUTINE_NAMES = ("c", "c_fastmath")
ROUTINE_NAMES = (*NATIVE_ROUTINE_NAMES, "python_builtin", "python_loop", "numpy", "numba", "numba_simd")


def _identity(values):
    return values


@dataclass(frozen=True)
class SumRoutine:
    """A summation routine under comparison.

    Attributes
    ----------
    name : str
        Unique routine name.
    family : str
        One of ``"c"``, ``"python"``, ``"numpy"`` or ``"numba"``.
    func : callable
        Takes the prepared input and returns the sum.
    description : str
        Short human-readable description.
    prepare : callable
        Converts the sample array into the input ``func`` expects. Runs once,
        outside of any timed region.
    """

    name: str
    family: str
    func: Callable
    description: str = ""
    prepare: Callable = _identity

    def __call__(self, values):
        return self.func(self.prepare(values))


def get_routines(include_native: bool | None = None, compiler: str | None = None) -> list[SumRoutine]:
    """Build the ordered list of routines.

    Parameters
    ----------
    include_native : bool, optional
        Include the compiled C routines. When None they are included only if
        the compiler can be executed.
    compiler : str, optional
        C compiler executable. Defaults to ``$CC`` or ``gcc``.

    Returns
    -------
    list of SumRoutine
        Routines in the order of :data:`ROUTINE_NAMES`.
    """
    if include_native is None:
        include_native = check_compiler_available(compiler)
        if not include_native:
            logger.warning("C compiler not available, skipping native routines")

    routines = []
    if include_native:
        routines.append(
            SumRoutine(
                "c",
                "c",
                load_native_sum(OPTIMIZED_FLAGS, compiler=compiler, name="c_sum"),
                "C loop compiled with -O3",
            )
        )
        routines.append(
            SumRoutine(
                "c_fastmath",
                "c",
                load_native_sum(FASTMATH_FLAGS, compiler=compiler, name="c_sum_fastmath"),
                "C loop compiled with -O3 -ffast-math",
            )
        )

    routines.extend(
        [
            SumRoutine("python_builtin", "python", builtin_sum, "built-in sum over boxed floats", to_boxed),
            SumRoutine("python_loop", "python", loop_sum, "hand-written loop over boxed floats", to_boxed),
            SumRoutine("numpy", "numpy", numpy_sum, "numpy.sum"),
            SumRoutine("numba", "numba", jit_sum, "numba.njit loop"),
            SumRoutine("numba_simd", "numba", jit_simd_sum, "numba.njit loop with fastmath"),
        ]
    )
    return routines


def select_routines(routines: list[SumRoutine], names) -> list[SumRoutine]:
    """Keep only the routines whose names are listed, preserving order."""
    if names is None:
        return list(routines)

    names = list(names)
    unknown = sorted(set(names) - set(ROUTINE_NAMES))
    if unknown:
        raise ValueError(f"Unknown routine(s) {unknown}. Choose from {list(ROUTINE_NAMES)}.")

    wanted = set(names)
    return [r for r in routines if r.name in wanted]
