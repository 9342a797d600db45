"""C summation compiled at runtime and called through ctypes."""

from __future__ import annotations

import ctypes
import logging
import os
import shutil
import subprocess
import sys
import tempfile
import weakref
from pathlib import Path

import numpy as np

__all__ = [
    "C_SUM_SOURCE",
    "FASTMATH_FLAGS",
    "OPTIMIZED_FLAGS",
    "NativeSum",
    "check_compiler_available",
    "compile_shared_library",
    "default_compiler",
    "load_native_sum",
]

logger = logging.getLogger(__name__)

C_SUM_SOURCE = """
#include <stddef.h>

double c_sum(size_t n, double *X) {
    double s = 0.0;
    for (size_t i = 0; i < n; ++i) {
        s += X[i];
    }
    return s;
}
"""

OPTIMIZED_FLAGS = ("-O3",)
FASTMATH_FLAGS = ("-O3", "-ffast-math")

_SHARED_SUFFIX = ".dylib" if sys.platform == "darwin" else ".so"


def default_compiler() -> str:
    """Compiler from the ``CC`` environment variable, or ``gcc``."""
    return os.environ.get("CC") or "gcc"


def check_compiler_available(compiler: str | None = None) -> bool:
    """Check if the C compiler can be executed."""
    compiler = compiler or default_compiler()
    try:
        result = subprocess.run(
            [compiler, "--version"],
            capture_output=True,
            text=True,
            timeout=30,
            check=False,
        )
        return result.returncode == 0
    except (subprocess.TimeoutExpired, FileNotFoundError):
        return False


def compile_shared_library(
    source: str,
    compiler: str | None = None,
    flags=OPTIMIZED_FLAGS,
    output_dir: str | Path | None = None,
    name: str = "sumbench_native",
) -> Path:
    """Compile C source into a shared library.

    Parameters
    ----------
    source : str
        C source code.
    compiler : str, optional
        Compiler executable. Defaults to :func:`default_compiler`.
    flags : sequence of str, default=("-O3",)
        Extra compiler flags.
    output_dir : str or Path, optional
        Directory for the library file. When omitted a fresh temporary
        directory is created; the caller owns it once the call returns, and
        it is removed again if compilation fails.
    name : str, default="sumbench_native"
        Base name of the generated files.

    Returns
    -------
    Path
        Path of the shared library.

    Raises
    ------
    FileNotFoundError
        If the compiler executable cannot be found.
    RuntimeError
        If the compiler exits with a non-zero status.
    """
    compiler = compiler or default_compiler()
    created = output_dir is None
    out = Path(tempfile.mkdtemp(prefix="sumbench_")) if created else Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    src_path = out / f"{name}.c"
    lib_path = out / f"{name}{_SHARED_SUFFIX}"
    succeeded = False

    try:
        src_path.write_text(source, encoding="utf-8")

        cmd = [compiler, "-fPIC", "-shared", *flags, "-o", str(lib_path), str(src_path)]
        logger.debug("Compiling: %s", " ".join(cmd))

        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        if proc.returncode != 0:
            raise RuntimeError(f"Compilation with {compiler} failed (exit {proc.returncode}): {proc.stderr}")
        succeeded = True

    finally:
        src_path.unlink(missing_ok=True)
        if created and not succeeded:
            shutil.rmtree(out, ignore_errors=True)

    return lib_path


class NativeSum:
    """Summation entry point ``double f(size_t n, double *X)`` in a shared library.

    The array is passed by pointer, so it is never copied.

    Parameters
    ----------
    library_path : str or Path
        Shared library to load.
    symbol : str, default="c_sum"
        Name of the entry point.
    build_dir : str or Path, optional
        Directory the library was built in. When given, the instance owns it
        and removes it once the instance is garbage collected.
    """

    def __init__(self, library_path: str | Path, symbol: str = "c_sum", build_dir: str | Path | None = None):
        self.library_path = Path(library_path)
        self.symbol = symbol
        self._lib = ctypes.CDLL(str(self.library_path))
        self._func = getattr(self._lib, symbol)
        self._func.argtypes = [ctypes.c_size_t, ctypes.POINTER(ctypes.c_double)]
        self._func.restype = ctypes.c_double

        self._cleanup = None
        if build_dir is not None:
            # the mapped library stays valid after its file is unlinked
            self._cleanup = weakref.finalize(self, shutil.rmtree, str(build_dir), True)

    def __call__(self, values) -> float:
        if not isinstance(values, np.ndarray) or values.dtype != np.float64:
            raise ValueError("Native summation requires a float64 ndarray.")
        if values.ndim != 1 or not values.flags.c_contiguous:
            raise ValueError("Native summation requires a one-dimensional C-contiguous array.")

        ptr = values.ctypes.data_as(ctypes.POINTER(ctypes.c_double))
        return float(self._func(values.size, ptr))

    def __repr__(self):
        return f"NativeSum({str(self.library_path)!r}, symbol={self.symbol!r})"


def load_native_sum(
    flags=OPTIMIZED_FLAGS,
    compiler: str | None = None,
    output_dir: str | Path | None = None,
    name: str = "sumbench_native",
) -> NativeSum:
    """Compile :data:`C_SUM_SOURCE` and load its ``c_sum`` entry point.

    Without ``output_dir`` the library is built in a temporary directory that
    is removed together with the returned :class:`NativeSum`.
    """
    lib_path = compile_shared_library(C_SUM_SOURCE, compiler=compiler, flags=flags, output_dir=output_dir, name=name)
    if output_dir is not None:
        return NativeSum(lib_path)

    try:
        return NativeSum(lib_path, build_dir=lib_path.parent)
    except OSError:
        shutil.rmtree(lib_path.parent, ignore_errors=True)
        raise
