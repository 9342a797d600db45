"""Timing harness for zero-argument computations."""

from __future__ import annotations

import gc
import time
import tracemalloc
from dataclasses import asdict, dataclass
from typing import Any

import numpy as np

__all__ = [
    "TimingResult",
    "gc_collect",
    "measure_allocations",
    "time_execution",
    "time_routine",
]


@dataclass
class TimingResult:
    """Container for timing results from a benchmark run."""

    min_time: float
    median_time: float
    mean_time: float
    std_time: float
    max_time: float
    times: list[float]
    n_runs: int
    retained_blocks: int = 0
    allocated_bytes: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def gc_collect() -> None:
    """Force garbage collection before timing."""
    gc.collect()


def time_execution(func, *args, **kwargs) -> tuple[float, Any]:
    """Time a single function execution."""
    start = time.perf_counter()
    result = func(*args, **kwargs)
    elapsed = time.perf_counter() - start
    return elapsed, result


def measure_allocations(func) -> tuple[int, int]:
    """Measure the memory one call of ``func`` keeps and the peak it reaches.

    Only allocations made through the Python allocators (which includes NumPy
    buffers) are visible. Memory handled by compiled code outside of them
    reads as zero.

    Parameters
    ----------
    func : callable
        Zero-argument computation.

    Returns
    -------
    retained_blocks : int
        Number of memory blocks still held after the call that were not held
        before it. Temporaries freed before the call returns are not counted;
        they only show up in ``allocated_bytes``.
    allocated_bytes : int
        Peak number of bytes allocated above the starting level during the call.
    """
    was_tracing = tracemalloc.is_tracing()
    if not was_tracing:
        tracemalloc.start()

    try:
        gc_collect()
        before = tracemalloc.take_snapshot()
        baseline, _ = tracemalloc.get_traced_memory()
        tracemalloc.reset_peak()

        func()

        _, peak = tracemalloc.get_traced_memory()
        after = tracemalloc.take_snapshot()
    finally:
        if not was_tracing:
            tracemalloc.stop()

    filters = [tracemalloc.Filter(False, tracemalloc.__file__)]
    stats = after.filter_traces(filters).compare_to(before.filter_traces(filters), "lineno")
    retained_blocks = sum(stat.count_diff for stat in stats if stat.count_diff > 0)

    return int(retained_blocks), int(max(peak - baseline, 0))


def time_routine(func, n_warmup: int = 1, n_runs: int = 5, track_allocations: bool = True) -> TimingResult:
    """Time a zero-argument computation with warmup and multiple runs.

    Warmup runs absorb one-time costs such as JIT compilation and cold caches.
    Timed runs execute sequentially on the calling thread. Exceptions raised by
    ``func`` propagate to the caller.

    Parameters
    ----------
    func : callable
        Zero-argument computation. All inputs must be captured ahead of time.
    n_warmup : int, default=1
        Number of untimed runs before measurement.
    n_runs : int, default=5
        Number of timed runs.
    track_allocations : bool, default=True
        Measure allocations in one extra untimed run. When False both
        allocation fields are zero.

    Returns
    -------
    TimingResult
        Summary of the timed runs.
    """
    if n_runs < 1:
        raise ValueError(f"n_runs must be at least 1, got {n_runs}.")
    if n_warmup < 0:
        raise ValueError(f"n_warmup must be non-negative, got {n_warmup}.")

    for _ in range(n_warmup):
        gc_collect()
        func()

    # a zero delta means the run was shorter than the clock can resolve
    resolution = time.get_clock_info("perf_counter").resolution
    times = []
    for _ in range(n_runs):
        gc_collect()
        elapsed, _ = time_execution(func)
        times.append(max(elapsed, resolution))

    retained_blocks, allocated_bytes = 0, 0
    if track_allocations:
        retained_blocks, allocated_bytes = measure_allocations(func)

    return TimingResult(
        min_time=float(np.min(times)),
        median_time=float(np.median(times)),
        mean_time=float(np.mean(times)),
        std_time=float(np.std(times)),
        max_time=float(np.max(times)),
        times=times,
        n_runs=n_runs,
        retained_blocks=retained_blocks,
        allocated_bytes=allocated_bytes,
    )
