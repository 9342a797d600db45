"""Benchmark runner that verifies and times summation routines."""

from __future__ import annotations

from sumbench.discrepancy import DEFAULT_RTOL, check_agreement
from sumbench.routines import SumRoutine
from sumbench.timing import TimingResult, time_routine


class SumBenchmarkRunner:
    """Benchmark runner for summation routines over a shared sample array."""

    def __init__(
        self,
        n_warmup: int = 1,
        n_runs: int = 5,
        rtol: float = DEFAULT_RTOL,
        track_allocations: bool = True,
    ):
        self.n_warmup = n_warmup
        self.n_runs = n_runs
        self.rtol = rtol
        self.track_allocations = track_allocations

    def run_routine(self, routine: SumRoutine, values, reference: float) -> tuple[float, float, TimingResult]:
        """Check a routine against the reference, then time it.

        The routine's input is prepared once before timing, so conversions such
        as boxing into a Python list are not measured.

        Returns
        -------
        value : float
            Result of the routine.
        discrepancy : float
            Relative error against ``reference``.
        timing : TimingResult
            Timing summary.

        Raises
        ------
        ValueError
            If the result disagrees with ``reference`` beyond ``rtol``.
        """
        data = routine.prepare(values)
        func = routine.func

        value = func(data)
        discrepancy = check_agreement(value, reference, rtol=self.rtol, name=routine.name)

        timing = time_routine(
            lambda: func(data),
            n_warmup=self.n_warmup,
            n_runs=self.n_runs,
            track_allocations=self.track_allocations,
        )
        return value, discrepancy, timing
