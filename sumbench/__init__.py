"""Compare equivalent array summation routines across C, Python, NumPy and Numba."""

from sumbench.data import generate_sample, reference_sum
from sumbench.discrepancy import DEFAULT_RTOL, check_agreement, rel_error
from sumbench.routines import ROUTINE_NAMES, SumRoutine, get_routines, select_routines
from sumbench.timing import TimingResult, measure_allocations, time_execution, time_routine

__all__ = [
    "DEFAULT_RTOL",
    "ROUTINE_NAMES",
    "SumRoutine",
    "TimingResult",
    "check_agreement",
    "generate_sample",
    "get_routines",
    "measure_allocations",
    "reference_sum",
    "rel_error",
    "select_routines",
    "time_execution",
    "time_routine",
]

__version__ = "0.1.0"
