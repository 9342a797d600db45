"""Results storage and handling for benchmark outputs."""

from benchmark.results.storage import ResultStorage, SumBenchmarkResult, results_frame

__all__ = [
    "ResultStorage",
    "SumBenchmarkResult",
    "results_frame",
]
