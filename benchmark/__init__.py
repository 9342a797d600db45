"""Benchmark suite for comparing array summation routines."""

from benchmark.config import BENCHMARK_SUITES, SumBenchmarkConfig
from benchmark.results.storage import ResultStorage, SumBenchmarkResult, results_frame
from benchmark.runners.sum_runner import SumBenchmarkRunner

__all__ = [
    "BENCHMARK_SUITES",
    "ResultStorage",
    "SumBenchmarkConfig",
    "SumBenchmarkResult",
    "SumBenchmarkRunner",
    "results_frame",
]
