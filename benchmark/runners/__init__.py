"""Benchmark runners for timing summation routines."""

from benchmark.runners.sum_runner import SumBenchmarkRunner

__all__ = ["SumBenchmarkRunner"]
