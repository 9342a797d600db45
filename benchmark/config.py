"""Benchmark configurations and predefined suites."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass
class SumBenchmarkConfig:
    """Configuration for one summation benchmark run."""

    n_elements: int = 10_000_000
    n_warmup: int = 1
    n_runs: int = 5
    random_seed: int = 42
    rtol: float = 1e-10
    track_allocations: bool = True
    routines: list[str] | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


BENCHMARK_SUITES: dict[str, list[SumBenchmarkConfig]] = {
    "quick": [
        SumBenchmarkConfig(n_elements=100_000, n_runs=3),
    ],
    "default": [
        SumBenchmarkConfig(n_elements=10_000_000),
    ],
    "scaling": [
        SumBenchmarkConfig(n_elements=1_000),
        SumBenchmarkConfig(n_elements=10_000),
        SumBenchmarkConfig(n_elements=100_000),
        SumBenchmarkConfig(n_elements=1_000_000),
        SumBenchmarkConfig(n_elements=10_000_000),
    ],
}
