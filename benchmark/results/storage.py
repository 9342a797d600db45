"""Result storage utilities for benchmark outputs."""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path

import polars as pl


@dataclass
class SumBenchmarkResult:
    """Result for one routine within one benchmark configuration."""

    n_elements: int
    n_warmup: int
    n_runs: int
    random_seed: int
    rtol: float

    routine: str
    family: str
    description: str

    value: float
    reference: float
    discrepancy: float

    min_time: float
    median_time: float
    mean_time: float
    std_time: float
    max_time: float
    retained_blocks: int
    allocated_bytes: int

    relative_speed: float
    timestamp: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


def results_frame(results: list[SumBenchmarkResult]) -> pl.DataFrame:
    """Summarize results as a table sorted by minimum time.

    Times are reported in milliseconds. ``relative`` is the minimum time
    divided by the fastest routine's minimum time for the same array length.
    """
    if not results:
        return pl.DataFrame()

    df = pl.DataFrame([r.to_dict() for r in results])
    return df.select(
        pl.col("n_elements"),
        pl.col("routine"),
        pl.col("family"),
        (pl.col("min_time") * 1000).alias("min_ms"),
        (pl.col("median_time") * 1000).alias("median_ms"),
        (pl.col("mean_time") * 1000).alias("mean_ms"),
        pl.col("relative_speed").alias("relative"),
        pl.col("retained_blocks"),
        pl.col("allocated_bytes"),
        pl.col("discrepancy"),
    ).sort(["n_elements", "min_ms"])


class ResultStorage:
    """Handles saving and loading benchmark results."""

    def __init__(self, output_dir: str | Path = "benchmark/output"):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def save_csv(self, results: list[SumBenchmarkResult], filename: str) -> Path:
        """Save results to CSV file."""
        filepath = self.output_dir / filename
        if not results:
            return filepath

        fieldnames = list(results[0].to_dict().keys())

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for result in results:
                writer.writerow(result.to_dict())

        return filepath

    def save_json(self, results: list[SumBenchmarkResult], filename: str) -> Path:
        """Save results to JSON file."""
        filepath = self.output_dir / filename

        data = {
            "timestamp": datetime.now().isoformat(),
            "n_results": len(results),
            "results": [r.to_dict() for r in results],
        }

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        return filepath

    def load_csv(self, filename: str) -> list[dict]:
        """Load results from CSV file."""
        filepath = self.output_dir / filename

        with open(filepath, encoding="utf-8") as f:
            return list(csv.DictReader(f))

    def load_json(self, filename: str) -> dict:
        """Load results from JSON file."""
        filepath = self.output_dir / filename

        with open(filepath, encoding="utf-8") as f:
            return json.load(f)

    def generate_filename(self, suite_name: str | None = None, extension: str = "csv") -> str:
        """Generate a timestamped filename."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        if suite_name:
            return f"benchmark_{suite_name}_{timestamp}.{extension}"
        return f"benchmark_{timestamp}.{extension}"
