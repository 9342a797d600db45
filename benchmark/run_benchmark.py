"""CLI entry point for running summation benchmarks."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from datetime import datetime

import polars as pl

from benchmark.config import BENCHMARK_SUITES, SumBenchmarkConfig
from benchmark.results.storage import ResultStorage, SumBenchmarkResult, results_frame
from benchmark.runners.sum_runner import SumBenchmarkRunner
from sumbench.data import generate_sample, reference_sum
from sumbench.routines import NATIVE_ROUTINE_NAMES, ROUTINE_NAMES, SumRoutine, get_routines, select_routines

logger = logging.getLogger(__name__)


def run_single_benchmark(config: SumBenchmarkConfig, routines: list[SumRoutine]) -> list[SumBenchmarkResult]:
    """Run every selected routine on one sample array."""
    logger.info("Generating data: %d elements (seed %d)", config.n_elements, config.random_seed)

    values = generate_sample(config.n_elements, config.random_seed)
    reference = reference_sum(values)
    logger.info("Reference sum: %.6f", reference)

    runner = SumBenchmarkRunner(
        n_warmup=config.n_warmup,
        n_runs=config.n_runs,
        rtol=config.rtol,
        track_allocations=config.track_allocations,
    )

    selected = select_routines(routines, config.routines)
    if not selected:
        logger.warning("No routines selected for %d elements", config.n_elements)
        return []

    runs = []
    for routine in selected:
        logger.info("Running %s (%d runs)...", routine.name, config.n_runs)
        value, discrepancy, timing = runner.run_routine(routine, values, reference)
        logger.info(
            "%s: %.3f ms (median: %.3f ms, retained blocks: %d, peak: %d bytes)",
            routine.name,
            timing.min_time * 1000,
            timing.median_time * 1000,
            timing.retained_blocks,
            timing.allocated_bytes,
        )
        runs.append((routine, value, discrepancy, timing))

    fastest = min(timing.min_time for _, _, _, timing in runs)
    timestamp = datetime.now().isoformat()

    return [
        SumBenchmarkResult(
            n_elements=config.n_elements,
            n_warmup=config.n_warmup,
            n_runs=config.n_runs,
            random_seed=config.random_seed,
            rtol=config.rtol,
            routine=routine.name,
            family=routine.family,
            description=routine.description,
            value=value,
            reference=reference,
            discrepancy=discrepancy,
            min_time=timing.min_time,
            median_time=timing.median_time,
            mean_time=timing.mean_time,
            std_time=timing.std_time,
            max_time=timing.max_time,
            retained_blocks=timing.retained_blocks,
            allocated_bytes=timing.allocated_bytes,
            relative_speed=timing.min_time / fastest,
            timestamp=timestamp,
        )
        for routine, value, discrepancy, timing in runs
    ]


def _needs_native(configs: list[SumBenchmarkConfig]) -> bool:
    """Check if any configuration selects a compiled C routine."""
    return any(config.routines is None or set(config.routines) & set(NATIVE_ROUTINE_NAMES) for config in configs)


def run_benchmark_suite(
    configs: list[SumBenchmarkConfig],
    include_native: bool | None = None,
    compiler: str | None = None,
) -> list[SumBenchmarkResult]:
    """Run a suite of benchmark configurations."""
    if include_native is None and not _needs_native(configs):
        include_native = False

    routines = get_routines(include_native=include_native, compiler=compiler)

    results = []
    for i, config in enumerate(configs):
        logger.info("Benchmark %d/%d:", i + 1, len(configs))
        results.extend(run_single_benchmark(config, routines))

    return results


def main(argv=None):
    """Run benchmark CLI."""
    parser = argparse.ArgumentParser(
        description="Benchmark array summation in C, Python, NumPy and Numba",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--suite",
        type=str,
        choices=list(BENCHMARK_SUITES.keys()),
        help="Predefined benchmark suite to run",
    )
    parser.add_argument(
        "--n-elements",
        type=int,
        default=None,
        help="Length of the sample array (default: 10000000; ignored with --suite, which fixes the sizes)",
    )
    parser.add_argument("--warmup", type=int, default=None, help="Number of warmup runs (default: 1, or the suite's)")
    parser.add_argument("--runs", type=int, default=None, help="Number of timed runs (default: 5, or the suite's)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: 42, or the suite's)")
    parser.add_argument("--rtol", type=float, default=1e-10, help="Tolerance against the reference sum")
    parser.add_argument(
        "--routines",
        type=str,
        nargs="+",
        choices=list(ROUTINE_NAMES),
        help="Routines to run (default: all)",
    )
    parser.add_argument("--no-native", action="store_true", help="Skip the compiled C routines")
    parser.add_argument("--compiler", type=str, default=None, help="C compiler (default: $CC or gcc)")
    parser.add_argument("--no-allocations", action="store_true", help="Skip allocation tracking")
    parser.add_argument("--output-dir", type=str, default="benchmark/output", help="Output directory")
    parser.add_argument("--quiet", action="store_true", help="Suppress verbose output")

    args = parser.parse_args(argv)

    log_level = logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )

    overrides = {
        "n_warmup": args.warmup,
        "n_runs": args.runs,
        "random_seed": args.seed,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}

    if args.suite:
        if args.n_elements is not None:
            logger.warning("--n-elements is ignored with --suite %s", args.suite)

        configs = [
            replace(
                config,
                rtol=args.rtol,
                routines=args.routines,
                track_allocations=not args.no_allocations,
                **overrides,
            )
            for config in BENCHMARK_SUITES[args.suite]
        ]
        suite_name = args.suite
    else:
        configs = [
            SumBenchmarkConfig(
                n_elements=args.n_elements if args.n_elements is not None else 10_000_000,
                n_warmup=overrides.get("n_warmup", 1),
                n_runs=overrides.get("n_runs", 5),
                random_seed=overrides.get("random_seed", 42),
                rtol=args.rtol,
                track_allocations=not args.no_allocations,
                routines=args.routines,
            )
        ]
        suite_name = "custom"

    logger.info("Running benchmark suite: %s", suite_name)
    logger.info("Number of configurations: %d", len(configs))

    results = run_benchmark_suite(
        configs,
        include_native=False if args.no_native else None,
        compiler=args.compiler,
    )

    storage = ResultStorage(output_dir=args.output_dir)
    csv_path = storage.save_csv(results, storage.generate_filename(suite_name, "csv"))
    json_path = storage.save_json(results, storage.generate_filename(suite_name, "json"))

    logger.info("Results saved to:")
    logger.info("  CSV: %s", csv_path)
    logger.info("  JSON: %s", json_path)

    logger.info("Summary:")
    with pl.Config(tbl_rows=-1, tbl_cols=-1):
        logger.info("%s", results_frame(results))

    return results


if __name__ == "__main__":
    main()
