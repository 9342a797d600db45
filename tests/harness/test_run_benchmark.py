"""Tests for the benchmark driver and CLI."""

import pytest

from benchmark.config import SumBenchmarkConfig
from benchmark.plot import load_benchmark_data
from benchmark.results import ResultStorage
from benchmark.run_benchmark import main, run_benchmark_suite, run_single_benchmark
from sumbench.routines import get_routines


@pytest.fixture(scope="module")
def routines():
    return get_routines(include_native=False)


def test_run_single_benchmark(routines):
    config = SumBenchmarkConfig(n_elements=2000, n_runs=2, routines=["numpy", "python_loop", "numba"])

    results = run_single_benchmark(config, routines)

    assert [r.routine for r in results] == ["python_loop", "numpy", "numba"]
    assert min(r.relative_speed for r in results) == 1.0
    for r in results:
        assert r.n_elements == 2000
        assert r.discrepancy < 1e-10
        assert r.min_time > 0
        assert r.retained_blocks >= 0
        assert r.reference == pytest.approx(1000, rel=0.1)


def test_run_single_benchmark_no_selection(routines):
    config = SumBenchmarkConfig(n_elements=100, n_runs=1, routines=["c"])

    assert run_single_benchmark(config, routines) == []


def test_run_benchmark_suite_without_native():
    configs = [
        SumBenchmarkConfig(n_elements=500, n_runs=1, routines=["numpy"]),
        SumBenchmarkConfig(n_elements=1000, n_runs=1, routines=["numpy", "numba_simd"]),
    ]

    results = run_benchmark_suite(configs)

    assert [(r.n_elements, r.routine) for r in results] == [(500, "numpy"), (1000, "numpy"), (1000, "numba_simd")]


def test_main_writes_results(tmp_path):
    results = main(
        [
            "--n-elements",
            "1000",
            "--runs",
            "2",
            "--routines",
            "numpy",
            "numba",
            "--no-native",
            "--output-dir",
            str(tmp_path),
            "--quiet",
        ]
    )

    assert [r.routine for r in results] == ["numpy", "numba"]
    assert (results[0].n_elements, results[0].n_warmup, results[0].n_runs, results[0].random_seed) == (1000, 1, 2, 42)
    csv_files = list(tmp_path.glob("benchmark_custom_*.csv"))
    json_files = list(tmp_path.glob("benchmark_custom_*.json"))
    assert len(csv_files) == 1
    assert len(json_files) == 1

    rows = ResultStorage(tmp_path).load_csv(csv_files[0].name)
    assert {r["routine"] for r in rows} == {"numpy", "numba"}


def test_main_suite_applies_run_options(tmp_path):
    results = main(
        [
            "--suite",
            "quick",
            "--runs",
            "1",
            "--warmup",
            "0",
            "--seed",
            "3",
            "--routines",
            "numpy",
            "--no-native",
            "--output-dir",
            str(tmp_path),
            "--quiet",
        ]
    )

    assert len(results) == 1
    r = results[0]
    assert (r.n_elements, r.n_warmup, r.n_runs, r.random_seed) == (100_000, 0, 1, 3)
    assert len(list(tmp_path.glob("benchmark_quick_*.csv"))) == 1


def test_main_suite_keeps_its_own_settings(tmp_path):
    results = main(["--suite", "quick", "--routines", "numpy", "--no-native", "--output-dir", str(tmp_path), "--quiet"])

    r = results[0]
    assert (r.n_elements, r.n_warmup, r.n_runs, r.random_seed) == (100_000, 1, 3, 42)


def test_main_suite_warns_about_n_elements(tmp_path, caplog):
    with caplog.at_level("WARNING", logger="benchmark.run_benchmark"):
        results = main(
            [
                "--suite",
                "quick",
                "--n-elements",
                "50",
                "--runs",
                "1",
                "--routines",
                "numpy",
                "--no-native",
                "--output-dir",
                str(tmp_path),
                "--quiet",
            ]
        )

    assert results[0].n_elements == 100_000
    assert "--n-elements is ignored" in caplog.text


def test_main_rejects_unknown_routine(tmp_path):
    with pytest.raises(SystemExit):
        main(["--routines", "fortran", "--output-dir", str(tmp_path)])


def test_load_benchmark_data_keeps_fastest(tmp_path, routines):
    storage = ResultStorage(tmp_path)
    config = SumBenchmarkConfig(n_elements=1000, n_runs=1, routines=["numpy", "python_builtin"])
    storage.save_csv(run_single_benchmark(config, routines), "benchmark_a_20260101_000000.csv")
    storage.save_csv(run_single_benchmark(config, routines), "benchmark_b_20260101_000001.csv")

    df = load_benchmark_data(str(tmp_path))

    assert df.height == 2
    assert set(df["routine"].to_list()) == {"numpy", "python_builtin"}
    assert df["relative"].min() == 1.0


def test_load_benchmark_data_empty(tmp_path):
    assert load_benchmark_data(str(tmp_path)).is_empty()
