"""Tests for benchmark result storage and summaries."""

import re

import polars as pl
import pytest

from benchmark.results import ResultStorage, SumBenchmarkResult, results_frame


def make_result(routine="numpy", family="numpy", min_time=0.002, relative_speed=1.0, n_elements=1000):
    return SumBenchmarkResult(
        n_elements=n_elements,
        n_warmup=1,
        n_runs=3,
        random_seed=42,
        rtol=1e-10,
        routine=routine,
        family=family,
        description="",
        value=500.0,
        reference=500.0,
        discrepancy=0.0,
        min_time=min_time,
        median_time=min_time * 1.1,
        mean_time=min_time * 1.2,
        std_time=min_time * 0.1,
        max_time=min_time * 1.5,
        retained_blocks=0,
        allocated_bytes=0,
        relative_speed=relative_speed,
        timestamp="2026-01-01T00:00:00",
    )


@pytest.fixture
def results():
    return [
        make_result("python_loop", "python", min_time=0.5, relative_speed=250.0),
        make_result("numpy", "numpy", min_time=0.002, relative_speed=1.0),
        make_result("numba", "numba", min_time=0.004, relative_speed=2.0),
    ]


def test_results_frame_sorted_by_min_time(results):
    df = results_frame(results)

    assert df["routine"].to_list() == ["numpy", "numba", "python_loop"]
    assert df["min_ms"].to_list() == pytest.approx([2.0, 4.0, 500.0])
    assert df["relative"].to_list() == [1.0, 2.0, 250.0]


def test_results_frame_groups_by_length():
    df = results_frame(
        [
            make_result("numba", n_elements=10_000, min_time=0.001),
            make_result("numpy", n_elements=100, min_time=0.5),
        ]
    )

    assert df["n_elements"].to_list() == [100, 10_000]


def test_results_frame_empty():
    df = results_frame([])

    assert isinstance(df, pl.DataFrame)
    assert df.is_empty()


def test_save_and_load_csv(tmp_path, results):
    storage = ResultStorage(output_dir=tmp_path)
    path = storage.save_csv(results, "results.csv")

    assert path == tmp_path / "results.csv"
    rows = storage.load_csv("results.csv")
    assert [r["routine"] for r in rows] == ["python_loop", "numpy", "numba"]
    assert float(rows[0]["min_time"]) == 0.5


def test_save_csv_empty_writes_nothing(tmp_path):
    storage = ResultStorage(output_dir=tmp_path)
    path = storage.save_csv([], "empty.csv")

    assert not path.exists()


def test_save_and_load_json(tmp_path, results):
    storage = ResultStorage(output_dir=tmp_path)
    storage.save_json(results, "results.json")

    data = storage.load_json("results.json")
    assert data["n_results"] == 3
    assert data["results"][1]["routine"] == "numpy"


def test_output_dir_created(tmp_path):
    output_dir = tmp_path / "nested" / "output"
    ResultStorage(output_dir=output_dir)

    assert output_dir.is_dir()


def test_generate_filename(tmp_path):
    storage = ResultStorage(output_dir=tmp_path)

    assert re.fullmatch(r"benchmark_quick_\d{8}_\d{6}\.csv", storage.generate_filename("quick"))
    assert re.fullmatch(r"benchmark_\d{8}_\d{6}\.json", storage.generate_filename(extension="json"))
