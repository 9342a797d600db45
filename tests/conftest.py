"""Shared test configuration utilities for sumbench."""

from __future__ import annotations

import os

import numpy as np
import pytest

from sumbench.data import generate_sample

_ENV_FULL = "SUMBENCH_RUN_FULL_TESTS"


def pytest_collection_modifyitems(items):
    """Skip slow tests unless the full-test environment variable is set."""
    if os.environ.get(_ENV_FULL):
        return

    skip_marker = pytest.mark.skip(
        reason=f"Skipped to keep the default test run fast. Set {_ENV_FULL}=1 to execute the full test battery."
    )

    for item in items:
        if item.get_closest_marker("slow") is not None:
            item.add_marker(skip_marker)


@pytest.fixture
def rng():
    """Seeded random number generator."""
    return np.random.default_rng(42)


@pytest.fixture(scope="session")
def sample():
    """Read-only sample of uniform values in [0, 1)."""
    return generate_sample(100_000, random_seed=7)
