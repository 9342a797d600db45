"""Pure Python summation over boxed floats."""

from __future__ import annotations

__all__ = [
    "builtin_sum",
    "loop_sum",
    "to_boxed",
]


def to_boxed(values) -> list[float]:
    """Convert an array to a list of Python ``float`` objects."""
    if isinstance(values, list):
        return values
    return values.tolist()


def builtin_sum(values) -> float:
    """Sum with the built-in ``sum``."""
    return sum(to_boxed(values))


def loop_sum(values) -> float:
    """Sum with a hand-written loop."""
    s = 0.0
    for x in to_boxed(values):
        s += x
    return s
