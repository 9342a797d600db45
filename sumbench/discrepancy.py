"""Numeric agreement checks between summation results."""

from __future__ import annotations

__all__ = [
    "DEFAULT_RTOL",
    "check_agreement",
    "rel_error",
]

DEFAULT_RTOL = 1e-10


def rel_error(x, y):
    """Symmetric relative error between two scalars.

    Parameters
    ----------
    x, y : float or complex
        Results to compare. For complex inputs the modulus is used.

    Returns
    -------
    float
        ``|x - y| * 2 / (|x| + |y|)``, which lies in ``[0, 2]``.

    Raises
    ------
    ZeroDivisionError
        If both inputs are exactly zero.
    """
    return abs(x - y) * 2 / (abs(x) + abs(y))


def check_agreement(result, reference, rtol=DEFAULT_RTOL, name=None):
    """Verify that a result agrees with a trusted reference.

    Parameters
    ----------
    result : float or complex
        Value produced by the routine under test.
    reference : float or complex
        Trusted reference value.
    rtol : float, default=1e-10
        Largest accepted value of :func:`rel_error`. Different summation
        orders round differently, so this should be loose enough to absorb
        reassociation but tight enough to catch a wrong answer.
    name : str, optional
        Routine name used in the error message.

    Returns
    -------
    float
        The discrepancy between ``result`` and ``reference``.

    Raises
    ------
    ValueError
        If ``rtol`` is negative or the discrepancy exceeds ``rtol``.
    """
    if rtol < 0:
        raise ValueError(f"rtol must be non-negative, got {rtol}.")

    err = rel_error(result, reference)
    if not err <= rtol:
        label = f"{name!r} " if name else ""
        raise ValueError(
            f"Result {label}{result!r} disagrees with reference {reference!r}: "
            f"relative error {err:.3e} exceeds tolerance {rtol:.3e}."
        )
    return err
