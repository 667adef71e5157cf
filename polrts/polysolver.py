"""Real roots of small polynomials by bisection between critical points."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

MAX_COEFFICIENTS = 10

_BISECT_TOLERANCE = 1e-9
_ROOT_TOLERANCE = 1e-4
_FAR = 1e15


def _evaluate(coefficients: Sequence[float], x: float) -> float:
    total = 0.0
    for c in coefficients:
        total = total * x + c
    return total


def _derivative(coefficients: Sequence[float]) -> list[float]:
    degree = len(coefficients) - 1
    return [c * (degree - i) for i, c in enumerate(coefficients[:-1])]


def _bisect(lo: float, hi: float, coefficients: Sequence[float]) -> float | None:
    rising = _evaluate(coefficients, hi) > _evaluate(coefficients, lo)
    while hi - lo > _BISECT_TOLERANCE:
        mid = (lo + hi) / 2
        if mid <= lo or mid >= hi:
            break
        r = _evaluate(coefficients, mid)
        if (r <= 0) if rising else (r >= 0):
            lo = mid
        else:
            hi = mid
    return lo if abs(_evaluate(coefficients, lo)) < _ROOT_TOLERANCE else None


def _roots(coefficients: list[float]) -> list[float]:
    n = len(coefficients)
    if n < 2:
        return []
    if n == 2:
        return [-coefficients[1]]
    if n == 3:
        a, b, c = coefficients
        if a == 0:
            raise ValueError("leading coefficient must be non-zero")
        d = b * b - 4 * a * c
        if d < 0:
            return []
        root = d ** 0.5
        return [(-b - root) / (2 * a), (-b + root) / (2 * a)]

    critical = _roots(_derivative(coefficients))
    bounds = [-_FAR, *critical, _FAR]
    found = [
        root
        for lo, hi in zip(bounds, bounds[1:])
        if (root := _bisect(lo, hi, coefficients)) is not None
    ]
    return sorted(found)


def find_polynomial_roots(coefficients: Iterable[float]) -> list[float]:
    """Return the real roots of a polynomial, highest power first.

    Two coefficients are read as a monic linear term, three are solved with
    the quadratic formula, and anything larger is split at the roots of its
    derivative and searched by bisection.
    """
    values = [float(c) for c in coefficients]
    if len(values) > MAX_COEFFICIENTS:
        raise ValueError(
            f"at most {MAX_COEFFICIENTS} coefficients are supported, got {len(values)}"
        )
    return _roots(values)