import numpy as np
import pytest

from polrts.polysolver import MAX_COEFFICIENTS, find_polynomial_roots


@pytest.mark.parametrize(
    "roots",
    [
        [1.0, 2.0, 3.0, 4.0],
        [-2.0, 0.5, 3.0],
        [-3.5, -1.0, 0.25, 2.0, 6.0],
    ],
)
def test_roots_round_trip(roots):
    coefficients = np.poly(roots)
    found = find_polynomial_roots(coefficients)
    assert found == pytest.approx(sorted(roots), abs=1e-6)


def test_quadratic_roots():
    found = find_polynomial_roots(np.poly([-1.0, 5.0]))
    assert found == pytest.approx([-1.0, 5.0])


def test_quadratic_without_real_roots():
    assert find_polynomial_roots([1.0, 0.0, 1.0]) == []


def test_quartic_without_real_roots():
    assert find_polynomial_roots([1.0, 0.0, 0.0, 0.0, 1.0]) == []


def test_linear_monic():
    assert find_polynomial_roots([1.0, -7.0]) == pytest.approx([7.0])


def test_constant_and_empty_have_no_roots():
    assert find_polynomial_roots([5.0]) == []
    assert find_polynomial_roots([]) == []


def test_found_roots_are_zeros():
    coefficients = [0.25, -0.3, -2.0, 1.0, 0.5]
    found = find_polynomial_roots(coefficients)
    assert len(found) == 4
    for root in found:
        assert np.polyval(coefficients, root) == pytest.approx(0.0, abs=1e-4)
    assert found == sorted(found)


def test_too_many_coefficients():
    with pytest.raises(ValueError):
        find_polynomial_roots([1.0] * (MAX_COEFFICIENTS + 1))


def test_degenerate_quadratic():
    with pytest.raises(ValueError):
        find_polynomial_roots([0.0, 1.0, 1.0])