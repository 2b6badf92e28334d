"""Unit tests for number-theory helpers."""

import pytest

from study_helper.solver.number_theory import is_perfect_square, reduce_fraction, strip_prime_factors


@pytest.mark.parametrize(
    "num,den,expected",
    [(7, 20, (7, 20, 1)), (6, 8, (3, 4, 2)), (0, 5, (0, 1, 5)), (35, 50, (7, 10, 5))],
)
def test_reduce_fraction(num, den, expected):
    assert reduce_fraction(num, den) == expected


def test_reduce_fraction_zero_denominator():
    with pytest.raises(ZeroDivisionError):
        reduce_fraction(3, 0)


@pytest.mark.parametrize("n,expected", [(20, 1), (75, 3), (1, 1), (3125, 1), (96, 3), (455, 91)])
def test_strip_prime_factors(n, expected):
    assert strip_prime_factors(n) == expected


@pytest.mark.parametrize("n", [0, 1, 4, 49, 81, 10**12])
def test_perfect_squares(n):
    assert is_perfect_square(n) is True


@pytest.mark.parametrize("n", [2, 3, 50, 10**12 + 1, -4])
def test_not_perfect_squares(n):
    assert is_perfect_square(n) is False
