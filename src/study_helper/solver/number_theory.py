"""Integer helpers for the deterministic solver."""

import math


def reduce_fraction(numerator: int, denominator: int) -> tuple[int, int, int]:
    """
    Reduce a non-negative fraction to lowest terms.
    
    Returns:
        (reduced_numerator, reduced_denominator, gcd)
        
    Raises:
        ZeroDivisionError: denominator is 0
    """
    if denominator == 0:
        raise ZeroDivisionError("denominator is 0")
    g = math.gcd(numerator, denominator)
    return numerator // g, denominator // g, g


def strip_prime_factors(n: int, primes: tuple[int, ...] = (2, 5)) -> int:
    """Divide out every factor of the given primes; strip_prime_factors(75) == 3."""
    if n == 0:
        return 0
    for p in primes:
        while n % p == 0:
            n //= p
    return n


def is_perfect_square(n: int) -> bool:
    if n < 0:
        return False
    root = math.isqrt(n)
    return root * root == n
