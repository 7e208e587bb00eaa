"""
Exact integer helpers shared by the reduction engines.

All functions operate on Python integers (arbitrary precision), so they are
safe for the `dtype=object` arrays used throughout the package.
"""

from __future__ import annotations

from fractions import Fraction
from typing import TypeVar

from latred.errors import InexactDivisionError

__all__ = [
    'round_div',
    'round_fraction',
    'exact_div',
    'gcd_generic',
]

T = TypeVar('T')


def round_div(num: int, den: int) -> int:
    """
    Round a rational number given by num/den.
    Half-integers are rounded to the nearest even integer, as is tradition
    (a biased tie-break can make size-reduction cycle).

    :param num: Dividend
    :param den: Divisor, non-zero
    :return: round(num/den)
    """
    if den < 0:
        num, den = -num, -den
    floor, mod = divmod(num, den)
    mod2 = mod * 2
    if mod2 > den:
        return floor + 1
    elif mod2 < den:
        return floor
    else:
        return floor + (floor % 2)

def round_fraction(q: Fraction) -> int:
    """
    `round_div` for a `Fraction` (or an `int`).
    """
    if isinstance(q, int):
        return q
    return round_div(q.numerator, q.denominator)

def exact_div(num: int, den: int) -> int:
    """
    Exact integer division.

    Raises `InexactDivisionError` when `den` is zero or does not divide `num`,
    instead of silently truncating.
    """
    if den == 0:
        raise InexactDivisionError(num, den)
    q, r = divmod(num, den)
    if r != 0:
        raise InexactDivisionError(num, den)
    return q

def gcd_generic(*args: T, default: T | None = None) -> T | None:
    """
    Euclidean algorithm reducing any number of arguments of a type supporting `%`.

    The result is non-negative, and it is `0` when all arguments are `0`.
    Returns `default` when called without arguments.
    """
    if not args:
        return default
    g = args[0]
    for b in args[1:]:
        a = g
        while b != 0:
            a, b = b, a % b
        g = a
    return abs(g)
