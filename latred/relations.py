"""
Integer relations between real numbers, found by LLL reduction.

For reals z_1, ..., z_n and a scale S, the lattice generated by the columns

    b_i = e_i ⊕ round(S·z_i)

contains a short vector (a, Σ a_i·round(S·z_i)) for every small integer
relation Σ a_i·z_i ≈ 0, so the first vector of an LLL-reduced basis is a
relation candidate. Larger scales reject more spurious relations, but
cannot usefully exceed the accuracy of the inputs.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Sequence

import numpy as np

from latred.arith import round_fraction
from latred.lll import DEFAULT_DELTA, lll_reduction
from latred.util.profiler import Profiler

__all__ = [
    'relation_lattice',
    'integer_relation',
    'find_integer_relation',
    'algebraic_dependence',
]


Real = float | int | Fraction


def relation_lattice(reals: Sequence[Real], scale: int) -> np.ndarray[tuple[int, int], int]:
    """
    The (n+1)×n integer basis `e_i ⊕ round(scale·z_i)`, as columns.

    Floats are converted to their exact rational value before scaling, so the
    rounding (to nearest, ties to even) does not depend on float arithmetic.
    """
    n = len(reals)
    basis = np.zeros((n + 1, n), dtype=object)
    for i, z in enumerate(reals):
        basis[i, i] = 1
        basis[n, i] = round_fraction(Fraction(z) * scale)
    return basis

def integer_relation(
    reals: Sequence[Real],
    scale: int, *,
    delta: Fraction | int | float = DEFAULT_DELTA,
    profiler: Profiler = Profiler.noop,
) -> np.ndarray[tuple[int, int], int] | None:
    """
    LLL-reduced basis of the relation lattice of `reals` (see `relation_lattice`).

    :return:
        (n+1)×n reduced basis, whose first column starts with the best relation
        candidate; `None` for an empty input.
    """
    if len(reals) == 0:
        return None
    with profiler['relation']:
        reduction = lll_reduction(relation_lattice(reals, scale), delta, profiler=profiler)
    if reduction is None:
        return None
    return reduction.basis

def find_integer_relation(
    reals: Sequence[Real],
    scale: int, *,
    delta: Fraction | int | float = DEFAULT_DELTA,
    profiler: Profiler = Profiler.noop,
) -> np.ndarray[tuple[int], int] | None:
    """
    Integer coefficients (a_1, ..., a_n) with Σ a_i·z_i ≈ 0, read off the
    first vector of the reduced relation lattice. The overall sign is arbitrary.
    """
    basis = integer_relation(reals, scale, delta=delta, profiler=profiler)
    if basis is None:
        return None
    return basis[:len(reals), 0].copy()

def algebraic_dependence(
    x: Real,
    degree: int,
    scale: int, *,
    delta: Fraction | int | float = DEFAULT_DELTA,
    profiler: Profiler = Profiler.noop,
) -> np.ndarray[tuple[int], int] | None:
    """
    Candidate integer polynomial a_0 + a_1·t + ... + a_d·t^d vanishing at `x`,
    as its coefficients (a_0, ..., a_d), with d = `degree`.
    """
    if degree < 1:
        raise ValueError("degree must be at least 1")
    x = Fraction(x)
    powers = [x ** k for k in range(degree + 1)]
    return find_integer_relation(powers, scale, delta=delta, profiler=profiler)
