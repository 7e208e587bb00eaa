"""
Gram-Schmidt recomputation services for the LLL family.

Two exact representations are provided:

- Rational: orthogonalized vectors b*_i, their squared norms ‖b*_i‖² and the
  projection coefficients μ_{i,j} = ⟨b_i, b*_j⟩ / ‖b*_j‖², all as `Fraction`s.
- Fraction-free (integral): D_i = det(Gram(b_0, ..., b_i)) = ∏_{j≤i} ‖b*_j‖²
  and λ_{i,j} = D_j·μ_{i,j}, both integers, computed with a recurrence whose
  divisions are exact.

Bases are 2D arrays with the vectors as columns.
A vanishing Gram-Schmidt vector is reported with `LinearDependenceError`.
"""

from __future__ import annotations

from fractions import Fraction
from typing import NamedTuple

import numpy as np

from latred.arith import exact_div
from latred.errors import LinearDependenceError

__all__ = [
    'RationalGramSchmidt',
    'IntegralGramSchmidt',
    'empty_rational_gram_schmidt',
    'empty_integral_gram_schmidt',
    'update_rational_gram_schmidt',
    'update_integral_gram_schmidt',
    'rational_gram_schmidt',
    'integral_gram_schmidt',
]


def _dot(a: np.ndarray, b: np.ndarray):
    # Python sum keeps exact int/Fraction semantics on object arrays, including empty ones
    return sum((x * y for x, y in zip(a, b)), 0)


class RationalGramSchmidt(NamedTuple):
    """
    Rational Gram-Schmidt orthogonalization of an integer basis.

    :ivar ortho:
        m×n matrix of `Fraction`s whose columns are the orthogonalized vectors b*_i.
    :ivar norms:
        Squared norms ‖b*_i‖².
    :ivar mu:
        n×n matrix with μ_{i,j} (for j < i) in its strict lower triangle.
    """
    ortho: np.ndarray[tuple[int, int], Fraction]
    norms: np.ndarray[tuple[int], Fraction]
    mu: np.ndarray[tuple[int, int], Fraction]


class IntegralGramSchmidt(NamedTuple):
    """
    Fraction-free Gram-Schmidt data of an integer basis.

    :ivar d:
        Vector of length n+1 with d[0] = 1 and d[i+1] = D_i.
        The shift lets the recurrences use D_{-1} = 1 without special cases.
    :ivar lam:
        n×n integer matrix with λ_{i,j} (for j < i) in its strict lower triangle.
    """
    d: np.ndarray[tuple[int], int]
    lam: np.ndarray[tuple[int, int], int]


def empty_rational_gram_schmidt(m: int, n: int) -> RationalGramSchmidt:
    return RationalGramSchmidt(
        np.zeros((m, n), dtype=object),
        np.zeros((n,), dtype=object),
        np.zeros((n, n), dtype=object),
    )

def empty_integral_gram_schmidt(n: int) -> IntegralGramSchmidt:
    d = np.zeros((n + 1,), dtype=object)
    d[0] = 1
    return IntegralGramSchmidt(d, np.zeros((n, n), dtype=object))

def update_rational_gram_schmidt(
    basis: np.ndarray[tuple[int, int], int],
    ortho: np.ndarray[tuple[int, int], Fraction],
    norms: np.ndarray[tuple[int], Fraction],
    mu: np.ndarray[tuple[int, int], Fraction],
    i: int, *,
    allow_dependent: bool = False,
) -> None:
    """
    Recomputes column `i` of a running Gram-Schmidt orthogonalization,
    assuming columns `0..i-1` of `ortho`, `norms` and `mu` are up to date.

    :param basis: Integer basis being orthogonalized (vectors as columns).
    :param ortho: Orthogonalized vectors, updated in place.
    :param norms: Squared norms of `ortho`, updated in place.
    :param mu: Projection coefficients, row `i` is updated in place.
    :param i: Column to update.
    :param allow_dependent:
        If set, zero-norm predecessors are skipped (μ = 0) and a zero norm at `i`
        is accepted. Otherwise a zero norm raises `LinearDependenceError`.
    """
    b_i = basis[:, i]
    u = b_i * Fraction(1)
    for j in range(i):
        if norms[j] == 0:
            if not allow_dependent:
                raise LinearDependenceError(j)
            mu[i, j] = Fraction(0)
            continue
        mu_ij = Fraction(_dot(b_i, ortho[:, j])) / norms[j]
        mu[i, j] = mu_ij
        if mu_ij:
            u -= mu_ij * ortho[:, j]
    norm = Fraction(_dot(u, u))
    ortho[:, i] = u
    norms[i] = norm
    if norm == 0 and not allow_dependent:
        raise LinearDependenceError(i)

def update_integral_gram_schmidt(
    basis: np.ndarray[tuple[int, int], int],
    d: np.ndarray[tuple[int], int],
    lam: np.ndarray[tuple[int, int], int],
    k: int,
) -> None:
    """
    Computes λ_{k,j} (j < k) and D_k from the entries of rows `0..k-1`,
    which must be up to date.

    For increasing j ≤ k, u = ⟨b_k, b_j⟩ is corrected for increasing i < j by
        u ← (D_i·u − λ_{k,i}·λ_{j,i}) / D_{i-1}
    where every division is exact.
    The result is λ_{k,j} for j < k and D_k for j = k.

    Raises `LinearDependenceError` if D_k = 0.
    """
    b_k = basis[:, k]
    for j in range(k + 1):
        u = _dot(b_k, basis[:, j])
        for i in range(j):
            u = exact_div(d[i + 1] * u - lam[k, i] * lam[j, i], d[i])
        if j < k:
            lam[k, j] = u
        else:
            d[k + 1] = u
    if d[k + 1] == 0:
        raise LinearDependenceError(k)

def rational_gram_schmidt(
    basis: np.ndarray[tuple[int, int], int],
    upto: int | None = None, *,
    allow_dependent: bool = False,
) -> RationalGramSchmidt:
    """
    Rational Gram-Schmidt orthogonalization of the columns `0..upto` of `basis`
    (all columns by default), computed from scratch.
    Columns past `upto` are left zero.
    """
    m, n = basis.shape
    if upto is None:
        upto = n - 1
    gs = empty_rational_gram_schmidt(m, n)
    for i in range(upto + 1):
        update_rational_gram_schmidt(basis, gs.ortho, gs.norms, gs.mu, i, allow_dependent=allow_dependent)
    return gs

def integral_gram_schmidt(
    basis: np.ndarray[tuple[int, int], int],
    upto: int | None = None,
) -> IntegralGramSchmidt:
    """
    Fraction-free Gram-Schmidt data of the columns `0..upto` of `basis`
    (all columns by default), computed from scratch.
    """
    n = basis.shape[1]
    if upto is None:
        upto = n - 1
    gs = empty_integral_gram_schmidt(n)
    for k in range(upto + 1):
        update_integral_gram_schmidt(basis, gs.d, gs.lam, k)
    return gs
