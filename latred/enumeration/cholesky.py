"""
Cholesky decomposition of positive definite quadratic forms,
in the square-completed representation used by short vector enumeration.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

import numpy as np
import scipy.linalg

from latred.util.jit import njit

__all__ = [
    'CholeskyDecomposition',
    'cholesky_decomposition',
    'quadratic_form_value',
]


class CholeskyDecomposition(NamedTuple):
    """
    :ivar Q:
        Upper triangular n×n representation of the form, with
        `xᵀAx = Σ_i Q[i, i]·(x_i + Σ_{j>i} Q[i, j]·x_j)²`.
    :ivar R:
        Upper triangular Cholesky factor, with `A = RᵀR`.
    """
    Q: np.ndarray[tuple[int, int], float]
    R: np.ndarray[tuple[int, int], float]


@njit
def _quadratic_form_from_factor(r: np.ndarray[tuple[int, int], float]) -> np.ndarray[tuple[int, int], float]:
    n = r.shape[0]
    q = np.zeros((n, n))
    for i in range(n):
        q[i, i] = r[i, i] * r[i, i]
        for j in range(i + 1, n):
            q[i, j] = r[i, j] / r[i, i]
    return q

@njit
def _quadratic_form_value(q: np.ndarray[tuple[int, int], float], x: np.ndarray[tuple[int], float]) -> float:
    n = q.shape[0]
    total = 0.0
    for i in range(n):
        s = x[i]
        for j in range(i + 1, n):
            s += q[i, j] * x[j]
        total += q[i, i] * s * s
    return total


def cholesky_decomposition(a: np.ndarray[tuple[int, int], float] | Sequence[Sequence[float]]) -> CholeskyDecomposition | None:
    """
    Decomposes a positive definite symmetric matrix A.

    :return:
        `CholeskyDecomposition(Q, R)`, or `None` if A is not square,
        not symmetric, or not positive definite.
    """
    a = np.asarray(a, dtype=np.float64)
    if a.ndim != 2 or a.shape[0] != a.shape[1] or a.shape[0] == 0:
        return None
    if not np.all(np.isfinite(a)) or not np.allclose(a, a.T):
        return None
    try:
        r = scipy.linalg.cholesky(a, lower=False)
    except scipy.linalg.LinAlgError:
        return None
    r = np.ascontiguousarray(r)
    return CholeskyDecomposition(_quadratic_form_from_factor(r), r)

def quadratic_form_value(q: np.ndarray[tuple[int, int], float], x: np.ndarray[tuple[int], int] | Sequence[int]) -> float:
    """
    Value of the form with representation `q` (see `CholeskyDecomposition.Q`) at `x`.
    """
    q = np.ascontiguousarray(q, dtype=np.float64)
    x = np.ascontiguousarray(x, dtype=np.float64)
    if x.shape != (q.shape[0],):
        raise ValueError("vector length does not match the form dimension")
    return float(_quadratic_form_value(q, x))
