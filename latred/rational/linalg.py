"""
Exact rational linear algebra,
implemented with `Fraction` numpy n-dimensional arrays (of dtype=object).

These are the exact solvers consumed by the kernel/complement extraction
(inverse of a Gram matrix) and by the checks on unimodular transforms.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Literal, NamedTuple, TypeVar

import numpy as np

from latred.arith import exact_div
from latred.errors import SingularMatrixError

__all__ = [
    'as_fraction_array',
    'pLU_decomposition',
    'solve_lower_triangular',
    'solve_upper_triangular',
    'solve',
    'inverse',
    'determinant',
    'rank',
    'is_unimodular',

    'PLUDecomposition',
]


# Type Variables
Shape = TypeVar("Shape", bound=tuple)
N = TypeVar("N", bound=int)
M = TypeVar("M", bound=int)
MatrixOrVectorShape = tuple[N, int] | tuple[N]


def as_fraction_array(a: tuple | list | np.ndarray[Shape, int | Fraction]) -> np.ndarray[Shape, Fraction]:
    """
    Convert array to `dtype=object` with `Fraction` values.

    Accepts tuple or list inputs, which are pre-converted with `np.array`.
    """
    if isinstance(a, (list, tuple)):
        a = np.array(a, dtype=object)
    object_array = a.astype(dtype=object)
    object_array *= Fraction(1)
    return object_array

class PLUDecomposition(NamedTuple):
    """
    PLU decomposition of a square nonsingular n×n matrix A
    into matrices P, L and U, such that P@L@U = A, with:

    :ivar P: Permutation n×n matrix encoding the row swaps taken to arrive at U.
    :ivar L: Lower unitriangular n×n matrix encoding the row eliminations.
    :ivar U: Upper triangular n×n matrix obtained from A by Gaussian elimination
             with partial row pivoting.
    :ivar det_P: Determinant of P.
    """
    P: np.ndarray[tuple[N, N], int]
    L: np.ndarray[tuple[N, N], Fraction]
    U: np.ndarray[tuple[N, N], Fraction]
    det_P: Literal[-1, 1]

def pLU_decomposition(a: tuple | list | np.ndarray[tuple[N, N], Fraction]) -> PLUDecomposition:
    """
    PLU decomposition of a square nonsingular matrix, using partial
    row pivoting to avoid zeroes in the diagonal.

    Raises `SingularMatrixError` if the matrix is singular,
    and `ValueError` if it is not square.
    """
    a = as_fraction_array(a)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError("matrix must be square")
    n = a.shape[0]

    det_P = 1
    P = np.eye(n, dtype=int)
    L = as_fraction_array(np.eye(n, dtype=int))
    U = a.copy()
    for c in range(n):
        if U[c, c] == 0:
            nz, = np.asarray(U[c+1:, c] != 0).nonzero()
            if not len(nz):
                raise SingularMatrixError("matrix is singular and has no PLU decomposition")
            r_swap = c + 1 + nz[0]
            P[:, (c, r_swap)] = P[:, (r_swap, c)]
            L[(c, r_swap), :c] = L[(r_swap, c), :c]  # only the first c columns differ from I
            U[(c, r_swap), :] = U[(r_swap, c), :]
            det_P *= -1

        cc = U[c, c]
        for r in range(c + 1, n):
            q = U[r, c] / cc
            if q:
                U[r, :] -= U[c, :] * q
            L[r, c] = q
    return PLUDecomposition(P, L, U, det_P)

def _rhs_columns(n: int, y: np.ndarray) -> tuple[int, tuple[int, ...]]:
    if y.ndim == 1:
        if len(y) != n:
            raise ValueError("incompatible rhs shape")
        return 1, (n,)
    if y.shape[0] != n:
        raise ValueError("incompatible rhs shape")
    return y.shape[1], y.shape

def solve_lower_triangular(
    L: np.ndarray[tuple[N, N], Fraction],
    y: np.ndarray[MatrixOrVectorShape[N], Fraction],
) -> np.ndarray[MatrixOrVectorShape[N], Fraction]:
    n = L.shape[0]
    m, shape = _rhs_columns(n, y)
    y = y.reshape((n, m))
    x = np.zeros((n, m), dtype=object)
    for c in range(m):
        for i in range(n):
            yy = Fraction(y[i, c])
            for j in range(i):
                yy -= L[i, j] * x[j, c]
            if L[i, i] == 0:
                raise SingularMatrixError("triangular system is singular")
            x[i, c] = yy / L[i, i]
    return x.reshape(shape)

def solve_upper_triangular(
    U: np.ndarray[tuple[N, N], Fraction],
    y: np.ndarray[MatrixOrVectorShape[N], Fraction],
) -> np.ndarray[MatrixOrVectorShape[N], Fraction]:
    n = U.shape[0]
    m, shape = _rhs_columns(n, y)
    y = y.reshape((n, m))
    x = np.zeros((n, m), dtype=object)
    for c in range(m):
        for i in range(n - 1, -1, -1):
            yy = Fraction(y[i, c])
            for j in range(i + 1, n):
                yy -= U[i, j] * x[j, c]
            if U[i, i] == 0:
                raise SingularMatrixError("triangular system is singular")
            x[i, c] = yy / U[i, i]
    return x.reshape(shape)

def solve(
    A: np.ndarray[tuple[N, N], int | Fraction],
    y: np.ndarray[MatrixOrVectorShape[N], int | Fraction], *,
    pLU: PLUDecomposition = ...,
) -> np.ndarray[MatrixOrVectorShape[N], Fraction]:
    """
    Exact solution x of A·x = y, for a vector or a matrix of right-hand sides.
    Raises `SingularMatrixError` if A is singular.
    """
    if pLU is ...:
        pLU = pLU_decomposition(A)
    P, L, U, _ = pLU
    y = as_fraction_array(y)
    y_P = P.T @ y
    y_L = solve_lower_triangular(L, y_P)
    return solve_upper_triangular(U, y_L)

def inverse(a: np.ndarray[tuple[N, N], int | Fraction], *, pLU: PLUDecomposition = ...) -> np.ndarray[tuple[N, N], Fraction]:
    """
    Exact inverse matrix of a square matrix.
    Raises `SingularMatrixError` if the matrix is singular.
    """
    a = as_fraction_array(a)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError("matrix must be square")
    n = a.shape[0]
    if n == 0:
        return np.zeros((0, 0), dtype=object)
    return solve(a, as_fraction_array(np.eye(n, dtype=int)), pLU=pLU)

def determinant(a: tuple | list | np.ndarray[tuple[N, N], int | Fraction]) -> int | Fraction:
    """
    Exact determinant by fraction-free (Bareiss) elimination.

    Integer matrices only ever see exact integer divisions,
    and their determinant is returned as an `int`.
    """
    if isinstance(a, (list, tuple)):
        a = np.array(a, dtype=object)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError("matrix must be square")
    n = a.shape[0]
    if n == 0:
        return 1
    a = a.astype(object)
    integral = all(isinstance(x, (int, np.integer)) for x in a.flat)
    if integral:
        a = np.vectorize(int, otypes=[object])(a)
    sign = 1
    prev = 1
    for c in range(n - 1):
        if a[c, c] == 0:
            nz, = np.asarray(a[c+1:, c] != 0).nonzero()
            if not len(nz):
                return 0
            r_swap = c + 1 + nz[0]
            a[(c, r_swap), :] = a[(r_swap, c), :]
            sign = -sign
        for r in range(c + 1, n):
            for j in range(c + 1, n):
                num = a[r, j] * a[c, c] - a[r, c] * a[c, j]
                a[r, j] = exact_div(num, prev) if integral else Fraction(num) / prev
        prev = a[c, c]
    return sign * a[n - 1, n - 1]

def rank(A: tuple | list | np.ndarray[tuple[N, M], int | Fraction]) -> int:
    """
    Rank of a rational matrix, by Gaussian elimination.
    """
    U = as_fraction_array(A)
    if U.ndim != 2:
        raise ValueError("matrix must be 2D")
    n, m = U.shape
    r = 0
    for c in range(m):
        if r == n:
            break
        nz, = np.asarray(U[r:, c] != 0).nonzero()
        if not len(nz):
            continue
        r_swap = r + nz[0]
        if r_swap != r:
            U[(r, r_swap), :] = U[(r_swap, r), :]
        for rr in range(r + 1, n):
            q = U[rr, c] / U[r, c]
            if q:
                U[rr, :] -= U[r, :] * q
        r += 1
    return r

def is_unimodular(U: tuple | list | np.ndarray[tuple[N, N], int]) -> bool:
    """
    Whether U is a square integer matrix with determinant ±1.
    """
    if isinstance(U, (list, tuple)):
        U = np.array(U, dtype=object)
    if U.ndim != 2 or U.shape[0] != U.shape[1]:
        return False
    if not all(isinstance(x, (int, np.integer)) for x in U.flat):
        return False
    return abs(determinant(U)) == 1
