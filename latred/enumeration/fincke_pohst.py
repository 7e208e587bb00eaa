"""
Enumeration of the vectors of a positive definite quadratic form
below a bound (Fincke–Pohst).

`short_vectors` walks the square-completed representation Q of the form
depth-first, from the last coordinate down to the first, bounding each
coordinate by the part of the budget left by the coordinates above it.

`fincke_pohst` first improves the conditioning of the form with an LLL
reduction of the rows of R⁻¹ (R being the Cholesky factor), which keeps
the enumeration tree small for skewed forms.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Sequence
from warnings import warn

import numpy as np
import scipy.linalg

from latred.enumeration.cholesky import cholesky_decomposition
from latred.lll import lll_reduction
from latred.rational.linalg import inverse
from latred.util.jit import njit
from latred.util.profiler import Profiler

__all__ = [
    'short_vectors',
    'fincke_pohst',
    'shortest_vectors',
]


ShortVectors = list[tuple[np.ndarray[tuple[int], int], float]]


@njit
def _enumerate_short_vectors(
    q: np.ndarray[tuple[int, int], float],
    limit: float,
) -> tuple[np.ndarray[tuple[int, int], int], np.ndarray[tuple[int], float]]:
    n = q.shape[0]
    x = np.zeros(n, dtype=np.int64)
    upper = np.zeros(n, dtype=np.int64)
    center = np.zeros(n)
    budget = np.zeros(n)

    found = np.zeros((64, n), dtype=np.int64)
    values = np.zeros(64)
    count = 0

    i = n - 1
    budget[i] = limit
    z = math.sqrt(max(budget[i], 0.0) / q[i, i])
    upper[i] = int(math.floor(z - center[i]))
    x[i] = int(math.ceil(-z - center[i])) - 1
    while True:
        x[i] += 1
        if x[i] > upper[i]:
            i += 1
            if i == n:
                break
            continue

        if i > 0:
            s = 0.0
            for j in range(i, n):
                s += q[i - 1, j] * x[j]
            center[i - 1] = s
            d = x[i] + center[i]
            budget[i - 1] = budget[i] - q[i, i] * d * d
            i -= 1
            z = math.sqrt(max(budget[i], 0.0) / q[i, i])
            upper[i] = int(math.floor(z - center[i]))
            x[i] = int(math.ceil(-z - center[i])) - 1
            continue

        nonzero = False
        for j in range(n):
            if x[j] != 0:
                nonzero = True
                break
        if not nonzero:
            continue

        value = 0.0
        for j in range(n):
            s = float(x[j])
            for l in range(j + 1, n):
                s += q[j, l] * x[l]
            value += q[j, j] * s * s
        if value > limit:
            continue

        if count == found.shape[0]:
            grown = np.zeros((2 * count, n), dtype=np.int64)
            grown[:count] = found
            found = grown
            grown_values = np.zeros(2 * count)
            grown_values[:count] = values
            values = grown_values
        found[count] = x
        values[count] = value
        count += 1

    return found[:count], values[:count]


def short_vectors(
    q: np.ndarray[tuple[int, int], float] | Sequence[Sequence[float]],
    bound: float, *,
    tolerance: float = 1e-9,
) -> ShortVectors:
    """
    All non-zero integer vectors x with Q(x) ≤ bound.

    :param q:
        Square-completed representation of a positive definite form,
        as computed by `cholesky_decomposition`.
    :param bound: Upper bound C for the value of the form.
    :param tolerance:
        Relative slack for floating point error: vectors with
        Q(x) ≤ C + tolerance·max(1, C) are reported.
    :return:
        List of `(x, Q(x))` pairs. Both x and −x are reported.
        Malformed forms (non-square, non-positive diagonal) have no vectors.
    """
    try:
        q = np.array(q, dtype=np.float64)
    except (TypeError, ValueError):
        return []
    if q.ndim != 2 or q.shape[0] != q.shape[1] or q.shape[0] == 0:
        return []
    if not np.all(np.isfinite(q)):
        warn("Quadratic form has non-finite entries, no vectors enumerated.", RuntimeWarning)
        return []
    if np.any(np.diag(q) <= 0):
        return []
    if not bound >= 0:
        return []
    limit = float(bound) + tolerance * max(1.0, float(bound))
    xs, values = _enumerate_short_vectors(np.ascontiguousarray(q), limit)
    return [(xs[i].copy(), float(values[i])) for i in range(len(values))]

def _as_int_vector(x: np.ndarray) -> np.ndarray[tuple[int], int]:
    return np.array([int(v) for v in x], dtype=np.int64)

def fincke_pohst(
    a: np.ndarray[tuple[int, int], float] | Sequence[Sequence[float]],
    bound: float, *,
    scale: int = 2**20,
    tolerance: float = 1e-9,
    profiler: Profiler = Profiler.noop,
) -> ShortVectors | None:
    """
    All non-zero integer vectors x with xᵀAx ≤ bound, for a positive definite matrix A.

    The rows of R⁻¹ (A = RᵀR) are scaled by `scale`, rounded and LLL-reduced;
    the resulting unimodular change of coordinates H makes the form
    A' = HᵀAH closer to diagonal. Its columns are sorted by decreasing norm,
    A' is enumerated and the vectors are mapped back as x = H·y.

    :param a: Positive definite symmetric n×n matrix.
    :param bound: Upper bound C for xᵀAx.
    :param scale: Scale applied to R⁻¹ before rounding it to integers.
    :param tolerance: Relative slack, see `short_vectors`.
    :return:
        List of `(x, xᵀAx)` pairs, or `None` if A is not square, not symmetric
        or not positive definite.
    """
    decomposition = cholesky_decomposition(a)
    if decomposition is None:
        return None
    a = np.asarray(a, dtype=np.float64)
    r = decomposition.R
    n = r.shape[0]

    with profiler['fincke_pohst']:
        r_inv = scipy.linalg.solve_triangular(r, np.eye(n), lower=False)
        scaled_rows = np.vectorize(int, otypes=[object])(np.rint(r_inv * scale))
        reduction = lll_reduction(scaled_rows.T, profiler=profiler, cast_to_numpy_int_if_possible=False)
        if reduction is None:
            h = np.eye(n, dtype=np.int64).astype(object)
        else:
            h_fraction = inverse(reduction.transform).T
            h = np.vectorize(lambda v: int(Fraction(v)), otypes=[object])(h_fraction)

        s = r @ h.astype(np.float64)
        order = np.argsort(-np.sum(s * s, axis=0), kind='stable')
        h = h[:, order]
        s = s[:, order]

        gram = s.T @ s
        improved = cholesky_decomposition((gram + gram.T) / 2)
        if improved is None:
            return None

        result = []
        for y, _ in short_vectors(improved.Q, bound, tolerance=tolerance):
            x = _as_int_vector(h @ y.astype(object))
            xf = x.astype(np.float64)
            result.append((x, float(xf @ a @ xf)))
        profiler.count('short_vector', len(result))
    return result

def shortest_vectors(
    a: np.ndarray[tuple[int, int], float] | Sequence[Sequence[float]], *,
    scale: int = 2**20,
    tolerance: float = 1e-9,
    profiler: Profiler = Profiler.noop,
) -> ShortVectors | None:
    """
    All the minimal non-zero integer vectors of a positive definite form, with their value.

    :return: List of `(x, xᵀAx)` pairs, or `None` if A is not positive definite.
    """
    if cholesky_decomposition(a) is None:
        return None
    bound = float(np.min(np.diag(np.asarray(a, dtype=np.float64))))
    found = fincke_pohst(a, bound, scale=scale, tolerance=tolerance, profiler=profiler)
    if not found:
        return found
    best = min(value for _, value in found)
    return [(x, value) for x, value in found if value <= best + tolerance * max(1.0, best)]
