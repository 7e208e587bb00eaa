"""
Integer kernel and image of an integer matrix, computed with LLL.

The columns of the matrix are reduced with the dependent-generators variant
of LLL (`lll_reduction_dependent`); its transform splits into a complement
part and a kernel part, the latter being re-reduced with the integral LLL.
"""

from __future__ import annotations

from fractions import Fraction
from typing import NamedTuple, Sequence
from warnings import warn

import numpy as np

from latred.arith import round_fraction
from latred.errors import SingularMatrixError
from latred.lll import DEFAULT_DELTA, lll_reduction_dependent, lll_reduction_integral
from latred.lll.engine import as_int_array_if_possible, as_integer_matrix
from latred.rational.linalg import inverse
from latred.util.profiler import Profiler

__all__ = [
    'KernelComplement',
    'integer_kernel',
    'integer_image',
    'kernel_and_complement',
]


class KernelComplement(NamedTuple):
    """
    :ivar transform:
        Unimodular n×n matrix. Its first `rank` columns span a complement of the
        kernel (reduced modulo the kernel), its last `n - rank` columns are an
        LLL-reduced basis of the integer kernel.
    :ivar rank:
        Rank of the matrix.
    """
    transform: np.ndarray[tuple[int, int], int]
    rank: int


def _reduced_kernel(
    transform: np.ndarray[tuple[int, int], int],
    rank: int,
    delta: Fraction,
    profiler: Profiler,
) -> np.ndarray[tuple[int, int], int] | None:
    kernel = transform[:, rank:]
    if kernel.shape[1] == 0:
        return kernel
    reduced = lll_reduction_integral(kernel, delta, profiler=profiler, cast_to_numpy_int_if_possible=False)
    if reduced is None:
        warn("Kernel columns of a unimodular transform were found to be dependent.", RuntimeWarning)
        return None
    return reduced.basis

def integer_kernel(
    matrix: np.ndarray[tuple[int, int], int] | Sequence[Sequence[int]], *,
    delta: Fraction | int | float = DEFAULT_DELTA,
    profiler: Profiler = Profiler.noop,
    cast_to_numpy_int_if_possible: bool = True,
) -> np.ndarray[tuple[int, int], int] | None:
    """
    LLL-reduced basis of the integer kernel {x ∈ Zⁿ : A·x = 0} of an m×n integer matrix A.

    :param matrix: m×n integer matrix A.
    :return:
        n×r matrix whose columns are a basis of the kernel (r = n - rank(A)),
        or `None` on an internal consistency failure.
    """
    a = as_integer_matrix(matrix, 'matrix')
    with profiler['kernel']:
        _, h, p = lll_reduction_dependent(a, delta, profiler=profiler, cast_to_numpy_int_if_possible=False)
        kernel = _reduced_kernel(h, p, delta, profiler)
    if kernel is None:
        return None
    return as_int_array_if_possible(kernel, cast_to_numpy_int_if_possible)

def integer_image(
    matrix: np.ndarray[tuple[int, int], int] | Sequence[Sequence[int]], *,
    delta: Fraction | int | float = DEFAULT_DELTA,
    profiler: Profiler = Profiler.noop,
    cast_to_numpy_int_if_possible: bool = True,
) -> np.ndarray[tuple[int, int], int]:
    """
    LLL-reduced basis of the lattice A·Zⁿ generated by the columns of an m×n integer matrix A.

    :param matrix: m×n integer matrix A.
    :return: m×rank(A) matrix whose columns are a basis of the image lattice.
    """
    a = as_integer_matrix(matrix, 'matrix')
    with profiler['image']:
        b, _, p = lll_reduction_dependent(a, delta, profiler=profiler, cast_to_numpy_int_if_possible=False)
    return as_int_array_if_possible(b[:, :p], cast_to_numpy_int_if_possible)

def kernel_and_complement(
    matrix: np.ndarray[tuple[int, int], int] | Sequence[Sequence[int]], *,
    delta: Fraction | int | float = DEFAULT_DELTA,
    profiler: Profiler = Profiler.noop,
    cast_to_numpy_int_if_possible: bool = True,
) -> KernelComplement | None:
    """
    Unimodular change of coordinates adapted to the kernel of an m×n integer matrix A.

    The trailing columns of the transform found by `lll_reduction_dependent` are
    replaced by their integral LLL reduction. Each leading (complement) column h
    is then reduced modulo the kernel K: its projection coefficients
    (KᵀK)⁻¹·Kᵀ·h are computed exactly, rounded (ties to even), and the
    corresponding integer combination of kernel columns is subtracted.

    :param matrix: m×n integer matrix A.
    :return:
        `KernelComplement(transform, rank)`, or `None` if the kernel Gram matrix
        turns out to be singular (a consistency failure that a warning reports).
    """
    a = as_integer_matrix(matrix, 'matrix')
    n = a.shape[1]
    with profiler['kernel_complement']:
        _, h, p = lll_reduction_dependent(a, delta, profiler=profiler, cast_to_numpy_int_if_possible=False)
        if p == n:
            return KernelComplement(as_int_array_if_possible(h, cast_to_numpy_int_if_possible), p)

        kernel = _reduced_kernel(h, p, delta, profiler)
        if kernel is None:
            return None
        h = h.copy()
        h[:, p:] = kernel

        try:
            gram_inv = inverse(kernel.T @ kernel)
        except SingularMatrixError:
            warn("Gram matrix of the kernel basis is singular; rank computation is inconsistent.", RuntimeWarning)
            return None

        for i in range(p):
            coefficients = gram_inv @ (kernel.T @ h[:, i])
            m = np.array([round_fraction(c) for c in coefficients], dtype=object)
            if any(m):
                h[:, i] -= kernel @ m

    return KernelComplement(as_int_array_if_possible(h, cast_to_numpy_int_if_possible), p)
