"""
Integral (fraction-free) LLL reduction.

Only the integers D_i and λ_{k,j} are maintained (see `gram_schmidt`), and
they are updated incrementally by size-reductions and swaps with exact
divisions, so no rational arithmetic is performed.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Sequence

import numpy as np

from latred.arith import exact_div, round_div
from latred.errors import LinearDependenceError
from latred.lll.engine import DEFAULT_DELTA, LLLReduction, ReductionState, Step
from latred.lll.gram_schmidt import empty_integral_gram_schmidt, update_integral_gram_schmidt
from latred.util.profiler import Profiler

__all__ = [
    'IntegralReductionState',
    'lll_reduction_integral',
]


class IntegralReductionState(ReductionState):
    """
    Reduction state backed by fraction-free Gram-Schmidt data.

    `d[i+1]` holds D_i (with `d[0] = 1`), `lam[k, j]` holds λ_{k,j}.
    Rows `0..k_max` are valid; rows past `k_max` are computed on demand.
    """
    def __init__(
        self,
        basis: np.ndarray | Sequence[Sequence[int]],
        delta: Fraction | int | float = DEFAULT_DELTA,
        profiler: Profiler = Profiler.noop,
    ):
        super().__init__(basis, delta, profiler)
        self.d, self.lam = empty_integral_gram_schmidt(self.n)
        self.k_max = -1

    def extend(self, k: int) -> None:
        """
        Computes the rows up to `k` not computed yet.
        Raises `LinearDependenceError` if some D_i vanishes.
        """
        while self.k_max < k:
            update_integral_gram_schmidt(self.basis, self.d, self.lam, self.k_max + 1)
            self.k_max += 1

    def size_reduce(self, k: int, l: int) -> bool:
        """
        Reduce(k, l) when |λ_{k,l}| > D_l/2, updating λ_{k,·} in place.
        """
        d, lam = self.d, self.lam
        d_l = d[l + 1]
        if 2 * abs(lam[k, l]) <= d_l:
            return False
        q = round_div(lam[k, l], d_l)
        self.reduce(k, l, q)
        lam[k, l] -= q * d_l
        for i in range(l):
            lam[k, i] -= q * lam[l, i]
        return True

    def lovasz(self, k: int) -> bool:
        """
        Lovász condition without division, for δ = p/q:
            q·D_k·D_{k-2} ≥ p·D_{k-1}² − q·λ_{k,k-1}²
        """
        d, lam = self.d, self.lam
        p, q = self.delta.numerator, self.delta.denominator
        lmb = lam[k, k - 1]
        return q * d[k + 1] * d[k - 1] >= p * d[k] * d[k] - q * lmb * lmb

    def swap(self, k: int) -> None:
        """
        Exchanges b_{k-1} and b_k, updating D_{k-1} and the λ of rows k-1..k_max.
        """
        super().swap(k)
        d, lam = self.d, self.lam
        for j in range(k - 1):
            lam[k, j], lam[k - 1, j] = lam[k - 1, j], lam[k, j]
        lmb = lam[k, k - 1]
        b = exact_div(d[k - 1] * d[k + 1] + lmb * lmb, d[k])
        for i in range(k + 1, self.k_max + 1):
            t = lam[i, k]
            lam[i, k] = exact_div(d[k + 1] * lam[i, k - 1] - lmb * t, d[k])
            lam[i, k - 1] = exact_div(b * t + lmb * lam[i, k], d[k + 1])
        d[k] = b


def _run_integral(state: IntegralReductionState) -> None:
    n = state.n
    k = 1
    step = Step.INIT
    while step is not Step.DONE:
        if step is Step.INIT:
            if n > 0:
                state.extend(0)
            step = Step.SIZE_REDUCE if k < n else Step.DONE

        elif step is Step.SIZE_REDUCE:
            state.extend(k)
            state.size_reduce(k, k - 1)
            step = Step.TEST_SWAP

        elif step is Step.TEST_SWAP:
            step = Step.ADVANCE if state.lovasz(k) else Step.SWAP

        elif step is Step.SWAP:
            state.swap(k)
            k = max(k - 1, 1)
            step = Step.SIZE_REDUCE

        elif step is Step.ADVANCE:
            for l in range(k - 2, -1, -1):
                state.size_reduce(k, l)
            k += 1
            step = Step.SIZE_REDUCE if k < n else Step.DONE

def lll_reduction_integral(
    basis: np.ndarray[tuple[int, int], int] | Sequence[Sequence[int]], /,
    delta: Fraction | int | float = DEFAULT_DELTA, *,
    profiler: Profiler = Profiler.noop,
    cast_to_numpy_int_if_possible: bool = True,
) -> LLLReduction | None:
    """
    Integral LLL reduction (de Weger / Cohen), using only integer arithmetic.

    Takes the same decisions as `lll_reduction`, and thus yields the same result,
    but tracks D_i and λ_{k,j} instead of rational Gram-Schmidt data.

    :param basis:
        Integer 2D matrix with linearly independent lattice generators as columns.
    :param delta:
        Delta value for the Lovász condition, as an exact rational.
        The default value is 3/4.
    :param profiler:
        Receives `size_reduction` and `swap` counts and the `lll_integral` section timing.
    :param cast_to_numpy_int_if_possible:
        Cast results to `np.int64` when all values fit.
    :return:
        `LLLReduction(basis, transform)`, or `None` if the generators are
        linearly dependent.
    """
    state = IntegralReductionState(basis, delta, profiler)
    try:
        with profiler['lll_integral']:
            _run_integral(state)
    except LinearDependenceError:
        return None
    return state.result(cast_to_numpy_int_if_possible)
