"""
LLL reduction with deep insertions (Schnorr–Euchner).

Instead of only swapping b_k with b_{k-1}, b_k is inserted at the first
position i where its projection orthogonal to b_0, ..., b_{i-1} is shorter
than δ·‖b*_i‖².
"""

from __future__ import annotations

from fractions import Fraction
from typing import Sequence

import numpy as np

from latred.errors import LinearDependenceError
from latred.lll.engine import DEFAULT_DELTA, LLLReduction, RationalReductionState, Step
from latred.util.profiler import Profiler

__all__ = [
    'lll_reduction_deep',
]


def _insertion_index(state: RationalReductionState, k: int) -> int:
    """
    First index i < k where δ·‖b*_i‖² exceeds the squared norm of the projection
    of b_k orthogonal to b_0, ..., b_{i-1}; `k` if there is none.
    """
    gs = state.gram_schmidt(k)
    b_k = state.basis[:, k]
    c = Fraction(sum((x * x for x in b_k), 0))
    for i in range(k):
        if state.delta * gs.norms[i] > c:
            return i
        c -= gs.mu[k, i] * gs.mu[k, i] * gs.norms[i]
    return k

def _run_deep(state: RationalReductionState) -> None:
    n = state.n
    k = 1
    i = k
    step = Step.INIT
    while step is not Step.DONE:
        if step is Step.INIT:
            if n > 0:
                state.gram_schmidt(0)
            step = Step.SIZE_REDUCE if k < n else Step.DONE

        elif step is Step.SIZE_REDUCE:
            for l in range(k - 1, -1, -1):
                state.size_reduce(k, l)
            step = Step.TEST_SWAP

        elif step is Step.TEST_SWAP:
            i = _insertion_index(state, k)
            step = Step.ADVANCE if i == k else Step.INSERT

        elif step is Step.INSERT:
            state.insert(k, i)
            k = max(i - 1, 0)
            step = Step.SIZE_REDUCE

        elif step is Step.ADVANCE:
            k += 1
            step = Step.SIZE_REDUCE if k < n else Step.DONE

def lll_reduction_deep(
    basis: np.ndarray[tuple[int, int], int] | Sequence[Sequence[int]], /,
    delta: Fraction | int | float = DEFAULT_DELTA, *,
    profiler: Profiler = Profiler.noop,
    cast_to_numpy_int_if_possible: bool = True,
) -> LLLReduction | None:
    """
    LLL reduction with deep insertions.

    Produces a basis which is in particular LLL-reduced (for the same delta),
    and usually more thoroughly so, at a higher cost per step.

    :param basis:
        Integer 2D matrix with linearly independent lattice generators as columns.
    :param delta:
        Delta value for the insertion condition. The default value is 3/4.
    :param profiler:
        Receives `size_reduction` and `insertion` counts and the `lll_deep` section timing.
    :param cast_to_numpy_int_if_possible:
        Cast results to `np.int64` when all values fit.
    :return:
        `LLLReduction(basis, transform)`, or `None` if the generators are
        linearly dependent.
    """
    state = RationalReductionState(basis, delta, profiler)
    try:
        with profiler['lll_deep']:
            _run_deep(state)
    except LinearDependenceError:
        return None
    return state.result(cast_to_numpy_int_if_possible)
