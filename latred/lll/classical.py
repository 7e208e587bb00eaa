from __future__ import annotations

from fractions import Fraction
from typing import Sequence

import numpy as np

from latred.errors import LinearDependenceError
from latred.lll.engine import DEFAULT_DELTA, LLLReduction, RationalReductionState, Step
from latred.util.profiler import Profiler

__all__ = [
    'lll_reduction',
]


def _run_classical(state: RationalReductionState) -> None:
    n = state.n
    k = 1
    step = Step.INIT
    while step is not Step.DONE:
        if step is Step.INIT:
            if n > 0:
                state.gram_schmidt(0)
            step = Step.SIZE_REDUCE if k < n else Step.DONE

        elif step is Step.SIZE_REDUCE:
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

def lll_reduction(
    basis: np.ndarray[tuple[int, int], int] | Sequence[Sequence[int]], /,
    delta: Fraction | int | float = DEFAULT_DELTA, *,
    profiler: Profiler = Profiler.noop,
    cast_to_numpy_int_if_possible: bool = True,
) -> LLLReduction | None:
    """
    Lenstra–Lenstra–Lovász (LLL) lattice basis reduction algorithm.

    Exact arithmetic implementation, with the Gram-Schmidt orthogonalization
    kept as `Fraction`s and recomputed after each column operation.

    :param basis:
        Integer 2D matrix with the lattice basis generators as columns (m×n).
        The generators must be linearly independent.
    :param delta:
        Delta value for the Lovász condition.
        Higher values of delta lead to stronger reductions of the basis at the expense
        of harder computation.
        The default value is 3/4.
    :param profiler:
        Receives `size_reduction` and `swap` counts and the `lll` section timing.
    :param cast_to_numpy_int_if_possible:
        The computation uses `dtype=object` arrays of Python integers.
        If this flag is set, results are cast to `np.int64` when all values fit.
    :return:
        `LLLReduction(basis, transform)` with `basis = original @ transform`,
        or `None` if the generators are linearly dependent.
    """
    state = RationalReductionState(basis, delta, profiler)
    try:
        with profiler['lll']:
            _run_classical(state)
    except LinearDependenceError:
        return None
    return state.result(cast_to_numpy_int_if_possible)
