"""
LLL reduction of possibly linearly dependent generators (MLLL, Pohst).

Zero Gram-Schmidt vectors are tolerated. A dependent generator keeps being
swapped towards the front while its predecessor has a non-zero Gram-Schmidt
norm, and the size-reductions on the way turn it into the zero vector.
The zero vectors are finally moved behind the independent ones, so the
trailing columns of the transform span the integer kernel of the generators.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Sequence

import numpy as np

from latred.lll.engine import (
    DEFAULT_DELTA,
    DependentLLLReduction,
    RationalReductionState,
    Step,
    as_int_array_if_possible,
)
from latred.util.profiler import Profiler

__all__ = [
    'lll_reduction_dependent',
]


def _run_dependent(state: RationalReductionState) -> int:
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
            gs = state.gram_schmidt(k)
            if gs.norms[k - 1] == 0 or state.lovasz(k):
                step = Step.ADVANCE
            else:
                step = Step.SWAP

        elif step is Step.SWAP:
            state.swap(k)
            k = max(k - 1, 1)
            step = Step.SIZE_REDUCE

        elif step is Step.ADVANCE:
            for l in range(k - 2, -1, -1):
                state.size_reduce(k, l)
            k += 1
            step = Step.SIZE_REDUCE if k < n else Step.DONE

    if n == 0:
        return 0
    norms = state.gram_schmidt(n - 1).norms
    dependent = [i for i in range(n) if norms[i] == 0]
    assert all(not any(state.basis[:, i]) for i in dependent), "dependent generators were not reduced to zero"
    state.move_to_end(dependent)
    return n - len(dependent)

def lll_reduction_dependent(
    basis: np.ndarray[tuple[int, int], int] | Sequence[Sequence[int]], /,
    delta: Fraction | int | float = DEFAULT_DELTA, *,
    profiler: Profiler = Profiler.noop,
    cast_to_numpy_int_if_possible: bool = True,
) -> DependentLLLReduction:
    """
    LLL reduction of a generating set which may be linearly dependent.

    :param basis:
        Integer 2D matrix with the lattice generators as columns (m×n).
        Any number of generators is accepted, including n > m and zero columns.
    :param delta:
        Delta value for the Lovász condition. The default value is 3/4.
    :param profiler:
        Receives `size_reduction` and `swap` counts and the `lll_dependent` section timing.
    :param cast_to_numpy_int_if_possible:
        Cast results to `np.int64` when all values fit.
    :return:
        `DependentLLLReduction(basis, transform, rank)`.
        The first `rank` columns of `basis` are an LLL-reduced basis of the lattice
        generated by the input, the rest are zero; the last `n - rank` columns of
        `transform` are a basis of the integer kernel of the input.
    """
    state = RationalReductionState(basis, delta, profiler, allow_dependent=True)
    with profiler['lll_dependent']:
        rank = _run_dependent(state)
    return DependentLLLReduction(
        as_int_array_if_possible(state.basis, cast_to_numpy_int_if_possible),
        as_int_array_if_possible(state.transform, cast_to_numpy_int_if_possible),
        rank,
    )
