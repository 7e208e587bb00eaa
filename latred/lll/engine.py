"""
Shared state of the LLL reduction variants.

A `ReductionState` owns a private copy of the basis (vectors as columns) and
the unimodular transform U, initialized to the identity, and keeps them in
lockstep: every column operation applied to the basis is applied to U, so
that at any point `basis = original_basis @ U`.

The variants drive the state as explicit state machines over `Step`.
"""

from __future__ import annotations

from enum import Enum, auto
from fractions import Fraction
from typing import NamedTuple, Sequence
from warnings import warn

import numpy as np

from latred.arith import round_fraction
from latred.lll.gram_schmidt import RationalGramSchmidt, empty_rational_gram_schmidt, update_rational_gram_schmidt
from latred.util.profiler import Profiler

__all__ = [
    'DEFAULT_DELTA',
    'Step',
    'LLLReduction',
    'DependentLLLReduction',
    'ReductionState',
    'RationalReductionState',
    'validate_delta',
    'as_integer_matrix',
    'as_int_array_if_possible',
]


DEFAULT_DELTA = Fraction(3, 4)


class Step(Enum):
    INIT = auto()
    SIZE_REDUCE = auto()
    TEST_SWAP = auto()
    SWAP = auto()
    INSERT = auto()
    ADVANCE = auto()
    DONE = auto()


class LLLReduction(NamedTuple):
    """
    Result of an LLL reduction.

    :ivar basis: Reduced basis (vectors as columns).
    :ivar transform: Unimodular matrix U such that `basis = original_basis @ U`.
    """
    basis: np.ndarray[tuple[int, int], int]
    transform: np.ndarray[tuple[int, int], int]


class DependentLLLReduction(NamedTuple):
    """
    Result of an LLL reduction of possibly dependent generators.

    :ivar basis:
        Reduced generators. The first `rank` columns are an LLL-reduced basis of
        the lattice, the remaining `n - rank` columns are zero.
    :ivar transform:
        Unimodular matrix U such that `basis = original_basis @ U`.
        Its trailing `n - rank` columns are a basis of the integer kernel.
    :ivar rank:
        Number of linearly independent generators.
    """
    basis: np.ndarray[tuple[int, int], int]
    transform: np.ndarray[tuple[int, int], int]
    rank: int


def validate_delta(delta: Fraction | int | float) -> Fraction:
    """
    Converts `delta` to an exact `Fraction` (floats are converted exactly),
    warning if it is outside the range where LLL is well-defined and polynomial.
    """
    delta = Fraction(delta)
    if not Fraction(1, 4) < delta <= 1:
        warn("LLL is only well-defined for delta in (0.25, 1].", RuntimeWarning)
    elif delta == 1:
        warn("LLL polynomial time is only guaranteed for delta in (0.25, 1), consider lowering delta.", RuntimeWarning)
    return delta

def as_integer_matrix(a: np.ndarray | Sequence[Sequence[int]], name: str = 'basis') -> np.ndarray[tuple[int, int], int]:
    """
    Copy of a 2D integer matrix as a `dtype=object` array of Python integers.

    Accepts nested lists or tuples, and arrays of any integer dtype, as well as
    floats or fractions with integral values.
    Raises `ValueError` for non-2D or non-integer input.
    """
    if not isinstance(a, np.ndarray):
        a = np.array(a, dtype=object)
    if a.ndim != 2:
        raise ValueError(f"{name} must be a 2D matrix")
    out = np.empty(a.shape, dtype=object)
    for idx, x in np.ndenumerate(a):
        if isinstance(x, (int, np.integer)):
            out[idx] = int(x)
        elif isinstance(x, (float, np.floating, Fraction)) and x % 1 == 0:
            out[idx] = int(x)
        else:
            raise ValueError(f"{name} must have integer entries (found {x!r})")
    return out

def as_int_array_if_possible(a: np.ndarray, cast: bool = True) -> np.ndarray:
    """
    Casts a `dtype=object` integer array to `dtype=int` if all its values fit in int64.
    """
    if cast and np.all(a < 2**63) and np.all(a >= -2**63):
        return a.astype(np.int64)
    return a


class ReductionState:
    """
    Basis/transform pair mutated in lockstep by the reduction engines.

    :ivar basis: m×n `dtype=object` working copy of the basis.
    :ivar transform: n×n `dtype=object` transform, starting at the identity.
    :ivar delta: Lovász constant.
    """
    def __init__(
        self,
        basis: np.ndarray | Sequence[Sequence[int]],
        delta: Fraction | int | float = DEFAULT_DELTA,
        profiler: Profiler = Profiler.noop,
    ):
        self.basis = as_integer_matrix(basis)
        self.m, self.n = self.basis.shape
        self.transform = np.eye(self.n, dtype=np.int64).astype(object)
        self.delta = validate_delta(delta)
        self.profiler = profiler

    def reduce(self, k: int, l: int, q: int) -> bool:
        """
        b_k ← b_k − q·b_l, mirrored on the columns of the transform.
        Returns whether anything changed.
        """
        if q == 0:
            return False
        self.basis[:, k] -= q * self.basis[:, l]
        self.transform[:, k] -= q * self.transform[:, l]
        self.profiler.count('size_reduction')
        return True

    def swap(self, k: int) -> None:
        """
        Exchanges b_{k-1} and b_k (and the matching transform columns).
        """
        self.basis[:, (k-1, k)] = self.basis[:, (k, k-1)]
        self.transform[:, (k-1, k)] = self.transform[:, (k, k-1)]
        self.profiler.count('swap')

    def insert(self, k: int, i: int) -> None:
        """
        Moves b_k to position i ≤ k, shifting b_i, ..., b_{k-1} up by one,
        rotating the transform columns identically.
        """
        if i >= k:
            return
        rotated_basis = np.roll(self.basis[:, i:k+1], 1, axis=1)
        rotated_transform = np.roll(self.transform[:, i:k+1], 1, axis=1)
        self.basis[:, i:k+1] = rotated_basis
        self.transform[:, i:k+1] = rotated_transform
        self.profiler.count('insertion')

    def move_to_end(self, indices: Sequence[int]) -> None:
        """
        Stable reordering moving the columns in `indices` after all others.
        """
        moved = set(indices)
        order = [i for i in range(self.n) if i not in moved] + [i for i in range(self.n) if i in moved]
        self.basis = self.basis[:, order]
        self.transform = self.transform[:, order]

    def result(self, cast_to_numpy_int_if_possible: bool = True) -> LLLReduction:
        return LLLReduction(
            as_int_array_if_possible(self.basis, cast_to_numpy_int_if_possible),
            as_int_array_if_possible(self.transform, cast_to_numpy_int_if_possible),
        )


class RationalReductionState(ReductionState):
    """
    Reduction state backed by a rational Gram-Schmidt orthogonalization.

    Columns `0..valid-1` of the orthogonalization are up to date.
    Column operations lower this high-water mark, and `gram_schmidt(k)`
    recomputes the invalidated columns up to `k`.
    """
    def __init__(
        self,
        basis: np.ndarray | Sequence[Sequence[int]],
        delta: Fraction | int | float = DEFAULT_DELTA,
        profiler: Profiler = Profiler.noop, *,
        allow_dependent: bool = False,
    ):
        super().__init__(basis, delta, profiler)
        self.allow_dependent = allow_dependent
        self.gs = empty_rational_gram_schmidt(self.m, self.n)
        self.valid = 0

    def invalidate(self, i: int) -> None:
        self.valid = min(self.valid, i)

    def gram_schmidt(self, k: int) -> RationalGramSchmidt:
        """
        Gram-Schmidt data valid (at least) for columns `0..k`.
        May raise `LinearDependenceError` unless dependent vectors are allowed.
        """
        while self.valid <= k:
            update_rational_gram_schmidt(
                self.basis, self.gs.ortho, self.gs.norms, self.gs.mu, self.valid,
                allow_dependent=self.allow_dependent)
            self.valid += 1
        return self.gs

    def size_reduce(self, k: int, l: int) -> bool:
        """
        Reduce(k, l): subtracts round(μ_{k,l})·b_l from b_k, rounding ties to even.
        """
        mu = self.gram_schmidt(k).mu
        return self.reduce(k, l, round_fraction(mu[k, l]))

    def lovasz(self, k: int) -> bool:
        """
        Lovász condition: ‖b*_k‖² ≥ (δ − μ_{k,k-1}²)·‖b*_{k-1}‖².
        """
        gs = self.gram_schmidt(k)
        mu = gs.mu[k, k-1]
        return gs.norms[k] >= (self.delta - mu * mu) * gs.norms[k-1]

    def reduce(self, k: int, l: int, q: int) -> bool:
        changed = super().reduce(k, l, q)
        if changed:
            self.invalidate(k)
        return changed

    def swap(self, k: int) -> None:
        super().swap(k)
        self.invalidate(k - 1)

    def insert(self, k: int, i: int) -> None:
        super().insert(k, i)
        self.invalidate(i)

    def move_to_end(self, indices: Sequence[int]) -> None:
        super().move_to_end(indices)
        self.invalidate(0)
