from .linalg import (
    PLUDecomposition,
    as_fraction_array,
    determinant,
    inverse,
    is_unimodular,
    pLU_decomposition,
    rank,
    solve,
)

__all__ = [
    'PLUDecomposition',
    'as_fraction_array',
    'determinant',
    'inverse',
    'is_unimodular',
    'pLU_decomposition',
    'rank',
    'solve',
]
