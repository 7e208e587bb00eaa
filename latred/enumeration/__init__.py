from .cholesky import CholeskyDecomposition, cholesky_decomposition, quadratic_form_value
from .fincke_pohst import short_vectors, fincke_pohst, shortest_vectors

__all__ = [
    'CholeskyDecomposition',
    'cholesky_decomposition',
    'quadratic_form_value',
    'short_vectors',
    'fincke_pohst',
    'shortest_vectors',
]
