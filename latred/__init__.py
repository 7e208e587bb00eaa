from .errors import LatticeError, LinearDependenceError, InexactDivisionError, SingularMatrixError
from .lll import (
    DEFAULT_DELTA,
    LLLReduction,
    DependentLLLReduction,
    lll_reduction,
    lll_reduction_integral,
    lll_reduction_deep,
    lll_reduction_dependent,
)
from .kernel import KernelComplement, integer_kernel, integer_image, kernel_and_complement
from .enumeration import CholeskyDecomposition, cholesky_decomposition, short_vectors, fincke_pohst, shortest_vectors
from .relations import integer_relation, find_integer_relation, algebraic_dependence
from .util.profiler import Profiler

__version__ = '0.1.0'

__all__ = [
    'LatticeError',
    'LinearDependenceError',
    'InexactDivisionError',
    'SingularMatrixError',
    'DEFAULT_DELTA',
    'LLLReduction',
    'DependentLLLReduction',
    'lll_reduction',
    'lll_reduction_integral',
    'lll_reduction_deep',
    'lll_reduction_dependent',
    'KernelComplement',
    'integer_kernel',
    'integer_image',
    'kernel_and_complement',
    'CholeskyDecomposition',
    'cholesky_decomposition',
    'short_vectors',
    'fincke_pohst',
    'shortest_vectors',
    'integer_relation',
    'find_integer_relation',
    'algebraic_dependence',
    'Profiler',
]
