from .engine import DEFAULT_DELTA, LLLReduction, DependentLLLReduction
from .classical import lll_reduction
from .integral import lll_reduction_integral
from .deep import lll_reduction_deep
from .dependent import lll_reduction_dependent
from .gram_schmidt import rational_gram_schmidt, integral_gram_schmidt

__all__ = [
    'DEFAULT_DELTA',
    'LLLReduction',
    'DependentLLLReduction',
    'lll_reduction',
    'lll_reduction_integral',
    'lll_reduction_deep',
    'lll_reduction_dependent',
    'rational_gram_schmidt',
    'integral_gram_schmidt',
]
