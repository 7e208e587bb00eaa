"""
Exceptions raised by the reduction, kernel and enumeration routines.

Public entry points report mathematical degeneracy by returning `None`;
these exceptions travel between the internal layers and are only seen by
callers of the lower-level services (Gram-Schmidt, rational linear algebra).
"""

__all__ = [
    'LatticeError',
    'LinearDependenceError',
    'InexactDivisionError',
    'SingularMatrixError',
]


class LatticeError(ArithmeticError):
    """
    Base class for all errors of this package.
    """


class LinearDependenceError(LatticeError):
    """
    A Gram-Schmidt vector vanished: the basis prefix ending at `index` is linearly dependent.
    """
    def __init__(self, index: int):
        super().__init__(f"basis vector {index} is linearly dependent on its predecessors")
        self.index = index


class InexactDivisionError(LatticeError):
    """
    A division required to be exact left a remainder (or divided by zero).
    """
    def __init__(self, num: int, den: int):
        super().__init__(f"{num} is not exactly divisible by {den}")
        self.num = num
        self.den = den


class SingularMatrixError(LatticeError, ValueError):
    """
    A matrix that had to be inverted is singular.
    """
