"""
PyLinear: dense matrices, vectors and direct linear solvers.

Submodules:
    containers: Matrix and Vector
    linsys: Gaussian elimination and the solve() entry point
    core: Numeric contract, descriptors, exceptions, tolerances
"""

__version__ = "0.1.0"

from pylinear.containers import Matrix, Orientation, Vector
from pylinear.core import (
    Dimension,
    DimensionError,
    IndexOutOfRangeError,
    NumericKind,
    PyLinearError,
    Shape,
    SingularMatrixError,
    Size,
    ValidationError,
)
from pylinear.linsys import LinearSystemSolution, gaussian_elimination, solve

__all__ = [
    "__version__",
    "Matrix",
    "Vector",
    "Orientation",
    "Size",
    "Shape",
    "Dimension",
    "NumericKind",
    "solve",
    "gaussian_elimination",
    "LinearSystemSolution",
    "PyLinearError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfRangeError",
    "SingularMatrixError",
]
