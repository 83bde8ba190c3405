"""
Core infrastructure for PyLinear.

Shared abstractions used by the containers and the solvers.

Key components:
    numeric: Numeric element contract (NumericKind)
    size: Size, Shape and Dimension descriptors
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and tolerances
"""

from pylinear.core.exceptions import (
    PyLinearError,
    ValidationError,
    DimensionError,
    IndexOutOfRangeError,
    NumericalError,
    SingularMatrixError,
)
from pylinear.core.numeric import Numeric, NumericKind
from pylinear.core.protocols import Backend
from pylinear.core.result import Result
from pylinear.core.size import Dimension, Shape, Size

__all__ = [
    # Numeric contract
    "Numeric",
    "NumericKind",
    # Descriptors
    "Size",
    "Shape",
    "Dimension",
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyLinearError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfRangeError",
    "NumericalError",
    "SingularMatrixError",
]
