"""
Exception hierarchy for PyLinear.

All exceptions inherit from PyLinearError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinearError(Exception):
    """Base exception for all PyLinear errors."""
    pass


class ValidationError(PyLinearError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks (non-numeric
    elements, empty data, ragged rows).
    """
    pass


class DimensionError(ValidationError):
    """
    Operand shapes are incompatible for the requested operation.

    Raised by matrix product, elementwise addition/subtraction, vector
    products and the linear-system solver when operand sizes disagree.

    Attributes:
        operation: Name of the operation that rejected its operands
        expected: Expected size/shape, if known
        actual: Actual size/shape, if known
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        expected: object = None,
        actual: object = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(PyLinearError, IndexError):
    """
    Row, column or position index outside the container bounds.

    This indicates a caller bug, not a data condition, and is never
    recovered from internally.

    Attributes:
        index: The offending index
        bound: The exclusive upper bound that was violated
    """

    def __init__(self, message: str, index: int | None = None, bound: int | None = None):
        super().__init__(message)
        self.index = index
        self.bound = bound


class NumericalError(PyLinearError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Linear system has no unique solution.

    The solver itself reports singular systems as an absent result; this
    exception is raised only when a caller explicitly demands a solution.

    Attributes:
        column: Pivot column where elimination stopped, if known
        pivot: Pivot value found in that column, if known
    """

    def __init__(
        self,
        message: str,
        column: int | None = None,
        pivot: object = None,
    ):
        super().__init__(message)
        self.column = column
        self.pivot = pivot
