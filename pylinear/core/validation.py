"""
Input validation utilities for PyLinear.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent reshaping of ragged input
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinear.core.exceptions import DimensionError, IndexOutOfRangeError, ValidationError
from pylinear.core.size import Size


def check_array(array: ArrayLike, name: str) -> NDArray[Any]:
    """
    Validate and convert input to a numeric numpy array.

    Rejects inputs that result in object dtype (indicating mixed types or
    non-numeric data) and non-numeric dtypes. Integer dtypes are kept.

    Raises:
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype == np.bool_ or not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result


def check_ndim(array: NDArray[Any], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}",
            operation='check_ndim',
            expected=ndim,
            actual=array.ndim,
        )


def check_sequence(data: Any, name: str) -> None:
    """
    Verify data is a non-empty, non-string sequence.

    Raises:
        ValidationError: If data is not a sequence or is empty
    """
    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
        raise ValidationError(
            f"{name}: expected a sequence, got {type(data).__name__}"
        )
    if len(data) == 0:
        raise ValidationError(f"{name}: must not be empty")


def check_rectangular(data: Any, name: str) -> Size:
    """
    Verify a nested sequence is rectangular and non-empty.

    Args:
        data: Outer sequence of row sequences
        name: Parameter name for error messages

    Returns:
        Size (len(data), len(data[0]))

    Raises:
        ValidationError: If data or its first row is empty, or rows are not sequences
        DimensionError: If rows have differing lengths
    """
    check_sequence(data, name)
    for r, row in enumerate(data):
        check_sequence(row, f"{name}[{r}]")

    cols = len(data[0])
    ragged = [r for r, row in enumerate(data) if len(row) != cols]
    if ragged:
        r = ragged[0]
        raise DimensionError(
            f"{name}: rows must have equal length; row 0 has {cols}, "
            f"row {r} has {len(data[r])}",
            operation='construct',
            expected=cols,
            actual=len(data[r]),
        )
    return Size(len(data), cols)


def check_positive_size(size: Size, name: str) -> None:
    """
    Verify both axes of a Size are positive.

    Raises:
        ValidationError: If rows or cols is zero
    """
    if size.rows < 1 or size.cols < 1:
        raise ValidationError(f"{name}: rows and cols must be positive, got {size}")


def check_index(index: int, bound: int, name: str) -> None:
    """
    Verify 0 <= index < bound.

    Negative indices are rejected rather than wrapped.

    Raises:
        IndexOutOfRangeError: If index is outside [0, bound)
    """
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise IndexOutOfRangeError(
            f"{name}: index must be an int, got {type(index).__name__}",
            index=None,
            bound=bound,
        )
    if index < 0 or index >= bound:
        raise IndexOutOfRangeError(
            f"{name}: index {index} out of range [0, {bound})",
            index=int(index),
            bound=bound,
        )


def check_same_length(left: int, right: int, operation: str) -> None:
    """
    Verify two operand lengths agree.

    Raises:
        DimensionError: If the lengths differ
    """
    if left != right:
        raise DimensionError(
            f"{operation}: operand lengths differ ({left} vs {right})",
            operation=operation,
            expected=left,
            actual=right,
        )


def check_bounds(low: Any, high: Any, name: str) -> None:
    """
    Verify low < high for a half-open sampling interval.

    Raises:
        ValidationError: If the interval is empty
    """
    try:
        ordered = low < high
    except TypeError as e:
        raise ValidationError(f"{name}: bounds {low!r}, {high!r} are not ordered: {e}") from e
    if not ordered:
        raise ValidationError(f"{name}: empty interval [{low}, {high})")


def check_tolerance(value: Any, name: str) -> None:
    """
    Verify a tolerance is a finite, non-negative real number.

    Raises:
        ValidationError: If value is negative, non-finite or not a real number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise ValidationError(f"{name}: expected a real number, got {type(value).__name__}")
    if not np.isfinite(value) or value < 0:
        raise ValidationError(f"{name}: must be finite and >= 0, got {value}")


def check_finite(array: NDArray[Any], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )
