"""
Tests for input validation utilities.

Validates every function in core/validation.py.
"""

import math

import numpy as np
import pytest

from pylinear.core.exceptions import DimensionError, IndexOutOfRangeError, ValidationError
from pylinear.core.size import Size
from pylinear.core.validation import (
    check_array,
    check_bounds,
    check_finite,
    check_index,
    check_ndim,
    check_positive_size,
    check_rectangular,
    check_same_length,
    check_sequence,
    check_tolerance,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to ndarray and rejects non-numeric data."""

    def test_list_to_array(self):
        result = check_array([1.0, 2.0, 3.0], "X")
        assert isinstance(result, np.ndarray)
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_int_dtype_kept(self):
        result = check_array(np.array([1, 2, 3], dtype=np.int64), "X")
        assert np.issubdtype(result.dtype, np.integer)

    def test_object_dtype_rejected(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array(np.array([1, "a", None], dtype=object), "X")

    def test_string_dtype_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(np.array(["a", "b"]), "X")

    def test_bool_dtype_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(np.array([True, False]), "X")

    def test_ragged_rejected(self):
        with pytest.raises(ValidationError):
            check_array([[1.0, 2.0], [3.0]], "X")


# ═══════════════════════════════════════════════════════════════════════
# Shape checks
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNdim:

    def test_correct_ndim_passes(self):
        check_ndim(np.zeros((2, 2)), 2, "X")

    def test_wrong_ndim_raises(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            check_ndim(np.zeros(3), 2, "X")


class TestCheckSequence:

    def test_list_passes(self):
        check_sequence([1, 2], "x")

    def test_tuple_passes(self):
        check_sequence((1, 2), "x")

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="must not be empty"):
            check_sequence([], "x")

    def test_string_rejected(self):
        with pytest.raises(ValidationError, match="expected a sequence"):
            check_sequence("abc", "x")

    def test_scalar_rejected(self):
        with pytest.raises(ValidationError, match="expected a sequence"):
            check_sequence(3.0, "x")


class TestCheckRectangular:

    def test_returns_size(self):
        assert check_rectangular([[1, 2, 3], [4, 5, 6]], "data") == Size(2, 3)

    def test_ragged_rows_raise_dimension_error(self):
        with pytest.raises(DimensionError, match="row 1 has 2") as exc:
            check_rectangular([[1, 2, 3], [4, 5]], "data")
        assert exc.value.expected == 3
        assert exc.value.actual == 2

    def test_empty_outer_rejected(self):
        with pytest.raises(ValidationError):
            check_rectangular([], "data")

    def test_empty_row_rejected(self):
        with pytest.raises(ValidationError, match=r"data\[0\]"):
            check_rectangular([[]], "data")

    def test_non_sequence_row_rejected(self):
        with pytest.raises(ValidationError):
            check_rectangular([1, 2, 3], "data")


class TestCheckPositiveSize:

    def test_positive_passes(self):
        check_positive_size(Size(1, 1), "m")

    @pytest.mark.parametrize("size", [Size(0, 3), Size(3, 0)])
    def test_zero_axis_rejected(self, size):
        with pytest.raises(ValidationError, match="positive"):
            check_positive_size(size, "m")


# ═══════════════════════════════════════════════════════════════════════
# Index and length checks
# ═══════════════════════════════════════════════════════════════════════


class TestCheckIndex:

    def test_in_range_passes(self):
        check_index(0, 3, "row")
        check_index(2, 3, "row")

    def test_numpy_int_passes(self):
        check_index(np.int64(1), 3, "row")

    def test_upper_bound_exclusive(self):
        with pytest.raises(IndexOutOfRangeError) as exc:
            check_index(3, 3, "row")
        assert exc.value.index == 3
        assert exc.value.bound == 3

    def test_negative_rejected(self):
        with pytest.raises(IndexOutOfRangeError, match="out of range"):
            check_index(-1, 3, "row")

    def test_float_rejected(self):
        with pytest.raises(IndexOutOfRangeError, match="must be an int"):
            check_index(1.0, 3, "row")

    def test_bool_rejected(self):
        with pytest.raises(IndexOutOfRangeError):
            check_index(True, 3, "row")


class TestCheckSameLength:

    def test_equal_passes(self):
        check_same_length(4, 4, "dot")

    def test_unequal_raises(self):
        with pytest.raises(DimensionError, match="dot") as exc:
            check_same_length(4, 3, "dot")
        assert exc.value.operation == "dot"


# ═══════════════════════════════════════════════════════════════════════
# Scalar checks
# ═══════════════════════════════════════════════════════════════════════


class TestCheckBounds:

    def test_ordered_passes(self):
        check_bounds(0, 10, "random")

    def test_equal_bounds_rejected(self):
        with pytest.raises(ValidationError, match="empty interval"):
            check_bounds(1.0, 1.0, "random")

    def test_unordered_types_rejected(self):
        with pytest.raises(ValidationError, match="not ordered"):
            check_bounds(1j, 2j, "random")


class TestCheckTolerance:

    @pytest.mark.parametrize("value", [0, 0.0, 1e-12, np.float64(1e-6)])
    def test_valid_passes(self, value):
        check_tolerance(value, "tol")

    @pytest.mark.parametrize("value", [-1e-9, math.inf, math.nan])
    def test_invalid_rejected(self, value):
        with pytest.raises(ValidationError, match="finite and >= 0"):
            check_tolerance(value, "tol")

    def test_non_number_rejected(self):
        with pytest.raises(ValidationError, match="real number"):
            check_tolerance("0.1", "tol")


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "A")

    def test_nan_and_inf_counted(self):
        with pytest.raises(ValidationError, match=r"1 NaN, 1 Inf"):
            check_finite(np.array([np.nan, np.inf, 1.0]), "A")
