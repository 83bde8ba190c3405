"""
Dense vector with row/column orientation.

Orientation decides whether the vector acts as 1 x n or n x 1 in products;
storage is the same flat list either way.
"""

from __future__ import annotations

import operator
from enum import Enum
from numbers import Number
from typing import TYPE_CHECKING, Any, Callable, Iterator, Sequence

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pylinear.core.compute.random import RandomState, uniform_elements
from pylinear.core.exceptions import DimensionError, ValidationError
from pylinear.core.numeric import NumericKind, as_scalar, kind_of, normalize, promote
from pylinear.core.size import Size
from pylinear.core.validation import (
    check_array,
    check_index,
    check_same_length,
    check_sequence,
)

if TYPE_CHECKING:
    from pylinear.containers.matrix import Matrix


class Orientation(Enum):
    """Whether a vector is read as a row (1 x n) or a column (n x 1)."""
    ROW = 'row'
    COL = 'col'

    def flipped(self) -> Orientation:
        return Orientation.COL if self is Orientation.ROW else Orientation.ROW


def _as_orientation(value: Orientation | str) -> Orientation:
    try:
        return Orientation(value)
    except ValueError as e:
        raise ValidationError(
            f"orientation: expected 'row' or 'col', got {value!r}"
        ) from e


class Vector:
    """
    One-dimensional numeric storage with an orientation tag.

    dot() ignores orientation; the @ operator honours it (row @ col is a
    dot product, col @ row an outer product).
    """

    __slots__ = ('_elements', '_orientation', '_kind')

    def __init__(
        self,
        elements: Sequence[Any],
        orientation: Orientation | str = Orientation.COL,
    ):
        if isinstance(elements, np.ndarray):
            elements = elements.tolist()
        check_sequence(elements, 'elements')
        values, kind = normalize(elements, 'elements')
        self._elements: list[Any] = values
        self._orientation = _as_orientation(orientation)
        self._kind = kind

    @classmethod
    def _wrap(cls, elements: list[Any], orientation: Orientation, kind: NumericKind) -> Vector:
        obj = cls.__new__(cls)
        obj._elements = elements
        obj._orientation = orientation
        obj._kind = kind
        return obj

    @classmethod
    def random(
        cls,
        low: Any,
        high: Any,
        size: int,
        orientation: Orientation | str = Orientation.COL,
        *,
        rng: RandomState = None,
    ) -> Vector:
        """Vector of independent uniform samples from [low, high)."""
        if size < 1:
            raise ValidationError(f"random: size must be positive, got {size}")
        return cls(uniform_elements(low, high, size, rng), orientation)

    @classmethod
    def from_numpy(
        cls,
        array: ArrayLike,
        orientation: Orientation | str | None = None,
    ) -> Vector:
        """
        Build from a 1D array, or a 2D array with a single row or column.

        Without an explicit orientation, 1D and (n, 1) arrays become column
        vectors and (1, n) arrays row vectors.

        Raises:
            DimensionError: If the array is not vector-shaped
        """
        arr = check_array(array, 'array')
        if arr.ndim == 2 and 1 in arr.shape:
            inferred = Orientation.ROW if arr.shape[0] == 1 and arr.shape[1] != 1 else Orientation.COL
            arr = arr.ravel()
        elif arr.ndim == 1:
            inferred = Orientation.COL
        else:
            raise DimensionError(
                f"array: expected 1D or single row/column 2D array, got shape {arr.shape}",
                operation='from_numpy',
                actual=arr.shape,
            )
        return cls(arr.tolist(), orientation if orientation is not None else inferred)

    # --- Accessors ---

    @property
    def size(self) -> int:
        return len(self._elements)

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @property
    def kind(self) -> NumericKind:
        return self._kind

    @property
    def elements(self) -> list[Any]:
        """Elements (copy)."""
        return list(self._elements)

    def get(self, index: int) -> Any:
        check_index(index, self.size, 'index')
        return self._elements[index]

    def transpose(self) -> Vector:
        """Flip orientation in place; returns self."""
        self._orientation = self._orientation.flipped()
        return self

    def as_matrix(self) -> Matrix:
        """1 x n matrix for a row vector, n x 1 for a column vector."""
        from pylinear.containers.matrix import Matrix

        n = self.size
        size = Size(1, n) if self._orientation is Orientation.ROW else Size(n, 1)
        return Matrix._wrap(list(self._elements), size, self._kind)

    # --- Algebra ---

    def dot(self, other: Vector) -> Any:
        """
        Inner product, defined for any two equal-length vectors.

        Raises:
            DimensionError: If lengths differ
        """
        if not isinstance(other, Vector):
            raise ValidationError(f"dot: expected Vector, got {type(other).__name__}")
        check_same_length(self.size, other.size, 'dot')

        acc = promote(self._kind, other._kind).zero()
        for a, b in zip(self._elements, other._elements):
            acc += a * b
        return acc

    def outer(self, other: Vector) -> Matrix:
        """len(self) x len(other) matrix with cell [r, c] = self[r] * other[c]."""
        from pylinear.containers.matrix import Matrix

        if not isinstance(other, Vector):
            raise ValidationError(f"outer: expected Vector, got {type(other).__name__}")
        kind = promote(self._kind, other._kind)
        cells = [a * b for a in self._elements for b in other._elements]
        return Matrix._wrap(cells, Size(self.size, other.size), kind)

    def map(self, value: Any, f: Callable[[Any, Any], Any]) -> list[Any]:
        """Return [f(value, e) for each element]; self is not modified."""
        return [f(value, e) for e in self._elements]

    def mul(self, value: Any) -> None:
        """Multiply every element by value, in place."""
        self._apply(value, operator.mul)

    def add(self, value: Any) -> None:
        """Add value to every element, in place."""
        self._apply(value, operator.add)

    def _apply(self, value: Any, f: Callable[[Any, Any], Any]) -> None:
        value = as_scalar(value, 'value')
        kind = promote(self._kind, kind_of(value))
        self._elements = self.map(value, f)
        self._kind = kind

    def _mapped(self, value: Any, f: Callable[[Any, Any], Any]) -> Vector:
        value = as_scalar(value, 'value')
        kind = promote(self._kind, kind_of(value))
        return Vector._wrap(self.map(value, f), self._orientation, kind)

    def equals(self, other: Vector, tol: float = 0.0) -> bool:
        """
        Elementwise comparison; orientation is not compared.

        Returns False when lengths differ. With tol == 0 (default) elements
        must compare exactly equal; otherwise |a - b| <= tol.
        """
        if not isinstance(other, Vector) or self.size != other.size:
            return False
        if tol == 0:
            return all(a == b for a, b in zip(self._elements, other._elements))
        return all(abs(a - b) <= tol for a, b in zip(self._elements, other._elements))

    def to_numpy(self, dtype: DTypeLike | None = None) -> NDArray[Any]:
        return np.array(self._elements, dtype=dtype)

    # --- Operators ---

    def __matmul__(self, other: Any) -> Any:
        from pylinear.containers.matrix import Matrix

        if isinstance(other, Vector):
            if self._orientation is Orientation.ROW and other._orientation is Orientation.COL:
                return self.dot(other)
            if self._orientation is Orientation.COL and other._orientation is Orientation.ROW:
                return self.outer(other)
            raise DimensionError(
                f"@: cannot multiply {self._orientation.value} vector by "
                f"{other._orientation.value} vector",
                operation='matmul',
                expected=self._orientation.flipped(),
                actual=other._orientation,
            )
        if isinstance(other, Matrix):
            if self._orientation is not Orientation.ROW:
                raise DimensionError(
                    "@: only a row vector can left-multiply a matrix",
                    operation='matmul',
                    expected=Orientation.ROW,
                    actual=self._orientation,
                )
            result = other.transpose().vector_product(self)
            return result.transpose()
        return NotImplemented

    def __mul__(self, other: Any) -> Vector:
        if not isinstance(other, Number):
            return NotImplemented
        return self._mapped(other, operator.mul)

    __rmul__ = __mul__

    def __add__(self, other: Any) -> Vector:
        if not isinstance(other, Number):
            return NotImplemented
        return self._mapped(other, operator.add)

    __radd__ = __add__

    def __neg__(self) -> Vector:
        return self._mapped(self._kind.minus_one(), operator.mul)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._elements))

    def __getitem__(self, index: int) -> Any:
        return self.get(index)

    def __repr__(self) -> str:
        return f"Vector({self._elements!r}, {self._orientation.value}, {self._kind.name})"
