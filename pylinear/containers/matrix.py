"""
Dense row-major matrix.

Elements live in a single flat list indexed by row * cols + col. Every
operation except set() returns a new Matrix, so matrices never share
mutable storage.
"""

from __future__ import annotations

import operator
from numbers import Number
from typing import Any, Callable, Iterator, Sequence

import numpy as np
from numpy.typing import ArrayLike, DTypeLike, NDArray

from pylinear.core.compute.random import RandomState, uniform_elements
from pylinear.core.exceptions import DimensionError, ValidationError
from pylinear.core.numeric import (
    NumericKind,
    as_kind,
    as_scalar,
    fold_extreme,
    kind_of,
    normalize,
    promote,
)
from pylinear.core.size import Shape, Size
from pylinear.core.validation import (
    check_array,
    check_index,
    check_ndim,
    check_positive_size,
    check_rectangular,
)
from pylinear.containers.vector import Orientation, Vector


class Matrix:
    """
    Dense rectangular matrix over a numeric element kind.

    Construction:
        Matrix([[1, 2, 3], [4, 5, 6]])
        Matrix.from_elements([1, 2, 3, 4, 5, 6], (2, 3))
        Matrix.from_numpy(array)
        Matrix.random(0.0, 1.0, rows=3, cols=3)
        Matrix.zeros(2, 2), Matrix.identity(3)

    Invariant: len(elements) == size.rows * size.cols, both positive.
    """

    __slots__ = ('_elements', '_size', '_kind')

    def __init__(self, data: Sequence[Sequence[Any]]):
        if isinstance(data, np.ndarray):
            data = data.tolist()
        size = check_rectangular(data, 'data')
        check_positive_size(size, 'data')
        elements, kind = normalize((v for row in data for v in row), 'data')
        self._elements: list[Any] = elements
        self._size = size
        self._kind = kind

    @classmethod
    def _wrap(cls, elements: list[Any], size: Size, kind: NumericKind) -> Matrix:
        """Adopt already-validated row-major storage without copying."""
        obj = cls.__new__(cls)
        obj._elements = elements
        obj._size = size
        obj._kind = kind
        return obj

    # --- Alternative constructors ---

    @classmethod
    def from_elements(cls, elements: Sequence[Any], size: Size | tuple[int, int]) -> Matrix:
        """
        Build from a flat row-major sequence and an explicit size.

        Raises:
            DimensionError: If len(elements) != rows * cols
        """
        size = Size.of(size)
        check_positive_size(size, 'size')
        if len(elements) != size.order:
            raise DimensionError(
                f"from_elements: {len(elements)} elements cannot fill a {size} matrix",
                operation='from_elements',
                expected=size.order,
                actual=len(elements),
            )
        values, kind = normalize(elements, 'elements')
        return cls._wrap(values, size, kind)

    @classmethod
    def from_numpy(cls, array: ArrayLike) -> Matrix:
        """
        Build from a 2D numpy array (1D arrays become a single column).

        Raises:
            ValidationError: If the array is not numeric
            DimensionError: If the array is not 1D or 2D
        """
        arr = check_array(array, 'array')
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        check_ndim(arr, 2, 'array')
        return cls(arr.tolist())

    @classmethod
    def random(
        cls,
        low: Any,
        high: Any,
        rows: int,
        cols: int,
        *,
        rng: RandomState = None,
    ) -> Matrix:
        """Matrix of independent uniform samples from [low, high)."""
        size = Size(rows, cols)
        check_positive_size(size, 'random')
        values, kind = normalize(uniform_elements(low, high, size.order, rng), 'random')
        return cls._wrap(values, size, kind)

    @classmethod
    def zeros(cls, rows: int, cols: int, kind: NumericKind | type = float) -> Matrix:
        size = Size(rows, cols)
        check_positive_size(size, 'zeros')
        kind = as_kind(kind)
        return cls._wrap([kind.zero()] * size.order, size, kind)

    @classmethod
    def identity(cls, n: int, kind: NumericKind | type = float) -> Matrix:
        m = cls.zeros(n, n, kind)
        one = m._kind.one()
        for i in range(n):
            m._elements[i * n + i] = one
        return m

    @classmethod
    def range(cls, left: int, right: int) -> Matrix:
        """Column matrix [left, left + 1, ..., right] as floats, both ends included."""
        if right < left:
            raise ValidationError(f"range: right ({right}) must be >= left ({left})")
        values = [float(i) for i in range(left, right + 1)]
        return cls._wrap(values, Size(len(values), 1), NumericKind(float))

    # --- Accessors ---

    @property
    def size(self) -> Size:
        return self._size

    @property
    def shape(self) -> Shape:
        return self._size.to_shape()

    @property
    def rows(self) -> int:
        return self._size.rows

    @property
    def cols(self) -> int:
        return self._size.cols

    @property
    def kind(self) -> NumericKind:
        return self._kind

    @property
    def elements(self) -> tuple[Any, ...]:
        """Row-major elements (copy)."""
        return tuple(self._elements)

    def get(self, row: int, col: int) -> Any:
        return self._elements[self._index(row, col)]

    def set(self, row: int, col: int, value: Any) -> None:
        """Overwrite one element in place; the element kind is re-promoted if needed."""
        index = self._index(row, col)
        value = as_scalar(value, 'value')
        kind = promote(self._kind, kind_of(value))
        if kind != self._kind:
            self._elements = [kind.coerce(v) for v in self._elements]
            self._kind = kind
        self._elements[index] = kind.coerce(value)

    def get_row(self, row: int) -> list[Any]:
        check_index(row, self.rows, 'row')
        start = row * self.cols
        return self._elements[start:start + self.cols]

    def get_column(self, col: int) -> list[Any]:
        check_index(col, self.cols, 'col')
        return self._elements[col::self.cols]

    def _index(self, row: int, col: int) -> int:
        check_index(row, self.rows, 'row')
        check_index(col, self.cols, 'col')
        return row * self.cols + col

    # --- Algebra ---

    def transpose(self) -> Matrix:
        rows, cols = self.rows, self.cols
        src = self._elements
        out = [src[i * cols + j] for j in range(cols) for i in range(rows)]
        return Matrix._wrap(out, self._size.transposed(), self._kind)

    def product(self, other: Matrix) -> Matrix:
        """
        Matrix product self @ other.

        Raises:
            DimensionError: If self.cols != other.rows
        """
        if not isinstance(other, Matrix):
            raise ValidationError(f"product: expected Matrix, got {type(other).__name__}")
        if self.cols != other.rows:
            raise DimensionError(
                f"product: inner dimensions differ ({self._size} @ {other._size})",
                operation='product',
                expected=self.cols,
                actual=other.rows,
            )

        kind = promote(self._kind, other._kind)
        n, m, p = self.rows, self.cols, other.cols
        a, b = self._elements, other._elements
        out = []
        for i in range(n):
            row = a[i * m:(i + 1) * m]
            for j in range(p):
                acc = kind.zero()
                for k in range(m):
                    acc += row[k] * b[k * p + j]
                out.append(acc)
        return Matrix._wrap(out, Size(n, p), kind)

    def vector_product(self, vector: Vector) -> Vector:
        """
        Matrix-vector product; the result is a column vector of length rows.

        Raises:
            DimensionError: If self.cols != len(vector)
        """
        if not isinstance(vector, Vector):
            raise ValidationError(
                f"vector_product: expected Vector, got {type(vector).__name__}"
            )
        if self.cols != vector.size:
            raise DimensionError(
                f"vector_product: matrix has {self.cols} columns, vector has {vector.size} elements",
                operation='vector_product',
                expected=self.cols,
                actual=vector.size,
            )

        kind = promote(self._kind, vector.kind)
        m = self.cols
        v = vector.elements
        out = []
        for i in range(self.rows):
            acc = kind.zero()
            for k, a in enumerate(self._elements[i * m:(i + 1) * m]):
                acc += a * v[k]
            out.append(acc)
        return Vector._wrap(out, Orientation.COL, kind)

    def add(self, other: Matrix) -> Matrix:
        """
        Elementwise sum.

        Raises:
            DimensionError: If the operands have different element counts
        """
        return self._combine(other, None, 'add')

    def subtract(self, other: Matrix) -> Matrix:
        """Elementwise difference, computed as self + (-1) * other."""
        if not isinstance(other, Matrix):
            raise ValidationError(f"subtract: expected Matrix, got {type(other).__name__}")
        return self._combine(other, other._kind.minus_one(), 'subtract')

    def _combine(self, other: Matrix, coefficient: Any, operation: str) -> Matrix:
        if not isinstance(other, Matrix):
            raise ValidationError(f"{operation}: expected Matrix, got {type(other).__name__}")
        if self._size.order != other._size.order:
            raise DimensionError(
                f"{operation}: element counts differ ({self._size} vs {other._size})",
                operation=operation,
                expected=self._size.order,
                actual=other._size.order,
            )
        kind = promote(self._kind, other._kind)
        if coefficient is None:
            out = [a + b for a, b in zip(self._elements, other._elements)]
        else:
            out = [a + coefficient * b for a, b in zip(self._elements, other._elements)]
        return Matrix._wrap(out, self._size, kind)

    def scalar(self, value: Any) -> Matrix:
        """Multiply every element by value."""
        return self._map(value, operator.mul)

    def shift(self, value: Any) -> Matrix:
        """Add value to every element."""
        return self._map(value, operator.add)

    def _map(self, value: Any, f: Callable[[Any, Any], Any]) -> Matrix:
        value = as_scalar(value, 'value')
        kind = promote(self._kind, kind_of(value))
        return Matrix._wrap([f(e, value) for e in self._elements], self._size, kind)

    # --- Reductions ---

    def sum(self) -> Any:
        acc = self._kind.zero()
        for e in self._elements:
            acc += e
        return acc

    def mean(self) -> Any:
        """Sum divided by the element count (true division, so int data gives a float)."""
        return self.sum() / self._kind.from_count(self._size.order)

    def max(self) -> Any:
        return fold_extreme(self._elements, self._kind, largest=True)

    def min(self) -> Any:
        return fold_extreme(self._elements, self._kind, largest=False)

    def equals(self, other: Matrix, tol: float = 0.0) -> bool:
        """
        Elementwise comparison.

        Returns False when element counts differ. With tol == 0 (default)
        elements must compare exactly equal; otherwise |a - b| <= tol.
        """
        if not isinstance(other, Matrix) or self._size.order != other._size.order:
            return False
        if tol == 0:
            return all(a == b for a, b in zip(self._elements, other._elements))
        return all(abs(a - b) <= tol for a, b in zip(self._elements, other._elements))

    # --- Conversion ---

    def copy(self) -> Matrix:
        return Matrix._wrap(list(self._elements), self._size, self._kind)

    def to_list(self) -> list[list[Any]]:
        c = self.cols
        return [self._elements[r * c:(r + 1) * c] for r in range(self.rows)]

    def to_numpy(self, dtype: DTypeLike | None = None) -> NDArray[Any]:
        return np.array(self.to_list(), dtype=dtype)

    # --- Operators ---

    def __matmul__(self, other: Any) -> Any:
        if isinstance(other, Matrix):
            return self.product(other)
        if isinstance(other, Vector):
            return self.vector_product(other)
        return NotImplemented

    def __add__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.add(other)
        if not isinstance(other, Number):
            return NotImplemented
        return self.shift(other)

    __radd__ = __add__

    def __sub__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.subtract(other)
        if not isinstance(other, Number):
            return NotImplemented
        return self.shift(-as_scalar(other, 'value'))

    def __mul__(self, other: Any) -> Matrix:
        if not isinstance(other, Number):
            return NotImplemented
        return self.scalar(other)

    __rmul__ = __mul__

    def __neg__(self) -> Matrix:
        return self.scalar(self._kind.minus_one())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __len__(self) -> int:
        return self.rows

    def __iter__(self) -> Iterator[list[Any]]:
        for r in range(self.rows):
            yield self.get_row(r)

    def __repr__(self) -> str:
        return f"Matrix({self._size}, {self._kind.name}, {self.to_list()!r})"
