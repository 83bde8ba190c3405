"""
Size and shape descriptors.

Size is the (rows, cols) pair every Matrix carries. Shape is the older
three-axis descriptor (x, y, z) kept for 1D/2D/3D data; its Dimension is
derived from which axes are populated.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from pylinear.core.exceptions import ValidationError


@dataclass(frozen=True)
class Size:
    """
    Immutable (rows, cols) pair.

    Counts must be non-negative integers; containers additionally require
    both to be positive (see check_positive_size).
    """
    rows: int
    cols: int

    def __post_init__(self) -> None:
        for label, value in (('rows', self.rows), ('cols', self.cols)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(
                    f"Size.{label}: expected int, got {type(value).__name__}"
                )
            if value < 0:
                raise ValidationError(f"Size.{label}: must be >= 0, got {value}")

    @classmethod
    def of(cls, value: Size | tuple[int, int]) -> Size:
        """Accept either a Size or a (rows, cols) tuple."""
        if isinstance(value, Size):
            return value
        try:
            rows, cols = value
        except (TypeError, ValueError) as e:
            raise ValidationError(f"size: expected (rows, cols), got {value!r}") from e
        return cls(rows, cols)

    @property
    def order(self) -> int:
        """Number of elements, rows * cols."""
        return self.rows * self.cols

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def transposed(self) -> Size:
        return Size(self.cols, self.rows)

    def with_rows(self, rows: int) -> Size:
        return replace(self, rows=rows)

    def with_cols(self, cols: int) -> Size:
        return replace(self, cols=cols)

    def to_shape(self) -> Shape:
        return Shape(self.rows, self.cols, 0)

    def __iter__(self):
        yield self.rows
        yield self.cols

    def __str__(self) -> str:
        return f"{self.rows}x{self.cols}"


class Dimension(Enum):
    """Number of populated axes of a Shape."""
    ONE_DIM = 1
    TWO_DIM = 2
    THREE_DIM = 3


@dataclass(frozen=True)
class Shape:
    """Three-axis shape; unused trailing axes are 0."""
    x: int
    y: int = 0
    z: int = 0

    @property
    def dimension(self) -> Dimension:
        if self.z > 0:
            return Dimension.THREE_DIM
        if self.y > 1:
            return Dimension.TWO_DIM
        return Dimension.ONE_DIM

    def to_size(self) -> Size:
        """
        Collapse to a (rows, cols) Size.

        Raises:
            ValidationError: For three-dimensional shapes
        """
        if self.dimension is Dimension.THREE_DIM:
            raise ValidationError(f"cannot express 3D shape {self} as a matrix size")
        return Size(self.x, max(self.y, 1))

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"
