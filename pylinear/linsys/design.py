"""
LinearSystemDesign: validated input for the linear-system solvers.

Wraps the coefficient matrix A and right-hand side b of A x = b. Shapes are
checked once here; backends trust the design.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pylinear.containers.matrix import Matrix
from pylinear.containers.vector import Orientation, Vector
from pylinear.core.numeric import NumericKind, promote
from pylinear.linsys._elimination import check_system


@dataclass(frozen=True)
class LinearSystemDesign:
    """
    Square linear system A x = b.

    Immutable after construction: A and b are copied in, and copies are
    handed out, so a caller mutating its Matrix afterwards does not change
    the design.

    Construction:
        LinearSystemDesign.build(A, b)
    """
    _A: Matrix
    _b: Vector

    @classmethod
    def build(cls, A: Matrix | ArrayLike, b: Vector | ArrayLike) -> LinearSystemDesign:
        """
        Build a design from containers or array-likes.

        Args:
            A: Matrix, numpy array or nested sequence (n x n)
            b: Vector, numpy array or sequence of length n

        Raises:
            ValidationError: If inputs are not numeric
            DimensionError: If A is not square or len(b) != n
        """
        if isinstance(A, Matrix):
            a_mat = A.copy()
        elif isinstance(A, np.ndarray):
            a_mat = Matrix.from_numpy(A)
        else:
            a_mat = Matrix(A)

        if isinstance(b, Vector):
            b_vec = Vector._wrap(b.elements, Orientation.COL, b.kind)
        elif isinstance(b, np.ndarray):
            b_vec = Vector.from_numpy(b, Orientation.COL)
        else:
            b_vec = Vector(b, Orientation.COL)
        check_system(a_mat, b_vec)
        return cls(_A=a_mat, _b=b_vec)

    def with_kind(self, kind: NumericKind) -> LinearSystemDesign:
        """Copy of the design with every element of A and b coerced to kind."""
        a_mat = Matrix.from_elements([kind.coerce(v) for v in self._A.elements], self._A.size)
        b_vec = Vector([kind.coerce(v) for v in self._b.elements], Orientation.COL)
        return LinearSystemDesign(_A=a_mat, _b=b_vec)

    @property
    def A(self) -> Matrix:
        """Coefficient matrix (copy)."""
        return self._A.copy()

    @property
    def b(self) -> Vector:
        """Right-hand side as a column vector (copy)."""
        return Vector._wrap(self._b.elements, Orientation.COL, self._b.kind)

    @property
    def n(self) -> int:
        """Number of equations (and unknowns)."""
        return self._A.rows

    @property
    def kind(self) -> NumericKind:
        """Common element kind of A and b."""
        return promote(self._A.kind, self._b.kind)

    @property
    def max_abs(self) -> Any:
        """Largest |a_ij|, the scale for near-singular pivot checks."""
        return max(abs(e) for e in self._A.elements)

    @property
    def metadata(self) -> dict[str, Any]:
        return {'n': self.n, 'kind': self.kind.name}

    def __repr__(self) -> str:
        return f"LinearSystemDesign(n={self.n}, kind={self.kind.name})"
