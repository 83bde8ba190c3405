"""
Linear-system solution types.

Contains the parameter payload produced by backends and the user-facing
solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from pylinear.containers.matrix import Matrix
from pylinear.containers.vector import Vector
from pylinear.core.compute.tolerances import ToleranceTier, select_tolerance
from pylinear.core.exceptions import SingularMatrixError
from pylinear.core.result import Result

if TYPE_CHECKING:
    from pylinear.linsys.design import LinearSystemDesign


@dataclass(frozen=True)
class GaussianParams:
    """
    Parameter payload for a direct solve.

    This is the immutable data computed by backends. solution is None for
    a singular system.
    """
    solution: Vector | None
    echelon: Matrix
    pivots: tuple[Any, ...]
    permutation: tuple[int, ...]
    n_swaps: int
    singular_column: int | None
    near_singular: tuple[int, ...] = ()


@dataclass
class LinearSystemSolution:
    """
    User-facing result of solving A x = b.

    Wraps the backend Result and adds derived quantities (determinant,
    residual) and a plain-text summary.
    """
    _result: Result[GaussianParams]
    _design: 'LinearSystemDesign'

    # --- Solution ---

    @property
    def x(self) -> Vector | None:
        """Solution column vector, or None if the system is singular."""
        return self._result.params.solution

    @property
    def is_singular(self) -> bool:
        return self._result.params.solution is None

    def require_solution(self) -> Vector:
        """
        Return x, raising for singular systems.

        Raises:
            SingularMatrixError: If elimination met a zero pivot
        """
        params = self._result.params
        if params.solution is None:
            column = params.singular_column
            raise SingularMatrixError(
                f"A is singular: no usable pivot in column {column}",
                column=column,
                pivot=params.echelon.get(column, column) if column is not None else None,
            )
        return params.solution

    # --- Elimination diagnostics ---

    @property
    def pivots(self) -> tuple[Any, ...]:
        return self._result.params.pivots

    @property
    def permutation(self) -> tuple[int, ...]:
        return self._result.params.permutation

    @property
    def n_swaps(self) -> int:
        return self._result.params.n_swaps

    @property
    def echelon(self) -> Matrix:
        """Augmented working matrix [U | c] when elimination stopped."""
        return self._result.params.echelon

    @property
    def near_singular_columns(self) -> tuple[int, ...]:
        return self._result.params.near_singular

    @property
    def determinant(self) -> Any:
        """
        det(A) from the pivots: (-1)^swaps * prod(pivots).

        Zero for a singular system.
        """
        kind = self._design.kind
        if self.is_singular:
            return kind.zero()
        det = kind.one()
        for p in self.pivots:
            det *= p
        return -det if self.n_swaps % 2 else det

    # --- Verification ---

    def residual(self) -> Vector | None:
        """b - A x, or None for a singular system."""
        if self.x is None:
            return None
        ax = self._design.A @ self.x
        return Vector([want - got for want, got in zip(self._design.b, ax)])

    @property
    def residual_norm(self) -> Any:
        """max |b - A x|, or None for a singular system."""
        r = self.residual()
        if r is None:
            return None
        return max(abs(e) for e in r)

    def verify(self, tolerance: ToleranceTier | None = None) -> bool:
        """
        Whether A x reproduces b elementwise within tolerance.

        Args:
            tolerance: Comparison tier. Defaults to select_tolerance() of
                the solution's element kind: EXACT for Fraction results,
                CPU_FP64 for float, complex and Decimal results.
        """
        if self.x is None:
            return False
        if tolerance is None:
            tolerance = select_tolerance(self.x.kind)
        b = self._design.b
        ax = self._design.A @ self.x
        return all(abs(got - want) <= tolerance.bound(want) for got, want in zip(ax, b))

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Plain-text report of the solve."""
        design = self._design
        lines = [
            "Linear system A x = b",
            f"  n = {design.n}, element kind = {design.kind.name}",
            f"  backend = {self.backend_name}, row swaps = {self.n_swaps}",
            "",
        ]

        if self.is_singular:
            lines.append(
                f"No solution: zero pivot in column {self._result.params.singular_column}"
            )
        else:
            width = len(f"x[{design.n - 1}]")
            for i, value in enumerate(self.x):
                lines.append(f"  {f'x[{i}]':<{width}}  {value!r}")
            lines.append("")
            lines.append(f"  determinant   = {self.determinant!r}")
            lines.append(f"  max |b - A x| = {self.residual_norm!r}")

        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            lines.extend(f"  {w}" for w in self.warnings)

        return "\n".join(lines)

    def __repr__(self) -> str:
        state = 'singular' if self.is_singular else f"x={self.x.elements!r}"
        return f"LinearSystemSolution(n={self._design.n}, {state})"
