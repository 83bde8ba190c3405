"""
Gaussian elimination with partial pivoting.

The kernel works on a plain nested-list copy of the augmented system
[A | b] so that row swaps are O(1) and the caller's Matrix and Vector are
never touched. Three steps, each usable on its own so backends can time
them separately:

    augment           -> n x (n + 1) working rows
    forward_eliminate -> row-echelon form, pivots, permutation
    back_substitute   -> solution list

Singularity is reported as an absent solution, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pylinear.containers.matrix import Matrix
from pylinear.containers.vector import Orientation, Vector
from pylinear.core.exceptions import DimensionError, ValidationError
from pylinear.core.numeric import promote
from pylinear.core.validation import check_same_length, check_tolerance


@dataclass
class ForwardPass:
    """Outcome of forward elimination on a working matrix."""
    pivots: list[Any] = field(default_factory=list)
    permutation: list[int] = field(default_factory=list)
    n_swaps: int = 0
    singular_column: int | None = None
    near_singular: list[int] = field(default_factory=list)

    @property
    def singular(self) -> bool:
        return self.singular_column is not None


@dataclass(frozen=True)
class EliminationOutcome:
    """
    Everything elimination produced for one system.

    Attributes:
        solution: Column vector x with A x = b, or None for a singular system
        echelon: Working matrix [U | c] at termination (row-echelon form
            when the system is non-singular)
        pivots: Pivot values in elimination order (stops at a zero pivot)
        permutation: permutation[k] is the original row now in position k
        n_swaps: Number of row exchanges performed
        singular_column: Column whose pivot was zero, or None
        near_singular: Columns whose pivot was tiny relative to max|A|
    """
    solution: Vector | None
    echelon: Matrix
    pivots: tuple[Any, ...]
    permutation: tuple[int, ...]
    n_swaps: int
    singular_column: int | None
    near_singular: tuple[int, ...]


def check_system(a: Matrix, b: Vector) -> None:
    """
    Verify (a, b) is a square system with matching right-hand side.

    Raises:
        ValidationError: If the operands are not a Matrix and a Vector
        DimensionError: If a is not square or len(b) != a.rows
    """
    if not isinstance(a, Matrix):
        raise ValidationError(f"A: expected Matrix, got {type(a).__name__}")
    if not isinstance(b, Vector):
        raise ValidationError(f"b: expected Vector, got {type(b).__name__}")
    if not a.size.is_square:
        raise DimensionError(
            f"A: coefficient matrix must be square, got {a.size}",
            operation='solve',
            expected=(a.rows, a.rows),
            actual=(a.rows, a.cols),
        )
    check_same_length(a.rows, b.size, 'solve')


def augment(a: Matrix, b: Vector) -> list[list[Any]]:
    """Working copy [A | b] as independent row lists, coerced to the common kind."""
    kind = promote(a.kind, b.kind)
    return [
        [kind.coerce(v) for v in a.get_row(r)] + [kind.coerce(b.get(r))]
        for r in range(a.rows)
    ]


def forward_eliminate(
    rows: list[list[Any]],
    zero: Any,
    *,
    pivot_tol: float = 0.0,
    near_tol: float | None = None,
) -> ForwardPass:
    """
    Reduce the augmented rows to row-echelon form in place.

    For each column k the row with the largest |rows[i][k]|, i >= k, is
    chosen as pivot (the first one on ties). Elimination stops as soon as
    that largest magnitude is <= pivot_tol; with the default 0.0 this is an
    exact zero test.

    Args:
        rows: n working rows of length n + 1, modified in place
        zero: Additive identity used to clear eliminated entries
        pivot_tol: Pivots at or below this magnitude mean "singular"
        near_tol: Pivots at or below this magnitude are recorded as
            near-singular (None disables the check)
    """
    n = len(rows)
    state = ForwardPass(permutation=list(range(n)))

    for k in range(n):
        i_max = k
        best = abs(rows[k][k])
        for i in range(k + 1, n):
            candidate = abs(rows[i][k])
            if candidate > best:
                i_max, best = i, candidate

        if best <= pivot_tol:
            state.singular_column = k
            return state
        if near_tol is not None and best <= near_tol:
            state.near_singular.append(k)

        if i_max != k:
            rows[k], rows[i_max] = rows[i_max], rows[k]
            perm = state.permutation
            perm[k], perm[i_max] = perm[i_max], perm[k]
            state.n_swaps += 1

        pivot_row = rows[k]
        pivot = pivot_row[k]
        state.pivots.append(pivot)

        for i in range(k + 1, n):
            row = rows[i]
            factor = row[k] / pivot
            for j in range(k + 1, n + 1):
                row[j] -= pivot_row[j] * factor
            # exact zero instead of the rounded difference
            row[k] = zero

    return state


def back_substitute(rows: list[list[Any]]) -> list[Any]:
    """Solve the upper-triangular augmented system from the last row up."""
    n = len(rows)
    x: list[Any] = [None] * n
    for i in range(n - 1, -1, -1):
        acc = rows[i][n]
        for j in range(i + 1, n):
            acc -= rows[i][j] * x[j]
        x[i] = acc / rows[i][i]
    return x


def eliminate(
    a: Matrix,
    b: Vector,
    *,
    pivot_tol: float = 0.0,
    near_tol: float | None = None,
) -> EliminationOutcome:
    """
    Run augment, forward elimination and back substitution on (a, b).

    Raises:
        DimensionError: If a is not square or len(b) != a.rows
    """
    check_system(a, b)
    check_tolerance(pivot_tol, 'pivot_tol')

    rows = augment(a, b)
    zero = promote(a.kind, b.kind).zero()
    state = forward_eliminate(rows, zero, pivot_tol=pivot_tol, near_tol=near_tol)
    solution = None if state.singular else Vector(back_substitute(rows), Orientation.COL)
    return outcome_from(rows, state, solution)


def outcome_from(
    rows: list[list[Any]],
    state: ForwardPass,
    solution: Vector | None,
) -> EliminationOutcome:
    return EliminationOutcome(
        solution=solution,
        echelon=Matrix(rows),
        pivots=tuple(state.pivots),
        permutation=tuple(state.permutation),
        n_swaps=state.n_swaps,
        singular_column=state.singular_column,
        near_singular=tuple(state.near_singular),
    )


def gaussian_elimination(a: Matrix, b: Vector, *, pivot_tol: float = 0.0) -> Vector | None:
    """
    Solve a x = b by Gaussian elimination with partial pivoting.

    Args:
        a: Square coefficient matrix (n x n)
        b: Right-hand side of length n (orientation ignored)
        pivot_tol: Pivot magnitudes at or below this value are treated as
            zero. The default 0.0 keeps the exact zero-pivot test.

    Returns:
        Column vector x, or None when a zero pivot is met (singular system)

    Raises:
        DimensionError: If a is not square or len(b) != a.rows

    Example:
        >>> A = Matrix([[1, 3, -2], [3, 5, 6], [2, 4, 3]])
        >>> b = Vector([5, 7, 8])
        >>> gaussian_elimination(A, b)   # ~ [-15, 8, 2]
    """
    return eliminate(a, b, pivot_tol=pivot_tol).solution
