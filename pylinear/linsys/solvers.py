"""
Solver dispatch for linear systems.

This module provides the solve() function (public API) and backend selection.
"""

import warnings
from typing import Literal

from numpy.typing import ArrayLike

from pylinear.containers.matrix import Matrix
from pylinear.containers.vector import Vector
from pylinear.core.exceptions import ValidationError
from pylinear.core.numeric import FLOAT
from pylinear.core.validation import check_tolerance
from pylinear.linsys.backends.lapack import LapackLUBackend
from pylinear.linsys.backends.python import PythonGaussBackend
from pylinear.linsys.design import LinearSystemDesign
from pylinear.linsys.solution import LinearSystemSolution


BackendChoice = Literal['python', 'lapack', 'auto']


def solve(
    A: Matrix | ArrayLike,
    b: Vector | ArrayLike,
    *,
    backend: BackendChoice = 'python',
    pivot_tol: float = 0.0,
    warn: bool = True,
) -> LinearSystemSolution:
    """
    Solve the square linear system A x = b.

    A singular system is not an error: the returned solution has
    is_singular == True and x is None. Call require_solution() to turn
    that into a SingularMatrixError.

    Args:
        A: Coefficient matrix (n x n): Matrix, numpy array or nested sequence
        b: Right-hand side of length n: Vector, numpy array or sequence
        backend: Computational backend to use:
            - 'python': Gaussian elimination with partial pivoting on the
              original element kind (exact for int/Fraction inputs)
            - 'lapack': LU factorisation in float64/complex128 via SciPy
            - 'auto': 'lapack' for float/complex data, 'python' otherwise
        pivot_tol: Pivot magnitudes at or below this are treated as zero.
            The default 0.0 is an exact zero test.
        warn: Emit a RuntimeWarning when a near-singular pivot was used

    Returns:
        LinearSystemSolution with x, determinant, residual and diagnostics

    Raises:
        ValidationError: If inputs are not numeric or pivot_tol is invalid
        DimensionError: If A is not square or len(b) != n

    Example:
        >>> sol = solve([[1, 3, -2], [3, 5, 6], [2, 4, 3]], [5, 7, 8])
        >>> sol.x          # ~ [-15, 8, 2]
        >>> print(sol.summary())
    """
    # === Input Validation ===
    # This is the boundary - validate here, trust everywhere else
    check_tolerance(pivot_tol, 'pivot_tol')
    design = LinearSystemDesign.build(A, b)

    # === Select Backend ===
    backend_impl = _get_backend(backend, design, pivot_tol)
    if isinstance(backend_impl, LapackLUBackend) and not design.kind.is_inexact:
        # LAPACK works in float64; the solution's own arithmetic must match
        design = design.with_kind(FLOAT)

    # === Solve ===
    result = backend_impl.solve(design)

    if warn and result.params.near_singular:
        columns = ", ".join(str(k) for k in result.params.near_singular)
        warnings.warn(
            f"Near-singular pivot(s) in column(s) {columns}; "
            f"the solution may be inaccurate.",
            RuntimeWarning,
            stacklevel=2,
        )

    return LinearSystemSolution(_result=result, _design=design)


def _get_backend(backend: str, design: LinearSystemDesign, pivot_tol: float):
    """Select backend based on preference."""
    if backend == 'python':
        return PythonGaussBackend(pivot_tol=pivot_tol)

    if backend == 'lapack':
        return LapackLUBackend(pivot_tol=pivot_tol)

    if backend == 'auto':
        if design.kind.is_inexact:
            return LapackLUBackend(pivot_tol=pivot_tol)
        return PythonGaussBackend(pivot_tol=pivot_tol)

    raise ValidationError(
        f"Unknown backend: {backend!r}. Must be 'python', 'lapack' or 'auto'."
    )
