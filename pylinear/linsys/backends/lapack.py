"""
LAPACK backend via scipy.linalg.lu_factor.

getrf performs the same partial-pivoting elimination as the Python
kernel (largest magnitude in the column, first one on ties), so pivots,
permutation and singularity agree with PythonGaussBackend up to rounding.
Elements are converted to float64 (complex128 for complex data).
"""

import warnings
from typing import Any

import numpy as np
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve, solve_triangular

from pylinear.containers.matrix import Matrix
from pylinear.containers.vector import Orientation, Vector
from pylinear.core.compute.timing import Timer
from pylinear.core.compute.tolerances import NEAR_SINGULAR_RTOL
from pylinear.core.result import Result
from pylinear.core.validation import check_finite
from pylinear.linsys.backends.python import elimination_warnings
from pylinear.linsys.design import LinearSystemDesign
from pylinear.linsys.solution import GaussianParams


class LapackLUBackend:
    """
    Backend using LAPACK LU factorisation (getrf/getrs).

    Implements the Backend protocol for LinearSystemDesign -> GaussianParams.
    """

    def __init__(self, pivot_tol: float = 0.0):
        self._pivot_tol = pivot_tol

    @property
    def name(self) -> str:
        return 'lapack_lu'

    def solve(self, design: LinearSystemDesign) -> Result[GaussianParams]:
        """
        Solve A x = b through P A = L U.

        Algorithm:
            1. LU factorisation with partial pivoting
            2. Zero-pivot check on diag(U)
            3. Forward/back substitution with the factors
        """
        timer = Timer()
        timer.start()

        dtype = np.complex128 if issubclass(design.kind.type, complex) else np.float64
        n = design.n

        with timer.section('augment'):
            A = design.A.to_numpy(dtype=dtype)
            b = design.b.to_numpy(dtype=dtype)
            check_finite(A, 'A')
            check_finite(b, 'b')

        with timer.section('elimination'):
            # exactly-zero pivots are reported through the payload instead
            with warnings.catch_warnings():
                warnings.simplefilter('ignore', LinAlgWarning)
                lu, piv = lu_factor(A, check_finite=False)
            diag = np.abs(np.diag(lu))

            permutation = list(range(n))
            for k, p in enumerate(piv):
                permutation[k], permutation[p] = permutation[p], permutation[k]
            n_swaps = int(np.count_nonzero(piv != np.arange(n)))

            L = np.tril(lu, -1) + np.eye(n, dtype=dtype)
            c = solve_triangular(L, b[permutation], lower=True, unit_diagonal=True)
            echelon = np.column_stack([np.triu(lu), c])

        bad = np.flatnonzero(diag <= self._pivot_tol)
        singular_column = int(bad[0]) if bad.size else None
        stop = n if singular_column is None else singular_column

        max_abs = float(np.max(np.abs(A)))
        near_tol = NEAR_SINGULAR_RTOL * n * max_abs
        near_singular = tuple(int(k) for k in np.flatnonzero(diag[:stop] <= near_tol))

        solution = None
        if singular_column is None:
            with timer.section('back_substitution'):
                x = lu_solve((lu, piv), b, check_finite=False)
            solution = Vector(x.tolist(), Orientation.COL)

        timer.stop()

        params = GaussianParams(
            solution=solution,
            echelon=Matrix(echelon.tolist()),
            pivots=tuple(_scalar(v) for v in np.diag(lu)[:stop]),
            permutation=tuple(permutation),
            n_swaps=n_swaps,
            singular_column=singular_column,
            near_singular=near_singular,
        )

        info: dict[str, Any] = {
            'method': 'lu_partial_pivot',
            'singular': singular_column is not None,
            'pivot_tol': self._pivot_tol,
            'dtype': np.dtype(dtype).name,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=elimination_warnings(params),
        )


def _scalar(value: np.generic) -> Any:
    return value.item()
