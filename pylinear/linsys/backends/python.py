"""
Pure-Python Gaussian elimination backend.

Reference implementation: works for every numeric element kind (int,
float, complex, Fraction, Decimal) and follows the elimination state
machine step by step.
"""

from typing import Any

from pylinear.containers.vector import Orientation, Vector
from pylinear.core.compute.timing import Timer
from pylinear.core.compute.tolerances import NEAR_SINGULAR_RTOL
from pylinear.core.result import Result
from pylinear.linsys._elimination import (
    augment,
    back_substitute,
    forward_eliminate,
    outcome_from,
)
from pylinear.linsys.design import LinearSystemDesign
from pylinear.linsys.solution import GaussianParams


class PythonGaussBackend:
    """
    Generic backend using Gaussian elimination with partial pivoting.

    Implements the Backend protocol for LinearSystemDesign -> GaussianParams.
    """

    def __init__(self, pivot_tol: float = 0.0):
        self._pivot_tol = pivot_tol

    @property
    def name(self) -> str:
        return 'python_gauss'

    def solve(self, design: LinearSystemDesign) -> Result[GaussianParams]:
        """
        Solve A x = b by elimination.

        Algorithm:
            1. Augment [A | b]
            2. Forward elimination with partial pivoting
            3. Back substitution (skipped for a singular system)
        """
        timer = Timer()
        timer.start()

        kind = design.kind
        near_tol = None
        if kind.is_inexact:
            near_tol = NEAR_SINGULAR_RTOL * design.n * float(design.max_abs)

        with timer.section('augment'):
            rows = augment(design.A, design.b)

        with timer.section('elimination'):
            state = forward_eliminate(
                rows, kind.zero(), pivot_tol=self._pivot_tol, near_tol=near_tol,
            )

        solution = None
        if not state.singular:
            with timer.section('back_substitution'):
                solution = Vector(back_substitute(rows), Orientation.COL)

        timer.stop()

        outcome = outcome_from(rows, state, solution)
        params = GaussianParams(
            solution=outcome.solution,
            echelon=outcome.echelon,
            pivots=outcome.pivots,
            permutation=outcome.permutation,
            n_swaps=outcome.n_swaps,
            singular_column=outcome.singular_column,
            near_singular=outcome.near_singular,
        )

        info: dict[str, Any] = {
            'method': 'gaussian_partial_pivot',
            'singular': state.singular,
            'pivot_tol': self._pivot_tol,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=elimination_warnings(params),
        )


def elimination_warnings(params: GaussianParams) -> tuple[str, ...]:
    """Diagnostic messages recorded in Result.warnings."""
    messages = [f"near-singular pivot in column {k}" for k in params.near_singular]
    if params.singular_column is not None:
        messages.append(f"singular system: zero pivot in column {params.singular_column}")
    return tuple(messages)
