"""
Direct solvers for square linear systems.

Public API:
    solve(A, b)                 - Solve A x = b, returning a LinearSystemSolution
    gaussian_elimination(A, b)  - Low-level kernel, returns a Vector or None
"""

from pylinear.linsys._elimination import EliminationOutcome, eliminate, gaussian_elimination
from pylinear.linsys.design import LinearSystemDesign
from pylinear.linsys.solution import GaussianParams, LinearSystemSolution
from pylinear.linsys.solvers import solve

__all__ = [
    "solve",
    "gaussian_elimination",
    "eliminate",
    "EliminationOutcome",
    "LinearSystemDesign",
    "GaussianParams",
    "LinearSystemSolution",
]
