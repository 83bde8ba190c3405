"""
Linear-system backends.

Available backends:
    PythonGaussBackend: Gaussian elimination on any numeric element kind
    LapackLUBackend: LAPACK LU factorisation through SciPy (float64/complex128)
"""

from pylinear.linsys.backends.python import PythonGaussBackend
from pylinear.linsys.backends.lapack import LapackLUBackend

__all__ = [
    "PythonGaussBackend",
    "LapackLUBackend",
]
