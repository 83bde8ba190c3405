"""
Dense numeric containers.

    Matrix: row-major rectangular storage with matrix algebra
    Vector: flat storage with a row/column orientation
"""

from pylinear.containers.vector import Orientation, Vector
from pylinear.containers.matrix import Matrix

__all__ = [
    "Matrix",
    "Vector",
    "Orientation",
]
