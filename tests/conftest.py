"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pylinear import Matrix, Vector


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def small_system():
    """3x3 system with the integer solution [-15, 8, 2]."""
    A = Matrix([
        [1.0, 3.0, -2.0],
        [3.0, 5.0, 6.0],
        [2.0, 4.0, 3.0],
    ])
    b = Vector([5.0, 7.0, 8.0])
    return A, b, [-15.0, 8.0, 2.0]


@pytest.fixture
def int_matrix():
    """2x3 integer matrix."""
    return Matrix([[1, 2, 3], [4, 5, 6]])


@pytest.fixture
def float_matrix():
    """3x3 float matrix."""
    return Matrix([
        [1.2, 2.4, 3.5],
        [4.7, 6.1, 7.2],
        [7.0, 1.0, 7.5],
    ])


@pytest.fixture
def make_system(rng):
    """Factory for random diagonally dominant n x n systems (A, b) as numpy arrays."""
    def _make(n):
        A = rng.uniform(-1.0, 1.0, size=(n, n))
        A += np.diag(np.sum(np.abs(A), axis=1) + 1.0)
        b = rng.uniform(-10.0, 10.0, size=n)
        return A, b
    return _make
