"""
Tests for solve(), LinearSystemDesign, LinearSystemSolution and the backends.

Validates:
    - Design construction from containers and array-likes
    - Solution surface (x, determinant, residual, verify, summary)
    - Singular systems reported without raising, require_solution() raises
    - Near-singular diagnostics and RuntimeWarning
    - Python and LAPACK backends agree, 'auto' dispatch
"""

import warnings
from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest

from pylinear import Matrix, Orientation, Vector, solve
from pylinear.core.compute.tolerances import CPU_FP64
from pylinear.core.exceptions import DimensionError, SingularMatrixError, ValidationError
from pylinear.core.numeric import FLOAT, NumericKind
from pylinear.core.protocols import Backend
from pylinear.linsys import LinearSystemDesign, LinearSystemSolution
from pylinear.linsys.backends import LapackLUBackend, PythonGaussBackend


NEARLY_SINGULAR = [[1.0, 1.0], [1.0, 1.0 + 2.0 ** -52]]


# ═══════════════════════════════════════════════════════════════════════
# Design
# ═══════════════════════════════════════════════════════════════════════


class TestDesign:

    def test_from_containers(self, small_system):
        A, b, _ = small_system
        design = LinearSystemDesign.build(A, b)
        assert design.n == 3
        assert design.kind == FLOAT
        assert design.A == A
        assert design.b == b

    def test_from_lists(self):
        design = LinearSystemDesign.build([[1, 2], [3, 4]], [5, 6])
        assert design.A.to_list() == [[1, 2], [3, 4]]
        assert design.b.elements == [5, 6]

    def test_from_numpy(self):
        design = LinearSystemDesign.build(np.eye(2), np.array([[1.0], [2.0]]))
        assert design.b.orientation is Orientation.COL
        assert design.b.elements == [1.0, 2.0]

    def test_row_rhs_stored_as_column(self):
        design = LinearSystemDesign.build(Matrix.identity(2), Vector([1.0, 2.0], 'row'))
        assert design.b.orientation is Orientation.COL

    def test_inputs_copied(self, small_system):
        A, b, _ = small_system
        design = LinearSystemDesign.build(A, b)
        A.set(0, 0, 100.0)
        b.mul(2.0)
        assert design.A.get(0, 0) == 1.0
        assert design.b.get(0) == 5.0

    def test_accessors_hand_out_copies(self, small_system):
        design = LinearSystemDesign.build(*small_system[:2])
        design.A.set(0, 0, 100.0)
        assert design.A.get(0, 0) == 1.0

    def test_kind_promotes(self):
        design = LinearSystemDesign.build([[1, 0], [0, 1]], [Fraction(1, 2), 1])
        assert design.kind == NumericKind(Fraction)

    def test_max_abs_and_metadata(self, small_system):
        design = LinearSystemDesign.build(*small_system[:2])
        assert design.max_abs == 6.0
        assert design.metadata == {'n': 3, 'kind': 'float'}
        assert repr(design) == "LinearSystemDesign(n=3, kind=float)"

    def test_non_square_rejected(self):
        with pytest.raises(DimensionError, match="square"):
            LinearSystemDesign.build([[1, 2, 3], [4, 5, 6]], [1, 2])

    def test_rhs_mismatch_rejected(self):
        with pytest.raises(DimensionError):
            LinearSystemDesign.build([[1, 2], [3, 4]], [1, 2, 3])

    def test_non_numeric_rejected(self):
        with pytest.raises(ValidationError):
            LinearSystemDesign.build([["a", "b"], ["c", "d"]], [1, 2])


# ═══════════════════════════════════════════════════════════════════════
# Solution surface (python backend)
# ═══════════════════════════════════════════════════════════════════════


class TestSolution:

    def test_returns_solution(self, small_system):
        A, b, expected = small_system
        sol = solve(A, b)
        assert isinstance(sol, LinearSystemSolution)
        assert not sol.is_singular
        np.testing.assert_allclose(sol.x.elements, expected, atol=1e-12)
        assert sol.require_solution() is sol.x

    def test_determinant(self, small_system):
        A, b, _ = small_system
        sol = solve(A, b)
        assert sol.determinant == pytest.approx(-4.0)
        assert sol.determinant == pytest.approx(np.linalg.det(A.to_numpy()))

    def test_determinant_exact(self):
        A = [[Fraction(v) for v in row] for row in [[1, 3, -2], [3, 5, 6], [2, 4, 3]]]
        sol = solve(A, [5, 7, 8])
        assert sol.determinant == Fraction(-4)
        assert sol.x.elements == [-15, 8, 2]
        assert sol.residual_norm == 0
        assert sol.verify()

    def test_diagnostics(self, small_system):
        sol = solve(*small_system[:2])
        assert sol.permutation == (1, 0, 2)
        assert sol.n_swaps == 1
        assert len(sol.pivots) == 3
        assert sol.echelon.size.cols == 4
        assert sol.near_singular_columns == ()

    def test_residual(self, small_system):
        sol = solve(*small_system[:2])
        r = sol.residual()
        assert r.size == 3
        assert sol.residual_norm < 1e-9
        assert sol.verify()
        assert sol.verify(CPU_FP64)

    def test_metadata(self, small_system):
        sol = solve(*small_system[:2])
        assert sol.backend_name == 'python_gauss'
        assert sol.info['method'] == 'gaussian_partial_pivot'
        assert sol.info['singular'] is False
        assert sol.info['pivot_tol'] == 0.0
        assert set(sol.timing) == {'total_seconds', 'augment', 'elimination', 'back_substitution'}
        assert sol.warnings == ()

    def test_summary(self, small_system):
        text = solve(*small_system[:2]).summary()
        assert "Linear system A x = b" in text
        assert "n = 3, element kind = float" in text
        assert "x[0]" in text
        assert "determinant" in text
        assert "Warnings:" not in text

    def test_repr(self):
        sol = solve([[2.0, 0.0], [0.0, 4.0]], [2.0, 2.0])
        assert repr(sol) == "LinearSystemSolution(n=2, x=[1.0, 0.5])"


class TestSingularSolution:

    @pytest.fixture
    def singular(self):
        return solve([[1.0, 2.0], [2.0, 4.0]], [3.0, 6.0])

    def test_no_solution(self, singular):
        assert singular.is_singular
        assert singular.x is None
        assert singular.residual() is None
        assert singular.residual_norm is None
        assert not singular.verify()

    def test_determinant_zero(self, singular):
        assert singular.determinant == 0.0

    def test_warning_recorded(self, singular):
        assert singular.warnings == ("singular system: zero pivot in column 1",)
        assert singular.info['singular'] is True
        assert 'back_substitution' not in singular.timing

    def test_require_solution_raises(self, singular):
        with pytest.raises(SingularMatrixError, match="column 1") as exc:
            singular.require_solution()
        assert exc.value.column == 1
        assert exc.value.pivot == 0.0

    def test_summary(self, singular):
        text = singular.summary()
        assert "No solution: zero pivot in column 1" in text
        assert "Warnings:" in text

    def test_repr(self, singular):
        assert repr(singular) == "LinearSystemSolution(n=2, singular)"

    def test_pivot_tol(self):
        sol = solve(NEARLY_SINGULAR, [2.0, 2.0], pivot_tol=1e-12)
        assert sol.is_singular
        assert sol.info['pivot_tol'] == 1e-12


class TestNearSingular:

    def test_warns(self):
        with pytest.warns(RuntimeWarning, match="Near-singular"):
            sol = solve(NEARLY_SINGULAR, [2.0, 2.0])
        assert not sol.is_singular
        assert sol.near_singular_columns == (1,)
        assert sol.warnings == ("near-singular pivot in column 1",)

    def test_warn_false_is_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            sol = solve(NEARLY_SINGULAR, [2.0, 2.0], warn=False)
        assert sol.near_singular_columns == (1,)

    def test_exact_kinds_never_near_singular(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            sol = solve([[1, 1], [1, 2]], [2, 3])
        assert sol.near_singular_columns == ()


# ═══════════════════════════════════════════════════════════════════════
# Backends
# ═══════════════════════════════════════════════════════════════════════


class TestBackends:

    def test_protocol(self):
        assert isinstance(PythonGaussBackend(), Backend)
        assert isinstance(LapackLUBackend(), Backend)

    def test_lapack_solution(self, small_system):
        A, b, expected = small_system
        sol = solve(A, b, backend='lapack')
        assert sol.backend_name == 'lapack_lu'
        assert sol.info['method'] == 'lu_partial_pivot'
        assert sol.info['dtype'] == 'float64'
        np.testing.assert_allclose(sol.x.elements, expected, atol=1e-10)

    def test_lapack_matches_python_diagnostics(self, small_system):
        A, b, _ = small_system
        gauss = solve(A, b, backend='python')
        lapack = solve(A, b, backend='lapack')
        assert lapack.permutation == gauss.permutation
        assert lapack.n_swaps == gauss.n_swaps
        np.testing.assert_allclose(lapack.pivots, gauss.pivots, rtol=1e-12)
        assert lapack.determinant == pytest.approx(gauss.determinant)
        np.testing.assert_allclose(
            lapack.echelon.to_numpy(), gauss.echelon.to_numpy(), rtol=1e-12, atol=1e-12,
        )

    def test_lapack_singular(self):
        sol = solve([[0.0, 1.0], [0.0, 2.0]], [1.0, 2.0], backend='lapack')
        assert sol.is_singular
        assert sol.warnings == ("singular system: zero pivot in column 0",)
        with pytest.raises(SingularMatrixError):
            sol.require_solution()

    def test_lapack_near_singular_warns(self):
        with pytest.warns(RuntimeWarning):
            sol = solve(NEARLY_SINGULAR, [2.0, 2.0], backend='lapack')
        assert sol.near_singular_columns == (1,)

    def test_lapack_complex(self):
        sol = solve([[2, 1j], [-1j, 3]], [2 + 1j, 3 - 1j], backend='lapack')
        assert sol.info['dtype'] == 'complex128'
        np.testing.assert_allclose(sol.x.to_numpy(), [1.0, 1.0], atol=1e-12)

    def test_lapack_rejects_non_finite(self):
        with pytest.raises(ValidationError, match="non-finite"):
            solve([[1.0, float('nan')], [0.0, 1.0]], [1.0, 1.0], backend='lapack')

    @pytest.mark.parametrize("scalar", [Decimal, Fraction])
    def test_lapack_exact_input(self, scalar):
        A = [[scalar(2), scalar(1)], [scalar(1), scalar(3)]]
        b = [scalar(3), scalar(4)]
        sol = solve(A, b, backend='lapack')
        np.testing.assert_allclose(sol.x.to_numpy(), [1.0, 1.0], atol=1e-12)
        assert sol.determinant == pytest.approx(5.0)
        assert sol.residual_norm < 1e-12
        assert sol.verify()
        assert "element kind = float" in sol.summary()

    def test_lapack_exact_input_singular(self):
        sol = solve([[Fraction(1), 2], [2, 4]], [1, 2], backend='lapack')
        assert sol.is_singular
        assert sol.determinant == 0.0

    @pytest.mark.parametrize("n", [3, 5, 6])
    def test_backends_agree_on_random(self, make_system, n):
        A, b = make_system(n)
        gauss = solve(A, b, backend='python')
        lapack = solve(A, b, backend='lapack')
        np.testing.assert_allclose(gauss.x.to_numpy(), lapack.x.to_numpy(), rtol=1e-10, atol=1e-12)
        assert gauss.verify()
        assert lapack.verify()

    def test_auto_float_uses_lapack(self, small_system):
        assert solve(*small_system[:2], backend='auto').backend_name == 'lapack_lu'

    def test_auto_exact_uses_python(self):
        sol = solve([[Fraction(1), 0], [0, 2]], [1, 1], backend='auto')
        assert sol.backend_name == 'python_gauss'
        assert sol.x.elements == [1, Fraction(1, 2)]

    def test_unknown_backend(self, small_system):
        with pytest.raises(ValidationError, match="Unknown backend"):
            solve(*small_system[:2], backend='gpu')

    def test_invalid_pivot_tol(self, small_system):
        with pytest.raises(ValidationError, match="pivot_tol"):
            solve(*small_system[:2], pivot_tol=float('inf'))
