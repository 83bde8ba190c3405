"""
Tolerance tiers for numerical comparison.

Equality in PyLinear is exact unless a caller passes a tolerance. These
tiers give names to the tolerances used across the package:

- EXACT: bitwise/rational equality (integer and Fraction data)
- CPU_FP64: machine-precision agreement for float64 and Decimal results

select_tolerance() picks the tier LinearSystemSolution.verify uses by
default.
"""

import sys
from dataclasses import dataclass
from decimal import Decimal

from pylinear.core.numeric import NumericKind


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str

    def bound(self, reference: float) -> float:
        """Allowed absolute deviation around a value of magnitude reference."""
        return self.atol + self.rtol * float(abs(reference))


EXACT = ToleranceTier(
    rtol=0.0,
    atol=0.0,
    name='exact',
    description='Exact equality for integer and rational arithmetic',
)

CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='Double precision, machine precision agreement',
)

# Pivots with |pivot| <= NEAR_SINGULAR_RTOL * n * max|A| are reported as
# near-singular for inexact kinds. They are still used.
NEAR_SINGULAR_RTOL = sys.float_info.epsilon


def select_tolerance(kind: NumericKind) -> ToleranceTier:
    """
    Select the comparison tier for an element kind.

    Decimal division rounds to the context precision, so it is compared
    like float even though NumericKind treats it as exact.
    """
    if kind.is_inexact or issubclass(kind.type, Decimal):
        return CPU_FP64
    return EXACT
