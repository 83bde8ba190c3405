"""
Shared compute infrastructure for PyLinear.

Submodules:
    timing: Section timer for backend results
    tolerances: Named comparison tolerances
    random: Uniform sampling for random containers
"""

from pylinear.core.compute.timing import Timer
from pylinear.core.compute.tolerances import (
    CPU_FP64,
    EXACT,
    NEAR_SINGULAR_RTOL,
    ToleranceTier,
    select_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    # Tolerances
    "ToleranceTier",
    "EXACT",
    "CPU_FP64",
    "NEAR_SINGULAR_RTOL",
    "select_tolerance",
]
