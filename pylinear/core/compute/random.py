"""
Uniform random sampling for container construction.

Each call draws from its own numpy Generator unless the caller supplies
one (or an integer seed), so no global seed state is shared.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pylinear.core.numeric import as_scalar
from pylinear.core.validation import check_bounds

RandomState = np.random.Generator | int | None


def as_generator(rng: RandomState) -> np.random.Generator:
    """Return rng itself, a seeded Generator for an int, or a fresh one."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def uniform_elements(
    low: Any,
    high: Any,
    count: int,
    rng: RandomState = None,
) -> list[Any]:
    """
    Draw count independent samples from [low, high).

    Integer bounds draw integers, anything else draws floats.

    Raises:
        ValidationError: If bounds are not numbers or low >= high
    """
    low = as_scalar(low, 'low')
    high = as_scalar(high, 'high')
    check_bounds(low, high, 'random')

    gen = as_generator(rng)
    if isinstance(low, int) and isinstance(high, int):
        return gen.integers(low, high, size=count).tolist()
    return gen.uniform(float(low), float(high), size=count).tolist()
