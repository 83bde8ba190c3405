"""
Numeric element contract.

Every container in PyLinear is generic over a scalar element type. Rather
than specialising code per concrete type, the required capabilities are
captured once:

    - Numeric: structural protocol for the arithmetic operators
    - NumericKind: trait object providing the identities (zero, one,
      minus_one), absolute value and conversion from a count

Supported kinds are int, float, complex, fractions.Fraction and
decimal.Decimal. numpy scalars are accepted as well; np.float64 is a float
subclass and other numpy scalars are unpacked with .item().
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from numbers import Number
from typing import Any, Generic, Iterable, Protocol, TypeVar, runtime_checkable

import numpy as np

from pylinear.core.exceptions import ValidationError

T = TypeVar('T')


@runtime_checkable
class Numeric(Protocol):
    """Operators a scalar element must support."""

    def __add__(self, other: Any) -> Any: ...
    def __sub__(self, other: Any) -> Any: ...
    def __mul__(self, other: Any) -> Any: ...
    def __truediv__(self, other: Any) -> Any: ...
    def __neg__(self) -> Any: ...
    def __abs__(self) -> Any: ...


# Promotion table for mixed element kinds. Keys are frozensets of the kinds
# seen in the input; anything not listed is rejected.
_PROMOTIONS: dict[frozenset[type], type] = {
    frozenset({int, float}): float,
    frozenset({int, Fraction}): Fraction,
    frozenset({int, complex}): complex,
    frozenset({float, complex}): complex,
    frozenset({int, float, complex}): complex,
    frozenset({int, Decimal}): Decimal,
}


@dataclass(frozen=True)
class NumericKind(Generic[T]):
    """
    Trait object for a scalar element type.

    Attributes:
        type: Concrete Python type all elements are coerced to
    """
    type: type

    def zero(self) -> T:
        return self.type(0)

    def one(self) -> T:
        return self.type(1)

    def minus_one(self) -> T:
        return self.type(-1)

    def from_count(self, n: int) -> T:
        return self.type(n)

    def absolute(self, value: T) -> Any:
        return abs(value)

    def coerce(self, value: Any) -> T:
        if isinstance(value, self.type):
            return value
        return self.type(value)

    @property
    def is_inexact(self) -> bool:
        """Whether arithmetic on this kind rounds (float and complex)."""
        return issubclass(self.type, (float, complex))

    @property
    def is_ordered(self) -> bool:
        return not issubclass(self.type, complex)

    @property
    def name(self) -> str:
        return self.type.__name__

    def __repr__(self) -> str:
        return f"NumericKind({self.name})"


FLOAT = NumericKind(float)
INT = NumericKind(int)


def kind_of(value: Any, name: str = 'value') -> NumericKind:
    """NumericKind of a single scalar."""
    return NumericKind(_base_type(as_scalar(value, name)))


def as_kind(kind: NumericKind | type) -> NumericKind:
    """Accept either a NumericKind or a plain type such as float."""
    if isinstance(kind, NumericKind):
        return kind
    if kind is bool or kind not in (int, float, complex, Fraction, Decimal):
        raise ValidationError(f"unsupported element type {kind!r}")
    return NumericKind(kind)


def as_scalar(value: Any, name: str) -> Any:
    """
    Validate a single scalar and unpack numpy scalars to Python ones.

    Raises:
        ValidationError: If value is not a number or is a bool
    """
    if isinstance(value, np.generic) and not isinstance(value, float):
        value = value.item()
    if isinstance(value, bool) or not isinstance(value, Number):
        raise ValidationError(
            f"{name}: expected a numeric scalar, got {type(value).__name__} ({value!r})"
        )
    return value


def _base_type(value: Any) -> type:
    for base in (bool, int, float, complex, Fraction, Decimal):
        if isinstance(value, base):
            return base
    return type(value)


def infer_kind(values: Iterable[Any], name: str) -> NumericKind:
    """
    Determine the common NumericKind for a collection of scalars.

    Args:
        values: Scalars to inspect (already unpacked by as_scalar)
        name: Parameter name for error messages

    Returns:
        NumericKind all values can be coerced to

    Raises:
        ValidationError: If the collection is empty or mixes incompatible kinds
    """
    kinds = {_base_type(v) for v in values}
    if not kinds:
        raise ValidationError(f"{name}: cannot infer element type of empty data")
    return _promote_types(kinds, name)


def promote(*kinds: NumericKind) -> NumericKind:
    """
    Common kind for the result of combining operands of the given kinds.

    Raises:
        ValidationError: If the kinds cannot be mixed
    """
    return _promote_types({k.type for k in kinds}, 'operands')


def _promote_types(types: set[type], name: str) -> NumericKind:
    if len(types) == 1:
        return NumericKind(next(iter(types)))

    promoted = _PROMOTIONS.get(frozenset(types))
    if promoted is None:
        names = sorted(t.__name__ for t in types)
        raise ValidationError(f"{name}: incompatible element types {names}")
    return NumericKind(promoted)


def normalize(values: Iterable[Any], name: str) -> tuple[list[Any], NumericKind]:
    """
    Validate scalars, infer their common kind and coerce them to it.

    Returns:
        (coerced elements, kind)
    """
    raw = [as_scalar(v, name) for v in values]
    kind = infer_kind(raw, name)
    return [kind.coerce(v) for v in raw], kind


def fold_extreme(values: list[Any], kind: NumericKind, largest: bool) -> Any:
    """
    max/min fold over elements.

    Float kinds seed the fold with -inf/+inf so that NaN-free data gives the
    usual answer; other ordered kinds seed with the first element.

    Raises:
        ValidationError: If the kind has no ordering (complex)
    """
    if not kind.is_ordered:
        raise ValidationError(f"{kind.name} elements have no ordering")

    if issubclass(kind.type, float):
        acc = -math.inf if largest else math.inf
        rest = values
    else:
        acc, rest = values[0], values[1:]

    for v in rest:
        if (v > acc) if largest else (v < acc):
            acc = v
    return acc
