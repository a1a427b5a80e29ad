"""
Boundary conditions for the cubic spline end rows.

Each end of the spline takes one of four conditions.  The integer values of
:class:`BCKind` are the legacy selector flags, so ``0``..``3`` may be passed
wherever a boundary condition is expected.
"""

import math
import numbers
from dataclasses import dataclass
from enum import IntEnum

from pentaspline.core.errors import InvalidBoundaryCondition


class BCKind(IntEnum):
    NATURAL = 0             # y''(end) = 0
    FIRST_DERIVATIVE = 1    # y'(end) = value
    SECOND_DERIVATIVE = 2   # y''(end) = value
    NOT_A_KNOT = 3          # y''' continuous across the first/last interior knot


# Conditions that carry a value
_VALUED = (BCKind.FIRST_DERIVATIVE, BCKind.SECOND_DERIVATIVE)

_NAMES = {
    "natural": BCKind.NATURAL,
    "first_derivative": BCKind.FIRST_DERIVATIVE,
    "clamped": BCKind.FIRST_DERIVATIVE,
    "second_derivative": BCKind.SECOND_DERIVATIVE,
    "not_a_knot": BCKind.NOT_A_KNOT,
}


def _as_kind(kind):
    # bool is an int subclass; True/False are never valid selectors
    if isinstance(kind, bool):
        raise InvalidBoundaryCondition(f"Boundary selector must not be a bool, got {kind!r}.")
    if isinstance(kind, BCKind):
        return kind
    if isinstance(kind, numbers.Integral):
        try:
            return BCKind(int(kind))
        except ValueError:
            raise InvalidBoundaryCondition(
                f"The boundary flag must be 0, 1, 2 or 3, got {kind!r}."
            ) from None
    if isinstance(kind, str):
        key = kind.strip().lower().replace("-", "_")
        if key in _NAMES:
            return _NAMES[key]
        raise InvalidBoundaryCondition(
            f"Unknown boundary condition {kind!r}; expected one of {sorted(_NAMES)}."
        )
    raise InvalidBoundaryCondition(f"Cannot interpret {kind!r} as a boundary condition.")


@dataclass(frozen=True)
class BoundaryCondition:
    """
    One end condition of a cubic spline.

    Attributes
    ----------
    kind : BCKind
        Which condition is imposed.
    value : float
        Prescribed first or second derivative.  Ignored for
        ``NATURAL`` and ``NOT_A_KNOT``.
    """
    kind: BCKind = BCKind.NATURAL
    value: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "kind", _as_kind(self.kind))
        try:
            value = float(self.value)
        except (TypeError, ValueError):
            raise InvalidBoundaryCondition(
                f"Boundary value must be a real number, got {self.value!r}."
            ) from None
        if not math.isfinite(value):
            raise InvalidBoundaryCondition(f"Boundary value must be finite, got {value!r}.")
        if self.kind not in _VALUED:
            value = 0.0
        object.__setattr__(self, "value", value)

    @classmethod
    def natural(cls):
        return cls(BCKind.NATURAL)

    @classmethod
    def first_derivative(cls, value):
        return cls(BCKind.FIRST_DERIVATIVE, value)

    @classmethod
    def second_derivative(cls, value):
        return cls(BCKind.SECOND_DERIVATIVE, value)

    @classmethod
    def not_a_knot(cls):
        return cls(BCKind.NOT_A_KNOT)

    @property
    def needs_value(self):
        return self.kind in _VALUED


def as_boundary(spec):
    """
    Coerce *spec* into a :class:`BoundaryCondition`.

    Accepted forms: a ``BoundaryCondition``; a ``BCKind`` or legacy int
    flag 0..3; a name such as ``"natural"``, ``"clamped"``,
    ``"second-derivative"`` or ``"not_a_knot"``; or a ``(kind, value)``
    pair combining any of the former kinds with a value.

    Raises
    ------
    InvalidBoundaryCondition
        Anything else.
    """
    if isinstance(spec, BoundaryCondition):
        return spec
    if isinstance(spec, tuple):
        if len(spec) != 2:
            raise InvalidBoundaryCondition(
                f"Boundary pair must be (kind, value), got {len(spec)} items."
            )
        return BoundaryCondition(spec[0], spec[1])
    return BoundaryCondition(_as_kind(spec))
