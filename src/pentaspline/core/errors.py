"""
Error taxonomy for spline construction and evaluation.

Every failure is raised as an exception carrying an integer ``code`` from
:class:`SplineErrorCode`; nothing is reported through return values and
nothing terminates the process.
"""

from enum import IntEnum


class SplineErrorCode(IntEnum):
    NOERROR = 0
    INPUT_SIZE = 1
    NONMONOTONIC = 2
    BAD_BOUNDARY = 3
    BAD_DERIVATIVE = 4
    SINGULAR = 5


class SplineError(ValueError):
    """Base class for all pentaspline errors."""

    code = SplineErrorCode.NOERROR


class InvalidInputSize(SplineError):
    """Arrays too short for the requested operation, or of mismatched length."""

    code = SplineErrorCode.INPUT_SIZE


class NonMonotonicKnots(SplineError):
    """Knots are not strictly increasing."""

    code = SplineErrorCode.NONMONOTONIC

    def __init__(self, index, left, right):
        self.index = index
        super().__init__(
            f"Knots must be strictly increasing, but t[{index}] = {left!r} "
            f"and t[{index + 1}] = {right!r}."
        )


class InvalidBoundaryCondition(SplineError):
    """Boundary selector outside the recognised set."""

    code = SplineErrorCode.BAD_BOUNDARY


class InvalidDerivativeOrder(SplineError):
    """Derivative order other than 0, 1 or 2."""

    code = SplineErrorCode.BAD_DERIVATIVE

    def __init__(self, derivative):
        self.derivative = derivative
        super().__init__(
            f"Invalid derivative choice: {derivative!r}. It must be 0 (spline "
            "value), 1 (first derivative) or 2 (second derivative)."
        )


class SingularSystem(SplineError, ZeroDivisionError):
    """A pivot vanished during banded elimination."""

    code = SplineErrorCode.SINGULAR

    def __init__(self, row, pivot):
        self.row = row
        self.pivot = pivot
        super().__init__(f"Singular pentadiagonal system: pivot {pivot!r} in row {row}.")
