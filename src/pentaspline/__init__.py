"""
pentaspline: natural cubic spline interpolation.

Fits a cubic spline to strictly increasing knots by solving a pentadiagonal
system for the second derivatives at the knots, then evaluates the spline's
value, slope and curvature anywhere (extrapolating past the ends).
"""

# Import main sub-packages
from . import core
from . import libspline

from .core.bracket import locate_bracket
from .core.errors import (
    InvalidBoundaryCondition,
    InvalidDerivativeOrder,
    InvalidInputSize,
    NonMonotonicKnots,
    SingularSystem,
    SplineError,
)
from .core.penta import penta
from .libspline.boundary import BCKind, BoundaryCondition
from .libspline.spliner import CubicSpline, seval_cubic, spline_cubic_set, spline_cubic_val

__version__ = "0.1.0"

__all__ = [
    "core",
    "libspline",
    "locate_bracket",
    "penta",
    "spline_cubic_set",
    "spline_cubic_val",
    "seval_cubic",
    "CubicSpline",
    "BCKind",
    "BoundaryCondition",
    "SplineError",
    "InvalidInputSize",
    "NonMonotonicKnots",
    "InvalidBoundaryCondition",
    "InvalidDerivativeOrder",
    "SingularSystem",
]
