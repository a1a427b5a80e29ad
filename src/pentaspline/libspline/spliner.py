"""
Cubic spline construction and evaluation.

The spline is stored in "second derivative" form: the knots ``t``, the data
``y`` and the second derivatives ``ypp`` at the knots.  Over the interval
``[t[left], t[right]]`` with ``dt = tval - t[left]`` and
``h = t[right] - t[left]``::

    SPL(T) = A + B * dt + C * dt**2 + D * dt**3

    A = y[left]
    B = (y[right] - y[left]) / h - (ypp[right] + 2 * ypp[left]) * h / 6
    C = ypp[left] / 2
    D = (ypp[right] - ypp[left]) / (6 * h)

``spline_cubic_set`` computes ``ypp`` by assembling one banded equation per
knot (first-derivative continuity inside, the chosen boundary condition at
the ends) and handing the system to the pentadiagonal solver.  The
not-a-knot condition reaches two columns away from the diagonal, which is
why the system is pentadiagonal rather than tridiagonal.
"""

import numbers
from dataclasses import dataclass

import numpy as np
from numba import jit, prange

from pentaspline.core.bracket import _locate_core, locate_bracket
from pentaspline.core.errors import (
    InvalidDerivativeOrder,
    InvalidInputSize,
    NonMonotonicKnots,
)
from pentaspline.core.logger import get_logger
from pentaspline.core.penta import penta

from .boundary import BCKind, BoundaryCondition, as_boundary

log = get_logger(__name__)


# ===================================================================
#  Input validation
# ===================================================================

def _as_samples(t, y):
    """Validated float64 copies of the knots and data."""
    t = np.array(t, dtype=np.float64)
    y = np.array(y, dtype=np.float64)
    if t.ndim != 1 or y.ndim != 1:
        raise InvalidInputSize(
            f"Knots and data must be one-dimensional, got shapes {t.shape} and {y.shape}."
        )
    if t.size != y.size:
        raise InvalidInputSize(f"Got {t.size} knots but {y.size} data values.")
    if t.size < 2:
        raise InvalidInputSize(f"The number of knots must be at least 2, got {t.size}.")
    return t, y


def _check_increasing(t):
    # NaN knots fail the comparison and are reported here too
    bad = np.flatnonzero(~(np.diff(t) > 0.0))
    if bad.size:
        i = int(bad[0])
        raise NonMonotonicKnots(i, float(t[i]), float(t[i + 1]))


def _check_derivative(derivative):
    if (
        isinstance(derivative, bool)
        or not isinstance(derivative, numbers.Integral)
        or derivative not in (0, 1, 2)
    ):
        raise InvalidDerivativeOrder(derivative)
    return int(derivative)


# ===================================================================
#  SplineBuilder
# ===================================================================

def spline_cubic_system(t, y, left=BoundaryCondition(), right=BoundaryCondition()):
    """
    Assemble the banded system whose solution is the spline's ``ypp``.

    Parameters
    ----------
    t : array_like
        Knots, strictly increasing, at least 2 entries.
    y : array_like
        Data values at the knots.
    left, right : BoundaryCondition or selector
        End conditions; anything accepted by
        :func:`~pentaspline.libspline.boundary.as_boundary`.

    Returns
    -------
    a1, a2, a3, a4, a5, b : ndarray
        Band arrays and right-hand side laid out for
        :func:`~pentaspline.core.penta.penta`.

    Raises
    ------
    InvalidInputSize
        Fewer than 2 knots, mismatched lengths, or too few knots for a
        not-a-knot end (3 for one end, 4 for both).
    NonMonotonicKnots
        Knots not strictly increasing.
    InvalidBoundaryCondition
        Unrecognised boundary selector.
    """
    t, y = _as_samples(t, y)
    _check_increasing(t)
    left = as_boundary(left)
    right = as_boundary(right)

    n = t.size
    n_nak = (left.kind == BCKind.NOT_A_KNOT) + (right.kind == BCKind.NOT_A_KNOT)
    if n_nak and n < 2 + n_nak:
        raise InvalidInputSize(
            f"A not-a-knot condition at {n_nak} end(s) needs at least {2 + n_nak} knots, got {n}."
        )

    log.debug(
        "Assembling %d-row spline system (left=%s, right=%s)",
        n, left.kind.name, right.kind.name,
    )

    a1 = np.zeros(n)
    a2 = np.zeros(n)
    a3 = np.zeros(n)
    a4 = np.zeros(n)
    a5 = np.zeros(n)
    b = np.zeros(n)

    h = np.diff(t)
    slope = np.diff(y) / h

    # First equation
    if left.kind == BCKind.NATURAL:
        a3[0] = 1.0
    elif left.kind == BCKind.FIRST_DERIVATIVE:
        b[0] = slope[0] - left.value
        a3[0] = h[0] / 3.0
        a4[0] = h[0] / 6.0
    elif left.kind == BCKind.SECOND_DERIVATIVE:
        b[0] = left.value
        a3[0] = 1.0
    else:
        a3[0] = -h[1]
        a4[0] = h[0] + h[1]
        a5[0] = -h[0]

    # Intermediate equations: slope continuity at t[1] .. t[n-2]
    b[1:-1] = slope[1:] - slope[:-1]
    a2[1:-1] = h[:-1] / 6.0
    a3[1:-1] = (h[:-1] + h[1:]) / 3.0
    a4[1:-1] = h[1:] / 6.0

    # Last equation
    if right.kind == BCKind.NATURAL:
        a3[-1] = 1.0
    elif right.kind == BCKind.FIRST_DERIVATIVE:
        b[-1] = right.value - slope[-1]
        a2[-1] = h[-1] / 6.0
        a3[-1] = h[-1] / 3.0
    elif right.kind == BCKind.SECOND_DERIVATIVE:
        b[-1] = right.value
        a3[-1] = 1.0
    else:
        a1[-1] = -h[-1]
        a2[-1] = h[-2] + h[-1]
        a3[-1] = -h[-2]

    return a1, a2, a3, a4, a5, b


def spline_cubic_set(t, y, left=BoundaryCondition(), right=BoundaryCondition()):
    """
    Compute the second derivatives of a piecewise cubic spline.

    The data plus the returned ``ypp`` define the spline; evaluate it with
    :func:`spline_cubic_val` or :func:`seval_cubic`.  If ``t`` or ``y``
    change, ``ypp`` must be recomputed.

    Parameters
    ----------
    t : array_like
        Knots, strictly increasing, at least 2 entries.
    y : array_like
        Data values at the knots.
    left, right : BoundaryCondition or selector, optional
        End conditions, natural by default.

    Returns
    -------
    ypp : ndarray
        Second derivatives at the knots, same length as ``t``.

    Raises
    ------
    InvalidInputSize, NonMonotonicKnots, InvalidBoundaryCondition
        See :func:`spline_cubic_system`.
    SingularSystem
        Elimination met a vanishing pivot.
    """
    return penta(*spline_cubic_system(t, y, left, right))


# ===================================================================
#  SplineEvaluator
# ===================================================================

@jit(nopython=True)
def _spline_piece(t, y, ypp, tval, derivative):
    """
    JIT-compiled evaluation of one cubic piece.

    ``derivative`` has already been validated.  Queries outside the knots
    use the first/last piece (extrapolation).
    """
    left, right = _locate_core(t, tval)
    dt = tval - t[left]
    h = t[right] - t[left]

    if derivative == 0:
        return (
            y[left]
            + dt * ((y[right] - y[left]) / h
                    - (ypp[right] / 6.0 + ypp[left] / 3.0) * h
                    + dt * (0.5 * ypp[left]
                            + dt * ((ypp[right] - ypp[left]) / (6.0 * h))))
        )
    if derivative == 1:
        return (
            (y[right] - y[left]) / h
            - (ypp[right] / 6.0 + ypp[left] / 3.0) * h
            + dt * (ypp[left] + dt * (0.5 * (ypp[right] - ypp[left]) / h))
        )
    return ypp[left] + dt * (ypp[right] - ypp[left]) / h


@jit(nopython=True, parallel=True)
def _seval_kernel(tq, t, y, ypp, derivative, out):
    # Queries are independent; the spline arrays are only read
    for k in prange(tq.size):  # pylint: disable=not-an-iterable
        out[k] = _spline_piece(t, y, ypp, tq[k], derivative)


def _as_spline(t, y, ypp):
    t = np.ascontiguousarray(t, dtype=np.float64)
    y = np.ascontiguousarray(y, dtype=np.float64)
    ypp = np.ascontiguousarray(ypp, dtype=np.float64)
    if t.ndim != 1 or y.ndim != 1 or ypp.ndim != 1:
        raise InvalidInputSize("Knots, data and second derivatives must be one-dimensional.")
    if not t.size == y.size == ypp.size:
        raise InvalidInputSize(
            f"Got {t.size} knots, {y.size} data values and {ypp.size} second derivatives."
        )
    if t.size < 2:
        raise InvalidInputSize(f"The number of knots must be at least 2, got {t.size}.")
    return t, y, ypp


def spline_cubic_val(t, y, ypp, tval, derivative=0):
    """
    Evaluate a cubic spline, or one of its derivatives, at a point.

    Parameters
    ----------
    t, y : array_like
        Knots and data passed to :func:`spline_cubic_set`.
    ypp : array_like
        Second derivatives returned by :func:`spline_cubic_set`.
    tval : float
        Evaluation point; outside ``[t[0], t[-1]]`` the end pieces are
        extrapolated.
    derivative : int, optional
        0 for the value, 1 for the first derivative, 2 for the second.

    Returns
    -------
    float

    Raises
    ------
    InvalidDerivativeOrder
        *derivative* not in {0, 1, 2}.
    InvalidInputSize
        Fewer than 2 knots or arrays of different lengths.
    """
    derivative = _check_derivative(derivative)
    t, y, ypp = _as_spline(t, y, ypp)
    return float(_spline_piece(t, y, ypp, float(tval), derivative))


def seval_cubic(tq, t, y, ypp, derivative=0):
    """
    Evaluate a cubic spline at many points.

    Vectorised counterpart of :func:`spline_cubic_val`; the output has the
    shape of *tq*.  NaN queries give NaN.
    """
    derivative = _check_derivative(derivative)
    t, y, ypp = _as_spline(t, y, ypp)
    tq = np.asarray(tq, dtype=np.float64)
    flat = np.ascontiguousarray(tq.ravel())
    out = np.empty_like(flat)
    _seval_kernel(flat, t, y, ypp, derivative, out)
    return out.reshape(tq.shape)


# ===================================================================
#  Convenience object
# ===================================================================

@dataclass(frozen=True, eq=False)
class CubicSpline:
    """
    A built spline: knots, data and second derivatives, all read-only.

    Use :meth:`from_samples` to construct one from data.
    """
    t: np.ndarray
    y: np.ndarray
    ypp: np.ndarray

    def __post_init__(self):
        t, y, ypp = _as_spline(self.t, self.y, self.ypp)
        for name, arr in (("t", t), ("y", y), ("ypp", ypp)):
            arr = arr.copy()
            arr.flags.writeable = False
            object.__setattr__(self, name, arr)

    @classmethod
    def from_samples(cls, t, y, left=BoundaryCondition(), right=BoundaryCondition()):
        t, y = _as_samples(t, y)
        return cls(t, y, spline_cubic_set(t, y, left, right))

    def __call__(self, tq, derivative=0):
        if np.ndim(tq) == 0:
            return spline_cubic_val(self.t, self.y, self.ypp, tq, derivative)
        return seval_cubic(tq, self.t, self.y, self.ypp, derivative)

    def derivative(self, tq):
        return self(tq, 1)

    def second_derivative(self, tq):
        return self(tq, 2)

    def bracket(self, tval):
        """Knot interval ``(left, right)`` used for *tval*."""
        return locate_bracket(self.t, tval)

    @property
    def knots(self):
        return self.t

    @property
    def values(self):
        return self.y

    def __len__(self):
        return self.t.size
