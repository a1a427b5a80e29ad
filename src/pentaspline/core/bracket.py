"""
Interval location in a sorted knot array.

Maps a query abscissa to the pair of adjacent knot indices ``(left, right)``
whose interval contains it.  Queries outside the knot range are clamped to
the first or last interval so that evaluation extrapolates with the end
cubic pieces.

Convention for a query landing exactly on an interior knot ``x[k]``: the
*left* interval ``(k - 1, k)`` is returned.  Both neighbouring cubic pieces
agree at the knot in value, slope and curvature, so the choice only
matters to rounding.
"""

import numpy as np
from numba import jit

from .errors import InvalidInputSize


@jit(nopython=True)
def _locate_core(x, xval):
    """
    JIT-compiled lower-bound search.

    Finds the smallest index whose knot is >= xval and returns the
    bracketing pair.  Assumes ``len(x) >= 2`` and ascending order.
    """
    n = len(x)
    if xval <= x[0]:
        return 0, 1
    if xval >= x[n - 1]:
        return n - 2, n - 1

    # Invariant: x[jl] < xval <= x[ju]
    jl = 0
    ju = n - 1
    while ju - jl > 1:
        jm = (ju + jl) // 2
        if x[jm] < xval:
            jl = jm
        else:
            ju = jm
    return ju - 1, ju


def _as_knots(x):
    x = np.ascontiguousarray(x, dtype=np.float64)
    if x.ndim != 1 or x.size < 2:
        raise InvalidInputSize(
            f"Knot array must be one-dimensional with at least 2 entries, got shape {x.shape}."
        )
    return x


def locate_bracket(x, xval):
    """
    Find the knot interval bracketing *xval*.

    Parameters
    ----------
    x : array_like
        Knots, 1D, strictly increasing, at least 2 entries.  Ordering is
        not checked here.
    xval : float
        Query point.

    Returns
    -------
    (int, int)
        ``(left, right)`` with ``right == left + 1``.

    Raises
    ------
    InvalidInputSize
        Fewer than 2 knots.
    ValueError
        *xval* is NaN.
    """
    x = _as_knots(x)
    xval = float(xval)
    if np.isnan(xval):
        raise ValueError("Cannot locate a NaN query point.")
    left, right = _locate_core(x, xval)
    return int(left), int(right)


def locate_bracket_linear(x, xval):
    """O(n) scan with the same bracket semantics as :func:`locate_bracket`."""
    x = _as_knots(x)
    xval = float(xval)
    if np.isnan(xval):
        raise ValueError("Cannot locate a NaN query point.")
    n = x.size
    for i in range(1, n - 1):
        if xval <= x[i]:
            return i - 1, i
    return n - 2, n - 1
