"""
Pentadiagonal linear solver.

Solves ``A x = b`` where row ``i`` of ``A`` is nonzero only in columns
``i-2 .. i+2``.  The bands are held in five arrays of length ``n``::

    A(I,I-2) -> a1[I]
    A(I,I-1) -> a2[I]
    A(I,I)   -> a3[I]
    A(I,I+1) -> a4[I]
    A(I,I+2) -> a5[I]

Entries that would reference columns outside ``[0, n-1]`` (``a1[0]``,
``a1[1]``, ``a2[0]``, ``a4[n-1]``, ``a5[n-2]``, ``a5[n-1]``) are never read.

The elimination does not pivot.  That is safe for the diagonally dominant
systems produced by the spline builder; for anything else every pivot is
checked against ``pivot_tol`` and a vanishing one raises
:class:`~pentaspline.core.errors.SingularSystem`.
"""

import numpy as np

from .errors import InvalidInputSize, SingularSystem
from .logger import get_logger

log = get_logger(__name__)

# Smallest normal float64; pivots at or below this magnitude are singular.
TINY = np.finfo(np.float64).tiny


def _working_band(a, name):
    """Float64 1D view of a band; float64 ndarrays are used in place."""
    arr = np.asarray(a, dtype=np.float64)
    if arr.ndim != 1:
        raise InvalidInputSize(f"Band {name} must be one-dimensional, got shape {arr.shape}.")
    if not arr.flags.writeable:
        arr = arr.copy()
    return arr


def _check_pivot(pivot, row, tol):
    if not abs(pivot) > tol:
        log.error("Vanishing pivot %r in row %d", pivot, row)
        raise SingularSystem(row, float(pivot))


def penta(a1, a2, a3, a4, a5, b, pivot_tol=None):
    """
    Solve a pentadiagonal system by banded Gaussian elimination.

    Parameters
    ----------
    a1, a2, a3, a4, a5 : array_like
        Sub-sub-, sub-, main, super- and super-super-diagonal bands, each of
        length n.  Float64 ndarrays are overwritten (working storage).
    b : array_like
        Right-hand side, length n.  Overwritten like the bands.
    pivot_tol : float, optional
        Pivot magnitude at or below which the system is declared singular.
        Defaults to the smallest normal float64.

    Returns
    -------
    x : ndarray
        Freshly allocated solution, length n.

    Raises
    ------
    InvalidInputSize
        Bands of different lengths, or n < 2.
    SingularSystem
        A pivot vanished during elimination.
    """
    a1 = _working_band(a1, "a1")
    a2 = _working_band(a2, "a2")
    a3 = _working_band(a3, "a3")
    a4 = _working_band(a4, "a4")
    a5 = _working_band(a5, "a5")
    b = _working_band(b, "b")

    n = b.size
    sizes = {a1.size, a2.size, a3.size, a4.size, a5.size, n}
    if len(sizes) != 1:
        raise InvalidInputSize(
            f"Bands and right-hand side must share one length, got sizes "
            f"{[a1.size, a2.size, a3.size, a4.size, a5.size, n]}."
        )
    if n < 2:
        raise InvalidInputSize(f"Pentadiagonal system needs at least 2 rows, got {n}.")

    tol = TINY if pivot_tol is None else float(pivot_tol)
    x = np.zeros(n)

    # Forward elimination: row i-1 clears a2[i] and a1[i+1]
    for i in range(1, n - 1):
        _check_pivot(a3[i - 1], i - 1, tol)
        log.debug3("row %d pivot %.6e", i - 1, a3[i - 1])

        xmult = a2[i] / a3[i - 1]
        a3[i] -= xmult * a4[i - 1]
        a4[i] -= xmult * a5[i - 1]
        b[i] -= xmult * b[i - 1]

        xmult = a1[i + 1] / a3[i - 1]
        a2[i + 1] -= xmult * a4[i - 1]
        a3[i + 1] -= xmult * a5[i - 1]
        b[i + 1] -= xmult * b[i - 1]

    # Last two rows
    _check_pivot(a3[n - 2], n - 2, tol)
    xmult = a2[n - 1] / a3[n - 2]
    a3[n - 1] -= xmult * a4[n - 2]
    _check_pivot(a3[n - 1], n - 1, tol)
    x[n - 1] = (b[n - 1] - xmult * b[n - 2]) / a3[n - 1]
    x[n - 2] = (b[n - 2] - a4[n - 2] * x[n - 1]) / a3[n - 2]

    # Back substitution
    for i in range(n - 3, -1, -1):
        x[i] = (b[i] - a4[i] * x[i + 1] - a5[i] * x[i + 2]) / a3[i]

    return x


def penta_matvec(a1, a2, a3, a4, a5, x):
    """
    Banded product ``A x`` for bands laid out as in :func:`penta`.

    Out-of-range band entries are ignored, so this is the residual
    companion of the solver: ``penta_matvec(..., penta(...))`` reproduces
    the right-hand side for a well-conditioned system.
    """
    x = np.asarray(x, dtype=np.float64)
    n = x.size
    bands = [np.asarray(a, dtype=np.float64) for a in (a1, a2, a3, a4, a5)]
    if any(a.shape != (n,) for a in bands):
        raise InvalidInputSize("Bands and vector must be one-dimensional and share one length.")
    a1, a2, a3, a4, a5 = bands

    y = a3 * x
    y[1:] += a2[1:] * x[:-1]
    y[2:] += a1[2:] * x[:-2]
    y[:-1] += a4[:-1] * x[1:]
    y[:-2] += a5[:-2] * x[2:]
    return y
