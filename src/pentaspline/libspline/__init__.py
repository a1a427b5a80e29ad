"""libspline sub-package: boundary conditions and spline build/evaluate."""

# Import modules themselves (allows: from pentaspline.libspline import spliner)
from . import boundary
from . import spliner

__all__ = [
    "boundary",
    "spliner",
]
