"""Numerical kernels for pentaspline: interval location and the banded solver."""

# Import modules themselves (allows: from pentaspline.core import penta)
from . import logger
from . import errors
from . import bracket
from . import penta

__all__ = [
    "logger",
    "errors",
    "bracket",
    "penta",
]
