"""
Logging helpers for pentaspline.

Every module logs through ``get_logger(__name__)`` so that the whole package
hangs off the ``pentaspline`` logger. Library code never attaches handlers;
applications call :func:`setup` (or configure ``logging`` themselves).

One level sits below DEBUG: ``DEBUG3`` carries the pentadiagonal solver's
per-row pivot trace, which is too noisy for ordinary debugging.

>>> from pentaspline.core.logger import get_logger, setup
>>> setup("DEBUG3")
>>> log = get_logger("pentaspline.core.penta")
>>> log.debug3("row %d pivot %.6e", 0, 1.0)
"""

import logging
import sys

DEBUG3 = 8
logging.addLevelName(DEBUG3, "DEBUG3")

ROOT_NAME = "pentaspline"
LOG_FORMAT = "%(levelname)-7s: %(message)s"


class _SplineLogger(logging.Logger):
    """``logging.Logger`` with a :meth:`debug3` method for pivot traces."""

    def debug3(self, msg, *args, **kwargs):
        if self.isEnabledFor(DEBUG3):
            self._log(DEBUG3, msg, args, **kwargs)


logging.setLoggerClass(_SplineLogger)


def get_logger(name: str | None = None) -> _SplineLogger:
    """Return the logger *name*, or the package logger when *name* is None."""
    return logging.getLogger(name or ROOT_NAME)


def set_level(level: int | str = logging.INFO) -> None:
    """Set the threshold of the package logger.

    *level* is a ``logging`` level number or a level name such as
    ``"debug"`` or ``"DEBUG3"`` (names are case-insensitive).
    """
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger(ROOT_NAME).setLevel(level)


def setup(level: int | str = logging.INFO, stream=None) -> None:
    """Attach a single stream handler (stderr by default) to the package logger.

    Does nothing when the package logger already has a handler.
    """
    root = logging.getLogger(ROOT_NAME)
    if root.handlers:
        return
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    set_level(level)
