"""Shared helpers used by hexcoord, hexarea, hexpath and hexcurve.

This module provides:

* **Configuration constants**: :data:`EPSILON`, :data:`MAX_ULPS`,
  :data:`DEFAULT_MAX_WORKERS`
* **Error taxonomy**: :class:`HexcoordError` and its subclasses
* **Float helpers**: :func:`close_enough`, :func:`almost_equal`,
  :func:`ulps_between`, :func:`lerp`, :func:`round_half_away`
* **Facing helpers**: :func:`bound_facing`

Not meant to be imported directly by end users; the public packages
re-export what they need.
"""

from __future__ import annotations

import math
import os
import struct

__all__ = [
    "EPSILON", "MAX_ULPS", "DEFAULT_MAX_WORKERS",
    "HexcoordError", "EmptyAreaError", "OutOfRangeError",
    "BuildCancelledError", "NumericDegenerateError",
    "close_enough", "almost_equal", "ulps_between",
    "lerp", "round_half_away", "bound_facing",
]


# ===========================================================================
# Configuration
# ===========================================================================

#: Tolerance for collinearity and near-zero comparisons.
EPSILON: float = 1e-10

#: Default ULP distance accepted by :func:`almost_equal`.
MAX_ULPS: int = 5


def _default_max_workers() -> int:
    raw = os.environ.get("HEXCOORD_MAX_WORKERS", "")
    if raw.strip():
        return max(1, int(raw))
    return max(4, os.cpu_count() or 4)


#: Size of the shared pool used for concurrent subtree evaluation.
DEFAULT_MAX_WORKERS: int = _default_max_workers()


# ===========================================================================
# Errors
# ===========================================================================

class HexcoordError(Exception):
    """Base class for library errors."""


class EmptyAreaError(HexcoordError, ValueError):
    """Bounds were requested for an area with no hexes."""


class OutOfRangeError(HexcoordError, ValueError):
    """A curve was sampled outside of ``[0, 1]``."""


class BuildCancelledError(HexcoordError):
    """A CSG evaluation observed its cancellation signal."""


class NumericDegenerateError(HexcoordError, ArithmeticError):
    """Inputs admit no well-formed numeric solution."""


# ===========================================================================
# Float helpers
# ===========================================================================

def close_enough(a: float, b: float, eps: float = EPSILON) -> bool:
    """Absolute comparison with tolerance *eps*."""
    if a == b:
        return True
    return abs(a - b) < eps


def ulps_between(a: float, b: float) -> int:
    """Number of representable doubles between *a* and *b* (same sign only)."""
    ia = struct.unpack("<q", struct.pack("<d", a))[0]
    ib = struct.unpack("<q", struct.pack("<d", b))[0]
    return abs(ia - ib)


def almost_equal(a: float, b: float, max_ulps: int = MAX_ULPS) -> bool:
    """ULP comparison of two floats.

    Values that are both within :data:`EPSILON` of zero compare equal, since
    the ULP distance across zero is meaningless.
    """
    if a == b:
        return True
    if math.isnan(a) or math.isnan(b):
        return False
    if abs(a) < EPSILON and abs(b) < EPSILON:
        return True
    if math.copysign(1.0, a) != math.copysign(1.0, b):
        return False
    return ulps_between(a, b) <= max_ulps


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between *a* and *b*."""
    return a * (1.0 - t) + b * t


def round_half_away(f: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    if f > 0:
        return int(math.floor(f + 0.5))
    return int(math.ceil(f - 0.5))


# ===========================================================================
# Facing
# ===========================================================================

def bound_facing(facing: int) -> int:
    """Map any integer facing onto ``0..5``."""
    return ((facing % 6) + 6) % 6
