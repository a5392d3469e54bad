"""
hexcurve — Curves and Biarc Paths in Hex Space
==============================================

Implemented features
--------------------
- Curves: :class:`Line`, :class:`Arc`, :class:`Piecewise` (see :func:`join`),
  each sampled for position, unit tangent and curvature
- Biarcs: :class:`CircularArc`, :func:`biarc`
- Smooth paths: :func:`smooth_path` through a list of waypoints
- Array sampling: :func:`sample_curve`

Quick start
-----------

::

    from hexcoord import Hex, HexFractional
    from hexcurve import join, smooth_path, sample_curve

    waypoints = [Hex(0, 0), Hex(1, -1), Hex(1, 0), Hex(0, 1)]
    arcs = smooth_path(HexFractional(1, -1), HexFractional(-1, 1), waypoints)
    curve = join(*(a.to_curve() for a in arcs))
    pos, tan, curv = sample_curve(curve, 200, cartesian=True)
"""

from _hex_common import NumericDegenerateError, OutOfRangeError

from .curve import Arc, Curve, Line, Piecewise, Sample, Spin, join, signed_area
from .biarc import CircularArc, approximate_tangent, biarc, smooth_path
from .sampling import sample_curve

__all__ = [
    # Curves
    "Curve",
    "Line",
    "Arc",
    "Piecewise",
    "Sample",
    "Spin",
    "join",
    "signed_area",

    # Biarcs
    "CircularArc",
    "biarc",
    "smooth_path",
    "approximate_tangent",

    # Sampling
    "sample_curve",

    # Errors
    "OutOfRangeError",
    "NumericDegenerateError",
]
