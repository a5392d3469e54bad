"""Biarc interpolation and smooth paths through hex waypoints.

A biarc is a pair of circular arcs joined with a common tangent.  Given a
start point and tangent and an end point and tangent, :func:`biarc` finds
the joint following Park's optimal single-biarc construction, where the
free parameter ``r`` is the ratio ``alpha / beta`` of the two control-leg
lengths.  :func:`smooth_path` chains biarcs through a list of waypoints
with G1 continuity.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence, Union

from _hex_common import EPSILON, NumericDegenerateError, close_enough
from hexcoord import Hex, HexFractional, lerp_fractional

from .curve import Arc, Curve, Line, signed_area

logger = logging.getLogger(__name__)

__all__ = ["CircularArc", "biarc", "smooth_path", "approximate_tangent"]

_Point = Union[Hex, HexFractional]


@dataclass(frozen=True)
class CircularArc:
    """Arc description: start point *i*, unit tangent *t* at *i*, end point *e*."""

    i: HexFractional
    t: HexFractional
    e: HexFractional

    def to_curve(self) -> Curve:
        """A sampleable curve; a :class:`Line` when the arc is straight."""
        if close_enough(signed_area(self.i, self.i + self.t, self.e), 0.0):
            return Line(self.i, self.e)
        return Arc(self.i, self.t, self.e)

    def __str__(self) -> str:
        return f"{{I: {self.i}, T: {self.t}, E: {self.e}}}"


# ===========================================================================
# Biarc
# ===========================================================================

def biarc(
    pi: HexFractional,
    ti: HexFractional,
    pe: HexFractional,
    te: HexFractional,
    r: float = 1.0,
) -> List[CircularArc]:
    """Connect *pi* to *pe* with one or two tangent-continuous arcs.

    Parameters
    ----------
    pi, pe:
        Start and end points.
    ti, te:
        Tangents at *pi* and *pe*; normalised before use.
    r:
        Ratio of the start control leg to the end control leg.

    Returns
    -------
    list of CircularArc
        One arc when a single arc already meets both tangents, else two.

    Raises
    ------
    ValueError
        If *r* is not positive.
    NumericDegenerateError
        If a tangent is zero or the construction has no positive solution.
    """
    if r <= 0.0:
        raise ValueError(f"r must be positive, got {r}")
    ti = ti.normalize()
    te = te.normalize()
    v = pi - pe

    # One arc suffices when the tangents are mirror images across the chord.
    tsum = ti + te
    if tsum.length() > EPSILON and close_enough(
        v.normalize().dot(tsum.normalize()), -1.0, 1e-9
    ):
        logger.debug("biarc %s -> %s: single arc", pi, pe)
        return [CircularArc(pi, ti, pe)]

    # a * beta**2 + b * beta + c == 0
    a = 2.0 * r * (ti.dot(te) - 1.0)
    b = 2.0 * v.dot(ti * r + te)
    c = v.dot(v)

    if close_enough(a, 0.0):
        if close_enough(b, 0.0):
            logger.debug("biarc %s -> %s: semicircle", pi, pe)
            j = lerp_fractional(pi, pe, 0.5)
            return [CircularArc(pi, ti, j), CircularArc(j, -ti, pe)]
        if b > 0.0:
            raise NumericDegenerateError(f"no positive biarc solution from {pi} to {pe}")
        beta = -c / b
    else:
        disc = b * b - 4.0 * a * c
        if disc < 0.0:
            raise NumericDegenerateError(f"no real biarc solution from {pi} to {pe}")
        sq = math.sqrt(disc)
        beta = max((-b + sq) / (2.0 * a), (-b - sq) / (2.0 * a))
        if beta <= 0.0:
            raise NumericDegenerateError(f"no positive biarc solution from {pi} to {pe}")

    alpha = r * beta
    wti = pi + ti * alpha
    wte = pe - te * beta
    j = lerp_fractional(wti, wte, alpha / (alpha + beta))
    tj = (wte - wti).normalize()
    return [CircularArc(pi, ti, j), CircularArc(j, tj, pe)]


# ===========================================================================
# Smooth path
# ===========================================================================

def approximate_tangent(p0: HexFractional, p1: HexFractional, p2: HexFractional) -> HexFractional:
    """Tangent estimate at *p1* from its neighbours (not normalised).

    Raises
    ------
    NumericDegenerateError
        If *p1* coincides with either neighbour.
    """
    a = p1 - p0
    b = p2 - p1
    a_len = a.length()
    b_len = b.length()
    if a_len == 0.0 or b_len == 0.0:
        raise NumericDegenerateError(f"repeated waypoint {p1} has no tangent")
    return a * (b_len / a_len) + b * (a_len / b_len)


def _fractional(p: _Point) -> HexFractional:
    if isinstance(p, Hex):
        return p.to_fractional()
    return p


def smooth_path(
    ti: HexFractional,
    te: HexFractional,
    path: Sequence[_Point],
) -> List[CircularArc]:
    """Arcs through every point of *path* with G1 continuity.

    *ti* and *te* are the tangents at the first and last points; interior
    tangents come from :func:`approximate_tangent`.  Points may be
    :class:`~hexcoord.Hex` cells, which are taken at their centres.
    Fewer than two points give an empty list.
    """
    if len(path) < 2:
        return []
    points = [_fractional(p) for p in path]
    n = len(points)

    tangents = [ti] * n
    tangents[-1] = te
    for k in range(1, n - 1):
        tangents[k] = approximate_tangent(points[k - 1], points[k], points[k + 1])

    arcs: List[CircularArc] = []
    for k in range(n - 1):
        arcs.extend(biarc(points[k], tangents[k], points[k + 1], tangents[k + 1], 1.0))
    return arcs
