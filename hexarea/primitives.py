"""Primitive area generators.

Each function returns a new :class:`~hexarea.area.Area`, which is also a
leaf :class:`~hexarea.area.Builder` ready to be combined with others.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Dict, List, Sequence, Union

import numpy as np

from _hex_common import EPSILON
from hexcoord import Hex

from .area import Area

__all__ = ["big_hex", "ring", "spiral", "rectangle", "circle", "line", "polygon"]


# ===========================================================================
# Hex-shaped areas
# ===========================================================================

def big_hex(center: Hex, radius: int) -> Area:
    """All hexes within *radius* of *center*.  Radius 0 is the centre alone."""
    hexes: Dict[Hex, None] = {}
    for q in range(-radius, radius + 1):
        r1 = max(-radius, -q - radius)
        r2 = min(radius, -q + radius)
        for r in range(r1, r2 + 1):
            hexes[Hex(center.q + q, center.r + r)] = None
    return Area(hexes)


def ring(center: Hex, radius: int) -> Area:
    """Hexes at exactly *radius* from *center*.

    Iteration order walks the ring neighbour to neighbour, starting at
    ``center + direction(4) * radius``.
    """
    return Area(center.ring(radius))


def spiral(center: Hex, radius: int) -> Area:
    """Same hexes as :func:`big_hex`, ordered centre first and ring by ring outward."""
    return Area(center.spiral(radius))


# ===========================================================================
# Rectangle and circle
# ===========================================================================

def rectangle(*corners: Hex) -> Area:
    """The axial "rectangle" spanned by the bounding box of *corners*.

    Each row ``r`` covers ``q`` from ``min_q - r/2`` to ``max_q - r/2``, with
    the halving truncated toward zero, which keeps the rows stacked on screen.
    """
    if not corners:
        return Area()
    min_q = min(h.q for h in corners)
    max_q = max(h.q for h in corners)
    min_r = min(h.r for h in corners)
    max_r = max(h.r for h in corners)

    hexes: List[Hex] = []
    for r in range(min_r, max_r + 1):
        offset = int(r / 2)
        hexes.extend(Hex(q, r) for q in range(min_q - offset, max_q - offset + 1))
    return Area(hexes)


def circle(center: Hex, radius: Union[int, float]) -> Area:
    """Hexes whose centre lies within Cartesian distance *radius* of *center*.

    Neighbouring centres are ``sqrt(3)`` apart in Cartesian space, so
    ``circle(c, 1)`` is *c* alone and ``circle(c, sqrt(3))`` adds its six
    neighbours.
    """
    if radius < 0:
        return Area()

    # A hex n steps away is at least 1.5 * n Cartesian units away.
    reach = int(math.floor(radius / 1.5)) + 1
    span = np.arange(-reach, reach + 1, dtype=np.int64)
    Q, R = np.meshgrid(span, span, indexing="ij")
    q = Q.ravel()
    r = R.ravel()

    d2 = (3 * (q * q + r * r + q * r)).astype(float)
    rs = float(radius) * float(radius)
    inside = (np.abs(q + r) <= reach) & ((d2 <= rs) | np.isclose(d2, rs, rtol=0.0, atol=EPSILON))

    qr = np.stack([q[inside] + center.q, r[inside] + center.r], axis=-1)
    return Area.from_array(qr)


# ===========================================================================
# Lines and polygons
# ===========================================================================

def line(*points: Hex) -> Area:
    """Lattice line through *points* in order, endpoints included."""
    if not points:
        return Area()
    hexes: List[Hex] = [points[0]]
    for a, b in zip(points, points[1:]):
        hexes.extend(a.line_to(b)[1:])
    return Area(hexes)


def polygon(*points: Hex) -> Area:
    """Filled polygon with vertices *points*; the closing edge is implied.

    Edge hexes are the lattice lines between consecutive vertices.  The
    interior is filled column by column with the even-odd rule, using the
    exact crossing of each edge with the column ``q``.
    """
    if len(points) == 0:
        return Area()
    if len(points) == 1:
        return Area(points)
    if len(points) == 2:
        return line(*points)

    hexes: Dict[Hex, None] = dict.fromkeys(line(*points, points[0]))
    for q in range(min(p.q for p in points), max(p.q for p in points) + 1):
        crossings = _column_crossings(points, q)
        for lo, hi in zip(crossings[::2], crossings[1::2]):
            for r in range(math.ceil(lo), math.floor(hi) + 1):
                hexes[Hex(q, r)] = None
    return Area(hexes)


def _column_crossings(points: Sequence[Hex], q: int) -> List[Fraction]:
    """Sorted ``r`` values where the polygon outline crosses column *q*.

    Edges are half-open in ``q`` so a vertex shared by two edges is counted
    once; edges along the column itself are skipped.
    """
    out: List[Fraction] = []
    n = len(points)
    for i in range(n):
        a = points[i]
        b = points[(i + 1) % n]
        if a.q == b.q:
            continue
        if a.q <= q < b.q or b.q <= q < a.q:
            out.append(a.r + Fraction(b.r - a.r, b.q - a.q) * (q - a.q))
    out.sort()
    return out
