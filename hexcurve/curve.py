"""Parametric curves in fractional hex space.

Every curve is sampled with ``t`` in ``[0, 1]``; a sample yields the
position, the unit tangent and the curvature vector (pointing toward the
centre of curvature, with magnitude ``1 / radius``).

Spin follows the rotation sense of :meth:`hexcoord.Hex.rotate`: an arc is
:attr:`Spin.COUNTER_CLOCKWISE` when it turns the way increasing direction
indices turn.
"""

from __future__ import annotations

import abc
import enum
import math
from typing import List, NamedTuple, Sequence, Tuple

import numpy as np

from _hex_common import EPSILON, NumericDegenerateError, OutOfRangeError
from hexcoord import HexFractional, lerp_fractional

__all__ = [
    "Spin", "Sample", "Curve", "Line", "Arc", "Piecewise",
    "join", "signed_area",
]

_TWO_PI = 2.0 * math.pi


class Spin(enum.Enum):
    """Traversal direction of a curve.

    A negative :func:`signed_area` means ``COUNTER_CLOCKWISE`` here, the
    sense of increasing direction indices, not the y-up Cartesian sense.
    """

    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"
    #: Lines, and piecewise curves whose parts disagree.
    NONE = "none"


class Sample(NamedTuple):
    position: HexFractional
    tangent: HexFractional
    curvature: HexFractional


def signed_area(a: HexFractional, b: HexFractional, c: HexFractional) -> float:
    """Twice the signed area of triangle ``abc`` in axial coordinates.

    Only the sign and closeness to zero are meaningful: zero for collinear
    points, negative when ``a -> b -> c`` turns counterclockwise.
    """
    return a.q * (b.r - c.r) + b.q * (c.r - a.r) + c.q * (a.r - b.r)


def _check_t(t: float) -> None:
    if not 0.0 <= t <= 1.0:
        raise OutOfRangeError(f"curve parameter t={t} is outside [0, 1]")


# ===========================================================================
# Base class
# ===========================================================================

class Curve(abc.ABC):
    """A continuous curve segment."""

    @abc.abstractmethod
    def sample(self, t: float) -> Sample:
        """Position, tangent and curvature at *t*.

        Raises
        ------
        OutOfRangeError
            If *t* is outside ``[0, 1]``.
        """

    @abc.abstractmethod
    def length(self) -> float:
        """Arc length, in hex units."""

    @abc.abstractmethod
    def spin(self) -> Spin:
        """Traversal direction."""


# ===========================================================================
# Line
# ===========================================================================

class Line(Curve):
    """Straight segment from *i* to *e*."""

    def __init__(self, i: HexFractional, e: HexFractional) -> None:
        self.i = i
        self.e = e
        self._length = i.distance_to(e)
        self.slope = (e - i).normalize()

    def sample(self, t: float) -> Sample:
        _check_t(t)
        return Sample(lerp_fractional(self.i, self.e, t), self.slope, HexFractional.origin())

    def length(self) -> float:
        return self._length

    def spin(self) -> Spin:
        return Spin.NONE

    def __repr__(self) -> str:
        return f"Line({self.i}, {self.e})"


# ===========================================================================
# Arc
# ===========================================================================

class Arc(Curve):
    """Circular arc leaving *pi* with unit tangent *ti* and ending at *pe*.

    Raises
    ------
    NumericDegenerateError
        If ``pi``, ``pi + ti`` and ``pe`` are collinear, in which case no
        circle fits; :meth:`hexcurve.CircularArc.to_curve` turns that case
        into a :class:`Line`.
    """

    def __init__(self, pi: HexFractional, ti: HexFractional, pe: HexFractional) -> None:
        orientation = signed_area(pi, pi + ti, pe)
        if abs(orientation) < EPSILON:
            raise NumericDegenerateError(f"arc from {pi} along {ti} to {pe} is a straight line")

        # The centre lies on the normal to ti through pi and on the
        # perpendicular bisector of the chord.
        p = np.array(pi.to_cartesian())
        t = np.array(ti.to_cartesian())
        mid = np.array(lerp_fractional(pi, pe, 0.5).to_cartesian())
        chord = np.array(pe.to_cartesian()) - p
        try:
            cx, cy = np.linalg.solve(np.stack([t, chord]), np.array([t @ p, chord @ mid]))
        except np.linalg.LinAlgError as exc:
            raise NumericDegenerateError(f"no circle through {pi} and {pe} tangent to {ti}") from exc

        self.pi = pi
        self.ti = ti
        self.pe = pe
        self.center = HexFractional.from_cartesian(float(cx), float(cy))
        self.radius = pi.distance_to(self.center)
        self._cartesian_center = (float(cx), float(cy))
        self._cartesian_radius = float(np.hypot(p[0] - cx, p[1] - cy))

        px, py = pi.to_cartesian()
        ex, ey = pe.to_cartesian()
        self.start_angle = math.atan2(py - cy, px - cx) % _TWO_PI
        self.end_angle = math.atan2(ey - cy, ex - cx) % _TWO_PI

        self._spin = Spin.COUNTER_CLOCKWISE if orientation < 0 else Spin.CLOCKWISE
        if self._spin is Spin.COUNTER_CLOCKWISE:
            self.central_angle = (self.start_angle - self.end_angle) % _TWO_PI
        else:
            self.central_angle = (self.end_angle - self.start_angle) % _TWO_PI
        self._length = self.radius * self.central_angle

    def _angle(self, t: float) -> float:
        if self._spin is Spin.COUNTER_CLOCKWISE:
            return self.start_angle - t * self.central_angle
        return self.start_angle + t * self.central_angle

    def sample(self, t: float) -> Sample:
        _check_t(t)
        a = self._angle(t)
        cos_a = math.cos(a)
        sin_a = math.sin(a)
        cx, cy = self._cartesian_center
        rc = self._cartesian_radius
        position = HexFractional.from_cartesian(cx + rc * cos_a, cy + rc * sin_a)

        if self._spin is Spin.COUNTER_CLOCKWISE:
            tangent = HexFractional.from_cartesian(sin_a, -cos_a)
        else:
            tangent = HexFractional.from_cartesian(-sin_a, cos_a)

        curvature = (self.center - position).normalize() * (1.0 / self.radius)
        return Sample(position, tangent.normalize(), curvature)

    def length(self) -> float:
        return self._length

    def spin(self) -> Spin:
        return self._spin

    def __repr__(self) -> str:
        return (
            f"Arc(center={self.center}, radius={self.radius:.3f}, "
            f"central_angle={self.central_angle:.3f}, spin={self._spin.name})"
        )


# ===========================================================================
# Piecewise
# ===========================================================================

class Piecewise(Curve):
    """Consecutive curves sampled as one.

    ``t`` is spread over the parts by arc length.  No check is made that the
    parts actually connect.
    """

    def __init__(self, segments: Sequence[Curve]) -> None:
        if not segments:
            raise ValueError("a piecewise curve needs at least one segment")
        self.segments: Tuple[Curve, ...] = tuple(segments)
        self._lengths: List[float] = [s.length() for s in self.segments]
        self._length = math.fsum(self._lengths)

    def sample(self, t: float) -> Sample:
        _check_t(t)
        target = t * self._length
        running = 0.0
        for seg, seg_len in zip(self.segments, self._lengths):
            if seg_len > 0.0 and target <= running + seg_len:
                local = min(max((target - running) / seg_len, 0.0), 1.0)
                return seg.sample(local)
            running += seg_len
        # Rounding can leave t == 1 just past the summed lengths.
        return self.segments[-1].sample(1.0)

    def length(self) -> float:
        return self._length

    def spin(self) -> Spin:
        spins = {s.spin() for s in self.segments}
        if len(spins) == 1:
            return spins.pop()
        return Spin.NONE

    def __len__(self) -> int:
        return len(self.segments)


def join(*curves: Curve) -> Piecewise:
    """Concatenate *curves* into one :class:`Piecewise` curve."""
    return Piecewise(curves)
