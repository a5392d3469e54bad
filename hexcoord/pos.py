"""Exact and fractional hex coordinates.

Coordinates are axial ``(q, r)``; the third cube coordinate
``s = -(q + r)`` is always derived, never stored.

Directions (index: axial offset)::

    0: (+1,  0)    3: (-1,  0)
    1: (+1, -1)    4: (-1, +1)
    2: ( 0, -1)    5: ( 0, +1)

Increasing the direction index turns counterclockwise; :meth:`Hex.rotate`
and :meth:`HexFractional.rotate` turn the same way.

Cartesian mapping (unit spacing between neighbouring centres is ``sqrt(3)``)::

    x = sqrt(3) * q + sqrt(3) / 2 * r
    y = 3 / 2 * r
"""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np
import numpy.typing as npt

from _hex_common import (
    NumericDegenerateError,
    almost_equal,
    bound_facing,
    lerp,
    round_half_away,
    MAX_ULPS,
)

from .matrix import rotation_matrix

_Array = npt.NDArray[np.floating]

__all__ = [
    "Hex", "HexFractional", "DIRECTIONS",
    "direction", "center", "lerp_hex", "lerp_fractional",
    "to_cartesian_array", "from_cartesian_array",
]

_SQRT3 = math.sqrt(3.0)

# ---------------------------------------------------------------------------
# Cartesian mapping and its inverse
# ---------------------------------------------------------------------------
_TO_CARTESIAN = np.array([[_SQRT3, _SQRT3 / 2.0], [0.0, 1.5]])
_FROM_CARTESIAN = np.linalg.inv(_TO_CARTESIAN)

# Axial offsets of the six neighbours, indexed by direction.
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
)


# ===========================================================================
# Exact hex
# ===========================================================================

@dataclass(frozen=True)
class Hex:
    """An exact hex cell in axial coordinates.

    Immutable and hashable, so it can key dicts and live in sets.
    Equality is by ``(q, r)``.
    """

    q: int = 0
    r: int = 0

    @property
    def s(self) -> int:
        """Derived cube coordinate; ``q + r + s == 0`` always holds."""
        return -(self.q + self.r)

    @classmethod
    def origin(cls) -> Hex:
        return cls(0, 0)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Hex) -> Hex:
        return Hex(self.q + other.q, self.r + other.r)

    def __sub__(self, other: Hex) -> Hex:
        return Hex(self.q - other.q, self.r - other.r)

    def __mul__(self, k: int) -> Hex:
        return Hex(self.q * k, self.r * k)

    __rmul__ = __mul__

    def __neg__(self) -> Hex:
        return Hex(-self.q, -self.r)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def length(self) -> int:
        """Manhattan distance to the origin."""
        return (abs(self.q) + abs(self.r) + abs(self.s)) // 2

    def distance_to(self, other: Hex) -> int:
        """Manhattan distance to *other*."""
        return (self - other).length()

    # ------------------------------------------------------------------
    # Neighbourhood
    # ------------------------------------------------------------------

    def neighbor(self, facing: int) -> Hex:
        """The adjacent hex in direction *facing* (any integer)."""
        return self + direction(facing)

    def neighbors(self) -> List[Hex]:
        """The six adjacent hexes, ordered by direction ``0..5``."""
        return [Hex(self.q + dq, self.r + dr) for dq, dr in DIRECTIONS]

    def vertex(self, facing: int) -> HexFractional:
        """Corner shared by this hex, ``neighbor(facing)`` and ``neighbor(facing + 1)``."""
        return center(self, self.neighbor(facing), self.neighbor(facing + 1))

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def transform(self, matrix) -> Hex:
        """Apply a ``(4, 4)`` integer matrix to ``(q, r, s, 1)``.

        Raises
        ------
        ValueError
            If the result does not satisfy ``q + r + s == 0``.
        """
        m = np.asarray(matrix)
        v = (self.q, self.r, self.s, 1)
        q = int(sum(int(m[0, i]) * v[i] for i in range(4)))
        r = int(sum(int(m[1, i]) * v[i] for i in range(4)))
        s = int(sum(int(m[2, i]) * v[i] for i in range(4)))
        if q + r + s != 0:
            raise ValueError("transformation matrix does not preserve q + r + s == 0")
        return Hex(q, r)

    def rotate(self, pivot: Hex, facing: int) -> Hex:
        """Rotate ``facing * 60`` degrees counterclockwise about *pivot*."""
        d = bound_facing(facing)
        if d == 0:
            return self
        return (self - pivot).transform(rotation_matrix(d)) + pivot

    # ------------------------------------------------------------------
    # Shapes as ordered sequences
    # ------------------------------------------------------------------

    def line_to(self, other: Hex) -> List[Hex]:
        """Lattice line from this hex to *other*, both inclusive, in order."""
        n = self.distance_to(other)
        step = 1.0 / max(n, 1)
        return [lerp_hex(self, other, step * i) for i in range(n + 1)]

    def ring(self, radius: int) -> List[Hex]:
        """Hexes at exactly *radius* from this hex, walked neighbour to neighbour."""
        if radius == 0:
            return [self]
        out: List[Hex] = []
        cur = self + direction(4) * radius
        for side in range(6):
            for _ in range(radius):
                out.append(cur)
                cur = cur.neighbor(side)
        return out

    def spiral(self, radius: int) -> List[Hex]:
        """Hexes within *radius*, centre first, then ring by ring outward."""
        return list(self._spiral(radius))

    def _spiral(self, radius: int) -> Iterator[Hex]:
        for k in range(radius + 1):
            yield from self.ring(k)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_fractional(self) -> HexFractional:
        """The fractional point at the centre of this hex."""
        return HexFractional(float(self.q), float(self.r))

    def __str__(self) -> str:
        return f"{{{self.q}, {self.r}, {self.s}}}"


def direction(facing: int) -> Hex:
    """Unit offset for *facing*, normalised onto ``0..5``."""
    dq, dr = DIRECTIONS[bound_facing(facing)]
    return Hex(dq, dr)


def lerp_hex(a: Hex, b: Hex, t: float) -> Hex:
    """Nearest hex to the point ``t`` of the way from *a* to *b*."""
    return HexFractional(lerp(a.q, b.q, t), lerp(a.r, b.r, t)).to_hex()


def center(*hexes: Hex) -> HexFractional:
    """Centre of mass of *hexes*; the origin when none are given."""
    if not hexes:
        return HexFractional.origin()
    q = sum(h.q for h in hexes)
    r = sum(h.r for h in hexes)
    n = float(len(hexes))
    return HexFractional(q / n, r / n)


# ===========================================================================
# Fractional hex
# ===========================================================================

@dataclass(frozen=True)
class HexFractional:
    """A real-valued point (or vector) in axial coordinates.

    Lengths, distances and dot products use the Euclidean metric measured
    in hex units, so neighbouring hex centres are exactly 1 apart.
    """

    q: float = 0.0
    r: float = 0.0

    @property
    def s(self) -> float:
        return -(self.q + self.r)

    @classmethod
    def origin(cls) -> HexFractional:
        return cls(0.0, 0.0)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: HexFractional) -> HexFractional:
        return HexFractional(self.q + other.q, self.r + other.r)

    def __sub__(self, other: HexFractional) -> HexFractional:
        return HexFractional(self.q - other.q, self.r - other.r)

    def __mul__(self, k: float) -> HexFractional:
        return HexFractional(self.q * k, self.r * k)

    __rmul__ = __mul__

    def __neg__(self) -> HexFractional:
        return HexFractional(-self.q, -self.r)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def dot(self, other: HexFractional) -> float:
        """Euclidean dot product in hex units."""
        return (
            self.q * other.q
            + self.r * other.r
            + (self.q * other.r + self.r * other.q) / 2.0
        )

    def length(self) -> float:
        """Euclidean distance to the origin."""
        return math.sqrt(max(self.q * self.q + self.r * self.r + self.q * self.r, 0.0))

    def distance_to(self, other: HexFractional) -> float:
        return (self - other).length()

    def normalize(self) -> HexFractional:
        """Vector with the same direction and length 1.

        Raises
        ------
        NumericDegenerateError
            For the zero vector.
        """
        n = self.length()
        if n == 0.0 or not math.isfinite(n):
            raise NumericDegenerateError(f"cannot normalize {self}")
        return self * (1.0 / n)

    def project_on(self, other: HexFractional) -> HexFractional:
        """Projection of this vector onto *other*."""
        return other * (self.dot(other) / other.dot(other))

    def angle_to(self, other: HexFractional) -> float:
        """Inner angle to *other*, in ``[0, pi]`` radians."""
        quotient = complex(*other.to_cartesian()) / complex(*self.to_cartesian())
        return abs(cmath.phase(quotient))

    def rotate(self, pivot: HexFractional, radians: float) -> HexFractional:
        """Rotate counterclockwise about *pivot* by *radians*."""
        v = complex(*(self - pivot).to_cartesian()) * cmath.exp(-1j * radians)
        return HexFractional.from_cartesian(v.real, v.imag) + pivot

    def almost_equals(self, other: HexFractional, max_ulps: int = MAX_ULPS) -> bool:
        """Component-wise ULP comparison."""
        return almost_equal(self.q, other.q, max_ulps) and almost_equal(self.r, other.r, max_ulps)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_hex(self) -> Hex:
        """Round to the containing hex (cube rounding)."""
        s = self.s
        q = round_half_away(self.q)
        r = round_half_away(self.r)
        rs = round_half_away(s)

        dq = abs(q - self.q)
        dr = abs(r - self.r)
        ds = abs(rs - s)

        if dq > dr and dq > ds:
            q = -r - rs
        elif dr > ds:
            r = -q - rs
        return Hex(q, r)

    def to_cartesian(self) -> Tuple[float, float]:
        x = _SQRT3 * self.q + _SQRT3 / 2.0 * self.r
        y = 1.5 * self.r
        return x, y

    @classmethod
    def from_cartesian(cls, x: float, y: float) -> HexFractional:
        q, r = _FROM_CARTESIAN @ np.array([x, y])
        return cls(float(q), float(r))

    def __str__(self) -> str:
        return f"{{{self.q:.3f}, {self.r:.3f}, {self.s:.3f}}}"


def lerp_fractional(a: HexFractional, b: HexFractional, t: float) -> HexFractional:
    """Point ``t`` of the way from *a* to *b*."""
    return HexFractional(lerp(a.q, b.q, t), lerp(a.r, b.r, t))


# ===========================================================================
# Vectorised conversion
# ===========================================================================

def to_cartesian_array(qr: _Array) -> _Array:
    """Convert a ``(..., 2)`` array of axial points to Cartesian ``(x, y)``."""
    return np.asarray(qr, dtype=float) @ _TO_CARTESIAN.T


def from_cartesian_array(xy: _Array) -> _Array:
    """Convert a ``(..., 2)`` array of Cartesian points to axial ``(q, r)``."""
    return np.asarray(xy, dtype=float) @ _FROM_CARTESIAN.T
