"""
hexcoord — Hexagonal Grid Coordinates
=====================================

Exact integer hex cells and real-valued hex-space points, plus the
integer matrices used to rotate and translate them.

Implemented features
--------------------
- Exact cells: :class:`Hex` (arithmetic, distance, neighbours, rings,
  spirals, lattice lines, rotation about a pivot)
- Fractional points: :class:`HexFractional` (Euclidean metric in hex
  units, rotation, projection, cube rounding, Cartesian conversion)
- Matrices: :func:`rotation_matrix`, :func:`translation_matrix`,
  :func:`rotation_about`, :func:`compose`, :func:`apply_matrix`

Quick start
-----------

::

    from hexcoord import Hex

    a = Hex(0, 0)
    b = Hex(3, -1)
    a.distance_to(b)           # 3
    a.line_to(b)               # 4 hexes, a first, b last
    b.rotate(a, 2)             # Hex(-1, -2)
"""

from _hex_common import (
    EPSILON,
    MAX_ULPS,
    HexcoordError,
    NumericDegenerateError,
    almost_equal,
    bound_facing,
    close_enough,
)

from .pos import (
    DIRECTIONS,
    Hex,
    HexFractional,
    center,
    direction,
    from_cartesian_array,
    lerp_fractional,
    lerp_hex,
    to_cartesian_array,
)
from .matrix import (
    IDENTITY,
    ROTATION_MATRICES,
    apply_matrix,
    compose,
    rotation_about,
    rotation_matrix,
    translation_matrix,
)

__version__ = "0.1.0"

__all__ = [
    # Coordinates
    "Hex",
    "HexFractional",
    "DIRECTIONS",
    "direction",
    "center",
    "lerp_hex",
    "lerp_fractional",
    "to_cartesian_array",
    "from_cartesian_array",

    # Matrices
    "IDENTITY",
    "ROTATION_MATRICES",
    "rotation_matrix",
    "translation_matrix",
    "rotation_about",
    "compose",
    "apply_matrix",

    # Numerics
    "EPSILON",
    "MAX_ULPS",
    "close_enough",
    "almost_equal",
    "bound_facing",

    # Errors
    "HexcoordError",
    "NumericDegenerateError",
]
