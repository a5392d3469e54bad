"""Integer transformation matrices for cube coordinates.

Every matrix is a ``(4, 4)`` ``int64`` array acting on the homogeneous
column vector ``(q, r, s, 1)``.  Rotations are about the origin; combine
them with :func:`translation_matrix` to pivot about another hex.
"""

from __future__ import annotations

from functools import reduce
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from _hex_common import bound_facing

if TYPE_CHECKING:
    from .pos import Hex

_Matrix = npt.NDArray[np.int64]

__all__ = [
    "ROTATION_MATRICES", "IDENTITY",
    "rotation_matrix", "translation_matrix", "rotation_about", "compose",
    "apply_matrix",
]


# ---------------------------------------------------------------------------
# Rotation table (index k rotates by k * 60 degrees counterclockwise)
# ---------------------------------------------------------------------------
ROTATION_MATRICES: tuple[_Matrix, ...] = tuple(
    np.array(m, dtype=np.int64)
    for m in (
        [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]],
        [[0, 0, -1, 0], [-1, 0, 0, 0], [0, -1, 0, 0], [0, 0, 0, 1]],
        [[0, 1, 0, 0], [0, 0, 1, 0], [1, 0, 0, 0], [0, 0, 0, 1]],
        [[-1, 0, 0, 0], [0, -1, 0, 0], [0, 0, -1, 0], [0, 0, 0, 1]],
        [[0, 0, 1, 0], [1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 0, 1]],
        [[0, -1, 0, 0], [0, 0, -1, 0], [-1, 0, 0, 0], [0, 0, 0, 1]],
    )
)
for _m in ROTATION_MATRICES:
    _m.setflags(write=False)

IDENTITY: _Matrix = ROTATION_MATRICES[0]


def rotation_matrix(direction: int) -> _Matrix:
    """Matrix rotating ``direction * 60`` degrees counterclockwise about the origin."""
    return ROTATION_MATRICES[bound_facing(direction)]


def translation_matrix(offset: "Hex") -> _Matrix:
    """Matrix adding *offset* to every coordinate, ``s`` included."""
    return np.array(
        [
            [1, 0, 0, offset.q],
            [0, 1, 0, offset.r],
            [0, 0, 1, offset.s],
            [0, 0, 0, 1],
        ],
        dtype=np.int64,
    )


def compose(*matrices: _Matrix) -> _Matrix:
    """Matrix product of *matrices*; the rightmost one is applied first."""
    if not matrices:
        return IDENTITY.copy()
    return reduce(np.matmul, matrices)


def rotation_about(pivot: "Hex", direction: int) -> _Matrix:
    """Matrix rotating ``direction * 60`` degrees counterclockwise about *pivot*."""
    return compose(
        translation_matrix(pivot),
        rotation_matrix(direction),
        translation_matrix(-pivot),
    )


def apply_matrix(qr: npt.NDArray[np.int64], matrix: _Matrix) -> npt.NDArray[np.int64]:
    """Transform an ``(N, 2)`` array of axial coordinates by *matrix*.

    Raises
    ------
    ValueError
        If the matrix does not keep ``q + r + s == 0`` for every row.
    """
    qr = np.asarray(qr, dtype=np.int64).reshape(-1, 2)
    n = qr.shape[0]
    homog = np.empty((n, 4), dtype=np.int64)
    homog[:, 0:2] = qr
    homog[:, 2] = -(qr[:, 0] + qr[:, 1])
    homog[:, 3] = 1
    out = homog @ np.asarray(matrix, dtype=np.int64).T
    if n and np.any(out[:, 0] + out[:, 1] + out[:, 2] != 0):
        raise ValueError("transformation matrix does not preserve q + r + s == 0")
    return out[:, 0:2]
