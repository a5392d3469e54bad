"""Uniform sampling of curves into numpy arrays."""

from __future__ import annotations

from typing import Tuple

import numpy as np
import numpy.typing as npt

from hexcoord import to_cartesian_array

from .curve import Curve

_Array = npt.NDArray[np.floating]


def sample_curve(
    curve: Curve,
    num: int,
    cartesian: bool = False,
) -> Tuple[_Array, _Array, _Array]:
    """Sample *curve* at *num* evenly spaced parameters in ``[0, 1]``.

    Parameters
    ----------
    curve:
        Any :class:`~hexcurve.curve.Curve`.
    num:
        Number of samples; both ends are included when ``num >= 2``.
    cartesian:
        Convert the results from axial ``(q, r)`` to Cartesian ``(x, y)``.

    Returns
    -------
    tuple of numpy.ndarray
        ``(positions, tangents, curvatures)``, each of shape ``(num, 2)``.
    """
    if num < 0:
        raise ValueError(f"num must be non-negative, got {num}")
    ts = np.linspace(0.0, 1.0, num)
    out = np.empty((3, num, 2), dtype=float)
    for k, t in enumerate(ts):
        position, tangent, curvature = curve.sample(float(t))
        out[0, k] = (position.q, position.r)
        out[1, k] = (tangent.q, tangent.r)
        out[2, k] = (curvature.q, curvature.r)
    if cartesian:
        out = to_cartesian_array(out)
    return out[0], out[1], out[2]
