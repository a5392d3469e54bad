"""Areas of hexes and the lazy CSG builder that produces them.

A :class:`Builder` describes an area without computing it.  Combinators
(:meth:`~Builder.union`, :meth:`~Builder.intersection`,
:meth:`~Builder.subtract`) and transforms (:meth:`~Builder.rotate`,
:meth:`~Builder.translate`, :meth:`~Builder.transform`) return new nodes;
nothing is evaluated until :meth:`~Builder.build` is called.

During ``build()`` the two operands of every binary node are evaluated
concurrently (one on the shared pool, one on the calling thread) and joined
before they are combined.  An optional :class:`threading.Event` cancels the
evaluation; it is checked before each node, after each join and after each
combine, and raises :class:`~_hex_common.BuildCancelledError` once set.
"""

from __future__ import annotations

import abc
import logging
import threading
from concurrent.futures import Executor
from typing import Callable, Dict, Iterable, Iterator, List, Optional

import numpy as np
import numpy.typing as npt

from _hex_common import BuildCancelledError, EmptyAreaError
from hexcoord import (
    Hex,
    HexFractional,
    apply_matrix,
    center,
    compose,
    rotation_about,
    translation_matrix,
)

from .bounds import Bounding, Bounds, check_bounding, might_overlap
from .pool import fork_join

logger = logging.getLogger(__name__)

__all__ = ["Builder", "Area", "new_builder"]

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------
_Matrix = npt.NDArray[np.int64]
_Cancel = Optional[threading.Event]


def _check_cancel(cancel: _Cancel) -> None:
    if cancel is not None and cancel.is_set():
        raise BuildCancelledError("area build cancelled")


# ===========================================================================
# Builder
# ===========================================================================

class Builder(abc.ABC):
    """Lazy description of an :class:`Area`.

    Implements:
    - Boolean operations: :meth:`union`, :meth:`intersection`, :meth:`subtract`
    - Transforms:         :meth:`rotate`, :meth:`translate`, :meth:`transform`
    - Evaluation:         :meth:`build`
    """

    @abc.abstractmethod
    def _evaluate(self, cancel: _Cancel, executor: Optional[Executor]) -> Area:
        """Materialise this node.  Bounds of the result may still be dirty."""

    def build(
        self,
        cancel: _Cancel = None,
        executor: Optional[Executor] = None,
    ) -> Area:
        """Evaluate the tree into an :class:`Area`.

        Parameters
        ----------
        cancel:
            Optional event; once set, evaluation stops with
            :class:`~_hex_common.BuildCancelledError`.
        executor:
            Executor for the forked operand of each binary node.  Defaults
            to the shared pool from :func:`hexarea.pool.get_executor`.

        Returns
        -------
        Area
            A new area (or an operand area that needed no change) with a
            clean bounding box.
        """
        try:
            area = self._evaluate(cancel, executor)
        except BuildCancelledError:
            logger.debug("Build of %s cancelled", type(self).__name__)
            raise
        return area._ensure_bounds()

    # ------------------------------------------------------------------
    # Boolean operations
    # ------------------------------------------------------------------

    def union(self, other: Builder) -> Builder:
        """Hexes in either operand."""
        return _BinaryNode(_union, self, other)

    def intersection(self, other: Builder) -> Builder:
        """Hexes in both operands."""
        return _BinaryNode(_intersection, self, other)

    def subtract(self, other: Builder) -> Builder:
        """Hexes of this operand that are not in *other*."""
        return _BinaryNode(_subtract, self, other)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def rotate(self, pivot: Hex, direction: int) -> Builder:
        """Rotate ``direction * 60`` degrees counterclockwise about *pivot*."""
        return self.transform(rotation_about(pivot, direction))

    def translate(self, offset: Hex) -> Builder:
        """Move every hex by *offset*."""
        return self.transform(translation_matrix(offset))

    def transform(self, matrix: _Matrix) -> Builder:
        """Apply a ``(4, 4)`` integer matrix to every hex.

        Scaling matrices are applied as-is; the gaps they open are not filled.
        """
        return _TransformNode(self, _as_matrix(matrix))


def _as_matrix(matrix: _Matrix) -> _Matrix:
    m = np.asarray(matrix, dtype=np.int64)
    if m.shape != (4, 4):
        raise ValueError(f"expected a (4, 4) matrix, got shape {m.shape}")
    return m


# ===========================================================================
# Area
# ===========================================================================

class Area(Builder):
    """A set of hexes with a cached axial bounding box.

    An ``Area`` is the leaf of every builder tree.  Iteration follows
    insertion order, which carries no meaning beyond being repeatable for
    an unchanged area.
    """

    def __init__(self, hexes: Iterable[Hex] = ()) -> None:
        self._hexes: Dict[Hex, None] = dict.fromkeys(hexes)
        self._bounds: Optional[Bounds] = None

    @classmethod
    def _wrap(cls, hexes: Dict[Hex, None], bounds: Optional[Bounds] = None) -> Area:
        area = cls.__new__(cls)
        area._hexes = hexes
        area._bounds = bounds if hexes else None
        return area

    @classmethod
    def from_array(cls, qr: npt.ArrayLike) -> Area:
        """Build an area from an ``(N, 2)`` array of axial coordinates."""
        arr = np.asarray(qr, dtype=np.int64).reshape(-1, 2)
        return cls(Hex(q, r) for q, r in arr.tolist())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains(self, h: Hex) -> bool:
        return h in self._hexes

    __contains__ = contains

    def contains_hexes(self, *hexes: Hex) -> bool:
        """True when every one of *hexes* is in the area."""
        return all(h in self._hexes for h in hexes)

    def slice(self) -> List[Hex]:
        """The hexes as a list."""
        return list(self._hexes)

    def size(self) -> int:
        return len(self._hexes)

    def __len__(self) -> int:
        return len(self._hexes)

    def __iter__(self) -> Iterator[Hex]:
        return iter(self._hexes)

    def center(self) -> HexFractional:
        """Centre of mass of the area."""
        return center(*self._hexes)

    def to_array(self) -> npt.NDArray[np.int64]:
        """The hexes as an ``(N, 2)`` array of ``(q, r)`` rows."""
        if not self._hexes:
            return np.empty((0, 2), dtype=np.int64)
        return np.array([(h.q, h.r) for h in self._hexes], dtype=np.int64)

    # ------------------------------------------------------------------
    # Bounds and comparison
    # ------------------------------------------------------------------

    @property
    def bounds_clean(self) -> bool:
        return self._bounds is not None

    def _ensure_bounds(self) -> Area:
        if not self._hexes:
            self._bounds = None
        elif self._bounds is None:
            arr = self.to_array()
            q, r = arr[:, 0], arr[:, 1]
            self._bounds = Bounds(int(q.min()), int(q.max()), int(r.min()), int(r.max()))
        return self

    def bounds(self) -> Bounds:
        """Axial bounding box ``(min_q, max_q, min_r, max_r)``.

        Raises
        ------
        EmptyAreaError
            If the area has no hexes.
        """
        self._ensure_bounds()
        if self._bounds is None:
            raise EmptyAreaError("no bounds for an empty area")
        return self._bounds

    def check_bounding(self, other: Area, executor: Optional[Executor] = None) -> Bounding:
        """How this area relates to *other*; see :class:`Bounding`."""
        return check_bounding(self, other, executor)

    def equals(self, other: Area) -> bool:
        """True when both areas hold exactly the same hexes."""
        if not self._hexes and not other._hexes:
            return True
        return check_bounding(self, other) is Bounding.EQUALS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Area):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        keys = sorted(f'{{"Q":{h.q},"R":{h.r}}}' for h in self._hexes)
        return "[" + ",".join(keys) + "]"

    def __repr__(self) -> str:
        return f"Area(size={len(self._hexes)})"

    # ------------------------------------------------------------------
    # Builder
    # ------------------------------------------------------------------

    def _evaluate(self, cancel: _Cancel, executor: Optional[Executor]) -> Area:
        _check_cancel(cancel)
        return self._ensure_bounds()


def new_builder(*hexes: Hex) -> Builder:
    """A leaf builder holding *hexes*."""
    return Area(hexes)


# ===========================================================================
# Combinators
# ===========================================================================

def _union(a: Area, b: Area) -> Area:
    hexes = dict(a._hexes)
    hexes.update(b._hexes)
    if a.bounds_clean and b.bounds_clean:
        return Area._wrap(hexes, a._bounds.union(b._bounds))
    return Area._wrap(hexes)


def _intersection(a: Area, b: Area) -> Area:
    if a.bounds_clean and b.bounds_clean and not might_overlap(a, b):
        return Area()
    small, big = (a, b) if len(a) <= len(b) else (b, a)
    return Area._wrap({h: None for h in small._hexes if h in big._hexes})


def _subtract(a: Area, b: Area) -> Area:
    if a.bounds_clean and b.bounds_clean and not might_overlap(a, b):
        return a
    return Area._wrap({h: None for h in a._hexes if h not in b._hexes})


def _apply(area: Area, matrix: _Matrix) -> Area:
    if not len(area):
        return Area()
    out = apply_matrix(area.to_array(), matrix)
    hexes = dict.fromkeys(Hex(q, r) for q, r in out.tolist())
    bounds = Bounds(
        int(out[:, 0].min()), int(out[:, 0].max()),
        int(out[:, 1].min()), int(out[:, 1].max()),
    )
    return Area._wrap(hexes, bounds)


# ===========================================================================
# Tree nodes
# ===========================================================================

class _BinaryNode(Builder):
    """Combines two operand trees with one of the combinators above."""

    def __init__(self, op: Callable[[Area, Area], Area], left: Builder, right: Builder) -> None:
        self._op = op
        self._left = left
        self._right = right

    def _evaluate(self, cancel: _Cancel, executor: Optional[Executor]) -> Area:
        _check_cancel(cancel)
        a, b = fork_join(
            lambda: self._left._evaluate(cancel, executor),
            lambda: self._right._evaluate(cancel, executor),
            executor,
        )
        _check_cancel(cancel)
        result = self._op(a, b)
        _check_cancel(cancel)
        return result


class _TransformNode(Builder):
    """Applies an integer matrix to every hex of its operand."""

    def __init__(self, child: Builder, matrix: _Matrix) -> None:
        self._child = child
        self._matrix = matrix

    def transform(self, matrix: _Matrix) -> Builder:
        # Fold consecutive transforms into one matrix.
        return _TransformNode(self._child, compose(_as_matrix(matrix), self._matrix))

    def _evaluate(self, cancel: _Cancel, executor: Optional[Executor]) -> Area:
        _check_cancel(cancel)
        area = self._child._evaluate(cancel, executor)
        _check_cancel(cancel)
        return _apply(area, self._matrix)
