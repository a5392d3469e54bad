"""Axial bounding boxes and the area relationship classifier."""

from __future__ import annotations

import enum
from concurrent.futures import Executor
from typing import TYPE_CHECKING, NamedTuple, Optional, Tuple

from .pool import fork_join

if TYPE_CHECKING:
    from .area import Area

__all__ = ["Bounds", "Bounding", "might_overlap", "check_bounding"]


class Bounds(NamedTuple):
    """Inclusive bounding box in axial coordinates."""

    min_q: int
    max_q: int
    min_r: int
    max_r: int

    def overlaps(self, other: Bounds) -> bool:
        """True when the boxes intersect on both the q and the r axis."""
        return (
            self.min_q <= other.max_q and other.min_q <= self.max_q
            and self.min_r <= other.max_r and other.min_r <= self.max_r
        )

    def union(self, other: Bounds) -> Bounds:
        return Bounds(
            min(self.min_q, other.min_q),
            max(self.max_q, other.max_q),
            min(self.min_r, other.min_r),
            max(self.max_r, other.max_r),
        )


class Bounding(enum.Enum):
    """Relationship between two areas ``a`` and ``b``."""

    #: Either area is empty.
    UNDEFINED = 0
    #: No hex in common.
    DISTINCT = 1
    #: Some hexes in common, and each side has hexes the other lacks.
    OVERLAP = 2
    #: Every hex of ``b`` is in ``a``.
    CONTAINS = 3
    #: Every hex of ``a`` is in ``b``.
    CONTAINED_BY = 4
    #: Same hexes.
    EQUALS = 5


def might_overlap(a: Area, b: Area) -> bool:
    """Cheap bounding-box test; ``False`` guarantees the areas are disjoint."""
    if not len(a) or not len(b):
        return False
    return a.bounds().overlaps(b.bounds())


def _scan(src: Area, other: Area) -> Tuple[bool, bool]:
    """Return ``(shared, subset)`` for the hexes of *src* against *other*."""
    shared = False
    subset = True
    for h in src:
        if h in other:
            shared = True
        else:
            subset = False
    return shared, subset


def check_bounding(a: Area, b: Area, executor: Optional[Executor] = None) -> Bounding:
    """Classify how *a* relates to *b*.

    Both areas are scanned concurrently, one pass per operand.
    """
    if not len(a) or not len(b):
        return Bounding.UNDEFINED
    if not might_overlap(a, b):
        return Bounding.DISTINCT

    (shared_a, contained_by), (shared_b, contains) = fork_join(
        lambda: _scan(a, b),
        lambda: _scan(b, a),
        executor,
    )

    if not (shared_a or shared_b):
        return Bounding.DISTINCT
    if contains and contained_by:
        return Bounding.EQUALS
    if contains:
        return Bounding.CONTAINS
    if contained_by:
        return Bounding.CONTAINED_BY
    return Bounding.OVERLAP
