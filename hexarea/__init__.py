"""
hexarea — Hex Area Algebra
==========================

Sets of hexes combined with constructive solid geometry.

Implemented features
--------------------
- :class:`Area`: a set of hexes with a cached axial bounding box
- Lazy :class:`Builder` trees: union, intersection, subtract, rotate,
  translate, matrix transform; evaluated by :meth:`Builder.build` with the
  two operands of every binary node evaluated concurrently
- Bounding classifier: :func:`check_bounding`, :func:`might_overlap`
- Primitives: :func:`big_hex`, :func:`ring`, :func:`spiral`,
  :func:`rectangle`, :func:`circle`, :func:`line`, :func:`polygon`

Quick start
-----------

::

    from hexcoord import Hex
    from hexarea import big_hex, ring

    o = Hex(0, 0)
    donut = big_hex(o, 5).subtract(big_hex(o, 2)).build()
    donut.size()                          # 72
    donut.equals(ring(o, 3).union(ring(o, 4)).union(ring(o, 5)).build())
"""

from _hex_common import BuildCancelledError, EmptyAreaError

from .area import Area, Builder, new_builder
from .bounds import Bounding, Bounds, check_bounding, might_overlap
from .pool import fork_join, get_executor
from .primitives import big_hex, circle, line, polygon, rectangle, ring, spiral

__all__ = [
    # Areas
    "Area",
    "Builder",
    "new_builder",

    # Bounding
    "Bounds",
    "Bounding",
    "check_bounding",
    "might_overlap",

    # Concurrency
    "get_executor",
    "fork_join",

    # Primitives
    "big_hex",
    "ring",
    "spiral",
    "rectangle",
    "circle",
    "line",
    "polygon",

    # Errors
    "EmptyAreaError",
    "BuildCancelledError",
]
