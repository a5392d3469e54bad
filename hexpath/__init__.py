"""
hexpath — A* Pathfinding on Hex Grids
=====================================

Quick start
-----------

::

    from hexcoord import Hex
    from hexpath import WallPather, path_to

    walls = [Hex(1, 0), Hex(1, -1)]
    result = path_to(Hex(0, 0), Hex(3, 0), WallPather(walls))
    result.found, result.cost, result.path[-1]
"""

from .astar import PathResult, path_to
from .pather import Pather, WallPather
from .pq import PriorityQueue

__all__ = [
    "path_to",
    "PathResult",
    "Pather",
    "WallPather",
    "PriorityQueue",
]
