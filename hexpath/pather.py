"""Domain knowledge consumed by the path finder."""

from __future__ import annotations

from typing import FrozenSet, Iterable, Protocol

from hexcoord import Hex

__all__ = ["Pather", "WallPather"]


class Pather(Protocol):
    """Move costs and distance estimates for :func:`hexpath.path_to`."""

    def cost(self, a: Hex, direction: int) -> int:
        """Cost of stepping from *a* to ``a.neighbor(direction)``.

        Higher is less desirable; negative means impassable.
        """
        ...

    def estimated_cost(self, a: Hex, b: Hex) -> int:
        """Admissible estimate of the cost from *a* to *b*.

        Must never overestimate.  Negative marks *a* as impassable.
        """
        ...


class WallPather:
    """Unit move cost everywhere except into *walls*, which are impassable.

    With ``heuristic=False`` the estimate is always 0 and the search
    behaves like Dijkstra's algorithm.
    """

    def __init__(self, walls: Iterable[Hex] = (), heuristic: bool = True) -> None:
        self.walls: FrozenSet[Hex] = frozenset(walls)
        self.heuristic = heuristic

    def cost(self, a: Hex, direction: int) -> int:
        if a.neighbor(direction) in self.walls:
            return -1
        return 1

    def estimated_cost(self, a: Hex, b: Hex) -> int:
        if not self.heuristic:
            return 0
        return a.distance_to(b)
