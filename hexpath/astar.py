"""A* search over the hex grid."""

from __future__ import annotations

import logging
from typing import Dict, List, NamedTuple, Optional, Tuple

from hexcoord import Hex

from .pather import Pather
from .pq import PriorityQueue

logger = logging.getLogger(__name__)

__all__ = ["PathResult", "path_to"]


class PathResult(NamedTuple):
    """Outcome of :func:`path_to`.

    ``path`` runs from the start (first) to the target (last), each step a
    neighbour of the previous one.  When no path exists ``path`` is empty,
    ``cost`` is 0 and ``found`` is ``False``.
    """

    path: List[Hex]
    cost: int
    found: bool


_NOT_FOUND = PathResult([], 0, False)


def _unwind(visited: Dict[Hex, Tuple[Hex, int]], start: Hex, end: Hex) -> List[Hex]:
    path = [end]
    cur = end
    while cur != start:
        cur = visited[cur][0]
        path.append(cur)
    path.reverse()
    return path


def path_to(
    start: Hex,
    target: Hex,
    pather: Pather,
    max_expansions: Optional[int] = None,
) -> PathResult:
    """Find a least-cost path from *start* to *target*.

    Parameters
    ----------
    start, target:
        End points of the search.
    pather:
        Supplies edge costs and an admissible heuristic; see
        :class:`~hexpath.pather.Pather`.
    max_expansions:
        Give up (and report no path) after expanding this many hexes.
        ``None`` searches until the open set is exhausted, which never
        happens on an unbounded grid with an unreachable target.

    Returns
    -------
    PathResult
        ``(path, cost, found)``.
    """
    if start == target:
        return PathResult([start], 0, True)

    # hex -> (parent, cost from start)
    visited: Dict[Hex, Tuple[Hex, int]] = {start: (start, 0)}
    frontier: PriorityQueue[Hex] = PriorityQueue()
    frontier.push(start, 0)
    expansions = 0

    while frontier:
        current, _ = frontier.pop()
        if current == target:
            path = _unwind(visited, start, target)
            cost = visited[target][1]
            logger.debug(
                "Path %s -> %s found after %d expansions (cost %d)",
                start, target, expansions, cost,
            )
            return PathResult(path, cost, True)

        if max_expansions is not None and expansions >= max_expansions:
            logger.warning(
                "Path search %s -> %s abandoned after %d expansions",
                start, target, expansions,
            )
            return _NOT_FOUND
        expansions += 1

        g = visited[current][1]
        for direction, nxt in enumerate(current.neighbors()):
            edge = pather.cost(current, direction)
            if edge < 0:
                continue
            new_g = g + edge
            known = visited.get(nxt)
            if known is not None and known[1] <= new_g:
                continue
            h = pather.estimated_cost(nxt, target)
            if h < 0:
                continue
            visited[nxt] = (current, new_g)
            frontier.push(nxt, new_g + h)

    logger.debug("No path %s -> %s after %d expansions", start, target, expansions)
    return _NOT_FOUND
