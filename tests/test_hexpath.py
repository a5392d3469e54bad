"""Tests for the hexpath priority queue and A* search."""

import logging
import random

import pytest

from hexcoord import Hex
from hexpath import PathResult, PriorityQueue, WallPather, path_to


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

O = Hex(0, 0)


def _assert_walkable(result: PathResult, start: Hex, target: Hex, walls=()):
    assert result.found
    assert result.path[0] == start
    assert result.path[-1] == target
    for a, b in zip(result.path, result.path[1:]):
        assert a.distance_to(b) == 1
    assert not set(result.path) & set(walls)


class _RiverPather:
    """Entering the hexes ``r == 0, q > 0`` costs 5, everything else 1."""

    def cost(self, a, direction):
        n = a.neighbor(direction)
        return 5 if n.r == 0 and n.q > 0 else 1

    def estimated_cost(self, a, b):
        return a.distance_to(b)


class _ForbiddenPather:
    """Marks hexes impassable through a negative estimate."""

    def __init__(self, forbidden):
        self.forbidden = set(forbidden)

    def cost(self, a, direction):
        return 1

    def estimated_cost(self, a, b):
        if a in self.forbidden:
            return -1
        return a.distance_to(b)


# ===========================================================================
# Priority queue
# ===========================================================================

class TestPriorityQueue:
    def test_pops_in_priority_order(self):
        pq = PriorityQueue()
        for value, priority in [("c", 3), ("a", 1), ("d", 4), ("b", 2)]:
            pq.push(value, priority)
        assert len(pq) == 4
        assert [pq.pop() for _ in range(4)] == [("a", 1), ("b", 2), ("c", 3), ("d", 4)]
        assert not pq

    def test_ties_pop_in_insertion_order(self):
        pq = PriorityQueue()
        for value in "xyz":
            pq.push(value, 7)
        assert [pq.pop()[0] for _ in range(3)] == ["x", "y", "z"]

    def test_decrease_key(self):
        pq = PriorityQueue()
        pq.push("a", 5)
        pq.push("b", 3)
        pq.push("a", 1)
        assert len(pq) == 2
        assert pq.priority("a") == 1
        assert pq.pop() == ("a", 1)

    def test_increase_key(self):
        pq = PriorityQueue()
        pq.push("a", 1)
        pq.push("b", 3)
        pq.update("a", 10)
        assert pq.peek() == ("b", 3)
        assert pq.pop() == ("b", 3)
        assert pq.pop() == ("a", 10)

    def test_update_requeues_ties(self):
        pq = PriorityQueue()
        pq.push("a", 1)
        pq.push("b", 1)
        pq.update("a", 1)
        assert pq.pop()[0] == "b"

    def test_contains(self):
        pq = PriorityQueue()
        pq.push(Hex(1, 2), 0)
        assert Hex(1, 2) in pq
        pq.pop()
        assert Hex(1, 2) not in pq

    def test_errors(self):
        pq = PriorityQueue()
        with pytest.raises(IndexError):
            pq.pop()
        with pytest.raises(IndexError):
            pq.peek()
        with pytest.raises(KeyError):
            pq.update("missing", 1)

    def test_random_heap_order(self):
        rng = random.Random(1234)
        pq = PriorityQueue()
        for value in range(200):
            pq.push(value, rng.randint(0, 50))
        for value in rng.sample(range(200), 60):
            pq.push(value, rng.randint(0, 50))
        popped = [pq.pop()[1] for _ in range(len(pq))]
        assert len(popped) == 200
        assert popped == sorted(popped)


# ===========================================================================
# A*
# ===========================================================================

class TestPathTo:
    def test_start_is_target(self):
        assert path_to(Hex(3, 3), Hex(3, 3), WallPather()) == PathResult([Hex(3, 3)], 0, True)

    def test_open_plane(self):
        target = Hex(10, 10)
        result = path_to(O, target, WallPather())
        _assert_walkable(result, O, target)
        assert result.cost == 20
        assert len(result.path) == 21

    def test_neighbour(self):
        result = path_to(O, Hex(0, 1), WallPather())
        assert result.path == [O, Hex(0, 1)]
        assert result.cost == 1

    def test_dijkstra_mode_matches(self):
        target = Hex(-3, 5)
        astar = path_to(O, target, WallPather())
        dijkstra = path_to(O, target, WallPather(heuristic=False))
        _assert_walkable(dijkstra, O, target)
        assert astar.cost == dijkstra.cost == O.distance_to(target)

    def test_single_wall_detour(self):
        walls = [Hex(1, 0)]
        result = path_to(O, Hex(2, 0), WallPather(walls))
        _assert_walkable(result, O, Hex(2, 0), walls)
        assert result.cost == 3

    def test_wall_with_opening(self):
        walls = [h for h in O.ring(2) if h != Hex(-2, 0)]
        target = Hex(4, 0)
        result = path_to(O, target, WallPather(walls))
        _assert_walkable(result, O, target, walls)
        assert Hex(-2, 0) in result.path
        assert result.cost > O.distance_to(target)
        assert result.cost == len(result.path) - 1
        assert result.cost == path_to(O, target, WallPather(walls, heuristic=False)).cost

    def test_enclosed_start(self):
        result = path_to(O, Hex(5, 0), WallPather(O.ring(2)))
        assert result == PathResult([], 0, False)
        assert not result.found

    def test_max_expansions(self, caplog):
        with caplog.at_level(logging.WARNING, logger="hexpath.astar"):
            result = path_to(O, Hex(40, 40), WallPather(), max_expansions=10)
        assert not result.found
        assert result.path == []
        assert "abandoned" in caplog.text

    def test_generous_max_expansions(self):
        result = path_to(O, Hex(4, 2), WallPather(), max_expansions=1000)
        assert result.found
        assert result.cost == 6

    def test_weighted_costs(self):
        target = Hex(4, 0)
        result = path_to(O, target, _RiverPather())
        _assert_walkable(result, O, target)
        assert result.cost == 9
        assert all(h.r != 0 for h in result.path[1:-1])

    def test_negative_estimate_blocks(self):
        blocked = {Hex(1, 0)}
        result = path_to(O, Hex(2, 0), _ForbiddenPather(blocked))
        _assert_walkable(result, O, Hex(2, 0), blocked)
        assert result.cost == 3
