"""Binary-heap priority queue with decrease-key for A* open sets."""

from __future__ import annotations

import itertools
from typing import Dict, Generic, Hashable, List, Tuple, TypeVar

__all__ = ["PriorityQueue"]

T = TypeVar("T", bound=Hashable)


class _Item(Generic[T]):
    __slots__ = ("value", "priority", "seq", "index")

    def __init__(self, value: T, priority: int, seq: int, index: int) -> None:
        self.value = value
        self.priority = priority
        self.seq = seq
        self.index = index


class PriorityQueue(Generic[T]):
    """Min-heap of distinct values keyed by an integer priority.

    Each value appears at most once; pushing a value that is already queued
    moves it to its new priority.  Equal priorities pop in the order the
    values were (re)queued.  Every item tracks its heap index, so updates
    are ``O(log n)``.
    """

    def __init__(self) -> None:
        self._heap: List[_Item[T]] = []
        self._items: Dict[T, _Item[T]] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def priority(self, value: T) -> int:
        return self._items[value].priority

    # ------------------------------------------------------------------
    # Queue operations
    # ------------------------------------------------------------------

    def push(self, value: T, priority: int) -> None:
        """Queue *value*, or move it to *priority* if already queued."""
        item = self._items.get(value)
        if item is not None:
            self.update(value, priority)
            return
        item = _Item(value, priority, next(self._counter), len(self._heap))
        self._heap.append(item)
        self._items[value] = item
        self._sift_up(item.index)

    def update(self, value: T, priority: int) -> None:
        """Change the priority of a queued *value*.

        Raises
        ------
        KeyError
            If *value* is not queued.
        """
        item = self._items[value]
        item.priority = priority
        item.seq = next(self._counter)
        self._sift_up(item.index)
        self._sift_down(item.index)

    def peek(self) -> Tuple[T, int]:
        if not self._heap:
            raise IndexError("peek from an empty priority queue")
        top = self._heap[0]
        return top.value, top.priority

    def pop(self) -> Tuple[T, int]:
        """Remove and return ``(value, priority)`` with the lowest priority."""
        if not self._heap:
            raise IndexError("pop from an empty priority queue")
        top = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            last.index = 0
            self._heap[0] = last
            self._sift_down(0)
        del self._items[top.value]
        top.index = -1
        return top.value, top.priority

    # ------------------------------------------------------------------
    # Heap maintenance
    # ------------------------------------------------------------------

    def _less(self, i: int, j: int) -> bool:
        a = self._heap[i]
        b = self._heap[j]
        return (a.priority, a.seq) < (b.priority, b.seq)

    def _swap(self, i: int, j: int) -> None:
        h = self._heap
        h[i], h[j] = h[j], h[i]
        h[i].index = i
        h[j].index = j

    def _sift_up(self, i: int) -> None:
        while i > 0:
            parent = (i - 1) // 2
            if not self._less(i, parent):
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        n = len(self._heap)
        while True:
            smallest = i
            left = 2 * i + 1
            right = left + 1
            if left < n and self._less(left, smallest):
                smallest = left
            if right < n and self._less(right, smallest):
                smallest = right
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest
