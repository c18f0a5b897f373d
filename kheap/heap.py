"""Indexed d-ary min-heap keyed by per-vertex distances.

The heap stores vertex ids in an implicit ``k``-ary tree laid out in a flat
list (root at slot ``0``). A second list maps every vertex to its current
slot so that keys can be decreased or increased in place, and a third holds
the distance of every vertex independently of heap membership.
"""

from __future__ import annotations

import math
from typing import List, Optional, Protocol

from .exceptions import (
    AlgorithmError,
    EmptyHeapError,
    InvalidArgumentError,
    OutOfRangeError,
)

Vertex = int
Key = float

INF: Key = math.inf
ABSENT = -1


class HeapObserver(Protocol):
    """Callbacks invoked by :class:`KHeap` at its structural decision points.

    ``op`` names the public operation that triggered a sift: ``"insert"``,
    ``"extract"``, ``"update"`` or ``"delete"``.
    """

    def on_insert(self) -> None:
        ...

    def on_extract(self) -> None:
        ...

    def on_update(self) -> None:
        ...

    def on_sift_up(self, op: str) -> None:
        """Called once for every slot examined while sifting up."""
        ...

    def on_sift_down(self, op: str) -> None:
        """Called once for every slot examined while sifting down."""
        ...

    def on_size(self, size: int) -> None:
        """Called after an insertion with the new heap size."""
        ...


class KHeap:
    """Array-backed min-heap with arity ``k`` and a vertex-to-slot index.

    Args:
        capacity: Number of distinct vertex ids the heap can hold; valid ids
            are ``0`` .. ``capacity - 1``.
        k: Number of children per node (``k >= 2``).
        observer: Optional :class:`HeapObserver` notified of every insert,
            extract, update and sift step.

    Raises:
        InvalidArgumentError: If ``k < 2`` or ``capacity < 1``.
    """

    def __init__(
        self,
        capacity: int,
        k: int = 2,
        observer: Optional[HeapObserver] = None,
    ) -> None:
        if k < 2:
            raise InvalidArgumentError(f"k must be at least 2 (got {k})")
        if capacity < 1:
            raise InvalidArgumentError(f"capacity must be positive (got {capacity})")
        self._k = k
        self._capacity = capacity
        self._slots: List[Vertex] = []
        self._position: List[int] = [ABSENT] * capacity
        self._distance: List[Key] = [INF] * capacity
        self._observer = observer
        self._op = ""

    # ---- layout -------------------------------------------------------

    @property
    def k(self) -> int:
        return self._k

    @property
    def capacity(self) -> int:
        return self._capacity

    def parent(self, i: int) -> int:
        return (i - 1) // self._k

    def child(self, i: int, j: int) -> int:
        return self._k * i + j + 1

    def is_leaf(self, i: int) -> bool:
        return self.child(i, 0) >= len(self._slots)

    def _key(self, i: int) -> Key:
        return self._distance[self._slots[i]]

    def _swap(self, i: int, j: int) -> None:
        slots = self._slots
        slots[i], slots[j] = slots[j], slots[i]
        self._position[slots[i]] = i
        self._position[slots[j]] = j

    def _check_vertex(self, vertex: Vertex) -> None:
        if not (0 <= vertex < self._capacity):
            raise OutOfRangeError(
                f"vertex {vertex} outside heap range [0, {self._capacity})"
            )

    # ---- invariant restoration ----------------------------------------

    def _sift_up(self, i: int) -> None:
        obs = self._observer
        while True:
            if obs is not None:
                obs.on_sift_up(self._op)
            if i == 0:
                return
            p = self.parent(i)
            if self._key(p) <= self._key(i):
                return
            self._swap(i, p)
            i = p

    def _sift_down(self, i: int) -> None:
        obs = self._observer
        size = len(self._slots)
        while True:
            if obs is not None:
                obs.on_sift_down(self._op)
            first = self.child(i, 0)
            if first >= size:
                return
            # Leftmost minimal child wins ties.
            smallest = first
            smallest_key = self._key(first)
            for c in range(first + 1, min(first + self._k, size)):
                c_key = self._key(c)
                if c_key < smallest_key:
                    smallest, smallest_key = c, c_key
            if not smallest_key < self._key(i):
                return
            self._swap(i, smallest)
            i = smallest

    # ---- mutation -----------------------------------------------------

    def insert(self, vertex: Vertex) -> None:
        """Insert ``vertex`` using its current distance as key.

        Raises:
            OutOfRangeError: If the heap is full or ``vertex`` is out of range.
            InvalidArgumentError: If ``vertex`` is already in the heap.
        """
        self._check_vertex(vertex)
        if self._position[vertex] != ABSENT:
            raise InvalidArgumentError(f"vertex {vertex} is already in the heap")
        if len(self._slots) >= self._capacity:
            raise OutOfRangeError("heap is full")
        prev, self._op = self._op, "insert"
        try:
            if self._observer is not None:
                self._observer.on_insert()
            i = len(self._slots)
            self._slots.append(vertex)
            self._position[vertex] = i
            self._sift_up(i)
            if self._observer is not None:
                self._observer.on_size(len(self._slots))
        finally:
            self._op = prev

    def delete_at(self, i: int) -> Vertex:
        """Remove the vertex stored at slot ``i`` and return it.

        The last occupied slot is moved into ``i`` and then sifted up if it
        is smaller than its new parent, otherwise sifted down.

        Raises:
            OutOfRangeError: If ``i`` is not an occupied slot.
        """
        size = len(self._slots)
        if not (0 <= i < size):
            raise OutOfRangeError(f"slot {i} out of range for heap of size {size}")
        prev, self._op = self._op, "delete"
        try:
            return self._remove(i)
        finally:
            self._op = prev

    def _remove(self, i: int) -> Vertex:
        slots = self._slots
        removed = slots[i]
        last = slots.pop()
        self._position[removed] = ABSENT
        if i == len(slots):
            return removed
        slots[i] = last
        self._position[last] = i
        if i > 0 and self._key(i) < self._key(self.parent(i)):
            self._sift_up(i)
        else:
            self._sift_down(i)
        return removed

    def extract_min(self) -> Vertex:
        """Remove and return the vertex with the smallest distance.

        Raises:
            EmptyHeapError: If the heap is empty.
        """
        if not self._slots:
            raise EmptyHeapError("extract_min on empty heap")
        prev, self._op = self._op, "extract"
        try:
            if self._observer is not None:
                self._observer.on_extract()
            return self._remove(0)
        finally:
            self._op = prev

    def update(self, vertex: Vertex, new_distance: Key) -> None:
        """Set the distance of ``vertex`` and restore heap order.

        Absent vertices are inserted with ``new_distance``. For a present
        vertex a smaller value sifts up, a larger one sifts down and an equal
        one leaves the structure untouched.

        Raises:
            OutOfRangeError: If ``vertex`` is out of range, or it is absent
                and the heap is full.
        """
        self._check_vertex(vertex)
        i = self._position[vertex]
        if i == ABSENT and len(self._slots) >= self._capacity:
            raise OutOfRangeError("heap is full")
        prev, self._op = self._op, "update"
        try:
            if self._observer is not None:
                self._observer.on_update()
            old = self._distance[vertex]
            self._distance[vertex] = new_distance
            if i == ABSENT:
                self.insert(vertex)
            elif new_distance < old:
                self._sift_up(i)
            elif new_distance > old:
                self._sift_down(i)
        finally:
            self._op = prev

    def set_distance(self, vertex: Vertex, distance: Key) -> None:
        """Overwrite the stored distance of ``vertex`` without reordering.

        Intended for vertices not currently in the heap; use :meth:`update`
        for members.
        """
        self._check_vertex(vertex)
        self._distance[vertex] = distance

    # ---- queries ------------------------------------------------------

    def peek_min(self) -> Vertex:
        if not self._slots:
            raise EmptyHeapError("peek_min on empty heap")
        return self._slots[0]

    def is_empty(self) -> bool:
        return not self._slots

    @property
    def size(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def distance_of(self, vertex: Vertex) -> Key:
        self._check_vertex(vertex)
        return self._distance[vertex]

    def contains(self, vertex: Vertex) -> bool:
        return 0 <= vertex < self._capacity and self._position[vertex] != ABSENT

    __contains__ = contains

    def position_of(self, vertex: Vertex) -> int:
        """Return the slot of ``vertex`` or ``ABSENT``."""
        self._check_vertex(vertex)
        return self._position[vertex]

    def depth_of(self, vertex: Vertex) -> int:
        """Return the tree depth of ``vertex`` (root is ``0``).

        Raises:
            InvalidArgumentError: If ``vertex`` is not in the heap.
        """
        i = self.position_of(vertex)
        if i == ABSENT:
            raise InvalidArgumentError(f"vertex {vertex} is not in the heap")
        depth = 0
        while i > 0:
            i = self.parent(i)
            depth += 1
        return depth

    def slots(self) -> List[Vertex]:
        """Return a copy of the occupied slots in array order."""
        return list(self._slots)

    # Testing helper
    def check_invariants(self) -> None:
        """Verify heap order and index consistency.

        Raises:
            AlgorithmError: On the first violation found.
        """
        seen = set()
        for i, v in enumerate(self._slots):
            if v in seen:
                raise AlgorithmError(f"vertex {v} occupies more than one slot")
            seen.add(v)
            if self._position[v] != i:
                raise AlgorithmError(
                    f"position index of vertex {v} is {self._position[v]}, expected {i}"
                )
            if i > 0 and self._key(i) < self._key(self.parent(i)):
                raise AlgorithmError(
                    f"heap order violated at slot {i} (parent {self.parent(i)})"
                )
        for v, i in enumerate(self._position):
            if i != ABSENT and (i >= len(self._slots) or self._slots[i] != v):
                raise AlgorithmError(f"stale position {i} recorded for vertex {v}")


__all__ = ["KHeap", "HeapObserver", "INF", "ABSENT"]
