"""Directed weighted graph consumed read-only by the shortest-path driver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from .exceptions import GraphFormatError, InputError

Vertex = int
Weight = int
Edge = Tuple[Vertex, Vertex, Weight]


@dataclass
class Graph:
    """Directed graph with non-negative integer edge weights.

    Vertices are numbered ``1`` .. ``n`` as in DIMACS files; ``adj[0]`` exists
    but is never populated. Negative weights are rejected with
    :class:`~kheap.exceptions.GraphFormatError` citing the offending edge.

    Attributes:
        n: Number of vertices.
        adj: Outgoing adjacency lists of ``(target, weight)`` pairs.
    """

    n: int

    def __post_init__(self) -> None:
        """Validate vertex count and initialize adjacency lists."""
        if not isinstance(self.n, int) or self.n < 0:
            raise InputError("Graph.n must be a non-negative integer.")
        self.adj: List[List[Tuple[Vertex, Weight]]] = [[] for _ in range(self.n + 1)]
        self._m = 0

    def add_edge(self, u: Vertex, v: Vertex, w: Weight) -> None:
        """Add a directed edge from ``u`` to ``v``.

        Args:
            u: Tail vertex.
            v: Head vertex.
            w: Non-negative integer weight.

        Raises:
            InputError: If ``u`` or ``v`` are out of range.
            GraphFormatError: If ``w`` is not an integer or is negative.

        Examples:
            ```python
            >>> g = Graph(2)
            >>> g.add_edge(1, 2, 5)
            >>> g.adj
            [[], [(2, 5)], []]
            ```
        """
        if not (self.has_vertex(u) and self.has_vertex(v)):
            raise InputError(f"edge ({u}, {v}): vertex ids must be in [1, {self.n}].")
        if isinstance(w, bool) or not isinstance(w, int):
            raise GraphFormatError(f"non-integer weight {w!r} on edge ({u}, {v})")
        if w < 0:
            raise GraphFormatError(f"negative weight {w} on edge ({u}, {v})")
        self.adj[u].append((v, w))
        self._m += 1

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Edge]) -> "Graph":
        """Create a graph from an iterable of ``(u, v, w)`` edges."""
        g = cls(n)
        for u, v, w in edges:
            g.add_edge(int(u), int(v), w)
        return g

    def has_vertex(self, u: Vertex) -> bool:
        return 1 <= u <= self.n

    def neighbors(self, u: Vertex) -> List[Tuple[Vertex, Weight]]:
        """Return the outgoing ``(target, weight)`` pairs of ``u``."""
        return self.adj[u]

    def out_degree(self, u: Vertex) -> int:
        return len(self.adj[u])

    @property
    def edge_count(self) -> int:
        """Number of directed edges ``m``."""
        return self._m

    def edges(self) -> Iterator[Edge]:
        """Yield every edge as ``(u, v, w)`` in vertex order."""
        for u in range(1, self.n + 1):
            for v, w in self.adj[u]:
                yield u, v, w


__all__ = ["Graph", "Vertex", "Weight", "Edge"]
