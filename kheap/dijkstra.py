"""Point-to-point Dijkstra search driven by an indexed k-ary heap."""

from __future__ import annotations

import heapq
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .exceptions import InputError, InvalidArgumentError
from .graph import Graph, Vertex
from .heap import INF, HeapObserver, KHeap
from .logger import Logger, NoopLogger


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a single source/destination search.

    Attributes:
        distance: Shortest distance, or ``None`` if the destination is
            unreachable from the source.
        settled: Number of vertices extracted (finalized) before stopping.
        edges_relaxed: Number of edges examined from finalized vertices.
        max_frontier: Largest heap size reached during the search.
    """

    distance: Optional[int]
    settled: int
    edges_relaxed: int
    max_frontier: int

    @property
    def reachable(self) -> bool:
        return self.distance is not None


class DijkstraSolver:
    """Shortest distance from ``source`` to ``destination`` on ``G``.

    Every vertex is unseen (distance still infinite), on the frontier (in the
    heap) or finalized (extracted). The search stops as soon as the
    destination is extracted; with non-negative weights its distance can no
    longer improve.

    Args:
        G: Input graph with non-negative edge weights.
        source: Start vertex in ``[1, n]``.
        destination: Target vertex in ``[1, n]``.
        k: Heap arity.
        observer: Optional heap observer, e.g.
            :class:`~kheap.counters.OperationCounter`.
        logger: Optional structured logger.

    Raises:
        InputError: If ``source`` or ``destination`` is not a vertex of ``G``.
        InvalidArgumentError: If ``k < 2``.
    """

    def __init__(
        self,
        G: Graph,
        source: Vertex,
        destination: Vertex,
        k: int = 2,
        observer: Optional[HeapObserver] = None,
        logger: Logger | None = None,
    ) -> None:
        if not G.has_vertex(source):
            raise InputError(f"source {source} is not a vertex id in [1, {G.n}].")
        if not G.has_vertex(destination):
            raise InputError(f"destination {destination} is not a vertex id in [1, {G.n}].")
        self.G = G
        self.source = source
        self.destination = destination
        if k < 2:
            raise InvalidArgumentError(f"k must be at least 2 (got {k})")
        self.k = k
        self.observer = observer
        self.logger = logger or NoopLogger()
        self.heap: Optional[KHeap] = None
        self.counters: Dict[str, int] = {}

    def _reset(self) -> KHeap:
        """Allocate a fresh heap and zero the counters for a new search."""
        self.heap = KHeap(self.G.n + 1, self.k, observer=self.observer)
        self.counters = dict.fromkeys(
            ("settled", "edges_relaxed", "inserts", "decrease_keys", "max_frontier"), 0
        )
        return self.heap

    def solve(self) -> SearchResult:
        """Run the search and return its :class:`SearchResult`."""
        G, Q = self.G, self._reset()
        c = self.counters
        dest = self.destination
        finalized: List[bool] = [False] * (G.n + 1)

        self.logger.debug(
            "search_start", source=self.source, destination=dest, k=Q.k, n=G.n
        )
        Q.set_distance(self.source, 0)
        Q.insert(self.source)
        c["inserts"] += 1
        c["max_frontier"] = 1

        answer: Optional[int] = None
        while not Q.is_empty():
            v = Q.extract_min()
            finalized[v] = True
            c["settled"] += 1
            dv = Q.distance_of(v)
            if v == dest:
                answer = int(dv)
                break
            for u, w in G.adj[v]:
                if finalized[u]:
                    continue
                c["edges_relaxed"] += 1
                cand = dv + w
                du = Q.distance_of(u)
                if du == INF:
                    Q.set_distance(u, cand)
                    Q.insert(u)
                    c["inserts"] += 1
                elif cand < du:
                    Q.update(u, cand)
                    c["decrease_keys"] += 1
            if len(Q) > c["max_frontier"]:
                c["max_frontier"] = len(Q)

        self.logger.info(
            "search_done",
            source=self.source,
            destination=dest,
            distance="inf" if answer is None else answer,
            **c,
        )
        return SearchResult(
            distance=answer,
            settled=c["settled"],
            edges_relaxed=c["edges_relaxed"],
            max_frontier=c["max_frontier"],
        )

    def summary(self) -> Dict[str, int]:
        return dict(self.counters)


def shortest_distance(
    G: Graph,
    source: Vertex,
    destination: Vertex,
    k: int = 2,
    observer: Optional[HeapObserver] = None,
) -> Optional[int]:
    """Return the shortest distance, or ``None`` if ``destination`` is unreachable.

    Examples:
        ```python
        >>> g = Graph.from_edges(3, [(1, 2, 4), (2, 3, 1), (1, 3, 9)])
        >>> shortest_distance(g, 1, 3, k=4)
        5
        ```
    """
    return DijkstraSolver(G, source, destination, k=k, observer=observer).solve().distance


def dijkstra_reference(G: Graph, source: Vertex) -> List[float]:
    """Run textbook Dijkstra with :mod:`heapq` and lazy deletion.

    Used as an oracle in tests and benchmarks.

    Args:
        G: Input graph with non-negative edge weights.
        source: Source vertex identifier.

    Returns:
        Distance to every vertex, indexed ``0`` .. ``n`` (index ``0`` and
        unreachable vertices hold ``math.inf``).
    """
    dist: List[float] = [math.inf] * (G.n + 1)
    dist[source] = 0
    pq: List[Tuple[float, Vertex]] = [(0, source)]
    while pq:
        d, u = heapq.heappop(pq)
        if d != dist[u]:
            continue
        for v, w in G.adj[u]:
            nd = d + w
            if nd < dist[v]:
                dist[v] = nd
                heapq.heappush(pq, (nd, v))
    return dist


__all__ = ["DijkstraSolver", "SearchResult", "shortest_distance", "dijkstra_reference"]
