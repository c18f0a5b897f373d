"""Seeded random graph generator producing DIMACS-compatible instances.

SUPPORTED GRAPH TYPES
---------------------
1. erdos_renyi
   Random directed edges sampled uniformly. Baseline / average case.

2. dag
   Edges only from lower- to higher-numbered vertices. Shallow frontiers,
   many unreachable pairs when the backbone is disabled.

3. grid
   Near-square 2D grid with edges between neighbours in both directions.
   Many equal-length paths, so the heap sees lots of ties.

All generated graphs use non-negative integer weights and vertices ``1..n``.
"""

from __future__ import annotations

import math
import random
from typing import Literal, Optional, Set, Tuple

from .exceptions import InputError
from .graph import Edge, Graph

GraphType = Literal["erdos_renyi", "dag", "grid"]
WeightDist = Literal["uniform", "small_int"]


def _sample_weight(rng: random.Random, dist: WeightDist, w_min: int, w_max: int) -> int:
    if dist == "uniform":
        return rng.randint(w_min, w_max)
    if dist == "small_int":
        # Narrow range to stress tie handling in the heap.
        return rng.randint(w_min, min(w_max, w_min + 10))
    raise InputError(f"unknown weight distribution: {dist}")


def generate_graph(
    *,
    n: int,
    m: Optional[int] = None,
    graph_type: GraphType = "erdos_renyi",
    weight_dist: WeightDist = "uniform",
    w_min: int = 1,
    w_max: int = 100,
    seed: Optional[int] = 0,
    ensure_weakly_connected: bool = True,
) -> Graph:
    """Generate a directed weighted graph on vertices ``1`` .. ``n``.

    Notes:
    - With ``ensure_weakly_connected`` a backbone chain ``i -> i+1`` is added
      first, so every vertex is reachable from vertex ``1``.
    - Parallel edges and self loops are never generated.
    - ``m`` defaults to ``4n`` (capped by the number of possible edges); for
      grids it is the number of extra random edges on top of the lattice.

    Raises:
        InputError: If ``n`` is not positive or the weight range is invalid.
    """
    if n <= 0:
        raise InputError("n must be > 0.")
    if w_min < 0:
        raise InputError("w_min must be >= 0 for Dijkstra-safe graphs.")
    if w_max < w_min:
        raise InputError("w_max must be >= w_min.")

    rng = random.Random(seed)
    seen: Set[Tuple[int, int]] = set()
    G = Graph(n)

    def add_edge(u: int, v: int) -> None:
        if u == v or (u, v) in seen:
            return
        seen.add((u, v))
        G.add_edge(u, v, _sample_weight(rng, weight_dist, w_min, w_max))

    if ensure_weakly_connected and graph_type != "grid":
        for i in range(1, n):
            add_edge(i, i + 1)

    if graph_type == "erdos_renyi":
        target = min(m if m is not None else 4 * n, n * (n - 1))
        while G.edge_count < target:
            add_edge(rng.randint(1, n), rng.randint(1, n))

    elif graph_type == "dag":
        target = min(m if m is not None else 4 * n, n * (n - 1) // 2)
        while G.edge_count < target:
            u, v = rng.randint(1, n), rng.randint(1, n)
            if u > v:
                u, v = v, u
            add_edge(u, v)

    elif graph_type == "grid":
        rows = max(1, math.isqrt(n))
        cols = (n + rows - 1) // rows

        def idx(r: int, c: int) -> int:
            return r * cols + c + 1

        for r in range(rows):
            for c in range(cols):
                u = idx(r, c)
                if u > n:
                    continue
                for v in (idx(r, c + 1) if c + 1 < cols else 0, idx(r + 1, c) if r + 1 < rows else 0):
                    if 1 <= v <= n:
                        add_edge(u, v)
                        add_edge(v, u)
        if m:
            target = min(G.edge_count + m, n * (n - 1))
            while G.edge_count < target:
                add_edge(rng.randint(1, n), rng.randint(1, n))

    else:
        raise InputError(f"unknown graph_type: {graph_type}")

    return G


def random_edges(n: int, m: int, seed: int = 0, w_max: int = 10) -> list[Edge]:
    """Return ``m`` unconstrained random edges (duplicates and loops allowed)."""
    rnd = random.Random(seed)
    return [(rnd.randint(1, n), rnd.randint(1, n), rnd.randint(0, w_max)) for _ in range(m)]


__all__ = ["generate_graph", "random_edges", "GraphType", "WeightDist"]
