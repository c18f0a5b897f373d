"""Micro-benchmark comparing heap arities on random graphs.

Run this module as a script to time :class:`~kheap.dijkstra.DijkstraSolver`
for several values of ``k`` and check every answer against a :mod:`heapq`
reference.

Example:
```bash
python -m kheap.bench --trials 5 --sizes 1000,5000 5000,20000 --ks 2,3,4,8 --out-csv out.csv
```

Use ``--plot`` to save a chart of the sift ratios per ``k`` (requires
matplotlib).
"""

from __future__ import annotations

import argparse
import csv
import math
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .counters import OperationCounter
from .dijkstra import DijkstraSolver, dijkstra_reference
from .exceptions import AlgorithmError
from .generator import generate_graph
from .graph import Graph


@dataclass
class BenchResult:
    """Result of a single benchmarking run."""

    k: int
    wall_ms: float
    distance: Optional[int]
    reference: Optional[int]
    counters: OperationCounter

    @property
    def correct(self) -> bool:
        return self.distance == self.reference


def run_once(G: Graph, source: int, destination: int, k: int) -> BenchResult:
    """Time one search and compare it to the reference distance.

    Args:
        G: Graph to search.
        source: Source vertex.
        destination: Destination vertex.
        k: Heap arity.

    Returns:
        Timing, both distances and the heap operation counters.
    """
    counter = OperationCounter(k=k)
    solver = DijkstraSolver(G, source, destination, k=k, observer=counter)
    t0 = time.perf_counter()
    res = solver.solve()
    wall_ms = (time.perf_counter() - t0) * 1000.0
    ref = dijkstra_reference(G, source)[destination]
    return BenchResult(
        k=k,
        wall_ms=wall_ms,
        distance=res.distance,
        reference=None if math.isinf(ref) else int(ref),
        counters=counter,
    )


def run_suite(
    sizes: Sequence[Tuple[int, int]],
    ks: Sequence[int],
    trials: int,
    seed: int = 0,
) -> List[Dict[str, object]]:
    """Benchmark every ``(n, m)`` size and arity ``k`` over ``trials`` graphs.

    Raises:
        AlgorithmError: If any search disagrees with the reference.
    """
    rows: List[Dict[str, object]] = []
    for n, m in sizes:
        graphs = [generate_graph(n=n, m=m, seed=seed + t) for t in range(trials)]
        for k in ks:
            results = [run_once(G, 1, G.n, k) for G in graphs]
            for r in results:
                if not r.correct:
                    raise AlgorithmError(
                        f"k={k} n={n} m={m}: got {r.distance}, expected {r.reference}"
                    )
            times = np.array([r.wall_ms for r in results])
            ratios = [r.counters.ratios() for r in results]
            row: Dict[str, object] = {
                "n": n,
                "m": m,
                "k": k,
                "trials": trials,
                "mean_ms": float(times.mean()),
                "std_ms": float(times.std()),
                "p50_ms": float(np.percentile(times, 50)),
                "p90_ms": float(np.percentile(times, 90)),
            }
            for name in ("r_insert", "r_extract", "r_update"):
                row[name] = float(np.mean([r.get(name, 0.0) for r in ratios]))
            rows.append(row)
    return rows


def _plot(rows: List[Dict[str, object]], out: str) -> None:
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(7, 4))
    for n, m in sorted({(r["n"], r["m"]) for r in rows}):
        sub = [r for r in rows if r["n"] == n and r["m"] == m]
        ks = [r["k"] for r in sub]
        ax.plot(ks, [r["r_extract"] for r in sub], marker="o", label=f"extract n={n} m={m}")
        ax.plot(ks, [r["r_update"] for r in sub], marker="x", ls="--", label=f"update n={n} m={m}")
    ax.set_xlabel("k")
    ax.set_ylabel("sift steps / (calls * log_k max size)")
    ax.legend(fontsize="small")
    fig.tight_layout()
    fig.savefig(out)
    plt.close(fig)


def _parse_sizes(values: Sequence[str]) -> List[Tuple[int, int]]:
    sizes: List[Tuple[int, int]] = []
    for v in values:
        n_str, m_str = v.split(",")
        sizes.append((int(n_str), int(m_str)))
    return sizes


def main(argv: Optional[List[str]] = None) -> None:
    """Command-line entry point for the benchmark."""
    p = argparse.ArgumentParser(description="Benchmark k-ary heap Dijkstra")
    p.add_argument("--trials", type=int, default=3)
    p.add_argument("--sizes", nargs="+", default=["1000,5000"], help="n,m pairs")
    p.add_argument("--ks", default="2,3,4,8", help="comma-separated arities")
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--out-csv", type=str, default=None)
    p.add_argument("--plot", type=str, default=None, help="save ratio plot to this PNG")
    args = p.parse_args(argv)

    ks = [int(x) for x in args.ks.split(",") if x.strip()]
    rows = run_suite(_parse_sizes(args.sizes), ks, args.trials, seed=args.seed)
    for r in rows:
        print(
            f"n={r['n']:7d} m={r['m']:8d} k={r['k']:3d} "
            f"mean_ms={r['mean_ms']:.2f} p90_ms={r['p90_ms']:.2f} "
            f"r_extract={r['r_extract']:.3f} r_update={r['r_update']:.3f}"
        )
    if args.out_csv:
        with Path(args.out_csv).open("w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
    if args.plot:
        _plot(rows, args.plot)


if __name__ == "__main__":  # pragma: no cover - manual benchmarking
    main()
