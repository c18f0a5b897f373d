"""Command-line interface: shortest distance between two vertices of a DIMACS graph."""

from __future__ import annotations

import argparse
import sys
import traceback
from typing import List, Optional, TextIO

from .counters import OperationCounter
from .dijkstra import DijkstraSolver
from .exceptions import InputError, InvalidArgumentError, KHeapError, UsageError
from .graph import Graph
from .io import format_distance, read_dimacs, read_graph
from .logger import StdLogger

EXAMPLE_GR = """c 4 vertices, shortest 1 -> 4 is 6 via 2 and 3
p sp 4 5
a 1 2 1
a 1 3 4
a 2 3 2
a 2 4 7
a 3 4 3
"""


def _to_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise UsageError(f"{name} must be an integer, got {value!r}") from exc


def _load(path: Optional[str], stdin: TextIO) -> Graph:
    if path is None or path == "-":
        return read_dimacs(stdin)
    return read_graph(path)


def build_parser() -> argparse.ArgumentParser:
    examples = (
        "Examples:\n"
        "  kheap 1 4 < graph.gr\n"
        "  kheap 1 4 3 --graph graph.gr --counters\n"
        "  kheap --example | kheap 1 4\n"
    )
    p = argparse.ArgumentParser(
        prog="kheap",
        description="Shortest distance with Dijkstra on a k-ary indexed heap",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("source", help="Source vertex id (1-based)")
    p.add_argument("destination", help="Destination vertex id (1-based)")
    p.add_argument("k", nargs="?", default="2", help="Heap arity (default: 2)")
    p.add_argument("--graph", type=str, default=None, help="DIMACS .gr file (default: stdin)")
    p.add_argument("--counters", action="store_true", help="Print heap operation counts")
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines as JSON")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity",
    )
    return p


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None) -> int:
    """Entry point for the ``kheap`` command-line tool.

    Returns:
        ``0`` on success, ``64`` for bad input, ``70`` for internal errors.
        Missing positional arguments exit with status ``2`` via argparse.
    """
    argv = sys.argv[1:] if argv is None else argv
    if "--example" in argv:
        sys.stdout.write(EXAMPLE_GR)
        return 0

    args = build_parser().parse_args(argv)
    try:
        source = _to_int(args.source, "source")
        destination = _to_int(args.destination, "destination")
        k = _to_int(args.k, "k")

        level = "info" if args.log_json and args.log_level == "warning" else args.log_level
        logger = StdLogger(level=level, json_fmt=args.log_json, stream=sys.stderr)
        G = _load(args.graph, stdin or sys.stdin)
        logger.debug("graph_loaded", n=G.n, m=G.edge_count)

        counter = OperationCounter(k=k) if args.counters else None
        solver = DijkstraSolver(G, source, destination, k=k, observer=counter, logger=logger)
        res = solver.solve()

        if counter is None:
            print(format_distance(res.distance))
        else:
            print(f"Distance: {format_distance(res.distance)}")
            for line in counter.report():
                print(line)
            if args.log_json:
                logger.info("counters", **counter.as_dict())
        return 0

    except (InputError, InvalidArgumentError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return 64
    except KHeapError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return 70


def run() -> None:
    """Console-script wrapper around :func:`main`."""
    sys.exit(main())


if __name__ == "__main__":
    run()
