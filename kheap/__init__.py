"""Public package exports for :mod:`kheap`."""

from __future__ import annotations

from .counters import OperationCounter
from .dijkstra import DijkstraSolver, SearchResult, dijkstra_reference, shortest_distance
from .exceptions import (
    AlgorithmError,
    EmptyHeapError,
    GraphFormatError,
    InputError,
    InvalidArgumentError,
    KHeapError,
    OutOfRangeError,
    UsageError,
)
from .generator import generate_graph
from .graph import Graph
from .heap import ABSENT, INF, HeapObserver, KHeap
from .io import format_distance, parse_dimacs, read_dimacs, read_graph, write_dimacs, write_graph
from .logger import Logger, NoopLogger, StdLogger

__version__ = "0.1.0"

__all__ = [
    "KHeap",
    "HeapObserver",
    "INF",
    "ABSENT",
    "OperationCounter",
    "Graph",
    "DijkstraSolver",
    "SearchResult",
    "shortest_distance",
    "dijkstra_reference",
    "generate_graph",
    "parse_dimacs",
    "read_dimacs",
    "read_graph",
    "write_dimacs",
    "write_graph",
    "format_distance",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "KHeapError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "EmptyHeapError",
    "InputError",
    "GraphFormatError",
    "UsageError",
    "AlgorithmError",
]
