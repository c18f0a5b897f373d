"""DIMACS shortest-path (``.gr``) input/output helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO, Tuple

from .exceptions import GraphFormatError
from .graph import Graph


def _parse_int(token: str, what: str, lineno: int) -> int:
    try:
        return int(token)
    except ValueError as exc:
        raise GraphFormatError(f"line {lineno}: invalid {what} {token!r}") from exc


def _read_problem_line(it: Iterator[Tuple[int, str]]) -> Tuple[int, int]:
    """Skip lines up to ``p sp <n> <m>`` and return ``(n, m)``."""
    for lineno, line in it:
        if line[:4] != "p sp":
            continue
        parts = line.split()
        if len(parts) < 4:
            raise GraphFormatError(f"line {lineno}: truncated problem line {line.strip()!r}")
        return (
            _parse_int(parts[2], "vertex count", lineno),
            _parse_int(parts[3], "edge count", lineno),
        )
    raise GraphFormatError("no 'p sp' problem line found")


def parse_dimacs(lines: Iterable[str]) -> Graph:
    """Build a :class:`Graph` from the lines of a DIMACS ``.gr`` file.

    Lines are skipped until the ``p sp n m`` problem line. The following
    ``m`` lines are then scanned; each one starting with ``a `` is read as an
    arc ``a u v w`` and anything else in that span (comments, blanks) is
    ignored. Input after those ``m`` lines is not read.

    Args:
        lines: Iterable of text lines, e.g. an open file.

    Returns:
        The parsed graph on vertices ``1`` .. ``n``.

    Raises:
        GraphFormatError: If the problem line is missing or malformed, or an
            arc line is short, non-numeric, out of range or negative.
    """
    it = enumerate(lines, start=1)
    n, m = _read_problem_line(it)
    if n < 0 or m < 0:
        raise GraphFormatError(f"negative size in problem line (n={n}, m={m})")
    G = Graph(n)
    for _ in range(m):
        nxt = next(it, None)
        if nxt is None:
            break
        lineno, line = nxt
        if line[:2] != "a ":
            continue
        parts = line.split()
        if len(parts) < 4:
            raise GraphFormatError(f"line {lineno}: truncated arc {line.strip()!r}")
        u = _parse_int(parts[1], "tail vertex", lineno)
        v = _parse_int(parts[2], "head vertex", lineno)
        w = _parse_int(parts[3], "weight", lineno)
        if not (G.has_vertex(u) and G.has_vertex(v)):
            raise GraphFormatError(f"line {lineno}: arc ({u}, {v}) outside [1, {n}]")
        G.add_edge(u, v, w)
    return G


def read_dimacs(stream: TextIO) -> Graph:
    """Read a DIMACS graph from an open text stream.

    Raises:
        GraphFormatError: If the stream cannot be decoded or parsed.
    """
    try:
        return parse_dimacs(stream)
    except UnicodeDecodeError as exc:
        raise GraphFormatError(f"graph input is not valid UTF-8: {exc}") from exc


def read_graph(path: str) -> Graph:
    """Read a DIMACS graph from ``path``.

    Raises:
        GraphFormatError: If the file does not exist, cannot be opened or
            decoded, or cannot be parsed.
    """
    p = Path(path)
    if not p.exists():
        raise GraphFormatError(f"graph file not found: {path}")
    try:
        with p.open("r", encoding="utf-8") as fh:
            return read_dimacs(fh)
    except OSError as exc:
        raise GraphFormatError(f"cannot read graph file {path}: {exc}") from exc


def write_dimacs(G: Graph, stream: TextIO, comment: Optional[str] = None) -> None:
    """Write ``G`` to ``stream`` in DIMACS ``.gr`` format."""
    if comment:
        for line in comment.splitlines():
            stream.write(f"c {line}\n")
    stream.write(f"p sp {G.n} {G.edge_count}\n")
    for u, v, w in G.edges():
        stream.write(f"a {u} {v} {w}\n")


def write_graph(G: Graph, path: str, comment: Optional[str] = None) -> None:
    """Write ``G`` to the file at ``path`` in DIMACS format."""
    with Path(path).open("w", encoding="utf-8") as fh:
        write_dimacs(G, fh, comment=comment)


def format_distance(distance: Optional[int]) -> str:
    """Render a search result: the integer distance, or ``inf`` if unreachable."""
    return "inf" if distance is None else str(distance)


__all__ = [
    "parse_dimacs",
    "read_dimacs",
    "read_graph",
    "write_dimacs",
    "write_graph",
    "format_distance",
]
