"""Shared fixtures for the kheap test-suite."""

import pytest

from kheap.graph import Graph

DIAMOND_EDGES = [(1, 2, 1), (1, 3, 4), (2, 3, 2), (2, 4, 7), (3, 4, 3)]

DIAMOND_GR = """c shortest 1 -> 4 is 6
p sp 4 5
a 1 2 1
a 1 3 4
a 2 3 2
a 2 4 7
a 3 4 3
"""


@pytest.fixture
def diamond():
    """Four vertices where 1 -> 2 -> 3 -> 4 (length 6) beats every other route."""
    return Graph.from_edges(4, DIAMOND_EDGES)


@pytest.fixture
def island():
    """Five vertices; vertex 5 has no incoming edges."""
    return Graph.from_edges(5, DIAMOND_EDGES + [(5, 1, 2)])


@pytest.fixture
def diamond_gr():
    return DIAMOND_GR
