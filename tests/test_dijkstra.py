"""End-to-end tests for the Dijkstra driver."""

import io
import math

import networkx as nx
import pytest

from kheap.counters import OperationCounter
from kheap.dijkstra import DijkstraSolver, SearchResult, dijkstra_reference, shortest_distance
from kheap.exceptions import InputError, InvalidArgumentError
from kheap.generator import generate_graph
from kheap.graph import Graph
from kheap.logger import StdLogger


@pytest.mark.parametrize("k", [2, 3, 5, 10])
def test_diamond_distance(diamond, k):
    assert shortest_distance(diamond, 1, 4, k=k) == 6


def test_unreachable(island):
    res = DijkstraSolver(island, 1, 5).solve()
    assert res.distance is None
    assert not res.reachable
    # every vertex reachable from 1 was settled before giving up
    assert res.settled == 4


def test_source_is_destination(diamond):
    res = DijkstraSolver(diamond, 2, 2).solve()
    assert res == SearchResult(distance=0, settled=1, edges_relaxed=0, max_frontier=1)


def test_early_exit_skips_remaining_frontier():
    # 1 -> 2 (1) and 1 -> 3 (1), 3 -> 4 (1); searching 1 -> 2 stops before 3 expands.
    g = Graph.from_edges(4, [(1, 2, 1), (1, 3, 1), (3, 4, 1)])
    solver = DijkstraSolver(g, 1, 2)
    res = solver.solve()
    assert res.distance == 1
    assert res.settled == 2
    assert not solver.heap.contains(4)
    assert solver.heap.contains(3)


def test_decrease_key_used(diamond):
    solver = DijkstraSolver(diamond, 1, 4)
    solver.solve()
    summary = solver.summary()
    # 3 enters at 4 then drops to 3; 4 enters at 8 then drops to 6
    assert summary["decrease_keys"] == 2
    assert summary["inserts"] == 4


def test_zero_weight_edges():
    g = Graph.from_edges(3, [(1, 2, 0), (2, 3, 0), (1, 3, 5)])
    assert shortest_distance(g, 1, 3) == 0


def test_parallel_edges_take_lightest():
    g = Graph.from_edges(2, [(1, 2, 9), (1, 2, 4), (1, 2, 6)])
    assert shortest_distance(g, 1, 2, k=4) == 4


def test_cycle_back_to_finalized_ignored():
    g = Graph.from_edges(3, [(1, 2, 1), (2, 1, 1), (2, 3, 1)])
    assert shortest_distance(g, 1, 3) == 2


@pytest.mark.parametrize("source, destination", [(0, 1), (1, 0), (5, 1), (1, 9)])
def test_vertices_out_of_range(diamond, source, destination):
    with pytest.raises(InputError):
        DijkstraSolver(diamond, source, destination)


def test_bad_arity(diamond):
    with pytest.raises(InvalidArgumentError):
        shortest_distance(diamond, 1, 4, k=1)


def test_logger_reports_search(diamond):
    stream = io.StringIO()
    DijkstraSolver(diamond, 1, 4, logger=StdLogger(level="debug", stream=stream)).solve()
    lines = stream.getvalue().splitlines()
    assert lines[0].startswith("debug search_start source=1 destination=4 k=2")
    assert lines[-1].startswith("info search_done")
    assert "distance=6" in lines[-1]


def test_reference_matches_diamond(diamond):
    dist = dijkstra_reference(diamond, 1)
    assert dist[1:] == [0, 1, 3, 6]
    assert math.isinf(dist[0])


def _to_networkx(G):
    nxg = nx.DiGraph()
    nxg.add_nodes_from(range(1, G.n + 1))
    for u, v, w in G.edges():
        nxg.add_edge(u, v, weight=w)
    return nxg


@pytest.mark.parametrize("graph_type", ["erdos_renyi", "dag", "grid"])
@pytest.mark.parametrize("seed", [0, 1, 2])
def test_matches_networkx(graph_type, seed):
    G = generate_graph(
        n=60,
        m=180,
        graph_type=graph_type,
        seed=seed,
        weight_dist="small_int",
        w_min=0,
        ensure_weakly_connected=(seed != 2),
    )
    expected = nx.single_source_dijkstra_path_length(_to_networkx(G), 1)
    for dest in range(1, G.n + 1):
        answers = {k: shortest_distance(G, 1, dest, k=k) for k in (2, 3, 5, 10)}
        assert set(answers.values()) == {expected.get(dest)}


def test_counter_invariants_on_larger_graph():
    G = generate_graph(n=300, m=1500, seed=7)
    counter = OperationCounter(k=4)
    solver = DijkstraSolver(G, 1, G.n, k=4, observer=counter)
    res = solver.solve()
    assert res.distance == dijkstra_reference(G, 1)[G.n]
    assert counter.calls["extract"] == res.settled
    assert counter.calls["insert"] == solver.summary()["inserts"]
    assert counter.calls["update"] == solver.summary()["decrease_keys"]
    assert counter.max_heap_size == res.max_frontier


def test_repeated_solve_starts_fresh(diamond):
    solver = DijkstraSolver(diamond, 1, 4, k=3)
    first = solver.solve()
    first_summary = solver.summary()
    second = solver.solve()
    assert first.distance == 6
    assert second == first
    assert solver.summary() == first_summary


def test_bad_arity_rejected_at_construction(diamond):
    with pytest.raises(InvalidArgumentError):
        DijkstraSolver(diamond, 1, 4, k=0)
