"""Tests for the heap operation counter."""

import math

import pytest

from kheap.counters import OperationCounter
from kheap.dijkstra import DijkstraSolver
from kheap.exceptions import InvalidArgumentError
from kheap.heap import KHeap


def test_counts_follow_operations():
    counter = OperationCounter(k=2)
    h = KHeap(3, 2, observer=counter)
    h.set_distance(1, 3)
    h.insert(1)
    # absent vertex: counted as an update and as the insert it triggers
    h.update(2, 1)
    assert h.extract_min() == 2

    assert counter.calls == {"insert": 2, "extract": 1, "update": 1, "delete": 0}
    # insert(1): one step at the root; nested insert(2): swap + root step
    assert counter.sift_up["insert"] == 3
    assert counter.sift_up["update"] == 0
    assert counter.sift_down["extract"] == 1
    assert counter.max_heap_size == 2


def test_ratios():
    counter = OperationCounter(k=2)
    h = KHeap(3, 2, observer=counter)
    h.set_distance(1, 3)
    h.insert(1)
    h.update(2, 1)
    h.extract_min()

    assert counter.log_k_max() == pytest.approx(1.0)
    assert counter.ratios() == pytest.approx(
        {"r_insert": 1.5, "r_extract": 1.0, "r_update": 0.0}
    )


def test_decrease_key_is_attributed_to_update():
    counter = OperationCounter(k=3)
    h = KHeap(5, 3, observer=counter)
    for v, d in [(0, 1), (1, 5), (2, 6)]:
        h.set_distance(v, d)
        h.insert(v)
    before = dict(counter.sift_up)
    h.update(2, 0)
    assert counter.sift_up["update"] == 2
    assert counter.sift_up["insert"] == before["insert"]
    assert counter.sift_down["update"] == 0


def test_direct_delete_bucket():
    counter = OperationCounter(k=2)
    h = KHeap(4, 2, observer=counter)
    for v in range(4):
        h.update(v, v)
    h.delete_at(1)
    assert counter.sift_down["delete"] + counter.sift_up["delete"] >= 1
    assert counter.calls["extract"] == 0


def test_empty_counter_has_no_ratios():
    counter = OperationCounter(k=4)
    assert counter.log_k_max() == 0.0
    assert counter.ratios() == {}
    assert "r_insert" not in counter.as_dict()
    assert not any(line.startswith("Max heap size") for line in counter.report())


def test_report_and_dict_after_search(diamond):
    counter = OperationCounter(k=3)
    res = DijkstraSolver(diamond, 1, 4, k=3, observer=counter).solve()
    assert res.distance == 6
    assert counter.calls["extract"] == res.settled
    data = counter.as_dict()
    assert data["k"] == 3
    assert data["extract_calls"] == res.settled
    assert data["max_heap_size"] == res.max_frontier
    report = counter.report()
    assert report[0] == f"Insert calls: {counter.calls['insert']}"
    assert any(line.startswith("log_3(") for line in report)
    assert counter.log_k_max() == pytest.approx(math.log(counter.max_heap_size) / math.log(3))


def test_heap_without_observer_runs():
    h = KHeap(2, 2)
    h.update(0, 1)
    h.update(1, 0)
    assert h.extract_min() == 1


@pytest.mark.parametrize("k", [-1, 0, 1])
def test_small_arity_rejected(k):
    with pytest.raises(InvalidArgumentError):
        OperationCounter(k=k)
