"""Tests for the arity benchmark helpers."""

import pytest

from kheap.bench import main, run_once, run_suite
from kheap.generator import generate_graph


def test_run_once_agrees_with_reference():
    G = generate_graph(n=80, m=300, seed=4)
    r = run_once(G, 1, G.n, k=3)
    assert r.correct
    assert r.distance is not None
    assert r.wall_ms >= 0
    assert r.counters.calls["extract"] > 0


def test_run_suite_rows():
    rows = run_suite([(50, 150)], ks=[2, 4], trials=2)
    assert [r["k"] for r in rows] == [2, 4]
    for r in rows:
        assert r["trials"] == 2
        assert r["p50_ms"] <= r["p90_ms"] + 1e-9
        assert r["r_extract"] >= 0


def test_main_writes_csv(tmp_path, capsys):
    out = tmp_path / "bench.csv"
    main(["--trials", "1", "--sizes", "40,100", "--ks", "2,3", "--out-csv", str(out)])
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("n,m,k,trials,mean_ms")
    assert len(lines) == 3
    assert "k=  3" in capsys.readouterr().out


def test_plot(tmp_path):
    pytest.importorskip("matplotlib")
    import matplotlib

    matplotlib.use("Agg")
    out = tmp_path / "ratios.png"
    main(["--trials", "1", "--sizes", "30,60", "--ks", "2,4", "--plot", str(out)])
    assert out.exists()
