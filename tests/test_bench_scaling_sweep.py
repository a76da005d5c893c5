import pytest

import bench_scaling_sweep
from bench_core import BenchmarkOutcome, InvalidConfiguration, compute
from bench_scaling_sweep import print_summary, run_sweep, throughput


def test_run_sweep_checksums_agree(capsys):
    results = run_sweep(2000, [1, 2, 4, 8])

    assert list(results) == [1, 2, 4, 8]
    assert {r.checksum for r in results.values()} == {compute(0, 2000)}
    assert "Testing with 8 workers... Done!" in capsys.readouterr().out


def test_run_sweep_validates_every_count_first(monkeypatch):
    ran = []
    monkeypatch.setattr(bench_scaling_sweep, "run_parallel",
                        lambda total, n: ran.append(n))

    with pytest.raises(InvalidConfiguration):
        run_sweep(100, [1, 2, 0])
    assert ran == []


def test_throughput():
    assert throughput(1000, BenchmarkOutcome(0.5, 0)) == 2000
    assert throughput(1000, BenchmarkOutcome(0.0, 0)) == float("inf")


def test_print_summary_marks_fastest(capsys):
    results = {
        1: BenchmarkOutcome(2.0, 7),
        2: BenchmarkOutcome(1.0, 7),
        4: BenchmarkOutcome(0.0, 7),
    }
    assert print_summary(100, results, 7) is True

    lines = capsys.readouterr().out.splitlines()
    best = [line for line in lines if "<-- best" in line]
    assert len(best) == 1
    assert best[0].startswith("4 ")


def test_print_summary_reports_mismatch(capsys):
    results = {1: BenchmarkOutcome(1.0, 7), 2: BenchmarkOutcome(0.5, 8)}
    assert print_summary(100, results, 7) is False
    assert "MISMATCH" in capsys.readouterr().out


def test_run_sweep_rejects_empty_sweep():
    with pytest.raises(InvalidConfiguration):
        run_sweep(10, [])
