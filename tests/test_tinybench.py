import pytest

import tinybench
from bench_core import TOTAL_CORES, BenchmarkOutcome, compute
from bench_sysinfo import SysInfo


@pytest.fixture(autouse=True)
def fixed_sysinfo(monkeypatch):
    def fake_collect(cpu_used=0):
        return SysInfo("linux", "x86_64", "Test CPU", 2, 4, cpu_used, 2048)

    monkeypatch.setattr(tinybench, "collect_sysinfo", fake_collect)


def test_main_reports_both_modes(capsys):
    assert tinybench.main(["--iterations", "1000", "--concurrency", "4"]) == 0

    out = capsys.readouterr().out
    assert "[system info]: linux/x86_64" in out
    assert "[system info]: 2 Cores, 4 Threads" in out
    assert "Single-threaded:" in out
    assert "Concurrent:" in out
    assert out.count(f"Result: {compute(0, 1000)}") == 2


def test_main_default_concurrency_message(capsys):
    tinybench.main(["--iterations", "100", "--concurrency", str(TOTAL_CORES)])
    assert "using default CPU concurrency" in capsys.readouterr().out


def test_main_custom_concurrency_message(capsys):
    custom = TOTAL_CORES + 1
    tinybench.main(["--iterations", "100", "--concurrency", str(custom)])
    assert f"setting custom concurrency to {custom}" in capsys.readouterr().out


@pytest.mark.parametrize("flags", [
    ["--concurrency", "0"],
    ["--concurrency", "-2"],
    ["--concurrency", "many"],
    ["--iterations", "-1"],
])
def test_main_rejects_invalid_flags(flags, capsys):
    with pytest.raises(SystemExit) as exc:
        tinybench.main(flags)
    assert exc.value.code == 2
    assert "tinybench" in capsys.readouterr().err


def test_main_uploads_when_asked(monkeypatch):
    uploaded = []
    monkeypatch.setattr(tinybench, "upload_results", uploaded.append)

    assert tinybench.main(["--iterations", "500", "--concurrency", "3", "--upload"]) == 0

    assert len(uploaded) == 1
    assert uploaded[0]["UsedCPUCount"] == 3
    assert uploaded[0]["CPUModel"] == "Test CPU"


def test_main_does_not_upload_by_default(monkeypatch):
    uploaded = []
    monkeypatch.setattr(tinybench, "upload_results", uploaded.append)
    tinybench.main(["--iterations", "500", "--concurrency", "2"])
    assert uploaded == []


def test_main_failed_upload_keeps_exit_status(monkeypatch):
    monkeypatch.setattr(tinybench, "upload_results", lambda payload: False)
    assert tinybench.main(["--iterations", "500", "--concurrency", "2", "--upload"]) == 0


def test_main_flags_checksum_mismatch(monkeypatch):
    monkeypatch.setattr(tinybench, "run_parallel",
                        lambda total, n: BenchmarkOutcome(0.1, -1))
    assert tinybench.main(["--iterations", "100", "--concurrency", "2"]) == 1
