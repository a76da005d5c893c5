import sys

from bench_core import (
    TOTAL_CORES,
    TOTAL_ITERATIONS,
    InvalidConfiguration,
    run_parallel,
    run_single,
)

# --- CONFIGURATION ---
# A fixed pile of work. We want to see how fast different crew sizes finish it.
SWEEP_ITERATIONS = TOTAL_ITERATIONS

# The crew sizes:
# 1:   baseline, same work as the single-threaded run plus dispatch overhead
# 2-8: typical laptop/desktop core counts
# 16+: oversubscription on most machines, shows the cost of extra threads
WORKER_SWEEP = [1, 2, 4, 8, 16, 32]


def run_sweep(total, worker_counts):
    """Run the parallel benchmark once per worker count, in the given order."""
    worker_counts = list(worker_counts)
    if not worker_counts:
        raise InvalidConfiguration("worker count sweep is empty")
    bad = [n for n in worker_counts if n < 1]
    if bad:
        raise InvalidConfiguration(f"worker counts must be >= 1, got {bad}")

    results = {}
    for n_workers in worker_counts:
        print(f"Testing with {n_workers} workers...", end="", flush=True)
        outcome = run_parallel(total, n_workers)
        results[n_workers] = outcome

        print(" Done!")
        print(f" -> Time:       {outcome.elapsed_seconds:.6f} seconds")
        print(f" -> Throughput: {throughput(total, outcome):,.0f} iterations/sec")
        print("-" * 60)
    return results


def throughput(total, outcome):
    if outcome.elapsed_seconds <= 0:
        return float("inf")
    return total / outcome.elapsed_seconds


def print_summary(total, results, expected_checksum):
    """Table of every configuration relative to the fastest one.

    Returns True when every configuration produced expected_checksum.
    """
    print("\n" + "=" * 70)
    print("SUMMARY — SCALING SWEEP")
    print("=" * 70)

    fastest = min(results, key=lambda n: results[n].elapsed_seconds)
    fastest_time = results[fastest].elapsed_seconds

    print(f"\n{'Workers':<10} {'Time (s)':>12} {'Throughput':>18} {'Relative':>10} {'Checksum':>10}")
    print("-" * 70)

    all_match = True
    for n_workers, outcome in results.items():
        elapsed = outcome.elapsed_seconds
        relative = fastest_time / elapsed if elapsed > 0 else 1.0
        matches = outcome.checksum == expected_checksum
        all_match = all_match and matches
        marker = " <-- best" if n_workers == fastest else ""
        print(f"{n_workers:<10} {elapsed:>12.6f} {throughput(total, outcome):>15,.0f}/s "
              f"{relative:>9.2f}x {'OK' if matches else 'MISMATCH':>10}{marker}")

    print("=" * 70 + "\n")
    return all_match


def main():
    print(f"--- THREAD SCALING SWEEP ---")
    print(f"Hardware: {TOTAL_CORES} logical cores detected")
    print(f"Workload: {SWEEP_ITERATIONS:,} XOR-checksum iterations")
    print(f"Sweep:    workers = {WORKER_SWEEP}")
    print("-" * 60)

    print("Single-threaded baseline...", end="", flush=True)
    baseline = run_single(SWEEP_ITERATIONS)
    print(f" {baseline.elapsed_seconds:.6f} seconds")
    print("-" * 60)

    results = run_sweep(SWEEP_ITERATIONS, WORKER_SWEEP)
    return 0 if print_summary(SWEEP_ITERATIONS, results, baseline.checksum) else 1


if __name__ == "__main__":
    sys.exit(main())
