"""
Raw CPU throughput workload: an XOR checksum over an integer range, run either
in one pass or split across worker threads and folded back together.

XOR is associative and commutative, so the folded checksum of any partition
equals the checksum of a single sequential pass. That equality is what makes
the multi-threaded number trustworthy.
"""
import functools
import logging
import multiprocessing
import operator
import time
from dataclasses import dataclass

import numpy as np
from joblib import Parallel, delayed

logger = logging.getLogger(__name__)

# --- HARDWARE CONFIGURATION ---
TOTAL_CORES = multiprocessing.cpu_count()

# --- WORKLOAD CONFIGURATION ---
# Reference workload size. A heavier variant uses 10_000_000_000.
TOTAL_ITERATIONS = 100_000_000

# Indices handled per vectorized step. Keeps the int64 temporaries at a few MB
# per worker however large the range is, and gives numpy a GIL-free stretch of
# work per ufunc call so the worker threads actually run side by side.
BLOCK_SIZE = 1 << 20

MULTIPLIER = 31
OFFSET = 17


class InvalidConfiguration(ValueError):
    """Worker count below 1 or a negative workload size."""


@dataclass(frozen=True)
class IterationRange:
    """Half-open index range [start, end) owned by one worker."""
    start: int
    end: int

    @property
    def size(self):
        return self.end - self.start


@dataclass(frozen=True)
class BenchmarkOutcome:
    elapsed_seconds: float
    checksum: int


# ============================================================================
# WORKER FUNCTION
# ============================================================================
def compute(start, end):
    """
    XOR-fold ``(i * 31) ^ (i + 17)`` over every i in [start, end).

    Arithmetic is signed 64-bit with silent two's-complement wraparound
    (numpy int64 array ops), so large indices never raise. Returns a plain
    Python int in the int64 range; an empty range gives 0.
    """
    if start > end:
        raise InvalidConfiguration(f"range start {start} is past its end {end}")

    checksum = np.int64(0)
    for block_start in range(start, end, BLOCK_SIZE):
        block_end = min(block_start + BLOCK_SIZE, end)
        i = np.arange(block_start, block_end, dtype=np.int64)
        values = (i * MULTIPLIER) ^ (i + OFFSET)
        checksum ^= np.bitwise_xor.reduce(values)
    return int(checksum)


# ============================================================================
# PARTITIONING
# ============================================================================
def validate_workload(total, n_workers=1):
    if n_workers < 1:
        raise InvalidConfiguration(f"worker count must be >= 1, got {n_workers}")
    if total < 0:
        raise InvalidConfiguration(f"total iterations must be >= 0, got {total}")


def partition(total, n_workers):
    """
    Split [0, total) into n_workers contiguous ranges of total // n_workers
    indices each. The last range always ends at total and absorbs the
    remainder, so when n_workers > total every range but the last is empty.
    """
    validate_workload(total, n_workers)

    chunk_size = total // n_workers
    ranges = []
    for i in range(n_workers):
        start = i * chunk_size
        end = start + chunk_size
        if i == n_workers - 1:
            end = total
        ranges.append(IterationRange(start, end))
    return ranges


def fold_checksums(partials):
    return functools.reduce(operator.xor, partials, 0)


# ============================================================================
# TIMING
# ============================================================================
def _elapsed_since(start):
    """Seconds since a perf_counter() reading, truncated to microseconds."""
    micros = int((time.perf_counter() - start) * 1_000_000)
    return max(micros, 0) / 1_000_000


# ============================================================================
# METHOD 1: SINGLE-THREADED
# ============================================================================
def run_single(total=TOTAL_ITERATIONS):
    """One direct compute() over [0, total) on the calling thread."""
    validate_workload(total)

    start = time.perf_counter()
    checksum = compute(0, total)
    elapsed = _elapsed_since(start)

    return BenchmarkOutcome(elapsed, checksum)


# ============================================================================
# METHOD 2: MULTI-THREADED FAN-OUT / FAN-IN
# ============================================================================
def run_parallel(total=TOTAL_ITERATIONS, n_workers=TOTAL_CORES):
    """
    One thread per range via joblib's threading backend:
      - partition() runs (and validates) before any worker starts
      - batch_size=1 so each of the n_workers threads takes exactly one range
      - Parallel returns only once every worker is done, one result slot per
        range, so no partial is dropped or counted twice

    The fold happens after the clock stops; it is O(n_workers) and not part of
    the measured work.
    """
    ranges = partition(total, n_workers)
    logger.debug("dispatching %d ranges, chunk size %d, last range %d",
                 len(ranges), ranges[0].size, ranges[-1].size)

    start = time.perf_counter()

    partials = Parallel(n_jobs=n_workers, prefer="threads", batch_size=1)(
        delayed(compute)(r.start, r.end)
        for r in ranges
    )

    elapsed = _elapsed_since(start)

    return BenchmarkOutcome(elapsed, fold_checksums(partials))
