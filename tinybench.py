"""
tinybench: single- vs multi-threaded CPU throughput on this machine.

    tinybench                       # all logical CPUs, 100M iterations
    tinybench --concurrency 4
    tinybench --iterations 10000000000 --upload
"""
import argparse
import logging
import sys

from bench_core import TOTAL_CORES, TOTAL_ITERATIONS, run_parallel, run_single
from bench_sysinfo import collect_sysinfo
from bench_upload import RESULTS_URI, build_payload, upload_results

logger = logging.getLogger("tinybench")


def positive_int(value):
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def non_negative_int(value):
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {n}")
    return n


def build_parser():
    p = argparse.ArgumentParser(
        "tinybench",
        description="Compare single-threaded and multi-threaded CPU throughput.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--concurrency", type=positive_int, default=TOTAL_CORES,
                   help="Number of 'threads' to use")
    p.add_argument("--iterations", type=non_negative_int, default=TOTAL_ITERATIONS,
                   help="Size of the integer workload")
    p.add_argument("--upload", action="store_true",
                   help=f"Upload results to {RESULTS_URI}")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Log debug output")
    return p


def init_logging(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    init_logging(args.verbose)

    info = collect_sysinfo(args.concurrency)
    print(f"[system info]: {info.os}/{info.arch}")
    print(f"[system info]: CPU Model: {info.cpu_model}")
    print(f"[system info]: {info.cores} Cores, {info.threads} Threads")

    if args.concurrency != TOTAL_CORES:
        print(f"[tinybench]: setting custom concurrency to {args.concurrency}")
    else:
        print(f"[tinybench]: using default CPU concurrency of {args.concurrency}")

    print(f"Running compute benchmark with {args.iterations:,} iterations...")
    single = run_single(args.iterations)
    print(f"Single-threaded: {single.elapsed_seconds:.6f} seconds")
    print(f"Result: {single.checksum}")

    print(f"Running multithreaded compute benchmark with {args.iterations:,} "
          f"iterations on concurrency {args.concurrency}...")
    multi = run_parallel(args.iterations, args.concurrency)
    print(f"Concurrent: {multi.elapsed_seconds:.6f} seconds")
    print(f"Result: {multi.checksum}")

    if multi.elapsed_seconds > 0:
        print(f"Speedup: {single.elapsed_seconds / multi.elapsed_seconds:.2f}x")

    checksums_match = single.checksum == multi.checksum
    if not checksums_match:
        logger.error("checksum mismatch: single-threaded %d, concurrent %d",
                     single.checksum, multi.checksum)

    if args.upload:
        upload_results(build_payload(single, multi, info))

    return 0 if checksums_match else 1


if __name__ == "__main__":
    sys.exit(main())
