#!/usr/bin/env python3
"""
Benchmark Script for kv-log

Measures parsing and execution throughput on generated command logs,
without file I/O. Useful for profiling and optimization.

Usage:
    python scripts/benchmark.py                    # Run all benchmarks
    python scripts/benchmark.py --operations 10000 # Custom operation count
    python scripts/benchmark.py --write-log out.log  # Also save a generated log
    python scripts/benchmark.py --profile          # Enable cProfile
"""

import argparse
import time
import random
import string
import statistics
from typing import List, Callable, Dict, Any
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kvlog.errors import ParseError
from kvlog.protocol.commands import Get, Incr, Set
from kvlog.protocol.parser import ProtocolParser
from kvlog.runner import CommandLogRunner, ErrorPolicy
from kvlog.store.executor import CommandExecutor


def random_string(length: int) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choices(string.ascii_letters + string.digits, k=length))


def generate_log(operations: int, keys: List[str], values: List[str]) -> List[str]:
    """
    Generate a valid command log.

    Counters live under their own keys so INCR never meets a non-numeric
    value.
    """
    counters = [f"ctr{i}" for i in range(max(1, len(keys) // 10))]
    lines = []
    for i in range(operations):
        roll = random.random()
        if roll < 0.4:
            lines.append(f"SET {keys[i]} {values[i]}")
        elif roll < 0.8:
            lines.append(f"GET {random.choice(keys)}")
        elif roll < 0.9:
            lines.append(f"INCR {random.choice(counters)}")
        elif roll < 0.999:
            lines.append(f"DEL {random.choice(keys)}")
        else:
            lines.append("FLUSH")
    return lines


def measure_time(func: Callable, iterations: int = 1) -> Dict[str, float]:
    """Measure execution time statistics."""
    times = []

    for _ in range(iterations):
        start = time.perf_counter()
        func()
        elapsed = (time.perf_counter() - start) * 1000  # Convert to ms
        times.append(elapsed)

    return {
        "min_ms": min(times),
        "max_ms": max(times),
        "mean_ms": statistics.mean(times),
        "median_ms": statistics.median(times),
        "total_ms": sum(times),
    }


class Benchmark:
    """Collection of benchmarks for kv-log components."""

    def __init__(self, operations: int = 10000, key_size: int = 16, value_size: int = 64):
        self.operations = operations
        self.key_size = key_size
        self.value_size = value_size

        # Pre-generate test data
        self.keys = [random_string(key_size) for _ in range(operations)]
        self.values = [random_string(value_size) for _ in range(operations)]
        self.log = generate_log(operations, self.keys, self.values)

    def _finish(self, stats: Dict[str, Any], operation: str) -> Dict[str, Any]:
        stats["ops_per_second"] = self.operations / (stats["total_ms"] / 1000)
        stats["operation"] = operation
        stats["count"] = self.operations
        return stats

    def benchmark_parse(self) -> Dict[str, Any]:
        """Benchmark parsing the generated log."""
        parser = ProtocolParser(strict=False)

        def run():
            for line in self.log:
                parser.parse(line)

        return self._finish(measure_time(run), "Parse (mixed log)")

    def benchmark_parse_failures(self) -> Dict[str, Any]:
        """Benchmark rejecting malformed lines."""
        parser = ProtocolParser(strict=False)
        bad_lines = [f"SET {key}" for key in self.keys]

        def run():
            for line in bad_lines:
                try:
                    parser.parse(line)
                except ParseError:
                    pass

        return self._finish(measure_time(run), "Parse (rejected)")

    def benchmark_set(self) -> Dict[str, Any]:
        """Benchmark applying SET commands."""
        executor = CommandExecutor()
        commands = [Set(self.keys[i], self.values[i]) for i in range(self.operations)]

        def run():
            for command in commands:
                executor.apply(command)

        return self._finish(measure_time(run), "Apply SET")

    def benchmark_get(self) -> Dict[str, Any]:
        """Benchmark applying GET commands (hits)."""
        executor = CommandExecutor()
        for i in range(self.operations):
            executor.store.set(self.keys[i], self.values[i])
        commands = [Get(key) for key in self.keys]

        def run():
            for command in commands:
                executor.apply(command)

        return self._finish(measure_time(run), "Apply GET (hit)")

    def benchmark_incr(self) -> Dict[str, Any]:
        """Benchmark applying INCR to a handful of counters."""
        executor = CommandExecutor()
        commands = [Incr(f"ctr{i % 16}") for i in range(self.operations)]

        def run():
            for command in commands:
                executor.apply(command)

        return self._finish(measure_time(run), "Apply INCR")

    def benchmark_end_to_end(self) -> Dict[str, Any]:
        """Benchmark parse + apply + format over the generated log."""
        def run():
            runner = CommandLogRunner(
                parser=ProtocolParser(strict=False),
                on_error=ErrorPolicy.HALT,
            )
            for _ in runner.run(self.log):
                pass

        return self._finish(measure_time(run), "End-to-end run")

    def run_all(self) -> List[Dict[str, Any]]:
        """Run all benchmarks."""
        benchmarks = [
            ("Parse", self.benchmark_parse),
            ("Parse failures", self.benchmark_parse_failures),
            ("SET", self.benchmark_set),
            ("GET", self.benchmark_get),
            ("INCR", self.benchmark_incr),
            ("End-to-end", self.benchmark_end_to_end),
        ]

        results = []
        for name, func in benchmarks:
            print(f"Running: {name}...", end=" ", flush=True)
            result = func()
            print(f"{result['ops_per_second']:,.0f} ops/sec")
            results.append(result)

        return results


def print_results(results: List[Dict[str, Any]]):
    """Print benchmark results in a table."""
    print()
    print("=" * 70)
    print("                        BENCHMARK RESULTS")
    print("=" * 70)
    print(f"{'Operation':<30} {'Ops/sec':>12} {'Mean (ms)':>12} {'Total (ms)':>12}")
    print("-" * 70)

    for r in results:
        print(f"{r['operation']:<30} {r['ops_per_second']:>12,.0f} "
              f"{r['mean_ms']:>12.3f} {r['total_ms']:>12.1f}")

    print("=" * 70)


def main():
    parser = argparse.ArgumentParser(
        description="Benchmark kv-log components",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--operations", "-n",
        type=int,
        default=10000,
        help="Number of commands per benchmark"
    )
    parser.add_argument(
        "--key-size",
        type=int,
        default=16,
        help="Size of keys"
    )
    parser.add_argument(
        "--value-size",
        type=int,
        default=64,
        help="Size of values"
    )
    parser.add_argument(
        "--write-log",
        metavar="PATH",
        help="Write the generated command log to PATH"
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Enable cProfile profiling"
    )

    args = parser.parse_args()

    print(f"kv-log Benchmark")
    print(f"================")
    print(f"Commands per test: {args.operations:,}")
    print(f"Key size: {args.key_size}")
    print(f"Value size: {args.value_size}")
    print()

    benchmark = Benchmark(
        operations=args.operations,
        key_size=args.key_size,
        value_size=args.value_size,
    )

    if args.write_log:
        with open(args.write_log, "w") as f:
            f.writelines(f"{line}\n" for line in benchmark.log)
        print(f"Wrote {len(benchmark.log):,} commands to {args.write_log}")
        print()

    if args.profile:
        import cProfile
        import pstats

        profiler = cProfile.Profile()
        profiler.enable()
        results = benchmark.run_all()
        profiler.disable()

        print_results(results)

        print()
        print("Profiling Results (top 20):")
        print("-" * 70)
        stats = pstats.Stats(profiler)
        stats.sort_stats('cumulative')
        stats.print_stats(20)
    else:
        results = benchmark.run_all()
        print_results(results)


if __name__ == "__main__":
    main()
