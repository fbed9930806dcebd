#!/usr/bin/env python3
"""Benchmark: in-place cycle-leader transpose vs copy transpose, and naive mul"""

import json
import sys
import timeit
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable

import numpy as np

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from lamath import Config, Tensor, using_config


@dataclass
class BenchResult:
    name: str
    size: str
    mean_us: float
    std_us: float
    iterations: int


def transpose_in_place(t: Tensor) -> None:
    """Cycle-leader transpose, O(r*c) bits of extra memory"""
    t.as_matrix().transpose()


def transpose_copy(t: Tensor) -> Tensor:
    """Allocate a second buffer and copy a[j][i] = a[i][j]"""
    return t.as_matrix().make_transposed()


def transpose_view(t: Tensor) -> None:
    """Flip the view flag, no data movement"""
    t.as_matrix().transpose_view()


def transpose_numpy(t: Tensor) -> np.ndarray:
    """NumPy reference: materialize the transpose"""
    return np.ascontiguousarray(t.to_numpy().T)


def mul_naive(a: Tensor, b: Tensor) -> Tensor:
    """Triple-loop matrix product"""
    return a.as_matrix().mul(b)


def benchmark(func: Callable, setup: Callable, iterations: int = 100) -> tuple[float, float]:
    """Run benchmark and return (mean_us, std_us)"""
    # Warmup
    for _ in range(min(3, iterations)):
        func(*setup())

    # Measure, fresh operands each run since transpose mutates
    times = []
    for _ in range(iterations):
        args = setup()
        start = timeit.default_timer()
        func(*args)
        end = timeit.default_timer()
        times.append((end - start) * 1e6)  # Convert to microseconds

    return float(np.mean(times)), float(np.std(times))


def run_benchmarks() -> list[BenchResult]:
    results = []
    rng = np.random.default_rng(42)

    print("Running transpose benchmarks...")
    with using_config(Config.fast()):
        for rows, cols in [(16, 32), (64, 48), (128, 96), (256, 200)]:
            arr = rng.standard_normal((rows, cols))
            size = f"{rows}x{cols}"

            def setup():
                return (Tensor.from_numpy(arr),)

            for name, func in [
                ("transpose_in_place", transpose_in_place),
                ("transpose_copy", transpose_copy),
                ("transpose_view", transpose_view),
                ("transpose_numpy", transpose_numpy),
            ]:
                iters = 5 if rows >= 128 and name != "transpose_view" else 20
                mean, std = benchmark(func, setup, iterations=iters)
                results.append(BenchResult(name, size, mean, std, iters))

        print("Running mul benchmarks...")
        for n in [8, 16, 32]:
            a = rng.standard_normal((n, n))
            b = rng.standard_normal((n, n))
            mean, std = benchmark(
                mul_naive,
                lambda: (Tensor.from_numpy(a), Tensor.from_numpy(b)),
                iterations=5,
            )
            results.append(BenchResult("mul_naive", str(n), mean, std, 5))

    return results


def print_results(results: list[BenchResult]):
    print(f"\n{'name':<20} {'size':<10} {'mean us':>12} {'std us':>12}")
    for r in results:
        print(f"{r.name:<20} {r.size:<10} {r.mean_us:>12.1f} {r.std_us:>12.1f}")


def export_json(results: list[BenchResult], filepath: str):
    with open(filepath, "w") as f:
        json.dump([asdict(r) for r in results], f, indent=2)


if __name__ == "__main__":
    results = run_benchmarks()
    print_results(results)
    export_json(results, "results_transpose.json")
    print("\nResults exported to results_transpose.json")
