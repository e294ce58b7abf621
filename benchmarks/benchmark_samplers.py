#!/usr/bin/env python
"""Benchmark: Sampler Throughput.

Draws per second for rmath engines, normal generators and distribution
families, next to numpy's Generator as a reference point.

Scenarios tested:
1. Uniform engines (all seven kinds, bulk unif_rand)
2. Normal generators on Mersenne-Twister
3. Distribution families across their algorithm regimes

Usage:
    python benchmarks/benchmark_samplers.py
    python benchmarks/benchmark_samplers.py --group engines
    python benchmarks/benchmark_samplers.py --quick
"""

import argparse
import time
from typing import Callable, Tuple, Any, List, Dict
import numpy as np

try:
    from rmath.rng import RNGKind, N01Kind, create_rng, MersenneTwister
    from rmath.rng.normal import create_normal
    from rmath.distributions import (
        Normal, Exponential, Gamma, Beta, Poisson, Binomial, NegativeBinomial, Geometric,
    )
    RMATH_AVAILABLE = True
except ImportError:
    RMATH_AVAILABLE = False


# =============================================================================
# Utilities
# =============================================================================

def timeit(func: Callable, n_runs: int = 3, warmup: int = 1) -> Tuple[float, Any]:
    """Time a function and return (avg_time, last_result)."""
    result = None
    for _ in range(warmup):
        result = func()

    start = time.perf_counter()
    for _ in range(n_runs):
        result = func()
    elapsed = time.perf_counter() - start

    return elapsed / n_runs, result


def format_rate(n: int, seconds: float) -> str:
    """Format draws per second."""
    rate = n / seconds if seconds > 0 else float('inf')
    if rate >= 1e6:
        return f"{rate / 1e6:.2f}M/s"
    if rate >= 1e3:
        return f"{rate / 1e3:.1f}k/s"
    return f"{rate:.0f}/s"


def _row(label: str, n: int, t_rmath: float, t_numpy: float = None) -> Dict[str, Any]:
    ref = format_rate(n, t_numpy) if t_numpy else "-"
    print(f"{label:<34} {format_rate(n, t_rmath):<14} {ref:<14}")
    return {"label": label, "n": n, "rmath_time": t_rmath, "numpy_time": t_numpy}


def _header(title: str) -> None:
    print(f"\n--- {title} ---")
    print(f"{'Sampler':<34} {'rmath':<14} {'numpy':<14}")
    print("-" * 62)


# =============================================================================
# Benchmarks
# =============================================================================

def bench_engines(n: int) -> List[Dict[str, Any]]:
    _header("Uniform engines")
    gen = np.random.default_rng(42)
    t_np, _ = timeit(lambda: gen.random(n))
    results = []
    for kind in RNGKind:
        rng = create_rng(kind, seed=42)
        t, _ = timeit(lambda: rng.unif_rand(n))
        results.append(_row(kind.label, n, t, t_np))
    return results


def bench_normal(n: int) -> List[Dict[str, Any]]:
    _header("Normal generators (Mersenne-Twister)")
    gen = np.random.default_rng(42)
    t_np, _ = timeit(lambda: gen.standard_normal(n))
    results = []
    for kind in N01Kind:
        normal = create_normal(kind, MersenneTwister(42))
        t, _ = timeit(lambda: normal.norm_rand(n))
        results.append(_row(kind.label, n, t, t_np))
    return results


def bench_distributions(n: int) -> List[Dict[str, Any]]:
    _header("Distribution families")
    gen = np.random.default_rng(42)
    rng = MersenneTwister(42)
    cases = [
        ("rnorm", lambda: Normal(rng).rnorm(n), lambda: gen.normal(size=n)),
        ("rexp", lambda: Exponential(rng).rexp(n), lambda: gen.exponential(size=n)),
        ("rgamma shape=0.5 (GS)", lambda: Gamma(rng).rgamma(n, 0.5), lambda: gen.gamma(0.5, size=n)),
        ("rgamma shape=5 (GD)", lambda: Gamma(rng).rgamma(n, 5.0), lambda: gen.gamma(5.0, size=n)),
        ("rbeta 0.5, 0.5 (BC)", lambda: Beta(rng).rbeta(n, 0.5, 0.5), lambda: gen.beta(0.5, 0.5, size=n)),
        ("rbeta 2, 5 (BB)", lambda: Beta(rng).rbeta(n, 2.0, 5.0), lambda: gen.beta(2.0, 5.0, size=n)),
        ("rpois 4 (table)", lambda: Poisson(rng).rpois(n, 4.0), lambda: gen.poisson(4.0, size=n)),
        ("rpois 200 (PD)", lambda: Poisson(rng).rpois(n, 200.0), lambda: gen.poisson(200.0, size=n)),
        ("rbinom 50, 0.3 (inversion)", lambda: Binomial(rng).rbinom(n, 50, 0.3),
         lambda: gen.binomial(50, 0.3, size=n)),
        ("rbinom 1000, 0.4 (BTPE)", lambda: Binomial(rng).rbinom(n, 1000, 0.4),
         lambda: gen.binomial(1000, 0.4, size=n)),
        ("rnbinom 3, 0.4", lambda: NegativeBinomial(rng).rnbinom(n, 3.0, 0.4),
         lambda: gen.negative_binomial(3.0, 0.4, size=n)),
        ("rgeom 0.25", lambda: Geometric(rng).rgeom(n, 0.25), lambda: gen.geometric(0.25, size=n) - 1),
    ]
    results = []
    for label, ours, ref in cases:
        t, _ = timeit(ours)
        t_np, _ = timeit(ref)
        results.append(_row(label, n, t, t_np))
    return results


GROUPS = {
    "engines": bench_engines,
    "normal": bench_normal,
    "dist": bench_distributions,
}


def main():
    parser = argparse.ArgumentParser(description="Sampler Throughput Benchmarks")
    parser.add_argument("--group", choices=[*GROUPS, "all"], default="all",
                        help="Which samplers to benchmark")
    parser.add_argument("--quick", action="store_true", help="Quick mode with fewer draws")
    args = parser.parse_args()

    print("=" * 62)
    print("SAMPLER THROUGHPUT BENCHMARK")
    print("=" * 62)
    print(f"rmath available: {RMATH_AVAILABLE}")

    if not RMATH_AVAILABLE:
        print("ERROR: rmath is required")
        return

    n = 10_000 if args.quick else 200_000
    groups = GROUPS if args.group == "all" else {args.group: GROUPS[args.group]}
    for bench in groups.values():
        bench(n)


if __name__ == "__main__":
    main()
