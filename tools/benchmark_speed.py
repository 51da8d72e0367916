"""
Performance Benchmark
=====================

Measures headless tick throughput of the game engine.

Usage:
    python -m tools.benchmark_speed [--ticks N] [--seed S]
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import numpy as np

# Add project root to path for direct script execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from cube_snake.core.config_loader import load_config
from cube_snake.core.direction import AXES
from cube_snake.core.game import GameSession


def benchmark_session(
    num_ticks: int = 10000,
    seed: int = 42,
    turn_probability: float = 0.2
) -> dict:
    """
    Benchmark GameSession.tick with random turns.

    Every call is spaced exactly one interval apart so each one moves the
    snake. Games that end are reset immediately.

    Args:
        num_ticks: Number of tick() calls.
        seed: Random seed for both turns and food.
        turn_probability: Chance of requesting a random turn before a tick.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    session = GameSession(config=config, seed=seed)
    rng = np.random.default_rng(seed)
    interval = config.board.tick_interval_ms

    clock = 0.0
    games = 0
    longest = len(session.snake)

    start = time.perf_counter()
    for _ in range(num_ticks):
        if rng.random() < turn_probability:
            session.set_direction(AXES[rng.integers(3)], int(rng.choice((-1, 1))))
        clock += interval
        result = session.tick(clock)
        longest = max(longest, result.snapshot.length)
        if session.is_over:
            games += 1
            session.reset()
    elapsed = time.perf_counter() - start

    return {
        "mode": "session",
        "num_ticks": num_ticks,
        "games": games,
        "longest_snake": longest,
        "elapsed_seconds": elapsed,
        "ticks_per_second": num_ticks / elapsed,
        "us_per_tick": (elapsed * 1e6) / num_ticks
    }


def benchmark_gated(num_calls: int = 100000, seed: int = 42) -> dict:
    """Benchmark tick() calls that are rejected by the interval gate."""
    session = GameSession(config=load_config(), seed=seed)

    start = time.perf_counter()
    for i in range(num_calls):
        session.tick(i * 1e-3)
    elapsed = time.perf_counter() - start

    return {
        "mode": "gated",
        "num_ticks": num_calls,
        "elapsed_seconds": elapsed,
        "ticks_per_second": num_calls / elapsed,
        "us_per_tick": (elapsed * 1e6) / num_calls
    }


def run_all_benchmarks(ticks: int = 10000, seed: int = 42) -> list:
    """Run all benchmarks and print a summary."""
    print("=" * 60)
    print("CUBE SNAKE ENGINE BENCHMARK")
    print("=" * 60)
    print()

    results = []

    print("Benchmarking moving ticks...")
    result = benchmark_session(num_ticks=ticks, seed=seed)
    results.append(result)
    print(f"  Ticks/sec: {result['ticks_per_second']:.1f}")
    print(f"  Games:     {result['games']} (longest snake {result['longest_snake']})")
    print()

    print("Benchmarking gated ticks...")
    result = benchmark_gated(num_calls=ticks * 10, seed=seed)
    results.append(result)
    print(f"  Ticks/sec: {result['ticks_per_second']:.1f}")
    print()

    print(f"{'Mode':<12} {'Ticks':>10} {'Ticks/s':>14} {'us/tick':>10}")
    print("-" * 50)
    for r in results:
        print(f"{r['mode']:<12} {r['num_ticks']:>10} {r['ticks_per_second']:>14.1f} {r['us_per_tick']:>10.2f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Cube Snake engine performance")
    parser.add_argument("--ticks", type=int, default=10000, help="Moving ticks to run")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer ticks)")

    args = parser.parse_args()

    ticks = 1000 if args.quick else args.ticks
    run_all_benchmarks(ticks=ticks, seed=args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
