#!/usr/bin/env python3
"""Benchmark dungeon generation, stage by stage."""

from __future__ import annotations

import argparse
import json
import time
from collections import defaultdict
from pathlib import Path

from warren.environment.generators.pipeline import create_dungeon_pipeline
from warren.util.coordinates import Box

GRID_SIZES: tuple[int, ...] = (40, 60, 100, 150, 200)


class GenerationBenchmark:
    """Times each pipeline layer across several map sizes."""

    def __init__(self, iterations: int, depth: int) -> None:
        self.iterations = iterations
        self.depth = depth
        self.results: dict[str, dict[str, float]] = {}

    def _run_case(self, size: int) -> dict[str, float]:
        """Run one map size and return average milliseconds per layer."""
        totals: dict[str, float] = defaultdict(float)

        for i in range(self.iterations):
            generator = create_dungeon_pipeline(
                bounds=Box.from_size(size, size),
                max_depth=self.depth,
                seed=(size * 1_000) + i,
            )
            ctx = generator.create_context()
            for layer in generator.layers:
                start = time.perf_counter()
                layer.apply(ctx)
                totals[type(layer).__name__] += time.perf_counter() - start

        return {name: (t / self.iterations) * 1000.0 for name, t in totals.items()}

    def run(self) -> None:
        """Run all configured map-size benchmarks."""
        print("Dungeon Generation Benchmark")
        print("=" * 42)
        print(f"Iterations per size: {self.iterations}, depth: {self.depth}")

        for size in GRID_SIZES:
            layer_ms = self._run_case(size)
            size_key = f"{size}x{size}"
            self.results[size_key] = layer_ms

            print()
            print(f"{size_key} (total {sum(layer_ms.values()):.2f} ms)")
            print("-" * 42)
            for name, ms in layer_ms.items():
                print(f"{name:>20} {ms:14.2f}")

    def save_results(self, filename: str) -> None:
        """Save benchmark output to a JSON file."""
        with Path(filename).open("w") as f:
            json.dump(self.results, f, indent=2)
        print(f"\nSaved benchmark results to {filename}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark dungeon generation")
    parser.add_argument(
        "--iterations",
        type=int,
        default=3,
        help="Number of runs per map size (default: 3)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=3,
        help="Quadtree depth limit (default: 3)",
    )
    parser.add_argument("--save", type=str, help="Save current results to JSON")
    args = parser.parse_args(argv)

    benchmark = GenerationBenchmark(iterations=args.iterations, depth=args.depth)
    benchmark.run()

    if args.save:
        benchmark.save_results(args.save)


if __name__ == "__main__":
    main()
