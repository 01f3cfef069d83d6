"""
Benchmark script for quasi-clique search performance.
Measures per-partition build, prune and search time on synthetic graphs
with a planted clique, or on a real edge file.
"""

import io
import logging
import random
import statistics
import sys
import time
from pathlib import Path
from typing import List

# Add src to path so we can import quasiclique_toolkit
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from quasiclique_toolkit.finder import FinderConfig, QuasiCliqueFinder, load_config  # noqa: E402

# Setup logging
logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger("benchmark")

SCHEMA = [
    ("author", "published_at", "conference"),
    ("author", "published_at", "journal"),
]


def synthetic_lines(
    partitions: int,
    clique_core: int,
    clique_non_core: int,
    noise_edges: int,
    seed: int,
) -> List[str]:
    """Planted clique per partition plus random author→venue noise."""
    rng = random.Random(seed)
    lines = []
    for partition in range(partitions):
        venues = [
            (clique_core + i, "conference" if i % 2 == 0 else "journal")
            for i in range(clique_non_core)
        ]
        for author in range(clique_core):
            for venue, venue_type in venues:
                lines.append(f"{partition}\t{author}\t{venue}\tauthor\tpublished_at\t{venue_type}")

        first_noise = clique_core + clique_non_core
        for _ in range(noise_edges):
            author = first_noise + rng.randrange(noise_edges)
            venue = first_noise + noise_edges + rng.randrange(noise_edges)
            venue_type = "conference" if venue % 2 == 0 else "journal"
            lines.append(f"{partition}\t{author}\t{venue}\tauthor\tpublished_at\t{venue_type}")
    return lines


def benchmark_search(
    lines: List[str],
    config: FinderConfig,
    label: str,
    iterations: int = 3,
):
    """Benchmark a full run over lines."""
    print(f"\n--- Benchmarking {label} (x{iterations}) ---")

    times = []
    summary = None
    for i in range(iterations):
        start = time.perf_counter()
        summary = QuasiCliqueFinder(config).run(lines, io.StringIO())
        duration = time.perf_counter() - start
        times.append(duration)
        print(f"Run {i+1}: {duration:.4f}s ({summary})")

    print(f"Average: {statistics.mean(times):.4f}s")
    print(f"Min: {min(times):.4f}s")
    print(f"Max: {max(times):.4f}s")
    if summary is not None:
        print(summary.timing.summary())

    return statistics.mean(times)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Benchmark quasi-clique search")
    parser.add_argument("--input", type=Path, help="Tab-separated edge file to benchmark instead of synthetic data")
    parser.add_argument("--config", type=Path, help="JSON finder config (required with --input)")
    parser.add_argument("--partitions", type=int, default=5, help="Synthetic partitions")
    parser.add_argument("--core", type=int, default=10, help="Planted clique core size")
    parser.add_argument("--non-core", type=int, default=20, help="Planted clique non-core size")
    parser.add_argument("--noise", type=int, default=200, help="Noise edges per partition")
    parser.add_argument("--min-degree", type=int, default=2, help="Pruning threshold for the pruned run")
    parser.add_argument("--iterations", type=int, default=3)
    parser.add_argument("--seed", type=int, default=42)

    args = parser.parse_args()

    if args.input:
        if not args.config:
            parser.error("--config is required with --input")
        with open(args.input, "r", encoding="utf-8") as f:
            input_lines = f.readlines()
        benchmark_search(input_lines, load_config(args.config), args.input.name, args.iterations)
    else:
        input_lines = synthetic_lines(
            args.partitions, args.core, args.non_core, args.noise, args.seed
        )
        print(f"Synthetic input: {len(input_lines)} lines, {args.partitions} partitions")
        base = FinderConfig(
            schema=SCHEMA,
            core_type="author",
            density_weight=1.0,
            global_threshold=1.0,
            local_threshold=1.0,
            seed=args.seed,
        )
        unpruned = benchmark_search(input_lines, base, "unpruned search", args.iterations)
        pruned_config = FinderConfig.from_dict({**base.to_dict(), "min_degree": args.min_degree})
        pruned = benchmark_search(input_lines, pruned_config, f"pruned search (k={args.min_degree})", args.iterations)
        print(f"\nPruning speedup: {unpruned / pruned:.2f}x")
