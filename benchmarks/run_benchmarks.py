"""Benchmark the double-array trie against the built-in set."""

import gc
import json
import random
import string
import time
import tracemalloc
from collections.abc import Callable
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import psutil

from src.custom_data_structures.double_array_trie.double_array_trie import (
    DoubleArrayTrie,
)
from src.custom_data_structures.double_array_trie.mapper import (
    LowercaseCharacterValueMapper,
)

RESULTS_DIR = Path(__file__).parent.parent / "static" / "benchmarks"
DATA_SIZES = [100, 1000, 5000, 10000]
MIN_KEY_LENGTH = 3
MAX_KEY_LENGTH = 12
SEED = 1234


def generate_keys(count: int, rng: random.Random) -> list[str]:
    """Generate `count` distinct random lowercase keys."""
    keys: set[str] = set()
    while len(keys) < count:
        length = rng.randint(MIN_KEY_LENGTH, MAX_KEY_LENGTH)
        keys.add("".join(rng.choices(string.ascii_lowercase, k=length)))
    return list(keys)


def build_double_array_trie(keys: list[str]) -> DoubleArrayTrie:
    data_trie = DoubleArrayTrie(LowercaseCharacterValueMapper())
    data_trie.update(keys)
    return data_trie


def build_set(keys: list[str]) -> set[str]:
    return set(keys)


def measure(
    build: Callable[[list[str]], Any],
    keys: list[str],
    queries: list[str],
) -> dict[str, float | int]:
    """Measure build time, lookup time and memory for one structure.

    Args:
        build (Callable): Builds the structure from the keys.
        keys (list[str]): The keys to insert.
        queries (list[str]): The keys to look up afterwards.

    Returns:
        dict[str, float | int]: The collected metrics.

    """
    gc.collect()
    process = psutil.Process()
    rss_before = process.memory_info().rss

    tracemalloc.start()
    start_time = time.perf_counter()
    structure = build(keys)
    build_time_ms = (time.perf_counter() - start_time) * 1000
    _, peak_memory = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    start_time = time.perf_counter()
    hits = sum(1 for query in queries if query in structure)
    lookup_time_ms = (time.perf_counter() - start_time) * 1000

    return {
        "build_time_ms": build_time_ms,
        "average_lookup_time_us": lookup_time_ms * 1000 / len(queries),
        "peak_memory_bytes": peak_memory,
        "rss_delta_bytes": process.memory_info().rss - rss_before,
        "hits": hits,
    }


def plot_results(
    results: dict[str, dict[int, dict[str, float | int]]],
    metric: str,
    ylabel: str,
) -> None:
    """Save a grouped bar chart of one metric for every structure."""
    plt.figure(figsize=(8, 5))
    width = 0.8 / len(results)
    x = range(len(DATA_SIZES))

    for i, (name, by_size) in enumerate(results.items()):
        y_values = [by_size[size][metric] for size in DATA_SIZES]
        plt.bar(
            [position + i * width for position in x],
            y_values,
            width=width,
            label=name,
        )

    plt.xticks(
        [position + width * (len(results) - 1) / 2 for position in x],
        [str(size) for size in DATA_SIZES],
    )
    plt.xlabel("Number of keys")
    plt.ylabel(ylabel)
    plt.title(f"{ylabel} per data size")
    plt.legend()
    plt.tight_layout()
    plt.savefig(RESULTS_DIR / f"benchmark_{metric}.png")
    plt.close("all")


def main() -> None:
    """Main function."""
    rng = random.Random(SEED)
    structures: dict[str, Callable[[list[str]], Any]] = {
        "Double-Array Trie": build_double_array_trie,
        "Set": build_set,
    }

    results: dict[str, dict[int, dict[str, float | int]]] = {
        name: {} for name in structures
    }
    for size in DATA_SIZES:
        keys = generate_keys(size, rng)
        # Half stored keys, half random strings
        queries = keys[: size // 2] + generate_keys(size // 2, rng)

        for name, build in structures.items():
            print(f"\n--- Benchmarking {name} with {size} keys ---")
            results[name][size] = measure(build, keys, queries)
            print(results[name][size])

    RESULTS_DIR.mkdir(parents=True, exist_ok=True)
    with open(RESULTS_DIR / "results.json", "w", encoding="utf-8") as f:
        json.dump(results, f, indent=4)

    plot_results(results, "build_time_ms", "Build Time (ms)")
    plot_results(results, "average_lookup_time_us", "Lookup Time (us)")
    plot_results(results, "peak_memory_bytes", "Peak Memory (bytes)")


if __name__ == "__main__":
    main()
