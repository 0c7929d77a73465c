"""Throughput benchmarks for hashing and folding.

These measure real performance on the current hardware and print it.
Bounds are loose sanity checks, not targets.
"""
from __future__ import annotations

import time

import pytest

from setsum.accumulator.setsum import Setsum
from setsum.concurrency.parallel import chunked, fold_parallel
from setsum.profiling.load_generator import LoadGenerator


@pytest.mark.benchmark
class TestSetsumThroughput:
    """Insert throughput on a fixed-seed workload."""

    def test_insert_throughput_200k(self):
        elements = LoadGenerator(num_elements=200_000).generate()
        s = Setsum()

        start = time.perf_counter()
        s.insert_all(elements)
        elapsed = time.perf_counter() - start

        print(f"\n  insert: {len(elements):,} elements in {elapsed:.2f}s")
        print(f"  Throughput: {len(elements) / elapsed:,.0f} elements/sec")
        assert elapsed < 30.0, f"Too slow: {elapsed:.1f}s for 200K inserts"

    def test_parallel_fold_matches(self):
        elements = LoadGenerator(num_elements=200_000, seed=3).generate()

        start = time.perf_counter()
        parallel = fold_parallel(chunked(elements, 8), max_workers=8)
        elapsed = time.perf_counter() - start

        print(f"\n  parallel fold (8 workers): {elapsed:.2f}s")
        assert parallel == Setsum.of(elements)
