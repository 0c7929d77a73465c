"""Profiling harness for setsum throughput.

Times the stages a replication or compaction pipeline leans on:
hashing elements, folding them into one Setsum sequentially, folding
them on a thread pool and merging partials, and a digest round-trip.
It also checks that the sequential and parallel digests agree, which
they must for any workload.
"""
from __future__ import annotations

import cProfile
import io
import pstats
import time
from dataclasses import dataclass

from setsum.accumulator.hasher import hash_element
from setsum.accumulator.setsum import Setsum
from setsum.concurrency.parallel import chunked, fold_parallel
from setsum.profiling.load_generator import LoadGenerator


@dataclass(slots=True)
class BenchmarkResult:
    """Timing results from a single benchmark run."""
    num_elements: int
    element_size: int
    workers: int
    hash_time_ms: float
    insert_time_ms: float
    parallel_time_ms: float
    roundtrip_time_ms: float
    total_time_ms: float
    elements_per_sec: float
    digest: str
    consistent: bool
    cprofile_stats: str | None = None


def run_benchmark(
    num_elements: int = 100_000,
    element_size: int = 64,
    workers: int = 4,
    seed: int = 42,
    profile: bool = False,
) -> BenchmarkResult:
    """Run every stage over one generated workload and time it.

    If profile=True, the stages run under cProfile and the top
    functions by cumulative time are included in the result.
    """
    elements = LoadGenerator(
        num_elements=num_elements, element_size=element_size, seed=seed
    ).generate()

    hash_ms = insert_ms = parallel_ms = roundtrip_ms = 0.0
    sequential = Setsum()
    parallel = Setsum()

    def _run():
        nonlocal hash_ms, insert_ms, parallel_ms, roundtrip_ms, sequential, parallel

        # 1. raw hashing
        t0 = time.perf_counter()
        for element in elements:
            hash_element(element)
        hash_ms = (time.perf_counter() - t0) * 1000

        # 2. sequential fold
        t0 = time.perf_counter()
        sequential = Setsum.of(elements)
        insert_ms = (time.perf_counter() - t0) * 1000

        # 3. per-worker partials, merged
        t0 = time.perf_counter()
        parallel = fold_parallel(chunked(elements, workers), max_workers=workers)
        parallel_ms = (time.perf_counter() - t0) * 1000

        # 4. digest round-trip
        t0 = time.perf_counter()
        Setsum.from_digest(sequential.hexdigest())
        roundtrip_ms = (time.perf_counter() - t0) * 1000

    stats_text = None
    start = time.perf_counter()
    if profile:
        profiler = cProfile.Profile()
        profiler.enable()
        _run()
        profiler.disable()
        buf = io.StringIO()
        pstats.Stats(profiler, stream=buf).sort_stats("cumulative").print_stats(20)
        stats_text = buf.getvalue()
    else:
        _run()
    total_ms = (time.perf_counter() - start) * 1000

    return BenchmarkResult(
        num_elements=num_elements,
        element_size=element_size,
        workers=workers,
        hash_time_ms=hash_ms,
        insert_time_ms=insert_ms,
        parallel_time_ms=parallel_ms,
        roundtrip_time_ms=roundtrip_ms,
        total_time_ms=total_ms,
        elements_per_sec=(
            num_elements / (insert_ms / 1000) if insert_ms > 0 else 0.0
        ),
        digest=sequential.hexdigest(),
        consistent=sequential == parallel,
        cprofile_stats=stats_text,
    )
