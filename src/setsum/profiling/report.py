"""Report formatting for benchmark results."""
from __future__ import annotations

from setsum.profiling.harness import BenchmarkResult


def _pct(part: float, total: float) -> str:
    if total <= 0:
        return "n/a"
    return f"{part / total * 100:.1f}%"


def format_report(result: BenchmarkResult, label: str = "Setsum") -> str:
    """Format a BenchmarkResult as a readable report string."""
    total = result.total_time_ms
    lines = [
        f"=== {label} ===",
        f"Elements:          {result.num_elements:,} (~{result.element_size} bytes)",
        f"Workers:           {result.workers}",
        f"Total time:        {total:.1f} ms",
        f"Throughput:        {result.elements_per_sec:,.0f} inserts/sec",
        "",
        "Breakdown:",
        f"  Hashing:         {result.hash_time_ms:.1f} ms "
        f"({_pct(result.hash_time_ms, total)})",
        f"  Sequential fold: {result.insert_time_ms:.1f} ms "
        f"({_pct(result.insert_time_ms, total)})",
        f"  Parallel fold:   {result.parallel_time_ms:.1f} ms "
        f"({_pct(result.parallel_time_ms, total)})",
        f"  Digest parse:    {result.roundtrip_time_ms:.3f} ms",
        "",
        f"Digest:            {result.digest}",
        f"Consistent:        {'yes' if result.consistent else 'NO'}",
    ]
    return "\n".join(lines)
