"""Profiling harness and load generation for setsum."""

from setsum.profiling.harness import BenchmarkResult, run_benchmark
from setsum.profiling.load_generator import LoadGenerator
from setsum.profiling.report import format_report

__all__ = [
    "BenchmarkResult",
    "LoadGenerator",
    "format_report",
    "run_benchmark",
]
