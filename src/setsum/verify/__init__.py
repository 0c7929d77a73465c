"""Compaction verification built on setsum algebra.

Public API:
    CompactionVerifier: accumulates inputs, outputs and garbage
    CompactionResult: verification outcome
    verify_compaction: one-shot check of inputs == outputs + garbage
    explains: does a discrepancy equal one lost/duplicated element?
"""

from setsum.verify.compaction import (
    CompactionResult,
    CompactionVerifier,
    explains,
    verify_compaction,
)

__all__ = [
    "CompactionResult",
    "CompactionVerifier",
    "explains",
    "verify_compaction",
]
