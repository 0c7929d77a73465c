"""Thread-safe ways to maintain one logical setsum.

  - LockedSetsum: one coarse lock around a single Setsum
  - StripedSetsum: per-thread stripes merged on read
  - fold_parallel: lock-free per-worker partials merged at the end
"""
from setsum.concurrency.locked import LockedSetsum
from setsum.concurrency.parallel import chunked, fold_chunk, fold_parallel
from setsum.concurrency.striped import StripedSetsum

__all__ = [
    "LockedSetsum",
    "StripedSetsum",
    "chunked",
    "fold_chunk",
    "fold_parallel",
]
