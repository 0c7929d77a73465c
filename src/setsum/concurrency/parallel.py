"""Fold element chunks on a thread pool, then merge the partials.

Each worker owns a private Setsum for its chunk, so the hot loop takes
no locks at all. The partials are merged once every worker is done.
Merge order does not matter.

Under CPython the GIL serializes the Python-level lane arithmetic, but
hashlib releases it while hashing large elements, so big elements
still see some parallel speedup.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Sequence

from setsum.accumulator.setsum import Setsum

log = logging.getLogger(__name__)


def fold_chunk(elements: Iterable[bytes]) -> Setsum:
    """Fold one chunk into a fresh partial setsum."""
    return Setsum.of(elements)


def chunked(elements: Sequence[bytes], num_chunks: int) -> list[Sequence[bytes]]:
    """Split a sequence into at most num_chunks contiguous slices."""
    if num_chunks < 1:
        raise ValueError(f"num_chunks must be positive, got {num_chunks}")
    if not elements:
        return []
    size = -(-len(elements) // num_chunks)  # ceil
    return [elements[i:i + size] for i in range(0, len(elements), size)]


def fold_parallel(
    chunks: Iterable[Iterable[bytes]],
    max_workers: int = 4,
) -> Setsum:
    """Fold every chunk on its own worker and merge the results."""
    total = Setsum()
    with ThreadPoolExecutor(
        max_workers=max_workers, thread_name_prefix="setsum-fold"
    ) as pool:
        partials = list(pool.map(fold_chunk, chunks))
    for partial in partials:
        total.merge(partial)
    log.debug("merged %d partial setsums", len(partials))
    return total
