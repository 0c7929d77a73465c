"""Striped setsum: per-stripe partial checksums, merged on read.

Instead of one lock around one Setsum, keep N (lock, Setsum) stripes.
Each thread is given a stripe round-robin on first use, so threads
only contend when two of them share a stripe. Reading merges all
stripes; because addition is commutative and associative, the merged
value is exactly what a single Setsum would hold after the same
inserts and removes, whichever stripe each one landed on.

snapshot() takes every stripe lock (in index order, so two snapshots
cannot deadlock) and therefore sees a point-in-time state.
"""
from __future__ import annotations

import itertools
import logging
import threading

from setsum.accumulator.hasher import hash_element
from setsum.accumulator.setsum import Setsum

log = logging.getLogger(__name__)


class StripedSetsum:
    """Thread-safe setsum with striped locks.

    Args:
        num_stripes: Number of stripes (default 16, must be a power of 2).
    """

    def __init__(self, num_stripes: int = 16) -> None:
        if num_stripes <= 0 or (num_stripes & (num_stripes - 1)) != 0:
            raise ValueError("num_stripes must be a positive power of 2")
        self._num_stripes = num_stripes
        self._stripes: list[Setsum] = [Setsum() for _ in range(num_stripes)]
        self._locks: list[threading.Lock] = [
            threading.Lock() for _ in range(num_stripes)
        ]
        self._mask = num_stripes - 1
        self._assign = itertools.count()
        self._local = threading.local()

    @property
    def num_stripes(self) -> int:
        return self._num_stripes

    def insert(self, element: bytes) -> None:
        item = Setsum.from_lanes(hash_element(element))
        idx = self._stripe_index()
        with self._locks[idx]:
            self._stripes[idx].merge(item)

    def remove(self, element: bytes) -> None:
        item = Setsum.from_lanes(hash_element(element))
        idx = self._stripe_index()
        with self._locks[idx]:
            self._stripes[idx].unmerge(item)

    def merge(self, other: Setsum) -> None:
        idx = self._stripe_index()
        with self._locks[idx]:
            self._stripes[idx].merge(other)

    def unmerge(self, other: Setsum) -> None:
        idx = self._stripe_index()
        with self._locks[idx]:
            self._stripes[idx].unmerge(other)

    def snapshot(self) -> Setsum:
        """Merge every stripe into one Setsum under all stripe locks."""
        for lock in self._locks:
            lock.acquire()
        try:
            total = Setsum()
            for stripe in self._stripes:
                total.merge(stripe)
        finally:
            for lock in reversed(self._locks):
                lock.release()
        log.debug("snapshot merged %d stripes", self._num_stripes)
        return total

    def hexdigest(self) -> str:
        return self.snapshot().hexdigest()

    def _stripe_index(self) -> int:
        idx = getattr(self._local, "idx", None)
        if idx is None:
            idx = next(self._assign) & self._mask
            self._local.idx = idx
        return idx
