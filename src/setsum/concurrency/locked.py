"""Coarse-lock wrapper: one threading.Lock around one Setsum.

The simplest correct way to share a single running checksum between
threads. Every operation takes the same lock, so writers serialize.
Hashing happens outside the lock; only the lane update is guarded.
"""
from __future__ import annotations

import threading
from typing import Iterable

from setsum.accumulator.hasher import hash_element
from setsum.accumulator.setsum import Setsum


class LockedSetsum:
    """A Setsum shared between threads behind a single lock."""

    def __init__(self, initial: Setsum | None = None) -> None:
        self._setsum = initial.copy() if initial is not None else Setsum()
        self._lock = threading.Lock()

    def insert(self, element: bytes) -> None:
        item = Setsum.from_lanes(hash_element(element))
        with self._lock:
            self._setsum.merge(item)

    def remove(self, element: bytes) -> None:
        item = Setsum.from_lanes(hash_element(element))
        with self._lock:
            self._setsum.unmerge(item)

    def insert_all(self, elements: Iterable[bytes]) -> None:
        batch = Setsum.of(elements)
        with self._lock:
            self._setsum.merge(batch)

    def merge(self, other: Setsum) -> None:
        with self._lock:
            self._setsum.merge(other)

    def unmerge(self, other: Setsum) -> None:
        with self._lock:
            self._setsum.unmerge(other)

    def snapshot(self) -> Setsum:
        """Independent copy of the current state."""
        with self._lock:
            return self._setsum.copy()

    def hexdigest(self) -> str:
        return self.snapshot().hexdigest()
