"""Synthetic element workloads for profiling.

Elements look like serialized rows: a key prefix followed by random
payload bytes. Sizes vary around element_size (half to one and a half
times) so hashing cost is not perfectly uniform. The same seed always
yields the same elements, which keeps benchmark digests comparable
across runs.
"""
from __future__ import annotations

import random


class LoadGenerator:
    """Generate deterministic element workloads."""

    __slots__ = ("_rng", "_num_elements", "_element_size")

    def __init__(
        self,
        num_elements: int = 100_000,
        element_size: int = 64,
        seed: int = 42,
    ) -> None:
        if num_elements < 0:
            raise ValueError(f"num_elements must be >= 0, got {num_elements}")
        if element_size < 1:
            raise ValueError(f"element_size must be positive, got {element_size}")
        self._rng = random.Random(seed)
        self._num_elements = num_elements
        self._element_size = element_size

    @property
    def num_elements(self) -> int:
        return self._num_elements

    def generate(self) -> list[bytes]:
        low = max(1, self._element_size // 2)
        high = self._element_size + self._element_size // 2
        elements = []
        for i in range(self._num_elements):
            payload = self._rng.randbytes(self._rng.randint(low, high))
            elements.append(b"row:%d:" % i + payload)
        return elements
