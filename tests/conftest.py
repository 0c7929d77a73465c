"""Shared fixtures for setsum tests."""
from __future__ import annotations

import random

import pytest


SEED = 42


def _rows(n: int, seed: int = SEED) -> list[bytes]:
    rng = random.Random(seed)
    return [b"row-%d:" % i + rng.randbytes(rng.randint(0, 48)) for i in range(n)]


@pytest.fixture
def rows() -> list[bytes]:
    """200 distinct, deterministic row-like elements."""
    return _rows(200)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(SEED)
