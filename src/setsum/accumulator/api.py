"""Function-style API over Setsum.

These mirror the algebra one-to-one for callers that prefer free
functions: identity, insert, remove, merge, unmerge, equals, digest,
from_digest. insert and remove mutate the accumulator in place and
also return it so calls can be chained. merge and unmerge leave both
arguments untouched and return a new Setsum.
"""

from __future__ import annotations

from typing import Iterable

from setsum.accumulator.setsum import Setsum


def identity() -> Setsum:
    return Setsum()


def insert(acc: Setsum, element: bytes) -> Setsum:
    acc.insert(element)
    return acc


def remove(acc: Setsum, element: bytes) -> Setsum:
    acc.remove(element)
    return acc


def insert_all(acc: Setsum, elements: Iterable[bytes]) -> Setsum:
    acc.insert_all(elements)
    return acc


def merge(a: Setsum, b: Setsum) -> Setsum:
    """Lanewise sum, as if every element of b had been inserted into a."""
    return a + b


def unmerge(a: Setsum, b: Setsum) -> Setsum:
    """Lanewise difference; undoes merge(a, b)."""
    return a - b


def equals(a: Setsum, b: Setsum) -> bool:
    return a == b


def digest(acc: Setsum) -> str:
    """Canonical lowercase hex digest."""
    return acc.hexdigest()


def from_digest(s: str) -> Setsum:
    """Parse a canonical hex digest. Raises MalformedDigest."""
    return Setsum.from_digest(s)
