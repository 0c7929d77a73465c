"""The setsum accumulator: an order-independent, invertible checksum.

A Setsum is a vector of LANE_COUNT unsigned 64-bit lanes. Inserting an
element adds the element's lane vector (see hasher.py) to the state,
lane by lane, modulo 2^64. Removing an element subtracts it. Because
modular addition is commutative and associative, the final state only
depends on which elements went in and out, never on the order.

Every lane vector has an additive inverse, so remove() undoes insert()
exactly, and two setsums can be combined (merge, +) or one subtracted
from another (unmerge, -) without replaying either element stream.
That is what makes per-shard checksums and compaction bookkeeping
work: sum(inputs) == sum(outputs) + sum(garbage) after a correct
compaction, and any mismatch points at lost or duplicated data.

Multiset, not set. Inserting the same bytes twice adds them twice.
Removing an element that was never inserted is not detected: the
result is a valid-looking state that matches nothing real until a
matching insert arrives. Keeping inserts and removes paired is the
caller's job.

Lanes wrap on overflow. That is the group operation, not an error.
"""

from __future__ import annotations

import array
import re
from typing import Iterable

from setsum.accumulator.errors import MalformedDigest
from setsum.accumulator.hasher import (
    DIGEST_BYTES,
    HEX_DIGEST_LENGTH,
    LANE_COUNT,
    LANE_MASK,
    LaneVector,
    hash_element,
    lanes_from_bytes,
    lanes_to_bytes,
)

_HEX_CHARS = re.compile(r"[0-9a-f]*")


class Setsum:
    """Running multiset checksum over byte-string elements.

    A fresh Setsum is the group identity (all lanes zero). Instances
    are independent values: copy() them freely, compare them with ==.
    They are mutable, so they are not hashable.

    Not thread-safe. Guard a shared instance with a lock, or give each
    worker its own Setsum and merge them at the end
    (see setsum.concurrency).
    """

    __slots__ = ("_lanes",)

    def __init__(self) -> None:
        self._lanes = array.array("Q", [0] * LANE_COUNT)

    # -- construction -------------------------------------------------

    @classmethod
    def identity(cls) -> Setsum:
        return cls()

    @classmethod
    def of(cls, elements: Iterable[bytes]) -> Setsum:
        """Build a setsum with every element of `elements` inserted."""
        s = cls()
        s.insert_all(elements)
        return s

    @classmethod
    def from_lanes(cls, lanes: Iterable[int]) -> Setsum:
        """Build a setsum from raw lane values.

        Raises ValueError unless there are exactly LANE_COUNT lanes and
        each fits in 64 unsigned bits.
        """
        values = list(lanes)
        if len(values) != LANE_COUNT:
            raise ValueError(
                f"Expected {LANE_COUNT} lanes, got {len(values)}"
            )
        for i, v in enumerate(values):
            if not isinstance(v, int):
                raise ValueError(f"Lane {i} is not an integer: {v!r}")
            if not (0 <= v <= LANE_MASK):
                raise ValueError(f"Lane {i} out of range for 64 bits: {v}")
        s = cls()
        s._lanes = array.array("Q", values)
        return s

    @classmethod
    def from_bytes(cls, raw: bytes) -> Setsum:
        """Parse the 32-byte binary digest produced by digest()."""
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise MalformedDigest(raw, "expected a bytes-like object")
        if len(raw) != DIGEST_BYTES:
            raise MalformedDigest(
                raw, f"expected {DIGEST_BYTES} bytes, got {len(raw)}"
            )
        s = cls()
        s._lanes = array.array("Q", lanes_from_bytes(bytes(raw)))
        return s

    @classmethod
    def from_digest(cls, digest: str) -> Setsum:
        """Parse the canonical hex digest produced by hexdigest().

        Only exactly HEX_DIGEST_LENGTH lowercase hex characters are
        accepted. Uppercase, whitespace and prefixes are rejected
        rather than normalized, so a digest has one spelling.
        """
        if not isinstance(digest, str):
            raise MalformedDigest(digest, "expected a hex string")
        if len(digest) != HEX_DIGEST_LENGTH:
            raise MalformedDigest(
                digest,
                f"expected {HEX_DIGEST_LENGTH} characters, got {len(digest)}",
            )
        if _HEX_CHARS.fullmatch(digest) is None:
            raise MalformedDigest(
                digest, "only lowercase hexadecimal characters are allowed"
            )
        return cls.from_bytes(bytes.fromhex(digest))

    # -- element operations -------------------------------------------

    def insert(self, element: bytes) -> None:
        """Add one occurrence of `element`."""
        self._add(hash_element(element))

    def remove(self, element: bytes) -> None:
        """Remove one occurrence of `element`.

        The caller must only remove what was inserted. Removing an
        unseen element leaves a placeholder that a later insert of the
        same bytes cancels out.
        """
        self._sub(hash_element(element))

    def insert_all(self, elements: Iterable[bytes]) -> None:
        for element in elements:
            self._add(hash_element(element))

    def remove_all(self, elements: Iterable[bytes]) -> None:
        for element in elements:
            self._sub(hash_element(element))

    def replace(self, old: bytes, new: bytes) -> None:
        """Swap a pre-image for a post-image (an in-place update)."""
        self._sub(hash_element(old))
        self._add(hash_element(new))

    # -- setsum operations --------------------------------------------

    def merge(self, other: Setsum) -> None:
        """Fold another setsum into this one (union of multisets)."""
        self._add(other._lanes)

    def unmerge(self, other: Setsum) -> None:
        """Subtract another setsum out of this one."""
        self._sub(other._lanes)

    def copy(self) -> Setsum:
        s = type(self)()
        s._lanes = array.array("Q", self._lanes)
        return s

    __copy__ = copy

    def is_identity(self) -> bool:
        """True when the state equals an empty setsum."""
        return not any(self._lanes)

    @property
    def lanes(self) -> LaneVector:
        return tuple(self._lanes)

    def digest(self) -> bytes:
        """Canonical 32-byte form: each lane little-endian, lane 0 first."""
        return lanes_to_bytes(tuple(self._lanes))

    def hexdigest(self) -> str:
        """Canonical 64-character lowercase hex form of digest()."""
        return self.digest().hex()

    # -- operators ----------------------------------------------------

    def __add__(self, other: Setsum) -> Setsum:
        if not isinstance(other, Setsum):
            return NotImplemented
        result = self.copy()
        result._add(other._lanes)
        return result

    def __sub__(self, other: Setsum) -> Setsum:
        if not isinstance(other, Setsum):
            return NotImplemented
        result = self.copy()
        result._sub(other._lanes)
        return result

    def __iadd__(self, other: Setsum) -> Setsum:
        if not isinstance(other, Setsum):
            return NotImplemented
        self._add(other._lanes)
        return self

    def __isub__(self, other: Setsum) -> Setsum:
        if not isinstance(other, Setsum):
            return NotImplemented
        self._sub(other._lanes)
        return self

    def __neg__(self) -> Setsum:
        return type(self)() - self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Setsum):
            return NotImplemented
        return self._lanes == other._lanes

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"Setsum({self.hexdigest()!r})"

    # -- lane arithmetic ----------------------------------------------

    def _add(self, lanes) -> None:
        state = self._lanes
        for i in range(LANE_COUNT):
            state[i] = (state[i] + lanes[i]) & LANE_MASK

    def _sub(self, lanes) -> None:
        state = self._lanes
        for i in range(LANE_COUNT):
            state[i] = (state[i] - lanes[i]) & LANE_MASK
