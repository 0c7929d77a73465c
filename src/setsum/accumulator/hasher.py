"""Element hashing: map an arbitrary byte string onto a lane vector.

Each element is hashed with SHA-256 over a fixed domain-separation
seed followed by the element bytes. The 32-byte digest is then sliced
into four little-endian 64-bit words, one per lane. SHA-256 output
words are independent of one another, so no lane is a simple function
of any other lane, and a one-byte change in the element flips roughly
half of every lane's bits.

The seed keeps these lane vectors disjoint from any other use of
SHA-256 over the same bytes. It must never change once digests have
been persisted: changing it silently invalidates every stored digest.

This is a checksum, not a commitment scheme. Anyone who can pick the
inserted elements can steer the sum toward a chosen digest, because
the fold is plain modular addition. Use it to catch accidental
divergence (bugs, storage corruption, replication drift).
"""

from __future__ import annotations

import hashlib
import struct
from typing import TypeAlias

# Four 64-bit lanes = 256-bit digest.
LANE_COUNT = 4
LANE_BITS = 64
LANE_MASK = (1 << LANE_BITS) - 1
DIGEST_BYTES = LANE_COUNT * LANE_BITS // 8
HEX_DIGEST_LENGTH = DIGEST_BYTES * 2

SETSUM_SEED = b"setsum.v1.element\x00"

LaneVector: TypeAlias = tuple[int, ...]

_LANE_STRUCT = struct.Struct(f"<{LANE_COUNT}Q")

# Hashing the seed once and cloning the state avoids re-hashing the
# prefix for every element.
_SEEDED = hashlib.sha256(SETSUM_SEED)


def element_digest(element: bytes) -> bytes:
    """Return SHA-256(SETSUM_SEED || element) as 32 raw bytes."""
    h = _SEEDED.copy()
    h.update(element)
    return h.digest()


def lanes_from_bytes(raw: bytes) -> LaneVector:
    """Slice a DIGEST_BYTES buffer into little-endian 64-bit lanes."""
    return _LANE_STRUCT.unpack(raw)


def lanes_to_bytes(lanes: LaneVector) -> bytes:
    """Serialize lanes back into the canonical DIGEST_BYTES layout."""
    return _LANE_STRUCT.pack(*lanes)


def hash_element(element: bytes) -> LaneVector:
    """Hash one element into a lane vector.

    Accepts bytes, bytearray or memoryview of any length, including
    empty. Passing a str raises TypeError from hashlib; encode first.
    """
    return _LANE_STRUCT.unpack(element_digest(element))
