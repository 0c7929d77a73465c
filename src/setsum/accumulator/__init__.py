"""Setsum accumulator -- order-independent, invertible multiset checksum.

Public API:
    Setsum: the accumulator (insert/remove/merge/unmerge, digest)
    MalformedDigest: raised when a digest fails to parse
    Function API: identity, insert, remove, insert_all, merge, unmerge,
        equals, digest, from_digest
    Hasher: hash_element, element_digest
    Constants: LANE_COUNT, LANE_BITS, DIGEST_BYTES, HEX_DIGEST_LENGTH,
        SETSUM_SEED
"""

from setsum.accumulator.api import (
    digest,
    equals,
    from_digest,
    identity,
    insert,
    insert_all,
    merge,
    remove,
    unmerge,
)
from setsum.accumulator.errors import MalformedDigest
from setsum.accumulator.hasher import (
    DIGEST_BYTES,
    HEX_DIGEST_LENGTH,
    LANE_BITS,
    LANE_COUNT,
    SETSUM_SEED,
    element_digest,
    hash_element,
)
from setsum.accumulator.setsum import Setsum

__all__ = [
    "DIGEST_BYTES",
    "HEX_DIGEST_LENGTH",
    "LANE_BITS",
    "LANE_COUNT",
    "SETSUM_SEED",
    "MalformedDigest",
    "Setsum",
    "digest",
    "element_digest",
    "equals",
    "from_digest",
    "hash_element",
    "identity",
    "insert",
    "insert_all",
    "merge",
    "remove",
    "unmerge",
]
