"""Checksumming a replicated transaction stream.

Each transaction carries the row image before and after the change:
an insert has only a post-image, a delete only a pre-image, an update
both. Applying a transaction removes the pre-image and inserts the
post-image, so after any prefix of the stream the setsum equals the
setsum of the table contents at that point. Two replicas that applied
the same transactions (in any order) agree on the digest; replication
drift shows up as a mismatch.

A replica can checkpoint by saving checkpoint()'s digest string and
later resume() from it, provided it then applies every subsequent
transaction exactly once. Where the digest is stored is up to the
caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from setsum.accumulator.setsum import Setsum

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Transaction:
    """One row change, as pre-image and post-image bytes."""

    pre_image: bytes | None = None
    post_image: bytes | None = None

    def __post_init__(self) -> None:
        if self.pre_image is None and self.post_image is None:
            raise ValueError("Transaction needs a pre-image or a post-image")

    @classmethod
    def insert(cls, row: bytes) -> Transaction:
        return cls(post_image=row)

    @classmethod
    def delete(cls, row: bytes) -> Transaction:
        return cls(pre_image=row)

    @classmethod
    def update(cls, before: bytes, after: bytes) -> Transaction:
        return cls(pre_image=before, post_image=after)


class ReplicaChecksum:
    """Running setsum of one replica's applied transactions."""

    def __init__(self, initial: Setsum | None = None) -> None:
        self._setsum = initial.copy() if initial is not None else Setsum()
        self._applied = 0

    @classmethod
    def resume(cls, digest: str) -> ReplicaChecksum:
        """Restart from a saved checkpoint digest.

        Raises MalformedDigest if the digest is not canonical.
        """
        replica = cls(Setsum.from_digest(digest))
        log.debug("resumed replica checksum at %s", digest[:16])
        return replica

    @property
    def applied(self) -> int:
        """Transactions applied since construction or resume."""
        return self._applied

    @property
    def setsum(self) -> Setsum:
        return self._setsum.copy()

    def apply(self, txn: Transaction) -> None:
        if txn.pre_image is not None:
            self._setsum.remove(txn.pre_image)
        if txn.post_image is not None:
            self._setsum.insert(txn.post_image)
        self._applied += 1

    def apply_all(self, txns: Iterable[Transaction]) -> None:
        for txn in txns:
            self.apply(txn)

    def checkpoint(self) -> str:
        digest = self._setsum.hexdigest()
        log.debug(
            "checkpoint after %d transactions: %s", self._applied, digest[:16]
        )
        return digest

    def matches(self, other: ReplicaChecksum | Setsum | str) -> bool:
        """Compare against another replica, a Setsum, or a digest string."""
        if isinstance(other, ReplicaChecksum):
            return self._setsum == other._setsum
        if isinstance(other, Setsum):
            return self._setsum == other
        return self._setsum == Setsum.from_digest(other)
