"""Compaction bookkeeping with setsums.

A compaction reads a set of input files and writes a set of output
files, dropping whatever it garbage-collects along the way. If nothing
was lost or duplicated, then

    setsum(inputs) == setsum(outputs) + setsum(garbage)

holds exactly. The verifier computes both sides and, when they differ,
reports the discrepancy: inputs - outputs - garbage. If the compaction
dropped exactly one element, the discrepancy equals that element's
setsum, which explains() can confirm for a suspected element. If it
duplicated one, the discrepancy is the negation of it.

Per-file setsums can be added directly (add_input_setsum etc.), so the
verifier never needs to re-read files whose checksums are already
known.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from setsum.accumulator.setsum import Setsum


@dataclass(frozen=True, slots=True)
class CompactionResult:
    """Outcome of a compaction check."""

    is_balanced: bool
    expected_digest: str
    actual_digest: str
    discrepancy_digest: str
    error_message: str | None = None


def verify_compaction(
    inputs: Setsum,
    outputs: Setsum,
    garbage: Setsum | None = None,
) -> CompactionResult:
    """Check inputs == outputs + garbage and describe any mismatch."""
    actual = outputs + garbage if garbage is not None else outputs.copy()
    discrepancy = inputs - actual
    expected_hex = inputs.hexdigest()
    actual_hex = actual.hexdigest()

    if discrepancy.is_identity():
        return CompactionResult(
            is_balanced=True,
            expected_digest=expected_hex,
            actual_digest=actual_hex,
            discrepancy_digest=discrepancy.hexdigest(),
        )

    return CompactionResult(
        is_balanced=False,
        expected_digest=expected_hex,
        actual_digest=actual_hex,
        discrepancy_digest=discrepancy.hexdigest(),
        error_message=(
            f"Compaction does not balance: inputs {expected_hex[:16]}..., "
            f"outputs + garbage {actual_hex[:16]}..., "
            f"discrepancy {discrepancy.hexdigest()[:16]}..."
        ),
    )


def explains(result: CompactionResult, element: bytes) -> bool:
    """True if the discrepancy is exactly one lost or extra `element`.

    A lost element leaves +h(element) behind; an element written to the
    outputs twice leaves -h(element).
    """
    if result.is_balanced:
        return False
    discrepancy = Setsum.from_digest(result.discrepancy_digest)
    single = Setsum.of([element])
    return discrepancy == single or discrepancy == -single


class CompactionVerifier:
    """Collects the three sides of a compaction, then checks them.

    Elements and ready-made per-file setsums can be mixed freely; the
    algebra does not care how each side was accumulated.
    """

    def __init__(self) -> None:
        self._inputs = Setsum()
        self._outputs = Setsum()
        self._garbage = Setsum()

    def add_input(self, elements: Iterable[bytes]) -> None:
        self._inputs.insert_all(elements)

    def add_output(self, elements: Iterable[bytes]) -> None:
        self._outputs.insert_all(elements)

    def add_garbage(self, elements: Iterable[bytes]) -> None:
        self._garbage.insert_all(elements)

    def add_input_setsum(self, setsum: Setsum) -> None:
        self._inputs.merge(setsum)

    def add_output_setsum(self, setsum: Setsum) -> None:
        self._outputs.merge(setsum)

    def add_garbage_setsum(self, setsum: Setsum) -> None:
        self._garbage.merge(setsum)

    @property
    def inputs(self) -> Setsum:
        return self._inputs.copy()

    @property
    def outputs(self) -> Setsum:
        return self._outputs.copy()

    @property
    def garbage(self) -> Setsum:
        return self._garbage.copy()

    def verify(self) -> CompactionResult:
        return verify_compaction(self._inputs, self._outputs, self._garbage)
