"""Errors raised at the digest parse boundary."""

from __future__ import annotations


class MalformedDigest(ValueError):
    """A digest string or buffer is not in canonical form.

    Raised when the length or alphabet does not match exactly. Nothing
    is partially parsed: the caller gets either a complete Setsum or
    this exception.
    """

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed setsum digest {value!r}: {reason}")
