"""Error taxonomy for groupcrypt."""

from __future__ import annotations


class GroupCryptError(Exception):
    """Base class for all groupcrypt errors."""


class DecodeError(GroupCryptError, ValueError):
    """Malformed or truncated bytes for a point, scalar, signature or point list."""


class VerificationFailure(GroupCryptError):
    """A structurally valid signature whose challenge does not match."""

    def __init__(self, message: str = "invalid signature") -> None:
        super().__init__(message)


class RandomnessFailure(GroupCryptError):
    """The randomness source could not supply the requested bytes.

    This is never handled inside the library: a broken entropy source
    invalidates every guarantee, so callers should let it abort.
    """


class EmbeddingUnsupported(GroupCryptError):
    """The group cannot embed data into its elements."""
