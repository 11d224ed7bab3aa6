"""ElGamal encryption of short byte strings embedded into group elements.

Only the first `group.embed_len()` bytes of a message are encrypted. The
rest comes back untouched as `remainder`; splitting longer payloads across
several calls is left to the caller.
"""

from __future__ import annotations

import logging
import secrets
from typing import Any, NamedTuple, Optional, Tuple

from .errors import DecodeError
from .interfaces import Group, RandomSource

logger = logging.getLogger("groupcrypt.elgamal")


class Ciphertext(NamedTuple):
    K: Any  # ephemeral DH public key
    C: Any  # message point blinded with the shared secret
    remainder: bytes  # NOT encrypted

    def to_bytes(self, group: Group[Any]) -> bytes:
        return group.encode_point(self.K) + group.encode_point(self.C) + self.remainder

    @classmethod
    def from_bytes(cls, group: Group[Any], data: bytes) -> "Ciphertext":
        n = group.point_len
        if len(data) < 2 * n:
            raise DecodeError(f"ciphertext: need at least {2 * n} bytes, got {len(data)}")
        return cls(
            K=group.decode_point(data[:n]),
            C=group.decode_point(data[n:2 * n]),
            remainder=bytes(data[2 * n:]),
        )


def elgamal_encrypt(
    group: Group[Any],
    public_key: Any,
    message: bytes,
    rand: Optional[RandomSource] = None,
) -> Ciphertext:
    if rand is None:
        rand = secrets.token_bytes

    # Embed as much of the message as fits into a single point.
    cap = min(group.embed_len(), len(message))
    M = group.embed(message[:cap], rand)
    remainder = bytes(message[cap:])

    k = group.pick_scalar(rand)  # ephemeral private key
    K = group.mul(k)  # ephemeral DH public key
    S = group.mul(k, public_key)  # DH shared secret
    C = group.add(S, M)
    return Ciphertext(K=K, C=C, remainder=remainder)


def elgamal_decrypt(
    group: Group[Any],
    private_key: int,
    K: Any,
    C: Any,
) -> Tuple[Optional[bytes], Optional[DecodeError]]:
    """Recover the embedded bytes from (K, C).

    A wrong key usually surfaces as a DecodeError, but it can also yield a
    point that happens to look like valid embedded data; the returned bytes
    are then simply wrong. That is inherent to the embedding.
    """
    S = group.mul(private_key, K)  # regenerate shared secret
    M = group.sub(C, S)
    try:
        return group.data(M), None
    except DecodeError as err:
        logger.debug("extraction failed on %s: %s", group.name, err)
        return None, err
