"""Non-interactive Schnorr signatures over an abstract prime-order group.

With generator G, private key x and public key P = x*G:

  Sign:    v <-$ Z_q; T := v*G; c := H(T, m); r := v - c*x
  Verify:  T' := r*G + c*P; accept iff H(T', m) == c

For an honest signature T' = (v - c*x)*G + c*x*G = T, so the challenge
recomputes exactly. There is a single public key, so no anonymity set.
"""

from __future__ import annotations

import hmac
import logging
import secrets
from dataclasses import dataclass
from typing import Any, Optional

from .errors import DecodeError, GroupCryptError, VerificationFailure
from .interfaces import Group, RandomSource
from .ro import hash_to_scalar

logger = logging.getLogger("groupcrypt.schnorr")


@dataclass(frozen=True)
class Signature:
    c: int  # challenge
    r: int  # response

    def to_bytes(self, group: Group[Any]) -> bytes:
        return group.encode_scalar(self.c) + group.encode_scalar(self.r)

    @classmethod
    def from_bytes(cls, group: Group[Any], data: bytes) -> "Signature":
        n = group.scalar_len
        if len(data) != 2 * n:
            raise DecodeError(f"signature: expected {2 * n} bytes, got {len(data)}")
        return cls(c=group.decode_scalar(data[:n]), r=group.decode_scalar(data[n:]))


def schnorr_sign(
    group: Group[Any],
    message: bytes,
    private_key: int,
    rand: Optional[RandomSource] = None,
) -> bytes:
    """Sign `message`; every call draws a fresh ephemeral scalar from `rand`."""
    if rand is None:
        rand = secrets.token_bytes

    v = group.pick_scalar(rand)
    T = group.mul(v)
    c = hash_to_scalar(group, message, T)
    r = group.scalar_sub(v, group.scalar_mul(private_key, c))

    return Signature(c=c, r=r).to_bytes(group)


def schnorr_verify(
    group: Group[Any],
    message: bytes,
    public_key: Any,
    signature: bytes,
) -> Optional[GroupCryptError]:
    """Check `signature` on `message` under `public_key`.

    Returns None on success, otherwise the DecodeError or
    VerificationFailure describing the rejection.
    """
    try:
        sig = Signature.from_bytes(group, signature)
    except DecodeError as err:
        logger.debug("rejecting malformed signature: %s", err)
        return err

    T = group.add(group.mul(sig.r), group.mul(sig.c, public_key))
    c = hash_to_scalar(group, message, T)

    if not hmac.compare_digest(group.encode_scalar(c), group.encode_scalar(sig.c)):
        logger.debug("challenge mismatch on %s", group.name)
        return VerificationFailure()
    return None
