from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING, Any

from .errors import DecodeError, RandomnessFailure
from .interfaces import RandomSource

if TYPE_CHECKING:
    from .interfaces import Group


class ShakeXof:
    """Keyed SHAKE-256 stream: seed || writes..., then an unbounded squeeze."""

    def __init__(self, seed: bytes = b"") -> None:
        self._h = hashlib.shake_256(seed)
        self._offset = 0
        self._reading = False

    def write(self, data: bytes) -> None:
        if self._reading:
            raise RuntimeError("xof: write after read")
        self._h.update(data)

    def read(self, n: int) -> bytes:
        self._reading = True
        end = self._offset + n
        out = self._h.digest(end)[self._offset:end]
        self._offset = end
        return out


def read_random(rand: RandomSource, n: int) -> bytes:
    """Draw exactly n bytes from rand, or raise RandomnessFailure."""
    try:
        buf = rand(n)
    except OSError as e:
        raise RandomnessFailure(f"randomness source failed: {e}") from e
    if len(buf) != n:
        raise RandomnessFailure(f"randomness source returned {len(buf)} of {n} bytes")
    return bytes(buf)


def pick_scalar_mod(order: int, rand: RandomSource) -> int:
    """Uniform integer in [0, order) by masked rejection sampling."""
    bits = order.bit_length()
    nbytes = (bits + 7) // 8
    mask = (1 << bits) - 1
    while True:
        k = int.from_bytes(read_random(rand, nbytes), "big") & mask
        if k < order:
            return k


def scalar_to_bytes(k: int, order: int, length: int) -> bytes:
    return (k % order).to_bytes(length, "big")


def scalar_from_bytes(buf: bytes, order: int, length: int) -> int:
    if len(buf) != length:
        raise DecodeError(f"scalar: expected {length} bytes, got {len(buf)}")
    k = int.from_bytes(buf, "big")
    if k >= order:
        raise DecodeError("scalar: value not reduced modulo group order")
    return k


def hash_to_scalar(group: "Group[Any]", message: bytes, point: Any) -> int:
    """Derive a scalar from a point and a message.

    The canonical encoding of `point` keys the group's XOF, `message` is
    absorbed after it, and the scalar is picked from the output stream.
    """
    xof = group.xof(group.encode_point(point))
    xof.write(message)
    return group.pick_scalar(xof.read)
