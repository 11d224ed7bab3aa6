# src/instantiations/weierstrass/inst.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from groupcrypt.errors import DecodeError
from groupcrypt.interfaces import RandomSource
from groupcrypt.ro import (
    ShakeXof,
    pick_scalar_mod,
    read_random,
    scalar_from_bytes,
    scalar_to_bytes,
)

# Pure-Python curve arithmetic via `ecdsa`
try:
    from ecdsa.curves import NIST256p, SECP256k1, Curve
    from ecdsa.ellipticcurve import INFINITY, Point, PointJacobi
    from ecdsa.numbertheory import square_root_mod_prime
except Exception as e:  # pragma: no cover
    raise ImportError(
        "Weierstrass groups require the 'ecdsa' package. Install via: pip install ecdsa"
    ) from e

logger = logging.getLogger("groupcrypt.weierstrass")

ECPoint = Union[PointJacobi, Point]


# ----------------------------
# Prime-order short-Weierstrass curve y^2 = x^3 + ax + b over F_p.
# Cofactor must be 1: every curve point is a group element, which the
# x-coordinate embedding relies on.
# ----------------------------

@dataclass(frozen=True)
class WeierstrassGroup:
    name: str
    spec: Curve = field(repr=False)

    @property
    def curve(self):
        return self.spec.curve

    @property
    def order(self) -> int:
        return self.spec.order

    @property
    def p(self) -> int:
        return self.curve.p()

    @property
    def coord_len(self) -> int:
        return (self.p.bit_length() + 7) // 8

    @property
    def point_len(self) -> int:
        # SEC1 compressed: prefix byte + x
        return 1 + self.coord_len

    @property
    def scalar_len(self) -> int:
        return (self.order.bit_length() + 7) // 8

    # ---- points ----

    def generator(self) -> ECPoint:
        return self.spec.generator

    def identity(self) -> ECPoint:
        return INFINITY

    @staticmethod
    def _is_identity(P: ECPoint) -> bool:
        return P == INFINITY

    def _canon(self, P: ECPoint) -> ECPoint:
        return INFINITY if self._is_identity(P) else P

    def point_eq(self, A: ECPoint, B: ECPoint) -> bool:
        a_inf, b_inf = self._is_identity(A), self._is_identity(B)
        if a_inf or b_inf:
            return a_inf and b_inf
        return A.x() == B.x() and A.y() == B.y()

    def add(self, A: ECPoint, B: ECPoint) -> ECPoint:
        if self._is_identity(A):
            return self._canon(B)
        if self._is_identity(B):
            return self._canon(A)
        return self._canon(A + B)

    def neg(self, A: ECPoint) -> ECPoint:
        if self._is_identity(A):
            return INFINITY
        return PointJacobi(self.curve, A.x(), (-A.y()) % self.p, 1, self.order)

    def sub(self, A: ECPoint, B: ECPoint) -> ECPoint:
        return self.add(A, self.neg(B))

    def mul(self, k: int, A: Optional[ECPoint] = None) -> ECPoint:
        if A is None:
            A = self.spec.generator
        k = int(k) % self.order
        if k == 0 or self._is_identity(A):
            return INFINITY
        return self._canon(k * A)

    # ---- scalars (Z_q) ----

    def scalar_add(self, a: int, b: int) -> int:
        return (a + b) % self.order

    def scalar_sub(self, a: int, b: int) -> int:
        return (a - b) % self.order

    def scalar_mul(self, a: int, b: int) -> int:
        return (a * b) % self.order

    def pick_scalar(self, rand: RandomSource) -> int:
        return pick_scalar_mod(self.order, rand)

    # ---- encodings ----

    def encode_point(self, P: ECPoint) -> bytes:
        """SEC1 compressed; the identity is all zero bytes."""
        if self._is_identity(P):
            return bytes(self.point_len)
        x, y = P.x(), P.y()
        prefix = 0x03 if (y & 1) else 0x02
        return bytes([prefix]) + x.to_bytes(self.coord_len, "big")

    def decode_point(self, buf: bytes) -> ECPoint:
        if len(buf) != self.point_len:
            raise DecodeError(f"{self.name} point: expected {self.point_len} bytes, got {len(buf)}")
        if buf == bytes(self.point_len):
            return INFINITY
        prefix = buf[0]
        if prefix not in (0x02, 0x03):
            raise DecodeError(f"{self.name} point: invalid prefix byte 0x{prefix:02x}")
        x = int.from_bytes(buf[1:], "big")
        y = self._lift_x(x)
        if y is None:
            raise DecodeError(f"{self.name} point: x is not on the curve")
        if (y & 1) != (prefix & 1):
            y = (-y) % self.p
        return PointJacobi(self.curve, x, y, 1, self.order)

    def encode_scalar(self, k: int) -> bytes:
        return scalar_to_bytes(k, self.order, self.scalar_len)

    def decode_scalar(self, buf: bytes) -> int:
        return scalar_from_bytes(buf, self.order, self.scalar_len)

    def _lift_x(self, x: int) -> Optional[int]:
        """Some y with (x, y) on the curve, or None."""
        p = self.p
        if x >= p:
            return None
        rhs = (pow(x, 3, p) + self.curve.a() * x + self.curve.b()) % p
        if rhs == 0:
            return 0
        if pow(rhs, (p - 1) // 2, p) != 1:
            return None
        y = square_root_mod_prime(rhs, p)
        if (y * y) % p != rhs:
            return None
        return y

    # ---- data embedding in the x-coordinate ----
    # x = [len][data][random padding], retried until x lies on the curve.

    def embed_len(self) -> int:
        # Reserve the length byte and one byte of randomness.
        return (self.p.bit_length() - 8 - 8) // 8

    def embed(self, data: bytes, rand: RandomSource) -> ECPoint:
        dl = min(len(data), self.embed_len())
        attempts = 0
        while True:
            attempts += 1
            b = bytearray(read_random(rand, self.coord_len))
            b[0] = dl
            b[1:1 + dl] = data[:dl]
            x = int.from_bytes(b, "big")
            y = self._lift_x(x)
            if y is None:
                continue
            if read_random(rand, 1)[0] & 1:
                y = (-y) % self.p
            logger.debug("%s: embedded %d bytes after %d attempts", self.name, dl, attempts)
            return PointJacobi(self.curve, x, y, 1, self.order)

    def data(self, P: ECPoint) -> bytes:
        if self._is_identity(P):
            raise DecodeError(f"{self.name}: identity carries no embedded data")
        b = P.x().to_bytes(self.coord_len, "big")
        dl = b[0]
        if dl > self.embed_len():
            raise DecodeError(f"{self.name}: invalid embedded data length {dl}")
        return b[1:1 + dl]

    # ---- hashing ----

    def xof(self, seed: bytes) -> ShakeXof:
        return ShakeXof(seed)


def make_p256_group() -> WeierstrassGroup:
    return WeierstrassGroup(name="p256", spec=NIST256p)


def make_secp256k1_group() -> WeierstrassGroup:
    return WeierstrassGroup(name="secp256k1", spec=SECP256k1)
