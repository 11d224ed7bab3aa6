# src/instantiations/bls/inst.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from groupcrypt.errors import DecodeError, EmbeddingUnsupported
from groupcrypt.interfaces import RandomSource
from groupcrypt.ro import ShakeXof, pick_scalar_mod, scalar_from_bytes, scalar_to_bytes

# py_ecc for BLS12-381 G1 group ops + point compression (no pairing).
# Install: pip install py-ecc
try:
    from py_ecc.optimized_bls12_381 import (
        G1,
        Z1,
        add,
        b,
        curve_order,
        eq,
        is_inf,
        is_on_curve,
        multiply,
        neg,
    )
    from py_ecc.bls.point_compression import compress_G1, decompress_G1
except Exception as e:  # pragma: no cover
    raise ImportError(
        "BLS12-381 instantiation requires 'py-ecc'. Install via: pip install py-ecc"
    ) from e


# ----------------------------
# Points stay in py_ecc's Jacobian form (x, y, z) throughout; equality goes
# through py_ecc's eq(), which compares projectively.
# ----------------------------

_G1_LEN = 48  # BLS12-381 G1 compressed size
_Q = int(curve_order)


@dataclass(frozen=True)
class BLS12381G1Group:
    name: str = "bls12_381_g1"
    order: int = _Q
    point_len: int = _G1_LEN
    scalar_len: int = (_Q.bit_length() + 7) // 8

    def generator(self):
        return G1

    def identity(self):
        return Z1

    def point_eq(self, A, B) -> bool:
        return eq(A, B)

    def add(self, A, B):
        return add(A, B)

    def neg(self, A):
        return neg(A)

    def sub(self, A, B):
        return add(A, neg(B))

    def mul(self, k: int, A: Optional[tuple] = None):
        if A is None:
            A = G1
        return multiply(A, int(k) % self.order)

    # ---- scalars (Z_q) ----

    def scalar_add(self, a: int, b_: int) -> int:
        return (a + b_) % self.order

    def scalar_sub(self, a: int, b_: int) -> int:
        return (a - b_) % self.order

    def scalar_mul(self, a: int, b_: int) -> int:
        return (a * b_) % self.order

    def pick_scalar(self, rand: RandomSource) -> int:
        return pick_scalar_mod(self.order, rand)

    # ---- encodings ----

    def encode_point(self, A) -> bytes:
        return int(compress_G1(A)).to_bytes(_G1_LEN, "big")

    def decode_point(self, buf: bytes):
        if len(buf) != _G1_LEN:
            raise DecodeError(f"{self.name} point: expected {_G1_LEN} bytes, got {len(buf)}")
        try:
            P = decompress_G1(int.from_bytes(buf, "big"))
        except ValueError as e:
            raise DecodeError(f"{self.name} point: {e}") from e
        if is_inf(P):
            return Z1
        if not is_on_curve(P, b):
            raise DecodeError(f"{self.name} point: not on curve")
        # G1 has a cofactor; reject points outside the order-q subgroup.
        if not is_inf(multiply(P, self.order)):
            raise DecodeError(f"{self.name} point: not in the prime-order subgroup")
        return P

    def encode_scalar(self, k: int) -> bytes:
        return scalar_to_bytes(k, self.order, self.scalar_len)

    def decode_scalar(self, buf: bytes) -> int:
        return scalar_from_bytes(buf, self.order, self.scalar_len)

    # ---- embedding ----
    # A random x with the data in it lands in the order-q subgroup only with
    # probability 1/cofactor (~2^-126), so G1 cannot carry embedded data.

    def embed_len(self) -> int:
        return 0

    def embed(self, data: bytes, rand: RandomSource):
        raise EmbeddingUnsupported(f"{self.name} cannot embed data into points")

    def data(self, A) -> bytes:
        raise DecodeError(f"{self.name} points carry no embedded data")

    # ---- hashing ----

    def xof(self, seed: bytes) -> ShakeXof:
        return ShakeXof(seed)


def make_bls_g1_group() -> BLS12381G1Group:
    """Return the BLS12-381 G1 group (no pairing, no embedding)."""
    return BLS12381G1Group()
