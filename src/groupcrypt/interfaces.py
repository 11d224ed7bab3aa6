"""Interface definitions for groupcrypt components."""

from __future__ import annotations

from typing import Callable, Optional, Protocol, TypeVar

Point = TypeVar("Point")

# Returns exactly n bytes of cryptographically secure randomness.
RandomSource = Callable[[int], bytes]

# Type-directed constructor used by the point-list decoder.
PointFactory = Callable[[bytes], Point]


class Xof(Protocol):
    """Extendable-output function: absorb with write(), squeeze with read()."""

    def write(self, data: bytes) -> None:
        ...

    def read(self, n: int) -> bytes:
        ...


class Group(Protocol[Point]):
    """Prime-order group with a fixed generator.

    Scalars are ints reduced modulo `order`. Points are whatever the
    backend uses; callers only ever hand them back to the same group.
    """

    name: str
    order: int
    point_len: int
    scalar_len: int

    def generator(self) -> Point:
        ...

    def identity(self) -> Point:
        ...

    def point_eq(self, left: Point, right: Point) -> bool:
        ...

    def add(self, left: Point, right: Point) -> Point:
        ...

    def sub(self, left: Point, right: Point) -> Point:
        ...

    def neg(self, value: Point) -> Point:
        ...

    def mul(self, k: int, value: Optional[Point] = None) -> Point:
        """k * value, or k * generator when value is None."""
        ...

    def scalar_add(self, a: int, b: int) -> int:
        ...

    def scalar_sub(self, a: int, b: int) -> int:
        ...

    def scalar_mul(self, a: int, b: int) -> int:
        ...

    def pick_scalar(self, rand: RandomSource) -> int:
        ...

    def embed_len(self) -> int:
        ...

    def embed(self, data: bytes, rand: RandomSource) -> Point:
        ...

    def data(self, value: Point) -> bytes:
        """Inverse of embed(); raises DecodeError if nothing valid is embedded."""
        ...

    def encode_point(self, value: Point) -> bytes:
        ...

    def decode_point(self, buf: bytes) -> Point:
        ...

    def encode_scalar(self, k: int) -> bytes:
        ...

    def decode_scalar(self, buf: bytes) -> int:
        ...

    def xof(self, seed: bytes) -> Xof:
        ...
