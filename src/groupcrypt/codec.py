"""Wire codec for ordered lists of group elements.

The encoding is the Protocol Buffers wire format of

    message PointList { repeated bytes points = 1; }

with every point stored as its canonical encoding, so any decoder given a
point constructor for the same group family can read it back. Unknown
fields are skipped.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Tuple

from .errors import DecodeError
from .interfaces import Group, PointFactory

_POINTS_FIELD = 1

_WT_VARINT = 0
_WT_FIXED64 = 1
_WT_LEN = 2
_WT_FIXED32 = 5

_MAX_VARINT_BYTES = 10


def _encode_varint(n: int) -> bytes:
    if n < 0:
        raise ValueError("varint must be non-negative")
    out = bytearray()
    while True:
        byte = n & 0x7F
        n >>= 7
        if n:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _read_varint(buf: bytes, idx: int) -> Tuple[int, int]:
    """Return (value, next_index)."""
    result = 0
    shift = 0
    for _ in range(_MAX_VARINT_BYTES):
        if idx >= len(buf):
            raise DecodeError("point list: truncated varint")
        byte = buf[idx]
        idx += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, idx
        shift += 7
    raise DecodeError("point list: varint too long")


def _take(buf: bytes, idx: int, n: int) -> Tuple[bytes, int]:
    end = idx + n
    if end > len(buf):
        raise DecodeError(f"point list: field needs {n} bytes, {len(buf) - idx} left")
    return buf[idx:end], end


def encode_points(group: Group[Any], points: Iterable[Any]) -> bytes:
    out = bytearray()
    tag = _encode_varint((_POINTS_FIELD << 3) | _WT_LEN)
    for P in points:
        raw = group.encode_point(P)
        out += tag
        out += _encode_varint(len(raw))
        out += raw
    return bytes(out)


def decode_points(data: bytes, point_factory: PointFactory[Any]) -> List[Any]:
    """Decode a point list, building each element with `point_factory`.

    The factory is the type-directed constructor for the concrete point
    type, typically `group.decode_point`.
    """
    buf = bytes(data)
    points: List[Any] = []
    idx = 0
    while idx < len(buf):
        key, idx = _read_varint(buf, idx)
        field, wire_type = key >> 3, key & 0x07
        if field == 0:
            raise DecodeError("point list: field number 0 is invalid")

        if wire_type == _WT_VARINT:
            _, idx = _read_varint(buf, idx)
        elif wire_type == _WT_FIXED64:
            _, idx = _take(buf, idx, 8)
        elif wire_type == _WT_FIXED32:
            _, idx = _take(buf, idx, 4)
        elif wire_type == _WT_LEN:
            n, idx = _read_varint(buf, idx)
            raw, idx = _take(buf, idx, n)
            if field == _POINTS_FIELD:
                try:
                    points.append(point_factory(raw))
                except ValueError as e:
                    # DecodeError is a ValueError too; normalize either way.
                    raise DecodeError(f"point list: element {len(points)}: {e}") from e
        else:
            raise DecodeError(f"point list: unsupported wire type {wire_type}")
        # Unknown fields of known wire types fall through and are skipped.
    return points
