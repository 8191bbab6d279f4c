from __future__ import annotations
import struct
from typing import Literal

from ..errors import DecodeError, ShortBuffer

ByteOrder = Literal["little", "big"]

_PREFIX = {"little": "<", "big": ">"}
_CODES = {1: "B", 2: "H", 4: "I", 8: "Q"}


def _unpack(b: bytes | bytearray | memoryview, width: int, order: str) -> int:
    prefix = _PREFIX.get(order)
    if prefix is None:
        raise DecodeError(f"unknown byte order {order!r}")
    if len(b) < width:
        raise ShortBuffer(width, len(b))
    try:
        return struct.unpack_from(prefix + _CODES[width], b)[0]
    except struct.error as e:
        raise DecodeError(f"u{width * 8} decode failed: {e}") from e


# Slices longer than the width decode their leading bytes.
def decode_u8(b: bytes) -> int: return _unpack(b, 1, "little")
def decode_u16(b: bytes, order: ByteOrder = "little") -> int: return _unpack(b, 2, order)
def decode_u32(b: bytes, order: ByteOrder = "little") -> int: return _unpack(b, 4, order)
def decode_u64(b: bytes, order: ByteOrder = "little") -> int: return _unpack(b, 8, order)


def decode_u8_array(b: bytes) -> list[int]:
    """Each byte of ``b`` as its own unsigned value."""
    return list(bytes(b))


def hex_string(b: bytes | bytearray | memoryview) -> str:
    """Lowercase hex of ``b``, in wire order (hash and ID fields)."""
    return bytes(b).hex()
