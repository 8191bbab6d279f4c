from __future__ import annotations
from typing import Callable, Optional, Tuple

from ..errors import ShortBuffer
from ...models.varlen import U64_MAX, VarLenResult
from .ledger import ByteLedger
from .primitives import decode_u8, decode_u16, decode_u32, decode_u64

# CompactSize layout (payload little-endian, always starting right after b0):
#   b0 < 0xFD                                -> value is b0        width 1
#   b0 >= 0xFD, payload[0:2] < 0xFFFF        -> that u16           width 3
#   else payload[0:4] < 0xFFFFFFFF           -> that u32           width 5
#   else                                     -> payload[0:8] u64   width 9
# A saturated narrower payload falls through to the next wider one, so the
# wider forms begin with the saturated bytes of the narrower ones.

COMPACT_MARKER = 0xFD
MAX_U16_PAYLOAD = 0xFFFF
MAX_U32_PAYLOAD = 0xFFFF_FFFF

# (payload width, decoder, exclusive upper bound), narrowest first
_CASCADE: Tuple[Tuple[int, Callable[[bytes], int], Optional[int]], ...] = (
    (2, decode_u16, MAX_U16_PAYLOAD),
    (4, decode_u32, MAX_U32_PAYLOAD),
    (8, decode_u64, None),
)


def _fits(value: int, limit: Optional[int]) -> bool:
    return limit is None or value < limit


def read_compact_size_with_backup(ledger: ByteLedger) -> VarLenResult:
    """
    Read a CompactSize from the ledger's stream, returning the whole encoding.
    For wide forms the stream is stepped back over what was already read and
    the marker is re-read together with the payload, so ``raw`` is
    marker + payload in one contiguous chunk.
    """
    first = ledger.read(1)
    b0 = decode_u8(first)
    if b0 < COMPACT_MARKER:
        return VarLenResult(value=b0, raw=first, width=1, advanced=1)

    held = 1
    for n, decode, limit in _CASCADE:
        ledger.rewind(held)
        raw = ledger.read(1 + n)
        held = 1 + n
        value = decode(raw[1:])
        if _fits(value, limit):
            break
    return VarLenResult(value=value, raw=raw, width=held, advanced=held)


def read_compact_size(ledger: ByteLedger) -> VarLenResult:
    """
    Read a CompactSize without seeking. For wide forms ``raw`` holds only the
    payload bytes that followed the marker.
    """
    first = ledger.read(1)
    b0 = decode_u8(first)
    if b0 < COMPACT_MARKER:
        return VarLenResult(value=b0, raw=first, width=1, advanced=1)

    payload = b""
    for n, decode, limit in _CASCADE:
        payload += ledger.read(n - len(payload))
        value = decode(payload)
        if _fits(value, limit):
            break
    return VarLenResult(value=value, raw=payload, width=1 + len(payload), advanced=1 + len(payload))


def decode_compact_size(
    buf: bytes | bytearray | memoryview,
    start: int = 0,
    ledger: ByteLedger | None = None,
) -> VarLenResult:
    """
    Decode a CompactSize from an in-memory buffer at ``start``.
    ``next_offset`` is the first byte after the encoding. When a ledger is
    given it is credited with the encoded width; no stream I/O happens.
    """
    consumed = ledger.get() if ledger is not None else None
    view = memoryview(buf)
    if not 0 <= start < len(view):
        raise ShortBuffer(1, max(len(view) - start, 0), offset=start, consumed=consumed)

    b0 = view[start]
    if b0 < COMPACT_MARKER:
        value, width = b0, 1
    else:
        for n, decode, limit in _CASCADE:
            payload = view[start + 1:start + 1 + n].tobytes()
            if len(payload) < n:
                raise ShortBuffer(n, len(payload), offset=start + 1, consumed=consumed)
            value = decode(payload)
            if _fits(value, limit):
                break
        width = 1 + n

    if ledger is not None:
        ledger.increment(width)
    return VarLenResult(
        value=value,
        raw=view[start:start + width].tobytes(),
        width=width,
        next_offset=start + width,
    )


def encode_compact_size(value: int) -> bytes:
    """
    Encode ``value`` so the decoders above read it back.

    Wide forms must start with the saturated narrower payload, so only values
    whose low 16 bits are all ones fit the 5-byte form and only values whose
    low 32 bits are all ones fit the 9-byte form. Anything else at or above
    0xFFFF raises ValueError.
    """
    if not 0 <= value <= U64_MAX:
        raise ValueError(f"CompactSize value out of range: {value}")
    if value < COMPACT_MARKER:
        return bytes([value])
    if value < MAX_U16_PAYLOAD:
        return bytes([COMPACT_MARKER]) + value.to_bytes(2, "little")
    if value & MAX_U16_PAYLOAD == MAX_U16_PAYLOAD and value < MAX_U32_PAYLOAD:
        return bytes([COMPACT_MARKER]) + value.to_bytes(4, "little")
    if value & MAX_U32_PAYLOAD == MAX_U32_PAYLOAD:
        return bytes([COMPACT_MARKER]) + value.to_bytes(8, "little")
    raise ValueError(f"0x{value:X} has no CompactSize encoding")
