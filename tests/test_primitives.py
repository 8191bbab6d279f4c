# tests/test_primitives.py
import pytest

from blkstream.binary.codecs.primitives import (
    decode_u8, decode_u16, decode_u32, decode_u64, decode_u8_array, hex_string,
)
from blkstream.binary.errors import DecodeError, ShortBuffer


def test_little_and_big_endian_widths():
    assert decode_u8(b"\xfe") == 0xFE
    assert decode_u16(b"\x01\x02") == 0x0201
    assert decode_u16(b"\x01\x02", "big") == 0x0102
    assert decode_u32(b"\xf9\xbe\xb4\xd9") == 0xD9B4BEF9
    assert decode_u32(b"\xf9\xbe\xb4\xd9", "big") == 0xF9BEB4D9
    assert decode_u64(bytes(range(1, 9))) == 0x0807060504030201
    assert decode_u64(bytes(range(1, 9)), "big") == 0x0102030405060708


def test_short_slice_is_rejected_not_padded():
    with pytest.raises(ShortBuffer) as ei:
        decode_u32(b"\x01\x02\x03")
    assert ei.value.width == 4 and ei.value.got == 3
    with pytest.raises(ShortBuffer):
        decode_u8(b"")
    with pytest.raises(ShortBuffer):
        decode_u64(b"\x00" * 7, "big")


def test_unknown_byte_order():
    with pytest.raises(DecodeError):
        decode_u16(b"\x00\x01", "middle")


def test_hex_and_byte_array():
    assert hex_string(b"\xAB\x01\x00") == "ab0100"
    assert hex_string(b"") == ""
    assert decode_u8_array(b"\x00\x7f\xff") == [0, 127, 255]
