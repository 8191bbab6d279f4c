# tests/test_magic.py
import io

import pytest

from blkstream.binary.codecs.ledger import ByteLedger
from blkstream.binary.codecs.magic import find_magic, find_magic_bounded
from blkstream.binary.errors import MagicNotFound, ShortRead

MAGIC_BYTES = bytes([0xF9, 0xBE, 0xB4, 0xD9])


class CountingStream(io.BytesIO):
    def __init__(self, data):
        super().__init__(data)
        self.reads = 0

    def read(self, n=-1):
        self.reads += 1
        return super().read(n)


def test_marker_at_cursor_takes_one_read():
    s = CountingStream(MAGIC_BYTES + b"\x00" * 4)
    led = ByteLedger(s)
    res = find_magic(led, count_toward_record=True)
    assert res.magic == 0xD9B4BEF9
    assert res.attempts == 1 and res.skipped == 0
    assert s.reads == 1
    assert led.get() == 4


def test_skips_words_until_marker():
    s = io.BytesIO(b"\x00" * 8 + MAGIC_BYTES)
    led = ByteLedger(s)
    res = find_magic(led, count_toward_record=True)
    assert (res.attempts, res.skipped) == (3, 8)
    assert led.get() == s.tell() == 12


def test_unbounded_end_of_stream_propagates():
    with pytest.raises(ShortRead):
        find_magic(ByteLedger(io.BytesIO(b"\x00" * 6)))


def test_bounded_gives_up_after_cap():
    s = CountingStream(bytes(200000))
    with pytest.raises(MagicNotFound) as ei:
        find_magic_bounded(ByteLedger(s), max_attempts=50000)
    assert ei.value.attempts == 50000
    assert s.reads == 50000


def test_bounded_default_cap_is_50000():
    s = CountingStream(bytes(200000))
    with pytest.raises(MagicNotFound):
        find_magic_bounded(ByteLedger(s))
    assert s.reads <= 50000


def test_bounded_finds_marker_on_last_allowed_attempt():
    data = b"\x00" * 8 + MAGIC_BYTES
    assert find_magic_bounded(ByteLedger(io.BytesIO(data)), max_attempts=3).attempts == 3
    with pytest.raises(MagicNotFound):
        find_magic_bounded(ByteLedger(io.BytesIO(data)), max_attempts=2)


def test_bounded_rejects_non_positive_cap():
    with pytest.raises(ValueError):
        find_magic_bounded(ByteLedger(io.BytesIO(MAGIC_BYTES)), max_attempts=0)


def test_separate_scan_accounting():
    s = io.BytesIO(b"\x00" * 8 + MAGIC_BYTES)
    led = ByteLedger(s)
    find_magic(led, count_toward_record=False)
    assert led.get() == 0
    assert led.scanned == s.tell() == 12


def test_unaligned_scan_finds_marker_at_odd_offset():
    s = io.BytesIO(b"\x00\x01\x02" + MAGIC_BYTES + b"\xaa")
    led = ByteLedger(s)
    res = find_magic_bounded(led, aligned=False, count_toward_record=True)
    assert res.skipped == 3
    assert res.attempts == 4
    assert led.get() == s.tell() == 7


def test_custom_marker():
    s = io.BytesIO((0x0709110B).to_bytes(4, "little"))
    res = find_magic(ByteLedger(s), magic=0x0709110B)
    assert res.magic == 0x0709110B
