# tests/test_resync.py
import io

import pytest

from blkstream.binary.codecs.ledger import ByteLedger
from blkstream.binary.codecs.resync import reset_to_record_boundary
from blkstream.binary.errors import OverconsumedRecord, ShortRead


def test_discards_gap_to_declared_length():
    s = io.BytesIO(bytes(range(120)))
    led = ByteLedger(s)
    led.read(80)
    gap = reset_to_record_boundary(led, 100)
    assert gap == bytes(range(80, 100))
    assert led.get() == 100
    assert s.tell() == 100


def test_overconsumed_does_not_touch_stream():
    s = io.BytesIO(bytes(200))
    led = ByteLedger(s)
    led.set(120)
    with pytest.raises(OverconsumedRecord) as ei:
        reset_to_record_boundary(led, 100)
    assert ei.value.declared_length == 100
    assert ei.value.consumed == 120
    assert s.tell() == 0
    assert led.get() == 120


def test_exact_fit_reads_nothing():
    s = io.BytesIO(bytes(10))
    led = ByteLedger(s)
    led.read(10)
    assert reset_to_record_boundary(led, 10) == b""
    assert led.get() == 10


def test_truncated_gap():
    s = io.BytesIO(bytes(30))
    led = ByteLedger(s)
    led.read(10)
    with pytest.raises(ShortRead):
        reset_to_record_boundary(led, 100)
    assert led.get() == s.tell() == 30
