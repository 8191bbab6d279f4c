from __future__ import annotations
import io
from typing import BinaryIO

from ..errors import ShortRead
from .primitives import decode_u32, decode_u64


class ByteLedger:
    """Running count of bytes consumed for the record being parsed.

    A ledger is bound to one caller-owned stream and tracks it in lock-step:
    every read and rewind goes through the ledger, so ``consumed`` (plus
    ``scanned``, when marker scans are accounted separately) always equals
    how far the stream has moved since the last reset. Use one ledger per
    stream; never share one between record parses.
    """

    __slots__ = ("stream", "consumed", "scanned")

    def __init__(self, stream: BinaryIO, consumed: int = 0):
        self.stream = stream
        self.consumed = consumed
        self.scanned = 0

    def get(self) -> int: return self.consumed
    def set(self, v: int) -> None: self.consumed = v
    def increment(self, delta: int) -> None: self.consumed += delta

    def reset(self, v: int = 0) -> None:
        self.consumed = v
        self.scanned = 0

    def read(self, n: int, *, scan: bool = False) -> bytes:
        """Read exactly ``n`` bytes and advance the ledger.

        On a short read the ledger still advances by what the stream actually
        delivered before ``ShortRead`` is raised.
        """
        if n < 0:
            raise ValueError(f"negative read length {n}")
        if n == 0:
            return b""
        data = self.stream.read(n) or b""
        if scan:
            self.scanned += len(data)
        else:
            self.consumed += len(data)
        if len(data) < n:
            raise ShortRead(n, len(data), consumed=self.consumed)
        return data

    def rewind(self, n: int, *, scan: bool = False) -> None:
        """Seek the stream back ``n`` bytes, then drop them from the ledger.

        The counter is only touched once the seek has succeeded; a failing
        seek propagates with the ledger unchanged.
        """
        if n < 0:
            raise ValueError(f"negative rewind length {n}")
        self.stream.seek(-n, io.SEEK_CUR)
        if scan:
            self.scanned -= n
        else:
            self.consumed -= n

    def __repr__(self) -> str:
        return f"ByteLedger(consumed={self.consumed}, scanned={self.scanned})"


def rewind_and_read_u32(ledger: ByteLedger) -> tuple[int, bytes]:
    """Re-read a 32-bit LE field that starts one byte before the last read.

    Backs up 5 bytes and reads 4, leaving the stream one byte behind where it
    was.
    """
    ledger.rewind(5)
    raw = ledger.read(4)
    return decode_u32(raw), raw


def rewind_and_read_u64(ledger: ByteLedger) -> tuple[int, bytes]:
    """Re-read a 64-bit LE field whose last byte was over-read.

    Backs up 8 bytes, reads 7 and zero-fills the high byte.
    """
    ledger.rewind(8)
    raw = ledger.read(7) + b"\x00"
    return decode_u64(raw), raw
