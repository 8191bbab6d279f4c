from __future__ import annotations

import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Tuple, Union

from ..config import ScanConfig
from ..models.record import Record
from .codecs.ledger import ByteLedger
from .codecs.magic import find_magic_bounded
from .codecs.primitives import decode_u32
from .codecs.resync import reset_to_record_boundary
from .errors import MagicNotFound, ParseError, ShortRead

logger = logging.getLogger(__name__)

Source = Union[str, Path, bytes, bytearray, memoryview, BinaryIO]


# -----------------------------
# Helpers
# -----------------------------

@contextmanager
def _open_stream(src: Source) -> Iterator[BinaryIO]:
    """Yield a binary stream for ``src``; only paths opened here are closed here."""
    if isinstance(src, (bytes, bytearray, memoryview)):
        yield io.BytesIO(bytes(src))
    elif isinstance(src, (str, Path)):
        with open(src, "rb") as fh:
            yield fh
    else:
        yield src


# -----------------------------
# Streaming iterator
# -----------------------------

def iter_records(
    source: Source,
    *,
    scan_config: Optional[ScanConfig] = None,
    max_records: Optional[int] = None,
) -> Iterator[Record]:
    """
    Stream framed records: [magic u32 LE][length u32 LE][payload].

    Each record gets a fresh ledger count. The payload is collected by
    resynchronizing to the declared length, so the stream is left on the
    next record boundary even though nothing inside the payload is parsed.
    Running out of data (or of scan attempts) while looking for a marker ends
    iteration; running out inside a record raises ParseError.
    """
    cfg = scan_config or ScanConfig()

    with _open_stream(source) as stream:
        ledger = ByteLedger(stream)
        index = 0

        while max_records is None or index < max_records:
            ledger.reset()
            try:
                scan = find_magic_bounded(
                    ledger,
                    magic=cfg.magic,
                    max_attempts=cfg.max_attempts,
                    count_toward_record=cfg.count_toward_record,
                    aligned=cfg.aligned,
                )
            except ShortRead:
                logger.debug("end of stream after %d records", index)
                return
            except MagicNotFound as e:
                logger.warning("no record marker within %d attempts after record %d; stopping",
                               e.attempts, index)
                return

            offset = stream.tell() - 4
            try:
                declared = decode_u32(ledger.read(4))
                ledger.reset()
                payload = reset_to_record_boundary(ledger, declared)
            except ShortRead as e:
                raise ParseError(
                    f"record {index} at offset {offset} truncated: need {e.requested} bytes, got {e.got}",
                    consumed=ledger.get(),
                ) from e

            yield Record(
                index=index,
                offset=offset,
                magic=scan.magic,
                declared_length=declared,
                payload=payload,
            )
            index += 1


# -----------------------------
# Fast summary
# -----------------------------

def summarize_stream(
    source: Source,
    *,
    scan_config: Optional[ScanConfig] = None,
    max_records: Optional[int] = None,
) -> Tuple[int, int]:
    """Returns (records, payload_bytes)."""
    records = 0
    total = 0
    for rec in iter_records(source, scan_config=scan_config, max_records=max_records):
        records += 1
        total += rec.declared_length
    return records, total
