from __future__ import annotations
import logging
from typing import Optional

from ... import config
from ..errors import MagicNotFound
from ...models.record import MagicScan
from .ledger import ByteLedger
from .primitives import decode_u32

logger = logging.getLogger(__name__)


def _scan(
    ledger: ByteLedger,
    magic: int,
    max_attempts: Optional[int],
    count_toward_record: Optional[bool],
    aligned: bool,
) -> MagicScan:
    if count_toward_record is None:
        count_toward_record = config.SCAN_ACCOUNTING == "record"
    scan = not count_toward_record

    attempts = 0
    skipped = 0
    while max_attempts is None or attempts < max_attempts:
        word = decode_u32(ledger.read(4, scan=scan))
        attempts += 1
        if word == magic:
            if attempts > 1:
                logger.debug("magic 0x%08X found after %d attempts, %d bytes skipped",
                             magic, attempts, skipped)
            return MagicScan(magic=word, attempts=attempts, skipped=skipped)
        if aligned:
            skipped += 4
        else:
            # slide the 4-byte window forward by one byte
            ledger.rewind(3, scan=scan)
            skipped += 1

    logger.debug("magic 0x%08X not found, giving up after %d attempts", magic, attempts)
    raise MagicNotFound(magic, attempts, consumed=ledger.consumed)


def find_magic(
    ledger: ByteLedger,
    *,
    magic: int = config.MAGIC,
    count_toward_record: Optional[bool] = None,
    aligned: bool = True,
) -> MagicScan:
    """
    Read 4-byte little-endian words until one equals ``magic``.
    Stops only on a match or when a read fails; end of stream surfaces as
    ShortRead and it is up to the caller whether that means "no more records".
    """
    return _scan(ledger, magic, None, count_toward_record, aligned)


def find_magic_bounded(
    ledger: ByteLedger,
    *,
    magic: int = config.MAGIC,
    max_attempts: Optional[int] = None,
    count_toward_record: Optional[bool] = None,
    aligned: bool = True,
) -> MagicScan:
    """
    Same loop as find_magic, capped at ``max_attempts`` word reads
    (config.MAX_MAGIC_ATTEMPTS by default); raises MagicNotFound once spent.
    """
    if max_attempts is None:
        max_attempts = config.MAX_MAGIC_ATTEMPTS
    if max_attempts <= 0:
        raise ValueError(f"max_attempts must be positive, got {max_attempts}")
    return _scan(ledger, magic, max_attempts, count_toward_record, aligned)
