from __future__ import annotations
import logging

from ..errors import OverconsumedRecord
from .ledger import ByteLedger

logger = logging.getLogger(__name__)


def reset_to_record_boundary(ledger: ByteLedger, declared_length: int) -> bytes:
    """
    Skip whatever is left of the current record so the stream sits on the
    next record boundary.

    Reads and returns the ``declared_length - consumed`` bytes the parser did
    not interpret, then pins the ledger at ``declared_length``. Consuming more
    than was declared raises OverconsumedRecord before any read.
    """
    consumed = ledger.get()
    if consumed > declared_length:
        raise OverconsumedRecord(declared_length, consumed)

    gap = declared_length - consumed
    discarded = ledger.read(gap)
    if gap:
        logger.debug("resync: discarded %d bytes to reach record length %d", gap, declared_length)
    ledger.set(declared_length)
    return discarded
