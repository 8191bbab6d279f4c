"""
Decoder defaults, overridable from the environment.

Values are read once at import time and validated; a bad value fails the
import rather than surfacing in the middle of a scan.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

MAGIC = 0xD9B4BEF9
"""Record start marker (bytes ``f9 be b4 d9`` on the wire)."""

DEFAULT_MAX_MAGIC_ATTEMPTS = 50000
"""Four-byte reads a bounded marker scan makes before giving up."""

_SUPPORTED_SCAN_ACCOUNTING: list[str] = ["record", "separate"]


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"Invalid {name} environment variable: '{raw}' is not an integer")
    if value <= 0:
        raise ValueError(f"Invalid {name} environment variable: must be positive, got {value}")
    return value


MAX_MAGIC_ATTEMPTS = _env_int("BLKSTREAM_MAX_MAGIC_ATTEMPTS", DEFAULT_MAX_MAGIC_ATTEMPTS)

SCAN_ACCOUNTING = os.environ.get("BLKSTREAM_SCAN_ACCOUNTING", "record").lower()
"""Where marker-scan bytes are counted: the record ledger or a separate tally."""

if SCAN_ACCOUNTING not in _SUPPORTED_SCAN_ACCOUNTING:
    raise ValueError(
        f"Invalid BLKSTREAM_SCAN_ACCOUNTING environment variable: '{SCAN_ACCOUNTING}'. "
        f"Supported values: {_SUPPORTED_SCAN_ACCOUNTING}"
    )


class ScanConfig(BaseModel):
    magic: int = Field(MAGIC, ge=0, le=0xFFFF_FFFF)
    max_attempts: int = Field(default_factory=lambda: MAX_MAGIC_ATTEMPTS, gt=0)
    count_toward_record: bool = Field(default_factory=lambda: SCAN_ACCOUNTING == "record")
    aligned: bool = True
