from __future__ import annotations
from pydantic import BaseModel, Field, field_serializer


class MagicScan(BaseModel):
    magic: int = Field(..., ge=0, le=0xFFFF_FFFF)
    attempts: int = Field(..., ge=1)
    skipped: int = Field(0, ge=0)    # bytes read past before the marker


class Record(BaseModel):
    index: int = Field(..., ge=0)
    offset: int = Field(..., ge=0)   # stream offset of the magic marker
    magic: int = Field(..., ge=0, le=0xFFFF_FFFF)
    declared_length: int = Field(..., ge=0, le=0xFFFF_FFFF)
    payload: bytes = b""

    @field_serializer("payload")
    def _payload_hex(self, payload: bytes) -> str:
        return payload.hex()
