from __future__ import annotations
from pydantic import BaseModel, Field, field_serializer

U64_MAX = 0xFFFF_FFFF_FFFF_FFFF


class VarLenResult(BaseModel):
    value: int = Field(..., ge=0, le=U64_MAX)
    raw: bytes
    width: int = Field(..., ge=1, le=9)       # 1, 3, 5 or 9
    advanced: int | None = None               # stream variants
    next_offset: int | None = None            # buffer variant

    @field_serializer("raw")
    def _raw_hex(self, raw: bytes) -> str:
        return raw.hex()
