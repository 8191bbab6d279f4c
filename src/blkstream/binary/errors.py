from __future__ import annotations


class ParseError(ValueError):
    """Base error for everything raised while decoding a block stream.

    ``consumed`` is the ledger value when the error was raised, or None when
    no ledger was involved (pure buffer decodes).
    """

    def __init__(self, message: str, *, consumed: int | None = None) -> None:
        self.consumed = consumed
        if consumed is not None:
            message = f"{message} (consumed={consumed})"
        super().__init__(message)


class ShortRead(ParseError):
    """The stream returned fewer bytes than requested."""

    def __init__(self, requested: int, got: int, *, consumed: int | None = None) -> None:
        self.requested = requested
        self.got = got
        super().__init__(f"short read: need {requested} bytes, got {got}", consumed=consumed)


class ShortBuffer(ParseError):
    """A byte slice is narrower than the field being decoded from it."""

    def __init__(
        self, width: int, got: int, *, offset: int | None = None, consumed: int | None = None
    ) -> None:
        self.width = width
        self.got = got
        self.offset = offset
        msg = f"short buffer: need {width} bytes, have {got}"
        if offset is not None:
            msg = f"{msg} at offset {offset}"
        super().__init__(msg, consumed=consumed)


class DecodeError(ParseError):
    pass


class MagicNotFound(ParseError):
    def __init__(self, magic: int, attempts: int, *, consumed: int | None = None) -> None:
        self.magic = magic
        self.attempts = attempts
        super().__init__(
            f"magic 0x{magic:08X} not found after {attempts} attempts", consumed=consumed
        )


class OverconsumedRecord(ParseError):
    """More bytes were consumed than the record declared."""

    def __init__(self, declared_length: int, consumed: int) -> None:
        self.declared_length = declared_length
        super().__init__(
            f"used more bytes than the declared record length {declared_length}",
            consumed=consumed,
        )
