from __future__ import annotations

from enum import Enum


class DecodeErrorKind(str, Enum):
    UNTERMINATED_HEADING = "unterminated heading"
    TRUNCATED_HEADER = "truncated record header"
    TRUNCATED_NOTE_LENGTH = "truncated note length"
    TRUNCATED_NOTE_BYTES = "truncated note bytes"
    OVERSIZED_HEADING = "oversized heading"


class DecodeError(ValueError):
    """Raised when the byte stream cannot be decoded; aborts the whole decode."""

    def __init__(self, kind: DecodeErrorKind, offset: int, detail: str | None = None) -> None:
        self.kind = kind
        self.offset = offset
        self.detail = detail
        message = f"{kind.value} at offset 0x{offset:06x}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class EncodeError(ValueError):
    """Raised when a tree holds content the binary format cannot represent."""


__all__ = ["DecodeError", "DecodeErrorKind", "EncodeError"]
