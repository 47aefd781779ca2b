from __future__ import annotations

from src.models.configs import NoteEncoding


HEADING_CODEPOINT_LIMIT = 0x80
PLACEHOLDER_BYTE = ord("?")


def decode_heading(raw: bytes) -> str:
    """Decode heading bytes: low 7 bits per byte, high bit adds a trailing space."""

    chars: list[str] = []
    for byte in raw:
        chars.append(chr(byte & 0x7F))
        if byte & 0x80:
            chars.append(" ")
    return "".join(chars)


def encode_heading(text: str) -> bytes:
    return bytes(
        ord(ch) if ord(ch) < HEADING_CODEPOINT_LIMIT else PLACEHOLDER_BYTE
        for ch in text
    )


def decode_note(raw: bytes, encoding: NoteEncoding) -> str:
    if encoding is NoteEncoding.UTF8:
        return raw.decode("utf-8", errors="replace")
    if encoding is NoteEncoding.ASCII:
        return "".join(chr(byte & 0x7F) for byte in raw)
    return raw.decode("latin-1")


def encode_note(text: str, encoding: NoteEncoding) -> bytes:
    if encoding is NoteEncoding.UTF8:
        return text.encode("utf-8")
    if encoding is NoteEncoding.ASCII:
        return encode_heading(text)
    return text.encode("latin-1", errors="replace")


__all__ = [
    "HEADING_CODEPOINT_LIMIT",
    "PLACEHOLDER_BYTE",
    "decode_heading",
    "decode_note",
    "encode_heading",
    "encode_note",
]
