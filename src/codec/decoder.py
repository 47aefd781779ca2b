from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import List, Tuple

from src.codec.errors import DecodeError, DecodeErrorKind
from src.codec.text import decode_heading, decode_note
from src.models.configs import DEFAULT_MAX_HEADING_LENGTH, NoteEncoding
from src.models.record import (
    ATTR_NOTE,
    END_MARK,
    END_RUN,
    MAGIC,
    MARKER_COLLAPSED,
    MARKER_EXPANDED,
    PREAMBLE,
    TERMINATOR,
    FlatRecord,
    RecordOffsets,
)


logger = logging.getLogger(__name__)

_DELTA = struct.Struct("<h")
_NOTE_LENGTH = struct.Struct("<H")
_MARKER = struct.Struct("<H")


@dataclass(slots=True)
class DecoderConfig:
    """Configuration for turning OTL bytes into flat records."""

    note_encoding: NoteEncoding = NoteEncoding.LATIN1
    max_heading_length: int = DEFAULT_MAX_HEADING_LENGTH


class OutlineDecoder:
    """Decode a fully materialized OTL buffer into records in file order."""

    def __init__(self, config: DecoderConfig | None = None) -> None:
        self.config = config or DecoderConfig()

    def decode(self, data: bytes) -> List[FlatRecord]:
        buf = bytes(data)
        pos = 0
        if buf.startswith(MAGIC):
            pos += len(MAGIC)
        if buf.startswith(PREAMBLE, pos):
            pos += len(PREAMBLE)

        records: List[FlatRecord] = []
        while pos < len(buf):
            if self._at_end(buf, pos):
                break
            record, pos = self._read_record(buf, pos)
            records.append(record)

        logger.debug("decoded %d records from %d bytes", len(records), len(buf))
        return records

    @staticmethod
    def _at_end(buf: bytes, pos: int) -> bool:
        if len(buf) - pos == 1 and buf[pos] == END_MARK:
            return True
        return buf.startswith(END_RUN, pos)

    def _find_header(self, buf: bytes, start: int) -> int:
        """Return the offset of the terminator that opens a valid record header."""

        scan = start
        while True:
            term = buf.find(TERMINATOR, scan)
            if term < 0:
                raise DecodeError(DecodeErrorKind.UNTERMINATED_HEADING, start)
            if term - start > self.config.max_heading_length:
                raise DecodeError(
                    DecodeErrorKind.OVERSIZED_HEADING,
                    start,
                    f"{term - start} bytes exceeds limit of {self.config.max_heading_length}",
                )
            if term + 4 > len(buf):
                raise DecodeError(DecodeErrorKind.TRUNCATED_HEADER, term)

            marker1, marker2 = buf[term + 2], buf[term + 3]
            if marker2 == TERMINATOR and marker1 in (MARKER_EXPANDED, MARKER_COLLAPSED):
                return term

            logger.debug("skipping stray terminator at 0x%06x (heading at 0x%06x)", term, start)
            scan = term + 1

    def _read_record(self, buf: bytes, start: int) -> Tuple[FlatRecord, int]:
        term = self._find_header(buf, start)
        raw_heading = buf[start:term]
        attr = buf[term + 1]
        (marker,) = _MARKER.unpack_from(buf, term + 2)

        delta_at = term + 4
        if delta_at + _DELTA.size > len(buf):
            raise DecodeError(DecodeErrorKind.TRUNCATED_HEADER, delta_at, "missing depth delta")
        (delta,) = _DELTA.unpack_from(buf, delta_at)
        pos = delta_at + _DELTA.size

        note = None
        note_length = None
        note_length_at = None
        note_at = None
        if attr & ATTR_NOTE:
            note_length_at = pos
            if pos + _NOTE_LENGTH.size > len(buf):
                raise DecodeError(DecodeErrorKind.TRUNCATED_NOTE_LENGTH, pos)
            (note_length,) = _NOTE_LENGTH.unpack_from(buf, pos)
            pos += _NOTE_LENGTH.size
            note_at = pos
            if pos + note_length > len(buf):
                raise DecodeError(
                    DecodeErrorKind.TRUNCATED_NOTE_BYTES,
                    pos,
                    f"need {note_length} bytes, {len(buf) - pos} available",
                )
            note = decode_note(buf[pos : pos + note_length], self.config.note_encoding)
            pos += note_length

        record = FlatRecord(
            text=decode_heading(raw_heading),
            delta=delta,
            attr=attr,
            marker=marker,
            heading_length=len(raw_heading),
            note=note,
            note_length=note_length,
            offsets=RecordOffsets(
                heading=start,
                terminator=term,
                attr=term + 1,
                marker=term + 2,
                delta=delta_at,
                note_length=note_length_at,
                note=note_at,
            ),
        )
        return record, pos


def decode_records(
    data: bytes,
    note_encoding: NoteEncoding = NoteEncoding.LATIN1,
) -> List[FlatRecord]:
    """Convenience wrapper decoding with default limits."""

    return OutlineDecoder(DecoderConfig(note_encoding=note_encoding)).decode(data)


__all__ = ["DecoderConfig", "OutlineDecoder", "decode_records"]
