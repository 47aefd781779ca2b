import struct

import pytest

from src.codec.decoder import DecoderConfig, OutlineDecoder, decode_records
from src.codec.errors import DecodeError, DecodeErrorKind
from src.models.configs import NoteEncoding
from src.models.record import MAGIC, MARKER_WORD_COLLAPSED, MARKER_WORD_EXPANDED, PREAMBLE


def _record(heading: bytes, *, attr: int = 0, marker: bytes = b"\xff\xff", delta: int = 0, note: bytes | None = None) -> bytes:
    if note is not None:
        attr |= 0x80
    out = heading + bytes([0xFF, attr]) + marker + struct.pack("<h", delta)
    if note is not None:
        out += struct.pack("<H", len(note)) + note
    return out


def _document(*records: bytes) -> bytes:
    return MAGIC + PREAMBLE + b"".join(records) + b"\xff\xff\x1a"


def test_decodes_headings_deltas_and_markers():
    data = _document(
        _record(b"Alpha"),
        _record(b"Beta", delta=1, marker=b"\xfe\xff", attr=0x08),
        _record(b"Gamma", delta=-1),
    )

    records = decode_records(data)

    assert [r.text for r in records] == ["Alpha", "Beta", "Gamma"]
    assert [r.delta for r in records] == [0, 1, -1]
    assert records[0].marker == MARKER_WORD_EXPANDED
    assert records[1].marker == MARKER_WORD_COLLAPSED
    assert records[1].collapsed is True
    assert records[1].flags.has_next_sibling is True
    assert records[2].heading_length == 5


def test_offsets_account_for_magic_and_preamble():
    data = _document(_record(b"A"), _record(b"B", note=b"xy"))

    first, second = decode_records(data)

    assert first.offsets.heading == 9
    assert first.offsets.terminator == 10
    assert first.offsets.attr == 11
    assert first.offsets.marker == 12
    assert first.offsets.delta == 14
    assert first.offsets.note_length is None
    assert second.offsets.heading == 16
    assert second.offsets.note_length == 23
    assert second.offsets.note == 25


def test_magic_and_preamble_are_optional():
    assert [r.text for r in decode_records(_record(b"Solo") + b"\x1a")] == ["Solo"]
    assert [r.text for r in decode_records(MAGIC + _record(b"NoPreamble"))] == ["NoPreamble"]


def test_empty_document_has_no_records():
    assert decode_records(MAGIC + PREAMBLE + b"\xff\xff\x1a") == []
    assert decode_records(MAGIC + PREAMBLE + b"\x1a") == []
    assert decode_records(b"") == []


def test_high_bit_heading_bytes_append_a_space():
    records = decode_records(_record(b"A\xc2C"))

    assert records[0].text == "AB C"
    assert records[0].heading_length == 3


def test_stray_terminator_inside_heading_is_skipped():
    data = _record(b"X\xffY") + b"\x1a"

    records = decode_records(data)

    assert len(records) == 1
    assert records[0].text == "X\x7f Y"
    assert records[0].heading_length == 3
    assert records[0].offsets.terminator == 3


def test_negative_delta_is_signed():
    records = decode_records(_record(b"A", delta=-300))

    assert records[0].delta == -300


@pytest.mark.parametrize(
    ("encoding", "raw", "expected"),
    [
        (NoteEncoding.LATIN1, b"caf\xe9", "café"),
        (NoteEncoding.ASCII, b"caf\xe9", "cafi"),
        (NoteEncoding.UTF8, b"caf\xc3\xa9", "café"),
        (NoteEncoding.UTF8, b"bad\xff", "bad\ufffd"),
    ],
)
def test_note_encodings(encoding, raw, expected):
    records = decode_records(_record(b"N", note=raw), note_encoding=encoding)

    assert records[0].note == expected
    assert records[0].note_length == len(raw)
    assert records[0].flags.has_note is True


def test_ascii_note_does_not_insert_spaces():
    records = decode_records(_record(b"N", note=b"\xc1\xc2"), note_encoding=NoteEncoding.ASCII)

    assert records[0].note == "AB"


@pytest.mark.parametrize(
    ("data", "kind"),
    [
        (b"abc", DecodeErrorKind.UNTERMINATED_HEADING),
        (b"abc\xff\x00", DecodeErrorKind.TRUNCATED_HEADER),
        (b"a\xff\x00\xff\xff\x01", DecodeErrorKind.TRUNCATED_HEADER),
        (b"a\xff\x80\xff\xff\x00\x00\x05", DecodeErrorKind.TRUNCATED_NOTE_LENGTH),
        (b"a\xff\x80\xff\xff\x00\x00\x05\x00ab", DecodeErrorKind.TRUNCATED_NOTE_BYTES),
    ],
)
def test_decode_failures_are_classified(data, kind):
    with pytest.raises(DecodeError) as excinfo:
        decode_records(data)

    assert excinfo.value.kind is kind
    assert kind.value in str(excinfo.value)


def test_failure_after_valid_records_aborts_whole_decode():
    data = _record(b"Fine") + b"broken"

    with pytest.raises(DecodeError) as excinfo:
        decode_records(data)

    assert excinfo.value.kind is DecodeErrorKind.UNTERMINATED_HEADING
    assert excinfo.value.offset == 10


def test_oversized_heading_is_rejected():
    decoder = OutlineDecoder(DecoderConfig(max_heading_length=4))

    assert decoder.decode(_record(b"abcd"))[0].text == "abcd"
    with pytest.raises(DecodeError) as excinfo:
        decoder.decode(_record(b"abcdef"))
    assert excinfo.value.kind is DecodeErrorKind.OVERSIZED_HEADING
