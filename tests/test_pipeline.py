import struct
from pathlib import Path

import pytest

from src.codec.encoder import OutlineEncoder
from src.codec.errors import DecodeError
from src.models.configs import ToolConfig
from src.models.node import OutlineNode
from src.models.record import MAGIC, PREAMBLE
from src.pipeline import OutlinePipeline


def _record(heading: bytes, *, attr: int = 0, delta: int = 0, note: bytes | None = None) -> bytes:
    if note is not None:
        attr |= 0x80
    out = heading + bytes([0xFF, attr, 0xFF, 0xFF]) + struct.pack("<h", delta)
    if note is not None:
        out += struct.pack("<H", len(note)) + note
    return out


SAMPLE = (
    MAGIC
    + PREAMBLE
    + _record(b"Plan", attr=0x08, note=b"kickoff\r\nnotes")
    + _record(b"Step 1", delta=1, attr=0x08)
    + _record(b"Step 2")
    + _record(b"Review", delta=-1, attr=0x20)
    + b"\xff\xff\x1a"
)


def test_process_decodes_and_builds_tree():
    result = OutlinePipeline().process(SAMPLE)

    assert [r.text for r in result.records] == ["Plan", "Step 1", "Step 2", "Review"]
    assert [n.text for n in result.forest] == ["Plan", "Review"]
    assert [n.text for n in result.forest[0].children] == ["Step 1", "Step 2"]
    assert result.diagnostics == []
    assert result.round_trip is None


def test_process_with_validation_collects_findings():
    data = MAGIC + PREAMBLE + _record(b"A") + _record(b"B") + b"\xff\xff\x1a"

    result = OutlinePipeline().process(data, validate=True)

    assert [d.code for d in result.diagnostics] == ["next-sibling"]


def test_self_test_round_trip(tmp_path: Path):
    path = tmp_path / "sample.otl"
    path.write_bytes(SAMPLE)

    result = OutlinePipeline(ToolConfig(self_test=True)).process_path(path)

    assert result.round_trip is not None
    assert result.round_trip.ok
    assert result.round_trip.expected == "Plan\n  kickoff\n  notes\n  Step 1\n  Step 2\nReview\n"
    assert result.round_trip.actual == result.round_trip.expected


def test_self_test_reports_lossy_headings():
    forest = [OutlineNode(text="naïve")]

    outcome = OutlinePipeline().self_test(forest)

    assert not outcome.ok
    assert outcome.actual == "na?ve\n"


def test_decode_errors_propagate():
    with pytest.raises(DecodeError):
        OutlinePipeline().process(b"no terminator here")


def test_self_test_accepts_headings_that_widen_on_decode():
    data = MAGIC + PREAMBLE + _record(b"\xc1" * 3000) + b"\xff\xff\x1a"

    result = OutlinePipeline(ToolConfig(self_test=True)).process(data)

    assert result.records[0].text == "A " * 3000
    assert result.round_trip is not None
    assert result.round_trip.ok
    assert result.round_trip.error is None
    assert result.round_trip.encoded_size > 6000


class GarbageEncoder(OutlineEncoder):
    def encode(self, forest):
        return b"no terminator"


def test_self_test_reports_undecodable_output():
    outcome = OutlinePipeline(encoder=GarbageEncoder()).self_test([OutlineNode(text="A")])

    assert not outcome.ok
    assert outcome.actual == ""
    assert outcome.encoded_size == len(b"no terminator")
    assert "unterminated heading" in outcome.error
