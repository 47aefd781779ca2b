from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


MAGIC = b"\x1a\x93\x1a"
PREAMBLE = b"\xff\x00\xff\xff\xff\xff"
TERMINATOR = 0xFF
END_MARK = 0x1A
END_RUN = bytes([TERMINATOR, TERMINATOR, END_MARK])

MARKER_EXPANDED = 0xFF
MARKER_COLLAPSED = 0xFE
MARKER_WORD_EXPANDED = MARKER_EXPANDED | (TERMINATOR << 8)
MARKER_WORD_COLLAPSED = MARKER_COLLAPSED | (TERMINATOR << 8)

ATTR_NOTE = 0x80
ATTR_SELECTED = 0x20
ATTR_NEXT_SIBLING = 0x08
# Unconfirmed: appears to mark records whose next record is one level deeper.
ATTR_HAS_CHILD = 0x04
KNOWN_ATTR_BITS = ATTR_NOTE | ATTR_SELECTED | ATTR_NEXT_SIBLING | ATTR_HAS_CHILD


@dataclass(frozen=True, slots=True)
class Flags:
    """Attribute bits with an observed meaning."""

    has_note: bool = False
    selected: bool = False
    has_next_sibling: bool = False
    has_child: bool = False

    @classmethod
    def from_attr(cls, attr: int) -> "Flags":
        return cls(
            has_note=bool(attr & ATTR_NOTE),
            selected=bool(attr & ATTR_SELECTED),
            has_next_sibling=bool(attr & ATTR_NEXT_SIBLING),
            has_child=bool(attr & ATTR_HAS_CHILD),
        )


@dataclass(frozen=True, slots=True)
class RecordOffsets:
    """Absolute byte offsets of each field of a record, for diagnostics only."""

    heading: int
    terminator: int
    attr: int
    marker: int
    delta: int
    note_length: Optional[int] = None
    note: Optional[int] = None


@dataclass(frozen=True, slots=True)
class FlatRecord:
    """One decoded outline entry, in file order."""

    text: str
    delta: int
    attr: int
    marker: int
    heading_length: int
    note: Optional[str] = None
    note_length: Optional[int] = None
    offsets: Optional[RecordOffsets] = None

    @property
    def flags(self) -> Flags:
        return Flags.from_attr(self.attr)

    @property
    def collapsed(self) -> bool:
        return self.marker == MARKER_WORD_COLLAPSED

    @property
    def unknown_bits(self) -> int:
        return self.attr & ~KNOWN_ATTR_BITS & 0xFF


def record_depths(records) -> list[int]:
    """Zero-floored running sum of deltas, one entry per record."""

    depths: list[int] = []
    level = 0
    for record in records:
        level = max(0, level + record.delta)
        depths.append(level)
    return depths


__all__ = [
    "ATTR_HAS_CHILD",
    "ATTR_NEXT_SIBLING",
    "ATTR_NOTE",
    "ATTR_SELECTED",
    "END_MARK",
    "END_RUN",
    "FlatRecord",
    "Flags",
    "KNOWN_ATTR_BITS",
    "MAGIC",
    "MARKER_COLLAPSED",
    "MARKER_EXPANDED",
    "MARKER_WORD_COLLAPSED",
    "MARKER_WORD_EXPANDED",
    "PREAMBLE",
    "RecordOffsets",
    "TERMINATOR",
    "record_depths",
]
