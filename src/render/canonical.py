"""Offset-free, bit-exact record dump used as the regression and diff oracle.

One line per record::

    <attrs> <marker> <delta> <heading length> "<heading>"

followed, for records with a note, by ``NOTELEN xxxx`` and a note block
delimited by ``<<<NOTE`` / ``NOTE>>>``. Attribute bits are listed from bit 7
down to bit 0: known bits as a letter (upper-case when set), unknown bits as
their bit number when set and nothing when clear.
"""

from __future__ import annotations

from typing import List, Sequence

from src.models.record import (
    ATTR_HAS_CHILD,
    ATTR_NEXT_SIBLING,
    ATTR_NOTE,
    ATTR_SELECTED,
    MARKER_WORD_COLLAPSED,
    MARKER_WORD_EXPANDED,
    FlatRecord,
)
from src.render.base import RecordRenderer, normalize_newlines


ATTR_MNEMONICS = {
    ATTR_NOTE: "N",
    ATTR_SELECTED: "S",
    ATTR_NEXT_SIBLING: "F",
    ATTR_HAS_CHILD: "C",
}

MARKER_TOKENS = {
    MARKER_WORD_EXPANDED: "EXP",
    MARKER_WORD_COLLAPSED: "COL",
}

NOTE_LENGTH_LABEL = "NOTELEN"
NOTE_START = "<<<NOTE"
NOTE_END = "NOTE>>>"


def format_attr(attr: int, show_selection: bool = False) -> str:
    parts: List[str] = []
    for bit_index in range(7, -1, -1):
        bit = 1 << bit_index
        is_set = bool(attr & bit)
        letter = ATTR_MNEMONICS.get(bit)
        if letter is None:
            if is_set:
                parts.append(str(bit_index))
            continue
        if bit == ATTR_SELECTED and not show_selection:
            continue
        parts.append(letter if is_set else letter.lower())
    return "".join(parts)


def format_marker(marker: int) -> str:
    return MARKER_TOKENS.get(marker, f"{marker & 0xFFFF:04x}")


def format_delta(delta: int) -> str:
    if -9 <= delta <= 9:
        return f"{delta:+d}"
    return f"{delta & 0xFFFF:04x}"


def quote_heading(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class CanonicalRenderer(RecordRenderer):
    """Render records in the canonical text layout."""

    def render(self, records: Sequence[FlatRecord]) -> str:
        out: List[str] = []
        for record in records:
            out.append(self.header_line(record) + "\n")
            if record.note is not None:
                note_length = record.note_length
                if note_length is None:
                    note_length = len(record.note)
                out.append(f"{NOTE_LENGTH_LABEL} {note_length:04x}\n")
                out.append(f"{NOTE_START}\n")
                out.append(normalize_newlines(record.note) + "\n")
                out.append(f"{NOTE_END}\n")
        return "".join(out)

    def header_line(self, record: FlatRecord) -> str:
        return " ".join(
            [
                format_attr(record.attr, self.config.show_selection),
                format_marker(record.marker),
                format_delta(record.delta),
                f"{record.heading_length:04x}",
                quote_heading(record.text),
            ]
        )


__all__ = [
    "ATTR_MNEMONICS",
    "CanonicalRenderer",
    "MARKER_TOKENS",
    "NOTE_END",
    "NOTE_LENGTH_LABEL",
    "NOTE_START",
    "format_attr",
    "format_delta",
    "format_marker",
    "quote_heading",
]
