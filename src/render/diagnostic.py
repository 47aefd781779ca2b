from __future__ import annotations

from typing import List, Optional, Sequence

from src.models.record import FlatRecord
from src.render.base import RecordRenderer


def _offset(value: Optional[int]) -> str:
    return "-" if value is None else f"0x{value:06x}"


class OffsetsRenderer(RecordRenderer):
    """One line per record with the byte offset of every field, for malformed-file debugging."""

    def render(self, records: Sequence[FlatRecord]) -> str:
        lines: List[str] = []
        for index, record in enumerate(records):
            offsets = record.offsets
            if offsets is None:
                lines.append(f"{index:4d} (no offsets)")
                continue
            lines.append(
                f"{index:4d}"
                f" head@{_offset(offsets.heading)}"
                f" term@{_offset(offsets.terminator)}"
                f" attr@{_offset(offsets.attr)}"
                f" mark@{_offset(offsets.marker)}"
                f" delta@{_offset(offsets.delta)}"
                f" nlen@{_offset(offsets.note_length)}"
                f" note@{_offset(offsets.note)}"
            )
        return "".join(f"{line}\n" for line in lines)


class DumpRenderer(RecordRenderer):
    """Tabular record listing with the running level and decoded flags."""

    def render(self, records: Sequence[FlatRecord]) -> str:
        lines: List[str] = []
        level = 0
        for index, record in enumerate(records):
            level += record.delta
            flags = record.flags
            fold = "C" if record.collapsed else "E"
            selected = "S" if flags.selected else " "
            sibling = "N" if flags.has_next_sibling else " "
            note_length = len(record.note) if record.note is not None else 0
            lines.append(
                f"{index:>3}  L={level:>2}  d={record.delta:>2}  attr=0x{record.attr:02x}"
                f"  {fold} {selected} {sibling}  note={note_length}  {record.text}"
            )
        return "".join(f"{line}\n" for line in lines)


__all__ = ["DumpRenderer", "OffsetsRenderer"]
