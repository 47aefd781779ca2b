from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from src.models.record import ATTR_SELECTED, FlatRecord
from src.render.canonical import format_attr, format_delta, format_marker, quote_heading


@dataclass(slots=True)
class RecordRef:
    index: int
    text: str


@dataclass(slots=True)
class RecordChange:
    """A current record matched to a previous one whose fields differ."""

    text: str
    previous_index: int
    current_index: int
    lines: List[str] = field(default_factory=list)


@dataclass(slots=True)
class DiffReport:
    changed: List[RecordChange] = field(default_factory=list)
    added: List[RecordRef] = field(default_factory=list)
    removed: List[RecordRef] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.changed or self.added or self.removed)


def _note_length(value: Optional[int]) -> str:
    return "-" if value is None else str(value)


class DiffEngine:
    """Match records between two decodes by heading text and report field changes.

    Each current record takes the first not-yet-matched previous record with
    the same heading. This is a local greedy match, not an edit-distance
    alignment, so duplicate headings can pair out of their true order.

    The selection bit (0x20) is masked out of the attribute comparison unless
    ``show_selection`` is set, as in the Canonical view. With the default, two
    records that differ only in selection, such as ``A`` with attr 0x00 and
    ``A`` with attr 0x20, produce no change; the CLI turns the bit on with
    ``--show-selection`` / ``--show-cursor``.
    """

    def __init__(self, show_selection: bool = False) -> None:
        self.show_selection = show_selection

    def diff(self, previous: Sequence[FlatRecord], current: Sequence[FlatRecord]) -> DiffReport:
        report = DiffReport()
        matched = [False] * len(previous)

        for current_index, record in enumerate(current):
            previous_index = self._find_match(previous, matched, record.text)
            if previous_index is None:
                report.added.append(RecordRef(current_index, record.text))
                continue
            matched[previous_index] = True
            lines = self.compare(previous[previous_index], record)
            if lines:
                report.changed.append(
                    RecordChange(
                        text=record.text,
                        previous_index=previous_index,
                        current_index=current_index,
                        lines=lines,
                    )
                )

        for previous_index, was_matched in enumerate(matched):
            if not was_matched:
                report.removed.append(RecordRef(previous_index, previous[previous_index].text))
        return report

    @staticmethod
    def _find_match(previous: Sequence[FlatRecord], matched: List[bool], text: str) -> Optional[int]:
        for index, candidate in enumerate(previous):
            if not matched[index] and candidate.text == text:
                return index
        return None

    def compare(self, old: FlatRecord, new: FlatRecord) -> List[str]:
        lines: List[str] = []
        mask = 0xFF if self.show_selection else 0xFF & ~ATTR_SELECTED
        if old.attr & mask != new.attr & mask:
            lines.append(
                f"attr: {format_attr(old.attr, self.show_selection)} -> {format_attr(new.attr, self.show_selection)}"
                f" (0x{old.attr & mask:02x} -> 0x{new.attr & mask:02x})"
            )
        if old.marker != new.marker:
            lines.append(f"marker: {format_marker(old.marker)} -> {format_marker(new.marker)}")
        if old.delta != new.delta:
            lines.append(f"delta: {format_delta(old.delta)} -> {format_delta(new.delta)}")
        if old.heading_length != new.heading_length:
            lines.append(f"heading length: 0x{old.heading_length:04x} -> 0x{new.heading_length:04x}")
        if old.note_length != new.note_length:
            lines.append(f"note length: {_note_length(old.note_length)} -> {_note_length(new.note_length)}")
        if old.note != new.note:
            if old.note_length == new.note_length:
                lines.append("note: text changed")
            else:
                lines.append("note: length and text changed")
        return lines


def render_report(report: DiffReport) -> str:
    if report.is_empty:
        return "no changes\n"

    lines: List[str] = []
    for change in report.changed:
        lines.append(f"~ [{change.previous_index} -> {change.current_index}] {quote_heading(change.text)}")
        lines.extend(f"    {line}" for line in change.lines)
    for ref in report.added:
        lines.append(f"+ [{ref.index}] {quote_heading(ref.text)}")
    for ref in report.removed:
        lines.append(f"- [{ref.index}] {quote_heading(ref.text)}")
    return "".join(f"{line}\n" for line in lines)


__all__ = ["DiffEngine", "DiffReport", "RecordChange", "RecordRef", "render_report"]
