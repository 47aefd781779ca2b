from src.analysis.diff import DiffEngine, render_report
from src.models.record import MARKER_WORD_COLLAPSED, MARKER_WORD_EXPANDED, FlatRecord


def _record(text, attr=0, delta=0, marker=MARKER_WORD_EXPANDED, note=None, note_length=None):
    return FlatRecord(
        text=text,
        delta=delta,
        attr=attr,
        marker=marker,
        heading_length=len(text),
        note=note,
        note_length=note_length,
    )


def test_selection_change_reports_single_attr_line():
    report = DiffEngine(show_selection=True).diff([_record("A", attr=0x00)], [_record("A", attr=0x20)])

    assert report.added == [] and report.removed == []
    assert len(report.changed) == 1
    change = report.changed[0]
    assert change.text == "A"
    assert change.lines == ["attr: nsfc -> nSfc (0x00 -> 0x20)"]


def test_selection_change_ignored_when_hidden():
    report = DiffEngine().diff([_record("A", attr=0x00)], [_record("A", attr=0x20)])

    assert report.is_empty
    assert render_report(report) == "no changes\n"


def test_added_and_removed_records():
    previous = [_record("Keep"), _record("Gone")]
    current = [_record("New"), _record("Keep")]

    report = DiffEngine().diff(previous, current)

    assert [(r.index, r.text) for r in report.added] == [(0, "New")]
    assert [(r.index, r.text) for r in report.removed] == [(1, "Gone")]
    assert report.changed == []


def test_every_field_difference_gets_a_line():
    old = _record("X", delta=0, marker=MARKER_WORD_EXPANDED, attr=0x80, note="abc", note_length=3)
    new = FlatRecord(
        text="X",
        delta=12,
        attr=0x88,
        marker=MARKER_WORD_COLLAPSED,
        heading_length=2,
        note="abcd",
        note_length=4,
    )

    (change,) = DiffEngine().diff([old], [new]).changed

    assert change.lines == [
        "attr: Nfc -> NFc (0x80 -> 0x88)",
        "marker: EXP -> COL",
        "delta: +0 -> 000c",
        "heading length: 0x0001 -> 0x0002",
        "note length: 3 -> 4",
        "note: length and text changed",
    ]


def test_same_length_note_edit_is_text_changed():
    old = _record("X", attr=0x80, note="abc", note_length=3)
    new = _record("X", attr=0x80, note="abd", note_length=3)

    (change,) = DiffEngine().diff([old], [new]).changed

    assert change.lines == ["note: text changed"]


def test_duplicate_headings_match_greedily_in_order():
    previous = [_record("Dup", delta=0), _record("Other"), _record("Dup", delta=1)]
    current = [_record("Dup", delta=1), _record("Other")]

    report = DiffEngine().diff(previous, current)

    # First current "Dup" pairs with the first previous "Dup", not the identical later one.
    assert [(c.previous_index, c.current_index) for c in report.changed] == [(0, 0)]
    assert report.changed[0].lines == ["delta: +0 -> +1"]
    assert [(r.index, r.text) for r in report.removed] == [(2, "Dup")]


def test_render_report_layout():
    previous = [_record("A"), _record("Old")]
    current = [_record("A", delta=1), _record("New")]

    text = render_report(DiffEngine().diff(previous, current))

    assert text == (
        '~ [0 -> 0] "A"\n'
        "    delta: +0 -> +1\n"
        '+ [1] "New"\n'
        '- [1] "Old"\n'
    )
