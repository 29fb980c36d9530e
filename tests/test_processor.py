# tests/test_processor.py
from __future__ import annotations

from merchantguide.dataio import sample_path, read_notes
from merchantguide.notes import CommodityDeclaration, CompositeNumeralDeclaration
from merchantguide.processor import NoteProcessor
from merchantguide.runtime import APPLY
from merchantguide.runtime import current as _rt_current

SAMPLE_NOTES = [
    "glob is I",
    "prok is V",
    "pish is X",
    "tegj is L",
    "glob glob Silver is 34 Credits",
    "glob prok Gold is 57800 Credits",
    "pish pish Iron is 3910 Credits",
    "how much is pish tegj glob glob ?",
    "how many Credits is glob prok Silver ?",
    "how many Credits is glob prok Gold ?",
    "how many Credits is glob prok Iron ?",
    "how much wood could a woodchuck chuck if a woodchuck could chuck wood ?",
]

SAMPLE_ANSWERS = [
    "pish tegj glob glob is 42",
    "glob prok Silver is 68 Credits",
    "glob prok Gold is 57800 Credits",
    "glob prok Iron is 782 Credits",
    "I have no idea what you are talking about",
]


def test_sample_notes():
    report = NoteProcessor().process(SAMPLE_NOTES)
    assert [a.text for a in report.answers] == SAMPLE_ANSWERS
    assert [a.ok for a in report.answers] == [True, True, True, True, False]
    assert report.rejected == []
    assert report.unknown == []
    assert report.learned == [("glob", "I"), ("prok", "V"), ("pish", "X"), ("tegj", "L")]


def test_packaged_sample_file():
    lines = read_notes(sample_path("sample.txt"))
    assert lines == SAMPLE_NOTES


def test_declarations_apply_before_queries():
    report = NoteProcessor().process(["how much is glob glob ?", "glob is I"])
    assert [a.text for a in report.answers] == ["glob glob is 2"]


def test_unknown_and_rejected_notes():
    np = NoteProcessor()
    report = np.process([
        "glob is I",
        "this is not a note",
        "glob glob glob glob Silver is 10 Credits",
        "blarg Gold is 10 Credits",
        "how much is blarg ?",
    ])
    assert [n.raw for n in report.unknown] == ["this is not a note"]
    assert [n.raw for n, _ in report.rejected] == [
        "glob glob glob glob Silver is 10 Credits",
        "blarg Gold is 10 Credits",
    ]
    assert all(isinstance(n, CommodityDeclaration) for n, _ in report.rejected)
    assert report.rejected[0][1].startswith("TooManyRepeatsError")
    # 'blarg' became a known word without a value
    assert np.translator.is_known("blarg")
    assert report.answers[0].text == "I don't know how to answer 'how much is blarg ?'"


def test_learning_from_composite():
    report = NoteProcessor().process([
        "prok is I",
        "prok glob is IV",
        "how much is glob prok prok ?",
    ])
    assert ("glob", "V") in report.learned
    assert report.answers[0].text == "glob prok prok is 7"


def test_learning_from_composite_disabled():
    APPLY({"LEARNING": {"FROM_COMPOSITES": False}})
    np = NoteProcessor()
    report = np.process(["prok is I", "prok glob is IV"])
    assert not np.translator.is_known("glob")
    assert len(report.rejected) == 1
    assert isinstance(report.rejected[0][0], CompositeNumeralDeclaration)


def test_overwrite_prices_setting():
    APPLY({"LEDGER": {"OVERWRITE_PRICES": False}})
    np = NoteProcessor()
    np.process(["glob is I", "glob Silver is 17 Credits", "glob Silver is 20 Credits"])
    assert np.ledger.price_of("Silver").credits == 17


def test_process_line_is_incremental():
    np = NoteProcessor()
    assert np.process_line("glob is I").learned == [("glob", "I")]
    assert np.process_line("glob glob Silver is 34 Credits").answers == []
    report = np.process_line("how many Credits is glob Silver ?")
    assert [a.text for a in report.answers] == ["glob Silver is 17 Credits"]
    assert [n.raw for n in np.process_line("hello there").unknown] == ["hello there"]


def test_reset_forgets_everything():
    np = NoteProcessor()
    np.process(["glob is I", "glob Silver is 17 Credits"])
    np.reset()
    assert np.translator.pair_count == 0
    assert len(np.ledger) == 0
    report = np.process_line("how much is glob ?")
    assert report.answers[0].text == "I have no idea what you are talking about"


def test_debug_lines_go_to_stderr(capsys):
    _rt_current().debug = True
    NoteProcessor().process(["glob is I", "nonsense is is here"])
    out, err = capsys.readouterr()
    assert out == ""
    assert "[debug]" in err
    assert "glob = I" in err
    assert "illegal token counts" in err


def test_question_mark_must_stand_alone():
    report = NoteProcessor().process(["glob is I", "how much is glob?", "how much is glob ?"])
    assert [n.raw for n in report.unknown] == ["how much is glob?"]
    assert [a.text for a in report.answers] == ["glob is 1"]
