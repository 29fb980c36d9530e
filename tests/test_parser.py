# tests/test_parser.py
from __future__ import annotations

import pytest

from merchantguide.notes import (
    NOTE_KINDS,
    BaseNumeralDeclaration,
    CommodityDeclaration,
    CompositeNumeralDeclaration,
    Query,
    UnknownNote,
)
from merchantguide.parser import classify_note, parse_notes, scan_note, tokenize

# ---------- classification -----------------------------------------------------

TEST_CASES = [
    ("glob is I", BaseNumeralDeclaration),
    ("tegj is L", BaseNumeralDeclaration),
    ("prok glob is IV", CompositeNumeralDeclaration),
    ("pish tegj glob glob is XLII", CompositeNumeralDeclaration),
    ("glob prok Silver is 68 Credits", CommodityDeclaration),
    ("glob Gold is 57800 Credits", CommodityDeclaration),
    ("how much is glob prok ?", Query),
    ("how many Credits is glob prok Silver ?", Query),
    ("how much wood could a woodchuck chuck if a woodchuck could chuck wood ?", Query),
    ("glob prok Silver pish tegj", UnknownNote),
    ("glob is IIII", UnknownNote),
    ("glob is 5", UnknownNote),
    ("Silver is 34 Credits", UnknownNote),
    ("glob glob Silver is 34 Credits please", UnknownNote),
    ("", UnknownNote),
    ("   ", UnknownNote),
]
TEST_IDS = [f"{cls.__name__}_{note.strip().replace(' ', '_') or 'blank'}"[:60] for note, cls in TEST_CASES]


@pytest.mark.parametrize("note,cls", TEST_CASES, ids=TEST_IDS)
def test_classify_note(note, cls):
    assert type(classify_note(note)) is cls


def test_base_declaration_fields():
    note = classify_note("glob is I")
    assert note == BaseNumeralDeclaration("glob is I", ("glob", "is", "I"), "glob", "I")
    assert note.kind == "base_numeral"


def test_commodity_declaration_fields():
    note = classify_note("glob prok Silver is 68 Credits")
    assert isinstance(note, CommodityDeclaration)
    assert note.intergal_tokens == ("glob", "prok")
    assert note.commodity == "Silver"
    assert note.amount == 68


def test_composite_declaration_fields():
    note = classify_note("prok glob is IV")
    assert isinstance(note, CompositeNumeralDeclaration)
    assert note.intergal_tokens == ("prok", "glob")
    assert note.roman_numeral == "IV"


def test_query_fields():
    much = classify_note("how much is glob prok ?")
    assert isinstance(much, Query)
    assert much.commodity is None
    assert much.intergal_tokens == ("glob", "prok")
    assert much.intergal_numeral == "glob prok"

    many = classify_note("how many Credits is glob prok Silver ?")
    assert many.commodity == "Silver"
    assert many.intergal_tokens == ("glob", "prok")


def test_question_mark_glued_to_word_is_not_a_query():
    note = classify_note("how much is pish tegj glob glob?")
    assert isinstance(note, UnknownNote)
    assert note.tokens == ("how", "much", "is", "pish", "tegj", "glob", "glob?")


def test_classification_is_idempotent():
    for note, _ in TEST_CASES:
        assert classify_note(note) == classify_note(note)


# ---------- tokens and scans ---------------------------------------------------

@pytest.mark.parametrize(
    "note,tokens",
    [
        ("glob is I", ("glob", "is", "I")),
        ("how much is glob ?", ("how", "much", "is", "glob", "?")),
        ("prok?", ("prok?",)),
        ("  glob,  prok ", ("glob", "prok")),
        ("is ??", ("is", "??")),
        ("", ()),
    ],
    ids=["plain", "spaced_question", "glued_question", "punctuation", "double_question", "empty"],
)
def test_tokenize(note, tokens):
    assert tokenize(note) == tokens


def test_scan_counts_and_positions():
    scan = scan_note("glob prok Silver is 68 Credits")
    assert len(scan) == 6
    assert scan.count_cluster == 1
    assert scan.cluster1 == (0, 1)
    assert scan.cluster2 is None
    assert scan.commodity1_pos == 2
    assert scan.is_pos == 3
    assert scan.arabic_pos == 4
    assert scan.credits_pos == 5
    assert scan.question_pos is None


def test_scan_tracks_two_clusters():
    scan = scan_note("glob prok Silver pish tegj")
    assert scan.count_cluster == 2
    assert scan.cluster_tokens(scan.cluster1) == ("glob", "prok")
    assert scan.cluster_tokens(scan.cluster2) == ("pish", "tegj")


def test_third_cluster_is_counted_but_not_tracked():
    note = "glob Silver prok Gold pish"
    scan = scan_note(note)
    assert scan.count_cluster == 3
    assert scan.cluster1 == (0, 0)
    assert scan.cluster2 == (2, 2)
    assert type(classify_note(note)) is UnknownNote


@pytest.mark.parametrize(
    "note,illegal",
    [
        ("how much is glob??", False),
        ("how much is glob ? ?", True),
    ],
    ids=["glued_questions_are_one_token", "separate_questions"],
)
def test_question_mark_counts(note, illegal):
    assert scan_note(note).is_illegal is illegal


@pytest.mark.parametrize(
    "note,illegal",
    [
        ("glob is I", False),
        ("how many Credits is glob prok Silver ?", False),
        ("glob is is I", True),
        ("how much is glob ? ?", True),
        ("how much many glob ?", True),
        ("glob is I V", True),
        ("glob Silver prok Gold pish Iron", True),
    ],
    ids=["base", "many_query", "two_is", "two_questions", "much_and_many", "two_romans", "three_clusters"],
)
def test_is_illegal(note, illegal):
    assert scan_note(note).is_illegal is illegal


def test_parse_notes_groups_by_kind_in_order():
    grouped = parse_notes([
        "how much is glob ?",
        "glob is I",
        "nonsense here",
        "prok is V",
        "how much is prok ?",
    ])
    assert set(grouped) == set(NOTE_KINDS)
    assert [n.raw for n in grouped["base_numeral"]] == ["glob is I", "prok is V"]
    assert [n.raw for n in grouped["query"]] == ["how much is glob ?", "how much is prok ?"]
    assert [n.raw for n in grouped["unknown"]] == ["nonsense here"]
    assert grouped["commodity"] == []
