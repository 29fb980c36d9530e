# src/merchantguide/parser.py
"""
Tokenize notes about the intergalactic commodity markets and decide which
kind of note each one is.

Known note shapes (n = number of tokens):
  base numeral declaration       glob is I
  composite numeral declaration  glob prok is IV
  commodity declaration          glob prok Silver is 68 Credits
  query                          anything whose last token is '?'

Anything else is kept verbatim as an UnknownNote.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from merchantguide.notes import (
    NOTE_KINDS,
    BaseNumeralDeclaration,
    CommodityDeclaration,
    CompositeNumeralDeclaration,
    Note,
    NoteScan,
    Query,
    UnknownNote,
)
from merchantguide.roman import TranslationError, is_base_symbol, roman_to_arabic

# every character outside this class separates tokens
_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9_?]")
_ARABIC_RE = re.compile(r"[0-9]+")
_COMMODITY_RE = re.compile(r"[A-Z][a-z]+")
_INTERGAL_RE = re.compile(r"[a-z]+")

RESERVED = frozenset({"Credits", "how", "much", "is"})


class Lex(Enum):
    IS = "is"
    CREDITS = "Credits"
    HOW = "how"
    MUCH = "much"
    MANY = "many"
    QUESTION = "?"
    ARABIC = "arabic"
    COMMODITY = "commodity"
    ROMAN_BASE = "roman_base"
    ROMAN_COMPOSITE = "roman_composite"
    CLUSTER = "cluster"


# exact-match categories, in precedence order
_KEYWORDS: dict[str, Lex] = {
    "is": Lex.IS,
    "Credits": Lex.CREDITS,
    "how": Lex.HOW,
    "much": Lex.MUCH,
    "many": Lex.MANY,
    "?": Lex.QUESTION,
}


@dataclass(frozen=True)
class Lexeme:
    category: Lex
    start: int
    end: int


# ---------- Token predicates --------------------------------------------------

def tokenize(note: str) -> tuple[str, ...]:
    """
    Split a note on every character that is not a letter, digit, underscore
    or '?'. A '?' only stands alone when separated: 'glob?' is one token.
    """
    return tuple(t for t in _SEPARATOR_RE.split(note) if t)


def is_arabic(token: str) -> bool:
    return _ARABIC_RE.fullmatch(token) is not None


def is_commodity(token: str) -> bool:
    return token != "Credits" and _COMMODITY_RE.fullmatch(token) is not None


def is_composite_roman(token: str) -> bool:
    if len(token) < 2:
        return False
    try:
        roman_to_arabic(token)
    except TranslationError:
        return False
    return True


def is_intergal(token: str) -> bool:
    return token not in RESERVED and _INTERGAL_RE.fullmatch(token) is not None


# ---------- Scanning ----------------------------------------------------------

def lex(tokens: tuple[str, ...]) -> Iterator[Lexeme]:
    """
    Yield one Lexeme per recognized token, in order.

    A run of intergalactic numerals is yielded as a single CLUSTER lexeme
    spanning the whole run. Unrecognized tokens yield nothing.
    """
    i = 0
    n = len(tokens)
    while i < n:
        tok = tokens[i]
        cat = _KEYWORDS.get(tok)
        if cat is None:
            if is_arabic(tok):
                cat = Lex.ARABIC
            elif is_commodity(tok):
                cat = Lex.COMMODITY
            elif is_base_symbol(tok):
                cat = Lex.ROMAN_BASE
            elif is_composite_roman(tok):
                cat = Lex.ROMAN_COMPOSITE
            elif is_intergal(tok):
                end = i
                while end + 1 < n and is_intergal(tokens[end + 1]):
                    end += 1
                yield Lexeme(Lex.CLUSTER, i, end)
                i = end + 1
                continue
        if cat is not None:
            yield Lexeme(cat, i, i)
        i += 1


def _last(lexemes: list[Lexeme], *cats: Lex) -> int | None:
    pos = None
    for lx in lexemes:
        if lx.category in cats:
            pos = lx.start
    return pos


def scan_tokens(tokens: tuple[str, ...]) -> NoteScan:
    lexemes = list(lex(tokens))
    counts = Counter(lx.category for lx in lexemes)
    commodities = [lx.start for lx in lexemes if lx.category is Lex.COMMODITY]
    clusters = [(lx.start, lx.end) for lx in lexemes if lx.category is Lex.CLUSTER]

    return NoteScan(
        tokens=tokens,
        count_is=counts[Lex.IS],
        count_credits=counts[Lex.CREDITS],
        count_how=counts[Lex.HOW],
        count_much=counts[Lex.MUCH],
        count_many=counts[Lex.MANY],
        count_question=counts[Lex.QUESTION],
        count_arabic=counts[Lex.ARABIC],
        count_commodity=counts[Lex.COMMODITY],
        count_roman_base=counts[Lex.ROMAN_BASE],
        count_roman_composite=counts[Lex.ROMAN_COMPOSITE],
        count_cluster=counts[Lex.CLUSTER],
        is_pos=_last(lexemes, Lex.IS),
        credits_pos=_last(lexemes, Lex.CREDITS),
        how_pos=_last(lexemes, Lex.HOW),
        much_pos=_last(lexemes, Lex.MUCH),
        many_pos=_last(lexemes, Lex.MANY),
        question_pos=_last(lexemes, Lex.QUESTION),
        arabic_pos=_last(lexemes, Lex.ARABIC),
        commodity1_pos=commodities[0] if commodities else None,
        commodity2_pos=commodities[1] if len(commodities) > 1 else None,
        roman_pos=_last(lexemes, Lex.ROMAN_BASE, Lex.ROMAN_COMPOSITE),
        cluster1=clusters[0] if clusters else None,
        # a third cluster is counted but never tracked
        cluster2=clusters[1] if len(clusters) > 1 else None,
    )


def scan_note(note: str) -> NoteScan:
    return scan_tokens(tokenize(note))


# ---------- Note-type decision -------------------------------------------------

def is_query(scan: NoteScan) -> bool:
    n = len(scan)
    return n > 0 and scan.question_pos == n - 1


def is_base_numeral_declaration(scan: NoteScan) -> bool:
    return (
        len(scan) == 3
        and scan.count_cluster == 1 and scan.cluster1 == (0, 0)
        and scan.count_is == 1 and scan.is_pos == 1
        and scan.count_roman_base == 1 and scan.roman_pos == 2
    )


def is_composite_numeral_declaration(scan: NoteScan) -> bool:
    n = len(scan)
    return (
        n > 3
        and scan.count_cluster == 1 and scan.cluster1 == (0, n - 3)
        and scan.count_is == 1 and scan.is_pos == n - 2
        and scan.count_roman_composite == 1 and scan.roman_pos == n - 1
    )


def is_commodity_declaration(scan: NoteScan) -> bool:
    n = len(scan)
    return (
        n > 4
        and scan.count_cluster == 1 and scan.cluster1 == (0, n - 5)
        and scan.commodity1_pos == n - 4
        and scan.count_is == 1 and scan.is_pos == n - 3
        and scan.count_arabic == 1 and scan.arabic_pos == n - 2
        and scan.count_credits == 1 and scan.credits_pos == n - 1
    )


def note_from_scan(note: str, scan: NoteScan) -> Note:
    """Project a scanned note onto the first note shape it matches."""
    toks = scan.tokens
    n = len(toks)

    if is_query(scan):
        commodity = toks[scan.commodity1_pos] if scan.commodity1_pos is not None else None
        return Query(note, toks, commodity, scan.cluster_tokens(scan.cluster1))

    if is_base_numeral_declaration(scan):
        return BaseNumeralDeclaration(note, toks, toks[0], toks[2])

    if is_composite_numeral_declaration(scan):
        return CompositeNumeralDeclaration(note, toks, toks[:n - 2], toks[n - 1])

    if is_commodity_declaration(scan):
        return CommodityDeclaration(note, toks, toks[:n - 4], toks[n - 4], int(toks[n - 2]))

    return UnknownNote(note, toks)


def classify_note(note: str) -> Note:
    return note_from_scan(note, scan_note(note))


def parse_notes(notes: Iterable[str]) -> dict[str, list[Note]]:
    """Classify every note and group them by kind, keeping input order."""
    grouped: dict[str, list[Note]] = {kind: [] for kind in NOTE_KINDS}
    for note in notes:
        parsed = classify_note(note)
        grouped[parsed.kind].append(parsed)
    return grouped
