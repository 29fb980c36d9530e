# src/merchantguide/notes.py
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

Span = tuple[int, int]  # inclusive token-index range


@dataclass(frozen=True)
class NoteScan:
    """
    Token-level metadata gathered in one pass over a note.

    Counts say how often each lexical category occurred; positions hold the
    index of the last occurrence (None when absent). Commodities keep the
    first and second occurrence, intergalactic clusters the first two
    (start, end) ranges.
    """
    # --- tokens ---
    tokens: tuple[str, ...]

    # --- counts ---
    count_is: int = 0
    count_credits: int = 0
    count_how: int = 0
    count_much: int = 0
    count_many: int = 0
    count_question: int = 0
    count_arabic: int = 0
    count_commodity: int = 0
    count_roman_base: int = 0
    count_roman_composite: int = 0
    count_cluster: int = 0

    # --- positions ---
    is_pos: int | None = None
    credits_pos: int | None = None
    how_pos: int | None = None
    much_pos: int | None = None
    many_pos: int | None = None
    question_pos: int | None = None
    arabic_pos: int | None = None
    commodity1_pos: int | None = None
    commodity2_pos: int | None = None
    roman_pos: int | None = None
    cluster1: Span | None = None
    cluster2: Span | None = None

    def __len__(self) -> int:
        return len(self.tokens)

    def cluster_tokens(self, span: Span | None) -> tuple[str, ...]:
        if span is None:
            return ()
        start, end = span
        return self.tokens[start:end + 1]

    @property
    def is_illegal(self) -> bool:
        """True when the raw counts cannot belong to any known note shape."""
        singles = (
            self.count_is, self.count_question, self.count_how, self.count_much,
            self.count_many, self.count_arabic, self.count_credits,
            self.count_roman_base, self.count_roman_composite,
        )
        if any(c > 1 for c in singles):
            return True
        if self.count_cluster > 2 or self.count_commodity > 2:
            return True
        if self.count_much + self.count_many > 1:
            return True
        return self.count_roman_base + self.count_roman_composite > 1


# --- Note variants ---------------------------------------------------------
# Every variant keeps the raw note and its tokens for diagnostics.

@dataclass(frozen=True)
class BaseNumeralDeclaration:
    kind: ClassVar[str] = "base_numeral"
    raw: str
    tokens: tuple[str, ...]
    intergal_token: str
    roman_symbol: str


@dataclass(frozen=True)
class CompositeNumeralDeclaration:
    kind: ClassVar[str] = "composite_numeral"
    raw: str
    tokens: tuple[str, ...]
    intergal_tokens: tuple[str, ...]
    roman_numeral: str


@dataclass(frozen=True)
class CommodityDeclaration:
    kind: ClassVar[str] = "commodity"
    raw: str
    tokens: tuple[str, ...]
    intergal_tokens: tuple[str, ...]
    commodity: str
    amount: int


@dataclass(frozen=True)
class Query:
    kind: ClassVar[str] = "query"
    raw: str
    tokens: tuple[str, ...]
    commodity: str | None
    intergal_tokens: tuple[str, ...]

    @property
    def intergal_numeral(self) -> str:
        return " ".join(self.intergal_tokens)


@dataclass(frozen=True)
class UnknownNote:
    kind: ClassVar[str] = "unknown"
    raw: str
    tokens: tuple[str, ...]


Note = Union[
    BaseNumeralDeclaration,
    CompositeNumeralDeclaration,
    CommodityDeclaration,
    Query,
    UnknownNote,
]

NOTE_KINDS: tuple[str, ...] = (
    UnknownNote.kind,
    BaseNumeralDeclaration.kind,
    CompositeNumeralDeclaration.kind,
    CommodityDeclaration.kind,
    Query.kind,
)
