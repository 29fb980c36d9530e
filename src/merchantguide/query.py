# src/merchantguide/query.py
"""
Answer queries about intergalactic numerals and commodity prices.

Two query shapes are understood:
  how much is <intergalactic numeral> ?
  how many Credits is <intergalactic numeral> <Commodity> ?
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from merchantguide.fmt import format_credits
from merchantguide.ledger import Ledger
from merchantguide.notes import Query
from merchantguide.parser import is_commodity
from merchantguide.roman import TranslationError
from merchantguide.runtime import CFG
from merchantguide.translator import Translator

DEFAULT_UNKNOWN_QUERY = "I have no idea what you are talking about"

_MUCH_PREFIX = ("how", "much", "is")
_MANY_PREFIX = ("how", "many", "Credits", "is")


@dataclass(frozen=True)
class Answer:
    note: str
    text: str
    ok: bool


def cannot_answer(note: str) -> str:
    return f"I don't know how to answer '{note}'"


class QueryHandler:
    """Resolve Query notes against a Translator and a Ledger. Never prints."""

    def __init__(self, translator: Translator, ledger: Ledger) -> None:
        self.translator = translator
        self.ledger = ledger

    def _known(self, words: tuple[str, ...]) -> bool:
        return bool(words) and all(self.translator.is_known(w) for w in words)

    def is_well_formed(self, query: Query) -> bool:
        toks = query.tokens
        if not toks or toks[-1] != "?":
            return False
        words = query.intergal_tokens

        if toks[:len(_MUCH_PREFIX)] == _MUCH_PREFIX:
            return toks[len(_MUCH_PREFIX):-1] == words and self._known(words)

        if toks[:len(_MANY_PREFIX)] == _MANY_PREFIX and len(toks) > len(_MANY_PREFIX) + 2:
            commodity = toks[-2]
            return (
                toks[len(_MANY_PREFIX):-2] == words
                and self._known(words)
                and is_commodity(commodity)
                and commodity == query.commodity
                and commodity in self.ledger
            )
        return False

    def answer(self, query: Query) -> Answer:
        if not self.is_well_formed(query):
            return Answer(query.raw, CFG("MESSAGES.UNKNOWN_QUERY", DEFAULT_UNKNOWN_QUERY), False)
        if query.tokens[1] == "much":
            return self._handle_much(query)
        return self._handle_many(query)

    def _handle_much(self, query: Query) -> Answer:
        try:
            amount = self.translator.intergal_to_arabic(query.intergal_tokens)
        except TranslationError:
            return Answer(query.raw, cannot_answer(query.raw), False)
        return Answer(query.raw, f"{query.intergal_numeral} is {amount}", True)

    def _handle_many(self, query: Query) -> Answer:
        pair = self.ledger.price_of(query.commodity)
        if pair is None or pair.credits is None:
            return Answer(query.raw, cannot_answer(query.raw), False)
        try:
            amount = self.translator.intergal_to_arabic(query.intergal_tokens)
        except TranslationError:
            return Answer(query.raw, cannot_answer(query.raw), False)

        decimals = int(CFG("OUTPUT.PRICE_DECIMALS", 2))
        price = format_credits(pair.credits * Decimal(amount), decimals)
        return Answer(
            query.raw,
            f"{query.intergal_numeral} {query.commodity} is {price} Credits",
            True,
        )
