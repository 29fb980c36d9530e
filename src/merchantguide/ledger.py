# src/merchantguide/ledger.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from merchantguide.notes import CommodityDeclaration
from merchantguide.roman import TranslationError
from merchantguide.translator import Translator


@dataclass
class PricePair:
    """Unit price of a commodity in Credits and in intergalactic numerals."""
    credits: Decimal | None = None
    intergal: str | None = None


class Ledger:
    """
    Price book: commodity name -> PricePair of unit prices.

    Declarations like 'glob glob Silver is 34 Credits' are turned into unit
    prices with the help of a Translator.
    """

    def __init__(self) -> None:
        self._book: dict[str, PricePair] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._book

    def __len__(self) -> int:
        return len(self._book)

    def items(self) -> list[tuple[str, PricePair]]:
        return sorted(self._book.items())

    def price_of(self, name: str) -> PricePair | None:
        return self._book.get(name)

    def record_commodity_price(
        self,
        name: str,
        credits: Decimal | None,
        intergal: str | None = None,
        *,
        overwrite: bool = True,
    ) -> PricePair:
        """Store unit prices; with overwrite=False only missing halves are filled."""
        pair = self._book.get(name)
        if pair is None or overwrite:
            pair = PricePair(credits, intergal)
            self._book[name] = pair
            return pair
        if pair.credits is None:
            pair.credits = credits
        if pair.intergal is None:
            pair.intergal = intergal
        return pair

    def record_declaration(
        self,
        decl: CommodityDeclaration,
        translator: Translator,
        *,
        overwrite: bool = True,
    ) -> PricePair:
        """
        Record the unit price declared by a commodity declaration.

        Raises TranslationError if the declared amount cannot be translated.
        """
        credits, intergal = unit_prices(decl, translator)
        return self.record_commodity_price(decl.commodity, credits, intergal, overwrite=overwrite)

    def clear(self) -> None:
        self._book.clear()


def unit_prices(decl: CommodityDeclaration, translator: Translator) -> tuple[Decimal, str | None]:
    amount = translator.intergal_to_arabic(decl.intergal_tokens)
    credits = Decimal(decl.amount) / Decimal(amount)
    try:
        intergal = translator.arabic_to_intergal(int(credits))
    except TranslationError:
        # unit price outside 1..3999 or not expressible with the known words
        intergal = None
    return credits, intergal
