# src/merchantguide/translator.py
"""
Translate numbers between intergalactic numerals, Roman numerals and ints.

Roman <-> int is static (merchantguide.roman). Intergalactic <-> Roman is
learned from declarations: each intergalactic word is bound to at most one
base Roman symbol and each symbol to at most one word.
"""

from __future__ import annotations

from collections.abc import Iterable

from merchantguide.roman import (
    RANK,
    SYMBOLS,
    InvalidRomanSymbolError,
    TranslationError,
    arabic_to_roman,
    roman_to_arabic,
)


class UnboundIntergalTokenError(TranslationError):
    pass


class UnboundRomanSymbolError(TranslationError):
    pass


class ConflictingDeclarationError(TranslationError):
    pass


def _split(intergal: str | Iterable[str]) -> list[str]:
    if isinstance(intergal, str):
        return intergal.split()
    return list(intergal)


class Translator:
    """
    Bidirectional intergalactic <-> Roman table plus composed conversions.

    Usage:
        tr = Translator()
        tr.record_base_mapping("glob", "I")
        tr.record_base_mapping("prok", "V")
        tr.intergal_to_arabic("glob prok")   # 4
        tr.arabic_to_intergal(6)             # "prok glob"
    """

    def __init__(self) -> None:
        self._rank_to_token: list[str | None] = [None] * len(SYMBOLS)
        # known words; None = known but not bound to a symbol
        self._token_rank: dict[str, int | None] = {}
        self._pairs = 0

    # --- learned table ---------------------------------------------------

    def record_base_mapping(self, token: str, symbol: str) -> None:
        """
        Bind an intergalactic word to a base Roman symbol.

        A word previously bound to the same symbol is unbound but stays known.
        """
        if not token:
            raise ValueError("Intergalactic numeral can't be empty")
        rank = RANK.get(symbol)
        if rank is None:
            raise InvalidRomanSymbolError(
                f"'{symbol}' is not a base Roman numeral", token=symbol
            )

        previous = self._rank_to_token[rank]
        if previous is not None:
            self.unbind(previous)
        old_rank = self._token_rank.get(token)
        if old_rank is not None:
            self.unbind(token)

        self._rank_to_token[rank] = token
        self._token_rank[token] = rank
        self._pairs += 1

    def unbind(self, token: str) -> None:
        rank = self._token_rank.get(token)
        if rank is None:
            return
        self._rank_to_token[rank] = None
        self._token_rank[token] = None
        self._pairs -= 1

    def add_unknown_token(self, token: str) -> bool:
        """Remember a word without a value. Returns False if it was already known."""
        if not token:
            raise ValueError("Intergalactic numeral can't be empty")
        if token in self._token_rank:
            return False
        self._token_rank[token] = None
        return True

    def is_known(self, token: str) -> bool:
        return token in self._token_rank

    def symbol_for(self, token: str) -> str | None:
        rank = self._token_rank.get(token)
        return SYMBOLS[rank] if rank is not None else None

    def bindings(self) -> dict[str, str | None]:
        """Base symbol -> bound word (None where unbound), in rank order."""
        return {sym: self._rank_to_token[rank] for rank, sym in enumerate(SYMBOLS)}

    def unbound_tokens(self) -> list[str]:
        return sorted(t for t, r in self._token_rank.items() if r is None)

    @property
    def pair_count(self) -> int:
        return self._pairs

    @property
    def is_complete(self) -> bool:
        return self._pairs == len(SYMBOLS)

    def learn_from_composite(self, tokens: Iterable[str], roman: str) -> list[tuple[str, str]]:
        """
        Infer base bindings from a declaration such as 'prok glob is IV'.

        Each word pairs with the symbol at the same position. Pairs that are
        already known must agree; otherwise nothing is learned.
        Returns the newly learned (word, symbol) pairs.
        """
        words = _split(tokens)
        roman_to_arabic(roman)
        if len(words) != len(roman):
            raise ConflictingDeclarationError(
                f"{len(words)} intergalactic numeral(s) cannot spell '{roman}'", token=roman
            )

        pending: dict[str, str] = {}
        for pos, (word, sym) in enumerate(zip(words, roman)):
            bound_sym = self.symbol_for(word)
            bound_word = self._rank_to_token[RANK[sym]]
            claimed = pending.get(word)
            if bound_sym is not None and bound_sym != sym:
                raise ConflictingDeclarationError(
                    f"'{word}' is already {bound_sym}, not {sym}", token=word, position=pos
                )
            if bound_word is not None and bound_word != word:
                raise ConflictingDeclarationError(
                    f"{sym} is already '{bound_word}', not '{word}'", token=word, position=pos
                )
            if claimed is not None and claimed != sym:
                raise ConflictingDeclarationError(
                    f"'{word}' cannot be both {claimed} and {sym}", token=word, position=pos
                )
            if sym in pending.values() and claimed is None:
                raise ConflictingDeclarationError(
                    f"{sym} cannot be spelled by two different words", token=word, position=pos
                )
            if bound_sym is None:
                pending[word] = sym

        for word, sym in pending.items():
            self.record_base_mapping(word, sym)
        return list(pending.items())

    # --- conversions -----------------------------------------------------

    def intergal_to_roman(self, intergal: str | Iterable[str]) -> str:
        out = []
        for pos, word in enumerate(_split(intergal)):
            rank = self._token_rank.get(word)
            if rank is None:
                raise UnboundIntergalTokenError(
                    f"the Roman numeral for '{word}' is not recorded", token=word, position=pos
                )
            out.append(SYMBOLS[rank])
        return "".join(out)

    def roman_to_intergal(self, roman: str) -> str:
        out = []
        for pos, sym in enumerate(roman):
            rank = RANK.get(sym)
            if rank is None:
                raise InvalidRomanSymbolError(
                    f"'{sym}' is not a base Roman numeral", token=sym, position=pos
                )
            word = self._rank_to_token[rank]
            if word is None:
                raise UnboundRomanSymbolError(
                    f"no intergalactic numeral is recorded for '{sym}'", token=sym, position=pos
                )
            out.append(word)
        return " ".join(out)

    def intergal_to_arabic(self, intergal: str | Iterable[str]) -> int:
        return roman_to_arabic(self.intergal_to_roman(intergal))

    def arabic_to_intergal(self, number: int) -> str:
        return self.roman_to_intergal(arabic_to_roman(number))
