# src/merchantguide/roman.py
"""
Strict Roman numeral grammar (1..3999), both directions.

Rules enforced by roman_to_arabic():
  1. I, X, C, M repeat at most three times in succession; V, L, D never repeat.
  2. I subtracts from V and X only, X from L and C only, C from D and M only.
     V, L and D are never subtracted.
  3. Only one small-value symbol may be subtracted from a large-value symbol.
  4. A symbol contributes at most one plain addition run per numeral.

Examples:
  "MCMXLIV" -> 1000 + (1000 - 100) + (50 - 10) + (5 - 1) = 1944
  "MMVI"    -> 1000 + 1000 + 5 + 1 = 2006
"""

from __future__ import annotations

from enum import Flag, auto

# --- Static tables ---------------------------------------------------------

SYMBOLS = "IVXLCDM"
RANK: dict[str, int] = {s: i for i, s in enumerate(SYMBOLS)}
VALUES: tuple[int, ...] = (1, 5, 10, 50, 100, 500, 1000)

NON_REPEATABLE = frozenset("VLD")
MAX_RUN = 3

# subtractor -> allowed minuends
MINUENDS: dict[str, frozenset[str]] = {
    "I": frozenset("VX"),
    "X": frozenset("LC"),
    "C": frozenset("DM"),
}

MIN_ARABIC = 1
MAX_ARABIC = 3999

# (low, mid, high) symbols for hundreds, tens, ones
_PLACE_TRIADS: tuple[tuple[int, tuple[str, str, str]], ...] = (
    (100, ("C", "D", "M")),
    (10, ("X", "L", "C")),
    (1, ("I", "V", "X")),
)


# --- Errors ----------------------------------------------------------------

class TranslationError(ValueError):
    """Base class for every numeral translation failure."""

    def __init__(self, message: str, *, token: str | None = None, position: int | None = None):
        super().__init__(message)
        self.token = token
        self.position = position


class EmptyNumeralError(TranslationError):
    pass


class TooManyRepeatsError(TranslationError):
    pass


class IllegalMinuendError(TranslationError):
    pass


class SymbolReusedError(TranslationError):
    pass


class OutOfRangeError(TranslationError):
    pass


class InvalidRomanSymbolError(TranslationError):
    pass


# --- Usage tracking --------------------------------------------------------

class Usage(Flag):
    """Roles a symbol has already played within one numeral."""
    UNUSED = 0
    ADDEND = auto()
    SUBTRACTOR = auto()
    MINUEND = auto()


def is_base_symbol(token: str) -> bool:
    return token in RANK


def _check_symbol(numeral: str, index: int, offset: int) -> str:
    ch = numeral[index]
    if ch not in RANK:
        raise InvalidRomanSymbolError(
            f"'{ch}' is not a base Roman numeral", token=ch, position=offset + index
        )
    return ch


def _run_length(numeral: str) -> int:
    n = 1
    while n < len(numeral) and numeral[n] == numeral[0]:
        n += 1
    return n


def _check_repeats(symbol: str, run: int, position: int) -> None:
    if symbol in NON_REPEATABLE and run > 1:
        raise TooManyRepeatsError(
            f"'{symbol}' can never be repeated", token=symbol, position=position
        )
    if run > MAX_RUN:
        raise TooManyRepeatsError(
            f"'{symbol}' appears more than {MAX_RUN} times in succession",
            token=symbol,
            position=position,
        )


def _minuend(numeral: str, run: int, offset: int) -> str | None:
    """Return the minuend if the numeral starts with a subtraction pair, else None."""
    subtractor = numeral[0]
    if subtractor not in MINUENDS or run != 1 or len(numeral) < 2:
        return None
    nxt = _check_symbol(numeral, 1, offset)
    if RANK[nxt] <= RANK[subtractor]:
        return None
    return nxt


def _consume(numeral: str, offset: int, usage: list[Usage]) -> int:
    if not numeral:
        return 0

    lead = _check_symbol(numeral, 0, offset)
    run = _run_length(numeral)
    _check_repeats(lead, run, offset)

    minuend = _minuend(numeral, run, offset)
    lead_rank = RANK[lead]

    if minuend is not None:
        min_rank = RANK[minuend]
        if minuend not in MINUENDS[lead]:
            allowed = ", ".join(sorted(MINUENDS[lead], key=RANK.get))
            raise IllegalMinuendError(
                f"'{lead}' can only be subtracted from {allowed}, not '{minuend}'",
                token=lead + minuend,
                position=offset,
            )
        if usage[lead_rank] & (Usage.SUBTRACTOR | Usage.MINUEND):
            raise SymbolReusedError(
                f"'{lead}' was already used in a subtraction", token=lead, position=offset
            )
        if usage[min_rank] & Usage.MINUEND:
            raise SymbolReusedError(
                f"'{minuend}' was already used as a minuend", token=minuend, position=offset + 1
            )
        usage[lead_rank] |= Usage.SUBTRACTOR
        # a minuend is also an addend: IXX and CMM fail on the plain addition
        usage[min_rank] |= Usage.MINUEND | Usage.ADDEND
        value = VALUES[min_rank] - VALUES[lead_rank]
        return value + _consume(numeral[2:], offset + 2, usage)

    if usage[lead_rank] & Usage.ADDEND:
        raise SymbolReusedError(
            f"'{lead}' appears in more than one place", token=lead, position=offset
        )
    usage[lead_rank] |= Usage.ADDEND
    return run * VALUES[lead_rank] + _consume(numeral[run:], offset + run, usage)


def roman_to_arabic(numeral: str) -> int:
    """
    Convert a strict Roman numeral to an int.

    Raises a TranslationError subclass describing the first rule violated.
    """
    if not numeral:
        raise EmptyNumeralError("Roman numeral can't be empty", token=numeral, position=0)
    return _consume(numeral, 0, [Usage.UNUSED] * len(SYMBOLS))


def _digit_to_roman(digit: int, low: str, mid: str, high: str) -> str:
    if digit < 4:
        return low * digit
    if digit == 4:
        return low + mid
    if digit < 9:
        return mid + low * (digit - 5)
    return low + high


def arabic_to_roman(number: int) -> str:
    """Convert 1..3999 to its unique strict Roman numeral."""
    if not MIN_ARABIC <= number <= MAX_ARABIC:
        raise OutOfRangeError(
            f"{number} is outside {MIN_ARABIC}..{MAX_ARABIC}; strict Roman numerals "
            f"cannot represent it",
            token=str(number),
        )
    parts = ["M" * (number // 1000)]
    for place, (low, mid, high) in _PLACE_TRIADS:
        parts.append(_digit_to_roman((number // place) % 10, low, mid, high))
    return "".join(parts)
