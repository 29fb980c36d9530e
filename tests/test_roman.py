# tests/test_roman.py
"""
Tests for the strict Roman numeral grammar.

Run: pytest -v
"""

from __future__ import annotations

import pytest

from merchantguide.roman import (
    EmptyNumeralError,
    IllegalMinuendError,
    InvalidRomanSymbolError,
    OutOfRangeError,
    SymbolReusedError,
    TooManyRepeatsError,
    TranslationError,
    arabic_to_roman,
    roman_to_arabic,
)

# ---------- valid numerals -----------------------------------------------------

TEST_CASES = [
    # base symbols
    ("I", 1), ("V", 5), ("X", 10), ("L", 50), ("C", 100), ("D", 500), ("M", 1000),
    # easy addition and subtraction
    ("II", 2), ("IV", 4), ("VI", 6), ("VII", 7), ("IX", 9),
    ("XI", 11), ("XIV", 14), ("XV", 15), ("XIX", 19),
    # more complex
    ("MMVI", 2006), ("MCMXLIV", 1944), ("DLXIX", 569), ("MMMDCVIII", 3608),
    ("MMMCMXXVII", 3927), ("MDCLVI", 1656), ("DCCCLXXXIV", 884),
    ("MMMCLXVI", 3166), ("CXCVIII", 198), ("MDCCXX", 1720),
    ("MMMCCXXXII", 3232), ("MMMCDLXXXVII", 3487),
    # a former subtractor serving as a minuend later on
    ("XLIX", 49), ("XCIX", 99), ("CDXC", 490), ("CMXC", 990), ("CMXCIX", 999),
    ("MMMCMXCIX", 3999),
    # an addition run followed by a subtraction using the same symbol
    ("XXXIX", 39), ("CCCXC", 390),
]
TEST_IDS = [f"{r}_{n}" for r, n in TEST_CASES]


@pytest.mark.parametrize("roman,expected", TEST_CASES, ids=TEST_IDS)
def test_roman_to_arabic(roman, expected):
    assert roman_to_arabic(roman) == expected


# ---------- invalid numerals ---------------------------------------------------

INVALID_CASES = [
    ("", EmptyNumeralError),
    ("MMMM", TooManyRepeatsError),
    ("IIII", TooManyRepeatsError),
    ("XXXX", TooManyRepeatsError),
    ("CCCC", TooManyRepeatsError),
    ("VV", TooManyRepeatsError),
    ("LL", TooManyRepeatsError),
    ("DD", TooManyRepeatsError),
    ("IC", IllegalMinuendError),
    ("IL", IllegalMinuendError),
    ("XD", IllegalMinuendError),
    ("XM", IllegalMinuendError),
    ("IXX", SymbolReusedError),
    ("XIXX", SymbolReusedError),
    ("CMM", SymbolReusedError),
    ("XVX", SymbolReusedError),
    ("IVIX", SymbolReusedError),
    ("CMCM", SymbolReusedError),
    ("IZ", InvalidRomanSymbolError),
    ("iv", InvalidRomanSymbolError),
    ("X1", InvalidRomanSymbolError),
]
INVALID_IDS = [f"{r or 'empty'}_{exc.__name__}" for r, exc in INVALID_CASES]


@pytest.mark.parametrize("roman,exc", INVALID_CASES, ids=INVALID_IDS)
def test_roman_to_arabic_rejects(roman, exc):
    with pytest.raises(exc):
        roman_to_arabic(roman)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        roman_to_arabic("MMMM")
    assert issubclass(SymbolReusedError, TranslationError)


def test_invalid_symbol_carries_position():
    with pytest.raises(InvalidRomanSymbolError) as ei:
        roman_to_arabic("XIZ")
    assert ei.value.token == "Z"
    assert ei.value.position == 2


def test_illegal_minuend_checked_before_reuse():
    # I was already a subtractor, but the illegal pair IC is reported first
    with pytest.raises(IllegalMinuendError):
        roman_to_arabic("IVIC")


# ---------- arabic -> roman ----------------------------------------------------

@pytest.mark.parametrize(
    "n,expected",
    [(1, "I"), (4, "IV"), (9, "IX"), (40, "XL"), (90, "XC"), (400, "CD"), (900, "CM"),
     (1944, "MCMXLIV"), (2006, "MMVI"), (3487, "MMMCDLXXXVII"), (3999, "MMMCMXCIX")],
    ids=lambda v: str(v),
)
def test_arabic_to_roman(n, expected):
    assert arabic_to_roman(n) == expected


@pytest.mark.parametrize("n", [0, -1, 4000, 10_000], ids=lambda v: f"n={v}")
def test_arabic_to_roman_out_of_range(n):
    with pytest.raises(OutOfRangeError):
        arabic_to_roman(n)


def test_round_trip_every_number():
    for n in range(1, 4000):
        r = arabic_to_roman(n)
        assert roman_to_arabic(r) == n, r
        assert arabic_to_roman(roman_to_arabic(r)) == r
