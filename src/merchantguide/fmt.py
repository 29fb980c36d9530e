# src/merchantguide/fmt.py
from __future__ import annotations

import re
from decimal import ROUND_HALF_EVEN, Decimal

from colorama import Fore, Style

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str | None) -> str:
    """Return s with ANSI escape sequences removed."""
    return "" if s is None else ANSI_RE.sub("", s)


def visible_len(s: str | None) -> int:
    """Printable length (without ANSI)."""
    return len(strip_ansi(s))


def format_credits(value: Decimal, decimals: int = 2) -> str:
    """
    Round half-even to `decimals` places and drop trailing zeros:
        Decimal("68.000") -> "68"
        Decimal("195.50") -> "195.5"
        Decimal("0.125")  -> "0.12"
    """
    exp = Decimal(1).scaleb(-decimals)
    s = format(value.quantize(exp, rounding=ROUND_HALF_EVEN), "f")
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s == "-0":
        s = "0"
    return s


def format_unit_price(credits: Decimal | None, intergal: str | None, decimals: int = 2) -> str:
    """'17 Credits  pish prok glob glob' style line for the price book."""
    left = f"{format_credits(credits, decimals)} Credits" if credits is not None else "?"
    if intergal is None:
        return f"{left}  {Style.DIM}(no intergalactic price){Style.RESET_ALL}"
    return f"{left}  {Fore.CYAN}{intergal}{Style.RESET_ALL}"


def label_dots(label: str, width: int = 12) -> str:
    return f"{label:.<{width}} "
